# sponsored_farm/types/model/base.py

from typing import Dict, Any
import hashlib
import msgspec
from msgspec import Struct

from ..new import EventContentId


UINT64_MAX = 2**64 - 1


class LedgerEvent(Struct, kw_only=True):
    """Notification emitted by a committed ledger operation.

    ``operation`` is the ledger-wide operation number and ``log_index`` the
    position of the event inside that operation, so the pair is unique.
    Unsigned 256-bit quantities are carried as decimal strings.
    """
    operation: int
    log_index: int
    block_number: int
    timestamp: int

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    @property
    def content_id(self) -> EventContentId:
        content_bytes = msgspec.msgpack.encode(self._get_identifying_content())
        hash_hex = hashlib.sha256(content_bytes).hexdigest()
        return EventContentId(hash_hex[:12])

    def _get_identifying_content(self) -> Dict[str, Any]:
        content = {"event_type": self.event_type}
        for key, value in msgspec.structs.asdict(self).items():
            # msgpack ints stop at 64 bits
            content[key] = str(value) if isinstance(value, int) and value > UINT64_MAX else value
        return content
