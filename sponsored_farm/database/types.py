# sponsored_farm/database/types.py

from typing import Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from ..types.new import EvmAddress


class EvmAddressType(TypeDecorator):
    impl = String(42)
    cache_ok = True

    def process_bind_param(self, value: Optional[EvmAddress], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[EvmAddress]:
        return EvmAddress(value) if value else None


class Uint256Type(TypeDecorator):
    """Unsigned 256-bit integer stored as its decimal string.

    Most engines cannot hold 78-digit integers natively, so the value
    round-trips through text and is compared in Python, never in SQL.
    """
    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value: Optional[int], dialect) -> Optional[str]:
        return str(int(value)) if value is not None else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[int]:
        return int(value) if value is not None else None
