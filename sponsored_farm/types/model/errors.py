# sponsored_farm/types/model/errors.py

from typing import Any, Dict, Optional


class FarmLedgerError(Exception):
    """Base class for every rejected ledger operation.

    The message is the reason string reported to the caller. Optional
    context is kept for logging and never changes the message.
    """

    def __init__(self, reason: str, **context: Any):
        super().__init__(reason)
        self.reason = reason
        self.context: Dict[str, Any] = context

    @property
    def error_type(self) -> str:
        return self.__class__.__name__


class Unauthorized(FarmLedgerError):
    pass


class NotFound(FarmLedgerError):
    pass


class InvalidArgument(FarmLedgerError):
    pass


class InvalidState(FarmLedgerError):
    pass


class AlreadyStaked(InvalidState):
    pass


class InvalidSignature(FarmLedgerError):
    pass


class StorageLayoutError(Exception):
    def __init__(self, table: str, message: str, expected: Optional[list] = None, found: Optional[list] = None):
        super().__init__(f"{table}: {message}")
        self.table = table
        self.expected = expected or []
        self.found = found or []


class ConfigError(ValueError):
    pass
