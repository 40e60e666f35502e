# sponsored_farm/ledger/context.py

from typing import Any, Callable, List, Optional, Tuple, Type

from sqlalchemy.orm import Session

from ..database.tables.state import DBLedgerState
from ..types.model.base import LedgerEvent
from ..types.new import EvmAddress


class OperationContext:
    """Everything one serialized ledger operation reads and writes.

    Block number and timestamp are read once, so every event emitted by the
    operation carries the same values. Payouts queued with ``defer_payout``
    run after the operation's records and events are flushed.
    """

    def __init__(self, session: Session, state: Optional[DBLedgerState], caller: EvmAddress,
                 block_number: int, timestamp: int, operation: int):
        self.session = session
        self.state = state
        self.caller = caller
        self.block_number = block_number
        self.timestamp = timestamp
        self.operation = operation
        self.events: List[LedgerEvent] = []
        self.payouts: List[Tuple[Callable[..., None], Tuple[Any, ...]]] = []

    def emit(self, event_cls: Type[LedgerEvent], **fields) -> LedgerEvent:
        event = event_cls(
            operation=self.operation,
            log_index=len(self.events),
            block_number=self.block_number,
            timestamp=self.timestamp,
            **fields,
        )
        self.events.append(event)
        return event

    def defer_payout(self, transfer: Callable[..., None], *args) -> None:
        self.payouts.append((transfer, args))

    def settle(self) -> None:
        for transfer, args in self.payouts:
            transfer(*args)
