# sponsored_farm/database/repositories/event_repository.py

from typing import List, Optional

import msgspec
from sqlalchemy.orm import Session

from ..base_repository import BaseRepository
from ..tables.event import DBLedgerEvent
from ...types.events import LedgerEventUnion
from ...types.model.base import LedgerEvent


class EventRepository(BaseRepository[DBLedgerEvent]):
    def __init__(self):
        super().__init__(DBLedgerEvent)
        self._decoder = msgspec.json.Decoder(LedgerEventUnion)

    def record(self, session: Session, event: LedgerEvent) -> DBLedgerEvent:
        return self.add(session, DBLedgerEvent(
            content_id=event.content_id,
            operation=event.operation,
            log_index=event.log_index,
            event_type=event.event_type,
            block_number=event.block_number,
            timestamp=event.timestamp,
            payload=msgspec.json.encode(event).decode('utf-8'),
        ))

    def get_events(self, session: Session, event_type: Optional[str] = None,
                   from_block: Optional[int] = None, to_block: Optional[int] = None) -> List[LedgerEvent]:
        query = session.query(DBLedgerEvent)
        if event_type:
            query = query.filter(DBLedgerEvent.event_type == event_type)
        if from_block is not None:
            query = query.filter(DBLedgerEvent.block_number >= from_block)
        if to_block is not None:
            query = query.filter(DBLedgerEvent.block_number <= to_block)

        rows = query.order_by(DBLedgerEvent.operation, DBLedgerEvent.log_index).all()
        return [self._decoder.decode(row.payload) for row in rows]
