# sponsored_farm/database/repositories/state_repository.py

from typing import Optional

from sqlalchemy.orm import Session

from ..base_repository import BaseRepository
from ..tables.state import DBLedgerState


STATE_ROW_ID = 1


class LedgerStateRepository(BaseRepository[DBLedgerState]):
    def __init__(self):
        super().__init__(DBLedgerState)

    def load(self, session: Session, for_update: bool = False) -> Optional[DBLedgerState]:
        query = session.query(DBLedgerState).filter(DBLedgerState.id == STATE_ROW_ID)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def create(self, session: Session, owner: str, position_manager: str, version: int) -> DBLedgerState:
        state = DBLedgerState(
            id=STATE_ROW_ID,
            initialized_version=version,
            owner=owner,
            position_manager=position_manager,
            total_staked=0,
            farm_count=0,
            operation_count=0,
        )
        return self.add(session, state)
