# sponsored_farm/database/repositories/position_repository.py

from typing import List, Optional

from sqlalchemy.orm import Session

from ..base_repository import BaseRepository
from ..tables.position import DBPosition


class PositionRepository(BaseRepository[DBPosition]):
    def __init__(self):
        super().__init__(DBPosition)

    def get_position(self, session: Session, token_id: int) -> Optional[DBPosition]:
        return self.get(session, token_id)

    def get_by_owner(self, session: Session, owner: str) -> List[DBPosition]:
        positions = session.query(DBPosition).filter(DBPosition.owner == owner.lower()).all()
        return sorted(positions, key=lambda p: p.token_id)
