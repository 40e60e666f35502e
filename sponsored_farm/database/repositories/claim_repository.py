# sponsored_farm/database/repositories/claim_repository.py

from typing import List

from sqlalchemy.orm import Session

from ..base_repository import BaseRepository
from ..tables.claim import DBPositionClaim


class ClaimRepository(BaseRepository[DBPositionClaim]):
    def __init__(self):
        super().__init__(DBPositionClaim)

    def get_claimed(self, session: Session, token_id: int, farm_id: int) -> int:
        record = self.get(session, (token_id, farm_id))
        return record.total_claimed if record else 0

    def set_claimed(self, session: Session, token_id: int, farm_id: int, total_claimed: int) -> DBPositionClaim:
        record = self.get(session, (token_id, farm_id))
        if record is None:
            return self.add(session, DBPositionClaim(
                token_id=token_id, farm_id=farm_id, total_claimed=total_claimed
            ))
        record.total_claimed = total_claimed
        session.flush()
        return record

    def get_by_position(self, session: Session, token_id: int) -> List[DBPositionClaim]:
        return session.query(DBPositionClaim).filter(
            DBPositionClaim.token_id == token_id
        ).order_by(DBPositionClaim.farm_id).all()
