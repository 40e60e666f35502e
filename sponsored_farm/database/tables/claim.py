# sponsored_farm/database/tables/claim.py

from sqlalchemy import Column, Integer

from ..base import DBBaseModel
from ..types import Uint256Type


class DBPositionClaim(DBBaseModel):
    __tablename__ = 'position_claims'

    token_id = Column(Uint256Type(), primary_key=True)
    farm_id = Column(Integer, primary_key=True)
    total_claimed = Column(Uint256Type(), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PositionClaim(token_id={self.token_id}, farm_id={self.farm_id}, total_claimed={self.total_claimed})>"
