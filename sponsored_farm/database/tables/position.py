# sponsored_farm/database/tables/position.py

from sqlalchemy import Column, Integer

from ..base import DBBaseModel
from ..types import EvmAddressType, Uint256Type


class DBPosition(DBBaseModel):
    """Custody record; a missing row means the position is not staked."""
    __tablename__ = 'positions'

    token_id = Column(Uint256Type(), primary_key=True)
    owner = Column(EvmAddressType(), nullable=False, index=True)
    staked_block = Column(Integer, nullable=False)
    staked_at = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Position(token_id={self.token_id}, owner={self.owner})>"
