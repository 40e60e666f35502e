# sponsored_farm/database/tables/farm.py

from sqlalchemy import Column, Integer, Boolean

from ..base import DBBaseModel
from ..types import EvmAddressType, Uint256Type


class DBFarm(DBBaseModel):
    __tablename__ = 'farms'

    id = Column(Integer, primary_key=True, autoincrement=False)
    reward_token = Column(EvmAddressType(), nullable=False, index=True)
    signer = Column(EvmAddressType(), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    total_claimable = Column(Uint256Type(), nullable=False, default=0)
    total_claimed = Column(Uint256Type(), nullable=False, default=0)
    pool = Column(EvmAddressType(), nullable=False, index=True)
    reward_per_block = Column(Uint256Type(), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Farm(id={self.id}, reward_token={self.reward_token}, active={self.active})>"
