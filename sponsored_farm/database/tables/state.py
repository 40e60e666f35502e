# sponsored_farm/database/tables/state.py

from sqlalchemy import Column, Integer

from ..base import DBBaseModel
from ..types import EvmAddressType


class DBLedgerState(DBBaseModel):
    """Single-row record of ledger-wide storage. Columns are append-only."""
    __tablename__ = 'ledger_state'

    id = Column(Integer, primary_key=True, autoincrement=False)
    initialized_version = Column(Integer, nullable=False)
    owner = Column(EvmAddressType(), nullable=False)
    position_manager = Column(EvmAddressType(), nullable=False)
    total_staked = Column(Integer, nullable=False, default=0)
    farm_count = Column(Integer, nullable=False, default=0)
    operation_count = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<LedgerState(owner={self.owner}, farms={self.farm_count}, staked={self.total_staked})>"
