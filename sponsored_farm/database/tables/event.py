# sponsored_farm/database/tables/event.py

from sqlalchemy import Column, Integer, String, Text, Index

from ..base import DBBaseModel


class DBLedgerEvent(DBBaseModel):
    __tablename__ = 'ledger_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(String(12), nullable=False, unique=True)
    operation = Column(Integer, nullable=False)
    log_index = Column(Integer, nullable=False)
    event_type = Column(String(64), nullable=False, index=True)
    block_number = Column(Integer, nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    payload = Column(Text, nullable=False)

    __table_args__ = (
        Index('idx_ledger_events_operation', 'operation', 'log_index'),
    )

    def __repr__(self) -> str:
        return f"<LedgerEvent(operation={self.operation}, log_index={self.log_index}, type='{self.event_type}')>"
