# sponsored_farm/database/base.py

from sqlalchemy.orm import declarative_base


LedgerBase = declarative_base()


class DBBaseModel(LedgerBase):
    __abstract__ = True

    def __repr__(self) -> str:
        keys = ", ".join(f"{col.name}={getattr(self, col.name)!r}" for col in self.__table__.primary_key.columns)
        return f"<{self.__class__.__name__}({keys})>"
