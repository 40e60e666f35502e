# sponsored_farm/database/base_repository.py

from typing import TypeVar, Generic, Type, List, Optional, Any

from sqlalchemy.orm import Session

from ..core.logging import FarmLogger


T = TypeVar('T')

class BaseRepository(Generic[T]):
    def __init__(self, model_class: Type[T]):
        self.model_class = model_class
        self.logger = FarmLogger.get_logger(f'database.repository.{model_class.__name__.lower()}')

    def get(self, session: Session, key: Any) -> Optional[T]:
        return session.get(self.model_class, key)

    def get_all(self, session: Session) -> List[T]:
        primary_key = list(self.model_class.__table__.primary_key.columns)
        return session.query(self.model_class).order_by(*primary_key).all()

    def add(self, session: Session, instance: T) -> T:
        session.add(instance)
        session.flush()
        self.logger.debug(f"Added {instance!r}")
        return instance

    def delete(self, session: Session, instance: T) -> None:
        session.delete(instance)
        session.flush()
        self.logger.debug(f"Deleted {instance!r}")
