# sponsored_farm/database/repositories/farm_repository.py

from typing import Optional

from sqlalchemy.orm import Session

from ..base_repository import BaseRepository
from ..tables.farm import DBFarm


class FarmRepository(BaseRepository[DBFarm]):
    def __init__(self):
        super().__init__(DBFarm)

    def get_farm(self, session: Session, farm_id: int) -> Optional[DBFarm]:
        if farm_id < 0:
            return None
        return self.get(session, farm_id)
