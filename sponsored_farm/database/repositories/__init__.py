# sponsored_farm/database/repositories/__init__.py

from .state_repository import LedgerStateRepository
from .farm_repository import FarmRepository
from .position_repository import PositionRepository
from .claim_repository import ClaimRepository
from .event_repository import EventRepository

__all__ = [
    'LedgerStateRepository',
    'FarmRepository',
    'PositionRepository',
    'ClaimRepository',
    'EventRepository',
]
