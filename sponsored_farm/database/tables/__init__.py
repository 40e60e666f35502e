# sponsored_farm/database/tables/__init__.py

from .state import DBLedgerState
from .farm import DBFarm
from .position import DBPosition
from .claim import DBPositionClaim
from .event import DBLedgerEvent

__all__ = [
    'DBLedgerState',
    'DBFarm',
    'DBPosition',
    'DBPositionClaim',
    'DBLedgerEvent',
]
