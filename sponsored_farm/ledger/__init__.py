# sponsored_farm/ledger/__init__.py

from .farm import SponsoredFarm, EventListener
from .context import OperationContext
from .access import AccessControl
from .registry import FarmRegistry
from .custody import PositionCustody
from .vault import RewardVault
from .claims import ClaimEngine

__all__ = [
    'SponsoredFarm',
    'EventListener',
    'OperationContext',
    'AccessControl',
    'FarmRegistry',
    'PositionCustody',
    'RewardVault',
    'ClaimEngine',
]
