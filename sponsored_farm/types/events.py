# sponsored_farm/types/events.py

from typing import Dict, Type, Union

from .model.admin import Initialized, OwnershipTransferred
from .model.base import LedgerEvent
from .model.farm import (
    FarmAdded,
    FarmActivated,
    FarmDeactivated,
    SignerUpdated,
    RewardPerBlockUpdated,
)
from .model.rewards import RewardDeposited, RewardHarvested
from .model.staking import PositionStaked, PositionUnstaked


LedgerEventUnion = Union[
    Initialized,
    OwnershipTransferred,
    FarmAdded,
    FarmActivated,
    FarmDeactivated,
    SignerUpdated,
    RewardPerBlockUpdated,
    RewardDeposited,
    RewardHarvested,
    PositionStaked,
    PositionUnstaked,
]

EVENT_TYPES: Dict[str, Type[LedgerEvent]] = {
    cls.__name__: cls for cls in LedgerEventUnion.__args__
}
