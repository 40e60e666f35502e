# sponsored_farm/chain/__init__.py

from .interfaces import (
    AssetTransferError,
    RewardToken,
    PositionManager,
    ChainClock,
    Chain,
)
from .local import LocalChain, MockERC20, MockPositionManager, random_address
