# sponsored_farm/types/__init__.py

from .constants import (
    ZERO_ADDRESS,
    MAX_UINT256,
    DEFAULT_DOMAIN_NAME,
    DEFAULT_DOMAIN_VERSION,
    INITIALIZED_VERSION,
)

from .new import (
    EvmAddress,
    HexStr,
    EventContentId,
)

# Configuration Types
from .config import (
    DatabaseConfig,
    ChainConfig,
    LedgerConfig,
    LoggingConfig,
    FarmConfig,
)

# Model Types: Base
from .model.base import LedgerEvent

# Model Types: Errors
from .model.errors import (
    FarmLedgerError,
    Unauthorized,
    NotFound,
    InvalidArgument,
    InvalidState,
    AlreadyStaked,
    InvalidSignature,
    StorageLayoutError,
    ConfigError,
)

# Model Types: Admin
from .model.admin import (
    Initialized,
    OwnershipTransferred,
)

# Model Types: Farm
from .model.farm import (
    Farm,
    FarmAdded,
    FarmActivated,
    FarmDeactivated,
    SignerUpdated,
    RewardPerBlockUpdated,
)

# Model Types: Rewards
from .model.rewards import (
    HarvestParams,
    RewardDeposited,
    RewardHarvested,
)

# Model Types: Staking
from .model.staking import (
    Position,
    PositionStaked,
    PositionUnstaked,
)

from .events import LedgerEventUnion, EVENT_TYPES
