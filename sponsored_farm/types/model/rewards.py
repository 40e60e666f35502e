# sponsored_farm/types/model/rewards.py

from msgspec import Struct

from ..new import EvmAddress, HexStr
from .base import LedgerEvent


class HarvestParams(Struct, kw_only=True):
    """Signed voucher: as of ``block_number`` the position has earned
    ``total_claimable`` cumulative units from the farm."""
    token_id: int
    farm_id: int
    total_claimable: int
    block_number: int
    signature: HexStr


# Events
class RewardDeposited(LedgerEvent, tag=True, kw_only=True):
    farm_id: int
    amount: str
    depositor: EvmAddress

class RewardHarvested(LedgerEvent, tag=True, kw_only=True):
    owner: EvmAddress
    token_id: int
    farm_id: int
    amount: str
