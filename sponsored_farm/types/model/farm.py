# sponsored_farm/types/model/farm.py

from msgspec import Struct

from ..new import EvmAddress
from .base import LedgerEvent


class Farm(Struct):
    farm_id: int
    reward_token: EvmAddress
    signer: EvmAddress
    active: bool
    total_claimable: int
    total_claimed: int
    pool: EvmAddress
    reward_per_block: int

    @property
    def balance(self) -> int:
        return self.total_claimable - self.total_claimed

    @classmethod
    def from_db(cls, db_farm) -> 'Farm':
        return cls(
            farm_id=db_farm.id,
            reward_token=db_farm.reward_token,
            signer=db_farm.signer,
            active=db_farm.active,
            total_claimable=db_farm.total_claimable,
            total_claimed=db_farm.total_claimed,
            pool=db_farm.pool,
            reward_per_block=db_farm.reward_per_block,
        )


# Events
class FarmAdded(LedgerEvent, tag=True, kw_only=True):
    farm_id: int
    reward_token: EvmAddress
    signer: EvmAddress
    pool: EvmAddress
    reward_per_block: str

class FarmActivated(LedgerEvent, tag=True, kw_only=True):
    farm_id: int

class FarmDeactivated(LedgerEvent, tag=True, kw_only=True):
    farm_id: int

class SignerUpdated(LedgerEvent, tag=True, kw_only=True):
    farm_id: int
    old_signer: EvmAddress
    new_signer: EvmAddress

class RewardPerBlockUpdated(LedgerEvent, tag=True, kw_only=True):
    farm_id: int
    old_reward_per_block: str
    new_reward_per_block: str
