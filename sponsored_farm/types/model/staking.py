# sponsored_farm/types/model/staking.py

from msgspec import Struct

from ..new import EvmAddress
from .base import LedgerEvent


class Position(Struct):
    token_id: int
    owner: EvmAddress
    staked_block: int
    staked_at: int

    @classmethod
    def from_db(cls, db_position) -> 'Position':
        return cls(
            token_id=db_position.token_id,
            owner=db_position.owner,
            staked_block=db_position.staked_block,
            staked_at=db_position.staked_at,
        )


# Events
class PositionStaked(LedgerEvent, tag=True, kw_only=True):
    owner: EvmAddress
    token_id: int

class PositionUnstaked(LedgerEvent, tag=True, kw_only=True):
    owner: EvmAddress
    token_id: int
