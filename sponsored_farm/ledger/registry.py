# sponsored_farm/ledger/registry.py

from typing import List

from sqlalchemy.orm import Session

from ..core.logging import LoggingMixin
from ..database.repositories.farm_repository import FarmRepository
from ..database.tables.farm import DBFarm
from ..types.model.errors import InvalidArgument, InvalidState, NotFound
from ..types.model.farm import (
    Farm,
    FarmAdded,
    FarmActivated,
    FarmDeactivated,
    SignerUpdated,
    RewardPerBlockUpdated,
)
from ..utils.addresses import is_null_address, normalize_address, require_uint256
from .context import OperationContext


class FarmRegistry(LoggingMixin):
    """Append-only table of farms; ids are allocated from the state row's
    ``farm_count`` and never reused."""

    def __init__(self, farm_repository: FarmRepository):
        self.farms = farm_repository

    def require_farm(self, session: Session, farm_id: int) -> DBFarm:
        farm = None
        if isinstance(farm_id, int) and not isinstance(farm_id, bool):
            farm = self.farms.get_farm(session, farm_id)
        if farm is None:
            raise NotFound("Farm does not exist", farm_id=farm_id)
        return farm

    def list_farms(self, session: Session) -> List[Farm]:
        return [Farm.from_db(farm) for farm in self.farms.get_all(session)]

    def register(self, ctx: OperationContext, reward_token: str, signer: str, pool: str,
                 reward_per_block: int) -> int:
        if is_null_address(reward_token):
            raise InvalidArgument("Invalid reward token")
        if is_null_address(signer):
            raise InvalidArgument("Invalid signer")
        if is_null_address(pool):
            raise InvalidArgument("Invalid pool")

        reward_token = normalize_address(reward_token, "reward token")
        signer = normalize_address(signer, "signer")
        pool = normalize_address(pool, "pool")
        reward_per_block = require_uint256(reward_per_block, "reward per block")

        farm_id = ctx.state.farm_count
        self.farms.add(ctx.session, DBFarm(
            id=farm_id,
            reward_token=reward_token,
            signer=signer,
            active=True,
            total_claimable=0,
            total_claimed=0,
            pool=pool,
            reward_per_block=reward_per_block,
        ))
        ctx.state.farm_count = farm_id + 1

        ctx.emit(FarmAdded,
                 farm_id=farm_id,
                 reward_token=reward_token,
                 signer=signer,
                 pool=pool,
                 reward_per_block=str(reward_per_block))

        self.log_info("Farm registered", farm_id=farm_id, signer=signer, operation=ctx.operation)
        return farm_id

    def set_active(self, ctx: OperationContext, farm_id: int, active: bool) -> None:
        farm = self.require_farm(ctx.session, farm_id)
        if farm.active == active:
            raise InvalidState("Farm already active" if active else "Farm already inactive", farm_id=farm_id)

        farm.active = active
        ctx.emit(FarmActivated if active else FarmDeactivated, farm_id=farm_id)

        self.log_info("Farm activated" if active else "Farm deactivated",
                      farm_id=farm_id, operation=ctx.operation)

    def set_signer(self, ctx: OperationContext, farm_id: int, new_signer: str) -> None:
        farm = self.require_farm(ctx.session, farm_id)
        if is_null_address(new_signer):
            raise InvalidArgument("Invalid signer")
        new_signer = normalize_address(new_signer, "signer")

        old_signer = farm.signer
        farm.signer = new_signer
        ctx.emit(SignerUpdated, farm_id=farm_id, old_signer=old_signer, new_signer=new_signer)

        self.log_info("Farm signer updated", farm_id=farm_id, signer=new_signer, operation=ctx.operation)

    def set_reward_per_block(self, ctx: OperationContext, farm_id: int, new_rate: int) -> None:
        farm = self.require_farm(ctx.session, farm_id)
        new_rate = require_uint256(new_rate, "reward per block")

        old_rate = farm.reward_per_block
        farm.reward_per_block = new_rate
        ctx.emit(RewardPerBlockUpdated,
                 farm_id=farm_id,
                 old_reward_per_block=str(old_rate),
                 new_reward_per_block=str(new_rate))

        self.log_debug("Farm reward rate updated", farm_id=farm_id, amount=new_rate, operation=ctx.operation)
