# sponsored_farm/ledger/claims.py

"""
Cumulative voucher redemption.

A voucher states the total a position may ever have claimed from a farm as
of some block. Only the difference to what was already paid is transferred,
so submitting the same voucher twice pays nothing the second time, and an
older voucher carrying a smaller total is refused.
"""

from typing import Tuple

from ..chain.interfaces import Chain
from ..core.logging import LoggingMixin
from ..database.repositories.claim_repository import ClaimRepository
from ..database.tables.farm import DBFarm
from ..database.tables.position import DBPosition
from ..signing.voucher import VoucherDomain, verify_voucher
from ..types.model.errors import InvalidArgument, InvalidSignature, InvalidState
from ..types.model.rewards import HarvestParams, RewardHarvested
from ..utils.addresses import require_uint256
from .context import OperationContext
from .custody import PositionCustody
from .registry import FarmRegistry
from .vault import RewardVault


class ClaimEngine(LoggingMixin):
    def __init__(self, claim_repository: ClaimRepository, registry: FarmRegistry,
                 custody: PositionCustody, vault: RewardVault):
        self.claims = claim_repository
        self.registry = registry
        self.custody = custody
        self.vault = vault

    def validate(self, ctx: OperationContext, voucher: HarvestParams,
                 domain: VoucherDomain) -> Tuple[DBPosition, DBFarm, int]:
        """Run every harvest check and return the custody record, farm and delta."""
        position = self.custody.require_custodian(ctx, voucher.token_id)

        farm = self.registry.require_farm(ctx.session, voucher.farm_id)
        if not farm.active:
            raise InvalidState("Farm not active", farm_id=farm.id)

        block_number = require_uint256(voucher.block_number, "block number")
        if block_number > ctx.block_number:
            raise InvalidState("Block not reached", block_number=block_number)

        total_claimable = require_uint256(voucher.total_claimable, "total claimable")
        if not verify_voucher(domain, voucher, farm.signer):
            raise InvalidSignature("Invalid signature", farm_id=farm.id, token_id=voucher.token_id)

        claimed = self.claims.get_claimed(ctx.session, position.token_id, farm.id)
        if total_claimable < claimed:
            raise InvalidArgument("Claimable below claimed",
                                  token_id=position.token_id, farm_id=farm.id)

        return position, farm, total_claimable - claimed

    def harvest(self, ctx: OperationContext, voucher: HarvestParams, domain: VoucherDomain,
                chain: Chain, vault_address: str) -> int:
        position, farm, delta = self.validate(ctx, voucher, domain)

        self.vault.reserve_payout(farm, delta)
        self.claims.set_claimed(ctx.session, position.token_id, farm.id, voucher.total_claimable)

        if delta:
            ctx.defer_payout(self.vault.pay, chain.erc20(farm.reward_token), vault_address,
                             position.owner, delta)

        ctx.emit(RewardHarvested,
                 owner=position.owner,
                 token_id=position.token_id,
                 farm_id=farm.id,
                 amount=str(delta))

        self.log_info("Rewards harvested", token_id=position.token_id, farm_id=farm.id,
                      amount=delta, caller=ctx.caller, operation=ctx.operation)
        return delta
