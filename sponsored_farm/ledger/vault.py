# sponsored_farm/ledger/vault.py

from ..chain.interfaces import RewardToken
from ..core.logging import LoggingMixin
from ..database.tables.farm import DBFarm
from ..types.constants import MAX_UINT256
from ..types.model.errors import InvalidArgument, InvalidState
from ..types.model.rewards import RewardDeposited
from ..types.new import EvmAddress
from ..utils.addresses import require_uint256
from .context import OperationContext


class RewardVault(LoggingMixin):
    """Per-farm reward accounting.

    ``total_claimable`` only grows through deposits and ``total_claimed`` only
    grows through payouts, so ``total_claimable - total_claimed`` is what the
    ledger still owes the farm's stakers.
    """

    def deposit(self, ctx: OperationContext, farm: DBFarm, token: RewardToken, amount: int,
                vault_address: EvmAddress) -> None:
        amount = require_uint256(amount, "amount")
        if amount == 0:
            raise InvalidArgument("Amount must be greater than 0")
        if farm.total_claimable + amount > MAX_UINT256:
            raise InvalidArgument("Invalid amount", farm_id=farm.id, amount=amount)

        farm.total_claimable = farm.total_claimable + amount
        token.transfer_from(vault_address, ctx.caller, vault_address, amount)

        ctx.emit(RewardDeposited, farm_id=farm.id, amount=str(amount), depositor=ctx.caller)

        self.log_info("Reward deposited", farm_id=farm.id, amount=amount,
                      caller=ctx.caller, operation=ctx.operation)

    def reserve_payout(self, farm: DBFarm, delta: int) -> None:
        if farm.total_claimed + delta > farm.total_claimable:
            raise InvalidState("Insufficient farm rewards", farm_id=farm.id, amount=delta)
        farm.total_claimed = farm.total_claimed + delta

    def pay(self, token: RewardToken, vault_address: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        if amount == 0:
            return
        token.transfer(vault_address, recipient, amount)

    @staticmethod
    def balance(farm: DBFarm) -> int:
        return farm.total_claimable - farm.total_claimed
