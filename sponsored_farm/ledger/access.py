# sponsored_farm/ledger/access.py

from ..core.logging import LoggingMixin
from ..types.model.admin import OwnershipTransferred
from ..types.model.errors import InvalidArgument, Unauthorized
from ..utils.addresses import is_null_address, normalize_address, same_address
from .context import OperationContext


class AccessControl(LoggingMixin):
    """Single-administrator guard backed by the ledger state row."""

    def require_owner(self, ctx: OperationContext) -> None:
        if not same_address(ctx.caller, ctx.state.owner):
            raise Unauthorized("Ownable: caller is not the owner", caller=ctx.caller)

    def transfer_ownership(self, ctx: OperationContext, new_owner: str) -> None:
        self.require_owner(ctx)
        if is_null_address(new_owner):
            raise InvalidArgument("Ownable: new owner is the zero address")
        new_owner = normalize_address(new_owner, "new owner")

        previous_owner = ctx.state.owner
        ctx.state.owner = new_owner
        ctx.emit(OwnershipTransferred, previous_owner=previous_owner, new_owner=new_owner)

        self.log_info("Ownership transferred", caller=ctx.caller, operation=ctx.operation)
