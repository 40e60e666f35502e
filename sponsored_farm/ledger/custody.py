# sponsored_farm/ledger/custody.py

from typing import Optional

from sqlalchemy.orm import Session

from ..chain.interfaces import PositionManager
from ..core.logging import LoggingMixin
from ..database.repositories.position_repository import PositionRepository
from ..database.tables.position import DBPosition
from ..types.model.errors import AlreadyStaked, InvalidState, Unauthorized
from ..types.model.staking import PositionStaked, PositionUnstaked
from ..types.new import EvmAddress
from ..utils.addresses import require_uint256, same_address
from .context import OperationContext


class PositionCustody(LoggingMixin):
    """Who staked which position token. A position with no record is not staked."""

    def __init__(self, position_repository: PositionRepository):
        self.positions = position_repository

    def custodian_of(self, session: Session, token_id: int) -> Optional[EvmAddress]:
        position = self.positions.get_position(session, token_id)
        return position.owner if position else None

    def require_custodian(self, ctx: OperationContext, token_id: int) -> DBPosition:
        position = self.positions.get_position(ctx.session, require_uint256(token_id, "token id"))
        if position is None or not same_address(position.owner, ctx.caller):
            raise Unauthorized("Not owner", token_id=token_id, caller=ctx.caller)
        return position

    def stake(self, ctx: OperationContext, position_manager: PositionManager, token_id: int,
              custody_address: EvmAddress) -> None:
        token_id = require_uint256(token_id, "token id")
        if self.positions.get_position(ctx.session, token_id) is not None:
            raise AlreadyStaked("Already staked", token_id=token_id)

        if not same_address(position_manager.owner_of(token_id), ctx.caller):
            raise Unauthorized("Not owner", token_id=token_id, caller=ctx.caller)

        self.positions.add(ctx.session, DBPosition(
            token_id=token_id,
            owner=ctx.caller,
            staked_block=ctx.block_number,
            staked_at=ctx.timestamp,
        ))
        ctx.state.total_staked += 1

        position_manager.transfer_from(custody_address, ctx.caller, custody_address, token_id)
        ctx.emit(PositionStaked, owner=ctx.caller, token_id=token_id)

        self.log_info("Position staked", token_id=token_id, caller=ctx.caller, operation=ctx.operation)

    def ensure_held(self, position_manager: PositionManager, token_id: int, custody_address: EvmAddress) -> None:
        if not same_address(position_manager.owner_of(token_id), custody_address):
            raise InvalidState("Position not held by ledger", token_id=token_id)

    def release(self, ctx: OperationContext, position_manager: PositionManager, token_id: int,
                custody_address: EvmAddress) -> None:
        position = self.require_custodian(ctx, token_id)
        custodian = position.owner

        self.positions.delete(ctx.session, position)
        ctx.state.total_staked -= 1

        position_manager.transfer_from(custody_address, custody_address, custodian, position.token_id)
        ctx.emit(PositionUnstaked, owner=custodian, token_id=position.token_id)

        self.log_info("Position unstaked", token_id=position.token_id, caller=ctx.caller, operation=ctx.operation)
