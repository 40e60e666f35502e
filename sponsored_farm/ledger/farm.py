# sponsored_farm/ledger/farm.py

"""
SponsoredFarm: the ledger facade.

Every state-changing operation takes the ledger lock, opens one database
transaction, runs its checks and writes, performs external transfers last
and commits. Any exception rolls the whole operation back. Listeners see
the emitted events only after the commit.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generator, List, Optional

from sqlalchemy.orm import Session

from ..chain.interfaces import AssetTransferError, Chain, PositionManager
from ..core.logging import LoggingMixin
from ..database.connection import DatabaseManager
from ..database.layout import LayoutManager
from ..database.repositories import (
    LedgerStateRepository,
    FarmRepository,
    PositionRepository,
    ClaimRepository,
    EventRepository,
)
from ..database.tables.state import DBLedgerState
from ..signing.voucher import VoucherDomain
from ..types.config import FarmConfig
from ..types.constants import (
    DEFAULT_DOMAIN_NAME,
    DEFAULT_DOMAIN_VERSION,
    INITIALIZED_VERSION,
    ZERO_ADDRESS,
)
from ..types.model.admin import Initialized, OwnershipTransferred
from ..types.model.base import LedgerEvent
from ..types.model.errors import ConfigError, FarmLedgerError, InvalidArgument, InvalidState
from ..types.model.farm import Farm
from ..types.model.rewards import HarvestParams
from ..types.model.staking import Position
from ..types.new import EvmAddress
from ..utils.addresses import is_null_address, normalize_address, require_uint256
from .access import AccessControl
from .claims import ClaimEngine
from .context import OperationContext
from .custody import PositionCustody
from .registry import FarmRegistry
from .vault import RewardVault


EventListener = Callable[[LedgerEvent], None]


class SponsoredFarm(LoggingMixin):
    def __init__(self, db_manager: DatabaseManager, chain: Chain, address: str,
                 domain_name: str = DEFAULT_DOMAIN_NAME,
                 domain_version: str = DEFAULT_DOMAIN_VERSION,
                 sync_layout: bool = True):
        if is_null_address(address):
            raise InvalidArgument("Invalid ledger address")

        self.db = db_manager
        self.chain = chain
        self.address = normalize_address(address, "ledger address")
        self.domain_name = domain_name
        self.domain_version = domain_version

        self.layout = LayoutManager()
        if sync_layout:
            self.layout.sync(self.db.engine)
        else:
            self.layout.check_database(self.db.engine)

        self.state_repo = LedgerStateRepository()
        self.farm_repo = FarmRepository()
        self.position_repo = PositionRepository()
        self.claim_repo = ClaimRepository()
        self.event_repo = EventRepository()

        self.access = AccessControl()
        self.registry = FarmRegistry(self.farm_repo)
        self.custody = PositionCustody(self.position_repo)
        self.vault = RewardVault()
        self.claims = ClaimEngine(self.claim_repo, self.registry, self.custody, self.vault)

        self._lock = threading.RLock()
        self._listeners: List[EventListener] = []

    @classmethod
    def from_config(cls, config: FarmConfig, chain: Optional[Chain] = None,
                    db_manager: Optional[DatabaseManager] = None) -> 'SponsoredFarm':
        if is_null_address(config.ledger.address):
            raise ConfigError("ledger.address must be set (FARM_LEDGER_ADDRESS)")

        if db_manager is None:
            db_manager = DatabaseManager(config.database)
            db_manager.initialize()

        if chain is None:
            if config.chain.rpc_url:
                from ..chain.rpc import RpcChain
                chain = RpcChain(config.chain.rpc_url, timeout=config.chain.timeout)
            else:
                from ..chain.local import LocalChain
                chain = LocalChain(chain_id=config.chain.chain_id)

        return cls(db_manager, chain, config.ledger.address,
                   domain_name=config.ledger.domain_name,
                   domain_version=config.ledger.domain_version)

    @property
    def voucher_domain(self) -> VoucherDomain:
        return VoucherDomain(
            chain_id=self.chain.chain_id,
            verifying_contract=self.address,
            name=self.domain_name,
            version=self.domain_version,
        )

    # === Listeners ===

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a callback for committed events; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, events: List[LedgerEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as e:
                    self.log_error("Event listener failed",
                                   operation=event.operation,
                                   error=str(e),
                                   error_type=type(e).__name__)

    # === Execution ===

    @contextmanager
    def _operation(self, name: str, caller: str,
                   require_initialized: bool = True) -> Generator[OperationContext, None, None]:
        with self._lock:
            try:
                caller = normalize_address(caller, "caller")
                with self.db.get_transaction() as session:
                    state = self.state_repo.load(session, for_update=not self.db.is_sqlite)
                    if state is None and require_initialized:
                        raise InvalidState("Ledger not initialized")

                    operation = state.operation_count + 1 if state is not None else 1
                    ctx = OperationContext(
                        session=session,
                        state=state,
                        caller=caller,
                        block_number=self.chain.block_number(),
                        timestamp=self.chain.block_timestamp(),
                        operation=operation,
                    )

                    yield ctx

                    ctx.state.operation_count = operation
                    for event in ctx.events:
                        self.event_repo.record(session, event)
                    session.flush()

                    # reward transfers cannot be rolled back
                    ctx.settle()

            except FarmLedgerError as e:
                context = dict(e.context)
                context.setdefault("caller", caller)
                self.log_warning(f"{name} rejected: {e.reason}",
                                 error=e.reason, error_type=e.error_type, **context)
                raise
            except AssetTransferError as e:
                self.log_error(f"{name} failed during transfer",
                               caller=caller, error=str(e), error_type=type(e).__name__)
                raise

            self.log_debug(f"{name} committed", operation=operation, caller=caller)
            self._notify(ctx.events)

    @contextmanager
    def _read(self) -> Generator[Session, None, None]:
        with self.db.get_session() as session:
            yield session

    def _require_state(self, session: Session) -> DBLedgerState:
        state = self.state_repo.load(session)
        if state is None:
            raise InvalidState("Ledger not initialized")
        return state

    def _position_manager(self, ctx: OperationContext) -> PositionManager:
        return self.chain.position_manager(ctx.state.position_manager)

    # === Administration ===

    def initialize(self, caller: str, position_manager: str, owner: Optional[str] = None) -> None:
        """One-time setup. ``owner`` defaults to the caller."""
        with self._operation("initialize", caller, require_initialized=False) as ctx:
            if ctx.state is not None:
                raise InvalidState("Initializable: contract is already initialized")
            if is_null_address(position_manager):
                raise InvalidArgument("Invalid position manager")
            owner = ctx.caller if owner is None else owner
            if is_null_address(owner):
                raise InvalidArgument("Ownable: new owner is the zero address")

            position_manager = normalize_address(position_manager, "position manager")
            owner = normalize_address(owner, "owner")

            ctx.state = self.state_repo.create(ctx.session, owner, position_manager, INITIALIZED_VERSION)
            ctx.emit(OwnershipTransferred, previous_owner=ZERO_ADDRESS, new_owner=owner)
            ctx.emit(Initialized, version=INITIALIZED_VERSION, owner=owner, position_manager=position_manager)

            self.log_info("Ledger initialized", caller=ctx.caller, operation=ctx.operation)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self._operation("transfer_ownership", caller) as ctx:
            self.access.transfer_ownership(ctx, new_owner)

    def register_farm(self, caller: str, reward_token: str, signer: str, pool: str,
                      reward_per_block: int = 0) -> int:
        with self._operation("register_farm", caller) as ctx:
            self.access.require_owner(ctx)
            farm_id = self.registry.register(ctx, reward_token, signer, pool, reward_per_block)
        return farm_id

    def activate_farm(self, caller: str, farm_id: int) -> None:
        with self._operation("activate_farm", caller) as ctx:
            self.access.require_owner(ctx)
            self.registry.set_active(ctx, farm_id, True)

    def deactivate_farm(self, caller: str, farm_id: int) -> None:
        with self._operation("deactivate_farm", caller) as ctx:
            self.access.require_owner(ctx)
            self.registry.set_active(ctx, farm_id, False)

    def set_signer(self, caller: str, farm_id: int, new_signer: str) -> None:
        with self._operation("set_signer", caller) as ctx:
            self.access.require_owner(ctx)
            self.registry.set_signer(ctx, farm_id, new_signer)

    def set_reward_per_block(self, caller: str, farm_id: int, new_rate: int) -> None:
        with self._operation("set_reward_per_block", caller) as ctx:
            self.access.require_owner(ctx)
            self.registry.set_reward_per_block(ctx, farm_id, new_rate)

    # === Staking ===

    def stake(self, caller: str, token_id: int) -> None:
        with self._operation("stake", caller) as ctx:
            self.custody.stake(ctx, self._position_manager(ctx), token_id, self.address)

    def unstake(self, caller: str, token_id: int) -> None:
        with self._operation("unstake", caller) as ctx:
            self.custody.release(ctx, self._position_manager(ctx), token_id, self.address)

    # === Rewards ===

    def harvest(self, caller: str, voucher: HarvestParams) -> int:
        """Redeem a cumulative voucher and return the amount paid out."""
        with self._operation("harvest", caller) as ctx:
            delta = self.claims.harvest(ctx, voucher, self.voucher_domain, self.chain, self.address)
        return delta

    def harvest_and_unstake(self, caller: str, voucher: HarvestParams) -> int:
        """Redeem a voucher and return the position; the reward is paid after the position moves."""
        with self._operation("harvest_and_unstake", caller) as ctx:
            position_manager = self._position_manager(ctx)
            self.custody.require_custodian(ctx, voucher.token_id)
            self.custody.ensure_held(position_manager, voucher.token_id, self.address)

            delta = self.claims.harvest(ctx, voucher, self.voucher_domain, self.chain, self.address)
            self.custody.release(ctx, position_manager, voucher.token_id, self.address)
        return delta

    def deposit_reward(self, caller: str, farm_id: int, amount: int) -> None:
        with self._operation("deposit_reward", caller) as ctx:
            farm = self.registry.require_farm(ctx.session, farm_id)
            self.vault.deposit(ctx, farm, self.chain.erc20(farm.reward_token), amount, self.address)

    # === Queries ===

    def is_initialized(self) -> bool:
        with self._read() as session:
            return self.state_repo.load(session) is not None

    def owner(self) -> EvmAddress:
        with self._read() as session:
            return self._require_state(session).owner

    def position_manager_address(self) -> EvmAddress:
        with self._read() as session:
            return self._require_state(session).position_manager

    def get_farm(self, farm_id: int) -> Farm:
        with self._read() as session:
            return Farm.from_db(self.registry.require_farm(session, farm_id))

    def farms(self) -> List[Farm]:
        with self._read() as session:
            return self.registry.list_farms(session)

    def farm_count(self) -> int:
        with self._read() as session:
            state = self.state_repo.load(session)
            return state.farm_count if state is not None else 0

    def farm_balance(self, farm_id: int) -> int:
        with self._read() as session:
            return self.vault.balance(self.registry.require_farm(session, farm_id))

    def position_owner(self, token_id: int) -> Optional[EvmAddress]:
        with self._read() as session:
            return self.custody.custodian_of(session, require_uint256(token_id, "token id"))

    def get_position(self, token_id: int) -> Optional[Position]:
        with self._read() as session:
            position = self.position_repo.get_position(session, require_uint256(token_id, "token id"))
            return Position.from_db(position) if position is not None else None

    def positions_of(self, owner: str) -> List[Position]:
        owner = normalize_address(owner, "owner")
        with self._read() as session:
            return [Position.from_db(p) for p in self.position_repo.get_by_owner(session, owner)]

    def total_staked(self) -> int:
        with self._read() as session:
            state = self.state_repo.load(session)
            return state.total_staked if state is not None else 0

    def position_total_claimed(self, token_id: int, farm_id: int) -> int:
        with self._read() as session:
            return self.claim_repo.get_claimed(session, require_uint256(token_id, "token id"), farm_id)

    def position_claims(self, token_id: int) -> Dict[int, int]:
        """Amount claimed so far from every farm the position has harvested."""
        with self._read() as session:
            records = self.claim_repo.get_by_position(session, require_uint256(token_id, "token id"))
            return {record.farm_id: record.total_claimed for record in records}

    def events(self, event_type: Optional[str] = None, from_block: Optional[int] = None,
               to_block: Optional[int] = None) -> List[LedgerEvent]:
        with self._read() as session:
            return self.event_repo.get_events(session, event_type, from_block, to_block)
