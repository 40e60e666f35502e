# sponsored_farm/cli/context.py

"""
CLI Context

Lazily builds the configuration, database manager and ledger the commands
work with, and shuts the database down when the command finishes.
"""

import logging
from typing import Optional

from ..chain.interfaces import AssetTransferError
from ..core.config import load_config
from ..core.logging import FarmLogger, log_with_context
from ..database.connection import DatabaseManager
from ..database.layout import LayoutManager
from ..ledger.farm import SponsoredFarm
from ..signing.voucher import VoucherDomain
from ..types import ConfigError, FarmConfig, FarmLedgerError, StorageLayoutError
from ..utils.addresses import is_null_address, normalize_address


# errors a command reports as a ClickException instead of a traceback
CLI_ERRORS = (FarmLedgerError, ConfigError, StorageLayoutError, AssetTransferError, ConnectionError)


class CLIContext:
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.logger = FarmLogger.get_logger('cli.context')
        self._config: Optional[FarmConfig] = None
        self._db_manager: Optional[DatabaseManager] = None
        self._ledger: Optional[SponsoredFarm] = None

    @property
    def config(self) -> FarmConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def db_manager(self) -> DatabaseManager:
        if self._db_manager is None:
            db_manager = DatabaseManager(self.config.database)
            db_manager.initialize()
            self._db_manager = db_manager
        return self._db_manager

    @property
    def layout(self) -> LayoutManager:
        return LayoutManager()

    @property
    def ledger(self) -> SponsoredFarm:
        if self._ledger is None:
            self._ledger = SponsoredFarm.from_config(self.config, db_manager=self.db_manager)
            log_with_context(self.logger, logging.DEBUG, "Ledger opened",
                             chain_id=self._ledger.chain.chain_id)
        return self._ledger

    def voucher_domain(self) -> VoucherDomain:
        """Voucher domain from configuration alone; no database needed."""
        ledger_config = self.config.ledger
        if is_null_address(ledger_config.address):
            raise ConfigError("ledger.address must be set (FARM_LEDGER_ADDRESS)")
        return VoucherDomain(
            chain_id=self.config.chain.chain_id,
            verifying_contract=normalize_address(ledger_config.address, "ledger address"),
            name=ledger_config.domain_name,
            version=ledger_config.domain_version,
        )

    def shutdown(self) -> None:
        if self._db_manager is not None:
            self._db_manager.shutdown()
            self._db_manager = None
        self._ledger = None
