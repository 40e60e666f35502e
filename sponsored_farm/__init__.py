# sponsored_farm/__init__.py

import logging
from typing import Mapping, Optional

from .core.config import load_config
from .core.logging import FarmLogger, log_with_context
from .chain import Chain, LocalChain
from .database.connection import DatabaseManager
from .ledger import SponsoredFarm
from .signing import VoucherDomain, VoucherSigner, verify_voucher
from .types import FarmConfig, HarvestParams


__version__ = "0.1.0"


def create_ledger(config_path: Optional[str] = None, env: Optional[Mapping[str, str]] = None,
                  chain: Optional[Chain] = None) -> SponsoredFarm:
    """Load configuration and open a ledger over its database."""
    config = load_config(config_path, env)
    FarmLogger.configure(config.logging)

    logger = FarmLogger.get_logger('core.init')
    log_with_context(logger, logging.INFO, "Opening ledger",
                     chain_id=config.chain.chain_id)

    return SponsoredFarm.from_config(config, chain=chain)


__all__ = [
    'create_ledger',
    'load_config',
    'FarmConfig',
    'FarmLogger',
    'DatabaseManager',
    'LocalChain',
    'SponsoredFarm',
    'HarvestParams',
    'VoucherDomain',
    'VoucherSigner',
    'verify_voucher',
]
