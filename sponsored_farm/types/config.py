# sponsored_farm/types/config.py

from typing import Optional

from msgspec import Struct, field

from .constants import DEFAULT_DOMAIN_NAME, DEFAULT_DOMAIN_VERSION, ZERO_ADDRESS
from .new import EvmAddress


class DatabaseConfig(Struct):
    url: str = "sqlite:///sponsored_farm.db"
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False

class ChainConfig(Struct):
    chain_id: int = 1337
    rpc_url: Optional[str] = None
    timeout: int = 30

class LedgerConfig(Struct):
    address: EvmAddress = EvmAddress(ZERO_ADDRESS)
    domain_name: str = DEFAULT_DOMAIN_NAME
    domain_version: str = DEFAULT_DOMAIN_VERSION

class LoggingConfig(Struct):
    level: str = "INFO"
    log_dir: Optional[str] = None
    structured_format: bool = True

class FarmConfig(Struct):
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
