# sponsored_farm/core/config.py

import os
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv

from ..types import FarmConfig, ConfigError
from .logging import FarmLogger, log_with_context


# environment variable -> (section, key, converter)
ENV_OVERRIDES = {
    "FARM_DATABASE_URL": ("database", "url", str),
    "FARM_DB_POOL_SIZE": ("database", "pool_size", int),
    "FARM_RPC_URL": ("chain", "rpc_url", str),
    "FARM_CHAIN_ID": ("chain", "chain_id", int),
    "FARM_LEDGER_ADDRESS": ("ledger", "address", str),
    "FARM_DOMAIN_NAME": ("ledger", "domain_name", str),
    "FARM_DOMAIN_VERSION": ("ledger", "domain_version", str),
    "FARM_LOG_LEVEL": ("logging", "level", str),
    "FARM_LOG_DIR": ("logging", "log_dir", str),
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _apply_env(data: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    for var, (section, key, convert) in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            value = convert(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {var}: {raw!r}") from e
        data.setdefault(section, {})[key] = value
    return data


def load_config(path: Optional[Union[str, Path]] = None,
                env: Optional[Mapping[str, str]] = None) -> FarmConfig:
    """Build the ledger configuration.

    Values come from the optional YAML file, then ``FARM_*`` environment
    variables override them. A ``.env`` file is loaded first unless an
    explicit ``env`` mapping is passed.
    """
    logger = FarmLogger.get_logger('core.config')

    if env is None:
        load_dotenv()
        env = os.environ

    if path is None:
        path = env.get("FARM_CONFIG_PATH")

    data: Dict[str, Any] = _read_yaml(Path(path)) if path else {}
    data = _apply_env(data, env)

    try:
        config = msgspec.convert(data, FarmConfig)
    except msgspec.ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    log_with_context(logger, logging.DEBUG, "Configuration loaded",
                     config_path=str(path) if path else None,
                     chain_id=config.chain.chain_id)
    return config
