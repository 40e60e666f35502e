# tests/test_config.py

"""
Configuration loading: YAML file, FARM_* overrides and validation.
"""

import logging

import pytest

from sponsored_farm.core.config import load_config
from sponsored_farm.core.logging import FarmLogger, log_with_context
from sponsored_farm.ledger.farm import SponsoredFarm
from sponsored_farm.chain.local import LocalChain
from sponsored_farm.types import ConfigError, FarmConfig, LoggingConfig


def test_defaults_without_file_or_env():
    config = load_config(env={})

    assert isinstance(config, FarmConfig)
    assert config.database.url == "sqlite:///sponsored_farm.db"
    assert config.chain.chain_id == 1337
    assert config.chain.rpc_url is None
    assert config.ledger.domain_name == "RabbitSponsoredFarm"
    assert config.ledger.domain_version == "1"
    assert config.logging.level == "INFO"


def test_yaml_file(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text(
        "database:\n"
        "  url: sqlite:///:memory:\n"
        "chain:\n"
        "  chain_id: 8453\n"
        "ledger:\n"
        "  address: '0x" + "ab" * 20 + "'\n"
    )

    config = load_config(path, env={})

    assert config.database.url == "sqlite:///:memory:"
    assert config.chain.chain_id == 8453
    assert config.ledger.address == "0x" + "ab" * 20


def test_env_overrides_file(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text("chain:\n  chain_id: 8453\n")

    config = load_config(path, env={"FARM_CHAIN_ID": "10", "FARM_LOG_LEVEL": "DEBUG",
                                    "FARM_DATABASE_URL": "sqlite:///other.db"})

    assert config.chain.chain_id == 10
    assert config.logging.level == "DEBUG"
    assert config.database.url == "sqlite:///other.db"


def test_config_path_from_env(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text("ledger:\n  domain_version: '2'\n")

    assert load_config(env={"FARM_CONFIG_PATH": str(path)}).ledger.domain_version == "2"


def test_missing_file():
    with pytest.raises(ConfigError, match="not found"):
        load_config("/nonexistent/farm.yaml", env={})


def test_invalid_yaml(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text("chain: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path, env={})


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_invalid_env_value():
    with pytest.raises(ConfigError, match="Invalid value for FARM_CHAIN_ID"):
        load_config(env={"FARM_CHAIN_ID": "mainnet"})


def test_invalid_field_type(tmp_path):
    path = tmp_path / "farm.yaml"
    path.write_text("chain:\n  chain_id: mainnet\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path, env={})


def test_from_config_requires_ledger_address():
    config = load_config(env={"FARM_DATABASE_URL": "sqlite:///:memory:"})
    with pytest.raises(ConfigError, match="ledger.address"):
        SponsoredFarm.from_config(config, chain=LocalChain())


def test_from_config_builds_ledger():
    config = load_config(env={"FARM_DATABASE_URL": "sqlite:///:memory:",
                              "FARM_LEDGER_ADDRESS": "0x" + "cd" * 20,
                              "FARM_CHAIN_ID": "31337"})
    ledger = SponsoredFarm.from_config(config)
    try:
        assert ledger.address == "0x" + "cd" * 20
        assert ledger.chain.chain_id == 31337
        assert ledger.voucher_domain.chain_id == 31337
        assert not ledger.is_initialized()
    finally:
        ledger.db.shutdown()


def test_structured_log_context(capsys):
    FarmLogger.configure(LoggingConfig(level="DEBUG"))
    logger = FarmLogger.get_logger('tests.config')

    log_with_context(logger, logging.WARNING, "harvest rejected", farm_id=3, caller="0xabc")

    out = capsys.readouterr().out
    assert "sponsored_farm.tests.config - WARNING - harvest rejected" in out
    assert "caller=0xabc" in out and "farm_id=3" in out


def test_log_file_keeps_context_when_console_is_plain(tmp_path, capsys):
    FarmLogger.configure(LoggingConfig(level="INFO", log_dir=str(tmp_path / "logs"), structured_format=False))
    logger = FarmLogger.get_logger('tests.config')

    log_with_context(logger, logging.DEBUG, "dropped below level", farm_id=1)
    log_with_context(logger, logging.INFO, "farm registered", farm_id=7)
    FarmLogger.reset()

    console = capsys.readouterr().out
    assert "farm registered" in console
    assert "farm_id=7" not in console
    assert "dropped below level" not in console

    written = (tmp_path / "logs" / "sponsored_farm.log").read_text()
    assert "farm registered | farm_id=7" in written
