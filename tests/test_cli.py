# tests/test_cli.py

"""
CLI commands against a file-backed SQLite ledger.
"""

import json

import pytest
from click.testing import CliRunner
from eth_account import Account

from sponsored_farm.chain.local import random_address
from sponsored_farm.cli.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def owner():
    return random_address()


@pytest.fixture
def env(tmp_path, owner):
    return {
        "FARM_DATABASE_URL": f"sqlite:///{tmp_path / 'farm.db'}",
        "FARM_LEDGER_ADDRESS": "0x" + "5a" * 20,
        "FARM_CHAIN_ID": "31337",
        "FARM_CALLER": owner,
    }


@pytest.fixture
def initialized(runner, env):
    result = runner.invoke(cli, ["db", "init", "--position-manager", random_address()], env=env)
    assert result.exit_code == 0, result.output
    return env


@pytest.fixture
def farm_added(runner, initialized):
    signer = random_address()
    result = runner.invoke(cli, [
        "farm", "add",
        "--reward-token", random_address(),
        "--signer", signer,
        "--pool", random_address(),
        "--reward-per-block", "5",
    ], env=initialized)
    assert result.exit_code == 0, result.output
    assert "Farm 0 registered" in result.output
    return signer


def test_db_init_initializes_ledger(runner, env, owner):
    result = runner.invoke(cli, ["db", "init", "--position-manager", random_address()], env=env)

    assert result.exit_code == 0, result.output
    assert "Ledger initialized" in result.output
    assert f"Owner: {owner}" in result.output


def test_db_init_twice_fails(runner, initialized):
    result = runner.invoke(cli, ["db", "init", "--position-manager", random_address()], env=initialized)

    assert result.exit_code != 0
    assert "already initialized" in result.output


def test_db_check_and_upgrade(runner, initialized):
    check = runner.invoke(cli, ["db", "check"], env=initialized)
    assert check.exit_code == 0, check.output
    assert "up to date" in check.output

    upgrade = runner.invoke(cli, ["db", "upgrade"], env=initialized)
    assert upgrade.exit_code == 0, upgrade.output
    assert "Nothing to upgrade" in upgrade.output


def test_farm_list_and_show(runner, initialized, farm_added):
    listed = runner.invoke(cli, ["farm", "list"], env=initialized)
    assert listed.exit_code == 0, listed.output
    assert "Farm 0 (active)" in listed.output
    assert f"Signer: {farm_added}" in listed.output
    assert "Reward per block: 5" in listed.output

    missing = runner.invoke(cli, ["farm", "show", "7"], env=initialized)
    assert missing.exit_code != 0
    assert "Farm does not exist" in missing.output


def test_farm_admin_commands(runner, initialized, farm_added):
    new_signer = random_address()

    for args in (["farm", "deactivate", "0"],
                 ["farm", "set-signer", "0", new_signer],
                 ["farm", "set-reward", "0", "9"]):
        result = runner.invoke(cli, args, env=initialized)
        assert result.exit_code == 0, result.output

    shown = runner.invoke(cli, ["farm", "show", "0"], env=initialized)
    assert "Farm 0 (inactive)" in shown.output
    assert f"Signer: {new_signer}" in shown.output
    assert "Reward per block: 9" in shown.output

    assert runner.invoke(cli, ["farm", "activate", "0"], env=initialized).exit_code == 0
    active_only = runner.invoke(cli, ["farm", "list", "--active-only"], env=initialized)
    assert "Farm 0 (active)" in active_only.output


def test_farm_add_by_non_owner(runner, initialized):
    env = {**initialized, "FARM_CALLER": random_address()}
    result = runner.invoke(cli, [
        "farm", "add",
        "--reward-token", random_address(),
        "--signer", random_address(),
        "--pool", random_address(),
    ], env=env)

    assert result.exit_code != 0
    assert "Ownable: caller is not the owner" in result.output


def test_position_show_unstaked(runner, initialized, farm_added):
    result = runner.invoke(cli, ["position", "show", "1"], env=initialized)

    assert result.exit_code == 0, result.output
    assert "Position 1" in result.output
    assert "Not staked" in result.output


def test_voucher_sign_and_verify(runner, env):
    account = Account.create()
    env = {**env, "FARM_SIGNER_KEY": "0x" + bytes(account.key).hex()}

    signed = runner.invoke(cli, [
        "voucher", "sign",
        "--token-id", "1",
        "--farm-id", "0",
        "--total-claimable", str(10**20),
        "--block-number", "42",
    ], env=env)
    assert signed.exit_code == 0, signed.output

    voucher_json = signed.output.strip().splitlines()[-1]
    voucher = json.loads(voucher_json)
    assert voucher["total_claimable"] == 10**20
    assert voucher["block_number"] == 42

    verified = runner.invoke(cli, ["voucher", "verify", voucher_json, "--signer", account.address], env=env)
    assert verified.exit_code == 0, verified.output
    assert account.address.lower() in verified.output

    rejected = runner.invoke(cli, ["voucher", "verify", voucher_json, "--signer", random_address()], env=env)
    assert rejected.exit_code != 0
    assert "Invalid signature" in rejected.output


def test_voucher_sign_requires_ledger_address(runner, env):
    env = {**env, "FARM_LEDGER_ADDRESS": "", "FARM_SIGNER_KEY": "0x" + bytes(Account.create().key).hex()}
    result = runner.invoke(cli, [
        "voucher", "sign", "--token-id", "1", "--farm-id", "0",
        "--total-claimable", "1", "--block-number", "1",
    ], env=env)

    assert result.exit_code != 0
    assert "ledger.address" in result.output


def test_voucher_verify_rejects_bad_json(runner, env):
    result = runner.invoke(cli, ["voucher", "verify", "{not json", "--signer", random_address()], env=env)
    assert result.exit_code != 0
    assert "Invalid voucher JSON" in result.output
