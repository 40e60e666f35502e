# tests/conftest.py

"""
Shared fixtures: an in-memory SQLite ledger over a LocalChain with one
reward token, one position manager and eth-account generated signer keys.
"""

import pytest
from eth_account import Account

from sponsored_farm.chain.local import LocalChain, random_address
from sponsored_farm.core.logging import FarmLogger
from sponsored_farm.database.connection import DatabaseManager
from sponsored_farm.ledger.farm import SponsoredFarm
from sponsored_farm.signing.voucher import VoucherSigner
from sponsored_farm.types import DatabaseConfig


TOKEN_ID = 1
DEPOSIT = 100 * 10**18


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    FarmLogger.reset()


@pytest.fixture
def db_manager():
    manager = DatabaseManager(DatabaseConfig(url="sqlite:///:memory:"))
    manager.initialize()
    yield manager
    manager.shutdown()


@pytest.fixture
def chain():
    return LocalChain(chain_id=1337, start_block=100, genesis_timestamp=1_700_000_000)


@pytest.fixture
def owner():
    return random_address()


@pytest.fixture
def user():
    return random_address()


@pytest.fixture
def stranger():
    return random_address()


@pytest.fixture
def signer_account():
    return Account.create()


@pytest.fixture
def reward_token(chain):
    return chain.deploy_erc20("Reward Token", "RWD")


@pytest.fixture
def position_manager(chain):
    return chain.deploy_position_manager()


@pytest.fixture
def ledger_address():
    return random_address()


@pytest.fixture
def uninitialized_ledger(db_manager, chain, ledger_address):
    return SponsoredFarm(db_manager, chain, ledger_address)


@pytest.fixture
def ledger(uninitialized_ledger, owner, position_manager):
    uninitialized_ledger.initialize(owner, position_manager.address)
    return uninitialized_ledger


@pytest.fixture
def farm_id(ledger, owner, reward_token, signer_account):
    return ledger.register_farm(owner, reward_token.address, signer_account.address, random_address(), 0)


@pytest.fixture
def voucher_signer(ledger, signer_account):
    return VoucherSigner(signer_account.key, ledger.voucher_domain)


@pytest.fixture
def stake_position(ledger, position_manager):
    """Mint ``token_id`` to ``account``, approve the ledger and stake it."""
    def stake(account, token_id=TOKEN_ID):
        position_manager.set_owner(token_id, account)
        position_manager.approve(account, ledger.address, token_id)
        ledger.stake(account, token_id)
    return stake


@pytest.fixture
def fund_farm(ledger, reward_token):
    """Mint reward tokens to ``depositor``, approve the ledger and deposit them."""
    def fund(depositor, farm, amount=DEPOSIT):
        reward_token.mint(depositor, amount)
        reward_token.approve(depositor, ledger.address, amount)
        ledger.deposit_reward(depositor, farm, amount)
    return fund
