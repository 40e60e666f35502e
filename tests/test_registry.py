# tests/test_registry.py

import pytest

from sponsored_farm.chain.local import random_address
from sponsored_farm.types import (
    ZERO_ADDRESS,
    FarmActivated,
    FarmAdded,
    FarmDeactivated,
    InvalidArgument,
    InvalidState,
    NotFound,
    RewardPerBlockUpdated,
    SignerUpdated,
)


def test_register_farm_stores_parameters(ledger, owner, farm_id, chain, signer_account):
    token = chain.deploy_erc20("New Token", "NEW")
    pool = random_address()
    rate = 5 * 10**18

    new_id = ledger.register_farm(owner, token.address, signer_account.address, pool, rate)

    assert new_id == farm_id + 1
    farm = ledger.get_farm(new_id)
    assert farm.reward_token == token.address
    assert farm.signer == signer_account.address.lower()
    assert farm.active is True
    assert farm.total_claimable == 0
    assert farm.total_claimed == 0
    assert farm.pool == pool
    assert farm.reward_per_block == rate
    assert ledger.farm_count() == 2


def test_register_farm_emits_farm_added(ledger, owner, signer_account):
    token, pool = random_address(), random_address()
    farm_id = ledger.register_farm(owner, token, signer_account.address, pool, 5 * 10**18)

    event = ledger.events(event_type="FarmAdded")[-1]
    assert isinstance(event, FarmAdded)
    assert event.farm_id == farm_id
    assert event.reward_token == token
    assert event.signer == signer_account.address.lower()
    assert event.pool == pool
    assert event.reward_per_block == str(5 * 10**18)


@pytest.mark.parametrize("field, message", [
    ("reward_token", "Invalid reward token"),
    ("signer", "Invalid signer"),
    ("pool", "Invalid pool"),
])
def test_register_farm_rejects_null_addresses(ledger, owner, field, message):
    params = {"reward_token": random_address(), "signer": random_address(), "pool": random_address()}
    params[field] = ZERO_ADDRESS

    with pytest.raises(InvalidArgument, match=message):
        ledger.register_farm(owner, reward_per_block=0, **params)
    assert ledger.farm_count() == 0


def test_farm_ids_are_sequential_and_listed_in_order(ledger, owner):
    ids = [ledger.register_farm(owner, random_address(), random_address(), random_address(), i)
           for i in range(3)]

    assert ids == [0, 1, 2]
    assert [f.farm_id for f in ledger.farms()] == ids
    assert [f.reward_per_block for f in ledger.farms()] == [0, 1, 2]


def test_unknown_farm(ledger, owner):
    with pytest.raises(NotFound, match="Farm does not exist"):
        ledger.get_farm(3)
    with pytest.raises(NotFound, match="Farm does not exist"):
        ledger.activate_farm(owner, 3)
    with pytest.raises(NotFound, match="Farm does not exist"):
        ledger.farm_balance(-1)


def test_deactivate_and_activate(ledger, owner, farm_id):
    ledger.deactivate_farm(owner, farm_id)
    assert ledger.get_farm(farm_id).active is False

    ledger.activate_farm(owner, farm_id)
    assert ledger.get_farm(farm_id).active is True

    deactivated, activated = ledger.events(event_type="FarmDeactivated") + ledger.events(event_type="FarmActivated")
    assert isinstance(deactivated, FarmDeactivated) and deactivated.farm_id == farm_id
    assert isinstance(activated, FarmActivated) and activated.farm_id == farm_id


def test_redundant_state_changes_are_rejected(ledger, owner, farm_id):
    with pytest.raises(InvalidState, match="Farm already active"):
        ledger.activate_farm(owner, farm_id)

    ledger.deactivate_farm(owner, farm_id)
    with pytest.raises(InvalidState, match="Farm already inactive"):
        ledger.deactivate_farm(owner, farm_id)


def test_set_signer(ledger, owner, farm_id, signer_account):
    new_signer = random_address()
    ledger.set_signer(owner, farm_id, new_signer)

    assert ledger.get_farm(farm_id).signer == new_signer
    event = ledger.events(event_type="SignerUpdated")[-1]
    assert isinstance(event, SignerUpdated)
    assert event.old_signer == signer_account.address.lower()
    assert event.new_signer == new_signer


def test_set_signer_rejects_null_and_works_when_inactive(ledger, owner, farm_id):
    with pytest.raises(InvalidArgument, match="Invalid signer"):
        ledger.set_signer(owner, farm_id, ZERO_ADDRESS)

    ledger.deactivate_farm(owner, farm_id)
    new_signer = random_address()
    ledger.set_signer(owner, farm_id, new_signer)
    assert ledger.get_farm(farm_id).signer == new_signer


def test_set_reward_per_block(ledger, owner, farm_id):
    ledger.set_reward_per_block(owner, farm_id, 2**200)

    assert ledger.get_farm(farm_id).reward_per_block == 2**200
    event = ledger.events(event_type="RewardPerBlockUpdated")[-1]
    assert isinstance(event, RewardPerBlockUpdated)
    assert (event.old_reward_per_block, event.new_reward_per_block) == ("0", str(2**200))


def test_set_reward_per_block_rejects_out_of_range(ledger, owner, farm_id):
    with pytest.raises(InvalidArgument):
        ledger.set_reward_per_block(owner, farm_id, 2**256)
    with pytest.raises(InvalidArgument):
        ledger.set_reward_per_block(owner, farm_id, -1)
    assert ledger.get_farm(farm_id).reward_per_block == 0
