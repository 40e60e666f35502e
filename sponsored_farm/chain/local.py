# sponsored_farm/chain/local.py

"""
In-memory chain used by tests and local runs.

Token contracts validate fully before mutating, so a refused transfer
leaves balances untouched.
"""

import time
from collections import defaultdict
from typing import Dict, Optional, Set, Tuple

from eth_account import Account

from ..types.new import EvmAddress
from .interfaces import AssetTransferError, Chain, PositionManager, RewardToken


def _addr(value: str) -> EvmAddress:
    return EvmAddress(value.lower())


def random_address() -> EvmAddress:
    return _addr(Account.create().address)


class MockERC20(RewardToken):
    def __init__(self, name: str, symbol: str, address: Optional[str] = None, decimals: int = 18):
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._address = _addr(address) if address else random_address()
        self._balances: Dict[EvmAddress, int] = defaultdict(int)
        self._allowances: Dict[Tuple[EvmAddress, EvmAddress], int] = defaultdict(int)
        self.total_supply = 0

    @property
    def address(self) -> EvmAddress:
        return self._address

    def mint(self, to: str, amount: int) -> None:
        self._balances[_addr(to)] += amount
        self.total_supply += amount

    def balance_of(self, account: EvmAddress) -> int:
        return self._balances.get(_addr(account), 0)

    def allowance(self, owner: EvmAddress, spender: EvmAddress) -> int:
        return self._allowances.get((_addr(owner), _addr(spender)), 0)

    def approve(self, owner: EvmAddress, spender: EvmAddress, amount: int) -> None:
        self._allowances[(_addr(owner), _addr(spender))] = amount

    def transfer(self, sender: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        sender, recipient = _addr(sender), _addr(recipient)
        if self._balances.get(sender, 0) < amount:
            raise AssetTransferError(f"{self.symbol}: transfer amount exceeds balance")
        self._balances[sender] -= amount
        self._balances[recipient] += amount

    def transfer_from(self, spender: EvmAddress, owner: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        key = (_addr(owner), _addr(spender))
        if self._allowances.get(key, 0) < amount:
            raise AssetTransferError(f"{self.symbol}: insufficient allowance")
        self.transfer(owner, recipient, amount)
        self._allowances[key] -= amount


class MockPositionManager(PositionManager):
    def __init__(self, address: Optional[str] = None):
        self._address = _addr(address) if address else random_address()
        self._owners: Dict[int, EvmAddress] = {}
        self._token_approvals: Dict[int, EvmAddress] = {}
        self._operators: Set[Tuple[EvmAddress, EvmAddress]] = set()

    @property
    def address(self) -> EvmAddress:
        return self._address

    def set_owner(self, token_id: int, owner: str) -> None:
        self._owners[token_id] = _addr(owner)
        self._token_approvals.pop(token_id, None)

    def owner_of(self, token_id: int) -> Optional[EvmAddress]:
        return self._owners.get(token_id)

    def approve(self, owner: EvmAddress, operator: EvmAddress, token_id: int) -> None:
        if self._owners.get(token_id) != _addr(owner):
            raise AssetTransferError("ERC721: approve caller is not token owner")
        self._token_approvals[token_id] = _addr(operator)

    def set_approval_for_all(self, owner: EvmAddress, operator: EvmAddress, approved: bool) -> None:
        pair = (_addr(owner), _addr(operator))
        if approved:
            self._operators.add(pair)
        else:
            self._operators.discard(pair)

    def transfer_from(self, operator: EvmAddress, from_address: EvmAddress, to_address: EvmAddress, token_id: int) -> None:
        operator, from_address, to_address = _addr(operator), _addr(from_address), _addr(to_address)
        owner = self._owners.get(token_id)
        if owner is None or owner != from_address:
            raise AssetTransferError("ERC721: transfer from incorrect owner")
        authorized = (
            operator == owner
            or self._token_approvals.get(token_id) == operator
            or (owner, operator) in self._operators
        )
        if not authorized:
            raise AssetTransferError("ERC721: caller is not token owner or approved")
        self._owners[token_id] = to_address
        self._token_approvals.pop(token_id, None)


class LocalChain(Chain):
    def __init__(self, chain_id: int = 1337, start_block: int = 1,
                 genesis_timestamp: Optional[int] = None, block_time: int = 2):
        self._chain_id = chain_id
        self._block_number = start_block
        self._genesis_timestamp = genesis_timestamp if genesis_timestamp is not None else int(time.time())
        self._block_time = block_time
        self._tokens: Dict[EvmAddress, MockERC20] = {}
        self._position_managers: Dict[EvmAddress, MockPositionManager] = {}

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def block_number(self) -> int:
        return self._block_number

    def block_timestamp(self) -> int:
        return self._genesis_timestamp + self._block_number * self._block_time

    def mine(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("blocks must be non-negative")
        self._block_number += blocks
        return self._block_number

    def deploy_erc20(self, name: str, symbol: str, decimals: int = 18) -> MockERC20:
        token = MockERC20(name, symbol, decimals=decimals)
        self._tokens[token.address] = token
        return token

    def deploy_position_manager(self) -> MockPositionManager:
        manager = MockPositionManager()
        self._position_managers[manager.address] = manager
        return manager

    def erc20(self, address: EvmAddress) -> MockERC20:
        token = self._tokens.get(_addr(address))
        if token is None:
            raise AssetTransferError(f"No token deployed at {address}")
        return token

    def position_manager(self, address: EvmAddress) -> MockPositionManager:
        manager = self._position_managers.get(_addr(address))
        if manager is None:
            raise AssetTransferError(f"No position manager deployed at {address}")
        return manager
