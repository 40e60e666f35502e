# sponsored_farm/chain/interfaces.py

from abc import ABC, abstractmethod
from typing import Optional

from ..types.new import EvmAddress


class AssetTransferError(Exception):
    """A token or position transfer was refused by its contract."""


class RewardToken(ABC):
    """Minimal ERC20 surface. Every method acts on behalf of an explicit account."""

    @property
    @abstractmethod
    def address(self) -> EvmAddress:
        pass

    @abstractmethod
    def balance_of(self, account: EvmAddress) -> int:
        pass

    @abstractmethod
    def allowance(self, owner: EvmAddress, spender: EvmAddress) -> int:
        pass

    @abstractmethod
    def approve(self, owner: EvmAddress, spender: EvmAddress, amount: int) -> None:
        pass

    @abstractmethod
    def transfer(self, sender: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        pass

    @abstractmethod
    def transfer_from(self, spender: EvmAddress, owner: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        pass


class PositionManager(ABC):
    """Minimal ERC721 surface of the non-fungible position manager."""

    @property
    @abstractmethod
    def address(self) -> EvmAddress:
        pass

    @abstractmethod
    def owner_of(self, token_id: int) -> Optional[EvmAddress]:
        pass

    @abstractmethod
    def approve(self, owner: EvmAddress, operator: EvmAddress, token_id: int) -> None:
        pass

    @abstractmethod
    def set_approval_for_all(self, owner: EvmAddress, operator: EvmAddress, approved: bool) -> None:
        pass

    @abstractmethod
    def transfer_from(self, operator: EvmAddress, from_address: EvmAddress, to_address: EvmAddress, token_id: int) -> None:
        pass


class ChainClock(ABC):
    @property
    @abstractmethod
    def chain_id(self) -> int:
        pass

    @abstractmethod
    def block_number(self) -> int:
        pass

    @abstractmethod
    def block_timestamp(self) -> int:
        pass


class Chain(ChainClock):
    """Clock plus access to the token contracts the ledger talks to."""

    @abstractmethod
    def erc20(self, address: EvmAddress) -> RewardToken:
        pass

    @abstractmethod
    def position_manager(self, address: EvmAddress) -> PositionManager:
        pass
