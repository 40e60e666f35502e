# sponsored_farm/chain/rpc.py

from typing import Any, Dict, List, Optional

from web3 import Web3
from web3.exceptions import ContractLogicError

from ..core.logging import FarmLogger, log_with_context, DEBUG
from ..types.new import EvmAddress
from .interfaces import AssetTransferError, Chain, PositionManager, RewardToken


ERC20_ABI: List[Dict[str, Any]] = [
    {"name": "balanceOf", "type": "function", "stateMutability": "view",
     "inputs": [{"name": "account", "type": "address"}],
     "outputs": [{"name": "", "type": "uint256"}]},
    {"name": "allowance", "type": "function", "stateMutability": "view",
     "inputs": [{"name": "owner", "type": "address"}, {"name": "spender", "type": "address"}],
     "outputs": [{"name": "", "type": "uint256"}]},
    {"name": "approve", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
     "outputs": [{"name": "", "type": "bool"}]},
    {"name": "transfer", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
     "outputs": [{"name": "", "type": "bool"}]},
    {"name": "transferFrom", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "from", "type": "address"}, {"name": "to", "type": "address"},
                {"name": "amount", "type": "uint256"}],
     "outputs": [{"name": "", "type": "bool"}]},
]

ERC721_ABI: List[Dict[str, Any]] = [
    {"name": "ownerOf", "type": "function", "stateMutability": "view",
     "inputs": [{"name": "tokenId", "type": "uint256"}],
     "outputs": [{"name": "", "type": "address"}]},
    {"name": "approve", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "to", "type": "address"}, {"name": "tokenId", "type": "uint256"}],
     "outputs": []},
    {"name": "setApprovalForAll", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "operator", "type": "address"}, {"name": "approved", "type": "bool"}],
     "outputs": []},
    {"name": "transferFrom", "type": "function", "stateMutability": "nonpayable",
     "inputs": [{"name": "from", "type": "address"}, {"name": "to", "type": "address"},
                {"name": "tokenId", "type": "uint256"}],
     "outputs": []},
]


def _checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


class _ContractWrapper:
    def __init__(self, w3: Web3, address: str, abi: List[Dict[str, Any]]):
        self.w3 = w3
        self._address = EvmAddress(address.lower())
        self.contract = w3.eth.contract(address=_checksum(address), abi=abi)
        self.logger = FarmLogger.get_logger(f'chain.rpc.{self.__class__.__name__.lower()}')

    @property
    def address(self) -> EvmAddress:
        return self._address

    def _send(self, function, sender: str) -> None:
        """Send from a node-managed account and wait for the receipt."""
        try:
            tx_hash = function.transact({'from': _checksum(sender)})
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except ContractLogicError as e:
            raise AssetTransferError(f"{self._address}: {e}") from e

        log_with_context(self.logger, DEBUG, "Transaction mined",
                         block_number=receipt['blockNumber'])
        if receipt['status'] != 1:
            raise AssetTransferError(f"{self._address}: transaction reverted")


class Web3ERC20(_ContractWrapper, RewardToken):
    def __init__(self, w3: Web3, address: str):
        super().__init__(w3, address, ERC20_ABI)

    def balance_of(self, account: EvmAddress) -> int:
        return self.contract.functions.balanceOf(_checksum(account)).call()

    def allowance(self, owner: EvmAddress, spender: EvmAddress) -> int:
        return self.contract.functions.allowance(_checksum(owner), _checksum(spender)).call()

    def approve(self, owner: EvmAddress, spender: EvmAddress, amount: int) -> None:
        self._send(self.contract.functions.approve(_checksum(spender), amount), owner)

    def transfer(self, sender: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        self._send(self.contract.functions.transfer(_checksum(recipient), amount), sender)

    def transfer_from(self, spender: EvmAddress, owner: EvmAddress, recipient: EvmAddress, amount: int) -> None:
        self._send(
            self.contract.functions.transferFrom(_checksum(owner), _checksum(recipient), amount),
            spender,
        )


class Web3PositionManager(_ContractWrapper, PositionManager):
    def __init__(self, w3: Web3, address: str):
        super().__init__(w3, address, ERC721_ABI)

    def owner_of(self, token_id: int) -> Optional[EvmAddress]:
        try:
            owner = self.contract.functions.ownerOf(token_id).call()
        except ContractLogicError:
            return None
        return EvmAddress(owner.lower())

    def approve(self, owner: EvmAddress, operator: EvmAddress, token_id: int) -> None:
        self._send(self.contract.functions.approve(_checksum(operator), token_id), owner)

    def set_approval_for_all(self, owner: EvmAddress, operator: EvmAddress, approved: bool) -> None:
        self._send(self.contract.functions.setApprovalForAll(_checksum(operator), approved), owner)

    def transfer_from(self, operator: EvmAddress, from_address: EvmAddress, to_address: EvmAddress, token_id: int) -> None:
        self._send(
            self.contract.functions.transferFrom(_checksum(from_address), _checksum(to_address), token_id),
            operator,
        )


class RpcChain(Chain):
    """Chain backed by a JSON-RPC node.

    Transfers are sent with ``eth_sendTransaction``, so the accounts involved
    (including the ledger address) must be managed by the node.
    """

    def __init__(self, endpoint_url: str, timeout: int = 30):
        self.endpoint_url = endpoint_url
        self.w3 = Web3(Web3.HTTPProvider(endpoint_url, request_kwargs={'timeout': timeout}))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to RPC endpoint {endpoint_url}")

        self._chain_id = self.w3.eth.chain_id

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def block_number(self) -> int:
        return self.w3.eth.block_number

    def block_timestamp(self) -> int:
        return self.w3.eth.get_block('latest')['timestamp']

    def erc20(self, address: EvmAddress) -> Web3ERC20:
        return Web3ERC20(self.w3, address)

    def position_manager(self, address: EvmAddress) -> Web3PositionManager:
        return Web3PositionManager(self.w3, address)
