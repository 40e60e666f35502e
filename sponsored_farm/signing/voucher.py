# sponsored_farm/signing/voucher.py

"""
EIP-712 harvest vouchers.

The signable payload is ``Harvest(uint256 tokenId, uint256 farmId,
uint256 totalClaimable, uint256 blockNumber)`` under a domain bound to the
ledger address and chain id, so a voucher cannot be replayed against
another ledger or chain.
"""

import logging
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from msgspec import Struct
from web3 import Web3

from ..core.logging import FarmLogger, log_with_context
from ..types.constants import DEFAULT_DOMAIN_NAME, DEFAULT_DOMAIN_VERSION
from ..types.model.rewards import HarvestParams
from ..types.new import EvmAddress, HexStr


logger = FarmLogger.get_logger('signing.voucher')

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

HARVEST_TYPE = [
    {"name": "tokenId", "type": "uint256"},
    {"name": "farmId", "type": "uint256"},
    {"name": "totalClaimable", "type": "uint256"},
    {"name": "blockNumber", "type": "uint256"},
]


class VoucherDomain(Struct, frozen=True):
    chain_id: int
    verifying_contract: EvmAddress
    name: str = DEFAULT_DOMAIN_NAME
    version: str = DEFAULT_DOMAIN_VERSION

    def to_eip712(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": Web3.to_checksum_address(self.verifying_contract),
        }


def harvest_typed_data(domain: VoucherDomain, token_id: int, farm_id: int,
                       total_claimable: int, block_number: int) -> Dict[str, Any]:
    return {
        "types": {
            "EIP712Domain": EIP712_DOMAIN_TYPE,
            "Harvest": HARVEST_TYPE,
        },
        "primaryType": "Harvest",
        "domain": domain.to_eip712(),
        "message": {
            "tokenId": token_id,
            "farmId": farm_id,
            "totalClaimable": total_claimable,
            "blockNumber": block_number,
        },
    }


def encode_voucher(domain: VoucherDomain, voucher: HarvestParams) -> SignableMessage:
    return encode_typed_data(full_message=harvest_typed_data(
        domain, voucher.token_id, voucher.farm_id, voucher.total_claimable, voucher.block_number
    ))


def _signature_bytes(signature: str) -> bytes:
    if signature.startswith(("0x", "0X")):
        signature = signature[2:]
    return bytes.fromhex(signature)


def recover_voucher_signer(domain: VoucherDomain, voucher: HarvestParams) -> Optional[EvmAddress]:
    """Recover the account that signed ``voucher``; None for unusable signatures."""
    try:
        signable = encode_voucher(domain, voucher)
        recovered = Account.recover_message(signable, signature=_signature_bytes(voucher.signature))
    except Exception as e:
        log_with_context(logger, logging.DEBUG, "Voucher signature could not be recovered",
                         token_id=voucher.token_id, farm_id=voucher.farm_id,
                         error=str(e), error_type=type(e).__name__)
        return None
    return EvmAddress(recovered.lower())


def verify_voucher(domain: VoucherDomain, voucher: HarvestParams, expected_signer: str) -> bool:
    recovered = recover_voucher_signer(domain, voucher)
    return recovered is not None and recovered == expected_signer.lower()


class VoucherSigner:
    """Off-chain issuer of cumulative harvest vouchers."""

    def __init__(self, private_key: str, domain: VoucherDomain):
        self._account = Account.from_key(private_key)
        self.domain = domain

    @property
    def address(self) -> EvmAddress:
        return EvmAddress(self._account.address.lower())

    def sign(self, token_id: int, farm_id: int, total_claimable: int, block_number: int) -> HarvestParams:
        signable = encode_typed_data(full_message=harvest_typed_data(
            self.domain, token_id, farm_id, total_claimable, block_number
        ))
        signed = self._account.sign_message(signable)
        return HarvestParams(
            token_id=token_id,
            farm_id=farm_id,
            total_claimable=total_claimable,
            block_number=block_number,
            signature=HexStr("0x" + bytes(signed.signature).hex()),
        )
