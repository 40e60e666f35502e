# sponsored_farm/utils/addresses.py

from typing import Optional

from web3 import Web3

from ..types.constants import ZERO_ADDRESS, MAX_UINT256
from ..types.new import EvmAddress
from ..types.model.errors import InvalidArgument


def is_null_address(value: Optional[str]) -> bool:
    return value is None or str(value).lower() == ZERO_ADDRESS


def normalize_address(value: str, label: str = "address") -> EvmAddress:
    """Lower-case a 20-byte hex address, rejecting anything malformed."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise InvalidArgument(f"Invalid {label}", value=value)
    return EvmAddress(value.lower())


def same_address(left: Optional[str], right: Optional[str]) -> bool:
    if left is None or right is None:
        return False
    return left.lower() == right.lower()


def require_uint256(value: int, label: str = "amount") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"Invalid {label}", value=value)
    if value < 0 or value > MAX_UINT256:
        raise InvalidArgument(f"Invalid {label}", value=value)
    return value
