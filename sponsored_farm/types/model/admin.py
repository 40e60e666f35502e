# sponsored_farm/types/model/admin.py

from ..new import EvmAddress
from .base import LedgerEvent


class Initialized(LedgerEvent, tag=True, kw_only=True):
    version: int
    owner: EvmAddress
    position_manager: EvmAddress

class OwnershipTransferred(LedgerEvent, tag=True, kw_only=True):
    previous_owner: EvmAddress
    new_owner: EvmAddress
