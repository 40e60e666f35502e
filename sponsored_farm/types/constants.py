# sponsored_farm/types/constants.py

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2**256 - 1

DEFAULT_DOMAIN_NAME = "RabbitSponsoredFarm"
DEFAULT_DOMAIN_VERSION = "1"

INITIALIZED_VERSION = 1
