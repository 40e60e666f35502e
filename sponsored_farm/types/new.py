# sponsored_farm/types/new.py

from typing import NewType


EvmAddress = NewType('EvmAddress', str)
HexStr = NewType('HexStr', str)
EventContentId = NewType('EventContentId', str)
