"""
Common Classes and Utilities
****************************
"""

import binascii

from enum import IntEnum


class SupportedCoin(IntEnum):
    """
    SLIP-0044 coin types the device app can derive keys for
    """
    LISK = 134 #: Lisk, https://lisk.com

    def __str__(self) -> str:
        return str(self.name).lower()

    def __repr__(self) -> str:
        return str(self)


def crc16(data: bytes) -> int:
    """
    Compute the 16 bit CRC-CCITT (polynomial 0x1021, initial value 0xFFFF) of some data.
    This is the checksum the device app uses to acknowledge each chunk it receives.

    :param data: Bytes to checksum
    :return: The checksum
    """
    return binascii.crc_hqx(data, 0xFFFF)
