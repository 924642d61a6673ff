"""
Accounts and Derivation Paths
*****************************

Classes and utilities for addressing an account on the device with a hardened BIP 44 derivation path.
"""

from dataclasses import dataclass, replace
from typing import Any, List

from .common import SupportedCoin
from .errors import InvalidPathError


HARDENED_FLAG = 1 << 31
BIP44_PURPOSE = 44


def H_(x: int) -> int:
    """
    Shortcut function that "hardens" a number in a BIP44 path.
    """
    return x | HARDENED_FLAG

def is_hardened(i: int) -> bool:
    """
    Returns whether an index is hardened
    """
    return i & HARDENED_FLAG != 0


def assert_valid_index(n: Any) -> None:
    """
    Check that ``n`` can be used as an element of a hardened derivation path.

    :param n: The candidate path element
    :raises: InvalidPathError: if ``n`` is not an integer, is negative, or is too large to be hardened
    """
    # bool is an int subclass but never a meaningful index
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidPathError("Param must be an integer")
    if n < 0:
        raise InvalidPathError("Param must be greater than zero")
    if n >= HARDENED_FLAG:
        raise InvalidPathError(f"Param must be lower than {HARDENED_FLAG}")


def serialize_path(path: List[int]) -> bytes:
    """
    Serialize a list of path elements as concatenated 4 byte big endian words.

    e.g.: [0x8000002c, 0x80000086, 0x80000000] -> 8000002c8000008680000000
    """
    return b"".join(i.to_bytes(4, byteorder="big") for i in path)


@dataclass(frozen=True)
class LedgerAccount:
    """
    An account used to query the device, addressed by the path ``m/44'/<coin_index>'/<account>'``.

    The coin index is fixed to :data:`~lisklib.common.SupportedCoin.LISK`.
    Other values are validated but then replaced, as the device app only derives Lisk keys.
    """
    account: int = 0
    coin_index: int = SupportedCoin.LISK

    def __post_init__(self) -> None:
        assert_valid_index(self.account)
        assert_valid_index(self.coin_index)
        object.__setattr__(self, "coin_index", SupportedCoin.LISK)

    def with_account(self, account: int) -> "LedgerAccount":
        """
        Get a copy of this account with a different account number.

        :param account: The account number
        :return: The new account
        """
        return replace(self, account=account)

    def with_coin_index(self, coin_index: int) -> "LedgerAccount":
        """
        Get a copy of this account with a different coin index.
        The index is validated, but the resulting account always uses Lisk.

        :param coin_index: The SLIP-0044 coin index
        :return: The new account
        """
        return replace(self, coin_index=coin_index)

    @property
    def path(self) -> List[int]:
        return [H_(BIP44_PURPOSE), H_(self.coin_index), H_(self.account)]

    def derive_path(self) -> bytes:
        """
        Derive the path using hardened entries.

        :return: The path serialized as 4 byte big endian words, 12 bytes in total
        """
        return serialize_path(self.path)

    def to_string(self) -> str:
        return "m/{}'/{}'/{}'".format(BIP44_PURPOSE, int(self.coin_index), self.account)


def derive_path(account: int) -> bytes:
    """
    Derive the serialized path for an account number.

    :param account: The account number
    :return: The 12 byte path ``44'/134'/account'``
    :raises: InvalidPathError: if the account number is not valid
    """
    return LedgerAccount(account).derive_path()
