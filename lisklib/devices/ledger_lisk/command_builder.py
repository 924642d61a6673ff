import enum
from typing import Union

from ...account import LedgerAccount
from ...errors import InvalidPathError, PayloadTooLargeError

AccountLike = Union[LedgerAccount, int, bytes]

MAX_DATA_LENGTH = 0xFFFF


class ExchangeInsType(enum.IntEnum):
    START = 89
    APPEND = 90
    FINALIZE = 91


class LiskInsType(enum.IntEnum):
    GET_PUBLIC_KEY = 0x04
    SIGN_TX = 0x05
    SIGN_MSG = 0x06
    PING = 0x08
    GET_VERSION = 0x09


def path_buffer(account: AccountLike) -> bytes:
    """Get the serialized derivation path for ``account``.

    A :class:`~lisklib.account.LedgerAccount` or an account number is derived with
    the standard Lisk path. Bytes are taken as an already serialized path and
    sent unchanged, which allows signing with custom paths.
    """
    if isinstance(account, (bytes, bytearray)):
        if len(account) == 0 or len(account) % 4 != 0:
            raise InvalidPathError(f"Serialized path must be a non-empty multiple of 4 bytes, got {len(account)}")
        return bytes(account)
    if isinstance(account, LedgerAccount):
        return account.derive_path()
    return LedgerAccount(account).derive_path()


class LiskCommandBuilder:
    """Payload builder for the Lisk application.

    Payloads are not sent as a single APDU: they are streamed with
    :class:`~lisklib.devices.ledger_lisk.exchange.ChunkedExchange` and the
    leading byte tells the app which command to run.
    """

    CLA: int = 0xE0

    def get_pub_key(self, account: AccountLike, display: bool = False) -> bytes:
        path = path_buffer(account)

        return b"".join([
            bytes([LiskInsType.GET_PUBLIC_KEY]),
            b'\1' if display else b'\0',
            (len(path) // 4).to_bytes(1, byteorder="big"),
            path,
        ])

    def sign(self, sign_type: Union[int, LiskInsType], account: AccountLike, data: bytes) -> bytes:
        path = path_buffer(account)

        if len(data) > MAX_DATA_LENGTH:
            raise PayloadTooLargeError(f"Cannot sign more than {MAX_DATA_LENGTH} bytes, got {len(data)}")

        return b"".join([
            bytes([sign_type]),
            (len(path) // 4).to_bytes(1, byteorder="big"),   # 1 byte
            path,                                           # 4 bytes per element
            len(data).to_bytes(2, byteorder="big"),         # 2 bytes
            data,
        ])

    def sign_tx(self, account: AccountLike, tx: bytes) -> bytes:
        return self.sign(LiskInsType.SIGN_TX, account, tx)

    def sign_msg(self, account: AccountLike, message: Union[str, bytes]) -> bytes:
        if isinstance(message, str):
            message = message.encode("utf-8")
        return self.sign(LiskInsType.SIGN_MSG, account, message)

    def ping(self) -> bytes:
        return bytes([LiskInsType.PING])

    def get_version(self) -> bytes:
        return bytes([LiskInsType.GET_VERSION])
