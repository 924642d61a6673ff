from typing import List, Optional, Union

from typing_extensions import TypedDict

from ...errors import ConfigurationError, LivenessError, ProtocolError
from ...progress import ProgressListener
from .command_builder import AccountLike, LiskCommandBuilder, LiskInsType
from .exchange import MAX_CHUNK_SIZE, ChunkedExchange, ExchangeData

SCRAMBLE_KEY = "hirishh"


class PublicKey(TypedDict):
    public_key: str
    address: str
    lisk32: str


class AppVersion(TypedDict):
    version: str
    coin_id: str


class LiskLedger:
    """Client for the Lisk application running on a Ledger device.

    Accounts can be given as a :class:`~lisklib.account.LedgerAccount`, an account
    number, or a serialized derivation path.

    .. code-block:: python

        with LiskLedger(LedgerTransport("hid")) as client:
            print(client.get_pub_key(LedgerAccount(0))["lisk32"])

    :param transport: Transport used to reach the device, see :class:`~lisklib.devices.ledger_lisk.transport.LedgerTransport`
    :param chunk_size: Number of payload bytes per APDU. Do not change it unless the app requires it.
    """

    def __init__(self, transport, chunk_size: int = MAX_CHUNK_SIZE) -> None:
        if transport is None:
            raise ConfigurationError("Transport cannot be empty")
        self.exchanger = ChunkedExchange(transport, chunk_size)
        self.transport = transport
        self.builder = LiskCommandBuilder()
        transport.set_scramble_key(SCRAMBLE_KEY)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.transport.close()

    @property
    def progress_listener(self) -> ProgressListener:
        return self.exchanger.progress_listener

    @progress_listener.setter
    def progress_listener(self, listener: Optional[ProgressListener]) -> None:
        self.exchanger.progress_listener = listener

    def _request(self, payload: bytes, ins: LiskInsType, n_fields: int) -> List[bytes]:
        fields = self.exchange(payload)
        if len(fields) < n_fields:
            raise ProtocolError(f"{ins.name} expected {n_fields} fields in response, got {len(fields)}")
        return fields

    def get_pub_key(self, account: AccountLike, show_on_device: bool = False) -> PublicKey:
        """Retrieve the public key of an account.

        :param account: The account, or a serialized derivation path
        :param show_on_device: Ask the device to display the address for confirmation
        :return: The hex encoded public key and address, and the Lisk32 encoded address
        """
        public_key, address, lisk32 = self._request(
            self.builder.get_pub_key(account, show_on_device), LiskInsType.GET_PUBLIC_KEY, 3)[:3]

        return {
            "public_key": public_key.hex(),
            "address": address.hex(),
            "lisk32": lisk32.decode("utf-8", errors="replace"),
        }

    def sign_tx(self, account: AccountLike, tx: bytes) -> bytes:
        """Sign a transaction.

        :param account: The account, or a serialized derivation path
        :param tx: The signing bytes of the transaction
        :return: The signature
        """
        return self._request(self.builder.sign_tx(account, tx), LiskInsType.SIGN_TX, 1)[0]

    def sign_msg(self, account: AccountLike, message: Union[str, bytes]) -> bytes:
        """Sign a message. Strings are UTF-8 encoded first.

        Messages with non printable characters may not display correctly on the device.

        :param account: The account, or a serialized derivation path
        :param message: The message to sign
        :return: The signature
        """
        return self._request(self.builder.sign_msg(account, message), LiskInsType.SIGN_MSG, 1)[0]

    def version(self) -> AppVersion:
        """Get the version of the app and the coin it was built for."""
        version, coin_id = self._request(self.builder.get_version(), LiskInsType.GET_VERSION, 2)[:2]
        return {
            "version": version.decode("ascii", errors="replace"),
            "coin_id": coin_id.decode("ascii", errors="replace"),
        }

    def ping(self) -> None:
        """Check that the app answers. Returns normally if it did."""
        fields = self.exchange(self.builder.ping())
        if not fields or fields[0] != b"PONG":
            raise LivenessError("Did not receive PONG")

    def exchange(self, data: ExchangeData) -> List[bytes]:
        """Raw exchange with the app. Meant for internal usage.

        :param data: The payload, as bytes, a hex string, an int, or a sequence of those
        :return: The fields of the response
        """
        return self.exchanger.exchange(data)
