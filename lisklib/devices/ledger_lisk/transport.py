"""Transport to send APDUs to a Ledger device over USB HID or to the Speculos emulator over TCP."""

import logging
from typing import Optional

from ledgercomm import Transport

from ...errors import BadArgumentError, DeviceConnectionError

LOG = logging.getLogger(__name__)

LEDGER_VENDOR_ID = 0x2C97
SW_OK = 0x9000
MAX_APDU_DATA = 0xFF

INTERFACES = ("hid", "tcp")


class ApduException(Exception):
    """Raised when the device answers an APDU with a status word other than 0x9000."""

    def __init__(self, sw: int, data: bytes = b"") -> None:
        super().__init__(f"Exception: invalid status 0x{sw:04x}")
        self.sw = sw
        self.data = data


class LedgerTransport:
    """Send structured APDUs with :class:`ledgercomm.Transport` and return the response data.

    Parameters
    ----------
    interface : str
        Either "hid" or "tcp" for the underlying communication interface.
    server : str
        IP adress of the TCP server if interface is "tcp".
    port : int
        Port of the TCP server if interface is "tcp".
    hid_path : Optional[bytes]
        HID path of the device if interface is "hid". The first Ledger found is used otherwise.
    debug : bool
        Whether you want debug logs or not.
    """

    def __init__(self,
                 interface: str = "hid",
                 server: str = "127.0.0.1",
                 port: int = 9999,
                 hid_path: Optional[bytes] = None,
                 debug: bool = False) -> None:
        if interface not in INTERFACES:
            raise BadArgumentError(f"Unknown interface '{interface}'!")

        try:
            self.transport = Transport(interface=interface, server=server, port=port, hid_path=hid_path, debug=debug)
        except AssertionError as e:
            # ledgercomm asserts that at least one HID device was found
            raise DeviceConnectionError(f"Can't find Ledger device with vendor_id {hex(LEDGER_VENDOR_ID)}") from e

        self.interface = interface
        self.scramble_key: Optional[str] = None

    def set_scramble_key(self, key: str) -> None:
        """Record the application scramble key.

        Only U2F transports scramble APDUs; HID and TCP send them in clear.
        """
        LOG.debug("Scramble key set to %r", key)
        self.scramble_key = key

    def send(self, cla: int, ins: int, p1: int = 0, p2: int = 0, data: bytes = b"") -> bytes:
        """Send an APDU and wait for the response.

        :return: The response data without the status word
        :raises: ApduException: if the status word is not 0x9000
        """
        if len(data) > MAX_APDU_DATA:
            raise BadArgumentError(f"APDU data cannot exceed {MAX_APDU_DATA} bytes, got {len(data)}")

        sw, rdata = self.transport.exchange(cla=cla, ins=ins, p1=p1, p2=p2, cdata=data)

        if sw != SW_OK:
            raise ApduException(sw, rdata)

        return rdata

    def close(self) -> None:
        self.transport.close()
