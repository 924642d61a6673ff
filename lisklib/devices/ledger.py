"""
Ledger Devices
**************
"""

from functools import wraps
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Union,
)

import logging

import hid

from ..account import LedgerAccount
from ..errors import (
    ActionCanceledError,
    BadArgumentError,
    DeviceConnectionError,
    DeviceFailureError,
    UnknownDeviceError,
    common_err_msgs,
    handle_errors,
)
from ..progress import LoggingProgressListener
from .ledger_lisk.client import AppVersion, LiskLedger, PublicKey
from .ledger_lisk.exchange import MAX_CHUNK_SIZE
from .ledger_lisk.transport import ApduException, LedgerTransport, LEDGER_VENDOR_ID

SIMULATOR_PATH = 'tcp:127.0.0.1:9999'

LEDGER_MODEL_IDS = {
    0x10: "ledger_nano_s",
    0x40: "ledger_nano_x",
    0x50: "ledger_nano_s_plus",
    0x60: "ledger_stax",
    0x70: "ledger_flex"
}
LEDGER_LEGACY_PRODUCT_IDS = {
    0x0001: "ledger_nano_s",
    0x0004: "ledger_nano_x"
}

bad_args = [
    0x6700, # SW_WRONG_LENGTH
    0x6A80, # SW_INCORRECT_DATA
    0x6B00, # SW_WRONG_P1_P2
    0x6D00, # SW_INS_NOT_SUPPORTED
]

cancels = [
    0x6982, # SW_SECURITY_STATUS_NOT_SATISFIED
    0x6985, # SW_CONDITIONS_OF_USE_NOT_SATISFIED
]

# Status words the dashboard returns when the Lisk app is not open
app_not_open = [
    0x6E00, # SW_CLA_NOT_SUPPORTED
    0x6E01,
    0x6D02,
    0x6511,
]

def handle_apdu_exception(e: ApduException, func_name: str) -> None:
    if e.sw in bad_args:
        raise BadArgumentError('Bad argument')
    elif e.sw == 0x6F00:
        raise DeviceFailureError('Technical problem: {}'.format(e))
    elif e.sw == 0x6FAA:
        raise DeviceConnectionError('Device is asleep')
    elif e.sw in cancels:
        raise ActionCanceledError('{} canceled'.format(func_name))
    elif e.sw in app_not_open:
        raise UnknownDeviceError('Lisk app is not open on the device')
    else:
        raise e

def ledger_exception(f: Callable[..., Any]) -> Any:
    @wraps(f)
    def func(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ApduException as e:
            handle_apdu_exception(e, f.__name__)
    return func


def open_transport(path: str, debug: bool = False) -> LedgerTransport:
    """
    Open the transport for a device path as returned by :func:`enumerate`.

    :param path: ``tcp:<host>:<port>`` for the emulator, a HID path otherwise
    :param debug: Whether to log the APDUs exchanged
    """
    if path.startswith('tcp'):
        split_path = path.split(':')
        if len(split_path) != 3 or not split_path[2].isdigit():
            raise BadArgumentError('Emulator path must look like tcp:<host>:<port>')
        return LedgerTransport(interface="tcp", server=split_path[1], port=int(split_path[2]), debug=debug)
    return LedgerTransport(interface="hid", hid_path=path.encode(), debug=debug)


class LedgerClient(object):
    """Client for a Ledger device running the Lisk app.

    Status words returned by the device are translated to :class:`~lisklib.errors.LiskLedgerError` subclasses.

    :param path: Path to the device as returned by :func:`enumerate`
    :param chunk_size: Number of payload bytes sent per APDU
    """

    def __init__(self, path: str, chunk_size: int = MAX_CHUNK_SIZE) -> None:
        self.path = path

        is_debug = logging.getLogger().getEffectiveLevel() == logging.DEBUG

        try:
            self.transport_client = open_transport(path, debug=is_debug)
        except (OSError, IOError) as e:
            raise DeviceConnectionError('Could not open {}: {}'.format(path, e))

        self.client = LiskLedger(self.transport_client, chunk_size)
        if is_debug:
            self.client.progress_listener = LoggingProgressListener()

    @ledger_exception
    def get_pub_key(self, account: Union[LedgerAccount, int, bytes], display: bool = False) -> PublicKey:
        return self.client.get_pub_key(account, display)

    @ledger_exception
    def sign_tx(self, account: Union[LedgerAccount, int, bytes], tx: bytes) -> bytes:
        return self.client.sign_tx(account, tx)

    @ledger_exception
    def sign_message(self, account: Union[LedgerAccount, int, bytes], message: Union[str, bytes]) -> bytes:
        return self.client.sign_msg(account, message)

    @ledger_exception
    def get_version(self) -> AppVersion:
        return self.client.version()

    @ledger_exception
    def ping(self) -> None:
        self.client.ping()

    def close(self) -> None:
        self.client.close()


def enumerate(allow_emulators: bool = False) -> List[Dict[str, Any]]:
    """
    List the Ledger devices that can be reached.

    Devices answering with the Lisk app also report the app version and coin.

    :param allow_emulators: Whether to also look for the Speculos emulator at :data:`SIMULATOR_PATH`
    """
    results = []
    devices = []
    devices.extend(hid.enumerate(LEDGER_VENDOR_ID, 0))
    if allow_emulators:
        devices.append({'path': SIMULATOR_PATH.encode(), 'interface_number': 0, 'product_id': 0x1000})

    for d in devices:
        if ('interface_number' in d and d['interface_number'] == 0
                or ('usage_page' in d and d['usage_page'] == 0xffa0)):
            d_data: Dict[str, Any] = {}

            path = d['path'].decode()
            d_data['type'] = 'ledger'
            model = d['product_id'] >> 8
            if model in LEDGER_MODEL_IDS.keys():
                d_data['model'] = LEDGER_MODEL_IDS[model]
            elif d['product_id'] in LEDGER_LEGACY_PRODUCT_IDS.keys():
                d_data['model'] = LEDGER_LEGACY_PRODUCT_IDS[d['product_id']]
            else:
                continue
            d_data['path'] = path

            if path == SIMULATOR_PATH:
                d_data['model'] += '_simulator'

            client: Optional[LedgerClient] = None
            with handle_errors(common_err_msgs["enumerate"], d_data):
                try:
                    client = LedgerClient(path)
                    d_data.update(client.get_version())
                except DeviceConnectionError:
                    # Ignore simulator if it can't be reached, means it isn't there
                    if path == SIMULATOR_PATH:
                        if client:
                            client.close()
                        continue
                    raise
                except UnknownDeviceError:
                    # The Lisk app is not open, the device is still listed
                    d_data['app_open'] = False

            if client:
                client.close()

            results.append(d_data)

    return results
