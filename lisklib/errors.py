"""
Errors and Error Codes
**********************

lisklib has several possible Exceptions with corresponding error codes.

:class:`~lisklib.devices.ledger_lisk.client.LiskLedger` methods and :mod:`~lisklib.commands` functions
will generally raise an exception that is a subclass of :class:`LiskLedgerError`.
The command line tool will convert these exceptions into a dictionary containing the error message and error code.
These look like ``{"error": "<msg>", "code": <code>}``.
"""

from typing import Any, Dict, Iterator, Optional
from contextlib import contextmanager

# Error codes
NO_DEVICE_FOUND = -1 #: No device path given and none could be enumerated
MISSING_ARGUMENTS = -2 #: Arguments are missing
DEVICE_CONN_ERROR = -3 #: Error connecting to the device
UNKNWON_DEVICE_TYPE = -4 #: Device is not running a supported app
CONFIGURATION_ERROR = -5 #: Client or exchange was constructed with bad arguments
INVALID_PATH = -6 #: Account index cannot be turned into a derivation path
BAD_ARGUMENT = -7 #: Bad, malformed, or conflicting argument was provided
PROTOCOL_ERROR = -8 #: Device answered out of sequence or with an unexpected shape
INTEGRITY_ERROR = -9 #: Chunk checksum chain did not verify
PAYLOAD_TOO_LARGE = -10 #: Payload exceeds what the device app accepts
MALFORMED_RESPONSE = -11 #: Response buffer could not be decomposed
LIVENESS_ERROR = -12 #: Device did not answer a ping with PONG
UNKNOWN_ERROR = -13 #: An unknown error occurred
ACTION_CANCELED = -14 #: Action was canceled by the user
HELP_TEXT = -17 #: Help text was requested by the user

# Exceptions
class LiskLedgerError(Exception):
    """
    Generic exception type produced by lisklib
    Subclassed by specific Errors to have Exceptions that have specific error codes.

    Contains a message and error code.
    """
    def __init__(self, msg: str, code: int) -> None:
        """
        Create an exception with the message and error code

        :param msg: The error message
        :param code: The error code
        """
        Exception.__init__(self, msg)
        self.code = code
        self.msg = msg

    def get_code(self) -> int:
        """
        Get the error code for this Error

        :return: The error code
        """
        return self.code

    def get_msg(self) -> str:
        """
        Get the error message for this Error

        :return: The error message
        """
        return self.msg

    def __str__(self) -> str:
        return self.msg

class ConfigurationError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`CONFIGURATION_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, CONFIGURATION_ERROR)

class InvalidPathError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`INVALID_PATH`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, INVALID_PATH)

class ProtocolError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`PROTOCOL_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, PROTOCOL_ERROR)

class IntegrityError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`INTEGRITY_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, INTEGRITY_ERROR)

class PayloadTooLargeError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`PAYLOAD_TOO_LARGE`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, PAYLOAD_TOO_LARGE)

class MalformedResponseError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`MALFORMED_RESPONSE`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, MALFORMED_RESPONSE)

class LivenessError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`LIVENESS_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, LIVENESS_ERROR)

class UnknownDeviceError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`UNKNWON_DEVICE_TYPE`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, UNKNWON_DEVICE_TYPE)

class BadArgumentError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`BAD_ARGUMENT`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, BAD_ARGUMENT)

class DeviceFailureError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`UNKNOWN_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, UNKNOWN_ERROR)

class ActionCanceledError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`ACTION_CANCELED`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, ACTION_CANCELED)

class DeviceConnectionError(LiskLedgerError):
    """
    :class:`LiskLedgerError` for :data:`DEVICE_CONN_ERROR`
    """
    def __init__(self, msg: str):
        LiskLedgerError.__init__(self, msg, DEVICE_CONN_ERROR)

@contextmanager
def handle_errors(
    msg: Optional[str] = None,
    result: Optional[Dict[str, Any]] = None,
    code: int = UNKNOWN_ERROR,
    debug: bool = False,
) -> Iterator[None]:
    """
    Context manager to catch all Exceptions and LiskLedgerErrors to return them as dictionaries containing the error message and code.

    :param msg: Error message prefix. Attached to the beginning of each error message
    :param result: The dictionary to put the resulting error in
    :param code: The default error code to use for Exceptions
    :param debug: Whether to also print out the traceback for debugging purposes
    """
    if result is None:
        result = {}

    if msg is None:
        msg = ""
    else:
        msg = msg + " "

    try:
        yield

    except LiskLedgerError as e:
        result['error'] = msg + e.get_msg()
        result['code'] = e.get_code()
    except Exception as e:
        result['error'] = msg + str(e)
        result['code'] = code
        if debug:
            import traceback
            traceback.print_exc()


common_err_msgs = {
    "enumerate": "Could not open client or get app information:"
}
