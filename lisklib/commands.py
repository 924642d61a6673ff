#! /usr/bin/env python3

"""
Commands
********

The functions in this module are the primary way to interact with a device running the Lisk app.
Each function that takes a ``client`` uses a :class:`~lisklib.devices.ledger.LedgerClient`.
The functions then call public members of that client and return JSON serializable dictionaries.

Clients can be constructed using :func:`~find_device` or :func:`~get_client`.

The :func:`~enumerate` function returns information about what devices are available to be connected to.
"""

from typing import (
    Any,
    Dict,
    List,
    Optional,
    Union,
)

from .account import LedgerAccount
from .devices import ledger
from .devices.ledger import LedgerClient
from .devices.ledger_lisk.exchange import MAX_CHUNK_SIZE
from .errors import BadArgumentError


def get_client(device_path: str, chunk_size: int = MAX_CHUNK_SIZE) -> LedgerClient:
    """
    Returns a LedgerClient for the device at the device path

    :param device_path: The path specifying where the device can be accessed as returned by :func:`~enumerate`
    :param chunk_size: Number of payload bytes sent per APDU
    :return: A :class:`~lisklib.devices.ledger.LedgerClient` to interact with the device
    """
    return LedgerClient(device_path, chunk_size)

def enumerate(allow_emulators: bool = False) -> List[Dict[str, Any]]:
    """
    Enumerate all of the devices that can potentially be accessed.

    :param allow_emulators: Whether to look for the emulator too
    :return: A list of devices for which clients can be created for.
    """
    return ledger.enumerate(allow_emulators)

def find_device(allow_emulators: bool = False, chunk_size: int = MAX_CHUNK_SIZE) -> Optional[LedgerClient]:
    """
    Get a client for the first device that answered enumeration without an error.
    This is used as an alternative to :func:`~get_client` if the device path is not known.

    :param allow_emulators: Whether to look for the emulator too
    :param chunk_size: Number of payload bytes sent per APDU
    :return: A client, or None if no usable device was found
    """
    for d in enumerate(allow_emulators):
        if 'error' in d or d.get('app_open') is False:
            continue
        return get_client(d['path'], chunk_size)
    return None

def getpubkey(client: LedgerClient, account: int = 0, display: bool = False) -> Dict[str, str]:
    """
    Get the public key and addresses of an account.

    :param client: The client to interact with
    :param account: The account number
    :param display: Whether to show the address on the device
    :return: A dictionary containing the ``public_key``, ``address`` and ``lisk32`` address.
        Returned as ``{"public_key": <hex>, "address": <hex>, "lisk32": <address>, "path": <path>}``.
    """
    acc = LedgerAccount(account)
    result: Dict[str, str] = dict(client.get_pub_key(acc, display))
    result['path'] = acc.to_string()
    return result

def signtx(client: LedgerClient, tx: Union[str, bytes], account: int = 0) -> Dict[str, str]:
    """
    Sign a transaction.

    :param client: The client to interact with
    :param tx: The signing bytes of the transaction, or their hex encoding
    :param account: The account number
    :return: A dictionary containing the signature.
        Returned as ``{"signature": <hex>}``.
    """
    if isinstance(tx, str):
        try:
            tx = bytes.fromhex(tx)
        except ValueError:
            raise BadArgumentError('Transaction must be hex encoded')
    return {"signature": client.sign_tx(LedgerAccount(account), tx).hex()}

def signmessage(client: LedgerClient, message: Union[str, bytes], account: int = 0) -> Dict[str, str]:
    """
    Sign a message.

    :param client: The client to interact with
    :param message: The message to sign
    :param account: The account number
    :return: A dictionary containing the signature.
        Returned as ``{"signature": <hex>}``.
    """
    return {"signature": client.sign_message(LedgerAccount(account), message).hex()}

def getversion(client: LedgerClient) -> Dict[str, str]:
    """
    Get the version of the app.

    :return: Returned as ``{"version": <version>, "coin_id": <coin>}``.
    """
    return dict(client.get_version())

def ping(client: LedgerClient) -> Dict[str, bool]:
    """
    Check the app answers.

    :return: ``{"success": True}``
    """
    client.ping()
    return {"success": True}
