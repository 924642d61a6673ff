"""
Devices
*******

This module contains the device implementations.
:mod:`~lisklib.devices.ledger` wraps the protocol client in :mod:`~lisklib.devices.ledger_lisk`.
"""

__all__ = [
    'ledger',
]
