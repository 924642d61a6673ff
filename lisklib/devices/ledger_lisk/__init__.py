"""Ledger Lisk app client"""

from .client import LiskLedger, PublicKey, AppVersion
from .exchange import ChunkedExchange
from .response import decompose_response
from .transport import ApduException, LedgerTransport

__all__ = ["LiskLedger", "PublicKey", "AppVersion", "ChunkedExchange", "decompose_response", "ApduException", "LedgerTransport"]
