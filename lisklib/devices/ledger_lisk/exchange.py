"""Chunked transfer of payloads to the Lisk application.

The app receives a payload in three steps:

1. START announces the total length, which the app echoes back.
2. APPEND is sent once per chunk. The app answers with the CRC of the chunk it
   just received and the CRC of the chunk before it (0 for the first chunk),
   so the host can detect corrupted, dropped or reordered chunks.
3. FINALIZE runs the command the payload encodes and returns its response.
"""

import logging
from typing import List, Optional, Sequence, Union

from ...common import crc16
from ...errors import (
    BadArgumentError,
    ConfigurationError,
    IntegrityError,
    PayloadTooLargeError,
    ProtocolError,
)
from ...progress import ProgressListener
from .command_builder import ExchangeInsType, LiskCommandBuilder
from .response import decompose_response, read_u16_field
from .transport import ApduException

LOG = logging.getLogger(__name__)

MAX_CHUNK_SIZE = 240
MAX_PAYLOAD_LENGTH = 0xFFFF
SW_PAYLOAD_TOO_BIG = 0x6803

ExchangeItem = Union[bytes, bytearray, str, int]
ExchangeData = Union[ExchangeItem, Sequence[ExchangeItem]]


def to_bytes(item: ExchangeItem) -> bytes:
    """Coerce a single payload element: hex strings are decoded, ints become one byte, bytes pass through."""
    if isinstance(item, str):
        try:
            return bytes.fromhex(item)
        except ValueError as e:
            raise BadArgumentError(f"Invalid hex string '{item}'") from e
    if isinstance(item, int):
        if not 0 <= item <= 0xFF:
            raise BadArgumentError(f"Integer {item} does not fit in a single byte")
        return bytes([item])
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise BadArgumentError(f"Cannot send value of type {type(item).__name__}")


def normalize_payload(data: ExchangeData) -> bytes:
    if isinstance(data, (str, int, bytes, bytearray, memoryview)):
        return to_bytes(data)
    return b"".join(to_bytes(item) for item in data)


def chunkify(data: bytes, chunk_len: int) -> List[bytes]:
    return [data[offset:offset + chunk_len] for offset in range(0, len(data), chunk_len)]


class ChunkedExchange:
    """Stream payloads to the device and return its decomposed response.

    :param transport: Object with a ``send(cla, ins, p1, p2, data)`` method returning the response data
    :param chunk_size: Maximum number of payload bytes per APDU, between 1 and 240
    :param progress_listener: Notified of the progress of each exchange
    """

    def __init__(self, transport, chunk_size: int = MAX_CHUNK_SIZE, progress_listener: Optional[ProgressListener] = None) -> None:
        if chunk_size > MAX_CHUNK_SIZE:
            raise ConfigurationError(f"Chunk size cannot exceed {MAX_CHUNK_SIZE}")
        if chunk_size < 1:
            raise ConfigurationError("Chunk size cannot be less than 1")
        if transport is None:
            raise ConfigurationError("Transport cannot be empty")

        self.transport = transport
        self.chunk_size = chunk_size
        self.progress_listener = progress_listener

    @property
    def progress_listener(self) -> ProgressListener:
        return self._progress_listener

    @progress_listener.setter
    def progress_listener(self, listener: Optional[ProgressListener]) -> None:
        self._progress_listener = listener if listener is not None else ProgressListener()

    def _send(self, ins: ExchangeInsType, data: Optional[bytes] = None) -> bytes:
        if data is None:
            return self.transport.send(LiskCommandBuilder.CLA, ins, 0, 0)
        return self.transport.send(LiskCommandBuilder.CLA, ins, 0, 0, data)

    def _start(self, length: int) -> None:
        try:
            response = self._send(ExchangeInsType.START, length.to_bytes(2, byteorder="big"))
        except ApduException as e:
            if e.sw == SW_PAYLOAD_TOO_BIG:
                raise PayloadTooLargeError("Payload too big for device implementation") from e
            raise

        fields = decompose_response(response)
        if not fields:
            raise ProtocolError("Device did not echo the payload length")
        echoed = read_u16_field(fields[0])
        if echoed != length:
            raise ProtocolError(f"Device did not properly handle length (length mismatch). Expected {length} - Received: {echoed}")

    def _append(self, chunk: bytes, prev_crc: int) -> int:
        fields = decompose_response(self._send(ExchangeInsType.APPEND, chunk))
        if len(fields) != 2:
            raise ProtocolError(f"Expected 2 checksums after a chunk, got {len(fields)} fields")

        crc = crc16(chunk)
        if read_u16_field(fields[0]) != crc:
            raise IntegrityError("CRC validation failed")
        if read_u16_field(fields[1]) != prev_crc:
            raise IntegrityError("Previous CRC not valid")
        return crc

    def exchange(self, data: ExchangeData) -> List[bytes]:
        """Send a payload and return the fields of the device response.

        :param data: The payload, as bytes, a hex string, a single byte as an int, or a sequence of those
        :return: The decomposed response to the FINALIZE command
        """
        payload = normalize_payload(data)
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise PayloadTooLargeError(f"Payload cannot exceed {MAX_PAYLOAD_LENGTH} bytes, got {len(payload)}")

        listener = self.progress_listener
        listener.on_start()

        LOG.debug("Starting exchange of %d bytes", len(payload))
        self._start(len(payload))

        chunks = chunkify(payload, self.chunk_size)
        prev_crc = 0
        for i, chunk in enumerate(chunks):
            prev_crc = self._append(chunk, prev_crc)
            LOG.debug("Chunk %d/%d acknowledged, crc %04x", i + 1, len(chunks), prev_crc)
            listener.on_chunk_processed(chunk)

        response = self._send(ExchangeInsType.FINALIZE)
        listener.on_end()

        return decompose_response(response)
