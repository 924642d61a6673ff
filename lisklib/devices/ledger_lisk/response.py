from io import BytesIO
from typing import List

from ...errors import MalformedResponseError


def read_uint(buf: BytesIO,
              bit_len: int,
              byteorder: str = 'little',
              signed: bool = False) -> int:
    assert byteorder in ['little', 'big']

    size: int = bit_len // 8
    b: bytes = buf.read(size)

    if len(b) < size:
        raise MalformedResponseError(f"Can't read u{bit_len} in buffer!")

    return int.from_bytes(b, byteorder, signed=signed)


def decompose_response(response: bytes) -> List[bytes]:
    """Split a device response into its fields.

    The response starts with a signed byte holding the number of fields. Each
    field follows as a 2 byte little endian length and that many bytes.
    Anything after the last field is ignored.

    :param response: The response data returned by the device
    :return: The fields in the order the device sent them
    :raises: MalformedResponseError: if the response is shorter than what it declares
    """
    r = BytesIO(response)
    count = read_uint(r, 8, signed=True)
    if count < 0:
        raise MalformedResponseError(f"Invalid field count {count}")

    fields: List[bytes] = []
    for i in range(count):
        length = read_uint(r, 16)
        field = r.read(length)
        if len(field) != length:
            raise MalformedResponseError(
                f"Field {i} declares {length} bytes but only {len(field)} are left")
        fields.append(field)
    return fields


def read_u16_field(field: bytes) -> int:
    """Read a 2 byte little endian integer, as used for lengths and checksums in responses."""
    if len(field) < 2:
        raise MalformedResponseError(f"Expected a 2 byte field, got {len(field)} bytes")
    return int.from_bytes(field[:2], byteorder="little")
