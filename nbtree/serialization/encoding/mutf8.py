# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
This module implements the length-prefixed "modified UTF-8" used for every string on the NBT wire.

The length prefix is a 2-byte unsigned big-endian count of encoded bytes. The encoding differs from standard UTF-8 in
two ways, both needed for compatibility with existing producers:

- the null character is encoded as the two bytes `c0 80`, so an encoded string never contains a zero byte;
- characters outside the Basic Multilingual Plane are encoded as a UTF-16 surrogate pair, each surrogate taking 3
  bytes, instead of a single 4-byte sequence.

>>> se = Serializer.build_bytes_serializer()
>>> encode_mutf8(se, 'foo')  # writes 0003666f6f
>>> encode_mutf8(se, '\x00')  # writes 0002c080
>>> encode_mutf8(se, '\U0001f60e')  # writes 0006eda0bdedb88e
>>> bytes(se.finalize()).hex()
'0003666f6f0002c0800006eda0bdedb88e'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0003666f6f0002c0800006eda0bdedb88e'))
>>> decode_mutf8(de)  # reads 0003666f6f
'foo'
>>> decode_mutf8(de)  # reads 0002c080
'\x00'
>>> decode_mutf8(de) == '\U0001f60e'  # reads 0006eda0bdedb88e
True
>>> de.finalize()
"""

import struct

from nbtree.exceptions import MalformedStringError, TooLongError
from nbtree.serialization import Deserializer, Serializer

from .int import decode_int, encode_int

MAX_ENCODED_LENGTH = 0xFFFF


def mutf8_encode(value: str) -> bytes:
    """ Encode a string to modified UTF-8, without length prefix.

    >>> mutf8_encode('caf\xe9').hex()
    '636166c3a9'
    """
    out = bytearray()
    units = value.encode('utf-16-be', 'surrogatepass')
    for unit, in struct.iter_unpack('>H', units):
        if 0x0001 <= unit <= 0x007f:
            out.append(unit)
        elif unit <= 0x07ff:
            out.append(0xc0 | (unit >> 6))
            out.append(0x80 | (unit & 0x3f))
        else:
            out.append(0xe0 | (unit >> 12))
            out.append(0x80 | ((unit >> 6) & 0x3f))
            out.append(0x80 | (unit & 0x3f))
    return bytes(out)


def mutf8_decode(data: bytes) -> str:
    r""" Decode modified UTF-8 bytes, without length prefix.

    >>> mutf8_decode(bytes.fromhex('636166c3a9')) == 'caf\xe9'
    True
    >>> mutf8_decode(b'\xf0\x9f\x98\x8e')
    Traceback (most recent call last):
    ...
    nbtree.exceptions.MalformedStringError: invalid byte 0xf0 at position 0
    """
    units: list[int] = []
    pos = 0
    size = len(data)
    while pos < size:
        first = data[pos]
        if first < 0x80:
            units.append(first)
            pos += 1
        elif first & 0xe0 == 0xc0:
            second, = _continuation(data, pos, 1)
            units.append(((first & 0x1f) << 6) | second)
            pos += 2
        elif first & 0xf0 == 0xe0:
            second, third = _continuation(data, pos, 2)
            units.append(((first & 0x0f) << 12) | (second << 6) | third)
            pos += 3
        else:
            raise MalformedStringError(f'invalid byte {first:#04x} at position {pos}')
    return struct.pack(f'>{len(units)}H', *units).decode('utf-16-be', 'surrogatepass')


def _continuation(data: bytes, pos: int, count: int) -> list[int]:
    """Payload bits of the `count` continuation bytes following `data[pos]`."""
    if pos + count >= len(data):
        raise MalformedStringError(f'truncated sequence at position {pos}')
    result = []
    for byte in data[pos + 1:pos + 1 + count]:
        if byte & 0xc0 != 0x80:
            raise MalformedStringError(f'invalid continuation byte {byte:#04x} after position {pos}')
        result.append(byte & 0x3f)
    return result


def encode_mutf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using modified UTF-8 and adding a 2-byte length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    data = mutf8_encode(value)
    if len(data) > MAX_ENCODED_LENGTH:
        raise TooLongError(f'encoded string is {len(data)} bytes long, the maximum is {MAX_ENCODED_LENGTH}')
    encode_int(serializer, len(data), length=2, signed=False)
    serializer.write_bytes(data)


def decode_mutf8(deserializer: Deserializer) -> str:
    """ Decodes a modified UTF-8 string with a 2-byte length prefix.

    This modules's docstring has more details and examples.
    """
    size = decode_int(deserializer, length=2, signed=False)
    data = bytes(deserializer.read_bytes(size))
    return mutf8_decode(data)
