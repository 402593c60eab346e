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

"""
This module implements LEB128 for signed and unsigned integers, and the "varint array" built on top of it.

LEB128 or Little Endian Base 128 is a variable-length code compression used to store arbitrarily large
integers in a small number of bytes.

References:
- https://en.wikipedia.org/wiki/LEB128
- https://webassembly.github.io/spec/core/binary/values.html#integers

This module implements LEB128 encoding/decoding using the standard 1-byte block split into 1-bit for continuation and
7-bits for data. The data can be either a signed or unsigned integer.

>>> se = Serializer.build_bytes_serializer()
>>> se.write_bytes(b'test')  # writes 74657374
>>> encode_leb128(se, 0, signed=False)  # writes 00
>>> encode_leb128(se, 624485, signed=False)  # writes e58e26
>>> encode_leb128(se, -123456, signed=True)  # writes c0bb78
>>> bytes(se.finalize()).hex()
'7465737400e58e26c0bb78'

>>> data = bytes.fromhex('00 e58e26 c0bb78 74657374')
>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_leb128(de, signed=False)  # reads 00
0
>>> decode_leb128(de, signed=False)  # reads e58e26
624485
>>> decode_leb128(de, signed=True)  # reads c0bb78
-123456
>>> bytes(de.read_all())  # reads 74657374
b'test'
>>> de.finalize()

A varint array is a byte sequence holding consecutive unsigned LEB128 values, each one at most 5 bytes long and
truncated to a signed 32-bit integer:

>>> encode_var_int_array([0, 300, -1]).hex()
'00ac02ffffffff0f'
>>> decode_var_int_array(bytes.fromhex('00ac02ffffffff0f'))
[0, 300, -1]
"""

from nbtree.exceptions import MalformedVarIntError, OutOfDataError
from nbtree.serialization import Deserializer, Serializer

VAR_INT_MAX_BYTES = 5

_UINT32_MASK = 0xffff_ffff


def encode_leb128(serializer: Serializer, value: int, *, signed: bool) -> None:
    """ Encodes an integer using LEB128.

    Caller must explicitly choose `signed=True` or `signed=False`.

    This module's docstring has more details on LEB128 and examples.
    """
    if not signed and value < 0:
        raise ValueError('cannot encode value <0 as unsigend')
    while True:
        byte = value & 0b0111_1111
        value >>= 7
        if signed:
            cont = (value == 0 and (byte & 0b0100_0000) == 0) or (value == -1 and (byte & 0b0100_0000) != 0)
        else:
            cont = (value == 0 and (byte & 0b1000_0000) == 0)
        if cont:
            serializer.write_byte(byte)
            break
        serializer.write_byte(byte | 0b1000_0000)


def decode_leb128(deserializer: Deserializer, *, signed: bool, max_bytes: int | None = None) -> int:
    """ Decodes a LEB128-encoded integer.

    Caller must explicitly choose `signed=True` or `signed=False`. When `max_bytes` is given, a value that needs more
    bytes than that raises `MalformedVarIntError`.

    This module's docstring has more details on LEB128 and examples.
    """
    result = 0
    shift = 0
    count = 0
    while True:
        if max_bytes is not None and count >= max_bytes:
            raise MalformedVarIntError(f'variable-length integer longer than {max_bytes} bytes')
        byte = deserializer.read_byte()
        count += 1
        result |= (byte & 0b0111_1111) << shift
        shift += 7
        assert shift % 7 == 0
        if (byte & 0b1000_0000) == 0:
            if signed and (byte & 0b0100_0000) != 0:
                return result | -(1 << shift)
            return result


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value & 0x8000_0000 else value


def encode_var_int_array(values: list[int]) -> bytes:
    """ Encode 32-bit signed integers as consecutive unsigned LEB128 values of their two's complement form.

    Negative values always take 5 bytes.
    """
    serializer = Serializer.build_bytes_serializer()
    for value in values:
        if not -0x8000_0000 <= value <= 0x7fff_ffff:
            raise ValueError(f'{value} does not fit in a 32-bit signed integer')
        encode_leb128(serializer, value & _UINT32_MASK, signed=False)
    return bytes(serializer.finalize())


def decode_var_int_array(data: bytes) -> list[int]:
    """ Decode a byte sequence of consecutive LEB128 values into 32-bit signed integers.

    Raises `MalformedVarIntError` if a value has more than 5 bytes or if the data ends in the middle of a value.

    >>> decode_var_int_array(bytes.fromhex('8080808080'))
    Traceback (most recent call last):
    ...
    nbtree.exceptions.MalformedVarIntError: variable-length integer longer than 5 bytes
    """
    deserializer = Deserializer.build_bytes_deserializer(data)
    result = []
    while not deserializer.is_empty():
        try:
            value = decode_leb128(deserializer, signed=False, max_bytes=VAR_INT_MAX_BYTES)
        except OutOfDataError as e:
            raise MalformedVarIntError('truncated variable-length integer') from e
        result.append(_to_int32(value))
    return result
