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
This module implements the NBT array encodings: a 4-byte signed big-endian element count followed by the elements,
each one a fixed-size big-endian integer.

ByteArray elements are raw bytes, IntArray elements take 4 bytes and LongArray elements take 8 bytes.

>>> se = Serializer.build_bytes_serializer()
>>> encode_byte_array(se, b'\x01\x02')  # writes 00000002 0102
>>> encode_int_array(se, (1, -1), item_length=4)  # writes 00000002 00000001 ffffffff
>>> bytes(se.finalize()).hex()
'0000000201020000000200000001ffffffff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000000201020000000200000001ffffffff'))
>>> decode_byte_array(de)
b'\x01\x02'
>>> decode_int_array(de, item_length=4)
(1, -1)
>>> de.finalize()

A negative count is never valid for an array:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff'))
>>> decode_byte_array(de)
Traceback (most recent call last):
...
nbtree.exceptions.MalformedArrayLengthError: negative array length: -1
"""

from typing import Sequence

from nbtree.exceptions import MalformedArrayLengthError, TooLongError
from nbtree.serialization import Deserializer, Serializer

from .int import decode_int, encode_int

MAX_ARRAY_LENGTH = 0x7fff_ffff

_STRUCT_CODES = {1: 'b', 2: 'h', 4: 'i', 8: 'q'}


def encode_length(serializer: Serializer, length: int) -> None:
    """ Encode an element count as a 4-byte signed integer, also used for list lengths.
    """
    if length > MAX_ARRAY_LENGTH:
        raise TooLongError(f'{length} elements, the maximum is {MAX_ARRAY_LENGTH}')
    encode_int(serializer, length, length=4, signed=True)


def decode_length(deserializer: Deserializer) -> int:
    """ Decode a 4-byte signed element count, without interpreting negative values.
    """
    return decode_int(deserializer, length=4, signed=True)


def _decode_array_length(deserializer: Deserializer) -> int:
    length = decode_length(deserializer)
    if length < 0:
        raise MalformedArrayLengthError(f'negative array length: {length}')
    return length


def encode_byte_array(serializer: Serializer, data: bytes) -> None:
    encode_length(serializer, len(data))
    serializer.write_bytes(data)


def decode_byte_array(deserializer: Deserializer) -> bytes:
    length = _decode_array_length(deserializer)
    return bytes(deserializer.read_bytes(length))


def encode_int_array(serializer: Serializer, items: Sequence[int], *, item_length: int) -> None:
    """ Encode a sequence of signed integers of `item_length` bytes each, with a count prefix.
    """
    encode_length(serializer, len(items))
    serializer.write_struct(tuple(items), f'>{len(items)}{_STRUCT_CODES[item_length]}')


def decode_int_array(deserializer: Deserializer, *, item_length: int) -> tuple[int, ...]:
    """ Decode a count-prefixed sequence of signed integers of `item_length` bytes each.
    """
    length = _decode_array_length(deserializer)
    return deserializer.read_struct(f'>{length}{_STRUCT_CODES[item_length]}')
