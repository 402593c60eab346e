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
Native representations of the scalar and array tag kinds.

Python has a single `int`, `float` and `bytes`, so each tag kind gets its own thin subclass of the builtin. The
subclasses check their range when created and behave like the builtin otherwise:

>>> Int(300) + 1
301
>>> Byte(128)
Traceback (most recent call last):
...
ValueError: 128 is out of range for Byte (-128..127)
>>> Float(0.1) == 0.1
False
>>> IntArray([1, 2, 3])
IntArray((1, 2, 3))

Plain builtins are deliberately not tag values, see `nbtree.tag_kind.kind_of_value`.
"""

import operator
import struct
from typing import ClassVar, Iterable, SupportsFloat, SupportsIndex

from typing_extensions import Self


class _SizedInt(int):
    _byte_size: ClassVar[int]

    @classmethod
    def _lower_bound_value(cls) -> int:
        return -(1 << (cls._byte_size * 8 - 1))

    @classmethod
    def _upper_bound_value(cls) -> int:
        return (1 << (cls._byte_size * 8 - 1)) - 1

    def __new__(cls, value: SupportsIndex = 0) -> Self:
        number = operator.index(value)
        lower, upper = cls._lower_bound_value(), cls._upper_bound_value()
        if not lower <= number <= upper:
            raise ValueError(f'{number} is out of range for {cls.__name__} ({lower}..{upper})')
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({int(self)})'


class Byte(_SizedInt):
    """Signed 8-bit integer."""
    _byte_size = 1


class Short(_SizedInt):
    """Signed 16-bit integer."""
    _byte_size = 2


class Int(_SizedInt):
    """Signed 32-bit integer."""
    _byte_size = 4


class Long(_SizedInt):
    """Signed 64-bit integer."""
    _byte_size = 8


class Float(float):
    """IEEE-754 single precision number, the value is rounded to single precision when created."""

    def __new__(cls, value: SupportsFloat = 0.0) -> Self:
        try:
            rounded, = struct.unpack('>f', struct.pack('>f', float(value)))
        except OverflowError:
            raise ValueError(f'{value} is out of range for Float')
        return super().__new__(cls, rounded)

    def __repr__(self) -> str:
        return f'Float({float(self)!r})'


class Double(float):
    """IEEE-754 double precision number."""

    def __repr__(self) -> str:
        return f'Double({float(self)!r})'


class String(str):
    def __repr__(self) -> str:
        return f'String({str(self)!r})'


class ByteArray(bytes):
    def __repr__(self) -> str:
        return f'ByteArray({bytes(self)!r})'


class _SizedIntArray(tuple[int, ...]):
    _item_type: ClassVar[type[_SizedInt]]

    def __new__(cls, values: Iterable[SupportsIndex] = ()) -> Self:
        items = tuple(int(cls._item_type(value)) for value in values)
        return super().__new__(cls, items)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({tuple(self)!r})'


class IntArray(_SizedIntArray):
    """Immutable sequence of signed 32-bit integers."""
    _item_type = Int


class LongArray(_SizedIntArray):
    """Immutable sequence of signed 64-bit integers."""
    _item_type = Long
