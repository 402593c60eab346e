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
The closed set of tag kinds and the mappings between a kind, its wire id and its native value type.

>>> TagKind.COMPOUND.id
10
>>> kind_of_id(3)
<TagKind.INT: 3>
>>> kind_of_id(13) is None
True
>>> kind_of_value(Int(1))
<TagKind.INT: 3>
>>> kind_of_value(1) is None
True
"""

from __future__ import annotations

import struct
from enum import IntEnum, unique
from functools import cache
from typing import TYPE_CHECKING, Any, Optional, Union

from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String

if TYPE_CHECKING:
    from nbtree.compound import Compound
    from nbtree.tag_list import TagList

Value = Union[
    Byte, Short, Int, Long, Float, Double, ByteArray, String, 'TagList', 'Compound', IntArray, LongArray,
]


@unique
class TagKind(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @property
    def id(self) -> int:
        """The byte that identifies this kind on the wire."""
        return int(self)

    @property
    def value_type(self) -> Optional[type]:
        """The native type that holds values of this kind, `None` for END which never holds a value."""
        return _kind_to_type().get(self)


@cache
def _kind_to_type() -> dict[TagKind, type]:
    # XXX: imported here because both modules need this one
    from nbtree.compound import Compound
    from nbtree.tag_list import TagList
    return {
        TagKind.BYTE: Byte,
        TagKind.SHORT: Short,
        TagKind.INT: Int,
        TagKind.LONG: Long,
        TagKind.FLOAT: Float,
        TagKind.DOUBLE: Double,
        TagKind.BYTE_ARRAY: ByteArray,
        TagKind.STRING: String,
        TagKind.LIST: TagList,
        TagKind.COMPOUND: Compound,
        TagKind.INT_ARRAY: IntArray,
        TagKind.LONG_ARRAY: LongArray,
    }


@cache
def _type_to_kind() -> dict[type, TagKind]:
    from nbtree.compound import RootCompound
    mapping = {value_type: kind for kind, value_type in _kind_to_type().items()}
    # the root of a document is still a compound
    mapping[RootCompound] = TagKind.COMPOUND
    return mapping


def id_of(kind: TagKind) -> int:
    return kind.id


def kind_of_id(tag_id: int) -> Optional[TagKind]:
    """Get the kind for a wire id, `None` if the id is not one of the 13 known ids."""
    try:
        return TagKind(tag_id)
    except ValueError:
        return None


def kind_of_type(value_type: type) -> Optional[TagKind]:
    """Get the kind held by a native type, `None` if the type is not a tag value type."""
    return _type_to_kind().get(value_type)


def kind_of_value(value: Any) -> Optional[TagKind]:
    """Get the kind of a value, `None` if it is not one of the native tag value types.

    The lookup is done on the exact type, so builtins like `int` or `str` and unrelated subclasses are rejected.
    """
    return kind_of_type(type(value))


def values_equal(a: Any, b: Any) -> bool:
    """Compare two tag values taking their kind into account, `Int(1)` and `Long(1)` are different values.

    Floats are compared by their bit pattern, so a NaN equals itself and `0.0` differs from `-0.0`:

    >>> values_equal(Double(float('nan')), Double(float('nan')))
    True
    >>> values_equal(Float(0.0), Float(-0.0))
    False
    """
    kind = kind_of_value(a)
    if kind is not kind_of_value(b):
        return False
    if kind is TagKind.FLOAT:
        return struct.pack('>f', a) == struct.pack('>f', b)
    if kind is TagKind.DOUBLE:
        return struct.pack('>d', a) == struct.pack('>d', b)
    return a == b
