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

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterator, Optional, TypeVar

from nbtree.exceptions import UnmappedValueKindError
from nbtree.serialization.encoding.leb128 import decode_var_int_array, encode_var_int_array
from nbtree.tag_kind import kind_of_type, kind_of_value, values_equal
from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String

if TYPE_CHECKING:
    from nbtree.tag_kind import Value
    from nbtree.tag_list import TagList

V = TypeVar('V')


def _check_path(path: tuple[str, ...]) -> None:
    if not path:
        raise ValueError('path must not be empty')
    for part in path:
        if not isinstance(part, str):
            raise TypeError(f'path parts must be str, got {type(part).__name__}')


class Compound(Mapping[str, 'Value']):
    """Record of named tag values, the NBT equivalent of a dict.

    Entries are kept in insertion order, which is also the order they are written in. Values are addressed by a path
    of keys, walking through nested compounds:

    >>> root = Compound()
    >>> root.set(Int(42), 'a', 'b', 'c')
    >>> root
    Compound({'a': Compound({'b': Compound({'c': Int(42)})})})
    >>> root.get_int('a', 'b', 'c')
    Int(42)
    >>> root.get_string('a', 'b', 'c') is None
    True

    Only tag values can be stored, plain builtins are rejected:

    >>> root.set(42, 'x')
    Traceback (most recent call last):
    ...
    nbtree.exceptions.UnmappedValueKindError: cannot store a value of type int in a Compound
    """

    def __init__(self, entries: Optional[Mapping[str, Value]] = None) -> None:
        self._entries: dict[str, Value] = {}
        if entries is not None:
            for key, value in entries.items():
                self.set(value, key)

    def set(self, value: Value, *path: str) -> None:
        """Store a value at the given path, creating or replacing the intermediate compounds as needed.

        An intermediate part that is missing or holds anything other than a compound is overwritten with an empty
        compound. The value at the last part is overwritten unconditionally.
        """
        _check_path(path)
        if kind_of_value(value) is None:
            raise UnmappedValueKindError(f'cannot store a value of type {type(value).__name__} in a Compound')
        current = self
        for part in path[:-1]:
            child = current._entries.get(part)
            if not isinstance(child, Compound):
                child = Compound()
                current._entries[part] = child
            current = child
        current._entries[path[-1]] = value

    def get(self, *path: str) -> Optional[Value]:  # type: ignore[override]
        """Get the value at the given path, `None` if any part of the path does not exist."""
        _check_path(path)
        current: Any = self
        for part in path:
            if not isinstance(current, Compound):
                return None
            if part not in current._entries:
                return None
            current = current._entries[part]
        return current

    def remove(self, *path: str) -> Optional[Value]:
        """Remove and return the value at the given path, `None` if it does not exist."""
        _check_path(path)
        parent = self.get(*path[:-1]) if len(path) > 1 else self
        if not isinstance(parent, Compound):
            return None
        return parent._entries.pop(path[-1], None)

    def get_typed(self, value_type: type[V], *path: str) -> Optional[V]:
        """Get the value at the given path only if its kind is the one held by `value_type`."""
        value = self.get(*path)
        expected_kind = kind_of_type(value_type)
        if value is None or expected_kind is None or kind_of_value(value) is not expected_kind:
            return None
        return value  # type: ignore[return-value]

    def get_byte(self, *path: str) -> Optional[Byte]:
        return self.get_typed(Byte, *path)

    def get_short(self, *path: str) -> Optional[Short]:
        return self.get_typed(Short, *path)

    def get_int(self, *path: str) -> Optional[Int]:
        return self.get_typed(Int, *path)

    def get_long(self, *path: str) -> Optional[Long]:
        return self.get_typed(Long, *path)

    def get_float(self, *path: str) -> Optional[Float]:
        return self.get_typed(Float, *path)

    def get_double(self, *path: str) -> Optional[Double]:
        return self.get_typed(Double, *path)

    def get_byte_array(self, *path: str) -> Optional[ByteArray]:
        return self.get_typed(ByteArray, *path)

    def get_string(self, *path: str) -> Optional[String]:
        return self.get_typed(String, *path)

    def get_list(self, *path: str) -> Optional[TagList]:
        from nbtree.tag_list import TagList
        return self.get_typed(TagList, *path)

    def get_compound(self, *path: str) -> Optional[Compound]:
        return self.get_typed(Compound, *path)

    def get_int_array(self, *path: str) -> Optional[IntArray]:
        return self.get_typed(IntArray, *path)

    def get_long_array(self, *path: str) -> Optional[LongArray]:
        return self.get_typed(LongArray, *path)

    def get_var_int_array(self, *path: str) -> Optional[list[int]]:
        """Get the ByteArray at the given path decoded as a sequence of variable-length 32-bit integers.

        Returns `None` if there is no ByteArray at the path, raises `MalformedVarIntError` if the bytes are not a valid
        sequence of variable-length integers.
        """
        data = self.get_byte_array(*path)
        if data is None:
            return None
        return decode_var_int_array(data)

    def set_var_int_array(self, values: list[int], *path: str) -> None:
        """Store 32-bit integers as a ByteArray of variable-length integers, the inverse of `get_var_int_array`."""
        self.set(ByteArray(encode_var_int_array(values)), *path)

    def __getitem__(self, key: str) -> Value:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Compound):
            return NotImplemented
        if self._entries.keys() != other._entries.keys():
            return False
        return all(values_equal(value, other._entries[key]) for key, value in self._entries.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._entries!r})'


class RootCompound(Compound):
    """The compound at the root of a document, the only one that carries a name on the wire.

    The name is informational: it is ignored when comparing compounds.
    """

    def __init__(self, entries: Optional[Mapping[str, Value]] = None, *, name: Optional[str] = None) -> None:
        super().__init__(entries)
        self.name = name

    def __repr__(self) -> str:
        return f'RootCompound({self._entries!r}, name={self.name!r})'
