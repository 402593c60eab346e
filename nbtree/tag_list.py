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

from collections.abc import Sequence
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, TypeVar, overload

from nbtree.exceptions import ListKindMismatchError
from nbtree.tag_kind import TagKind, kind_of_type, kind_of_value, values_equal
from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String

if TYPE_CHECKING:
    from nbtree.compound import Compound
    from nbtree.tag_kind import Value

V = TypeVar('V')


class TagList(Sequence['Value']):
    """Homogeneous list of tag values, the element kind is fixed when the list is created.

    >>> numbers = TagList(TagKind.INT, [Int(1), Int(2)])
    >>> numbers.add(Int(3))
    >>> numbers
    TagList(TagKind.INT, [Int(1), Int(2), Int(3)])
    >>> numbers.add(String('four'))
    Traceback (most recent call last):
    ...
    nbtree.exceptions.ListKindMismatchError: cannot add a STRING value to a list of INT
    >>> len(numbers)
    3
    """

    def __init__(self, kind: TagKind, items: Iterable[Value] = ()) -> None:
        self._kind = TagKind(kind)
        self._items: list[Value] = []
        self.extend(items)

    @property
    def kind(self) -> TagKind:
        """The declared element kind, `TagKind.END` lists are always empty."""
        return self._kind

    def _check(self, value: Value) -> Value:
        value_kind = kind_of_value(value)
        if value_kind is not self._kind:
            kind_name = value_kind.name if value_kind is not None else type(value).__name__
            raise ListKindMismatchError(f'cannot add a {kind_name} value to a list of {self._kind.name}')
        return value

    def add(self, value: Value) -> None:
        """Append a value, rejecting it without changing the list if its kind is not the declared kind."""
        self._items.append(self._check(value))

    def extend(self, values: Iterable[Value]) -> None:
        """Append all values, nothing is appended if any of them has the wrong kind."""
        checked = [self._check(value) for value in values]
        self._items.extend(checked)

    def insert(self, index: int, value: Value) -> None:
        self._items.insert(index, self._check(value))

    def pop(self, index: int = -1) -> Value:
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def __setitem__(self, index: int, value: Value) -> None:
        self._items[index] = self._check(value)

    def __delitem__(self, index: int) -> None:
        del self._items[index]

    @overload
    def __getitem__(self, index: int) -> Value:
        ...

    @overload
    def __getitem__(self, index: slice) -> list[Value]:
        ...

    def __getitem__(self, index: int | slice) -> Value | list[Value]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def get(self, index: int) -> Value:
        """Get the value at the index, raises `IndexError` when out of bounds."""
        return self._items[index]

    def get_typed(self, value_type: type[V], index: int) -> Optional[V]:
        """Get the value at the index if `value_type` holds the declared kind of this list, `None` otherwise.

        The kind is checked first, a kind mismatch returns `None` even if the index is out of bounds.
        """
        if kind_of_type(value_type) is not self._kind:
            return None
        return self._items[index]  # type: ignore[return-value]

    def get_byte(self, index: int) -> Optional[Byte]:
        return self.get_typed(Byte, index)

    def get_short(self, index: int) -> Optional[Short]:
        return self.get_typed(Short, index)

    def get_int(self, index: int) -> Optional[Int]:
        return self.get_typed(Int, index)

    def get_long(self, index: int) -> Optional[Long]:
        return self.get_typed(Long, index)

    def get_float(self, index: int) -> Optional[Float]:
        return self.get_typed(Float, index)

    def get_double(self, index: int) -> Optional[Double]:
        return self.get_typed(Double, index)

    def get_byte_array(self, index: int) -> Optional[ByteArray]:
        return self.get_typed(ByteArray, index)

    def get_string(self, index: int) -> Optional[String]:
        return self.get_typed(String, index)

    def get_list(self, index: int) -> Optional[TagList]:
        return self.get_typed(TagList, index)

    def get_compound(self, index: int) -> Optional[Compound]:
        from nbtree.compound import Compound
        return self.get_typed(Compound, index)

    def get_int_array(self, index: int) -> Optional[IntArray]:
        return self.get_typed(IntArray, index)

    def get_long_array(self, index: int) -> Optional[LongArray]:
        return self.get_typed(LongArray, index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagList):
            return NotImplemented
        if self._kind is not other._kind or len(self._items) != len(other._items):
            return False
        return all(values_equal(a, b) for a, b in zip(self._items, other._items))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'TagList(TagKind.{self._kind.name}, {self._items!r})'
