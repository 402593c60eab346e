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

import gzip
import io
import os
import zlib
from typing import IO, Iterator, Optional, Union

from structlog import get_logger
from typing_extensions import assert_never

from nbtree.compound import Compound, RootCompound
from nbtree.conf import NBTSettings, get_global_settings
from nbtree.exceptions import CyclicValueError, StreamError, UnmappedValueKindError
from nbtree.serialization import Serializer
from nbtree.serialization.encoding.array import encode_byte_array, encode_int_array, encode_length
from nbtree.serialization.encoding.float import encode_float
from nbtree.serialization.encoding.int import encode_int
from nbtree.serialization.encoding.mutf8 import encode_mutf8
from nbtree.tag_kind import TagKind, Value, kind_of_value
from nbtree.tag_list import TagList

logger = get_logger()


class _CompoundCursor:
    __slots__ = ('container_id', 'entries')

    def __init__(self, compound: Compound) -> None:
        self.container_id = id(compound)
        self.entries: Iterator[tuple[str, Value]] = iter(compound.items())


class _ListCursor:
    __slots__ = ('container_id', 'kind', 'items')

    def __init__(self, tag_list: TagList) -> None:
        self.container_id = id(tag_list)
        self.kind = tag_list.kind
        self.items: Iterator[Value] = iter(tag_list)


_Cursor = Union[_CompoundCursor, _ListCursor]


def _write_kind(se: Serializer, kind: TagKind) -> None:
    se.write_byte(kind.id)


def _kind_of(value: Value) -> TagKind:
    kind = kind_of_value(value)
    if kind is None:
        raise UnmappedValueKindError(f'cannot write {type(value).__name__} object to NBT')
    return kind


class NBTWriter:
    """Writes documents to a binary stream, wrapping them in gzip framing unless disabled.

    The whole document is encoded before anything is written, so an encoding error never leaves a partial document in
    the stream. The stream itself is not closed.
    """

    def __init__(
        self,
        stream: IO[bytes],
        *,
        compressed: Optional[bool] = None,
        settings: Optional[NBTSettings] = None,
    ) -> None:
        self._stream = stream
        self._settings = settings if settings is not None else get_global_settings()
        self._compressed = compressed if compressed is not None else self._settings.COMPRESS_BY_DEFAULT
        self.log = logger.new()

    def write(self, compound: Compound) -> None:
        """Write a compound as the root of a document, its name is used if it is a `RootCompound`."""
        data = self.encode(compound)
        try:
            if self._compressed:
                with gzip.GzipFile(
                    filename='',
                    fileobj=self._stream,
                    mode='wb',
                    compresslevel=self._settings.COMPRESS_LEVEL,
                    mtime=0,
                ) as compressed:
                    compressed.write(data)
            else:
                self._stream.write(data)
        except (OSError, zlib.error) as e:
            raise StreamError(f'failed to write to stream: {e}') from e
        self.log.debug('document written', size=len(data), compressed=self._compressed)

    def encode(self, compound: Compound) -> bytes:
        """Encode a document without any framing."""
        if not isinstance(compound, Compound):
            raise UnmappedValueKindError(f'the root of a document must be a Compound, not {type(compound).__name__}')
        se = Serializer.build_bytes_serializer()
        name = compound.name if isinstance(compound, RootCompound) else None
        _write_kind(se, TagKind.COMPOUND)
        encode_mutf8(se, name or '')
        self._write_compound_body(se, compound)
        return bytes(se.finalize())

    def _write_compound_body(self, se: Serializer, compound: Compound) -> None:
        stack: list[_Cursor] = []
        # ids of the containers on the stack
        active: set[int] = set()

        def push(cursor: _Cursor) -> None:
            if cursor.container_id in active:
                raise CyclicValueError('a container cannot be written inside itself')
            active.add(cursor.container_id)
            stack.append(cursor)

        push(_CompoundCursor(compound))
        while stack:
            cursor = stack[-1]
            if isinstance(cursor, _CompoundCursor):
                entry = next(cursor.entries, None)
                if entry is None:
                    _write_kind(se, TagKind.END)
                    active.discard(stack.pop().container_id)
                    continue
                key, value = entry
                kind = _kind_of(value)
                _write_kind(se, kind)
                encode_mutf8(se, key)
                child = self._write_value(se, kind, value)
            else:
                item = next(cursor.items, None)
                if item is None:
                    active.discard(stack.pop().container_id)
                    continue
                # elements were checked against the declared kind when added
                child = self._write_value(se, cursor.kind, item)
            if child is not None:
                push(child)

    def _write_value(self, se: Serializer, kind: TagKind, value: Value) -> Optional[_Cursor]:
        """Write the payload of a value, containers return a cursor so their contents are written next."""
        match kind:
            case TagKind.END:
                raise UnmappedValueKindError('END tag cannot hold a value')
            case TagKind.BYTE:
                encode_int(se, value, length=1, signed=True)  # type: ignore[arg-type]
            case TagKind.SHORT:
                encode_int(se, value, length=2, signed=True)  # type: ignore[arg-type]
            case TagKind.INT:
                encode_int(se, value, length=4, signed=True)  # type: ignore[arg-type]
            case TagKind.LONG:
                encode_int(se, value, length=8, signed=True)  # type: ignore[arg-type]
            case TagKind.FLOAT:
                encode_float(se, value, double=False)  # type: ignore[arg-type]
            case TagKind.DOUBLE:
                encode_float(se, value, double=True)  # type: ignore[arg-type]
            case TagKind.BYTE_ARRAY:
                encode_byte_array(se, value)  # type: ignore[arg-type]
            case TagKind.STRING:
                encode_mutf8(se, value)  # type: ignore[arg-type]
            case TagKind.LIST:
                assert isinstance(value, TagList)
                _write_kind(se, value.kind)
                encode_length(se, len(value))
                if len(value):
                    return _ListCursor(value)
            case TagKind.COMPOUND:
                assert isinstance(value, Compound)
                return _CompoundCursor(value)
            case TagKind.INT_ARRAY:
                encode_int_array(se, value, item_length=4)  # type: ignore[arg-type]
            case TagKind.LONG_ARRAY:
                encode_int_array(se, value, item_length=8)  # type: ignore[arg-type]
            case _:
                assert_never(kind)
        return None


def dump(
    compound: Compound,
    stream: IO[bytes],
    *,
    compressed: Optional[bool] = None,
    settings: Optional[NBTSettings] = None,
) -> None:
    """Write a document to a binary file object."""
    NBTWriter(stream, compressed=compressed, settings=settings).write(compound)


def dumps(compound: Compound, *, compressed: Optional[bool] = None, settings: Optional[NBTSettings] = None) -> bytes:
    """Encode a document to bytes, gzip compressed unless disabled."""
    buffer = io.BytesIO()
    dump(compound, buffer, compressed=compressed, settings=settings)
    return buffer.getvalue()


def write_file(
    compound: Compound,
    path: Union[str, os.PathLike[str]],
    *,
    compressed: Optional[bool] = None,
    settings: Optional[NBTSettings] = None,
) -> None:
    """Write a document to a file, replacing its contents.

    The file is only opened once the document was encoded.
    """
    data = dumps(compound, compressed=compressed, settings=settings)
    try:
        with open(path, 'wb') as fp:
            fp.write(data)
    except OSError as e:
        raise StreamError(f'failed to open {os.fspath(path)!r}: {e}') from e
