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
from typing import IO, Optional, Union

from structlog import get_logger
from typing_extensions import Buffer, assert_never

from nbtree.compound import Compound, RootCompound
from nbtree.conf import NBTSettings, get_global_settings
from nbtree.exceptions import (
    InvalidTagIdError,
    MalformedArrayLengthError,
    MalformedListError,
    StreamError,
    UnexpectedRootKindError,
)
from nbtree.serialization import Deserializer
from nbtree.serialization.encoding.array import decode_byte_array, decode_int_array, decode_length
from nbtree.serialization.encoding.float import decode_float
from nbtree.serialization.encoding.int import decode_int
from nbtree.serialization.encoding.mutf8 import decode_mutf8
from nbtree.serialization.pushback import PushbackReader
from nbtree.tag_kind import TagKind, Value, kind_of_id
from nbtree.tag_list import TagList
from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String

logger = get_logger()

GZIP_MAGIC = b'\x1f\x8b'


class _CompoundFrame:
    __slots__ = ('compound',)

    def __init__(self, compound: Compound) -> None:
        self.compound = compound


class _ListFrame:
    __slots__ = ('tag_list', 'remaining')

    def __init__(self, tag_list: TagList, remaining: int) -> None:
        self.tag_list = tag_list
        self.remaining = remaining


_Frame = Union[_CompoundFrame, _ListFrame]


class NBTReader:
    """Reads one document from a binary stream.

    If the stream starts with the gzip magic number it is transparently decompressed, otherwise it is read as is. The
    stream is not closed after reading and bytes after the end of the document are left unread when the document is
    not compressed.

    Nesting is parsed with an explicit stack of frames, so the depth of a document is only limited by memory.
    """

    def __init__(self, stream: IO[bytes], *, settings: Optional[NBTSettings] = None) -> None:
        self._stream = stream
        self._settings = settings if settings is not None else get_global_settings()
        self.log = logger.new()

    def read(self) -> RootCompound:
        """Read a whole document, raising a subclass of `NBTError` if it cannot be read."""
        try:
            return self._read()
        except (OSError, EOFError, zlib.error) as e:
            raise StreamError(f'failed to read from stream: {e}') from e

    def _read(self) -> RootCompound:
        source = PushbackReader(self._stream)
        if source.peek(len(GZIP_MAGIC)) == GZIP_MAGIC:
            self.log.debug('gzip framing detected')
            with gzip.GzipFile(fileobj=source, mode='rb') as decompressed:
                return self._read_document(decompressed)
        return self._read_document(source)

    def _read_document(self, source: IO[bytes]) -> RootCompound:
        deserializer = Deserializer.build_stream_deserializer(source)
        de = deserializer.with_optional_max_bytes(self._settings.MAX_DOCUMENT_BYTES)

        kind = self._read_kind(de)
        if kind is TagKind.END:
            self.log.debug('empty document')
            return RootCompound()
        if kind is not TagKind.COMPOUND:
            raise UnexpectedRootKindError(f'expected COMPOUND at root, instead got {kind.name}')

        # the name of the root tag is informational only
        root = RootCompound(name=decode_mutf8(de))
        self._read_compound_body(de, root)
        self.log.debug('document read', name=root.name, entries=len(root))
        return root

    def _read_kind(self, de: Deserializer) -> TagKind:
        tag_id = de.read_byte()
        kind = kind_of_id(tag_id)
        if kind is None:
            raise InvalidTagIdError(f'invalid tag kind id: {tag_id}')
        return kind

    def _read_compound_body(self, de: Deserializer, compound: Compound) -> None:
        stack: list[_Frame] = [_CompoundFrame(compound)]
        while stack:
            frame = stack[-1]
            if isinstance(frame, _CompoundFrame):
                kind = self._read_kind(de)
                if kind is TagKind.END:
                    stack.pop()
                    continue
                key = decode_mutf8(de)
                # a repeated key replaces the previous value, keeping its position
                frame.compound.set(self._read_value(de, kind, stack), key)
            else:
                if frame.remaining == 0:
                    stack.pop()
                    continue
                frame.remaining -= 1
                frame.tag_list.add(self._read_value(de, frame.tag_list.kind, stack))

    def _read_value(self, de: Deserializer, kind: TagKind, stack: list[_Frame]) -> Value:
        """Read the payload of a value, containers are returned empty and a frame to fill them is pushed."""
        match kind:
            case TagKind.END:
                raise InvalidTagIdError('END tag cannot hold a value')
            case TagKind.BYTE:
                return Byte(decode_int(de, length=1, signed=True))
            case TagKind.SHORT:
                return Short(decode_int(de, length=2, signed=True))
            case TagKind.INT:
                return Int(decode_int(de, length=4, signed=True))
            case TagKind.LONG:
                return Long(decode_int(de, length=8, signed=True))
            case TagKind.FLOAT:
                return Float(decode_float(de, double=False))
            case TagKind.DOUBLE:
                return Double(decode_float(de, double=True))
            case TagKind.BYTE_ARRAY:
                return ByteArray(decode_byte_array(de))
            case TagKind.STRING:
                return String(decode_mutf8(de))
            case TagKind.LIST:
                element_kind = self._read_kind(de)
                length = self._read_list_length(de)
                if element_kind is TagKind.END and length > 0:
                    raise MalformedListError(f'list of END tags cannot have {length} elements')
                tag_list = TagList(element_kind)
                if length > 0:
                    stack.append(_ListFrame(tag_list, length))
                return tag_list
            case TagKind.COMPOUND:
                compound = Compound()
                stack.append(_CompoundFrame(compound))
                return compound
            case TagKind.INT_ARRAY:
                return IntArray(decode_int_array(de, item_length=4))
            case TagKind.LONG_ARRAY:
                return LongArray(decode_int_array(de, item_length=8))
            case _:
                assert_never(kind)

    def _read_list_length(self, de: Deserializer) -> int:
        length = decode_length(de)
        if length >= 0:
            return length
        if self._settings.STRICT_LIST_LENGTH:
            raise MalformedArrayLengthError(f'negative list length: {length}')
        self.log.warning('negative list length, reading as empty list', length=length)
        return 0


def load(stream: IO[bytes], *, settings: Optional[NBTSettings] = None) -> RootCompound:
    """Read a document from a binary file object, compressed or not."""
    return NBTReader(stream, settings=settings).read()


def loads(data: Buffer, *, settings: Optional[NBTSettings] = None) -> RootCompound:
    """Read a document from bytes, compressed or not."""
    return load(io.BytesIO(bytes(data)), settings=settings)


def read_file(path: Union[str, os.PathLike[str]], *, settings: Optional[NBTSettings] = None) -> RootCompound:
    """Read a document from a file, compressed or not."""
    try:
        with open(path, 'rb') as fp:
            return load(fp, settings=settings)
    except OSError as e:
        raise StreamError(f'failed to open {os.fspath(path)!r}: {e}') from e
