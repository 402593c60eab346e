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

from typing import IO

from typing_extensions import override

from nbtree.exceptions import OutOfDataError

from .deserializer import Deserializer
from .pushback import MAX_CHUNK_SIZE, PushbackReader


class StreamDeserializer(Deserializer):
    """Implementation of a Deserializer that pulls bytes from a binary file object on demand.

    Look-ahead is served by a `PushbackReader`, so the stream does not need to be seekable. Short reads from the
    stream are retried until the requested amount is available or the stream ends. Large reads are done in chunks of at
    most `MAX_CHUNK_SIZE` bytes, so memory only grows with the bytes that actually arrive.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._reader = stream if isinstance(stream, PushbackReader) else PushbackReader(stream)

    @override
    def is_empty(self) -> bool:
        return not self._reader.peek(1)

    @override
    def peek_byte(self) -> int:
        data = self._reader.peek(1)
        if not data:
            raise OutOfDataError('not enough bytes to read')
        return data[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        data = self._reader.peek(n)
        if exact and len(data) < n:
            raise OutOfDataError('not enough bytes to read')
        return memoryview(data)

    @override
    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        data = bytearray()
        while len(data) < n:
            chunk = self._reader.read(min(n - len(data), MAX_CHUNK_SIZE))
            if not chunk:
                break
            data += chunk
        if exact and len(data) < n:
            raise OutOfDataError('not enough bytes to read')
        return memoryview(bytes(data))

    @override
    def read_all(self) -> memoryview:
        return memoryview(self._reader.readall())
