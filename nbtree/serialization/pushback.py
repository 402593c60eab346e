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

import io
from typing import IO

from typing_extensions import Buffer, override

MAX_CHUNK_SIZE = 1 << 16


class PushbackReader(io.RawIOBase):
    """Raw binary reader that can look ahead on any readable file object, seekable or not.

    Bytes returned by `peek` are kept in an internal buffer and handed out again by the next reads. Closing this
    reader does not close the wrapped stream.

    >>> reader = PushbackReader(io.BytesIO(b'\\x1f\\x8bfoo'))
    >>> reader.peek(2)
    b'\\x1f\\x8b'
    >>> reader.read()
    b'\\x1f\\x8bfoo'
    """

    def __init__(self, raw: IO[bytes]) -> None:
        super().__init__()
        self._raw = raw
        self._pending = bytearray()

    @override
    def readable(self) -> bool:
        return True

    def peek(self, n: int) -> bytes:
        """Return up to n bytes without consuming them, fewer only if the stream ends first."""
        while len(self._pending) < n:
            chunk = self._raw.read(min(n - len(self._pending), MAX_CHUNK_SIZE))
            if not chunk:
                break
            self._pending += chunk
        return bytes(self._pending[:n])

    @override
    def readinto(self, buffer: Buffer) -> int:
        view = memoryview(buffer).cast('B')
        if self._pending:
            n = min(len(view), len(self._pending))
            view[:n] = self._pending[:n]
            del self._pending[:n]
            return n
        chunk = self._raw.read(min(len(view), MAX_CHUNK_SIZE))
        if not chunk:
            return 0
        n = len(chunk)
        view[:n] = chunk
        return n
