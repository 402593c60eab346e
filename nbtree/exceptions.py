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


class NBTError(Exception):
    """General error class"""


class NBTFormatError(NBTError):
    """Base class for malformed wire data, the whole decode is aborted"""


class InvalidTagIdError(NBTFormatError):
    """A tag kind byte outside of the known range (0-12)"""


class UnexpectedRootKindError(NBTFormatError):
    """The document root is neither a Compound nor an End tag"""


class MalformedVarIntError(NBTFormatError):
    """A variable-length integer uses more than 5 bytes or is truncated"""


class MalformedArrayLengthError(NBTFormatError):
    """An array (or a list in strict mode) has a negative length"""


class MalformedStringError(NBTFormatError):
    """The bytes of a string are not valid modified UTF-8"""


class MalformedListError(NBTFormatError):
    """A list declares a kind that cannot hold elements (End) but has a positive length"""


class UnmappedValueKindError(NBTError, TypeError):
    """A value whose type is not one of the 13 tag kinds.

    This is raised both when storing such a value into a Compound and when the encoder finds one.
    """


class ListKindMismatchError(NBTError, TypeError):
    """A value of a different kind than the declared element kind of a TagList"""


class TooLongError(NBTError, ValueError):
    """A value is too long to be represented by its length prefix"""


class CyclicValueError(NBTError, ValueError):
    """A Compound or TagList that contains itself, directly or through nested containers"""


class StreamError(NBTError):
    """Underlying I/O failure: short read, broken stream or decompression error"""


class OutOfDataError(StreamError):
    """The stream ended before the expected number of bytes could be read"""


class MaxBytesExceededError(StreamError):
    """ This error is raised when an adapted deserializer reached its maximum bytes read.

    After this exception is raised the adapted deserializer cannot be used anymore. The point where the deserializer
    stopped reading leaves the rest of the data unusable, so it should be considered a failed decode overall, and not
    simply a failed "read" operation.
    """
