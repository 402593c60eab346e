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
Reading and writing of NBT (Named Binary Tag) documents.

This module exports the value types, the tag kinds and the reading/writing entry points as the main exposed API.
"""

from nbtree.compound import Compound, RootCompound
from nbtree.exceptions import NBTError
from nbtree.reader import NBTReader, load, loads, read_file
from nbtree.tag_kind import TagKind, id_of, kind_of_id, kind_of_type, kind_of_value
from nbtree.tag_list import TagList
from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String
from nbtree.version import __version__
from nbtree.writer import NBTWriter, dump, dumps, write_file

__all__ = [
    'Byte',
    'ByteArray',
    'Compound',
    'Double',
    'Float',
    'Int',
    'IntArray',
    'Long',
    'LongArray',
    'NBTError',
    'NBTReader',
    'NBTWriter',
    'RootCompound',
    'Short',
    'String',
    'TagKind',
    'TagList',
    'dump',
    'dumps',
    'id_of',
    'kind_of_id',
    'kind_of_type',
    'kind_of_value',
    'load',
    'loads',
    'read_file',
    'write_file',
    '__version__',
]
