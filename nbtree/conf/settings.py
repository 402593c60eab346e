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

from pathlib import Path
from typing import Optional, Union

from pydantic import Field

from nbtree.utils.pydantic import BaseModel
from nbtree.utils.yaml import model_from_yaml


class NBTSettings(BaseModel):
    # Whether writers wrap their output in gzip framing when not told explicitly.
    COMPRESS_BY_DEFAULT: bool = True

    # Compression level used for gzip framing, 0 is no compression and 9 is the best compression.
    COMPRESS_LEVEL: int = Field(default=9, ge=0, le=9)

    # When enabled a list with a negative length is a format error, otherwise it is read as an empty list like other
    # readers of the format do.
    STRICT_LIST_LENGTH: bool = False

    # Maximum number of bytes (after decompression) a single document read may consume, no limit when None.
    MAX_DOCUMENT_BYTES: Optional[int] = Field(default=None, gt=0)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'NBTSettings':
        """Takes a filepath to a yaml file and returns a validated NBTSettings instance."""
        return model_from_yaml(cls, filepath=filepath)
