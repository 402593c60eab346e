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

import pytest
from pydantic import ValidationError

from nbtree import loads
from nbtree.conf import NBTSettings, get_global_settings
from nbtree.conf.get_settings import CONFIG_YAML_ENV_VAR
from nbtree.exceptions import MalformedArrayLengthError

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def test_defaults():
    settings = NBTSettings()
    assert settings.COMPRESS_BY_DEFAULT is True
    assert settings.COMPRESS_LEVEL == 9
    assert settings.STRICT_LIST_LENGTH is False
    assert settings.MAX_DOCUMENT_BYTES is None


def test_valid_settings_from_yaml():
    settings = NBTSettings.from_yaml(filepath=FIXTURES_DIR / 'valid_settings_fixture.yml')
    assert settings == NBTSettings(
        COMPRESS_BY_DEFAULT=False,
        COMPRESS_LEVEL=6,
        STRICT_LIST_LENGTH=True,
        MAX_DOCUMENT_BYTES=1048576,
    )


def test_empty_yaml_uses_defaults():
    assert NBTSettings.from_yaml(filepath=FIXTURES_DIR / 'empty_fixture.yml') == NBTSettings()


@pytest.mark.parametrize('filepath', [
    'invalid_extra_key_fixture.yml',
    'invalid_compress_level_fixture.yml',
    'invalid_max_bytes_fixture.yml',
])
def test_invalid_settings_from_yaml(filepath):
    with pytest.raises(ValidationError):
        NBTSettings.from_yaml(filepath=FIXTURES_DIR / filepath)


def test_yaml_must_be_a_dict():
    with pytest.raises(ValueError):
        NBTSettings.from_yaml(filepath=FIXTURES_DIR / 'list_fixture.yml')


def test_yaml_must_exist():
    with pytest.raises(ValueError):
        NBTSettings.from_yaml(filepath=FIXTURES_DIR / 'missing_fixture.yml')


def test_settings_are_frozen():
    settings = NBTSettings()
    with pytest.raises(ValidationError):
        settings.COMPRESS_LEVEL = 1  # type: ignore[misc]


def test_global_settings_default():
    settings = get_global_settings()
    assert settings == NBTSettings()
    assert get_global_settings() is settings


def test_global_settings_from_env(monkeypatch):
    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(FIXTURES_DIR / 'valid_settings_fixture.yml'))
    settings = get_global_settings()
    assert settings.STRICT_LIST_LENGTH is True
    # readers without explicit settings use the global ones
    with pytest.raises(MalformedArrayLengthError):
        loads(bytes.fromhex('0a 0000 09 0001 6c 03 ffffffff 00'))


def test_global_settings_source_cannot_change(monkeypatch):
    get_global_settings()
    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(FIXTURES_DIR / 'valid_settings_fixture.yml'))
    with pytest.raises(Exception, match='different file'):
        get_global_settings()
