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

from udigest.conf import UNITTESTS_SETTINGS_FILEPATH, get_settings
from udigest.conf.get_settings import (
    CONFIG_YAML_ENV_VAR,
    DEFAULT_SOURCE,
    get_global_settings,
    get_settings_source,
)
from udigest.conf.settings import DigestSettings
from udigest.utils.yaml import dict_from_extended_yaml, dict_from_yaml

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def _fixture(name: str) -> str:
    return str(FIXTURES_DIR / name)


@pytest.fixture
def no_settings(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setattr(get_settings, '_settings_singleton', None)
    monkeypatch.delenv(CONFIG_YAML_ENV_VAR, raising=False)
    return monkeypatch


def test_default_settings() -> None:
    settings = DigestSettings()
    assert settings.DEFAULT_HASH_ALGORITHM == 'sha256'
    assert settings.DEFAULT_XOF_ALGORITHM == 'shake_256'
    assert settings.DEFAULT_VOF_ALGORITHM == 'blake2b'
    assert settings.MAX_ENCODED_BYTES is None


def test_unittests_settings() -> None:
    settings = DigestSettings.from_yaml(filepath=UNITTESTS_SETTINGS_FILEPATH)
    assert settings.DEFAULT_HASH_ALGORITHM == 'sha256'
    assert settings.MAX_ENCODED_BYTES == 16 * 1024 * 1024


@pytest.mark.parametrize(
    ['filepath', 'expected'],
    [
        (
            'valid_settings_fixture.yml',
            DigestSettings(DEFAULT_HASH_ALGORITHM='sha512', DEFAULT_VOF_ALGORITHM='blake2s', MAX_ENCODED_BYTES=1024),
        ),
        (
            'extended_settings_fixture.yml',
            DigestSettings(DEFAULT_HASH_ALGORITHM='sha512', DEFAULT_VOF_ALGORITHM='blake2s', MAX_ENCODED_BYTES=2048),
        ),
        ('empty_settings_fixture.yml', DigestSettings()),
    ],
)
def test_valid_settings_from_yaml(filepath: str, expected: DigestSettings) -> None:
    assert DigestSettings.from_yaml(filepath=_fixture(filepath)) == expected


@pytest.mark.parametrize(
    ['filepath', 'error'],
    [
        ('invalid_xof_settings_fixture.yml', "Value error, expected one of ['shake_128', 'shake_256'], got sha256"),
        (
            'invalid_hash_settings_fixture.yml',
            'Value error, shake_256 is an extendable-output function, use DEFAULT_XOF_ALGORITHM',
        ),
        ('invalid_max_bytes_settings_fixture.yml', 'Value error, MAX_ENCODED_BYTES must be positive'),
        ('unknown_key_settings_fixture.yml', 'Extra inputs are not permitted'),
    ],
)
def test_invalid_settings_from_yaml(filepath: str, error: str) -> None:
    with pytest.raises(ValidationError) as e:
        DigestSettings.from_yaml(filepath=_fixture(filepath))

    assert error in str(e.value)


def test_unknown_hash_algorithm() -> None:
    with pytest.raises(ValidationError) as e:
        DigestSettings(DEFAULT_HASH_ALGORITHM='not-a-hash')

    assert 'unknown hash algorithm: not-a-hash' in str(e.value)


def test_settings_are_frozen() -> None:
    settings = DigestSettings()
    with pytest.raises(ValidationError):
        settings.MAX_ENCODED_BYTES = 10  # type: ignore[misc]


@pytest.mark.parametrize(
    'filepath',
    ['self_extending_settings_fixture.yml', 'list_settings_fixture.yml', 'missing_settings_fixture.yml'],
)
def test_invalid_yaml_files(filepath: str) -> None:
    with pytest.raises(ValueError):
        dict_from_extended_yaml(filepath=_fixture(filepath))


def test_extended_yaml_drops_the_extends_key() -> None:
    assert dict_from_yaml(filepath=_fixture('extended_settings_fixture.yml')) == dict(
        extends='valid_settings_fixture.yml',
        MAX_ENCODED_BYTES=2048,
    )
    assert dict_from_extended_yaml(filepath=_fixture('extended_settings_fixture.yml')) == dict(
        DEFAULT_HASH_ALGORITHM='sha512',
        DEFAULT_VOF_ALGORITHM='blake2s',
        MAX_ENCODED_BYTES=2048,
    )


def test_global_settings_from_env(no_settings: pytest.MonkeyPatch) -> None:
    filepath = _fixture('valid_settings_fixture.yml')
    no_settings.setenv(CONFIG_YAML_ENV_VAR, filepath)

    settings = get_global_settings()
    assert settings.DEFAULT_HASH_ALGORITHM == 'sha512'
    assert get_global_settings() is settings
    assert get_settings_source() == filepath


def test_global_settings_defaults(no_settings: pytest.MonkeyPatch) -> None:
    assert get_global_settings() == DigestSettings()
    assert get_settings_source() == DEFAULT_SOURCE


def test_global_settings_cannot_change_source(no_settings: pytest.MonkeyPatch) -> None:
    get_global_settings()
    no_settings.setenv(CONFIG_YAML_ENV_VAR, _fixture('valid_settings_fixture.yml'))

    with pytest.raises(Exception, match='loading config twice with a different file'):
        get_global_settings()


def test_settings_source_requires_loading(no_settings: pytest.MonkeyPatch) -> None:
    with pytest.raises(AssertionError):
        get_settings_source()
