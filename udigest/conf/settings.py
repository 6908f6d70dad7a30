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

import hashlib
from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator

from udigest.utils.pydantic import BaseModel
from udigest.utils.yaml import dict_from_extended_yaml

XOF_ALGORITHMS = frozenset({'shake_128', 'shake_256'})
VOF_ALGORITHMS = frozenset({'blake2b', 'blake2s'})


class DigestSettings(BaseModel):
    # hashlib name of the fixed-output hash used by `digest()` and `digest_iter()` when no algorithm is given
    DEFAULT_HASH_ALGORITHM: str = 'sha256'

    # extendable-output function used by `digest_xof()`
    DEFAULT_XOF_ALGORITHM: str = 'shake_256'

    # variable-output function used by `digest_vof()`, the output length is fixed when the hash is created
    DEFAULT_VOF_ALGORITHM: str = 'blake2b'

    # Maximum number of bytes a single top-level encoding may produce, `None` means no limit. This is a guard against
    # hashing unexpectedly large values, it never changes the bytes of an encoding that fits.
    MAX_ENCODED_BYTES: Optional[int] = None

    @field_validator('DEFAULT_HASH_ALGORITHM')
    @classmethod
    def _validate_hash_algorithm(cls, name: str) -> str:
        if name in XOF_ALGORITHMS:
            raise ValueError(f'{name} is an extendable-output function, use DEFAULT_XOF_ALGORITHM')
        if name not in hashlib.algorithms_available:
            raise ValueError(f'unknown hash algorithm: {name}')
        return name

    @field_validator('DEFAULT_XOF_ALGORITHM')
    @classmethod
    def _validate_xof_algorithm(cls, name: str) -> str:
        if name not in XOF_ALGORITHMS:
            raise ValueError(f'expected one of {sorted(XOF_ALGORITHMS)}, got {name}')
        return name

    @field_validator('DEFAULT_VOF_ALGORITHM')
    @classmethod
    def _validate_vof_algorithm(cls, name: str) -> str:
        if name not in VOF_ALGORITHMS:
            raise ValueError(f'expected one of {sorted(VOF_ALGORITHMS)}, got {name}')
        return name

    @field_validator('MAX_ENCODED_BYTES')
    @classmethod
    def _validate_max_encoded_bytes(cls, max_bytes: Optional[int]) -> Optional[int]:
        if max_bytes is not None and max_bytes <= 0:
            raise ValueError('MAX_ENCODED_BYTES must be positive')
        return max_bytes

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'DigestSettings':
        """Takes a filepath to a yaml file and returns a validated DigestSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return DigestSettings.model_validate(settings_dict)
