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

from __future__ import annotations

from typing_extensions import Self, override

from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.encoding.utf8 import encode_utf8


class StrDigestType(DigestType[str]):
    """ Represents builtin `str` values, encoded as their utf-8 bytes.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: DigestType.TypeMap) -> Self:
        if type_ is not str:
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str')
        # XXX: lone surrogates have no utf-8 representation
        try:
            value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValueError(f'str cannot be encoded as utf-8: {e.reason}') from e

    @override
    def _encode(self, slot: EncodeValue, value: str, /) -> None:
        encode_utf8(slot, value)
