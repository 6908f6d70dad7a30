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
from udigest.encoding.int import encode_int
from udigest.types import SizedInt


class SizedIntDigestType(DigestType[int]):
    """ Represents integers with a fixed size and signedness, given by one of the `udigest.types.SizedInt` classes.

    Any `int` in range is accepted when the type is declared, the declared width is used to encode it:

    >>> from udigest.types import U16
    >>> SizedIntDigestType(U16).to_bytes(24).hex()
    '0018000000020503'
    """

    __slots__ = ('_int_type',)

    _int_type: type[SizedInt]

    def __init__(self, int_type: type[SizedInt], /) -> None:
        self._int_type = int_type

    @override
    @classmethod
    def _from_type(cls, type_: type[SizedInt], /, *, type_map: DigestType.TypeMap) -> Self:
        if not (isinstance(type_, type) and issubclass(type_, SizedInt)):
            raise TypeError('expected sized int type')
        return cls(type_)

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError('expected integer')
        if value > self._int_type.upper_bound():
            raise ValueError(f'above upper bound of {self._int_type.__name__}')
        if value < self._int_type.lower_bound():
            raise ValueError(f'below lower bound of {self._int_type.__name__}')

    @override
    def _encode(self, slot: EncodeValue, value: int, /) -> None:
        encode_int(slot, value, length=self._int_type.byte_size(), signed=self._int_type.is_signed())
