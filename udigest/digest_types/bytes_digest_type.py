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

from collections.abc import Iterable

from typing_extensions import Self, override

from udigest.buffer import BytesLike
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import EncodeValue
from udigest.encoding.bytes import encode_bytes


class BytesDigestType(DigestType[BytesLike]):
    """ Represents `bytes` values, `bytearray` and `memoryview` are accepted and encoded the same way.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: type[BytesLike], /, *, type_map: DigestType.TypeMap) -> Self:
        if type_ is not bytes:
            raise TypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: BytesLike, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError('expected bytes-like value')

    @override
    def _encode(self, slot: EncodeValue, value: BytesLike, /) -> None:
        encode_bytes(slot, value)


class AsBytesDigestType(DigestType[Iterable[int]]):
    """ Encodes a sequence of byte values as a single leaf instead of a list of items.

    This is not part of any TypeMap, it is used for record fields declared with `field(as_bytes=True)`.

    >>> AsBytesDigestType().to_bytes([1, 2]) == BytesDigestType().to_bytes(b'\\x01\\x02')
    True
    """

    __slots__ = ()

    @override
    def _check_value(self, value: Iterable[int], /, *, deep: bool) -> None:
        if isinstance(value, (str, dict)) or not isinstance(value, Iterable):
            raise TypeError('expected an iterable of byte values')

    @override
    def _encode(self, slot: EncodeValue, value: Iterable[int], /) -> None:
        try:
            data = bytes(value)
        except (TypeError, ValueError) as e:
            raise TypeError('expected an iterable of byte values') from e
        encode_bytes(slot, data)
