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

import dataclasses
from collections import OrderedDict, deque
from enum import Enum
from typing import Any

from sortedcontainers import SortedDict, SortedSet
from typing_extensions import Self, override

from udigest.digest_types.bool_digest_type import BoolDigestType
from udigest.digest_types.bytes_digest_type import BytesDigestType
from udigest.digest_types.collection_digest_type import SequenceDigestType, SortedSetDigestType
from udigest.digest_types.custom_digest_type import CustomDigestType
from udigest.digest_types.digest_type import DigestType
from udigest.digest_types.enum_digest_type import EnumDigestType
from udigest.digest_types.map_digest_type import OrderedDictDigestType, SortedDictDigestType
from udigest.digest_types.optional_digest_type import OptionalDigestType
from udigest.digest_types.result_digest_type import ResultDigestType
from udigest.digest_types.sized_int_digest_type import SizedIntDigestType
from udigest.digest_types.str_digest_type import StrDigestType
from udigest.digest_types.utils import DEFAULT_REJECTED_TYPE_MAP, is_digestable_class
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError
from udigest.types import SizedInt
from udigest.utils.result import OkErr


class AnyDigestType(DigestType[Any]):
    """ Chooses how to encode a value by looking at its runtime type.

    This is what's used when no type is given to the top-level functions, and for `typing.Any` annotations. Values
    whose type has no unambiguous encoding are rejected the same way the annotations would be:

    >>> from udigest.types import U8
    >>> AnyDigestType().to_bytes(['a', U8(1)]).hex()
    '6100000001050301000000010503000000020501'
    >>> AnyDigestType().to_bytes({'a': 1})
    Traceback (most recent call last):
    ...
    udigest.exceptions.UnsupportedTypeError: dict has no canonical iteration order, use SortedDict
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: DigestType.TypeMap) -> Self:
        if type_ is not Any:
            raise UnsupportedTypeError('expected typing.Any')
        return cls()

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        digest_type = get_value_digest_type(value)
        if deep:
            digest_type._check_value(value, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: Any, /) -> None:
        get_value_digest_type(value).encode(slot, value)


_ANY = AnyDigestType()


def get_value_digest_type(value: Any) -> DigestType:
    """ Build the DigestType for a value based on its runtime type, inner values are dispatched when encoded.

    An untyped `None` is encoded as the `None` variant of an optional.
    """
    if value is None:
        return OptionalDigestType(_ANY)
    # XXX: before the builtin types, records can be NamedTuples and enums can subclass str or int
    if is_digestable_class(type(value)):
        return CustomDigestType(type(value))
    if isinstance(value, Enum):
        return EnumDigestType(type(value))
    if isinstance(value, bool):
        return BoolDigestType()
    if isinstance(value, SizedInt):
        return SizedIntDigestType(type(value))
    if isinstance(value, str):
        return StrDigestType()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesDigestType()
    if isinstance(value, OkErr):
        return ResultDigestType(_ANY, _ANY)
    if isinstance(value, SortedDict):
        return SortedDictDigestType(_ANY, _ANY)
    if isinstance(value, OrderedDict):
        return OrderedDictDigestType(_ANY, _ANY)
    if isinstance(value, SortedSet):
        return SortedSetDigestType(_ANY)
    if isinstance(value, tuple) and hasattr(value, '_fields'):
        name = type(value).__name__
        raise UnsupportedTypeError(f'{name} is a NamedTuple, records must be decorated with @digestable')
    if isinstance(value, (list, tuple, deque)):
        return SequenceDigestType(_ANY)
    for rejected_type, reason in DEFAULT_REJECTED_TYPE_MAP.items():
        if isinstance(value, rejected_type):
            raise UnsupportedTypeError(reason)
    if dataclasses.is_dataclass(value):
        name = type(value).__name__
        raise UnsupportedTypeError(f'{name} is a dataclass, records must be decorated with @digestable')
    raise UnsupportedTypeError(f'values of type {type(value).__name__} are not supported')
