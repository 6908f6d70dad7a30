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

from collections import OrderedDict, deque
from enum import Enum
from types import UnionType
from typing import Any, TypeVar, Union

from sortedcontainers import SortedDict, SortedSet

from udigest.digest_types.any_digest_type import AnyDigestType, get_value_digest_type
from udigest.digest_types.bool_digest_type import BoolDigestType
from udigest.digest_types.bytes_digest_type import AsBytesDigestType, BytesDigestType
from udigest.digest_types.collection_digest_type import SequenceDigestType, SortedSetDigestType
from udigest.digest_types.custom_digest_type import CustomDigestType, EncoderDigestType
from udigest.digest_types.digest_type import DigestType
from udigest.digest_types.enum_digest_type import EnumDigestType
from udigest.digest_types.map_digest_type import OrderedDictDigestType, SortedDictDigestType
from udigest.digest_types.optional_digest_type import OptionalDigestType
from udigest.digest_types.record_digest_type import RecordDigestType
from udigest.digest_types.result_digest_type import ResultDigestType
from udigest.digest_types.sized_int_digest_type import SizedIntDigestType
from udigest.digest_types.str_digest_type import StrDigestType
from udigest.digest_types.tuple_digest_type import TupleDigestType
from udigest.digest_types.utils import (
    DEFAULT_REJECTED_TYPE_MAP,
    RejectedTypeMap,
    TypeAliasMap,
    TypeToDigestTypeMap,
)
from udigest.digestable import Digestable
from udigest.types import SIZED_INT_TYPES
from udigest.utils.result import Err, Ok

__all__ = [
    'DEFAULT_REJECTED_TYPE_MAP',
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_DIGEST_TYPE_MAP',
    'AnyDigestType',
    'AsBytesDigestType',
    'BoolDigestType',
    'BytesDigestType',
    'CustomDigestType',
    'DigestType',
    'EncoderDigestType',
    'EnumDigestType',
    'OptionalDigestType',
    'OrderedDictDigestType',
    'RecordDigestType',
    'RejectedTypeMap',
    'ResultDigestType',
    'SequenceDigestType',
    'SizedIntDigestType',
    'SortedDictDigestType',
    'SortedSetDigestType',
    'StrDigestType',
    'TupleDigestType',
    'TypeAliasMap',
    'TypeToDigestTypeMap',
    'get_value_digest_type',
    'make_digest_type',
]

T = TypeVar('T')

DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically typing.Union is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,  # type: ignore[dict-item]
    bytearray: bytes,
    memoryview: bytes,
}

# Mapping between types and DigestType classes.
DEFAULT_TYPE_TO_DIGEST_TYPE_MAP: TypeToDigestTypeMap = {
    # builtin types:
    bool: BoolDigestType,
    bytes: BytesDigestType,
    str: StrDigestType,
    list: SequenceDigestType,
    tuple: TupleDigestType,
    # other Python types:
    deque: SequenceDigestType,
    OrderedDict: OrderedDictDigestType,
    UnionType: OptionalDigestType,
    Enum: EnumDigestType,
    # XXX: ignored dict-item because typing.Any is not a type, but it works for our case
    Any: AnyDigestType,  # type: ignore[dict-item]
    # third-party types:
    SortedDict: SortedDictDigestType,
    SortedSet: SortedSetDigestType,
    # udigest types:
    **{int_type: SizedIntDigestType for int_type in SIZED_INT_TYPES},
    (Ok, Err): ResultDigestType,
    (Err, Ok): ResultDigestType,
    Digestable: CustomDigestType,
}

DEFAULT_TYPE_MAP = DigestType.TypeMap(
    DEFAULT_TYPE_ALIAS_MAP,
    DEFAULT_TYPE_TO_DIGEST_TYPE_MAP,
    DEFAULT_REJECTED_TYPE_MAP,
)


def make_digest_type(type_: Any, /) -> DigestType:
    """ Like DigestType.from_type, but with the default maps.

    If you need to customize the mapping use `DigestType.from_type` instead.

    >>> make_digest_type(tuple[str, bool]).to_bytes(('foo', False)).hex()
    '666f6f00000003050300000000010503000000020501'
    """
    return DigestType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
