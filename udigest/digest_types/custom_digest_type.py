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

from typing import Any, Callable, TypeVar

from typing_extensions import Self, override

from udigest.digest_types.digest_type import DigestType
from udigest.digest_types.utils import is_digestable_class
from udigest.digestable import Digestable
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError

D = TypeVar('D', bound=Digestable)


class CustomDigestType(DigestType[D]):
    """ Represents instances of classes that encode themselves through `unambiguously_encode`.

    That's the case of `@digestable` records and unions, and of any class implementing the `Digestable` protocol. The
    method is only looked up when a value is encoded, so self-referencing classes are supported.
    """

    __slots__ = ('_class',)

    _class: type[D]

    def __init__(self, class_: type[D], /) -> None:
        self._class = class_

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: DigestType.TypeMap) -> Self:
        if not is_digestable_class(type_):
            raise UnsupportedTypeError(f'{type_} does not implement unambiguously_encode')
        return cls(type_)

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance')
        value_class = type(value)
        if not is_digestable_class(value_class):
            raise UnsupportedTypeError(f'{value_class.__name__} is a subclass of a @digestable record, it must be '
                                       'decorated with @digestable too')
        union = getattr(value_class, '__udigest_union__', None)
        if union is not None and '__udigest_record__' not in vars(value_class):
            raise UnsupportedTypeError(f'{value_class.__name__} is not a registered variant of {union.base.__name__}')
        if deep:
            # XXX: the value's own class, it can be a variant of the annotated union
            record = getattr(value_class, '__udigest_record__', None)
            if record is not None:
                record.get()._check_value(value, deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: D, /) -> None:
        value.unambiguously_encode(slot)


class EncoderDigestType(DigestType[Any]):
    """ Wraps a plain encoder function, as given to `field(with_=...)`.

    The function receives the slot and the value, and must encode exactly one value into the slot. Values are not
    checked, that's up to the function.
    """

    __slots__ = ('_encoder',)

    _encoder: Callable[[EncodeValue, Any], None]

    def __init__(self, encoder: Callable[[EncodeValue, Any], None], /) -> None:
        self._encoder = encoder

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        pass

    @override
    def _encode(self, slot: EncodeValue, value: Any, /) -> None:
        self._encoder(slot, value)
