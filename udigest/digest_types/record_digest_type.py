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

"""
This DigestType class is not meant for use in a TypeMap, it's what `@digestable` builds for dataclasses and
NamedTuples. Records reach other DigestTypes through `CustomDigestType`, since `@digestable` gives them an
`unambiguously_encode` method.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from typing import Annotated, Any, Callable, NamedTuple, Optional, TypeVar, get_args, get_origin, get_type_hints

from structlog import get_logger
from typing_extensions import Self, override

from udigest.compound_encoding.struct import Field, encode_struct, encode_variant
from udigest.digest_types.bytes_digest_type import AsBytesDigestType
from udigest.digest_types.custom_digest_type import EncoderDigestType
from udigest.digest_types.digest_type import DigestType
from udigest.encoder import Data, EncodeValue
from udigest.exceptions import UnsupportedTypeError

logger = get_logger()

R = TypeVar('R')

# key used in `dataclasses.Field.metadata`
FIELD_OPTIONS_KEY = 'udigest'


@dataclasses.dataclass(frozen=True, slots=True)
class FieldOptions:
    """ How a single record field is encoded, see `udigest.derive.field`.
    """
    rename: Optional[str] = None
    skip: bool = False
    as_bytes: bool = False
    with_: Optional[Callable[[EncodeValue, Any], None]] = None
    as_: Any = None

    def __post_init__(self) -> None:
        chosen = [
            name
            for name, is_set in [
                ('skip', self.skip),
                ('as_bytes', self.as_bytes),
                ('with_', self.with_ is not None),
                ('as_', self.as_ is not None),
            ]
            if is_set
        ]
        if len(chosen) > 1:
            raise ValueError(f'field options are mutually exclusive: {", ".join(chosen)}')


class RecordField(NamedTuple):
    name: str
    attr: str
    digest_type: DigestType
    convert: Optional[Callable[[Any], Any]]

    def get_value(self, record: Any) -> Any:
        value = getattr(record, self.attr)
        return value if self.convert is None else self.convert(value)


def _options_from(extra: Any) -> Optional[FieldOptions]:
    if isinstance(extra, FieldOptions):
        return extra
    if isinstance(extra, dataclasses.Field):
        return extra.metadata.get(FIELD_OPTIONS_KEY)
    return None


def _iter_record_attrs(class_: type) -> Iterator[tuple[str, Optional[FieldOptions]]]:
    if dataclasses.is_dataclass(class_):
        for field in dataclasses.fields(class_):
            yield field.name, field.metadata.get(FIELD_OPTIONS_KEY)
    elif issubclass(class_, tuple) and hasattr(class_, '_fields'):
        for name in class_._fields:
            yield name, None
    else:
        raise UnsupportedTypeError(f'{class_.__name__} must be a dataclass or a NamedTuple')


def _split_annotation(hint: Any, options: Optional[FieldOptions]) -> tuple[Any, FieldOptions]:
    """ Separates the options given through `Annotated[T, field(...)]` from the annotation itself.
    """
    if get_origin(hint) is Annotated:
        hint, *extras = get_args(hint)
        for extra in extras:
            extra_options = _options_from(extra)
            if extra_options is None:
                continue
            if options is not None:
                raise ValueError('field options were given twice')
            options = extra_options
    return hint, options or FieldOptions()


def _retarget(target: Any, annotation: Any) -> Any:
    """ Completes a bare `as_` target with the arguments of the annotation, `SortedDict` on `dict[str, U8]` becomes
    `SortedDict[str, U8]`.
    """
    args = get_args(annotation)
    if get_args(target) or not args or not hasattr(target, '__class_getitem__'):
        return target
    if target is tuple:
        if len(args) != 1:
            raise UnsupportedTypeError(f'cannot convert {annotation} to a tuple')
        return tuple[args[0], ...]
    return target[*args]


class RecordDigestType(DigestType[R]):
    """ Encodes a record as a struct of its fields, in declaration order, or as a variant of a union.
    """

    __slots__ = ('_class', '_fields', '_tag', '_variant')

    _class: type[R]
    _fields: tuple[RecordField, ...]
    _tag: Optional[Data]
    _variant: Optional[str]

    def __init__(
        self,
        class_: type[R],
        fields: tuple[RecordField, ...],
        *,
        tag: Optional[Data] = None,
        variant: Optional[str] = None,
    ) -> None:
        self._class = class_
        self._fields = fields
        self._tag = tag
        self._variant = variant

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self._fields)

    @classmethod
    def from_record_class(
        cls,
        class_: type[R],
        /,
        *,
        type_map: DigestType.TypeMap,
        tag: Optional[Data] = None,
        variant: Optional[str] = None,
    ) -> Self:
        """ Build the DigestType of a dataclass or NamedTuple, every field annotation is checked here.

        Raises `NameError` when an annotation refers to a name that doesn't exist (yet).
        """
        hints = get_type_hints(class_, include_extras=True)
        fields: list[RecordField] = []
        for attr, field_options in _iter_record_attrs(class_):
            annotation, options = _split_annotation(hints[attr], field_options)
            if options.skip:
                continue
            convert: Optional[Callable[[Any], Any]] = None
            digest_type: DigestType
            if options.with_ is not None:
                digest_type = EncoderDigestType(options.with_)
            elif options.as_bytes:
                digest_type = AsBytesDigestType()
            elif options.as_ is not None:
                target = _retarget(options.as_, annotation)
                convert = get_origin(target) or target
                digest_type = DigestType.from_type(target, type_map=type_map)
            else:
                try:
                    digest_type = DigestType.from_type(annotation, type_map=type_map)
                except UnsupportedTypeError as e:
                    raise UnsupportedTypeError(f'{class_.__qualname__}.{attr}: {e}') from e
            fields.append(RecordField(options.rename or attr, attr, digest_type, convert))

        names = [field.name for field in fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f'{class_.__qualname__} has duplicated field names: {", ".join(duplicates)}')

        logger.debug('record digest type built', record=class_.__qualname__, fields=names, variant=variant)
        return cls(class_, tuple(fields), tag=tag, variant=variant)

    def _iter_fields(self, value: R) -> Iterator[Field]:
        for field in self._fields:
            yield field.name, field.get_value(value), field.digest_type.encode

    @override
    def _check_value(self, value: R, /, *, deep: bool) -> None:
        # XXX: exact class, a subclass can have fields that this record doesn't know about
        if type(value) is not self._class:
            raise TypeError(f'expected {self._class.__name__} instance, got {type(value).__name__}')
        if deep:
            for field in self._fields:
                field.digest_type._check_value(field.get_value(value), deep=True)

    @override
    def _encode(self, slot: EncodeValue, value: R, /) -> None:
        if self._variant is None:
            encode_struct(slot, self._iter_fields(value), tag=self._tag)
        else:
            encode_variant(slot, self._variant, self._iter_fields(value), tag=self._tag)
