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
Decorators that make classes encodable from their annotations.

A record is a dataclass or a NamedTuple decorated with `@digestable`, it's encoded as a struct of its fields in
declaration order:

>>> from dataclasses import dataclass
>>> from udigest.hashing import encode
>>> from udigest.types import U16
>>> @digestable
... @dataclass
... class Person:
...     name: str
...     age: U16
>>> encode(Person('Alice', 24)) == encode(inline_struct(name='Alice', age=U16(24)))
True

Annotations are checked when the class is decorated, unsupported types are rejected right away:

>>> @digestable  # doctest: +ELLIPSIS
... @dataclass
... class Bad:
...     scores: dict[str, U16]
Traceback (most recent call last):
...
udigest.exceptions.UnsupportedTypeError: Bad.scores: ...dict has no canonical iteration order, use SortedDict

Unions are a base class plus record variants:

>>> @digestable_union
... class Shape:
...     pass
>>> @Shape.variant
... @dataclass
... class Circle(Shape):
...     radius: U16
>>> encode(Circle(U16(1))) == encode(inline_struct(variant='Circle', radius=U16(1)))
True
"""

import dataclasses
from collections.abc import Iterable
from enum import Enum
from typing import Any, Callable, Optional, TypeVar, overload

from structlog import get_logger

from udigest.compound_encoding.struct import encode_struct, encode_variant
from udigest.digest_types import DEFAULT_TYPE_MAP, AnyDigestType, DigestType, RecordDigestType
from udigest.digest_types.record_digest_type import FIELD_OPTIONS_KEY, FieldOptions
from udigest.encoder import Data, EncodeValue
from udigest.exceptions import UnsupportedTypeError

logger = get_logger()

C = TypeVar('C', bound=type)

_ANY = AnyDigestType()


def field(
    *,
    rename: Optional[str] = None,
    skip: bool = False,
    as_bytes: bool = False,
    with_: Optional[Callable[[EncodeValue, Any], None]] = None,
    as_: Any = None,
    **kwargs: Any,
) -> Any:
    """ A `dataclasses.field` that also tells how the field is encoded.

    - `rename`: use a different name in the encoding
    - `skip`: leave the field out of the encoding
    - `as_bytes`: encode a sequence of byte values as a single bytestring
    - `with_`: encode with a function `(slot, value) -> None`
    - `as_`: convert the value to this type before encoding, `as_=U64` for plain ints or `as_=SortedDict` for dicts

    All options except `rename` are mutually exclusive. The remaining keyword arguments (`default`, `default_factory`,
    ...) are given to `dataclasses.field`. For NamedTuples, use it in the annotation: `Annotated[int, field(as_=U64)]`.
    """
    options = FieldOptions(rename=rename, skip=skip, as_bytes=as_bytes, with_=with_, as_=as_)
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[FIELD_OPTIONS_KEY] = options
    return dataclasses.field(metadata=metadata, **kwargs)


class _LazyRecordDigestType:
    """ Holds the DigestType of a record, built when the class is decorated or, when an annotation refers to a name
    that isn't defined yet (like the class itself), when the first value is encoded.
    """

    __slots__ = ('_class', '_tag', '_variant', '_digest_type')

    _digest_type: Optional[RecordDigestType]

    def __init__(self, class_: type, *, tag: Optional[Data], variant: Optional[str]) -> None:
        self._class = class_
        self._tag = tag
        self._variant = variant
        self._digest_type = None
        try:
            self.get()
        except NameError as e:
            logger.debug('record digest type deferred', record=class_.__qualname__, reason=str(e))

    def get(self) -> RecordDigestType:
        if self._digest_type is None:
            self._digest_type = RecordDigestType.from_record_class(
                self._class,
                type_map=DEFAULT_TYPE_MAP,
                tag=self._tag,
                variant=self._variant,
            )
        return self._digest_type


def _install_record_encoder(class_: type, *, tag: Optional[Data], variant: Optional[str]) -> None:
    lazy = _LazyRecordDigestType(class_, tag=tag, variant=variant)

    def unambiguously_encode(self: Any, encoder: EncodeValue, /) -> None:
        lazy.get().encode(encoder, self)

    unambiguously_encode.__qualname__ = f'{class_.__qualname__}.unambiguously_encode'
    setattr(class_, 'unambiguously_encode', unambiguously_encode)
    setattr(class_, '__udigest_record__', lazy)


def _install_enum_encoder(enum_class: type[Enum], *, tag: Optional[Data]) -> None:
    def unambiguously_encode(self: Enum, encoder: EncodeValue, /) -> None:
        encode_variant(encoder, self.name, tag=tag)

    unambiguously_encode.__qualname__ = f'{enum_class.__qualname__}.unambiguously_encode'
    setattr(enum_class, 'unambiguously_encode', unambiguously_encode)


def _is_record_class(class_: type) -> bool:
    return dataclasses.is_dataclass(class_) or (issubclass(class_, tuple) and hasattr(class_, '_fields'))


@overload
def digestable(class_: C, /) -> C:
    ...


@overload
def digestable(*, tag: Optional[Data] = None) -> Callable[[C], C]:
    ...


def digestable(class_: Optional[C] = None, /, *, tag: Optional[Data] = None) -> C | Callable[[C], C]:
    """ Makes a dataclass, a NamedTuple or an Enum encodable, by giving it an `unambiguously_encode` method.

    Can be used bare, `@digestable`, or with a context tag for the encoded struct, `@digestable(tag='my.record')`.
    It must be applied after `@dataclass`, that is, above it.
    """
    def wrap(cls: C) -> C:
        if isinstance(cls, type) and issubclass(cls, Enum):
            _install_enum_encoder(cls, tag=tag)
        elif isinstance(cls, type) and _is_record_class(cls):
            _install_record_encoder(cls, tag=tag, variant=None)
        else:
            raise UnsupportedTypeError(f'@digestable requires a dataclass, a NamedTuple or an Enum, got {cls!r}')
        return cls

    if class_ is None:
        return wrap
    return wrap(class_)


class _UnionVariants:
    """ Registry of the variants of a `@digestable_union` base class.
    """

    __slots__ = ('base', 'tag', 'variants')

    def __init__(self, base: type, tag: Optional[Data]) -> None:
        self.base = base
        self.tag = tag
        self.variants: dict[str, type] = {}

    def register(self, class_: C, name: Optional[str]) -> C:
        if not (isinstance(class_, type) and issubclass(class_, self.base)):
            raise TypeError(f'variant {class_!r} must be a subclass of {self.base.__name__}')
        if not _is_record_class(class_):
            raise UnsupportedTypeError(f'variant {class_.__name__} must be a dataclass or a NamedTuple')
        variant_name = name or class_.__name__
        if variant_name in self.variants:
            raise ValueError(f'{self.base.__name__} already has a variant named {variant_name!r}')
        self.variants[variant_name] = class_
        _install_record_encoder(class_, tag=self.tag, variant=variant_name)
        return class_


@overload
def digestable_union(class_: C, /) -> C:
    ...


@overload
def digestable_union(*, tag: Optional[Data] = None) -> Callable[[C], C]:
    ...


def digestable_union(class_: Optional[C] = None, /, *, tag: Optional[Data] = None) -> C | Callable[[C], C]:
    """ Makes a base class the union of its registered variants.

    Variants are subclasses registered with `@Base.variant` or `@Base.variant(name='Other')`, each is encoded as a
    struct whose first field is `"variant"` with the variant name (the class name by default), followed by the
    variant's own fields. Values of the base class itself, or of unregistered subclasses, can't be encoded.
    """
    def wrap(base: C) -> C:
        registry = _UnionVariants(base, tag)

        def variant(variant_class: Optional[C] = None, /, *, name: Optional[str] = None) -> Any:
            if variant_class is None:
                return lambda cls: registry.register(cls, name)
            return registry.register(variant_class, name)

        def unambiguously_encode(self: Any, encoder: EncodeValue, /) -> None:
            raise UnsupportedTypeError(f'{type(self).__name__} is not a registered variant of {base.__name__}')

        setattr(base, 'variant', staticmethod(variant))
        setattr(base, 'unambiguously_encode', unambiguously_encode)
        setattr(base, '__udigest_union__', registry)
        return base

    if class_ is None:
        return wrap
    return wrap(class_)


class InlineStruct:
    """ A struct built on the spot from keyword arguments, see `inline_struct`.
    """

    __slots__ = ('_tag', '_fields')

    def __init__(self, tag: Optional[Data], fields: Iterable[tuple[str, Any]]) -> None:
        self._tag = tag
        self._fields = tuple(fields)

    def __repr__(self) -> str:
        fields = ', '.join(f'{name}={value!r}' for name, value in self._fields)
        return f'inline_struct({fields})'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, InlineStruct) and (self._tag, self._fields) == (other._tag, other._fields)

    def __hash__(self) -> int:
        return hash((self._tag, self._fields))

    def unambiguously_encode(self, encoder: EncodeValue, /) -> None:
        encode_struct(encoder, ((name, value, _ANY.encode) for name, value in self._fields), tag=self._tag)


def inline_struct(_tag: Optional[Data] = None, /, **fields: Any) -> InlineStruct:
    """ Builds a struct from keyword arguments, in the given order, without declaring a record class.

    Values are encoded according to their runtime type, so plain ints must be wrapped in a sized type. It encodes the
    same as a `@digestable` record with the same field names and values.
    """
    return InlineStruct(_tag, fields.items())


def get_record_digest_type(class_: type) -> DigestType:
    """ Returns the DigestType built for a `@digestable` record.
    """
    lazy = getattr(class_, '__udigest_record__', None)
    if not isinstance(lazy, _LazyRecordDigestType):
        raise UnsupportedTypeError(f'{class_.__name__} is not a @digestable record')
    return lazy.get()
