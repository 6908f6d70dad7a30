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

from collections.abc import Mapping
from enum import Enum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, Union, get_args, get_origin

from structlog import get_logger

from udigest.digestable import Digestable
from udigest.exceptions import UnsupportedTypeError

if TYPE_CHECKING:
    from udigest.digest_types.digest_type import DigestType


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[type | UnionType, type]
TypeToDigestTypeMap: TypeAlias = Mapping[type | UnionType | tuple[type, ...], type['DigestType']]
RejectedTypeMap: TypeAlias = Mapping[type, str]

# Types that have no unambiguous encoding, and why. Subclasses are rejected too, unless they have their own entry in
# the digest types map (like `OrderedDict` or `bool`).
DEFAULT_REJECTED_TYPE_MAP: RejectedTypeMap = {
    dict: 'dict has no canonical iteration order, use SortedDict',
    set: 'set has no canonical iteration order, use SortedSet',
    frozenset: 'frozenset has no canonical iteration order, use SortedSet',
    int: 'int has no fixed width, use one of U8..U128 or I8..I128',
    float: 'float has no canonical encoding',
    complex: 'complex has no canonical encoding',
}


def is_digestable_class(type_: Any) -> bool:
    """ Whether the class implements `unambiguously_encode`, either by hand or through `@digestable`.

    >>> is_digestable_class(int)
    False
    >>> class Foo:
    ...     def unambiguously_encode(self, slot):
    ...         pass
    >>> is_digestable_class(Foo)
    True

    The encoder of a `@digestable` record only covers the fields of that record, so it isn't inherited:

    >>> from dataclasses import dataclass
    >>> from udigest.derive import digestable
    >>> @digestable
    ... @dataclass
    ... class Base:
    ...     x: str
    >>> @dataclass
    ... class Child(Base):
    ...     y: str
    >>> is_digestable_class(Base), is_digestable_class(Child)
    (True, False)
    """
    if not isinstance(type_, type) or not callable(getattr(type_, 'unambiguously_encode', None)):
        return False
    if hasattr(type_, '__udigest_record__'):
        return '__udigest_record__' in vars(type_) or 'unambiguously_encode' in vars(type_)
    return True


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(None)
    'None'
    >>> pretty_type(list[int])
    'list[int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') or not hasattr(type_, '__name__'):
        return str(type_)
    else:
        return type_.__name__


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `bytearray` is mapped to `bytes` in the default alias map:

    >>> from udigest.digest_types import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(tuple[str, list[bytearray]], alias_map, _verbose=False)
    tuple[str, list[bytes]]
    >>> from typing import Optional
    >>> get_aliased_type(Optional[memoryview], alias_map, _verbose=False)
    bytes | None
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_)
    if not type_args:
        return aliased_origin, replaced

    aliased_args = []
    for arg in type_args:
        if arg is Ellipsis:
            aliased_args.append(arg)
            continue
        aliased_arg, arg_replaced = _get_aliased_type(arg, alias_map)
        aliased_args.append(aliased_arg)
        replaced |= arg_replaced

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    if not replaced:
        return type_, False

    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[*aliased_args], replaced


def _get_rejection_reason(origin: Any, rejected_map: RejectedTypeMap) -> str | None:
    for rejected_type, reason in rejected_map.items():
        if origin is rejected_type or (isinstance(origin, type) and issubclass(origin, rejected_type)):
            return reason
    return None


def get_usable_origin_type(
    type_: Any,
    /,
    *,
    type_map: 'DigestType.TypeMap',
    _verbose: bool = True,
) -> Any:
    """ Map a given type into a key that is usable in a DigestType.TypeMap.

    The returned key is guaranteed to exist in `type_map.digest_types_map`, if the given type cannot be used an
    `UnsupportedTypeError` is raised, with the reason when the type is explicitly rejected:

    >>> from udigest.digest_types import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(list[str], type_map=type_map, _verbose=False)
    <class 'list'>
    >>> get_usable_origin_type(dict[str, int], type_map=type_map, _verbose=False)
    Traceback (most recent call last):
    ...
    udigest.exceptions.UnsupportedTypeError: dict[str, int]: dict has no canonical iteration order, use SortedDict
    """
    if isinstance(type_, str):
        raise UnsupportedTypeError(f'string annotation {type_!r} must be resolved before use')

    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type

    # XXX: a union of generic aliases, like `Ok[str] | Err[U8]`, is a typing.Union and not a types.UnionType
    if origin_aliased_type is Union:
        origin_aliased_type = UnionType

    if origin_aliased_type is UnionType:
        # When None is not in the union, the union is indexed by the origins of its args, that's how results are
        # recognized: (Ok, Err)
        args = get_args(aliased_type)
        if NoneType not in args:
            origin_aliased_type = tuple(get_origin(arg) or arg for arg in args)

    if origin_aliased_type in type_map.digest_types_map:
        return origin_aliased_type

    if is_digestable_class(origin_aliased_type) and Digestable in type_map.digest_types_map:
        return Digestable

    is_enum = isinstance(origin_aliased_type, type) and issubclass(origin_aliased_type, Enum)
    if is_enum and Enum in type_map.digest_types_map:
        return Enum

    reason = _get_rejection_reason(origin_aliased_type, type_map.rejected_map)
    if reason is not None:
        raise UnsupportedTypeError(f'{pretty_type(type_)}: {reason}')

    hint = ''
    if isinstance(origin_aliased_type, type) and (
        hasattr(origin_aliased_type, '__dataclass_fields__') or hasattr(origin_aliased_type, '_fields')
    ):
        hint = ', records must be decorated with @digestable'
    raise UnsupportedTypeError(f'type {pretty_type(type_)} is not supported by any DigestType class{hint}')
