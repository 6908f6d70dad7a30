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

from abc import ABC, abstractmethod
from typing import Any, Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from udigest.buffer import Buffer
from udigest.digest_types.utils import (
    RejectedTypeMap,
    TypeAliasMap,
    TypeToDigestTypeMap,
    get_aliased_type,
    get_usable_origin_type,
)
from udigest.encoder import EncodeValue

T = TypeVar('T')


class DigestType(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how its values are encoded.

    It's the "is encodable" capability: a `DigestType` can only be built for annotations that have an unambiguous
    encoding, so unsupported types are rejected when the `DigestType` is built, before any value is encoded. Instances
    are immutable and can be shared.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        digest_types_map: TypeToDigestTypeMap
        rejected_map: RejectedTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: Any, /, *, type_map: TypeMap) -> DigestType:
        """ Instantiate a DigestType instance from a type signature using the given maps.

        The `digest_types_map` associates concrete types to concrete DigestType classes, the `alias_map` associates
        types with substitute types to use instead and the `rejected_map` tells why a type can't be used.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        digest_type = type_map.digest_types_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=False)
        return digest_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TypeMap) -> Self:
        """ Instantiate a DigestType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `DigestType.from_type` for the args, forwarding the given `type_map`.
        """
        # XXX: a DigestType that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a DigestType.TypeMap')

    @final
    def check_value(self, value: T, /) -> None:
        """ Raises a TypeError if the value is not compatible, compound values are checked recursively.
        """
        # XXX: subclasses must implement DigestType._check_value, not DigestType.check_value
        self._check_value(value, deep=True)

    @final
    def encode(self, slot: EncodeValue, value: T, /) -> None:
        """ Encode a value into the given slot according to the signature that was abstracted.

        Encoding includes a shallow `check_value`, compound types check their items as they encode them, so calling
        `check_value` before is not needed.
        """
        # XXX: subclasses must implement DigestType._encode, not DigestType.encode
        self._check_value(value, deep=False)
        self._encode(slot, value)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to get the encoding of a value without dealing with buffers and slots.
        """
        buffer = Buffer.build_bytes_buffer()
        with EncodeValue(buffer) as slot:
            self.encode(slot, value)
        return buffer.finalize()

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `DigestType.check_value`, should raise a TypeError when the value is not valid.

        Compound values should use `DigestType._check_value` on the inner type(s) and pass the `deep` argument along.
        """
        raise NotImplementedError

    @abstractmethod
    def _encode(self, slot: EncodeValue, value: T, /) -> None:
        """ Inner implementation of `encode`, you can assume that the given value has been "shallow checked".

        When using compound encoders, `DigestType.encode` should be passed as the `Encoder` instead of
        `DigestType._encode`, that way the inner values are checked too.
        """
        raise NotImplementedError
