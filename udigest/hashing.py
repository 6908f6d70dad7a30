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
Top-level entry points: encode a value, or feed its encoding to a hash function.

The domain separation tag, when given, is written first as a leaf, followed by the encoding of the value. A value is
encoded according to `type_` when it's given, otherwise according to its runtime type.

>>> encode('123', tag='SOME_TAG').hex()
'534f4d455f544147000000080503313233000000030503'
>>> digest(b'', algorithm='sha256') == digest(b'', algorithm=hashes.SHA256())
True
>>> len(digest_xof('foo', 100)), len(digest_vof('foo', 20))
(100, 20)
"""

import hashlib
from collections.abc import Iterable
from typing import Any, Optional, Union

from cryptography.hazmat.primitives import hashes

from udigest.adapters import MaxBytesBuffer, Updatable, UpdateBuffer
from udigest.buffer import Buffer
from udigest.conf import get_global_settings
from udigest.consts import LIST_TAG
from udigest.digest_types import DigestType, get_value_digest_type, make_digest_type
from udigest.encoder import Data, EncodeValue
from udigest.encoding.bytes import encode_bytes

# a hashlib algorithm name or a `cryptography` hash algorithm instance
HashAlgorithm = Union[str, hashes.HashAlgorithm]

# a hashlib algorithm name or a `cryptography` hash algorithm class that takes the output size
SizedHashAlgorithm = Union[str, type[hashes.HashAlgorithm]]


def _get_digest_type(value: Any, type_: Any) -> DigestType:
    if type_ is None:
        return get_value_digest_type(value)
    return make_digest_type(type_)


def _limit_buffer(buffer: Buffer) -> Buffer:
    max_bytes = get_global_settings().MAX_ENCODED_BYTES
    if max_bytes is None:
        return buffer
    return MaxBytesBuffer(buffer, max_bytes)


def encode_tag(buffer: Buffer, tag: Data) -> None:
    """ Writes a domain separation tag, it is encoded exactly like a bytestring value.
    """
    with EncodeValue(buffer) as slot:
        encode_bytes(slot, tag.encode('utf-8') if isinstance(tag, str) else tag)


def encode_into(buffer: Buffer, value: Any, *, tag: Optional[Data] = None, type_: Any = None) -> None:
    """ Writes the encoding of a value (preceded by the tag, if any) into the given buffer.

    The `DigestType` is built before anything is written, so an unsupported type never leaves a partial encoding.
    """
    digest_type = _get_digest_type(value, type_)
    digest_type.check_value(value)
    if tag is not None:
        encode_tag(buffer, tag)
    with EncodeValue(buffer) as slot:
        digest_type.encode(slot, value)


def encode(value: Any, *, tag: Optional[Data] = None, type_: Any = None) -> bytes:
    """ Returns the encoding of a value (preceded by the tag, if any).
    """
    buffer = Buffer.build_bytes_buffer()
    encode_into(_limit_buffer(buffer), value, tag=tag, type_=type_)
    return buffer.finalize()


def _feed(hasher: Updatable, value: Any, *, tag: Optional[Data], type_: Any) -> None:
    encode_into(_limit_buffer(UpdateBuffer(hasher)), value, tag=tag, type_=type_)


def _fixed_hasher(algorithm: Optional[HashAlgorithm]) -> Any:
    if algorithm is None:
        algorithm = get_global_settings().DEFAULT_HASH_ALGORITHM
    if isinstance(algorithm, hashes.HashAlgorithm):
        return _CryptographyHasher(hashes.Hash(algorithm))
    return _HashlibHasher(hashlib.new(algorithm))


class _HashlibHasher:
    __slots__ = ('_inner', '_length')

    def __init__(self, inner: Any, length: Optional[int] = None) -> None:
        self._inner = inner
        self._length = length

    def update(self, data: bytes, /) -> None:
        self._inner.update(data)

    def finalize(self) -> bytes:
        if self._length is None:
            return self._inner.digest()
        return self._inner.digest(self._length)


class _CryptographyHasher:
    __slots__ = ('_inner',)

    def __init__(self, inner: hashes.Hash) -> None:
        self._inner = inner

    def update(self, data: bytes, /) -> None:
        self._inner.update(data)

    def finalize(self) -> bytes:
        return self._inner.finalize()


def digest(
    value: Any,
    *,
    tag: Optional[Data] = None,
    type_: Any = None,
    algorithm: Optional[HashAlgorithm] = None,
) -> bytes:
    """ Hashes the encoding of a value with a fixed-output hash function, `sha256` unless configured otherwise.
    """
    hasher = _fixed_hasher(algorithm)
    _feed(hasher, value, tag=tag, type_=type_)
    return hasher.finalize()


def digest_iter(
    values: Iterable[Any],
    *,
    tag: Optional[Data] = None,
    type_: Any = None,
    algorithm: Optional[HashAlgorithm] = None,
) -> bytes:
    """ Hashes the items of an iterable as a list with the context tag `udigest.list`, without collecting them first.

    When `type_` is given, it's the type of each item.
    """
    hasher = _fixed_hasher(algorithm)
    buffer = _limit_buffer(UpdateBuffer(hasher))
    item_digest_type = None if type_ is None else make_digest_type(type_)
    if tag is not None:
        encode_tag(buffer, tag)
    with EncodeValue(buffer) as slot:
        with slot.encode_list() as list_:
            list_.set_tag(LIST_TAG)
            for value in values:
                digest_type = item_digest_type or get_value_digest_type(value)
                digest_type.encode(list_.add_item(), value)
    return hasher.finalize()


def _sized_hasher(algorithm: SizedHashAlgorithm, length: int, *, xof: bool) -> Any:
    if length <= 0:
        raise ValueError('output length must be positive')
    if isinstance(algorithm, type) and issubclass(algorithm, hashes.HashAlgorithm):
        # XXX: only works for classes that take the output size, like SHAKE256 or BLAKE2b
        return _CryptographyHasher(hashes.Hash(algorithm(digest_size=length)))  # type: ignore[call-arg]
    if xof:
        return _HashlibHasher(hashlib.new(algorithm), length)
    return _HashlibHasher(hashlib.new(algorithm, digest_size=length))


def digest_xof(
    value: Any,
    length: int,
    *,
    tag: Optional[Data] = None,
    type_: Any = None,
    algorithm: Optional[SizedHashAlgorithm] = None,
) -> bytes:
    """ Hashes the encoding of a value with an extendable-output function, `shake_256` unless configured otherwise,
    and reads `length` bytes of output.
    """
    if algorithm is None:
        algorithm = get_global_settings().DEFAULT_XOF_ALGORITHM
    hasher = _sized_hasher(algorithm, length, xof=True)
    _feed(hasher, value, tag=tag, type_=type_)
    return hasher.finalize()


def digest_vof(
    value: Any,
    length: int,
    *,
    tag: Optional[Data] = None,
    type_: Any = None,
    algorithm: Optional[SizedHashAlgorithm] = None,
) -> bytes:
    """ Hashes the encoding of a value with a variable-output function, `blake2b` unless configured otherwise.

    Unlike an extendable-output function, the output length is a parameter of the hash, so digests of different
    lengths are unrelated.
    """
    if algorithm is None:
        algorithm = get_global_settings().DEFAULT_VOF_ALGORITHM
    hasher = _sized_hasher(algorithm, length, xof=False)
    _feed(hasher, value, tag=tag, type_=type_)
    return hasher.finalize()
