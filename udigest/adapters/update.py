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

from typing import Generic, Protocol, TypeVar

from typing_extensions import override

from udigest.buffer import Buffer, BytesLike


class Updatable(Protocol):
    """Anything that can be incrementally fed with bytes.

    This covers `hashlib` objects and `cryptography.hazmat.primitives.hashes.Hash`.
    """

    def update(self, data: bytes, /) -> None:
        ...


U = TypeVar('U', bound=Updatable)


class UpdateBuffer(Buffer, Generic[U]):
    """ Buffer that forwards every write to the `update` method of the wrapped object.

    The wrapped object is kept accessible, so it can be finalized once the encoding is done:

    >>> import hashlib
    >>> buffer = UpdateBuffer(hashlib.sha256())
    >>> buffer.write(b'abc')
    >>> buffer.inner.hexdigest()
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """

    inner: U

    def __init__(self, inner: U) -> None:
        self.inner = inner

    @override
    def write(self, data: BytesLike) -> None:
        self.inner.update(bytes(data))
