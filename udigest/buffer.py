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
from typing import TYPE_CHECKING, TypeAlias, final

if TYPE_CHECKING:
    from .bytes_buffer import BytesBuffer

BytesLike: TypeAlias = bytes | bytearray | memoryview


class Buffer(ABC):
    """ Append-only byte sink that receives the encoding.

    Implementations either accumulate the bytes (see `BytesBuffer`) or forward them to something else, typically the
    `update` method of a hash object (see `udigest.adapters.UpdateBuffer`).

    A buffer is not meant to be shared by concurrent encodings.
    """

    @staticmethod
    def build_bytes_buffer() -> BytesBuffer:
        from .bytes_buffer import BytesBuffer
        return BytesBuffer()

    @abstractmethod
    def write(self, data: BytesLike) -> None:
        """Append a byte sequence."""
        raise NotImplementedError

    @final
    def write_byte(self, data: int) -> None:
        """Append a single byte."""
        # int.to_bytes checks for correct range
        self.write(int.to_bytes(data, 1, 'big'))
