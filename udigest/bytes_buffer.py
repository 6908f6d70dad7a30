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

from typing_extensions import override

from .buffer import Buffer, BytesLike


class BytesBuffer(Buffer):
    """Simple implementation of Buffer to write to memory.

    This implementation defers joining everything until finalize is called, before that every write is stored in a
    list.
    """

    def __init__(self) -> None:
        self._parts: list[bytes] = []

    def finalize(self) -> bytes:
        """Get the resulting byte sequence."""
        return b''.join(self._parts)

    @override
    def write(self, data: BytesLike) -> None:
        # XXX: copy, a bytearray or a memoryview over one could be changed after being written
        self._parts.append(bytes(data))
