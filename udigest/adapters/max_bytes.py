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

from typing import TypeVar

from typing_extensions import override

from udigest.buffer import Buffer, BytesLike
from udigest.exceptions import EncodingError

from .generic_adapter import GenericBufferAdapter

B = TypeVar('B', bound=Buffer)


class MaxBytesExceededError(EncodingError):
    """ This error is raised when the adapted buffer reached its maximum bytes write.

    After this exception is raised the adapted buffer cannot be used anymore. Handlers of this exception are expected
    to either bubble up the exception (or an equivalent exception), or return an error. Handlers should not try to
    write again on the same buffer.

    Whatever was written to the inner buffer up to this point is a truncated encoding, so it must not be hashed or
    used in any other way.
    """
    pass


class MaxBytesBuffer(GenericBufferAdapter[B]):
    def __init__(self, buffer: B, max_bytes: int) -> None:
        super().__init__(buffer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    def _check_update_exceeds(self, write_size: int) -> None:
        self._bytes_left -= write_size
        if self._bytes_left < 0:
            raise MaxBytesExceededError(f'encoding exceeds the limit of {self._max_bytes} bytes')

    @override
    def write(self, data: BytesLike) -> None:
        data_view = memoryview(data)
        self._check_update_exceeds(data_view.nbytes)
        super().write(data_view)
