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

from typing import Generic, TypeVar

from typing_extensions import override

from udigest.buffer import Buffer, BytesLike

B = TypeVar('B', bound=Buffer)


class GenericBufferAdapter(Buffer, Generic[B]):
    inner: B

    def __init__(self, buffer: B) -> None:
        self.inner = buffer

    @override
    def write(self, data: BytesLike) -> None:
        self.inner.write(data)
