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

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from udigest.encoder import EncodeValue


@runtime_checkable
class Digestable(Protocol):
    """ A value that knows how to encode itself.

    Classes decorated with `@digestable` get this method generated from their annotations, other classes can
    implement it by hand. An implementation must encode exactly one value into the given slot, and must produce the
    same bytes for equal values.
    """

    def unambiguously_encode(self, encoder: 'EncodeValue', /) -> None:
        ...
