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
This module was made to hold compound encoding implementations.

Compound encoders are generic in some way and delegate the encoding of some portion to another encoder. For example a
`value: Optional[T]` encoder writes the `Some`/`None` variant and delegates the rest to an encoder that knows how to
encode `T`.

Each submodule `x` deals with a single shape and looks like this:

    def encode_x(slot: EncodeValue, value: ValueType, ...config params...) -> None:
        ...

Submodules should not have to take into consideration how types are mapped to encoders, that's the job of
`udigest.digest_types`.
"""

from typing import Protocol, TypeVar

from udigest.encoder import EncodeValue

T_contra = TypeVar('T_contra', contravariant=True)


class Encoder(Protocol[T_contra]):
    def __call__(self, slot: EncodeValue, value: T_contra, /) -> None:
        ...
