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

r"""
An optional value is encoded as an enum with two variants, `Some` holding the value in a field named `"0"` and `None`
with no fields.

>>> from udigest.encoding.utf8 import encode_utf8
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_optional(EncodeValue(buffer), 'x', encode_utf8)
>>> buffer.finalize().hex()
'76617269616e74000000070503536f6d650000000405033000000001050378000000010503000000040501'

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_optional(EncodeValue(buffer), None, encode_utf8)
>>> buffer.finalize().hex()
'76617269616e740000000705034e6f6e65000000040503000000020501'

Note that this is not the same as an absent value, which is encoded with the `EMPTY` symbol.
"""

from typing import Optional, TypeVar

from udigest.buffer import Buffer  # noqa: F401
from udigest.consts import SINGLE_FIELD_NAME
from udigest.encoder import EncodeValue

from . import Encoder
from .struct import encode_variant

T = TypeVar('T')


def encode_optional(slot: EncodeValue, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        encode_variant(slot, 'None')
    else:
        encode_variant(slot, 'Some', [(SINGLE_FIELD_NAME, value, encoder)])
