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
In Python a tuple type can be used in annotations in 2 different ways:

1. `tuple[A, B, C]`: known fixed length and heterogeneous types
2. `tuple[X, ...]`: variable length and homogeneous type

This module only implements encoding of the first case, the second case can be encoded using the collection encoder.
Both end up as a list, which means `('a', 'b')` encodes the same whether it's typed as `tuple[str, str]` or as
`tuple[str, ...]`.

>>> from udigest.encoding.utf8 import encode_utf8
>>> from udigest.encoding.bool import encode_bool
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_tuple(EncodeValue(buffer), ('foo', False), (encode_utf8, encode_bool))
>>> buffer.finalize().hex()
'666f6f00000003050300000000010503000000020501'
"""

from typing import Any

from typing_extensions import TypeVarTuple, Unpack

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import EncodeValue

from . import Encoder

Ts = TypeVarTuple('Ts')


def encode_tuple(slot: EncodeValue, values: tuple[Unpack[Ts]], encoders: tuple[Encoder[Any], ...]) -> None:
    assert len(values) == len(encoders)
    with slot.encode_list() as list_:
        for value, encoder in zip(values, encoders):
            encoder(list_.add_item(), value)
    slot.finish()
