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
Encoding a mapping is equivalent to encoding a collection of 2-item lists, in iteration order.

Layout: [[key_0][value_0] len(2) LIST]...[[key_N][value_N] len(2) LIST] len(N) LIST

>>> from udigest.encoding.utf8 import encode_utf8
>>> from udigest.encoding.bool import encode_bool
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_mapping(EncodeValue(buffer), {'a': True}, encode_utf8, encode_bool)
>>> buffer.finalize().hex()
'6100000001050301000000010503000000020501000000010501'

Breakdown of the result:

    61 00000001 05 03: 'a'
    01 00000001 05 03: True
    00000002 05 01: the (key, value) pair
    00000001 05 01: mapping with 1 entry

Mappings without a defined iteration order should be sorted before they're encoded, see `sortedcontainers.SortedDict`.
"""

from collections.abc import Iterable, Mapping
from typing import TypeVar

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import EncodeValue

from . import Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')


def encode_mapping(
    slot: EncodeValue,
    values_mapping: Mapping[KT, VT] | Iterable[tuple[KT, VT]],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    items = values_mapping.items() if isinstance(values_mapping, Mapping) else values_mapping
    with slot.encode_list() as list_:
        for key, value in items:
            with list_.add_list() as pair:
                key_encoder(pair.add_item(), key)
                value_encoder(pair.add_item(), value)
    slot.finish()
