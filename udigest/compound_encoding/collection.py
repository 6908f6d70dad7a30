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
A collection is any iterable of values of the same type, it's encoded as a list.

Layout: [value_0]...[value_N] len(N) LIST

>>> from udigest.encoding.utf8 import encode_utf8
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_collection(EncodeValue(buffer), ['foo', 'bar'], encode_utf8)
>>> buffer.finalize().hex()
'666f6f000000030503626172000000030503000000020501'

Breakdown of the result:

    666f6f 00000003 05 03: 'foo'
    626172 00000003 05 03: 'bar'
    00000002 05 01: list with 2 items

Since the length is only written at the end, the values can come from a generator of unknown size.

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_collection(EncodeValue(buffer), (s for s in ['foo', 'bar']), encode_utf8)
>>> buffer.finalize().hex()
'666f6f000000030503626172000000030503000000020501'
"""

from collections.abc import Iterable
from typing import Optional, TypeVar

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import Data, EncodeValue

from . import Encoder

T = TypeVar('T')


def encode_collection(
    slot: EncodeValue,
    values: Iterable[T],
    encoder: Encoder[T],
    *,
    tag: Optional[Data] = None,
) -> None:
    with slot.encode_list() as list_:
        if tag is not None:
            list_.set_tag(tag)
        for value in values:
            encoder(list_.add_item(), value)
    slot.finish()
