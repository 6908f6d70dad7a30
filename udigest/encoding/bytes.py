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
This module implements encoding of byte strings, a byte string is written as-is as the content of a leaf.

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_bytes(EncodeValue(buffer), b'abc')
>>> encode_bytes(EncodeValue(buffer), b'')
>>> buffer.finalize().hex()
'616263000000030503000000000503'
"""

from udigest.buffer import Buffer, BytesLike  # noqa: F401
from udigest.encoder import EncodeValue


def encode_bytes(slot: EncodeValue, data: BytesLike) -> None:
    slot.encode_leaf_value(data)
    slot.finish()
