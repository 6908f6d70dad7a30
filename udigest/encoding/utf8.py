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
This module implements utf-8 string encoding, the leaf content is the utf-8 representation of the string.

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_utf8(EncodeValue(buffer), 'π')
>>> buffer.finalize().hex()
'cf80000000020503'

Text is never normalized, different code point sequences are different values even if they render the same.
"""

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import EncodeValue


def encode_utf8(slot: EncodeValue, value: str) -> None:
    assert isinstance(value, str)
    slot.encode_leaf_value(value.encode('utf-8'))
    slot.finish()
