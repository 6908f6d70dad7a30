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
This module implements encoding a boolean value as a 1-byte leaf.

- `False` maps to `b'\x00'`
- `True` maps to `b'\x01'`

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_bool(EncodeValue(buffer), False)
>>> encode_bool(EncodeValue(buffer), True)
>>> buffer.finalize().hex()
'0000000001050301000000010503'
"""

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import EncodeValue


def encode_bool(slot: EncodeValue, value: bool) -> None:
    """ Encodes a boolean value as a 1-byte leaf.
    """
    assert isinstance(value, bool)
    slot.encode_leaf_value(b'\x01' if value else b'\x00')
    slot.finish()
