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
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The leaf content is the standard big-endian format, so different integer widths never produce the same encoding.

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_int(EncodeValue(buffer), 255, length=1, signed=False)  # leaf ff
>>> encode_int(EncodeValue(buffer), 1234, length=2, signed=True)  # leaf 04d2
>>> encode_int(EncodeValue(buffer), -1234, length=2, signed=True)  # leaf fb2e
>>> buffer.finalize().hex()
'ff00000001050304d2000000020503fb2e000000020503'

>>> encode_int(EncodeValue(buffer), 256, length=1, signed=False)
Traceback (most recent call last):
...
ValueError: too big to encode
"""

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import EncodeValue


def encode_int(slot: EncodeValue, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder='big', signed=signed)
    except OverflowError:
        raise ValueError('too big to encode')
    slot.encode_leaf_value(data)
    slot.finish()
