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
Control symbols of the encoding, see `udigest.encoder` for the grammar they're used in.

The values are part of the wire format, changing any of them changes every digest.
"""

from typing import Final

# list of values, followed by its length
LIST: Final[int] = 1
# list of values with a context tag
LIST_CTX: Final[int] = 2
# bytestring, followed by its length
LEAF: Final[int] = 3
# bytestring with a context tag
LEAF_CTX: Final[int] = 4
# the preceding 4 bytes are a big-endian u32 length
LEN_32: Final[int] = 5
# the preceding byte is the size of a big-endian length that doesn't fit in a u32
BIGLEN: Final[int] = 6
# a value slot that was finalized without receiving any content
EMPTY: Final[int] = 7

LEN_32_MAX: Final[int] = 2**32 - 1

# the length of a BIGLEN length is written as a single byte
BIGLEN_MAX_BYTES: Final[int] = 255

# names used by the struct/enum framing
VARIANT_FIELD_NAME: Final[str] = 'variant'
SINGLE_FIELD_NAME: Final[str] = '0'

# context tag of the list built by `udigest.digest_iter`
LIST_TAG: Final[bytes] = b'udigest.list'
