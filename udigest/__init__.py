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
Unambiguous digests of structured data.

Every value is encoded so that two different values never share an encoding, then the encoding is hashed. See
`udigest.encoder` for the format and `udigest.derive` for making classes encodable.
"""

from udigest.adapters import MaxBytesExceededError
from udigest.buffer import Buffer
from udigest.derive import digestable, digestable_union, field, inline_struct
from udigest.digestable import Digestable
from udigest.encoder import EncodeEnum, EncodeLeaf, EncodeList, EncodeStruct, EncodeValue, encode_len
from udigest.exceptions import EncoderStateError, EncodingError, TooLongError, UnsupportedTypeError
from udigest.hashing import digest, digest_iter, digest_vof, digest_xof, encode, encode_into
from udigest.types import I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, SizedInt
from udigest.utils.result import Err, Ok, Result
from udigest.version import __version__

__all__ = [
    '__version__',
    'Buffer',
    'Digestable',
    'EncodeEnum',
    'EncodeLeaf',
    'EncodeList',
    'EncodeStruct',
    'EncodeValue',
    'EncoderStateError',
    'EncodingError',
    'Err',
    'I8',
    'I16',
    'I32',
    'I64',
    'I128',
    'MaxBytesExceededError',
    'Ok',
    'Result',
    'SizedInt',
    'TooLongError',
    'U8',
    'U16',
    'U32',
    'U64',
    'U128',
    'UnsupportedTypeError',
    'digest',
    'digest_iter',
    'digest_vof',
    'digest_xof',
    'digestable',
    'digestable_union',
    'encode',
    'encode_into',
    'encode_len',
    'field',
    'inline_struct',
]
