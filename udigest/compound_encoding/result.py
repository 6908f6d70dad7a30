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
A result is encoded as an enum with two variants, `Ok` and `Err`, each holding its value in a field named `"0"`.

>>> from udigest.encoding.bool import encode_bool
>>> from udigest.encoding.utf8 import encode_utf8
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_result(EncodeValue(buffer), Ok(True), encode_bool, encode_utf8)
>>> buffer.finalize().hex()
'76617269616e740000000705034f6b0000000205033000000001050301000000010503000000040501'

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_result(EncodeValue(buffer), Err('foo'), encode_bool, encode_utf8)
>>> buffer.finalize().hex()
'76617269616e7400000007050345727200000003050330000000010503666f6f000000030503000000040501'
"""

from typing import TypeVar

from udigest.buffer import Buffer  # noqa: F401
from udigest.consts import SINGLE_FIELD_NAME
from udigest.encoder import EncodeValue
from udigest.utils.result import Err, Ok, Result

from . import Encoder
from .struct import encode_variant

T = TypeVar('T')
E = TypeVar('E')


def encode_result(slot: EncodeValue, value: Result[T, E], ok_encoder: Encoder[T], err_encoder: Encoder[E]) -> None:
    match value:
        case Ok(ok):
            encode_variant(slot, 'Ok', [(SINGLE_FIELD_NAME, ok, ok_encoder)])
        case Err(err):
            encode_variant(slot, 'Err', [(SINGLE_FIELD_NAME, err, err_encoder)])
        case _:
            raise TypeError(f'expected Ok or Err, got {type(value).__name__}')
