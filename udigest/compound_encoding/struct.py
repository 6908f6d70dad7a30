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
Structs and enum variants, the building blocks used by records, unions, optionals and results.

A struct is a list that alternates field names and field values:

    [name_0][value_0]...[name_N][value_N] len(2N) LIST

A variant is a struct whose first field is named `"variant"` and holds the variant name:

    ["variant"][variant_name][name_0][value_0]... len(2N + 2) LIST

>>> from udigest.encoding.bool import encode_bool
>>> buffer = Buffer.build_bytes_buffer()
>>> encode_struct(EncodeValue(buffer), [('x', True, encode_bool)])
>>> buffer.finalize().hex()
'7800000001050301000000010503000000020501'

Breakdown of the result:

    78 00000001 05 03: 'x'
    01 00000001 05 03: True
    00000002 05 01: list with 2 items

A unit variant only has the variant name:

>>> buffer = Buffer.build_bytes_buffer()
>>> encode_variant(EncodeValue(buffer), 'Red')
>>> buffer.finalize().hex()
'76617269616e74000000070503526564000000030503000000020501'
"""

from collections.abc import Iterable
from typing import Any, Optional, TypeAlias

from udigest.buffer import Buffer  # noqa: F401
from udigest.encoder import Data, EncodeStruct, EncodeValue

from . import Encoder

Field: TypeAlias = tuple[str, Any, Encoder[Any]]


def _encode_fields(struct: EncodeStruct, fields: Iterable[Field]) -> None:
    for name, value, encoder in fields:
        encoder(struct.add_field(name), value)


def encode_struct(slot: EncodeValue, fields: Iterable[Field], *, tag: Optional[Data] = None) -> None:
    with slot.encode_struct() as struct:
        if tag is not None:
            struct.set_tag(tag)
        _encode_fields(struct, fields)
    slot.finish()


def encode_variant(
    slot: EncodeValue,
    variant_name: str,
    fields: Iterable[Field] = (),
    *,
    tag: Optional[Data] = None,
) -> None:
    enum = slot.encode_enum()
    if tag is not None:
        enum.set_tag(tag)
    with enum.with_variant(variant_name) as struct:
        _encode_fields(struct, fields)
    slot.finish()
