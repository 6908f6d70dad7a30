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
This module implements the encoding slots, the objects through which every encoding is written.

Any structured value is encoded either as a bytestring (leaf) or as a list of values:

    value ::= leaf | list
    leaf  ::= bytestring
    list  ::= [value]

The length of a leaf/list is written *after* its content, that way a value can be streamed into a hash without
knowing its size in advance. Parsing the result right-to-left is unambiguous, which is what makes the encoding
injective. The full grammar is:

    value    ::= leaf | leaf_ctx | list | list_ctx | empty
    leaf     ::= bytestring len(bytestring) LEAF
    leaf_ctx ::= bytestring len(bytestring) tag len(tag) LEAF_CTX
    list     ::= [value] len([value]) LIST
    list_ctx ::= [value] len([value]) ctx len(ctx) LIST_CTX
    empty    ::= EMPTY
    len(n)   ::= u32(n) LEN_32             when n < 2**32
               | be(n) u8(len(be(n))) BIGLEN  otherwise

The control symbols are defined in `udigest.consts`.

Every slot is finalized exactly once: explicitly with `finish()`, when leaving a `with` block, or by its parent when
the parent moves on to the next item or is itself finalized. A value slot that never received any content writes the
`EMPTY` symbol, so an abandoned slot can't be confused with an empty leaf or an empty list.

Encoding `["1234", ["1", "2"], "abc"]`:

>>> buffer = Buffer.build_bytes_buffer()
>>> with EncodeList(buffer) as list_:
...     _ = list_.add_leaf().chain(b'1234')
...     with list_.add_list() as sublist:
...         _ = sublist.add_leaf().chain(b'1')
...         _ = sublist.add_leaf().chain(b'2')
...     _ = list_.add_leaf().chain(b'abc')
>>> buffer.finalize().hex()
'313233340000000405033100000001050332000000010503000000020501616263000000030503000000030501'

Breakdown of the result:

    31323334 00000004 05 03: "1234" (len=4 LEN_32 LEAF)
    31 00000001 05 03: "1"
    32 00000001 05 03: "2"
    00000002 05 01: the sublist has 2 items (LEN_32 LIST)
    616263 00000003 05 03: "abc"
    00000003 05 01: the outer list has 3 items

An abandoned value slot:

>>> buffer = Buffer.build_bytes_buffer()
>>> with EncodeList(buffer) as list_:
...     _ = list_.add_item()
>>> buffer.finalize().hex()
'07000000010501'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, TypeAlias, TypeVar, final

from typing_extensions import Self, override

from udigest.buffer import Buffer, BytesLike
from udigest.consts import (
    BIGLEN,
    BIGLEN_MAX_BYTES,
    EMPTY,
    LEAF,
    LEAF_CTX,
    LEN_32,
    LEN_32_MAX,
    LIST,
    LIST_CTX,
    VARIANT_FIELD_NAME,
)
from udigest.exceptions import EncoderStateError, TooLongError

Data: TypeAlias = BytesLike | str
S = TypeVar('S', bound='_Slot')


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f'expected bytes-like or str, got {type(data).__name__}')
    return bytes(data)


def encode_len(buffer: Buffer, length: int) -> None:
    """ Encodes the length of a list or a leaf.

    Normally this isn't needed directly, `EncodeLeaf` and `EncodeList` use it internally.

    >>> buffer = Buffer.build_bytes_buffer()
    >>> encode_len(buffer, 3)
    >>> encode_len(buffer, 0x0100000000)
    >>> buffer.finalize().hex()
    '000000030501000000000506'
    """
    if length < 0:
        raise ValueError('length cannot be negative')
    if length <= LEN_32_MAX:
        buffer.write(length.to_bytes(4, 'big'))
        buffer.write_byte(LEN_32)
    else:
        data = length.to_bytes((length.bit_length() + 7) // 8, 'big')
        if len(data) > BIGLEN_MAX_BYTES:
            raise TooLongError('length does not fit in a BIGLEN field')
        buffer.write(data)
        buffer.write_byte(len(data))
        buffer.write_byte(BIGLEN)


class _Slot(ABC):
    """ Common lifecycle of every encoding slot.

    A slot is open until it's finalized, finalizing writes its trailer (lengths, tag and control symbol). Any attempt
    to use a finalized slot raises `EncoderStateError`.
    """

    __slots__ = ('_buffer', '_finished')

    def __init__(self, buffer: Buffer) -> None:
        self._buffer = buffer
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def _check_open(self) -> None:
        if self._finished:
            raise EncoderStateError(f'{type(self).__name__} was already finished')

    @final
    def finish(self) -> None:
        """Finalizes the encoding, puts the necessary metadata to the buffer."""
        self._check_open()
        self._finalize()

    @final
    def _finalize(self) -> None:
        # XXX: idempotent, used by the implicit paths (parents and context managers)
        if self._finished:
            return
        self._write_trailer()
        self._finished = True

    @abstractmethod
    def _write_trailer(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        # the trailer is written even when unwinding, the caller is expected to discard the digest in that case
        self._finalize()


class EncodeValue(_Slot):
    """ The place where exactly one value must be encoded.

    The value can be turned into a leaf, a list, a struct or an enum, but only once.
    """

    __slots__ = ('_content',)

    _content: Optional[_Slot]

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer)
        self._content = None

    def _take(self, slot: S) -> S:
        self._check_open()
        if self._content is not None:
            raise EncoderStateError('value slot already received content')
        self._content = slot
        return slot

    def encode_leaf(self) -> EncodeLeaf:
        """Encodes a leaf (bytestring)."""
        return self._take(EncodeLeaf(self._buffer))

    def encode_leaf_value(self, data: Data) -> None:
        """Encodes a leaf with the given content and finishes it."""
        leaf = self.encode_leaf()
        leaf.update(data)
        leaf.finish()

    def encode_list(self) -> EncodeList:
        """Encodes a list."""
        return self._take(EncodeList(self._buffer))

    def encode_struct(self) -> EncodeStruct:
        """ Encodes a struct.

        Struct is represented as a list: `[field_name1, field_value1, ...]`
        """
        return self._take(EncodeStruct(self._buffer))

    def encode_enum(self) -> EncodeEnum:
        """ Encodes an enum.

        Enum is represented as a list: `["variant", variant_name, field_name1, field_value1, ...]`
        """
        return self._take(EncodeEnum(self._buffer))

    @override
    def _write_trailer(self) -> None:
        if self._content is None:
            self._buffer.write_byte(EMPTY)
        else:
            self._content._finalize()


class EncodeLeaf(_Slot):
    """ Encodes a leaf (bytestring).

    The content can be given in several chunks, the encoded value is their concatenation.
    """

    __slots__ = ('_len', '_tag')

    _tag: Optional[bytes]

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer)
        self._len = 0
        self._tag = None

    def set_tag(self, tag: Data) -> None:
        """Specifies a domain separation tag for this leaf."""
        self._check_open()
        self._tag = _as_bytes(tag)

    def with_tag(self, tag: Data) -> Self:
        self.set_tag(tag)
        return self

    def update(self, data: Data) -> None:
        """Appends a bytestring."""
        self._check_open()
        chunk = _as_bytes(data)
        self._buffer.write(chunk)
        self._len += len(chunk)

    def chain(self, data: Data) -> Self:
        self.update(data)
        return self

    @override
    def _write_trailer(self) -> None:
        encode_len(self._buffer, self._len)
        if self._tag is not None:
            self._buffer.write(self._tag)
            encode_len(self._buffer, len(self._tag))
            self._buffer.write_byte(LEAF_CTX)
        else:
            self._buffer.write_byte(LEAF)


class EncodeList(_Slot):
    """ Encodes a list of values.

    Only the most recently added item can be written to, adding an item (or finishing the list) finalizes the previous
    one.
    """

    __slots__ = ('_len', '_tag', '_current')

    _tag: Optional[bytes]
    _current: Optional[EncodeValue]

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer)
        self._len = 0
        self._tag = None
        self._current = None

    def set_tag(self, tag: Data) -> None:
        """Specifies a domain separation tag for this list."""
        self._check_open()
        self._tag = _as_bytes(tag)

    def with_tag(self, tag: Data) -> Self:
        self.set_tag(tag)
        return self

    def _close_current(self) -> None:
        if self._current is not None:
            self._current._finalize()
            self._current = None

    def add_item(self) -> EncodeValue:
        """ Adds an item to the list.

        Returns a slot that shall be used to encode the value of the item.
        """
        self._check_open()
        self._close_current()
        self._len += 1
        self._current = EncodeValue(self._buffer)
        return self._current

    def add_leaf(self) -> EncodeLeaf:
        """Alias to `add_item().encode_leaf()`."""
        return self.add_item().encode_leaf()

    def add_list(self) -> EncodeList:
        """Alias to `add_item().encode_list()`."""
        return self.add_item().encode_list()

    @override
    def _write_trailer(self) -> None:
        self._close_current()
        encode_len(self._buffer, self._len)
        if self._tag is not None:
            self._buffer.write(self._tag)
            encode_len(self._buffer, len(self._tag))
            self._buffer.write_byte(LIST_CTX)
        else:
            self._buffer.write_byte(LIST)


class EncodeStruct(_Slot):
    """ Encodes a structure as a list of field names followed by field values.

    >>> buffer = Buffer.build_bytes_buffer()
    >>> with EncodeStruct(buffer) as struct:
    ...     struct.add_field('x').encode_leaf_value(b'\\x01')
    >>> buffer.finalize().hex()
    '7800000001050301000000010503000000020501'
    """

    __slots__ = ('_list',)

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer)
        self._list = EncodeList(buffer)

    def set_tag(self, tag: Data) -> None:
        """Specifies a domain separation tag for this struct."""
        self._check_open()
        self._list.set_tag(tag)

    def with_tag(self, tag: Data) -> Self:
        self.set_tag(tag)
        return self

    def add_field(self, field_name: Data) -> EncodeValue:
        """ Adds a field to the structure.

        Returns a slot that shall be used to encode the field's value.
        """
        self._check_open()
        self._list.add_item().encode_leaf_value(field_name)
        return self._list.add_item()

    @override
    def _write_trailer(self) -> None:
        self._list._finalize()


class EncodeEnum(_Slot):
    """ Encodes an enum.

    The chosen variant is encoded as a struct whose first field is `"variant"`, any fields the variant has follow it.
    An enum finalized without a variant is encoded as an empty value.
    """

    __slots__ = ('_tag', '_struct')

    _tag: Optional[bytes]
    _struct: Optional[EncodeStruct]

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer)
        self._tag = None
        self._struct = None

    def set_tag(self, tag: Data) -> None:
        """Specifies a domain separation tag, it must be set before the variant is chosen."""
        self._check_open()
        if self._struct is not None:
            raise EncoderStateError('tag must be set before choosing the variant')
        self._tag = _as_bytes(tag)

    def with_tag(self, tag: Data) -> Self:
        self.set_tag(tag)
        return self

    def with_variant(self, variant_name: Data) -> EncodeStruct:
        """ Encodes a variant name.

        Returns a struct encoder that can be used to encode any fields the variant may have.
        """
        self._check_open()
        if self._struct is not None:
            raise EncoderStateError('enum variant was already chosen')
        struct = EncodeStruct(self._buffer)
        if self._tag is not None:
            struct.set_tag(self._tag)
        struct.add_field(VARIANT_FIELD_NAME).encode_leaf_value(variant_name)
        self._struct = struct
        return struct

    @override
    def _write_trailer(self) -> None:
        if self._struct is None:
            self._buffer.write_byte(EMPTY)
        else:
            self._struct._finalize()
