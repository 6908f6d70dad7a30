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
Fixed-width integer types.

Python's `int` has no width, so it can't be encoded unambiguously on its own: a field declared as `int` could be
written with any number of bytes. These subclasses carry the width and signedness with the value and check the range
on construction:

>>> U16(24)
U16(24)
>>> U8(256)
Traceback (most recent call last):
...
ValueError: value 256 is out of range for U8 (0..255)
>>> I8.lower_bound(), I8.upper_bound()
(-128, 127)

Arithmetic on them returns plain `int`, wrap the result again to get a sized value back.
"""

from typing import ClassVar

from typing_extensions import Self


class SizedInt(int):
    """Base class of fixed-width integers, not meant to be instantiated directly."""

    __slots__ = ()

    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]

    def __new__(cls, value: int = 0) -> Self:
        if not hasattr(cls, '_byte_size'):
            raise TypeError(f'{cls.__name__} has no defined size')
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'expected int, got {type(value).__name__}')
        if not (cls.lower_bound() <= value <= cls.upper_bound()):
            raise ValueError(
                f'value {value} is out of range for {cls.__name__} ({cls.lower_bound()}..{cls.upper_bound()})'
            )
        return super().__new__(cls, value)

    @classmethod
    def is_signed(cls) -> bool:
        return cls._signed

    @classmethod
    def byte_size(cls) -> int:
        return cls._byte_size

    @classmethod
    def lower_bound(cls) -> int:
        if cls._signed:
            return -(2 ** (cls._byte_size * 8 - 1))
        return 0

    @classmethod
    def upper_bound(cls) -> int:
        if cls._signed:
            return 2 ** (cls._byte_size * 8 - 1) - 1
        return 2 ** (cls._byte_size * 8) - 1

    def __repr__(self) -> str:
        return f'{type(self).__name__}({int(self)})'


class U8(SizedInt):
    _signed = False
    _byte_size = 1


class U16(SizedInt):
    _signed = False
    _byte_size = 2


class U32(SizedInt):
    _signed = False
    _byte_size = 4


class U64(SizedInt):
    _signed = False
    _byte_size = 8


class U128(SizedInt):
    _signed = False
    _byte_size = 16


class I8(SizedInt):
    _signed = True
    _byte_size = 1


class I16(SizedInt):
    _signed = True
    _byte_size = 2


class I32(SizedInt):
    _signed = True
    _byte_size = 4


class I64(SizedInt):
    _signed = True
    _byte_size = 8


class I128(SizedInt):
    _signed = True
    _byte_size = 16


SIZED_INT_TYPES: tuple[type[SizedInt], ...] = (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)
