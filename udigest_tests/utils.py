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
Helpers shared by the tests: a reference parser of the encoding and a generator of random encodable values.

The parser reads an encoding right-to-left, the way the format is meant to be parsed, and returns it as a tree: leaves
are `bytes`, lists are `tuple`, values with a context tag are `Tagged` and abandoned slots are `None`. Being able to
parse any encoding back into the tree it came from is what makes the encoding unambiguous.
"""

from random import Random
from typing import Any, NamedTuple

from sortedcontainers import SortedDict, SortedSet

from udigest.consts import BIGLEN, EMPTY, LEAF, LEAF_CTX, LEN_32, LIST, LIST_CTX
from udigest.types import SIZED_INT_TYPES, SizedInt
from udigest.utils.result import Err, Ok


class Tagged(NamedTuple):
    tag: bytes
    value: Any


def _parse_len(data: bytes, end: int) -> tuple[int, int]:
    symbol = data[end - 1]
    if symbol == LEN_32:
        return int.from_bytes(data[end - 5:end - 1], 'big'), end - 5
    if symbol == BIGLEN:
        size = data[end - 2]
        start = end - 2 - size
        return int.from_bytes(data[start:end - 2], 'big'), start
    raise ValueError(f'unexpected length symbol {symbol} at {end - 1}')


def _parse_value(data: bytes, end: int) -> tuple[Any, int]:
    symbol = data[end - 1]
    pos = end - 1
    tag = None
    if symbol == EMPTY:
        return None, pos
    if symbol in (LEAF_CTX, LIST_CTX):
        tag_len, pos = _parse_len(data, pos)
        tag = data[pos - tag_len:pos]
        pos -= tag_len
    if symbol in (LEAF, LEAF_CTX):
        size, pos = _parse_len(data, pos)
        node: Any = data[pos - size:pos]
        pos -= size
    elif symbol in (LIST, LIST_CTX):
        size, pos = _parse_len(data, pos)
        items = []
        for _ in range(size):
            item, pos = _parse_value(data, pos)
            items.append(item)
        node = tuple(reversed(items))
    else:
        raise ValueError(f'unexpected symbol {symbol} at {end - 1}')
    if tag is not None:
        node = Tagged(tag, node)
    return node, pos


def parse_encoding(data: bytes) -> list[Any]:
    """Parses a sequence of encoded values (like a tag followed by a value), returns their trees in order."""
    values = []
    pos = len(data)
    while pos > 0:
        value, pos = _parse_value(data, pos)
        values.append(value)
    assert pos == 0, 'a length pointed before the start of the data'
    return list(reversed(values))


def _variant(name: str, *fields: tuple[str, Any]) -> tuple:
    items: list[Any] = [b'variant', name.encode()]
    for field_name, field_value in fields:
        items.extend([field_name.encode(), field_value])
    return tuple(items)


def expected_tree(value: Any) -> Any:
    """The tree a value generated by `random_value` is expected to be encoded as."""
    if value is None:
        return _variant('None')
    if isinstance(value, bool):
        return b'\x01' if value else b'\x00'
    if isinstance(value, SizedInt):
        return value.to_bytes(value.byte_size(), 'big', signed=value.is_signed())
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, bytes):
        return value
    if isinstance(value, Ok):
        return _variant('Ok', ('0', expected_tree(value.unwrap())))
    if isinstance(value, Err):
        return _variant('Err', ('0', expected_tree(value.unwrap_err())))
    if isinstance(value, SortedDict):
        return tuple((expected_tree(k), expected_tree(v)) for k, v in value.items())
    if isinstance(value, (list, tuple, SortedSet)):
        return tuple(expected_tree(item) for item in value)
    raise TypeError(f'unexpected value {value!r}')


def _random_text(rng: Random) -> str:
    return ''.join(rng.choice('ab\x00\x01\x05é') for _ in range(rng.randint(0, 4)))


def random_value(rng: Random, depth: int = 3) -> Any:
    """Builds a random value that can be encoded without a type, nested up to `depth` levels."""
    kinds = ['none', 'bool', 'int', 'str', 'bytes']
    if depth > 0:
        kinds.extend(['list', 'tuple', 'ok', 'err', 'sorted_dict', 'sorted_set'])
    match rng.choice(kinds):
        case 'none':
            return None
        case 'bool':
            return rng.random() < 0.5
        case 'int':
            int_type = rng.choice(SIZED_INT_TYPES)
            return int_type(rng.randint(int_type.lower_bound(), int_type.upper_bound()))
        case 'str':
            return _random_text(rng)
        case 'bytes':
            return rng.randbytes(rng.randint(0, 4))
        case 'list':
            return [random_value(rng, depth - 1) for _ in range(rng.randint(0, 3))]
        case 'tuple':
            return tuple(random_value(rng, depth - 1) for _ in range(rng.randint(0, 3)))
        case 'ok':
            return Ok(random_value(rng, depth - 1))
        case 'err':
            return Err(random_value(rng, depth - 1))
        case 'sorted_dict':
            return SortedDict({_random_text(rng): random_value(rng, depth - 1) for _ in range(rng.randint(0, 3))})
        case 'sorted_set':
            return SortedSet(_random_text(rng) for _ in range(rng.randint(0, 3)))
    raise AssertionError('unreachable')
