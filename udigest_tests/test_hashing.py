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

import hashlib
from dataclasses import dataclass
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives import hashes

from udigest.adapters import MaxBytesExceededError
from udigest.buffer import Buffer
from udigest.compound_encoding.collection import encode_collection
from udigest.conf import DigestSettings
from udigest.consts import LIST_TAG
from udigest.derive import digestable
from udigest.digest_types import AnyDigestType
from udigest.encoder import EncodeValue
from udigest.exceptions import UnsupportedTypeError
from udigest.hashing import digest, digest_iter, digest_vof, digest_xof, encode, encode_into
from udigest.types import U16
from udigest_tests.utils import parse_encoding


@digestable
@dataclass
class Person:
    name: str
    age: U16
    job_title: str


@digestable
@dataclass
class Contact:
    name: str
    job_title: str


ALICE = Person(name='Alice', age=U16(24), job_title='cryptographer')
BOB = Person(name='Bob', age=U16(25), job_title='research engineer')

GOLDEN_DIGESTS = {
    'alice': (
        ALICE,
        '99e258d6a6ccc430a50dcbf4e9c8cfb59ad0b94b96b83f0182a9a68eb1c5438f',
        '54809cf7b06438f9508785fb5e46bdfd7714b39b026e86fa7cc8a8442ae10bd5'
        '49baeced19ff0642b042ae4e92636536baec5748dad99e71fc53a4361734973a',
        '91d1ce144fd46ed5400895c8db5f2b39c95870020c6627af034a9fa09c2f2cc3'
        'f4c8c7d4e8d38ff16e4f54360b4387c0439cf30c51c21c78f904cda9205023',
    ),
    'bob': (
        BOB,
        '28474b5dec79b222b74badc2d78f9f81c0fbfd1ee04a134947cd07f44237ade3',
        'f68ca9eeb7e09657fc54a5cbbd50acdd6d9fccd29ec1a3eb460b673ea59d64a9'
        'b2ec8be97c7d7858ad6724cf8c27299569bd72193c77bb339883214a4477c076',
        '2f916c687c82c0f37d31df061c0453e98d0655e1877d4a55ec1507514822a2c4'
        'b7cac3ca66a5e3deb678f915210e93f2fc14591b987f121083623ab024ece4',
    ),
}


@pytest.mark.parametrize('name', sorted(GOLDEN_DIGESTS))
def test_golden_digests(name: str) -> None:
    value, sha256_hex, shake_256_hex, blake2b_hex = GOLDEN_DIGESTS[name]
    assert digest(value).hex() == sha256_hex
    assert digest_xof(value, 64).hex() == shake_256_hex
    assert digest_vof(value, 63).hex() == blake2b_hex


def test_golden_digest_with_tag() -> None:
    contact = Contact(name='Alice', job_title='cryptographer')
    assert encode(contact, tag='example').hex() == (
        '6578616d706c650000000705036e616d65000000040503416c6963650000000505036a6f625f7469746c65000000090503637279'
        '70746f677261706865720000000d0503000000040501'
    )
    assert digest(contact, tag='example').hex() == '51fbd7d3061549e853fe1b93126bf1bae10e06976e99069df65a6a4f2b6f6c36'


def test_digest_is_the_hash_of_the_encoding() -> None:
    assert digest(ALICE) == hashlib.sha256(encode(ALICE)).digest()
    assert digest_xof(ALICE, 100) == hashlib.shake_256(encode(ALICE)).digest(100)
    assert digest_vof(ALICE, 20) == hashlib.blake2b(encode(ALICE), digest_size=20).digest()


def test_tag_is_written_first() -> None:
    assert parse_encoding(encode('123', tag='SOME_TAG')) == [b'SOME_TAG', b'123']
    assert encode('123', tag=b'SOME_TAG') == encode('123', tag='SOME_TAG')


def test_tags_separate_domains() -> None:
    digests = {digest(ALICE), digest(ALICE, tag='a'), digest(ALICE, tag='b'), digest(ALICE, tag='')}
    assert len(digests) == 4


@pytest.mark.parametrize(
    ['first', 'second'],
    [
        (('ab', 'c'), ('a', 'bc')),
        (['a', 'b'], ['b', 'a']),
        ([['a'], 'b'], ['a', ['b']]),
        ([], ['']),
        ([None], []),
        ('', []),
    ],
)
def test_different_values_have_different_digests(first: object, second: object) -> None:
    assert encode(first) != encode(second)
    assert digest(first) != digest(second)


def test_type_is_used_when_given() -> None:
    assert encode(24, type_=U16) == encode(U16(24))
    assert encode([1, 2], type_=list[U16]) == encode([U16(1), U16(2)])
    with pytest.raises(UnsupportedTypeError):
        encode(24)


def test_values_are_checked_before_writing() -> None:
    with pytest.raises(TypeError):
        encode(['a', 1], type_=list[str])
    with pytest.raises(ValueError):
        encode([U16(1), 70000], type_=list[U16])


def test_records_are_checked_before_writing() -> None:
    buffer = Buffer.build_bytes_buffer()
    with pytest.raises(ValueError):
        encode_into(buffer, [ALICE, Person('Bob', 2**16, 'x')], tag='t')
    assert buffer.finalize() == b''


def test_strings_are_checked_before_writing() -> None:
    buffer = Buffer.build_bytes_buffer()
    with pytest.raises(ValueError, match='cannot be encoded as utf-8'):
        encode_into(buffer, ['a', '\ud800'], tag='t')
    assert buffer.finalize() == b''


def test_digest_iter() -> None:
    buffer = Buffer.build_bytes_buffer()
    with EncodeValue(buffer) as slot:
        encode_collection(slot, ['a', 'b'], AnyDigestType().encode, tag=LIST_TAG)
    expected = hashlib.sha256(buffer.finalize()).digest()

    assert digest_iter(['a', 'b']) == expected
    assert digest_iter(item for item in 'ab') == expected
    # the list tag tells an iterator apart from a list
    assert digest_iter(['a', 'b']) != digest(['a', 'b'])


def test_digest_iter_with_type_and_tag() -> None:
    assert digest_iter([1, 2], type_=U16) == digest_iter([U16(1), U16(2)])
    assert digest_iter([], tag='t') != digest_iter([])
    with pytest.raises(UnsupportedTypeError):
        digest_iter([1, 2])


def test_cryptography_algorithms() -> None:
    _, sha256_hex, shake_256_hex, _ = GOLDEN_DIGESTS['alice']
    assert digest(ALICE, algorithm=hashes.SHA256()).hex() == sha256_hex
    assert digest(ALICE, algorithm='sha256').hex() == sha256_hex
    assert digest_xof(ALICE, 64, algorithm=hashes.SHAKE256).hex() == shake_256_hex
    assert digest_vof(ALICE, 64, algorithm=hashes.BLAKE2b) == digest_vof(ALICE, 64, algorithm='blake2b')
    assert digest_iter(['a'], algorithm=hashes.SHA512()) == digest_iter(['a'], algorithm='sha512')


def test_other_hashlib_algorithms() -> None:
    assert len(digest(ALICE, algorithm='sha512')) == 64
    assert len(digest(ALICE, algorithm='sha3_256')) == 32
    assert digest_xof(ALICE, 32, algorithm='shake_128') == hashlib.shake_128(encode(ALICE)).digest(32)
    assert digest_vof(ALICE, 16, algorithm='blake2s') == hashlib.blake2s(encode(ALICE), digest_size=16).digest()


def test_xof_output_is_extendable() -> None:
    assert digest_xof(ALICE, 32) == digest_xof(ALICE, 64)[:32]


def test_vof_output_depends_on_length() -> None:
    assert digest_vof(ALICE, 32) != digest_vof(ALICE, 64)[:32]


@pytest.mark.parametrize('length', [0, -1])
def test_invalid_output_length(length: int) -> None:
    with pytest.raises(ValueError):
        digest_xof(ALICE, length)
    with pytest.raises(ValueError):
        digest_vof(ALICE, length)


def test_defaults_come_from_settings() -> None:
    settings = DigestSettings(DEFAULT_HASH_ALGORITHM='sha512', DEFAULT_XOF_ALGORITHM='shake_128')
    with patch('udigest.hashing.get_global_settings', return_value=settings):
        assert digest(ALICE) == hashlib.sha512(encode(ALICE)).digest()
        assert digest_xof(ALICE, 10) == hashlib.shake_128(encode(ALICE)).digest(10)


def test_max_encoded_bytes() -> None:
    settings = DigestSettings(MAX_ENCODED_BYTES=16)
    with patch('udigest.hashing.get_global_settings', return_value=settings):
        # 1 byte of content, 4 of length, LEN_32 and LEAF
        assert len(encode('x')) == 7
        assert len(digest('x')) == 32
        with pytest.raises(MaxBytesExceededError):
            encode('x' * 100)
        with pytest.raises(MaxBytesExceededError):
            digest('x' * 100)
        with pytest.raises(MaxBytesExceededError):
            digest_iter(['x'] * 10)
