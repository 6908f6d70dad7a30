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


class EncodingError(Exception):
    """Base class for all errors raised while building an encoding."""


class UnsupportedTypeError(EncodingError, TypeError):
    """Raised when a type (or a value of a type) has no canonical encoding.

    This is raised before anything is written, typically when a `DigestType` is built from an annotation.
    """


class EncoderStateError(EncodingError):
    """Raised when an encoding slot is misused: written after being finished or given content twice.

    It indicates a bug in the code driving the encoder, the digest being computed must be discarded.
    """


class TooLongError(EncodingError):
    """Raised when a length doesn't fit in the field reserved for it."""
