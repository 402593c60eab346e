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
This module implements IEEE-754 big-endian floating point encoding, single (4 bytes) or double (8 bytes) precision.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, double=False)  # writes 3fc00000
>>> encode_float(se, -2.0, double=True)  # writes c000000000000000
>>> bytes(se.finalize()).hex()
'3fc00000c000000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3fc00000c000000000000000'))
>>> decode_float(de, double=False)
1.5
>>> decode_float(de, double=True)
-2.0
"""

from nbtree.serialization import Deserializer, Serializer


def _format(double: bool) -> str:
    return '>d' if double else '>f'


def encode_float(serializer: Serializer, number: float, *, double: bool) -> None:
    """ Encode a float as an IEEE-754 single or double.

    Single precision silently rounds values that need more precision, like a C cast would.
    """
    serializer.write_struct((number,), _format(double))


def decode_float(deserializer: Deserializer, *, double: bool) -> float:
    """ Decode an IEEE-754 single or double.
    """
    value, = deserializer.read_struct(_format(double))
    return value
