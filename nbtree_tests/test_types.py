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


import math

import pytest

from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String


@pytest.mark.parametrize('int_type, lower, upper', [
    (Byte, -128, 127),
    (Short, -32768, 32767),
    (Int, -2**31, 2**31 - 1),
    (Long, -2**63, 2**63 - 1),
])
def test_sized_int_bounds(int_type, lower, upper):
    assert int_type(lower) == lower
    assert int_type(upper) == upper
    with pytest.raises(ValueError):
        int_type(lower - 1)
    with pytest.raises(ValueError):
        int_type(upper + 1)


def test_sized_int_rejects_non_integers():
    with pytest.raises(TypeError):
        Int(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Int('1')  # type: ignore[arg-type]


def test_sized_int_is_int():
    value = Short(-7)
    assert isinstance(value, int)
    assert value * 2 == -14
    assert repr(value) == 'Short(-7)'
    assert type(value + 1) is int


def test_float_rounds_to_single_precision():
    assert Float(0.1) != 0.1
    assert Float(0.1) == Float(Float(0.1))
    assert Float(1.5) == 1.5
    assert math.isinf(Float(math.inf))
    assert math.isnan(Float(math.nan))


def test_float_out_of_range():
    with pytest.raises(ValueError):
        Float(1e40)


def test_double_keeps_precision():
    assert Double(0.1) == 0.1
    assert repr(Double(0.5)) == 'Double(0.5)'


def test_string_and_byte_array():
    assert String('abc') == 'abc'
    assert repr(String('abc')) == "String('abc')"
    assert ByteArray(b'\x00\x01') == b'\x00\x01'
    assert repr(ByteArray(b'\x01')) == "ByteArray(b'\\x01')"


def test_int_arrays():
    assert IntArray([1, -1]) == (1, -1)
    assert LongArray(range(3)) == (0, 1, 2)
    assert IntArray() == ()
    assert repr(LongArray([5])) == 'LongArray((5,))'
    with pytest.raises(ValueError):
        IntArray([2**31])
    LongArray([2**31])
    with pytest.raises(ValueError):
        LongArray([2**63])
