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


import unittest

from nbtree import Compound, RootCompound, TagKind, TagList
from nbtree.exceptions import MalformedVarIntError, NBTError, UnmappedValueKindError
from nbtree.types import Byte, ByteArray, Double, Float, Int, IntArray, Long, LongArray, Short, String

GETTERS = {
    'get_byte': TagKind.BYTE,
    'get_short': TagKind.SHORT,
    'get_int': TagKind.INT,
    'get_long': TagKind.LONG,
    'get_float': TagKind.FLOAT,
    'get_double': TagKind.DOUBLE,
    'get_byte_array': TagKind.BYTE_ARRAY,
    'get_string': TagKind.STRING,
    'get_list': TagKind.LIST,
    'get_compound': TagKind.COMPOUND,
    'get_int_array': TagKind.INT_ARRAY,
    'get_long_array': TagKind.LONG_ARRAY,
}


def sample_values():
    return {
        TagKind.BYTE: Byte(-1),
        TagKind.SHORT: Short(300),
        TagKind.INT: Int(70000),
        TagKind.LONG: Long(2**40),
        TagKind.FLOAT: Float(0.5),
        TagKind.DOUBLE: Double(0.25),
        TagKind.BYTE_ARRAY: ByteArray(b'\x01\x02'),
        TagKind.STRING: String('value'),
        TagKind.LIST: TagList(TagKind.STRING, [String('a')]),
        TagKind.COMPOUND: Compound({'inner': Byte(1)}),
        TagKind.INT_ARRAY: IntArray([1, 2]),
        TagKind.LONG_ARRAY: LongArray([3, 4]),
    }


class CompoundTestCase(unittest.TestCase):
    def test_set_get(self) -> None:
        root = Compound()
        root.set(Int(1), 'a')
        self.assertEqual(root.get('a'), Int(1))
        self.assertEqual(root.get_int('a'), 1)
        self.assertIsNone(root.get('b'))
        self.assertEqual(len(root), 1)
        self.assertIn('a', root)

    def test_set_creates_intermediate_compounds(self) -> None:
        root = Compound()
        root.set(String('deep'), 'a', 'b', 'c')
        self.assertIsInstance(root.get_compound('a'), Compound)
        self.assertIsInstance(root.get_compound('a', 'b'), Compound)
        self.assertEqual(root.get_string('a', 'b', 'c'), 'deep')

    def test_set_replaces_non_compound_intermediate(self) -> None:
        root = Compound()
        root.set(Int(1), 'a')
        root.set(Int(2), 'a', 'b')
        self.assertEqual(root.get_int('a', 'b'), 2)
        self.assertIsNone(root.get_int('a'))

    def test_set_keeps_existing_siblings(self) -> None:
        root = Compound()
        root.set(Int(1), 'a', 'x')
        root.set(Int(2), 'a', 'y')
        self.assertEqual(root.get_compound('a'), Compound({'x': Int(1), 'y': Int(2)}))

    def test_overwrite_keeps_position(self) -> None:
        root = Compound()
        root.set(Int(1), 'first')
        root.set(Int(2), 'second')
        root.set(String('replaced'), 'first')
        self.assertEqual(list(root), ['first', 'second'])
        self.assertEqual(root.get_string('first'), 'replaced')

    def test_get_through_non_compound(self) -> None:
        root = Compound({'a': Int(1)})
        self.assertIsNone(root.get('a', 'b'))
        self.assertIsNone(root.get('x', 'y', 'z'))

    def test_remove(self) -> None:
        root = Compound()
        root.set(Int(1), 'a', 'b')
        self.assertEqual(root.remove('a', 'b'), Int(1))
        self.assertEqual(root.get_compound('a'), Compound())
        self.assertIsNone(root.remove('a', 'b'))
        self.assertIsNone(root.remove('missing', 'b'))

    def test_invalid_path(self) -> None:
        root = Compound()
        with self.assertRaises(ValueError):
            root.set(Int(1))
        with self.assertRaises(ValueError):
            root.get()
        with self.assertRaises(TypeError):
            root.get(1)  # type: ignore[arg-type]

    def test_unmapped_values_are_rejected(self) -> None:
        root = Compound()
        for value in [1, 'a', 1.0, b'a', [Int(1)], {'a': Int(1)}, None]:
            with self.assertRaises(UnmappedValueKindError):
                root.set(value, 'a')  # type: ignore[arg-type]
        self.assertEqual(len(root), 0)
        with self.assertRaises(UnmappedValueKindError):
            Compound({'a': 1})  # type: ignore[dict-item]

    def test_unmapped_value_error_hierarchy(self) -> None:
        self.assertTrue(issubclass(UnmappedValueKindError, NBTError))
        self.assertTrue(issubclass(UnmappedValueKindError, TypeError))

    def test_typed_getters_match_only_their_kind(self) -> None:
        values = sample_values()
        root = Compound()
        for kind, value in values.items():
            root.set(value, kind.name)
        for kind in TagKind:
            for getter, getter_kind in GETTERS.items():
                result = getattr(root, getter)(kind.name)
                if kind is getter_kind:
                    self.assertIs(result, values[kind], f'{getter} on {kind.name}')
                else:
                    self.assertIsNone(result, f'{getter} on {kind.name}')

    def test_get_typed(self) -> None:
        root = Compound({'a': Int(1), 'r': RootCompound(name='x')})
        self.assertEqual(root.get_typed(Int, 'a'), 1)
        self.assertIsNone(root.get_typed(Long, 'a'))
        self.assertIsNone(root.get_typed(int, 'a'))
        self.assertIsNotNone(root.get_compound('r'))

    def test_equality(self) -> None:
        self.assertEqual(Compound({'a': Int(1)}), Compound({'a': Int(1)}))
        self.assertNotEqual(Compound({'a': Int(1)}), Compound({'a': Long(1)}))
        self.assertNotEqual(Compound({'a': Int(1)}), Compound({'b': Int(1)}))
        self.assertNotEqual(Compound({'a': Int(1)}), Compound({'a': Int(1), 'b': Int(2)}))
        # insertion order does not matter for equality
        self.assertEqual(Compound({'a': Int(1), 'b': Int(2)}), Compound({'b': Int(2), 'a': Int(1)}))
        self.assertNotEqual(Compound(), {})

    def test_root_compound_name_is_ignored_by_equality(self) -> None:
        self.assertEqual(RootCompound({'a': Int(1)}, name='one'), RootCompound({'a': Int(1)}, name='two'))
        self.assertEqual(RootCompound({'a': Int(1)}, name='one'), Compound({'a': Int(1)}))
        self.assertEqual(repr(RootCompound(name='x')), "RootCompound({}, name='x')")

    def test_not_hashable(self) -> None:
        with self.assertRaises(TypeError):
            hash(Compound())


class VarIntArrayTestCase(unittest.TestCase):
    def _compound_with(self, data: bytes) -> Compound:
        return Compound({'v': ByteArray(data)})

    def test_examples(self) -> None:
        self.assertEqual(self._compound_with(b'').get_var_int_array('v'), [])
        self.assertEqual(self._compound_with(bytes([0x00])).get_var_int_array('v'), [0])
        self.assertEqual(self._compound_with(bytes([0x7f])).get_var_int_array('v'), [127])
        self.assertEqual(self._compound_with(bytes([0xff, 0x01])).get_var_int_array('v'), [255])
        self.assertEqual(self._compound_with(bytes([0xe5, 0x8e, 0x26])).get_var_int_array('v'), [624485])
        self.assertEqual(self._compound_with(bytes([0x01, 0x02, 0x03])).get_var_int_array('v'), [1, 2, 3])

    def test_too_many_continuation_bytes(self) -> None:
        root = self._compound_with(bytes([0x80, 0x80, 0x80, 0x80, 0x80, 0x80, 0x01]))
        with self.assertRaises(MalformedVarIntError):
            root.get_var_int_array('v')

    def test_truncated(self) -> None:
        with self.assertRaises(MalformedVarIntError):
            self._compound_with(bytes([0x80])).get_var_int_array('v')

    def test_missing_or_other_kind(self) -> None:
        root = Compound({'i': Int(1)})
        self.assertIsNone(root.get_var_int_array('v'))
        self.assertIsNone(root.get_var_int_array('i'))

    def test_set_var_int_array(self) -> None:
        root = Compound()
        root.set_var_int_array([624485, -1, 0], 'a', 'v')
        self.assertEqual(root.get_byte_array('a', 'v')[:3], bytes([0xe5, 0x8e, 0x26]))
        self.assertEqual(root.get_var_int_array('a', 'v'), [624485, -1, 0])
