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

from nbtree import Compound, TagKind, TagList
from nbtree.exceptions import ListKindMismatchError, NBTError
from nbtree.types import Byte, Int, Long, String


class TagListTestCase(unittest.TestCase):
    def test_add_and_get(self) -> None:
        tag_list = TagList(TagKind.STRING)
        tag_list.add(String('a'))
        tag_list.add(String('b'))
        self.assertEqual(len(tag_list), 2)
        self.assertEqual(tag_list.get(0), 'a')
        self.assertEqual(tag_list.get_string(1), 'b')
        self.assertEqual(list(tag_list), ['a', 'b'])
        self.assertEqual(tag_list.kind, TagKind.STRING)

    def test_kind_mismatch_leaves_list_unchanged(self) -> None:
        tag_list = TagList(TagKind.INT, [Int(1)])
        with self.assertRaises(ListKindMismatchError):
            tag_list.add(Long(2))
        with self.assertRaises(ListKindMismatchError):
            tag_list.add(2)  # type: ignore[arg-type]
        with self.assertRaises(ListKindMismatchError):
            tag_list.insert(0, Byte(2))
        with self.assertRaises(ListKindMismatchError):
            tag_list[0] = String('x')
        self.assertEqual(tag_list, TagList(TagKind.INT, [Int(1)]))

    def test_extend_is_all_or_nothing(self) -> None:
        tag_list = TagList(TagKind.INT)
        with self.assertRaises(ListKindMismatchError):
            tag_list.extend([Int(1), Int(2), Long(3)])
        self.assertEqual(len(tag_list), 0)
        tag_list.extend([Int(1), Int(2)])
        self.assertEqual(len(tag_list), 2)

    def test_constructor_checks_items(self) -> None:
        with self.assertRaises(ListKindMismatchError):
            TagList(TagKind.LONG, [Int(1)])

    def test_end_list_rejects_everything(self) -> None:
        tag_list = TagList(TagKind.END)
        with self.assertRaises(ListKindMismatchError):
            tag_list.add(Int(1))
        self.assertEqual(len(tag_list), 0)

    def test_error_hierarchy(self) -> None:
        self.assertTrue(issubclass(ListKindMismatchError, NBTError))
        self.assertTrue(issubclass(ListKindMismatchError, TypeError))

    def test_out_of_bounds(self) -> None:
        tag_list = TagList(TagKind.INT, [Int(1)])
        with self.assertRaises(IndexError):
            tag_list.get(1)
        with self.assertRaises(IndexError):
            tag_list.get_int(5)
        self.assertEqual(tag_list.get(-1), Int(1))

    def test_typed_getter_mismatch(self) -> None:
        tag_list = TagList(TagKind.INT, [Int(1)])
        self.assertEqual(tag_list.get_int(0), 1)
        self.assertIsNone(tag_list.get_long(0))
        self.assertIsNone(tag_list.get_string(0))
        self.assertIsNone(tag_list.get_compound(0))
        # the kind is checked before the index
        self.assertIsNone(tag_list.get_long(10))

    def test_nested_containers(self) -> None:
        inner = TagList(TagKind.INT, [Int(1)])
        outer = TagList(TagKind.LIST, [inner, TagList(TagKind.STRING)])
        self.assertIs(outer.get_list(0), inner)
        compounds = TagList(TagKind.COMPOUND, [Compound({'a': Int(1)})])
        self.assertEqual(compounds.get_compound(0), Compound({'a': Int(1)}))

    def test_mutation(self) -> None:
        tag_list = TagList(TagKind.INT, [Int(1), Int(2), Int(3)])
        self.assertEqual(tag_list.pop(), Int(3))
        del tag_list[0]
        tag_list.insert(0, Int(0))
        tag_list[1] = Int(5)
        self.assertEqual(tag_list[:], [Int(0), Int(5)])
        tag_list.clear()
        self.assertEqual(len(tag_list), 0)

    def test_equality(self) -> None:
        self.assertEqual(TagList(TagKind.INT, [Int(1)]), TagList(TagKind.INT, [Int(1)]))
        self.assertNotEqual(TagList(TagKind.INT), TagList(TagKind.LONG))
        self.assertNotEqual(TagList(TagKind.INT, [Int(1)]), TagList(TagKind.INT, [Int(2)]))
        self.assertNotEqual(TagList(TagKind.INT, [Int(1)]), [Int(1)])
        self.assertEqual(repr(TagList(TagKind.BYTE, [Byte(1)])), 'TagList(TagKind.BYTE, [Byte(1)])')
