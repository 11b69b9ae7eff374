"""Tests for tag list ordering."""

from __future__ import annotations

import unittest

from symline.tags.types import TagList, TagRecord


class TagListTests(unittest.TestCase):
    def test_from_records_sorts_by_line(self) -> None:
        records = [TagRecord("c", 20), TagRecord("a", 5), TagRecord("b", 12), TagRecord("junk", 0)]
        tags = TagList.from_records(records)
        lines = [record.line for record in tags]
        self.assertEqual(lines, sorted(lines))
        self.assertEqual([record.name for record in tags], ["junk", "a", "b", "c"])

    def test_equal_lines_keep_arrival_order(self) -> None:
        records = [
            TagRecord("zeta", 10),
            TagRecord("first", 3),
            TagRecord("alpha", 10),
            TagRecord("mid", 10),
        ]
        tags = TagList.from_records(records)
        self.assertEqual([record.name for record in tags], ["first", "zeta", "alpha", "mid"])

    def test_empty_input_returns_shared_empty_list(self) -> None:
        self.assertIs(TagList.from_records([]), TagList.EMPTY)
        self.assertEqual(len(TagList.EMPTY), 0)
        self.assertFalse(TagList.EMPTY)

    def test_from_records_does_not_keep_reference_to_input(self) -> None:
        records = [TagRecord("a", 1)]
        tags = TagList.from_records(records)
        records.append(TagRecord("b", 2))
        self.assertEqual(len(tags), 1)


if __name__ == "__main__":
    unittest.main()
