import json
import os
import unittest
from pathlib import Path

import msgpack

from treedup.errors import PathEncodingError
from treedup.report.collision import DuplicateGroup, DuplicateKind, DuplicateReport
from treedup.report.serialize import FORMAT_VERSION, compute_group_id, from_msgpack, to_json, to_msgpack
from treedup.tree.nodes import FileMetadata, RegularFile


def make_file(path: str, size: int = 5) -> RegularFile:
    return RegularFile(Path(path), FileMetadata(size=size, mtime_ns=1_700_000_000_000_000_000, mode=0o100644))


def sample_report() -> DuplicateReport:
    a, b, c = make_file("root/a.txt"), make_file("root/b/a.txt"), make_file("root/a.md", 9)
    return DuplicateReport(
        [DuplicateGroup(DuplicateKind.CONTENT, "2cf24dba", [a, b])],
        [DuplicateGroup(DuplicateKind.NAME, "a", [a, b, c])],
    )


class JsonReportTest(unittest.TestCase):
    def test_structure(self):
        data = json.loads(to_json(sample_report()))

        self.assertEqual(FORMAT_VERSION, data["version"])
        [content] = data["content_duplicates"]
        self.assertEqual("2cf24dba", content["key"])
        self.assertEqual("root/a.txt", content["representative"])
        self.assertEqual(["root/a.txt", "root/b/a.txt"], [m["path"] for m in content["members"]])
        self.assertEqual(5, content["members"][0]["size"])
        self.assertEqual(0o100644, content["members"][0]["mode"])

        [name] = data["name_duplicates"]
        self.assertEqual("a", name["key"])
        self.assertEqual(3, len(name["members"]))

    def test_empty_report(self):
        data = json.loads(to_json(DuplicateReport()))

        self.assertEqual([], data["content_duplicates"])
        self.assertEqual([], data["name_duplicates"])

    @unittest.skipUnless(os.name == "posix", "raw byte file names are a POSIX feature")
    def test_undecodable_path_refused(self):
        odd = make_file(os.fsdecode(b"root/\xff.bin"))
        report = DuplicateReport([DuplicateGroup(DuplicateKind.CONTENT, "00", [odd, make_file("root/ok.bin")])])

        with self.assertRaises(PathEncodingError) as cm:
            to_json(report)

        self.assertEqual(b"root/\xff.bin", cm.exception.raw)


class MsgpackReportTest(unittest.TestCase):
    def test_paths_stored_as_bytes(self):
        data = msgpack.loads(to_msgpack(sample_report()), raw=False)

        self.assertEqual(b"root/a.txt", data["content_duplicates"][0]["representative"])
        self.assertEqual(b"a", data["name_duplicates"][0]["key"])

    def test_read_back(self):
        report = sample_report()

        self.assertEqual(report, from_msgpack(to_msgpack(report)))

    @unittest.skipUnless(os.name == "posix", "raw byte file names are a POSIX feature")
    def test_undecodable_names_survive(self):
        odd = make_file(os.fsdecode(b"root/\xff.bin"))
        twin = make_file(os.fsdecode(b"other/\xff.txt"))
        report = DuplicateReport([], [DuplicateGroup(DuplicateKind.NAME, os.fsdecode(b"\xff"), [odd, twin])])

        restored = from_msgpack(to_msgpack(report))

        self.assertEqual(report, restored)
        self.assertEqual(b"root/\xff.bin", os.fsencode(restored.name_groups[0].representative.path))

    def test_rejects_foreign_data(self):
        with self.assertRaises(ValueError):
            from_msgpack(msgpack.dumps({"version": FORMAT_VERSION + 1}))
        with self.assertRaises(ValueError):
            from_msgpack(msgpack.dumps([1, 2, 3]))


class GroupIdTest(unittest.TestCase):
    def test_stable_for_same_members(self):
        first = DuplicateGroup(DuplicateKind.CONTENT, "aa", [make_file("x"), make_file("y")])
        second = DuplicateGroup(DuplicateKind.NAME, "x", [make_file("x", 1), make_file("y", 2)])

        self.assertEqual(compute_group_id(first), compute_group_id(second))
        self.assertEqual(32, len(compute_group_id(first)))

    def test_depends_on_members(self):
        first = DuplicateGroup(DuplicateKind.CONTENT, "aa", [make_file("x"), make_file("y")])
        second = DuplicateGroup(DuplicateKind.CONTENT, "aa", [make_file("x"), make_file("z")])

        self.assertNotEqual(compute_group_id(first), compute_group_id(second))

    def test_member_boundaries_matter(self):
        first = DuplicateGroup(DuplicateKind.CONTENT, "aa", [make_file("ab"), make_file("c")])
        second = DuplicateGroup(DuplicateKind.CONTENT, "aa", [make_file("a"), make_file("bc")])

        self.assertNotEqual(compute_group_id(first), compute_group_id(second))


if __name__ == '__main__':
    unittest.main()
