import unittest
from pathlib import Path

from treedup.errors import DigestFailure
from treedup.index.duplicate_index import DuplicateIndex, normalize_name
from treedup.tree.nodes import FileMetadata, RegularFile


def make_file(path: str) -> RegularFile:
    return RegularFile(Path(path), FileMetadata(size=0, mtime_ns=0, mode=0o100644))


class NormalizeNameTest(unittest.TestCase):
    def test_strips_directory_and_extension(self):
        self.assertEqual("report", normalize_name("a/report.pdf"))
        self.assertEqual("report", normalize_name("b/c/report.txt"))

    def test_only_last_extension_removed(self):
        self.assertEqual("archive.tar", normalize_name("archive.tar.gz"))

    def test_no_extension(self):
        self.assertEqual("Makefile", normalize_name("src/Makefile"))

    def test_dot_file_keeps_name(self):
        self.assertEqual(".profile", normalize_name("home/.profile"))

    def test_trailing_dot_is_an_empty_extension(self):
        self.assertEqual("report", normalize_name("a/report."))
        self.assertEqual(normalize_name("a/report."), normalize_name("b/report.txt"))


class DuplicateIndexTest(unittest.TestCase):
    def test_name_collision_across_directories(self):
        """Same file name in different directories shares one bucket."""
        index = DuplicateIndex()
        first = make_file("test_files/file1.txt")
        second = make_file("test_files/foo/file1.txt")

        index.record_by_name(first)
        index.record_by_name(second)

        self.assertEqual([first, second], index.by_name("file1"))

    def test_same_stem_different_extension_collide(self):
        index = DuplicateIndex()
        index.record_by_name(make_file("a/report.pdf"))
        index.record_by_name(make_file("b/report.txt"))

        self.assertEqual(2, len(index.by_name("report")))

    def test_same_extension_different_stem_do_not_collide(self):
        index = DuplicateIndex()
        index.record_by_name(make_file("a/one.txt"))
        index.record_by_name(make_file("a/two.txt"))

        self.assertEqual([("one", 1), ("two", 1)], [(k, len(v)) for k, v in index.buckets_by_name()])

    def test_content_buckets_keep_insertion_order(self):
        index = DuplicateIndex()
        files = [make_file(f"f{i}") for i in range(3)]
        index.record_by_content("aa", files[0])
        index.record_by_content("bb", files[1])
        index.record_by_content("aa", files[2])

        self.assertEqual([("aa", [files[0], files[2]]), ("bb", [files[1]])], list(index.buckets_by_content()))

    def test_missing_keys(self):
        index = DuplicateIndex()

        self.assertIsNone(index.by_content("00"))
        self.assertIsNone(index.by_name("nothing"))
        self.assertEqual([], list(index.buckets_by_content()))
        self.assertEqual([], list(index.buckets_by_name()))

    def test_counts(self):
        index = DuplicateIndex()
        file = make_file("x.txt")
        index.record_by_name(file)
        index.record_by_content("ff", file)
        index.record_by_name(make_file("y.txt"))

        self.assertEqual(1, index.content_file_count)
        self.assertEqual(2, index.name_file_count)

    def test_digest_failures(self):
        index = DuplicateIndex()
        failure = DigestFailure(Path("locked.bin"), PermissionError(13, "Permission denied"))

        index.record_digest_failure(failure)

        self.assertEqual([failure], index.digest_failures)
        self.assertIn("locked.bin", str(failure))


if __name__ == '__main__':
    unittest.main()
