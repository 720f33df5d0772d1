import tempfile
import unittest
from pathlib import Path

from merge_affiliations.db import DatabaseManager
from merge_affiliations.export import read_output_lines, sort_output_file, write_rows


class ExportTests(unittest.TestCase):
    def test_write_rows_keeps_crlf_terminators(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out" / "final.txt"
            count = write_rows(str(path), ["1\tja\tp2\tX\t\r\n", "1\tja\tp1\tY\t\r\n"])
            content = path.read_bytes()
        self.assertEqual(count, 2)
        self.assertEqual(content, "1\tja\tp2\tX\t\r\n1\tja\tp1\tY\t\r\n".encode("utf-8"))

    def test_sort_is_by_id_column_and_stable(self) -> None:
        lines = [
            "1\tja\tp3\tfirst\t\r\n",
            "2\tja\tp1\tsecond\ten\tp1\t\r\n",
            "1\tja\tp3\tthird\t\r\n",
            "1\tja\tp2\tfourth\t\r\n",
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "final.txt")
            write_rows(path, lines)
            with DatabaseManager() as db_manager:
                count = sort_output_file(db_manager, path, [2])
            result = read_output_lines(path)

        self.assertEqual(count, 4)
        self.assertEqual(result, [
            "2\tja\tp1\tsecond\ten\tp1\t",
            "1\tja\tp2\tfourth\t",
            "1\tja\tp3\tfirst\t",
            "1\tja\tp3\tthird\t",
        ])

    def test_sort_of_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "final.txt")
            write_rows(path, [])
            with DatabaseManager() as db_manager:
                self.assertEqual(sort_output_file(db_manager, path), 0)

    def test_database_manager_rejects_bad_memory_limit(self) -> None:
        with self.assertRaises(ValueError):
            DatabaseManager(memory_limit="lots")

    def test_database_manager_close_releases_connection(self) -> None:
        db_manager = DatabaseManager(memory_limit="256MB")
        db_manager.close()
        self.assertIsNone(db_manager.con)
        db_manager.close()

    def test_sort_requires_key_columns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "final.txt")
            write_rows(path, ["1\t\r\n"])
            with DatabaseManager() as db_manager:
                with self.assertRaises(ValueError):
                    sort_output_file(db_manager, path, [])


if __name__ == "__main__":
    unittest.main()
