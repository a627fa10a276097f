"""Tests for TextFile."""

import gzip
from pathlib import Path

import pytest

from moltraj.core.errors import FileError, UsageError
from moltraj.core.files import TextFile


@pytest.fixture
def three_lines(tmp_path: Path) -> Path:
    path = tmp_path / "lines.txt"
    path.write_text("first\nsecond\r\nthird\n")
    return path


class TestReading:
    def test_getline_and_eof(self, three_lines: Path):
        with TextFile(three_lines) as f:
            assert not f.eof()
            assert f.getline() == "first"
            assert f.getline() == "second"
            assert f.getline() == "third"
            assert f.eof()
            assert f.lineno == 3

    def test_getline_past_end(self, three_lines: Path):
        with TextFile(three_lines) as f:
            for _ in range(3):
                f.getline()
            with pytest.raises(FileError):
                f.getline()

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with TextFile(path) as f:
            assert f.eof()

    def test_last_line_without_newline(self, tmp_path: Path):
        path = tmp_path / "noeol.txt"
        path.write_text("a\nb")
        with TextFile(path) as f:
            assert f.getline() == "a"
            assert f.getline() == "b"
            assert f.eof()

    def test_tell_and_seek(self, three_lines: Path):
        with TextFile(three_lines) as f:
            f.getline()
            position = f.tell()
            assert f.getline() == "second"
            assert f.getline() == "third"
            f.seek(position)
            assert f.lineno == 1
            assert f.getline() == "second"

    def test_rewind(self, three_lines: Path):
        with TextFile(three_lines) as f:
            while not f.eof():
                f.getline()
            f.rewind()
            assert f.lineno == 0
            assert f.getline() == "first"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileError, match="missing.txt"):
            TextFile(tmp_path / "missing.txt")


class TestWriting:
    def test_write_then_append(self, tmp_path: Path):
        path = tmp_path / "out.txt"
        with TextFile(path, "w") as f:
            f.write("one\n")
        with TextFile(path, "a") as f:
            f.write("two\n")
        assert path.read_text() == "one\ntwo\n"

    def test_write_truncates(self, tmp_path: Path):
        path = tmp_path / "out.txt"
        path.write_text("old content\n")
        with TextFile(path, "w") as f:
            f.write("new\n")
        assert path.read_text() == "new\n"

    def test_gzip_round_trip(self, tmp_path: Path):
        path = tmp_path / "out.txt.gz"
        with TextFile(path, "w") as f:
            f.write("compressed\nlines\n")
        with gzip.open(path, "rt") as raw:
            assert raw.read() == "compressed\nlines\n"
        with TextFile(path) as f:
            assert f.getline() == "compressed"
            f.getline()
            assert f.eof()


class TestMisuse:
    def test_unknown_mode(self, three_lines: Path):
        with pytest.raises(UsageError):
            TextFile(three_lines, "x")

    def test_write_in_read_mode(self, three_lines: Path):
        with TextFile(three_lines) as f:
            with pytest.raises(UsageError):
                f.write("nope")

    def test_read_in_write_mode(self, tmp_path: Path):
        with TextFile(tmp_path / "out.txt", "w") as f:
            with pytest.raises(UsageError):
                f.getline()

    def test_closed(self, three_lines: Path):
        f = TextFile(three_lines)
        f.close()
        f.close()
        assert f.closed
        with pytest.raises(UsageError):
            f.eof()


class TestPositions:
    def test_seek_after_multibyte_characters(self, tmp_path: Path):
        path = tmp_path / "utf8.txt"
        path.write_text("Å résidu\nñ second\nthird\n", encoding="utf-8")
        with TextFile(path) as f:
            assert f.getline() == "Å résidu"
            position = f.tell()
            assert f.getline() == "ñ second"
            f.getline()
            f.seek(position)
            assert f.getline() == "ñ second"

    def test_gzip_tell_and_seek(self, tmp_path: Path):
        path = tmp_path / "lines.txt.gz"
        with gzip.open(path, "wt") as raw:
            raw.write("".join(f"line {i}\n" for i in range(100)))
        with TextFile(path) as f:
            for _ in range(50):
                f.getline()
            position = f.tell()
            while not f.eof():
                f.getline()
            f.seek(position)
            assert f.getline() == "line 50"
            assert f.lineno == 51

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"ok\n\xe9t\xe9\n")
        with TextFile(path) as f:
            with pytest.raises(FileError, match="UTF-8"):
                f.getline()
