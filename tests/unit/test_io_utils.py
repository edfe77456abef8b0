#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_io_utils.py
"""Unit tests for file reading and writing helpers."""

from io import BytesIO, StringIO

import pytest

from mdnormalize.exceptions import FileAccessError
from mdnormalize.exceptions import FileNotFoundError as MdFileNotFoundError
from mdnormalize.exceptions import MdNormalizeError, OutputWriteError
from mdnormalize.utils.io_utils import read_markdown_file, write_content, write_markdown_file


@pytest.mark.unit
class TestWriteContent:
    """Test write_content with different destinations."""

    def test_path(self, tmp_path):
        """Test writing to a path keeps newlines as-is."""
        target = tmp_path / "out.md"
        write_content("a\nb\n", target)
        assert target.read_bytes() == b"a\nb\n"

    def test_string_path(self, tmp_path):
        """Test string paths are accepted."""
        target = tmp_path / "out.md"
        write_content("# T\n", str(target))
        assert target.read_text(encoding="utf-8") == "# T\n"

    def test_text_stream(self):
        """Test text streams receive str."""
        buffer = StringIO()
        write_content("text", buffer)
        assert buffer.getvalue() == "text"

    def test_binary_stream(self):
        """Test binary streams receive UTF-8 bytes."""
        buffer = BytesIO()
        write_content("café", buffer)
        assert buffer.getvalue() == "café".encode("utf-8")

    def test_unsupported_output(self):
        """Test objects without write() are rejected."""
        with pytest.raises(TypeError):
            write_content("text", 42)


@pytest.mark.unit
class TestReadMarkdownFile:
    """Test read_markdown_file."""

    def test_reads_utf8(self, tmp_path):
        """Test a UTF-8 file is decoded."""
        source = tmp_path / "doc.md"
        source.write_bytes("# Café\n".encode("utf-8"))
        assert read_markdown_file(source) == "# Café\n"

    def test_missing_file(self, tmp_path):
        """Test a missing file raises the library's FileNotFoundError."""
        missing = tmp_path / "missing.md"
        with pytest.raises(MdFileNotFoundError) as exc_info:
            read_markdown_file(missing)

        assert isinstance(exc_info.value, MdNormalizeError)
        assert exc_info.value.file_path == str(missing)
        assert "File not found" in str(exc_info.value)

    def test_directory(self, tmp_path):
        """Test a directory path raises FileAccessError."""
        with pytest.raises(FileAccessError):
            read_markdown_file(tmp_path)


@pytest.mark.unit
class TestWriteMarkdownFile:
    """Test write_markdown_file."""

    def test_writes_file(self, tmp_path):
        """Test content is written as UTF-8."""
        target = tmp_path / "doc.md"
        write_markdown_file(target, "- a\n")
        assert target.read_text(encoding="utf-8") == "- a\n"

    def test_missing_directory(self, tmp_path):
        """Test a write into a missing directory raises OutputWriteError."""
        target = tmp_path / "no" / "such" / "dir" / "doc.md"
        with pytest.raises(OutputWriteError) as exc_info:
            write_markdown_file(target, "text")

        assert exc_info.value.file_path == str(target)
        assert isinstance(exc_info.value.original_error, OSError)
