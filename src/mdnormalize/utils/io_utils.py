#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/utils/io_utils.py
"""Output helpers for writing rendered Markdown."""

from __future__ import annotations

import builtins
import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from mdnormalize.exceptions import FileAccessError
from mdnormalize.exceptions import FileNotFoundError as MdFileNotFoundError
from mdnormalize.exceptions import OutputWriteError
from mdnormalize.utils.encoding import decode_markdown_bytes


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write rendered text to a file path or stream.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], or IO[str]
        Destination. Paths are written as UTF-8; binary streams receive the
        UTF-8 encoding of ``content``.

    Raises
    ------
    TypeError
        If ``output`` is not a path or writable stream

    Examples
    --------
    >>> buffer = BytesIO()
    >>> write_content("# Title\\n", buffer)
    >>> buffer.getvalue()
    b'# Title\\n'

    """
    if isinstance(output, (str, Path)):
        # newline="" keeps "\n" as-is on every platform
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if isinstance(output, BytesIO):
        is_binary_mode = True
    elif isinstance(output, (StringIO, io.TextIOBase)):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)


def read_markdown_file(file_path: Union[str, Path]) -> str:
    """Read and decode a Markdown file.

    Parameters
    ----------
    file_path : str or Path
        File to read

    Returns
    -------
    str
        Decoded file contents

    Raises
    ------
    FileNotFoundError
        If the file does not exist (mdnormalize's FileNotFoundError)
    FileAccessError
        If the file cannot be read

    """
    path_str = str(file_path)
    try:
        data = Path(file_path).read_bytes()
    except builtins.FileNotFoundError as e:
        raise MdFileNotFoundError(file_path=path_str, original_error=e) from e
    except PermissionError as e:
        raise FileAccessError(file_path=path_str, original_error=e) from e
    except IsADirectoryError as e:
        raise FileAccessError(file_path=path_str, message=f'Path is a directory: "{path_str}"', original_error=e) from e

    return decode_markdown_bytes(data)


def write_markdown_file(file_path: Union[str, Path], content: str) -> None:
    """Write Markdown text to a file as UTF-8.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    try:
        write_content(content, file_path)
    except PermissionError as e:
        raise OutputWriteError(file_path=str(file_path), original_error=e) from e
    except OSError as e:
        raise OutputWriteError(
            file_path=str(file_path), message=f'Could not write file at "{file_path}": {e}', original_error=e
        ) from e


__all__ = ["write_content", "read_markdown_file", "write_markdown_file"]
