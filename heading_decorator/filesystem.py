"""Filesystem helpers for heading-decorator."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import DocumentReadError, FileTooLargeError

MAX_FILE_SIZE_ENV_VAR = "HEADING_DECORATOR_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["HEADING_DECORATOR_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}.")

    return max_size


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve a user-supplied Markdown path.

    Args:
        raw_path: Path to a Markdown file (absolute, relative, or ``~``-prefixed).
        base_dir: Directory relative paths are resolved against.

    Returns:
        Path: Absolute path to the Markdown file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or does
            not have a Markdown extension.

    Examples:
        normalize_filepath("docs/README.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base_dir / path

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        error_message = f"{resolved} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def relative_document_path(filepath: Path, base_dir: Path) -> str:
    """Slash-separated path of `filepath` relative to `base_dir` when possible.

    Examples:
        relative_document_path(Path("/notes/drafts/a.md"), Path("/notes"))  # "drafts/a.md"
    """
    try:
        return filepath.relative_to(base_dir).as_posix()
    except ValueError:
        return filepath.as_posix()


def read_document(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a Markdown file as UTF-8 after checking its size.

    Args:
        filepath: Path to the file.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: File content.

    Raises:
        FileTooLargeError: If the file is larger than `max_size`.
        DocumentReadError: If the path is inaccessible, not a regular file, or
            not valid UTF-8.

    Examples:
        text = read_document(Path("README.md"))
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        raise DocumentReadError(filepath, str(error)) from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise DocumentReadError(filepath, "not a regular file")

    if stat_result.st_size > max_size:
        raise FileTooLargeError(filepath, max_size)

    try:
        with open(filepath, "r", encoding="UTF-8") as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise DocumentReadError(filepath, f"invalid UTF-8 sequence: {error}") from error
    except OSError as error:
        raise DocumentReadError(filepath, str(error)) from error
