"""
Writing generated code to disk.

The destination is only rewritten when its content changes, so an
unchanged schema leaves file timestamps (and downstream builds) alone.
"""

from pathlib import Path
from typing import Union

from ...logging_config import get_logger
from .generator import GeneratorError

logger = get_logger(__name__)


class OutputError(GeneratorError):
    """Raised when generated code cannot be written."""

    pass


def read_previous_content(path: Union[str, Path]) -> str:
    """
    Read the current content of the destination file.

    Any failure to read (missing file, permissions, bad encoding) is treated
    as an empty baseline.
    """
    path = Path(path)
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("No previous content at %s: %s", path, e)
        return ""


def apply_line_ending(content: str, line_ending: str = "\n") -> str:
    """Convert '\\n' line endings to the configured ones."""
    if line_ending == "\n":
        return content
    return content.replace("\r\n", "\n").replace("\n", line_ending)


def write_if_changed(
    path: Union[str, Path], content: str, line_ending: str = "\n"
) -> bool:
    """
    Write content to path unless the file already holds exactly that content.

    Args:
        path: Destination file
        content: Generated code using '\\n' line endings
        line_ending: Line ending for the file on disk

    Returns:
        True if the file was written, False if it was already up to date

    Raises:
        OutputError: If the file cannot be written
    """
    path = Path(path)
    new_content = apply_line_ending(content, line_ending)
    old_content = read_previous_content(path)

    if new_content == old_content:
        logger.info("%s is up to date", path)
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the configured line endings untouched
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
    except OSError as e:
        raise OutputError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %s (%d bytes)", path, len(new_content.encode("utf-8")))
    return True


def is_up_to_date(path: Union[str, Path], content: str, line_ending: str = "\n") -> bool:
    """Check whether path already holds the generated content."""
    return read_previous_content(path) == apply_line_ending(content, line_ending)
