"""
Whitelist file loader.

Reads rule files in the given order into a single registry. Loading is fail
fast: the first unreadable file or malformed line aborts the whole load and
no partial registry is returned.

Functions:
- load_whitelist: Load a list of files into a frozen Whitelist
- load_whitelist_file: Stream one file into a WhitelistBuilder
"""

from collections.abc import Iterable
from os import PathLike

from cyclefinder.shared.domain.exceptions import FileAccessError, MalformedRuleError
from cyclefinder.shared.infrastructure.config import settings
from cyclefinder.shared.infrastructure.logging import get_logger
from cyclefinder.whitelist.registry import Whitelist, WhitelistBuilder

logger = get_logger(__name__)

StrPath = str | PathLike[str]


def load_whitelist_file(
    builder: WhitelistBuilder,
    path: StrPath,
    encoding: str | None = None,
) -> int:
    """
    Add every rule of one whitelist file to ``builder``.

    Args:
        builder: Builder receiving the rules
        path: Whitelist file path
        encoding: Text encoding (default: settings.whitelist_encoding)

    Returns:
        Number of rules read from the file

    Raises:
        FileAccessError: If the file cannot be opened or decoded
        MalformedRuleError: If a line is not a valid rule
    """
    path_str = str(path)
    try:
        with open(path, encoding=encoding or settings.whitelist_encoding) as f:
            count = builder.add_lines(f, path=path_str)
    except MalformedRuleError as e:
        logger.error("whitelist_entry_invalid", path=path_str, line=e.line, entry=e.entry)
        raise
    except (OSError, UnicodeDecodeError) as e:
        logger.error("whitelist_file_unreadable", path=path_str, error=str(e))
        raise FileAccessError(path_str, str(e)) from e

    logger.debug("whitelist_file_loaded", path=path_str, rules=count)
    return count


def load_whitelist(files: Iterable[StrPath], encoding: str | None = None) -> Whitelist:
    """
    Load whitelist files into a frozen registry.

    Files are read strictly in order. Every table is a union, so the result
    does not depend on file order or on files listed twice.

    Args:
        files: Ordered whitelist file paths
        encoding: Text encoding (default: settings.whitelist_encoding)

    Returns:
        The loaded Whitelist

    Raises:
        FileAccessError: If a file cannot be opened or decoded
        MalformedRuleError: If a line is not a valid rule
    """
    builder = WhitelistBuilder()
    file_count = 0
    for path in files:
        load_whitelist_file(builder, path, encoding=encoding)
        file_count += 1

    whitelist = builder.build()
    logger.info("whitelist_loaded", files=file_count, **whitelist.stats().to_json())
    return whitelist
