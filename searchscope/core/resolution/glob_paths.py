# searchscope/core/resolution/glob_paths.py
import os
from typing import Optional
import structlog

from searchscope.exceptions import PathResolutionError
from searchscope.util import is_relative_to_base_directory

log = structlog.get_logger(__name__)

GLOB_SUFFIX = "**"

def strip_glob_suffix(pattern: str) -> str:
    """
    Removes a trailing '**' segment from a pattern, e.g. '/a/b/c/**' -> '/a/b/c'.
    Any other pattern, including one with wildcards elsewhere, is returned as is.
    """
    separators = os.sep + (os.altsep or "")
    # trailing separators do not count as a segment.
    trimmed = pattern.rstrip(separators) or pattern
    parent, last_segment = os.path.split(trimmed)
    return parent if last_segment == GLOB_SUFFIX else pattern

def path_exists(target_path: str) -> bool:
    # existence only; files and directories both count.
    try:
        os.stat(target_path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except (OSError, ValueError) as e:
        raise PathResolutionError(f"cannot check whether '{target_path}' exists: {e}") from e
    return True

def resolve_include_folder_from_glob(root: str, pattern: str) -> Optional[str]:
    """
    Attempts to build an existing absolute file or directory path from a pattern
    and a workspace root, e.g. '/a/b/c/foo/**' -> '/a/b/c/foo' or
    './foo/**' -> '<root>/foo'.

    Returns None when the pattern is a real glob or the path does not exist.
    """
    pattern_base = strip_glob_suffix(pattern)
    is_absolute = os.path.isabs(pattern_base)

    if not is_absolute and not is_relative_to_base_directory(pattern_base):
        # not a single file or folder, leave it to the search engine.
        return None

    target_path = pattern_base if is_absolute else os.path.normpath(os.path.join(root, pattern_base))

    if path_exists(target_path):
        log.debug("include_pattern_matched_path", pattern=pattern, root=root, path=target_path)
        return target_path

    log.debug("include_pattern_path_missing", pattern=pattern, root=root, path=target_path)
    return None
