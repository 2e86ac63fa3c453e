"""Glob pattern expansion into concrete file lists."""

import glob
import logging
import os
from typing import List

from ..models.artifact import SIG_SUFFIX

logger = logging.getLogger(__name__)


def _walk_files(directory: str) -> List[str]:
    found = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in sorted(files):
            found.append(os.path.join(root, name))
    return found


def expand_pattern(pattern: str, include_directories: bool = False) -> List[str]:
    """
    Expand a glob pattern into an ordered list of file paths.

    The whole list is built before it is returned. ``.sig`` artifacts are
    never targets. A pattern without wildcards that matches nothing is
    returned as-is so the caller reports the missing path.

    Args:
        pattern: Glob pattern (``**`` recurses)
        include_directories: Expand matched directories into the files below them

    Returns:
        Matching paths in sorted order
    """
    matches = sorted(glob.glob(pattern, recursive=True))

    if not matches:
        if not glob.has_magic(pattern):
            return [pattern]
        logger.warning(f"No files match pattern: {pattern}")
        return []

    paths = []
    for match in matches:
        if os.path.isdir(match):
            if include_directories:
                paths.extend(_walk_files(match))
            else:
                logger.debug(f"Skipping directory: {match}")
            continue
        paths.append(match)

    seen = set()
    result = []
    for path in paths:
        if path.endswith(SIG_SUFFIX) or path in seen:
            continue
        seen.add(path)
        result.append(path)

    if not result:
        logger.warning(f"No files match pattern: {pattern}")
    return result
