"""Per-file batch processing for sign and verify."""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import click

from ..errors import EdSignError

logger = logging.getLogger(__name__)


def echo_error(message: str) -> None:
    click.echo(message, err=True)


@dataclass
class FileOutcome:
    """Result of processing one file in a batch."""
    path: str
    valid: Optional[bool] = None  # verification verdict, None for signing
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_batch(
    paths: Iterable[str],
    action: Callable[[str], Optional[bool]],
    fail_fast: bool = True,
    on_error: Callable[[str], None] = echo_error
) -> List[FileOutcome]:
    """
    Apply action to each path in order.

    With fail_fast the first EdSignError propagates and later paths are not
    touched. Otherwise each failure is reported through on_error and
    recorded, and processing continues.
    """
    outcomes = []
    for path in paths:
        if fail_fast:
            outcomes.append(FileOutcome(path=path, valid=action(path)))
            continue
        try:
            outcomes.append(FileOutcome(path=path, valid=action(path)))
        except EdSignError as e:
            logger.debug(f"Failed on {path}: {e}")
            on_error(f"Error: {e}")
            outcomes.append(FileOutcome(path=path, error=str(e)))
    return outcomes
