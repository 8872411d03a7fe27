"""
Module: history.config

Purpose:
    Configuration dataclass for the history store. Immutable configuration
    with validation on construction.

Key Classes:
    - HistoryConfig: Undo depth and id generation

Used By:
    - history.store.HistoryStore
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from decision_toolkit.core.models import new_id


@dataclass(frozen=True)
class HistoryConfig:
    """
    Configuration for a HistoryStore (immutable).

    Attributes:
        max_depth: Maximum number of undo steps kept (None = unbounded).
            The oldest snapshots are dropped first.
        id_factory: Generates identifiers for new points and items

    Invariants:
        - max_depth is None or an int >= 1

    Example:
        >>> config = HistoryConfig(max_depth=50)
        >>> config.is_bounded
        True
    """

    max_depth: Optional[int] = None
    id_factory: Callable[[], str] = new_id

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_depth is None:
            return
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise ValueError(f"max_depth must be an integer: {self.max_depth!r}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1: {self.max_depth}")

    @property
    def is_bounded(self) -> bool:
        return self.max_depth is not None
