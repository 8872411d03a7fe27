"""
Module: history.store

Purpose:
    Owns the canonical comparison document and a strictly linear undo/redo
    history of full-document snapshots. All mutations go through apply();
    observers are notified synchronously through Qt signals after every
    transition.

Key Classes:
    - HistoryStore: past / present / future snapshots plus command intents

Dependencies:
    - PySide6.QtCore: QObject/Signal notification
    - threading (std): Serializes concurrent submissions

Used By:
    - UI collaborators (forms, priority panel, chart, undo/redo buttons)

State Machine:
    apply(cmd): past += [present]; present = cmd(present); future = []
    undo():     future = [present] + future; present = past.pop()
    redo():     past += [present]; present = future.pop(0)

    Snapshots are frozen Comparison values, so unchanged items and points
    are shared between versions.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from decision_toolkit.core.models import Comparison, PointType
from decision_toolkit.scoring import CategoryScores, RankedItem, compute_category_scores, rank_items

from .commands import (
    AddItem,
    AddPoint,
    ClearCategoryImportance,
    Command,
    CommandError,
    EditPoint,
    RemoveItem,
    RemovePoint,
    RenameItem,
    ResetPreferences,
    SetCategoryImportance,
)
from .config import HistoryConfig

logger = logging.getLogger(__name__)


class HistoryStore(QObject):
    """
    Undoable store for a single comparison document.

    One instance per session; pass it explicitly to the collaborators
    that read or mutate the comparison.

    Signals:
        comparisonChanged(object): New present document, after every
            apply / undo / redo / reset
        historyChanged(bool, bool): (can_undo, can_redo), emitted right
            after comparisonChanged
        commandRejected(str): Message of a command that failed validation

    Example:
        >>> store = HistoryStore(Comparison.create(["Car", "Bike"]))
        >>> car = store.comparison.items[0]
        >>> _ = store.add_point(car.id, "Cost", "Fuel is expensive", 8, "con")
        >>> store.scores().per_item["Car"]
        (3.0,)
        >>> store.undo()
        True
        >>> store.can_redo()
        True
    """

    comparisonChanged = Signal(object)
    historyChanged = Signal(bool, bool)
    commandRejected = Signal(str)

    def __init__(
        self,
        comparison: Optional[Comparison] = None,
        config: Optional[HistoryConfig] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or HistoryConfig()
        self._present: Comparison = comparison if comparison is not None else Comparison()
        self._past: Deque[Comparison] = deque(maxlen=self.config.max_depth)
        self._future: List[Comparison] = []
        self._lock = threading.RLock()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def comparison(self) -> Comparison:
        """The current document (present)."""
        return self._present

    def get_comparison(self) -> Comparison:
        return self._present

    def can_undo(self) -> bool:
        return len(self._past) > 0

    def can_redo(self) -> bool:
        return len(self._future) > 0

    @property
    def past(self) -> Tuple[Comparison, ...]:
        """Undo stack, oldest first."""
        return tuple(self._past)

    @property
    def future(self) -> Tuple[Comparison, ...]:
        """Redo stack, nearest first."""
        return tuple(self._future)

    def scores(self) -> CategoryScores:
        """Score the current document (derived, never stored)."""
        present = self._present
        return compute_category_scores(present.items, present.preferences)

    def ranking(self) -> Tuple[RankedItem, ...]:
        return rank_items(self.scores())

    # ─────────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────────

    def apply(self, command: Command) -> Comparison:
        """
        Validate and apply a command, recording the previous document.

        Clears the redo stack. With a bounded config the oldest undo
        snapshot is dropped once max_depth is reached.

        Args:
            command: Mutation to apply

        Returns:
            The new present document

        Raises:
            CommandError: If the command fails validation; nothing changes
        """
        with self._lock:
            try:
                command.validate(self._present)
            except CommandError as e:
                logger.warning(f"Rejected {command.command_name}: {e}")
                self.commandRejected.emit(str(e))
                raise

            new_present = command.apply(self._present, self.config.id_factory)
            self._past.append(self._present)
            self._present = new_present
            self._future.clear()

            logger.debug(
                f"Applied {command.command_name} "
                f"(undo={len(self._past)}, redo={len(self._future)})"
            )
            self._notify()
            return new_present

    def undo(self) -> bool:
        """
        Step back one version.

        Returns:
            True if the document changed, False if there was nothing to undo
        """
        with self._lock:
            if not self._past:
                return False
            self._future.insert(0, self._present)
            self._present = self._past.pop()
            logger.debug(f"Undo (undo={len(self._past)}, redo={len(self._future)})")
            self._notify()
            return True

    def redo(self) -> bool:
        """
        Step forward one version.

        Returns:
            True if the document changed, False if there was nothing to redo
        """
        with self._lock:
            if not self._future:
                return False
            self._past.append(self._present)
            self._present = self._future.pop(0)
            logger.debug(f"Redo (undo={len(self._past)}, redo={len(self._future)})")
            self._notify()
            return True

    def reset(self, comparison: Comparison) -> None:
        """Replace the document and discard all history."""
        with self._lock:
            self._present = comparison
            self._past.clear()
            self._future.clear()
            logger.debug(f"Reset to {comparison!r}")
            self._notify()

    def _notify(self) -> None:
        self.comparisonChanged.emit(self._present)
        self.historyChanged.emit(self.can_undo(), self.can_redo())

    # ─────────────────────────────────────────────────────────────────────────
    # Command Intents
    # ─────────────────────────────────────────────────────────────────────────

    def add_point(
        self,
        item_id: str,
        category: str,
        text: str,
        weight: int,
        type: PointType | str,
    ) -> Comparison:
        return self.apply(AddPoint(item_id, category, text, weight, type))

    def edit_point(
        self,
        item_id: str,
        point_id: str,
        *,
        category: Optional[str] = None,
        text: Optional[str] = None,
        weight: Optional[int] = None,
        type: Optional[PointType | str] = None,
    ) -> Comparison:
        return self.apply(EditPoint(item_id, point_id, category, text, weight, type))

    def remove_point(self, item_id: str, point_id: str) -> Comparison:
        return self.apply(RemovePoint(item_id, point_id))

    def add_item(self, name: str) -> Comparison:
        return self.apply(AddItem(name))

    def remove_item(self, item_id: str) -> Comparison:
        return self.apply(RemoveItem(item_id))

    def rename_item(self, item_id: str, name: str) -> Comparison:
        return self.apply(RenameItem(item_id, name))

    def set_category_importance(self, category: str, importance: int) -> Comparison:
        return self.apply(SetCategoryImportance(category, importance))

    def clear_category_importance(self, category: str) -> Comparison:
        return self.apply(ClearCategoryImportance(category))

    def reset_preferences(self) -> Comparison:
        return self.apply(ResetPreferences())
