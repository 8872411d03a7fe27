"""
Module: history

Purpose:
    Undoable mutation history for a comparison document. The store owns
    the only mutable reference to the document; everything else receives
    frozen snapshots.

Key Classes:
    - HistoryStore: Linear undo/redo over full-document snapshots
    - HistoryConfig: Undo depth and id generation
    - Command and its subclasses: Validated mutations
    - CommandError: A command was rejected and nothing changed

Dependencies:
    - PySide6.QtCore: Change notification signals
    - decision_toolkit.core.models: Document models
    - decision_toolkit.scoring: Derived scores
"""

from .config import HistoryConfig
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
from .store import HistoryStore

__all__ = [
    # Config
    "HistoryConfig",
    # Commands
    "Command",
    "CommandError",
    "AddPoint",
    "EditPoint",
    "RemovePoint",
    "AddItem",
    "RemoveItem",
    "RenameItem",
    "SetCategoryImportance",
    "ClearCategoryImportance",
    "ResetPreferences",
    # Store
    "HistoryStore",
]
