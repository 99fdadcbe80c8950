"""Vehicle selection cascade."""

from partfit.selection.controller import LoadState, SelectionController
from partfit.selection.quick_filter import QuickFilterChannel
from partfit.selection.transitions import Level

__all__ = [
    "Level",
    "LoadState",
    "QuickFilterChannel",
    "SelectionController",
]
