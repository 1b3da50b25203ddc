"""Runtime orchestration: navigation controller, I/O scheduling and config."""

from __future__ import annotations

from .controller import ChangeEvent, NavigationController, NavigationState
from .requests import (
    FILE_CHANNEL,
    TREE_CHANNEL,
    InlineRequestScheduler,
    Request,
    RequestResult,
    RequestScheduler,
)

__all__ = [
    "ChangeEvent",
    "NavigationController",
    "NavigationState",
    "FILE_CHANNEL",
    "TREE_CHANNEL",
    "InlineRequestScheduler",
    "Request",
    "RequestResult",
    "RequestScheduler",
]
