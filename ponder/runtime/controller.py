"""Navigation controller: tree loading, filtering, expansion and selection.

The controller owns every piece of interactive state and is driven from a
single event loop. Tree listings and file reads go through a scheduler;
results are applied by ``apply_pending_results`` only while their token is
still the latest for their channel, so a superseded root or selection never
overwrites newer state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import partial

from ..exceptions import FileUnreadableError, TreeUnavailableError
from ..file_tree_model import fs
from ..file_tree_model.types import TreeNode, find_node
from ..source_pane.content import FormattedContent, format_content
from ..tree_model.expansion import ExpansionState
from ..tree_model.filtering import paths_to_expand
from ..tree_model.rendering import display_workspace_path
from ..tree_model.rows import build_visible_rows
from ..tree_model.types import TreeRow
from . import config
from .requests import FILE_CHANNEL, TREE_CHANNEL, RequestResult, RequestScheduler, Scheduler

logger = logging.getLogger(__name__)


class ChangeEvent(str, Enum):
    ROOT_LOADING = "root_loading"
    ROOT_LOADED = "root_loaded"
    TREE_ERROR = "tree_error"
    FILTER_CHANGED = "filter_changed"
    EXPANSION_CHANGED = "expansion_changed"
    SELECTION_CHANGED = "selection_changed"
    FILE_LOADED = "file_loaded"
    FILE_ERROR = "file_error"


Listener = Callable[[ChangeEvent], None]


@dataclass
class NavigationState:
    """Everything the view needs to render the tree pane and content pane."""

    root_path: str | None = None
    tree: TreeNode | None = None
    tree_loading: bool = False
    tree_error: str | None = None
    filter_text: str = ""
    filter_expand_paths: set[str] = field(default_factory=set)
    expanded: ExpansionState = field(default_factory=ExpansionState)
    selected_path: str | None = None
    file_content: FormattedContent | None = None
    file_loading: bool = False
    file_error: str | None = None


def _error_message(error: Exception) -> str:
    if isinstance(error, (TreeUnavailableError, FileUnreadableError)):
        return error.message
    return str(error) or type(error).__name__


class NavigationController:
    """Coordinates tree, filter, expansion and selection state for one workspace."""

    def __init__(
        self,
        *,
        list_tree: Callable[[str], TreeNode] = fs.list_tree,
        read_file: Callable[..., str] = fs.read_text_file,
        scheduler: Scheduler | None = None,
        load_last_root: Callable[[], str | None] = config.load_last_root,
        save_last_root: Callable[[str], None] = config.save_last_root,
        max_read_bytes: int | None = None,
    ) -> None:
        self.state = NavigationState()
        self._list_tree = list_tree
        self._read_file = read_file
        self._scheduler: Scheduler = scheduler if scheduler is not None else RequestScheduler()
        self._load_last_root = load_last_root
        self._save_last_root = save_last_root
        self._max_read_bytes = max_read_bytes
        self._tree_token = 0
        self._file_token = 0
        self._listeners: list[Listener] = []

    # Subscriptions ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for change events; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # Workspace root ----------------------------------------------------------

    def _discard_workspace(self) -> None:
        """Drop the tree and everything derived from it; supersede in-flight I/O."""
        self._tree_token += 1
        self._file_token += 1
        state = self.state
        state.tree = None
        state.tree_loading = False
        state.filter_expand_paths = set()
        state.expanded.reset()
        state.selected_path = None
        state.file_content = None
        state.file_loading = False
        state.file_error = None

    @property
    def workspace_label(self) -> str:
        return display_workspace_path(self.state.root_path)

    def load_root(self, path: str | os.PathLike[str]) -> int:
        """Discard all per-root state and request a listing of ``path``.

        Returns the token stamped on the listing request. Any listing or file
        read issued before this call is superseded.
        """
        root = os.fspath(path)
        self._discard_workspace()
        token = self._tree_token

        state = self.state
        state.root_path = root
        state.tree_loading = True
        state.tree_error = None

        logger.info("loading workspace root %s (token %d)", root, token)
        self._scheduler.submit(TREE_CHANNEL, token, partial(self._list_tree, root))
        self._notify(ChangeEvent.ROOT_LOADING)
        return token

    def restore_last_root(self) -> bool:
        """Load the remembered workspace root, if any. Persistence errors count as none."""
        try:
            last_root = self._load_last_root()
        except Exception as exc:
            logger.debug("could not read remembered root: %s", exc)
            return False
        if not last_root:
            return False
        self.load_root(last_root)
        return True

    def connect_folder(self, pick_directory: Callable[[], str | None]) -> bool:
        """Ask ``pick_directory`` for a root and load it; cancellation is a no-op."""
        try:
            path = pick_directory()
        except Exception as exc:
            logger.warning("folder picker failed: %s", exc)
            self._discard_workspace()
            self.state.tree_error = f"Failed to open folder picker: {_error_message(exc)}"
            self._notify(ChangeEvent.TREE_ERROR)
            return False
        if not path:
            return False
        self.load_root(path)
        return True

    # Filter --------------------------------------------------------------------

    def set_filter(self, filter_text: str) -> None:
        """Replace the filter text and merge the directories it needs open."""
        if filter_text == self.state.filter_text:
            return
        self.state.filter_text = filter_text
        self._refresh_filter_expansion()
        self._notify(ChangeEvent.FILTER_CHANGED)

    def clear_filter(self) -> None:
        self.set_filter("")

    def _refresh_filter_expansion(self) -> None:
        state = self.state
        if state.tree is None or not state.filter_text:
            state.filter_expand_paths = set()
            return
        state.filter_expand_paths = paths_to_expand(state.tree, state.filter_text)
        state.expanded.merge_auto_expand(state.filter_expand_paths)

    # Expansion and selection -----------------------------------------------------

    def toggle(self, path: str) -> bool:
        """Flip expansion of ``path`` and return whether it is now expanded."""
        expanded = self.state.expanded.toggle(path)
        self._notify(ChangeEvent.EXPANSION_CHANGED)
        return expanded

    def is_expanded(self, path: str) -> bool:
        return self.state.expanded.is_expanded(path)

    def reveal(self, path: str) -> None:
        """Expand every ancestor directory of ``path`` (additive, like auto-expansion)."""
        parts = path.split("/")[:-1]
        ancestors = [""] + ["/".join(parts[: idx + 1]) for idx in range(len(parts))]
        self.state.expanded.merge_auto_expand(ancestors)
        self._notify(ChangeEvent.EXPANSION_CHANGED)

    def select_file(self, path: str) -> int | None:
        """Select the file at ``path`` and request its content.

        Directory paths toggle their expansion instead and leave the selection
        unchanged. Returns the read token, or ``None`` when nothing was read.
        Raises ``ValueError`` for paths absent from the loaded tree.
        """
        state = self.state
        if state.tree is None or state.root_path is None:
            return None
        node = find_node(state.tree, path)
        if node is None:
            raise ValueError(f"path not in workspace tree: {path!r}")
        if node.is_dir:
            self.toggle(path)
            return None

        self._file_token += 1
        token = self._file_token
        state.selected_path = path
        state.file_content = None
        state.file_loading = True
        state.file_error = None

        if self._max_read_bytes is None:
            job = partial(self._read_file, state.root_path, path)
        else:
            job = partial(self._read_file, state.root_path, path, self._max_read_bytes)
        logger.debug("reading %s (token %d)", path, token)
        self._scheduler.submit(FILE_CHANNEL, token, job)
        self._notify(ChangeEvent.SELECTION_CHANGED)
        return token

    # Rows --------------------------------------------------------------------------

    def visible_rows(self) -> list[TreeRow]:
        """Return the rows currently shown in the tree pane."""
        state = self.state
        if state.tree is None or state.tree_error is not None:
            return []
        return build_visible_rows(
            state.tree,
            state.filter_text,
            state.expanded,
            selected_path=state.selected_path,
        )

    # Results -----------------------------------------------------------------------

    def apply_pending_results(self) -> int:
        """Apply completed I/O results that are still current; return how many applied."""
        applied = 0
        for result in self._scheduler.drain_results():
            if result.channel == TREE_CHANNEL:
                applied += self._apply_tree_result(result)
            elif result.channel == FILE_CHANNEL:
                applied += self._apply_file_result(result)
        return applied

    def _apply_tree_result(self, result: RequestResult) -> bool:
        if result.token != self._tree_token:
            logger.debug("discarding superseded tree listing (token %d)", result.token)
            return False

        state = self.state
        state.tree_loading = False
        if result.error is not None:
            logger.warning("tree unavailable for %s: %s", state.root_path, result.error)
            state.tree = None
            state.tree_error = _error_message(result.error)
            self._notify(ChangeEvent.TREE_ERROR)
            return True

        if not isinstance(result.value, TreeNode):
            logger.warning("lister returned %s instead of a tree", type(result.value).__name__)
            state.tree = None
            state.tree_error = f"Failed to list workspace: unexpected {type(result.value).__name__} result"
            self._notify(ChangeEvent.TREE_ERROR)
            return True

        state.tree = result.value
        state.tree_error = None
        self._refresh_filter_expansion()
        if state.root_path is not None:
            try:
                self._save_last_root(state.root_path)
            except Exception as exc:
                logger.debug("could not remember root %s: %s", state.root_path, exc)
        self._notify(ChangeEvent.ROOT_LOADED)
        return True

    def _apply_file_result(self, result: RequestResult) -> bool:
        if result.token != self._file_token:
            logger.debug("discarding superseded file read (token %d)", result.token)
            return False

        state = self.state
        state.file_loading = False
        if result.error is not None:
            logger.info("cannot show %s: %s", state.selected_path, result.error)
            state.file_content = None
            state.file_error = _error_message(result.error)
            self._notify(ChangeEvent.FILE_ERROR)
            return True

        assert state.selected_path is not None
        state.file_content = format_content(state.selected_path, str(result.value))
        state.file_error = None
        self._notify(ChangeEvent.FILE_LOADED)
        return True


__all__ = [
    "ChangeEvent",
    "NavigationState",
    "NavigationController",
]
