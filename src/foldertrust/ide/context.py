"""Context reported by an IDE companion, shared across the process.

The IDE integration pushes what it knows (open files, whether the editor
trusts the workspace) into a store. Trust decisions read it through the
``TrustOverrideProvider`` protocol so tests can hand in their own.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("foldertrust.ide.context")


@dataclasses.dataclass(frozen=True)
class WorkspaceState:
    is_trusted: bool | None = None


@dataclasses.dataclass(frozen=True)
class IdeContext:
    workspace_state: WorkspaceState | None = None
    open_files: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IdeContext:
        """Parse the camelCase payload an IDE companion sends.

        Fields with the wrong type are ignored rather than rejected.
        """
        state = None
        raw_state = data.get("workspaceState")
        if isinstance(raw_state, dict):
            trusted = raw_state.get("isTrusted")
            state = WorkspaceState(trusted if isinstance(trusted, bool) else None)

        files: tuple[str, ...] = ()
        raw_files = data.get("openFiles")
        if isinstance(raw_files, list):
            files = tuple(
                f["path"] if isinstance(f, dict) else f
                for f in raw_files
                if isinstance(f, str) or (isinstance(f, dict) and isinstance(f.get("path"), str))
            )
        return cls(workspace_state=state, open_files=files)


class TrustOverrideProvider(Protocol):
    def workspace_trust(self) -> bool | None:
        """Return the IDE's trust verdict, or ``None`` for no override."""
        ...


class IdeContextStore:
    """Holds the latest ``IdeContext`` and notifies subscribers on change."""

    def __init__(self) -> None:
        self._context: IdeContext | None = None
        self._subscribers: list[Callable[[IdeContext | None], None]] = []
        self._lock = threading.Lock()

    def get(self) -> IdeContext | None:
        return self._context

    def set(self, context: IdeContext) -> None:
        with self._lock:
            self._context = context
        self._notify(context)

    def clear(self) -> None:
        with self._lock:
            self._context = None
        self._notify(None)

    def subscribe(
        self, callback: Callable[[IdeContext | None], None]
    ) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def workspace_trust(self) -> bool | None:
        context = self._context
        if context is None or context.workspace_state is None:
            return None
        return context.workspace_state.is_trusted

    def _notify(self, context: IdeContext | None) -> None:
        for callback in list(self._subscribers):
            callback(context)


ide_context_store = IdeContextStore()
