"""Tests for foldertrust.ide.context."""

from __future__ import annotations

from foldertrust.ide.context import IdeContext, IdeContextStore, WorkspaceState


class TestIdeContextFromDict:
    def test_parses_workspace_state(self) -> None:
        ctx = IdeContext.from_dict({"workspaceState": {"isTrusted": False}})
        assert ctx.workspace_state == WorkspaceState(is_trusted=False)

    def test_parses_open_files(self) -> None:
        ctx = IdeContext.from_dict(
            {"openFiles": [{"path": "/a.py", "isActive": True}, "/b.py", 3, {}]}
        )
        assert ctx.open_files == ("/a.py", "/b.py")

    def test_non_bool_trust_is_no_opinion(self) -> None:
        ctx = IdeContext.from_dict({"workspaceState": {"isTrusted": "yes"}})
        assert ctx.workspace_state == WorkspaceState(is_trusted=None)

    def test_empty_payload(self) -> None:
        assert IdeContext.from_dict({}) == IdeContext()


class TestIdeContextStore:
    def test_starts_empty(self) -> None:
        store = IdeContextStore()
        assert store.get() is None
        assert store.workspace_trust() is None

    def test_set_and_clear(self) -> None:
        store = IdeContextStore()
        ctx = IdeContext(workspace_state=WorkspaceState(True))
        store.set(ctx)
        assert store.get() is ctx
        assert store.workspace_trust() is True
        store.clear()
        assert store.get() is None
        assert store.workspace_trust() is None

    def test_context_without_workspace_state(self) -> None:
        store = IdeContextStore()
        store.set(IdeContext(open_files=("/a.py",)))
        assert store.workspace_trust() is None

    def test_subscribers_notified(self) -> None:
        store = IdeContextStore()
        seen: list[IdeContext | None] = []
        unsubscribe = store.subscribe(seen.append)

        ctx = IdeContext(workspace_state=WorkspaceState(False))
        store.set(ctx)
        store.clear()
        unsubscribe()
        store.set(ctx)

        assert seen == [ctx, None]

    def test_unsubscribe_twice_is_harmless(self) -> None:
        store = IdeContextStore()
        unsubscribe = store.subscribe(lambda ctx: None)
        unsubscribe()
        unsubscribe()
