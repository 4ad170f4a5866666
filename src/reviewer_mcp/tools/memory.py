# tools/memory.py
"""
Memory Tool

Session notes for the assistant: set, get, list, delete, search, clear and
summary over the process-wide MemoryStore.

A missing key or value is reported as "not found" with a ❌ marker rather
than as an error; the call itself succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Sequence, get_args

from ..mcp_core.errors import ReviewerError, ToolInputError
from ..mcp_core.memory import MemoryStore, get_memory_store
from ..mcp_core.results import ToolResponse, error_result, success_result
from .base import respond

MemoryAction = Literal["set", "get", "list", "delete", "search", "clear", "summary"]
MEMORY_ACTIONS: tuple[str, ...] = get_args(MemoryAction)

ACTION_NAME = "Memory"
SET_PREVIEW_CHARS = 50
SUMMARY_PREVIEW_CHARS = 100


@dataclass(frozen=True, slots=True)
class MemoryOptions:
    action: str
    key: str | None = None
    value: str | None = None
    tags: Sequence[str] = ()
    pattern: str | None = None
    persist: bool = False


def _preview(value: str, limit: int) -> str:
    return value[:limit] + ("..." if len(value) > limit else "")


class MemoryTool:
    def __init__(self, store_factory: Callable[[], MemoryStore] = get_memory_store) -> None:
        self.store_factory = store_factory

    def execute(self, args: MemoryOptions) -> ToolResponse:
        handler = getattr(self, f"_{args.action}", None)
        if args.action not in MEMORY_ACTIONS or handler is None:
            raise ToolInputError("action", f"Unknown action: {args.action}")
        try:
            return handler(self.store_factory(), args)
        except ToolInputError:
            raise
        except (ReviewerError, OSError) as e:
            return error_result(ACTION_NAME, e)

    def _set(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        if not args.key:
            raise ToolInputError("key", "Both key and value are required for set action")
        if not args.value:
            raise ToolInputError("value", "Both key and value are required for set action")
        store.set(args.key, args.value, tags=args.tags, persist=args.persist)
        return success_result(f"✅ Memory: Set '{args.key}' = '{_preview(args.value, SET_PREVIEW_CHARS)}'")

    def _get(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        if not args.key:
            raise ToolInputError("key", "Key is required for get action")
        entry = store.get(args.key)
        if entry is None:
            return success_result(f"❌ Memory: Key '{args.key}' not found")
        tags = f" [{', '.join(entry.tags)}]" if entry.tags else ""
        return success_result(f"✅ Memory: '{args.key}' = '{entry.value}'{tags}")

    def _list(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        if len(store) == 0:
            return success_result("✅ Memory: No entries stored")
        keys = store.keys(tags=args.tags)
        if not keys:
            return success_result(f"✅ Memory: No entries found with tags: {', '.join(args.tags)}")
        return success_result(f"✅ Memory: {len(keys)} entries | Keys: {', '.join(keys)}")

    def _delete(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        if not args.key:
            raise ToolInputError("key", "Key is required for delete action")
        if not store.delete(args.key):
            return success_result(f"❌ Memory: Key '{args.key}' not found")
        return success_result(f"✅ Memory: Deleted '{args.key}'")

    def _search(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        if not args.pattern:
            raise ToolInputError("pattern", "Pattern is required for search action")
        matches = store.search(args.pattern)
        if not matches:
            return success_result(f"✅ Memory: No entries matching '{args.pattern}'")
        return success_result(
            f"✅ Memory: Found {len(matches)} entries matching '{args.pattern}' | Keys: {', '.join(matches)}"
        )

    def _clear(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        return success_result(f"✅ Memory: Cleared {store.clear()} entries")

    def _summary(self, store: MemoryStore, args: MemoryOptions) -> ToolResponse:
        items = store.items()
        if not items:
            return success_result("✅ Memory: No entries stored")
        parts = []
        for key, entry in items:
            part = f'{key}="{_preview(entry.value, SUMMARY_PREVIEW_CHARS)}"'
            if entry.tags:
                part += f" [{','.join(entry.tags)}]"
            parts.append(part)
        return success_result(f"✅ Memory Summary: {' | '.join(parts)}")


_tool = MemoryTool()


async def memory(args: MemoryOptions) -> ToolResponse:
    return _tool.execute(args)


def register_memory_tools(mcp: Any) -> None:
    """Register the memory tool with the MCP server."""

    @mcp.tool(name="memory")
    async def memory_tool(
        action: MemoryAction,
        key: str | None = None,
        value: str | None = None,
        tags: list[str] | None = None,
        pattern: str | None = None,
        persist: bool = False,
    ) -> str:
        """
        Store and recall short notes for the current session.

        Args:
            action: set, get, list, delete, search, clear or summary
            key: Entry key (set, get, delete)
            value: Entry value (set)
            tags: Tags to attach (set) or to filter by (list)
            pattern: Case-insensitive substring to search keys, values and tags
            persist: Also write the store to .reviewer-memory.json (set)
        """
        options = MemoryOptions(
            action=action,
            key=key,
            value=value,
            tags=tuple(tags or ()),
            pattern=pattern,
            persist=persist,
        )
        return await respond(memory(options))


__all__ = [
    "MEMORY_ACTIONS",
    "MemoryOptions",
    "MemoryTool",
    "memory",
    "register_memory_tools",
]
