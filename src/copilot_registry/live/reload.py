"""WebSocket-based live reload for development mode.

Monitors registry content files for changes, invalidates the catalog and
notifies connected clients via WebSocket to trigger page reloads.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from copilot_registry.config import RegistryConfig
from copilot_registry.core.catalog import CatalogLoader
from copilot_registry.core.collections import COLLECTIONS
from copilot_registry.core.identity import create_slug

logger = logging.getLogger(__name__)

DEFAULT_WATCH_PATTERNS = ["**/*.md", "**/*.json"]


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to provide automatic page refresh on content file changes.
    """

    def __init__(
        self,
        registry: RegistryConfig,
        watch_patterns: list[str] | None = None,
        *,
        catalog_loader: CatalogLoader | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            registry: Registry configuration (root and collection directories)
            watch_patterns: Glob patterns to watch (default: markdown and json)
            catalog_loader: CatalogLoader to invalidate on changes
        """
        self._registry = registry
        self._watch_patterns = watch_patterns or DEFAULT_WATCH_PATTERNS
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None
        self._catalog_loader = catalog_loader

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        if not self._registry.root_dir.is_dir():
            logger.warning(
                f"Registry directory not found, live reload disabled: {self._registry.root_dir}"
            )
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        async for changes in awatch(self._registry.root_dir):
            await self.handle_changes(changes)

    async def handle_changes(self, changes: set[tuple[Change, str]]) -> None:
        """Invalidate the catalog and notify clients about changed entries.

        Args:
            changes: watchfiles change set of (change type, path) pairs
        """
        for change_type, path_str in changes:
            path = Path(path_str)
            if not self._matches_patterns(path):
                continue

            self._invalidate_caches()
            if change_type == Change.deleted:
                continue

            entry_path = self.to_entry_path(path)
            if entry_path is not None:
                await self._broadcast_reload(entry_path)

    def _invalidate_caches(self) -> None:
        if self._catalog_loader:
            self._catalog_loader.invalidate()

    def _matches_patterns(self, path: Path) -> bool:
        """Check if a path matches any watch pattern.

        Args:
            path: Path to check

        Returns:
            True if path matches any pattern
        """
        try:
            relative = path.relative_to(self._registry.root_dir)
        except ValueError:
            return False

        for pattern in self._watch_patterns:
            if relative.match(pattern):
                return True
        return False

    def to_entry_path(self, file_path: Path) -> str | None:
        """Convert a file system path to an entry path.

        Args:
            file_path: Absolute file path

        Returns:
            Entry path (e.g., "/settings/python-formatting"), None when the
            file is outside every collection directory
        """
        for key in COLLECTIONS:
            try:
                relative = file_path.relative_to(self._registry.collection_dir(key))
            except ValueError:
                continue
            slug = create_slug(relative.as_posix(), root_marker=self._registry.root_marker)
            return f"/{key}/{slug}"
        return None

    async def _broadcast_reload(self, path: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            path: Entry path that changed
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "path": path})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, dropped from the WeakSet once collected
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
