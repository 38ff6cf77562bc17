"""Application keys for type-safe app configuration access."""

from aiohttp import web

from copilot_registry.core.catalog import CatalogLoader
from copilot_registry.live import LiveReloadManager

catalog_loader_key = web.AppKey("catalog_loader", CatalogLoader)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
