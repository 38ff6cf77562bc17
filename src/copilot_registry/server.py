"""aiohttp server for Copilot Registry.

Application factory and route registration.
"""

from aiohttp import web

from copilot_registry.api.collections import create_collections_routes
from copilot_registry.api.config import create_config_routes
from copilot_registry.api.navigation import create_navigation_routes
from copilot_registry.app_keys import (
    catalog_loader_key,
    live_reload_enabled_key,
    live_reload_manager_key,
)
from copilot_registry.config import Config
from copilot_registry.core.catalog import CatalogLoader
from copilot_registry.live import LiveReloadManager
from copilot_registry.live.reload import create_live_reload_routes


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    catalog_loader = CatalogLoader(config.registry)

    app[catalog_loader_key] = catalog_loader
    app[live_reload_enabled_key] = config.live_reload.enabled

    app.router.add_routes(create_collections_routes())
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        manager = LiveReloadManager(
            config.registry,
            watch_patterns=config.live_reload.watch_patterns,
            catalog_loader=catalog_loader,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
