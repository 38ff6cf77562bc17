"""Navigation API endpoint.

Provides the navigation tree of all collections.
"""

from aiohttp import web

from copilot_registry.app_keys import catalog_loader_key
from copilot_registry.core.navigation import build_navigation


def create_navigation_routes() -> list[web.RouteDef]:
    return [web.get("/api/navigation", get_navigation)]


async def get_navigation(request: web.Request) -> web.Response:
    catalog = request.app[catalog_loader_key].load()
    nav_items = build_navigation(catalog)
    return web.json_response({"items": [item.to_dict() for item in nav_items]})
