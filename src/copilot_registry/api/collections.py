"""Collections API endpoints.

Lists collections and their entries, and returns single entries with
content and highlighting language.
"""

import json
from hashlib import md5

from aiohttp import web

from copilot_registry.app_keys import catalog_loader_key
from copilot_registry.core.collections import format_collection_name, get_collection


def create_collections_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/collections", list_collections),
        web.get("/api/collections/{collection}", get_collection_entries),
        web.get("/api/collections/{collection}/{slug}", get_entry),
    ]


async def list_collections(request: web.Request) -> web.Response:
    catalog = request.app[catalog_loader_key].load()
    collections = [
        {
            "key": key.value,
            "name": format_collection_name(key),
            "count": catalog.count(key),
        }
        for key in catalog.collections()
    ]
    return web.json_response({"collections": collections})


async def get_collection_entries(request: web.Request) -> web.Response:
    collection = request.match_info["collection"]
    definition = get_collection(collection)
    if definition is None:
        return web.json_response(
            {"error": "Collection not found", "collection": collection},
            status=404,
        )

    catalog = request.app[catalog_loader_key].load()
    return web.json_response(
        {
            "key": collection,
            "name": definition.name,
            "entries": [entry.to_summary() for entry in catalog.get_entries(collection)],
        }
    )


async def get_entry(request: web.Request) -> web.Response:
    collection = request.match_info["collection"]
    slug = request.match_info["slug"]
    catalog = request.app[catalog_loader_key].load()

    entry = catalog.get_entry(collection, slug)
    if entry is None:
        return web.json_response(
            {"error": "Entry not found", "collection": collection, "slug": slug},
            status=404,
        )

    data = entry.to_dict()
    etag = _compute_etag(json.dumps(data, sort_keys=True))
    if request.headers.get("If-None-Match") == etag:
        return web.Response(status=304)

    return web.json_response(
        data,
        headers={
            "ETag": etag,
            "Cache-Control": "private, max-age=60",
        },
    )


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) are enough for cache validation
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
