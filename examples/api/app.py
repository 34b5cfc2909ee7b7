"""API — pure JSON REST API.

CRUD for a simple "items" resource. Demonstrates waypost handler chains:
a loader handler that binds the item (or answers 404) before the handler
that uses it, ``body_json`` for request bodies, and a CORS preflight
route for cross-origin consumers.

Run with any ASGI server:
    cd examples/api && uvicorn app:app
"""

import threading
from dataclasses import dataclass

from waypost import App, CORSConfig, body_json, cors, respond_json, respond_location

app = App()

app.options("/api/*", cors(CORSConfig(
    allow_origins=("*",),
    allow_methods=("GET", "POST", "PATCH", "DELETE", "OPTIONS"),
    allow_headers=("Content-Type",),
)))


# ---------------------------------------------------------------------------
# In-memory storage (thread-safe for free-threading)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(item: Item) -> dict:
    return {"id": item.id, "title": item.title, "done": item.done}


async def _not_found(request) -> None:
    await respond_json(request, {"error": "Not found", "status": 404}, status=404)


async def _require_object(ctx, next) -> None:
    if isinstance(ctx.props["body"], dict):
        next()
        return
    await respond_json(ctx.request, {"error": "expected an object", "status": 400}, status=400)


async def load_item(ctx, next) -> None:
    """Bind ``ctx.props["item"]`` from the ``:item_id`` parameter, or answer 404."""
    try:
        item_id = int(ctx.params["item_id"])
    except ValueError:
        await _not_found(ctx.request)
        return
    with _lock:
        item = _items.get(item_id)
    if item is None:
        await _not_found(ctx.request)
        return
    ctx.props["item"] = item
    next()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.route("GET", "/")
async def index(ctx, next):
    await respond_location(ctx.request, "/api/items")


@app.route("GET", "/api/items")
async def list_items(ctx, next):
    """List items with optional limit and offset."""
    query = ctx.request.query
    limit = min(max(query.get_int("limit", default=50) or 50, 1), 100)
    offset = max(query.get_int("offset", default=0) or 0, 0)

    with _lock:
        all_items = sorted(_items.values(), key=lambda x: x.id)
    page = all_items[offset : offset + limit]

    await respond_json(ctx.request, {
        "data": [_to_dict(i) for i in page],
        "meta": {"limit": limit, "offset": offset, "total": len(all_items)},
    })


@app.route("GET", "/api/items/:item_id", load_item)
async def get_item(ctx, next):
    """Get a single item by ID."""
    await respond_json(ctx.request, {"data": _to_dict(ctx.props["item"])})


@app.route("POST", "/api/items", body_json("body"), _require_object)
async def create_item(ctx, next):
    """Create a new item."""
    title = str(ctx.props["body"].get("title", "")).strip()
    if not title:
        await respond_json(ctx.request, {"error": "title is required", "status": 400}, status=400)
        return

    with _lock:
        item_id = _get_next_id()
        item = Item(id=item_id, title=title, done=False)
        _items[item_id] = item

    await respond_json(ctx.request, {"data": _to_dict(item)}, status=201)


@app.route("PATCH", "/api/items/:item_id", load_item, body_json("body"), _require_object)
async def update_item(ctx, next):
    """Update an existing item."""
    item = ctx.props["item"]
    body = ctx.props["body"]
    raw_title = body.get("title")
    raw_done = body.get("done")
    title = str(raw_title).strip() if raw_title is not None else item.title
    done = bool(raw_done) if raw_done is not None else item.done

    updated = Item(id=item.id, title=title, done=done)
    with _lock:
        _items[item.id] = updated

    await respond_json(ctx.request, {"data": _to_dict(updated)})


@app.route("DELETE", "/api/items/:item_id", load_item)
async def delete_item(ctx, next):
    """Delete an item."""
    item = ctx.props["item"]
    with _lock:
        _items.pop(item.id, None)
    await respond_json(ctx.request, {"data": _to_dict(item)})
