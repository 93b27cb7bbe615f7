"""aiohttp application exposing the request handler over HTTP."""

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from aiohttp import web

from .handler import PodcastRequestHandler, build_response

logger = logging.getLogger(__name__)

HANDLER_KEY = web.AppKey("podcast_handler", PodcastRequestHandler)

# Locally published podcasts are served under this prefix
FILES_ROUTE = "/files"

def envelope_to_response(envelope: Dict[str, Any]) -> web.Response:
    return web.Response(
        status=envelope["statusCode"],
        body=envelope["body"].encode("utf-8"),
        headers=envelope["headers"]
    )

async def generate_podcast(request: web.Request) -> web.Response:
    body = await request.read()
    # Never taken from the client; the id becomes the object key
    request_id = str(uuid.uuid4())
    envelope = await request.app[HANDLER_KEY].handle(body, request_id)
    return envelope_to_response(envelope)

async def preflight(request: web.Request) -> web.Response:
    return envelope_to_response(build_response(204, None))

def create_app(handler: PodcastRequestHandler, static_dir: Optional[Path] = None) -> web.Application:
    app = web.Application()
    app[HANDLER_KEY] = handler
    app.router.add_post("/generate-podcast", generate_podcast)
    app.router.add_route("OPTIONS", "/generate-podcast", preflight)
    if static_dir is not None:
        app.router.add_static(f"{FILES_ROUTE}/", static_dir)
        logger.info(f"Serving published podcasts from {static_dir} at {FILES_ROUTE}/")
    return app
