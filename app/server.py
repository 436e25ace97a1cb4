import logging

from aiohttp import web

from .config import Settings
from .responses import json_error
from .routes import register_routes


WELCOME = "Welcome to the Solana instruction server!"


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Keep every non-2xx answer inside the JSON envelope."""
    try:
        return await handler(request)
    except web.HTTPException as e:
        if e.status < 400:
            raise
        return json_error(e.reason, status=e.status)
    except Exception as e:
        logging.error(f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return json_error("Internal server error", status=500)


async def root(request: web.Request) -> web.Response:
    return web.Response(text=WELCOME)


def create_app(settings: Settings) -> web.Application:
    app = web.Application(
        client_max_size=settings.max_body_bytes,
        middlewares=[error_middleware],
    )
    app.router.add_get("/", root)
    register_routes(app)
    return app


def run(settings: Settings) -> None:
    app = create_app(settings)
    logging.info(f"🚀 Server running at http://{settings.host}:{settings.port}")
    web.run_app(app, host=settings.host, port=settings.port, print=None)
