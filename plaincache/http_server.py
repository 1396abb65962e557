import asyncio
import logging

from aiohttp import web
from aiohttp.http_exceptions import HttpProcessingError

from .simple_store import SimpleKVStore

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("DELETE", "GET", "POST")

# Failures that can surface while buffering a request body.
BODY_READ_ERRORS = (OSError, asyncio.TimeoutError, HttpProcessingError)


class HTTPCacheServer:
    def __init__(self, host=None, port=8080, read_timeout=10.0, keepalive_timeout=10.0,
                 max_body_size=None, store=None):
        self.store = store if store is not None else SimpleKVStore()
        self.host = host
        self.port = port
        self.read_timeout = read_timeout
        self.keepalive_timeout = keepalive_timeout
        self.max_body_size = max_body_size
        self.runner = None
        self.app = self._create_app()

    @property
    def address(self):
        host = self.host or "localhost"
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}"

    def _create_app(self):
        # client_max_size=0 disables aiohttp's body limit
        app = web.Application(client_max_size=self.max_body_size or 0)

        app.router.add_route('*', '/{path:.*}', self.handle_request)

        return app

    async def handle_request(self, request):
        if request.method == 'GET':
            return await self.handle_get(request)
        if request.method == 'POST':
            return await self.handle_post(request)
        if request.method == 'DELETE':
            return await self.handle_delete(request)

        logger.debug("Rejected %s %s", request.method, request.path)
        return web.Response(status=405, headers={'Allow': ', '.join(ALLOWED_METHODS)})

    async def handle_get(self, request):
        key = request.path
        value, found = self.store.get(key)

        if found:
            return web.Response(body=value, content_type='text/plain')
        else:
            return web.Response(status=404)

    async def handle_post(self, request):
        key = request.path

        try:
            if self.read_timeout is None:
                body = await request.read()
            else:
                body = await asyncio.wait_for(request.read(), self.read_timeout)
        except BODY_READ_ERRORS as e:
            logger.warning("Failed to read body for POST %s: %r", key, e)
            return web.Response(status=500)

        self.store.set(key, body)
        logger.debug("Stored %d bytes at %s", len(body), key)
        return web.Response(body=body, content_type='text/plain')

    async def handle_delete(self, request):
        key = request.path
        self.store.delete(key)
        logger.debug("Deleted %s", key)
        return web.Response()

    async def start(self):
        self.runner = web.AppRunner(self.app, keepalive_timeout=self.keepalive_timeout)
        await self.runner.setup()

        site = web.TCPSite(self.runner, self.host, self.port)
        try:
            await site.start()
        except BaseException:
            await self.stop()
            raise

        print(f"plaincache server running on {self.address}")
        print("Routes:")
        print("  GET    /{path}     - Get the value stored at path")
        print("  POST   /{path}     - Store the request body at path")
        print("  DELETE /{path}     - Delete the value at path")

    async def stop(self):
        if self.runner is not None:
            runner, self.runner = self.runner, None
            await runner.cleanup()
            logger.info("Server on %s stopped with %d entries", self.address, self.store.size())
