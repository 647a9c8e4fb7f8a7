# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict

import pytest
import pytest_asyncio
from aiohttp import web

from word_scout.config import CrawlerConfig
from word_scout.logger import configure
from word_scout.shutdown import ShutdownNotifier
from word_scout.store import UrlDb, WordDb

#: handler table: path -> HTML body (status 200) or (status, body)
Routes = Dict[str, object]


def build_app(routes: Routes) -> web.Application:
    """Build an aiohttp app serving *routes*."""
    app = web.Application()

    def make_handler(route) -> Callable[[web.Request], Awaitable[web.Response]]:
        status, body = route if isinstance(route, tuple) else (200, route)

        async def handler(_):
            return web.Response(status=status, text=body, content_type="text/html")

        return handler

    for path, route in routes.items():
        app.router.add_get(path, make_handler(route))
    return app


@pytest_asyncio.fixture
async def serve(unused_tcp_port: int) -> AsyncIterator[Callable[[Routes], Awaitable[str]]]:
    """Factory fixture: ``base = await serve({...})`` starts a local site and returns its base URL."""
    runners = []

    async def _start(routes: Routes) -> str:
        runner = web.AppRunner(build_app(routes))
        await runner.setup()
        site = web.TCPSite(runner, "localhost", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://localhost:{unused_tcp_port}"

    yield _start
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def urldb() -> UrlDb:
    return UrlDb()


@pytest.fixture()
def words() -> WordDb:
    return WordDb()


@pytest.fixture()
def notifier() -> ShutdownNotifier:
    return ShutdownNotifier()


@pytest.fixture()
def basic_config(tmp_path) -> CrawlerConfig:
    """
    Return a fast CrawlerConfig writing its outputs under tmp_path.
    """
    return CrawlerConfig(
        url="http://example.com/",
        depth=1,
        requests_per_second=100,
        limit_concurrent=5,
        output=str(tmp_path / "wdict.txt"),
        state_file=str(tmp_path / "state.json"),
    )


@pytest.fixture(autouse=True)
def fresh_logging():
    """Rebind the project logger to the current stdout (CliRunner swaps it per invocation)."""
    configure(level="DEBUG")
    yield
