from typing import Dict, List, Optional, Tuple, Union

import httpx
import pytest

from recipe_import.app.core.config import Settings

READER_HOST = "r.jina.ai"

RouteResponse = Union[Tuple[int, Dict[str, str], Union[str, bytes]], Exception]


def _respond(request: httpx.Request, route: Optional[RouteResponse]) -> httpx.Response:
    if route is None:
        return httpx.Response(404, text="not found")
    if isinstance(route, Exception):
        raise route
    status, headers, body = route
    content = body.encode("utf-8") if isinstance(body, str) else body
    return httpx.Response(status, headers=headers, content=content)


def html_page(body: str) -> RouteResponse:
    return 200, {"content-type": "text/html; charset=utf-8"}, body


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def make_client():
    """Build an AsyncClient whose requests are answered from a route table.

    ``routes`` maps full URLs to (status, headers, body) or an exception to
    raise; ``reader`` answers every request to the reader service.
    """

    def factory(
        routes: Dict[str, RouteResponse], reader: Optional[RouteResponse] = None
    ) -> Tuple[httpx.AsyncClient, List[str]]:
        calls: List[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            calls.append(url)
            if request.url.host == READER_HOST:
                return _respond(request, reader or (503, {}, "unavailable"))
            return _respond(request, routes.get(url))

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
        return client, calls

    return factory
