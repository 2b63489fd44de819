"""Fakes shared by the test modules."""

import asyncio

_NO_BODY = object()


class FakeClock:
    """Monotonic clock driven by the code under test."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += max(seconds, 0)
        await asyncio.sleep(0)


class FakeResponse:
    def __init__(self, status=200, body=_NO_BODY, headers=None):
        self.status = status
        self._body = body
        self.headers = headers or {}

    async def json(self, content_type="application/json"):
        if self._body is _NO_BODY:
            raise ValueError("No JSON body")
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession.get()."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeExecutor:
    """Scheduler executor answering from a URL -> response mapping."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    async def __call__(self, url, options):
        self.calls.append(url)
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        return response
