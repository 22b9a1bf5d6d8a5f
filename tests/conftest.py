"""Shared fixtures: stand-ins for HTTP sessions and the research API client."""

import json

import pytest


class FakeRequestsResponse:
    """Mimics the parts of requests.Response the client reads."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeRequestsSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class FakeAiohttpResponse:
    def __init__(self, status=200, payload=None, text=None, body=None):
        self.status = status
        if body is None:
            body = (text if text is not None else json.dumps(payload)).encode("utf-8")
        self._body = body

    async def text(self, encoding="utf-8", errors="strict"):
        return self._body.decode(encoding, errors)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeAiohttpSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


class FakeResearchClient:
    """Replaces AsyncResearchClient inside node tests."""

    instances = []

    def __init__(self, base_url=None, search_payload=None, scrape_payload=None):
        self.base_url = base_url
        self.search_payload = search_payload
        self.scrape_payload = scrape_payload
        self.queries = []
        self.urls = []
        FakeResearchClient.instances.append(self)

    async def search(self, query):
        self.queries.append(query)
        return self.search_payload

    async def scrape(self, url):
        self.urls.append(url)
        return self.scrape_payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def fake_client_factory():
    """Build a client factory that hands out FakeResearchClient instances."""
    FakeResearchClient.instances.clear()

    def make(search_payload=None, scrape_payload=None):
        def factory(base_url=None):
            return FakeResearchClient(base_url, search_payload, scrape_payload)
        return factory

    return make


@pytest.fixture
def fake_clients():
    return FakeResearchClient.instances


@pytest.fixture
def requests_session():
    """Build a FakeRequestsSession answering with one canned response or error."""
    def make(status_code=200, payload=None, text=None, error=None):
        response = None if error else FakeRequestsResponse(status_code, payload, text)
        return FakeRequestsSession(response, error)
    return make


@pytest.fixture
def aiohttp_session():
    """Build a FakeAiohttpSession answering with one canned response or error."""
    def make(status=200, payload=None, text=None, body=None, error=None):
        response = None if error else FakeAiohttpResponse(status, payload, text, body)
        return FakeAiohttpSession(response, error)
    return make
