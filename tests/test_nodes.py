"""Tests for node process() hooks."""

import json

import pytest

from plugins import DataValue, ProcessContext, run_plugin
from plugins.deduplicator import RemoveDuplicatesNode
from plugins.scraper import WebscraperNode
from plugins.search import SearchNode
from research_api import ResearchAPIStatusError


@pytest.mark.asyncio
async def test_search_maps_response_to_ports(fake_client_factory, fake_clients):
    payload = {"string": "1. Result one\n2. Result two", "array": [{"title": "one"}, {"title": "two"}]}
    node = SearchNode(client_factory=fake_client_factory(search_payload=payload))

    outputs = await node.process(
        {"search_query": "rust async", "use_search_query_input": False},
        {},
        ProcessContext(plugin_config={"baseURL": "http://research:9000"}),
    )

    assert outputs["results_formatted"] == DataValue("string", "1. Result one\n2. Result two")
    assert outputs["results_array"] == DataValue("object[]", [{"title": "one"}, {"title": "two"}])
    assert fake_clients[0].base_url == "http://research:9000"
    assert fake_clients[0].queries == ["rust async"]


@pytest.mark.asyncio
async def test_search_reads_wired_query(fake_client_factory, fake_clients):
    node = SearchNode(client_factory=fake_client_factory(search_payload={}))

    outputs = await node.process(
        {"search_query": "stored", "use_search_query_input": True},
        {"search_query": DataValue("string", "from upstream")},
        ProcessContext(),
    )

    assert fake_clients[0].queries == ["from upstream"]
    assert fake_clients[0].base_url is None
    assert outputs["results_formatted"].value == ""
    assert outputs["results_array"].value == []


@pytest.mark.asyncio
async def test_scrape_serializes_structured_payload(fake_client_factory, fake_clients):
    payload = {"title": "Example", "text": "Body"}
    node = WebscraperNode(client_factory=fake_client_factory(scrape_payload=payload))

    outputs = await node.process(node.create().data, {}, ProcessContext())

    assert fake_clients[0].urls == ["https://github.com/hushaudio"]
    assert outputs["content"].type == "string"
    assert json.loads(outputs["content"].value) == payload


@pytest.mark.asyncio
async def test_scrape_passes_string_payload_through(fake_client_factory):
    node = WebscraperNode(client_factory=fake_client_factory(scrape_payload="plain page text"))
    outputs = await node.process({"url": "https://example.com"}, {}, ProcessContext())
    assert outputs["content"].value == "plain page text"


@pytest.mark.asyncio
async def test_api_errors_propagate():
    class FailingClient:
        def __init__(self, base_url=None):
            pass

        async def search(self, query):
            raise ResearchAPIStatusError("http://api/www/search", 502, "bad gateway")

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

    node = SearchNode(client_factory=FailingClient)
    with pytest.raises(ResearchAPIStatusError):
        await node.process(node.create().data, {}, ProcessContext())


@pytest.mark.asyncio
async def test_remove_duplicates_default_data():
    node = RemoveDuplicatesNode()
    outputs = await node.process(node.create().data, {}, ProcessContext())
    assert outputs == {"cleaned": DataValue("string", "Hello World, hello world. Hello world. ")}


@pytest.mark.asyncio
async def test_remove_duplicates_with_wired_inputs():
    node = RemoveDuplicatesNode()
    data = {"text": "", "separator": ".", "use_text_input": True, "use_separator_input": True}
    inputs = {"text": DataValue("string", "A,B,A,C"), "separator": DataValue("string", ",")}

    outputs = await node.process(data, inputs, ProcessContext())

    assert outputs["cleaned"].value == "A. B. C"


@pytest.mark.asyncio
async def test_run_plugin_uses_default_data():
    outputs = await run_plugin(RemoveDuplicatesNode())
    assert outputs["cleaned"].value == "Hello World, hello world. Hello world. "


@pytest.mark.asyncio
async def test_run_plugin_passes_config(fake_client_factory, fake_clients):
    node = SearchNode(client_factory=fake_client_factory(search_payload={"string": "ok", "array": []}))
    outputs = await run_plugin(node, config={"baseURL": "http://elsewhere"})
    assert outputs["results_formatted"].value == "ok"
    assert fake_clients[0].base_url == "http://elsewhere"
