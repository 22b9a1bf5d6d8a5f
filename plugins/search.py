"""
Search Plugin
Runs a web search through the research API.
"""
import logging

from plugins import (
    NODE_GROUP,
    DataValue,
    EditorDefinition,
    NodePlugin,
    NodeUIData,
    PortDefinition,
    get_input_or_data,
)
from research_api import AsyncResearchClient

logger = logging.getLogger(__name__)


class SearchNode(NodePlugin):
    """Web search node: one query in, formatted results and a result list out."""

    name = "searchPlugin"
    display_name = "Google Search"
    title = "Google Search Node"
    description = "Searches the web through the research API"
    enabled = True

    def __init__(self, client_factory=AsyncResearchClient):
        self.client_factory = client_factory

    def default_data(self):
        return {"search_query": "Whats new in AI?", "use_search_query_input": False}

    def get_input_definitions(self, data):
        if data.get("use_search_query_input"):
            return [PortDefinition(id="search_query", data_type="string", title="Search Query")]
        return []

    def get_output_definitions(self, data):
        return [
            PortDefinition(id="results_formatted", data_type="string", title="Results String"),
            PortDefinition(id="results_array", data_type="object[]", title="Results Array"),
        ]

    def get_ui_data(self):
        return NodeUIData(
            context_menu_title="Google Search",
            group=NODE_GROUP,
            info_box_title="Google Search Node",
            info_box_body="Searches the web and returns the results as text and as a list.",
        )

    def get_editors(self, data):
        return [
            EditorDefinition(type="string", data_key="search_query", label="Search Query",
                             use_input_toggle_data_key="use_search_query_input"),
        ]

    def get_body(self, data):
        return self.render_body(data, "search_query", "use_search_query_input")

    async def process(self, data, inputs, context):
        query = get_input_or_data(data, inputs, "search_query", "use_search_query_input") or ""
        logger.info("Searching for %r", query)

        async with self.client_factory(context.get_plugin_config("baseURL")) as client:
            payload = await client.search(query)

        if not isinstance(payload, dict):
            payload = {}

        return {
            "results_formatted": DataValue(type="string", value=payload.get("string") or ""),
            "results_array": DataValue(type="object[]", value=payload.get("array") or []),
        }
