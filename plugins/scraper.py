"""
Webscraper Plugin
Fetches a page's content through the research API.
"""
import json
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


class WebscraperNode(NodePlugin):
    """Scrape one URL."""

    name = "webscraperPlugin"
    display_name = "Webscraper"
    title = "Webscraper Node"
    description = "Scrapes a web page through the research API"
    enabled = True

    def __init__(self, client_factory=AsyncResearchClient):
        self.client_factory = client_factory

    def default_data(self):
        return {"url": "https://github.com/hushaudio", "use_url_input": False}

    def get_input_definitions(self, data):
        if data.get("use_url_input"):
            return [PortDefinition(id="url", data_type="string", title="URL")]
        return []

    def get_output_definitions(self, data):
        return [PortDefinition(id="content", data_type="string", title="Scraped Content")]

    def get_ui_data(self):
        return NodeUIData(
            context_menu_title="Webscraper Plugin",
            group=NODE_GROUP,
            info_box_title="Webscraper Node",
            info_box_body="Scrapes a URL and returns the page content.",
        )

    def get_editors(self, data):
        return [
            EditorDefinition(type="string", data_key="url", label="URL",
                             use_input_toggle_data_key="use_url_input"),
        ]

    def get_body(self, data):
        return self.render_body(data, "url", "use_url_input")

    async def process(self, data, inputs, context):
        url = get_input_or_data(data, inputs, "url", "use_url_input") or ""
        logger.info("Scraping %s", url)

        async with self.client_factory(context.get_plugin_config("baseURL")) as client:
            payload = await client.scrape(url)

        # The port is string-typed; structured payloads travel as JSON text
        content = payload if isinstance(payload, str) else json.dumps(payload)
        return {"content": DataValue(type="string", value=content)}
