"""
Node Plugin System
Each plugin contributes one node type to the workflow editor.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
import importlib
import importlib.util
import logging
import sys

from config import DEFAULT_BASE_URL
from plugins._base import (
    ChartNode,
    ConfigSetting,
    DataValue,
    EditorDefinition,
    NodeUIData,
    PortDefinition,
    ProcessContext,
    VisualData,
    get_input_or_data,
    new_id,
)

logger = logging.getLogger(__name__)

PLUGIN_ID = "research-api-plugin"
PLUGIN_NAME = "Research API Plugin"
NODE_GROUP = "Research API"


class NodePlugin(ABC):
    """
    Base class for editor node plugins.

    To create a node:
    1. Create a new .py file in the plugins/ directory
    2. Create a class that inherits from NodePlugin
    3. Implement default_data(), the port/editor/UI hooks and process()

    Example:
        class UpperNode(NodePlugin):
            name = "upperPlugin"
            display_name = "Uppercase"
            title = "Uppercase Node"

            def default_data(self):
                return {"text": "hello", "use_text_input": False}

            async def process(self, data, inputs, context):
                text = get_input_or_data(data, inputs, "text", "use_text_input")
                return {"upper": DataValue("string", text.upper())}
    """
    name = "base"
    display_name = "Base"
    title = "Base Node"
    description = "Base node plugin"
    enabled = True

    @abstractmethod
    def default_data(self) -> dict:
        """Data a freshly created node starts with."""

    def create(self) -> ChartNode:
        """Create a new instance of this node type from scratch."""
        return ChartNode(
            id=new_id(),
            type=self.name,
            title=self.title,
            data=self.default_data(),
            visual_data=VisualData(x=0, y=0, width=200),
        )

    def get_input_definitions(self, data: dict) -> list:
        return []

    @abstractmethod
    def get_output_definitions(self, data: dict) -> list:
        pass

    @abstractmethod
    def get_ui_data(self) -> NodeUIData:
        pass

    def get_editors(self, data: dict) -> list:
        return []

    def get_body(self, data: dict) -> str:
        return self.title

    def render_body(self, data, key, toggle_key):
        """Title line plus the watched value, or a marker when it comes from a port."""
        shown = "(Using Input)" if data.get(toggle_key) else data.get(key)
        return f"{self.title}\nData: {shown}"

    @abstractmethod
    async def process(self, data: dict, inputs: dict, context: ProcessContext) -> dict:
        """
        Run the node.

        Args:
            data: Node data
            inputs: Port id -> DataValue for connected inputs
            context: Host process context (plugin config)

        Returns:
            Port id -> DataValue, one entry per output definition
        """

    def __repr__(self):
        return f"<NodePlugin: {self.name}>"


@dataclass
class PluginDefinition:
    """What the host receives when it initializes this plugin."""
    id: str
    name: str
    config_spec: dict
    context_menu_groups: list
    nodes: list = field(default_factory=list)

    def register(self, register_fn):
        """Hand every node to the host's register callback."""
        for node in self.nodes:
            register_fn(node)


def load_plugins(plugin_dir=None):
    """
    Load all node plugins from the plugins directory.

    Args:
        plugin_dir: Path to plugins directory

    Returns:
        List of plugin instances
    """
    builtin = plugin_dir is None
    plugin_dir = Path(__file__).parent if builtin else Path(plugin_dir)

    plugins = []
    seen = set()

    for file in sorted(plugin_dir.glob("*.py")):
        # Skip __init__.py and base files
        if file.name.startswith("_"):
            continue

        try:
            if builtin:
                module = importlib.import_module(f"{__name__}.{file.stem}")
            else:
                spec = importlib.util.spec_from_file_location(file.stem, file)
                module = importlib.util.module_from_spec(spec)
                sys.modules[file.stem] = module
                spec.loader.exec_module(module)
        except Exception as e:
            logger.warning("Failed to load plugin %s: %s", file.name, e)
            continue

        # Find NodePlugin subclasses
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (isinstance(attr, type) and
                    issubclass(attr, NodePlugin) and
                    attr is not NodePlugin and
                    not getattr(attr, "__abstractmethods__", None) and
                    attr.name not in seen):

                plugin_instance = attr()
                if plugin_instance.enabled:
                    seen.add(attr.name)
                    plugins.append(plugin_instance)

    return plugins


def find_plugin(node_type, plugins=None):
    """Look up a plugin by node type. Raises KeyError when unknown."""
    for plugin in plugins if plugins is not None else load_plugins():
        if plugin.name == node_type:
            return plugin
    raise KeyError(f"Unknown node type: {node_type}")


async def run_plugin(plugin, data=None, inputs=None, config=None):
    """
    Run one node outside the editor.

    Args:
        plugin: Plugin instance
        data: Node data, defaults to a freshly created node's data
        inputs: Port id -> DataValue for connected inputs
        config: Plugin config (e.g. {"baseURL": ...})

    Returns:
        Port id -> DataValue outputs
    """
    if data is None:
        data = plugin.create().data
    logger.info("Running node: %s", plugin.name)
    outputs = await plugin.process(data, inputs or {}, ProcessContext(plugin_config=config or {}))
    logger.debug("Node %s produced %s", plugin.name, outputs)
    return outputs


def list_plugins(plugin_dir=None):
    """List all available node plugins."""
    plugins = load_plugins(plugin_dir)

    print("\n🔌 Available Nodes:")
    print("-" * 80)

    if not plugins:
        print("   No node plugins found")
    else:
        for plugin in plugins:
            print(f"   {plugin.name:<20} {plugin.display_name:<32} {plugin.description}")

    print("-" * 80)

    return plugins


def build_plugin(plugins=None) -> PluginDefinition:
    """Build the plugin definition the editor host registers."""
    return PluginDefinition(
        id=PLUGIN_ID,
        name=PLUGIN_NAME,
        config_spec={
            "baseURL": ConfigSetting(
                type="string",
                label="Base URL",
                description=f"Base URL for the research API. Defaults to {DEFAULT_BASE_URL}.",
                helper_text="github.com/hushaudio",
            ),
        },
        context_menu_groups=[{"id": "researchAPI", "label": NODE_GROUP}],
        nodes=plugins if plugins is not None else load_plugins(),
    )


__all__ = [
    "NodePlugin",
    "PluginDefinition",
    "ChartNode",
    "DataValue",
    "EditorDefinition",
    "NodeUIData",
    "PortDefinition",
    "ProcessContext",
    "VisualData",
    "get_input_or_data",
    "load_plugins",
    "find_plugin",
    "run_plugin",
    "list_plugins",
    "build_plugin",
    "NODE_GROUP",
]
