"""
Data shapes shared between the node plugins and the editor host:
nodes, ports, editors, UI metadata, output values and the process context.
"""
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class VisualData:
    x: float = 0
    y: float = 0
    width: float = 200


@dataclass
class ChartNode:
    """A node instance as stored in a graph."""
    id: str
    type: str
    title: str
    data: dict
    visual_data: VisualData = field(default_factory=VisualData)


@dataclass
class PortDefinition:
    id: str
    data_type: str
    title: str


@dataclass
class EditorDefinition:
    type: str
    data_key: str
    label: str
    use_input_toggle_data_key: Optional[str] = None


@dataclass
class NodeUIData:
    context_menu_title: str
    group: str
    info_box_title: str
    info_box_body: str


@dataclass
class DataValue:
    """A typed value flowing through a port."""
    type: str
    value: Any


@dataclass
class ConfigSetting:
    type: str
    label: str
    description: str = ""
    helper_text: str = ""


@dataclass
class ProcessContext:
    """What the host hands a node while it runs."""
    plugin_config: dict = field(default_factory=dict)

    def get_plugin_config(self, key):
        return self.plugin_config.get(key)


def new_id() -> str:
    """Generate a fresh node id."""
    return uuid.uuid4().hex


def coerce_string(value):
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def get_input_or_data(data: dict, inputs: dict, key: str, toggle_key: str):
    """
    Read a value from a connected input port when the node is toggled to use
    one, otherwise from the node's stored data.

    Args:
        data: Node data
        inputs: Port id -> DataValue mapping supplied by the host
        key: Data key, also the input port id
        toggle_key: Data key of the "use input" flag

    Returns:
        The string value, or the stored data value if no input arrived
    """
    if data.get(toggle_key) and inputs.get(key) is not None:
        value = coerce_string(inputs[key].value)
        if value is not None:
            return value
    return data.get(key)
