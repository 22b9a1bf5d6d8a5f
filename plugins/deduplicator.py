"""
Deduplicator Plugin
Removes repeated sentences from a block of text.
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

logger = logging.getLogger(__name__)

JOINER = ". "

# ECMAScript WhiteSpace and LineTerminator, the set String.prototype.trim() removes
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

DEFAULT_TEXT = "\n".join(["Hello World, hello world.  Hello world."] * 3)


def remove_duplicate_text(text: str, separator: str = ".") -> str:
    """
    Drop repeated segments, keeping the first occurrence of each.

    The text is split on every literal occurrence of ``separator``, each
    piece is stripped of surrounding whitespace (a BOM counts, U+001C..U+001F
    and U+0085 do not), and pieces are compared by exact equality after
    stripping. Survivors are joined with ". " whatever the separator was,
    so a trailing separator leaves a trailing empty segment:

        >>> remove_duplicate_text("Hello. Hello. World.")
        'Hello. World. '
        >>> remove_duplicate_text("A,B,A,C", ",")
        'A. B. C'

    An empty separator splits the text into single characters.
    """
    pieces = text.split(separator) if separator else list(text)
    seen = set()
    unique = []

    for piece in pieces:
        sentence = piece.strip(TRIM_CHARS)
        if sentence not in seen:
            seen.add(sentence)
            unique.append(sentence)

    return JOINER.join(unique)


class RemoveDuplicatesNode(NodePlugin):
    """Remove duplicate sentences by separator."""

    name = "remDupePlugin"
    display_name = "Remove Duplicates by Separator"
    title = "Remove Duplicates by Separator"
    description = "Removes repeated sentences, keeping the first of each"
    enabled = True

    def default_data(self):
        return {
            "text": DEFAULT_TEXT,
            "separator": ".",
            "use_text_input": False,
            "use_separator_input": False,
        }

    def get_input_definitions(self, data):
        inputs = []
        if data.get("use_text_input"):
            inputs.append(PortDefinition(id="text", data_type="string", title="Text"))
        if data.get("use_separator_input"):
            inputs.append(PortDefinition(id="separator", data_type="string", title="Separator"))
        return inputs

    def get_output_definitions(self, data):
        return [PortDefinition(id="cleaned", data_type="string", title="Cleaned String")]

    def get_ui_data(self):
        return NodeUIData(
            context_menu_title="Remove Dupe Text",
            group=NODE_GROUP,
            info_box_title="Remove Duplicates by Separator",
            info_box_body="Splits text on a separator and drops repeated sentences.",
        )

    def get_editors(self, data):
        return [
            EditorDefinition(type="string", data_key="text", label="Text",
                             use_input_toggle_data_key="use_text_input"),
            EditorDefinition(type="string", data_key="separator", label="Separator",
                             use_input_toggle_data_key="use_separator_input"),
        ]

    def get_body(self, data):
        return self.render_body(data, "text", "use_text_input")

    async def process(self, data, inputs, context):
        text = get_input_or_data(data, inputs, "text", "use_text_input") or ""
        separator = get_input_or_data(data, inputs, "separator", "use_separator_input")
        if separator is None:
            separator = "."

        cleaned = remove_duplicate_text(text, separator)
        logger.debug("Deduplicated %s chars down to %s", len(text), len(cleaned))

        return {"cleaned": DataValue(type="string", value=cleaned)}
