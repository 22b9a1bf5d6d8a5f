"""
Research API Plugin - command line
Run the editor nodes and the research API from a terminal.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from config import LOG_FILE, LOG_LEVEL
from plugins import find_plugin, list_plugins, run_plugin
from plugins.deduplicator import remove_duplicate_text
from research_api import ResearchAPIClient, ResearchAPIError

logger = logging.getLogger("research_api_plugin")


def configure_logging(level=LOG_LEVEL, log_file=LOG_FILE) -> None:
    """Configure logging to stderr, and to a file when one is configured. Results go to stdout."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_assignments(pairs):
    """Turn ["key=value", ...] into node data. "true"/"false" become booleans."""
    data = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        if value.lower() in ("true", "false"):
            value = value.lower() == "true"
        data[key.strip()] = value
    return data


def print_output(value, as_json=False):
    if as_json or not isinstance(value, str):
        print(json.dumps(value, indent=2, ensure_ascii=False))
    else:
        print(value)


def run_search(query, base_url=None, as_json=False):
    with ResearchAPIClient(base_url) as client:
        payload = client.search(query)
    if as_json or not isinstance(payload, dict):
        print_output(payload, as_json=True)
    else:
        print_output(payload.get("string") or "")


def run_scrape(url, base_url=None):
    with ResearchAPIClient(base_url) as client:
        payload = client.scrape(url)
    print_output(payload)


def run_node(node_type, assignments, base_url=None):
    plugin = find_plugin(node_type)
    data = plugin.create().data
    data.update(parse_assignments(assignments))
    config = {"baseURL": base_url} if base_url else {}

    outputs = asyncio.run(run_plugin(plugin, data=data, config=config))
    print_output({port: value.value for port, value in outputs.items()}, as_json=True)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Research API Plugin - web search, scraping and sentence dedup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --list-plugins
  python main.py --search "whats new in AI"
  python main.py --scrape https://example.com --base-url http://localhost:4030
  python main.py --dedupe "Hello. Hello. World."
  python main.py --dedupe-file notes.txt --separator ","
  python main.py --run searchPlugin --set search_query="rust async"
        """,
    )

    parser.add_argument("--list-plugins", action="store_true", help="List available nodes")
    parser.add_argument("--search", type=str, help="Run a web search")
    parser.add_argument("--scrape", type=str, help="Scrape a URL")
    parser.add_argument("--dedupe", type=str, help="Remove duplicate sentences from TEXT")
    parser.add_argument("--dedupe-file", type=str, help="Remove duplicate sentences from a file")
    parser.add_argument("--separator", type=str, default=".", help="Sentence separator (default: '.')")
    parser.add_argument("--run", type=str, metavar="NODE_TYPE", help="Run one node by type")
    parser.add_argument("--set", action="append", metavar="KEY=VALUE", help="Node data override for --run")
    parser.add_argument("--base-url", type=str, help="Research API base URL")
    parser.add_argument("--json", action="store_true", help="Print raw JSON responses")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else LOG_LEVEL)

    try:
        if args.list_plugins:
            list_plugins()
        elif args.search is not None:
            run_search(args.search, args.base_url, args.json)
        elif args.scrape is not None:
            run_scrape(args.scrape, args.base_url)
        elif args.dedupe is not None:
            print_output(remove_duplicate_text(args.dedupe, args.separator))
        elif args.dedupe_file is not None:
            text = Path(args.dedupe_file).read_text(encoding="utf-8")
            print_output(remove_duplicate_text(text, args.separator))
        elif args.run is not None:
            run_node(args.run, args.set, args.base_url)
        else:
            parser.print_help()
    except ResearchAPIError as exc:
        logger.error("Research API request failed: %s", exc)
        return 1
    except (KeyError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
