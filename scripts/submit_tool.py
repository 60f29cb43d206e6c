#!/usr/bin/env python3
"""
Submit a new tool record to the catalog.

Reads a tool JSON file, checks the required fields and POSTs it to /tools.
Use --template to print a starting payload.
"""

import argparse
import json
import sys
import dotenv
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

dotenv.load_dotenv(project_root / ".env")

from compareGraph.core.catalog import CatalogClient, TOOL_TEMPLATE, validate_tool_payload
from compareGraph.core.errors import ToolLookupError
from compareGraph.utils import load_json, setup_logger


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Submit a tool record to the catalog")
    parser.add_argument("tool_file", nargs="?", help="Path to the tool JSON file")
    parser.add_argument("--template", action="store_true", help="Print a template payload and exit")
    parser.add_argument("--api-url", default=None, help="Catalog base URL (default: from config / .env)")
    return parser.parse_args()


def main():
    args = parse_arguments()
    logger = setup_logger("submit_tool", log_dir=None)

    if args.template:
        print(json.dumps(TOOL_TEMPLATE, indent=2, ensure_ascii=False))
        return 0

    if not args.tool_file:
        logger.error("A tool JSON file is required (or use --template)")
        return 2

    try:
        payload = load_json(args.tool_file)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Invalid JSON in {args.tool_file}: {e}")
        return 2

    problems = validate_tool_payload(payload)
    if problems:
        logger.error(f"Missing fields: {', '.join(problems)}")
        return 2

    client = CatalogClient(base_url=args.api_url)
    try:
        result = client.create_tool(payload)
    except ToolLookupError as e:
        logger.error(str(e))
        return 1
    finally:
        client.close()

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
