#!/usr/bin/env python
"""Writes the built-in fixture table as JSON, as a starting point for FIXTURE_TABLE_FILEPATH."""

import argparse
import json
import sys

from task_fixtures.fixture_policy.loader import dump_fixture_table
from task_fixtures.fixtures.named_fixtures import build_default_fixture_table


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the default Dredd fixture table as JSON.")
    parser.add_argument("--output", "-o", default="-", help="Output file path, or '-' for stdout.")
    args = parser.parse_args()

    content = json.dumps(dump_fixture_table(build_default_fixture_table()), indent=2)
    if args.output == "-":
        print(content)
    else:
        with open(args.output, "w") as f:
            f.write(content + "\n")
        print(f"Fixture table written to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
