#!/usr/bin/env python
"""Runs fixture setup and teardown against the live service without Dredd."""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from task_fixtures.core.logging import setup_logging
from task_fixtures.core.report import FixtureStatus
from task_fixtures.dredd_bridge import build_controller

logger = logging.getLogger(__name__)


async def main() -> int:
    parser = argparse.ArgumentParser(description="Check that the Dredd fixtures can be provisioned.")
    parser.add_argument("--keep", action="store_true", help="Do not delete the seeded task afterwards.")
    args = parser.parse_args()

    load_dotenv()
    setup_logging()

    controller = build_controller()
    setup_report = await controller.setup()
    print(setup_report.summary())
    for step in setup_report.steps:
        print(f"  {step.step}: {step.status.value}" + (f" ({step.reason})" if step.reason else ""))

    if not args.keep:
        teardown_report = await controller.teardown()
        print(teardown_report.summary())

    return 0 if setup_report.status == FixtureStatus.SUCCESS else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
