"""Protean Engine runner for the Harvestlane ordering domain.

With ``PROTEAN_ENV=production`` events are processed asynchronously, so the
order notification handlers run here instead of inside the request.

Usage:
    python src/server.py
    python src/server.py --test-mode   # Drain pending messages and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine


def _get_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


async def run(test_mode=False):
    engine = Engine(_get_domain(), test_mode=test_mode)
    await engine.run()


def main():
    parser = argparse.ArgumentParser(description="Harvestlane Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and shut down",
    )
    args = parser.parse_args()

    asyncio.run(run(test_mode=args.test_mode))


if __name__ == "__main__":
    main()
