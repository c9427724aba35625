#!/usr/bin/env python3
"""Run one reward distribution now (weekly or monthly) and print the report.

Intended for manual re-runs or for an external cron when SCHEDULER_ENABLED=false.
Requires the package to be installed (pip install -e .).

    python scripts/run_rewards.py weekly
    python scripts/run_rewards.py monthly --at 2024-03-01T00:00:00
"""

import argparse
import asyncio
import sys
from datetime import datetime

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.database import Database
from app.services.reward_service import RewardDistributionError
from app.services.schedule_service import run_monthly_rewards, run_weekly_rewards

TRIGGERS = {
    "weekly": run_weekly_rewards,
    "monthly": run_monthly_rewards,
}


async def run(kind: str, fired_at: datetime | None) -> int:
    settings = get_settings()
    configure_logging(settings)

    await Database.connect(settings)
    try:
        report = await TRIGGERS[kind](Database.get_db(), settings, fired_at)
        exit_code = 0
    except RewardDistributionError as exc:
        report = exc.report
        exit_code = 1
    finally:
        await Database.disconnect()

    print(report.model_dump_json(indent=2))
    return exit_code


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("kind", choices=sorted(TRIGGERS))
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        default=None,
        help="Trigger time (ISO 8601, rewards timezone if naive). Defaults to now.",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.kind, args.at)))


if __name__ == "__main__":
    main()
