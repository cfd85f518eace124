"""Seed upcoming session reminders and dispatch due notifications.

Meant to be triggered by cron (or any scheduler) at a fixed interval; a
reminder is delivered at most one interval after its scheduled time.
"""

from __future__ import annotations

import argparse
import logging

from app.application.use_cases.notifications import (
    dispatch_due_notifications,
    seed_upcoming_session_reminders,
)
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for a sweep run."""

    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run one notification reminder seed and dispatch sweep.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.notification_dispatch_limit,
        help="Maximum number of notifications marked as sent (default: %(default)s)",
    )
    parser.add_argument(
        "--window-minutes",
        type=int,
        default=settings.reminder_seed_window_minutes,
        help="Look-ahead window for session reminders (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-seed",
        action="store_true",
        help="Only dispatch; do not reconcile upcoming session reminders.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args()


def main() -> None:
    """Run a single sweep using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()

    session = SessionLocal()
    try:
        seeded = 0
        if not args.skip_seed:
            seeded = seed_upcoming_session_reminders(session, args.window_minutes)
        dispatched = dispatch_due_notifications(session, args.limit)
    finally:
        session.close()

    print(f"Sessions seeded: {seeded}\nNotifications dispatched: {dispatched}")


if __name__ == "__main__":
    main()
