#!/usr/bin/env python3
"""
Export trades to CSV.

Usage:
  python scripts/export_trades_csv.py [--username alice] [--output trades.csv]

Exports every user's trades unless --username is given.
Requires DATABASE_URL (same value the API uses).
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone

from tradebook import storage
from tradebook.db.database import AsyncSessionLocal
from tradebook.services.export import trades_to_frame

logger = logging.getLogger("export_trades_csv")
logging.basicConfig(level=logging.INFO)


async def export_trades(output: str, username: str | None = None) -> int:
    async with AsyncSessionLocal() as session:
        users = await storage.list_users(session)
        if username:
            user = await storage.get_user_by_username(session, username)
            if user is None:
                logger.error("user %r not found", username)
                sys.exit(1)
            trades = await storage.list_trades_by_user(session, user.id)
        else:
            trades = await storage.list_all_trades(session)

    df = trades_to_frame(trades, {u.id: u.username for u in users})
    df.to_csv(output, index=False)

    logger.info("exported %d trades to %s", len(df), output)
    return len(df)


def default_output_name(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"trades_export_{now.strftime('%Y%m%d_%H%M%S')}.csv"


def main():
    parser = argparse.ArgumentParser(description="Export trades to CSV")
    parser.add_argument("--username", help="Only export this user's trades")
    parser.add_argument("--output", help="CSV path (default: trades_export_TIMESTAMP.csv)")
    args = parser.parse_args()

    output = args.output or default_output_name()
    asyncio.run(export_trades(output, args.username))


if __name__ == "__main__":
    main()
