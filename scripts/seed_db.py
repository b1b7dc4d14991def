#!/usr/bin/env python3
"""
seed_db.py — Populate MySQL with sample data for local development.

Creates (if missing):
  - trash(trash_id, trash_name)
  - bin(bin_id, bin_name)
  - trash_log(trash_id, bin_id, time_stamp, correct)

Inserts:
  - The tracked trash types plus one untracked type ("PAPER"), so the
    dashboard shows an item that counts towards totals only
  - One bin per tracked type
  - Sample disposals spread over this month and last month

Usage:
    pip install -e .
    cp .env.example .env   # fill in DB_* values
    python scripts/seed_db.py [--events 40] [--reset]

--reset deletes every existing trash_log row first. Without it the
script only appends, and types/bins are inserted with INSERT IGNORE.
"""

import argparse
import asyncio
import random
from datetime import datetime, timedelta

from trashvision.core.config import settings
from trashvision.core.database import DatabaseConfig, open_connection

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS trash (
        trash_id   INT PRIMARY KEY,
        trash_name VARCHAR(64) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bin (
        bin_id   INT PRIMARY KEY,
        bin_name VARCHAR(64) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS trash_log (
        log_id     INT AUTO_INCREMENT PRIMARY KEY,
        trash_id   INT NOT NULL,
        bin_id     INT NOT NULL,
        time_stamp DATETIME NOT NULL,
        correct    TINYINT(1) NOT NULL,
        FOREIGN KEY (trash_id) REFERENCES trash (trash_id),
        FOREIGN KEY (bin_id) REFERENCES bin (bin_id),
        INDEX idx_trash_log_time (time_stamp)
    )
    """,
]

# trash_id -> name; names are deliberately mixed case, the dashboard
# matches categories case-insensitively.
TRASH_TYPES = {1: "PET", 2: "Can", 3: "glass bottle", 4: "PAPER"}

# bin_id -> (name, trash_id it is meant for)
BINS = {1: ("PET bin", 1), 2: ("Can bin", 2), 3: ("Glass bin", 3)}


def sample_events(count: int, now: datetime) -> list[tuple]:
    """Random disposals over the last ~60 days; about 80% in the right bin."""
    rows = []
    for _ in range(count):
        trash_id = random.choice(list(TRASH_TYPES))
        right_bin = next((b for b, (_, t) in BINS.items() if t == trash_id), None)
        if right_bin is not None and random.random() < 0.8:
            bin_id = right_bin
        else:
            bin_id = random.choice(list(BINS))
        ts = now - timedelta(minutes=random.randint(0, 60 * 24 * 60))
        rows.append((trash_id, bin_id, ts.replace(microsecond=0), int(bin_id == right_bin)))
    return rows


async def seed(event_count: int, reset: bool) -> None:
    config = DatabaseConfig.from_settings(settings)
    print(f"Connecting to MySQL at {config.host}:{config.port}/{config.database}...")

    async with open_connection(config) as conn:
        async with conn.cursor() as cur:
            for ddl in SCHEMA:
                await cur.execute(ddl)
            print("Schema ensured.")

            if reset:
                await cur.execute("DELETE FROM trash_log")
                print(f"Removed {cur.rowcount} existing log rows.")

            await cur.executemany(
                "INSERT IGNORE INTO trash (trash_id, trash_name) VALUES (%s, %s)",
                list(TRASH_TYPES.items()),
            )
            await cur.executemany(
                "INSERT IGNORE INTO bin (bin_id, bin_name) VALUES (%s, %s)",
                [(bin_id, name) for bin_id, (name, _) in BINS.items()],
            )

            rows = sample_events(event_count, datetime.now())
            await cur.executemany(
                "INSERT INTO trash_log (trash_id, bin_id, time_stamp, correct) "
                "VALUES (%s, %s, %s, %s)",
                rows,
            )
            print(f"Inserted {len(rows)} events.")

            print("\nSeed complete! Events per type:")
            await cur.execute(
                "SELECT t.trash_name, COUNT(*) FROM trash_log l "
                "JOIN trash t ON l.trash_id = t.trash_id GROUP BY t.trash_name"
            )
            for name, count in await cur.fetchall():
                print(f"  {name}: {count} events")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the TrashVision MySQL tables")
    parser.add_argument("--events", type=int, default=40, help="number of log rows to insert")
    parser.add_argument("--reset", action="store_true", help="delete existing log rows first")
    args = parser.parse_args()
    asyncio.run(seed(args.events, args.reset))
