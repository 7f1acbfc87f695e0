"""agent-worktime — replay a recorded status feed and print per-agent work time.

Usage:
    python -m agent_worktime.main events.jsonl

Each line of the input is one raw status record (field names per
settings).  Every agent's snapshot is printed as one JSON line.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from agent_worktime.config import settings
from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.store.work_time_store import WorkTimeStore

# ── Logging ──────────────────────────────────────────────────────────────────

logger = logging.getLogger(__name__)


async def replay(path: Path, store: WorkTimeStore) -> int:
    """Feed every record of *path* into *store*.  Returns the rejected count."""
    rejected = 0
    with path.open(encoding="utf-8") as fh:
        for line_no, line in enumerate(fh, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                raw = json.loads(line)
            except json.JSONDecodeError as exc:
                logger.warning("Line %d is not valid JSON: %s", line_no, exc)
                rejected += 1
                continue

            outcome = await store.ingest_raw(raw)
            if not outcome.accepted:
                logger.warning("Line %d rejected (%s): %s", line_no, outcome.failure.value, outcome.detail)
                rejected += 1
    return rejected


async def _run(path: Path) -> None:
    store = WorkTimeStore(options=WorkTimeOptions.from_settings(settings))
    rejected = await replay(path, store)

    for snapshot in await store.snapshots():
        sys.stdout.write(snapshot.model_dump_json() + "\n")

    summary = await store.summary()
    logger.info("Replay finished: %s, rejected=%d", summary.to_dict(), rejected)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog=settings.app_name, description=__doc__.splitlines()[0])
    parser.add_argument("events", type=Path, help="JSON-lines file of raw status records")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    asyncio.run(_run(args.events))


if __name__ == "__main__":
    main()
