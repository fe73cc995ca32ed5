"""
Seed the public benchmark WODs (Fran, Grace, Helen, Cindy, Mary, ...).

The WODs are created as public WODs owned by an existing user, usually an
admin or coach account. Names the owner already has are skipped, so the
script can be re-run safely.

DRY_RUN by default. Use --commit to persist.

Usage (from the repository root, with DATABASE_URL set):
  python -m scripts.seed_wods --owner-id 65f1c2a9e4b0d3f7a1c2b3d4
  python -m scripts.seed_wods --owner-id 65f1c2a9e4b0d3f7a1c2b3d4 --commit
"""
import argparse
import asyncio
import re

from wodtracker.auth.models import User
from wodtracker.database import get_sessionmaker
from wodtracker.wods.benchmarks import seed_benchmark_wods

_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")


def _owner_id(value: str) -> str:
    if not _OBJECT_ID.match(value):
        raise argparse.ArgumentTypeError("owner id must be 24 hex characters")
    return value.lower()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the public benchmark WODs")
    parser.add_argument("--owner-id", type=_owner_id, required=True, help="user that owns the seeded WODs")
    parser.add_argument("--commit", action="store_true", help="persist changes (default: dry run)")
    return parser.parse_args(argv)


async def run(owner_id: str, commit: bool) -> int:
    async with get_sessionmaker()() as db:
        owner = await db.get(User, owner_id)
        if owner is None:
            print(f"ERROR: no user with id {owner_id}")
            return 1

        try:
            names = await seed_benchmark_wods(owner.id, db, commit=commit)
        except Exception as exc:
            await db.rollback()
            print(f"ERROR: seeding failed: {exc}")
            return 1

    mode = "created" if commit else "would create (dry run, use --commit)"
    print(f"OK: {len(names)} benchmark WODs {mode} for @{owner.username}")
    for name in names:
        print(f"  - {name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    return asyncio.run(run(args.owner_id, args.commit))


if __name__ == "__main__":
    raise SystemExit(main())
