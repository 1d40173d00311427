"""
Forget every processed meeting so the next run picks them up again.

Usage:
    python scripts/reset_processed_meetings.py [--yes]
"""

import argparse
from pathlib import Path
import sys

# Ensure project root is on sys.path
current_dir = Path(__file__).resolve().parent
project_root = current_dir.parent

if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from shared_utils.di_container import get_di_container  # noqa: E402


def reset_processed_meetings(confirm: bool) -> int:
    registry = get_di_container().get_registry()
    processed = registry.snapshot()
    print(f"Flag key: {registry.key}")
    print(f"Meetings currently marked processed: {len(processed)}")

    if not processed:
        print("Nothing to reset.")
        return 0

    if not confirm:
        answer = input("Clear all of them? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Aborted.")
            return 1

    registry.reset()
    print("Processed meetings cleared. They will be reprocessed on the next run.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    args = parser.parse_args()
    sys.exit(reset_processed_meetings(args.yes))
