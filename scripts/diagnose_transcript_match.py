"""
Show why a meeting does or does not match a transcript document.

Usage:
    python scripts/diagnose_transcript_match.py "Pod Weekly Sync" 2025-09-23T17:00:00Z
    python scripts/diagnose_transcript_match.py "Pod Weekly Sync" 2025-09-23T17:00:00Z --resolve
"""

import argparse
from datetime import datetime, timedelta
from pathlib import Path
import sys

# Ensure project root is on sys.path
current_dir = Path(__file__).resolve().parent
project_root = current_dir.parent

if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core_transcripts.matching.name_patterns import explain_name_match  # noqa: E402
from domain.models import MeetingDescriptor  # noqa: E402
from shared_utils.di_container import get_di_container  # noqa: E402


def diagnose(title: str, start: datetime, resolve_content: bool) -> int:
    container = get_di_container()
    matcher = container.get_matcher()
    meeting = MeetingDescriptor(
        id="diagnostic",
        title=title,
        start_time=start,
        end_time=start + timedelta(hours=1),
    )

    print(f"Meeting: {title} @ {meeting.start_time.isoformat()}")
    print(f"Name policy: starts with title, {matcher.policy.describe()}")

    scan = matcher.scan_candidates(meeting)
    print(f"Scope: {scan.scope or 'all documents'}")
    print(f"Window: {scan.window_start.isoformat()} .. {scan.window_end.isoformat()}")
    print(f"Documents processed: {scan.documents_processed}"
          f"{' (cap reached)' if scan.cap_reached else ''}"
          f"{' (early exit)' if scan.early_exit else ''}")

    print(f"\nTitle prefix matches ({len(scan.title_matches)}):")
    for name in scan.title_matches:
        verdict = explain_name_match(title, name, matcher.policy)
        status = "accepted" if verdict.accepted else "rejected by name policy"
        print(f"  - {name} [{status}]")

    print(f"\nCandidates in window ({len(scan.candidates)}):")
    for candidate in scan.candidates:
        print(f"  - {candidate.document.name} "
              f"({candidate.hours_difference:.1f}h from start, id={candidate.document.id})")

    best = scan.best()
    if best is None:
        print("\nNo transcript match.")
        return 1

    print(f"\nBest match: {best.document.name} ({best.document.id})")

    if resolve_content:
        print("\nResolving content...")
        from core_transcripts.content.resolver import DocumentContentResolver
        text = DocumentContentResolver(container.get_document_store()).resolve(best.document.id)
        if text is None:
            print("Content could not be resolved by any strategy.")
            return 1
        print(f"Resolved {len(text)} characters:\n{text[:500]}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Diagnose transcript matching for one meeting")
    parser.add_argument("title", help="meeting title as it appears in the calendar")
    parser.add_argument("start", help="meeting start time, ISO 8601")
    parser.add_argument("--resolve", action="store_true", help="also resolve the best match's content")
    args = parser.parse_args()
    start_time = datetime.fromisoformat(args.start.replace("Z", "+00:00"))
    sys.exit(diagnose(args.title, start_time, args.resolve))
