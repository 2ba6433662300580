#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.constants import CONTROL_LEVELS, DEFECT_RATINGS, STATUS_NG, STATUS_OK
from src.dashboard import get_dashboard_summary, rating_count
from src.schema_validate import validate_entry
from src.storage import RECORDS_PATH, load_records, overwrite_records
from src.ui_helpers import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Recompute control ratings and statuses for the stored QA matrix."
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write the recomputed records back to the records file.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the top-line counts.",
    )
    args = parser.parse_args()
    configure_logging()

    records = load_records()
    invalid = 0
    for rec in records:
        ok, errs = validate_entry(rec)
        if not ok:
            invalid += 1
            print(f"  S.No {rec.get('s_no')}: {'; '.join(errs)}")

    summary = get_dashboard_summary(records)
    print(f"Records: {summary['total']} ({RECORDS_PATH})")
    print(f"Invalid: {invalid}")
    print(f"Workstation NG: {summary['ng_workstation']}")
    print(f"MFG NG: {summary['ng_mfg']}")
    print(f"Plant OK: {summary['ok_plant']}")

    if not args.quiet:
        print("\n--- Rating breakdown (NG / OK) ---")
        for level in CONTROL_LEVELS:
            cells = [
                f"R{rating} {rating_count(summary, rating, level, STATUS_NG)}/{rating_count(summary, rating, level, STATUS_OK)}"
                for rating in DEFECT_RATINGS
            ]
            print(f"  {level:<12} {'  '.join(cells)}")

    if args.write:
        overwrite_records(records)
        print(f"\nWrote {len(records)} records to {RECORDS_PATH}")
    return 0 if invalid == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
