from __future__ import annotations
import json
import logging
import os
from pathlib import Path
import shutil

from src.qa_model import entry_from_dict

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("QA_MATRIX_DATA_DIR") or Path(__file__).resolve().parents[1] / "data")
RECORDS_PATH = DATA_DIR / "qa_matrix.jsonl"
BASELINE_DIR = DATA_DIR / "baseline"
BASELINE_RECORDS = BASELINE_DIR / "qa_matrix_baseline.jsonl"

def ensure_dirs() -> None:
    RECORDS_PATH.parent.mkdir(parents=True, exist_ok=True)

def _jsonl_has_rows(path: Path) -> bool:
    if not path.exists():
        return False
    try:
        with path.open("r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    return True
    except OSError:
        return False
    return False

def _bootstrap_baseline_if_needed() -> None:
    # Seed from the shipped baseline only when live records are empty or missing.
    if _jsonl_has_rows(RECORDS_PATH):
        return
    if not BASELINE_RECORDS.exists():
        return
    try:
        shutil.copyfile(BASELINE_RECORDS, RECORDS_PATH)
    except OSError as exc:
        logger.warning("Could not seed %s from baseline: %s", RECORDS_PATH, exc)
        return
    logger.info("Seeded %s from %s", RECORDS_PATH, BASELINE_RECORDS)

def _read_rows(path: Path) -> list[dict]:
    rows = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping malformed line %d in %s", lineno, path)
                continue
            if isinstance(obj, dict):
                rows.append(obj)
    return rows

def load_records() -> list[dict]:
    """Load the stored matrix; every record comes back recomputed."""
    ensure_dirs()
    _bootstrap_baseline_if_needed()
    if not RECORDS_PATH.exists():
        return []
    return [entry_from_dict(row) for row in _read_rows(RECORDS_PATH)]

def overwrite_records(records: list[dict]) -> None:
    ensure_dirs()
    with RECORDS_PATH.open("w", encoding="utf-8") as f:
        for r in records:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")
    logger.debug("Wrote %d records to %s", len(records), RECORDS_PATH)

def reset_to_baseline() -> list[dict]:
    """Discard live edits and reload the shipped baseline matrix."""
    ensure_dirs()
    if RECORDS_PATH.exists():
        RECORDS_PATH.unlink()
    logger.info("Resetting %s to baseline", RECORDS_PATH)
    return load_records()
