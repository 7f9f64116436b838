from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_import_paths() -> None:
    root = _repo_root()
    src = root / "src"
    for p in (root, src):
        s = str(p)
        if s not in sys.path:
            sys.path.insert(0, s)


def export_submissions_csv(*, store_path: Path, out_path: Path) -> int:
    """Write the stored submission log as CSV. Returns the number of records exported."""
    _ensure_import_paths()
    from cotrac_onboarding.store import LocalStore, SubmissionStore
    from cotrac_onboarding.sync import submissions_to_csv

    submissions = SubmissionStore(LocalStore(store_path)).load_submissions()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(submissions_to_csv(submissions), encoding="utf-8")
    return len(submissions)


def main() -> int:
    _ensure_import_paths()
    from cotrac_onboarding.config import load_settings

    parser = argparse.ArgumentParser(description="Export the local submission log to a CSV file.")
    parser.add_argument(
        "--store",
        default=None,
        help="Path to the local store file (defaults to ONBOARDING_STORE_PATH).",
    )
    parser.add_argument(
        "--out",
        default=str(_repo_root() / "cotrac_submissions.csv"),
        help="Output path for the CSV file.",
    )
    args = parser.parse_args()

    store_path = Path(args.store) if args.store else load_settings().store_path
    count = export_submissions_csv(store_path=store_path, out_path=Path(args.out))
    print(f"exported {count} record(s) -> {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
