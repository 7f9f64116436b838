import importlib.util
from pathlib import Path

from cotrac_onboarding.store import LocalStore, SubmissionStore


def _load_script():
    path = Path(__file__).resolve().parents[1] / "scripts" / "export_submissions_csv.py"
    mod_spec = importlib.util.spec_from_file_location("export_submissions_csv", path)
    mod = importlib.util.module_from_spec(mod_spec)
    mod_spec.loader.exec_module(mod)
    return mod


def test_script_writes_stored_log(tmp_path, make_submission):
    store_path = tmp_path / "store.json"
    SubmissionStore(LocalStore(store_path)).save_submissions([make_submission(full_name="ADA")])
    out = tmp_path / "out" / "subs.csv"

    count = _load_script().export_submissions_csv(store_path=store_path, out_path=out)

    assert count == 1
    lines = out.read_text(encoding="utf-8").split("\n")
    assert len(lines) == 2
    assert lines[1].startswith('COT-1700000000-AB12,2024-05-01T10:00:00.000Z,COTRAC GOLD,"ADA"')


def test_script_on_missing_store_writes_empty_file(tmp_path):
    out = tmp_path / "subs.csv"
    assert _load_script().export_submissions_csv(store_path=tmp_path / "none.json", out_path=out) == 0
    assert out.read_text(encoding="utf-8") == ""
