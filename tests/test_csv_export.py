from cotrac_onboarding.sync import SYNC_WHITELIST, submissions_to_csv
from cotrac_onboarding.sync.csv_export import CSV_HEADERS


def test_no_submissions_exports_nothing():
    assert submissions_to_csv([]) == ""


def test_header_row_follows_sheet_columns():
    assert CSV_HEADERS[:3] == ("RECORD_ID", "DATE_TIME", "PLAN_NAME")
    assert CSV_HEADERS[3:] == tuple(k.upper() for k in SYNC_WHITELIST)


def test_rows_quote_whitelist_values(make_submission):
    sub = make_submission(full_name='ADA "THE BOSS" OBI', license_plate="LAG-123", sim_no="ignored")
    lines = submissions_to_csv([sub]).split("\n")

    assert len(lines) == 2
    assert lines[0] == ",".join(CSV_HEADERS)
    cells = lines[1].split(",")
    assert cells[:3] == ["COT-1700000000-AB12", "2024-05-01T10:00:00.000Z", "COTRAC GOLD"]
    assert cells[3] == '"ADA ""THE BOSS"" OBI"'
    assert cells[3 + SYNC_WHITELIST.index("license_plate")] == '"LAG-123"'
    assert cells[3 + SYNC_WHITELIST.index("email_address")] == '""'
    assert len(cells) == 3 + len(SYNC_WHITELIST)
    assert "ignored" not in lines[1]


def test_rows_keep_store_order(make_submission):
    newest = make_submission("COT-2-AAAA")
    oldest = make_submission("COT-1-BBBB")
    lines = submissions_to_csv([newest, oldest]).split("\n")
    assert [line.split(",")[0] for line in lines[1:]] == ["COT-2-AAAA", "COT-1-BBBB"]
