import csv
import json

from session_logger import CSV_HEADER, CSV_NAME, SessionSummary, save_session


def make_summary(**overrides):
    fields = dict(
        exercise="pushup",
        start_time="2026-10-19 08:00:00",
        end_time="2026-10-19 08:05:00",
        duration_sec=300.0,
        target_reps=10,
        total_reps=10,
        tokens_earned=100,
        avg_sec_per_rep=2.5,
        params={"UP_THRESHOLD": 155},
    )
    fields.update(overrides)
    return SessionSummary(**fields)


def test_save_session_writes_json_and_csv(tmp_path):
    directory = tmp_path / "sessions"
    json_path = save_session(make_summary(), directory=directory)

    assert json_path.parent == directory
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["exercise"] == "pushup"
    assert data["tokens_earned"] == 100
    assert data["params"] == {"UP_THRESHOLD": 155}

    with open(directory / CSV_NAME, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADER
    assert rows[1][:8] == ["pushup", "2026-10-19 08:00:00", "2026-10-19 08:05:00",
                           "300.00", "10", "10", "100", "2.50"]


def test_csv_appends_without_repeating_header(tmp_path):
    save_session(make_summary(), directory=tmp_path)
    save_session(make_summary(exercise="squat", avg_sec_per_rep=None, total_reps=1), directory=tmp_path)

    with open(tmp_path / CSV_NAME, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 3
    assert rows[2][0] == "squat"
    assert rows[2][7] == ""


def test_back_to_back_saves_keep_both_files(tmp_path):
    first = save_session(make_summary(total_reps=3), directory=tmp_path)
    second = save_session(make_summary(total_reps=4), directory=tmp_path)

    assert first != second
    assert json.loads(first.read_text(encoding="utf-8"))["total_reps"] == 3
    assert json.loads(second.read_text(encoding="utf-8"))["total_reps"] == 4
    assert len(list(tmp_path.glob("session_*.json"))) == 2
