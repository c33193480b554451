import json
import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path

# Always save inside the project folder (data/sessions)
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
SESSIONS_DIR = _PROJECT_ROOT / "data" / "sessions"

CSV_NAME = "sessions_log.csv"
CSV_HEADER = [
    "exercise", "start_time", "end_time", "duration_sec", "target_reps",
    "total_reps", "tokens_earned", "avg_sec_per_rep", "params_json",
]


@dataclass
class SessionSummary:
    exercise: str
    start_time: str
    end_time: str
    duration_sec: float
    target_reps: int
    total_reps: int
    tokens_earned: int
    avg_sec_per_rep: float | None
    params: dict


def save_session(summary: SessionSummary, directory: Path = SESSIONS_DIR) -> Path:
    """Write ``session_<timestamp>.json`` and append one row to the CSV log.

    Returns the JSON path.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S-%f")
    json_path = directory / f"session_{timestamp}.json"
    n = 1
    while json_path.exists():
        json_path = directory / f"session_{timestamp}_{n}.json"
        n += 1

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(asdict(summary), f, ensure_ascii=False, indent=2)

    # CSV (one session per line)
    csv_path = directory / CSV_NAME
    write_header = not csv_path.exists()
    with open(csv_path, "a", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if write_header:
            writer.writerow(CSV_HEADER)
        writer.writerow([
            summary.exercise,
            summary.start_time,
            summary.end_time,
            f"{summary.duration_sec:.2f}",
            summary.target_reps,
            summary.total_reps,
            summary.tokens_earned,
            f"{summary.avg_sec_per_rep:.2f}" if summary.avg_sec_per_rep is not None else "",
            json.dumps(summary.params, ensure_ascii=False),
        ])
    return json_path
