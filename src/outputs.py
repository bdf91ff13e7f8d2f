import csv
import json
import os
import time


SCORE_COLUMNS = [
    "competence",
    "integrity",
    "transparency",
    "confidence",
    "balanced",
    "merit",
    "integrity_first",
    "balanced_p",
    "merit_p",
    "integrity_first_p",
    "performance",
]


def create_run_dir(base_dir="runs"):
    timestamp = time.strftime("%Y%m%d_%H%M%S", time.gmtime())
    run_dir = os.path.join(base_dir, timestamp)
    suffix = 1
    while os.path.exists(run_dir):
        suffix += 1
        run_dir = os.path.join(base_dir, f"{timestamp}_{suffix}")
    os.makedirs(run_dir)
    return run_dir


def write_profiles_jsonl(run_dir, profiles):
    return _write_jsonl(os.path.join(run_dir, "profiles.jsonl"), profiles)


def write_scores_csv(run_dir, profiles):
    path = os.path.join(run_dir, "scores.csv")
    fieldnames = ["candidate_id", "full_name", "cargo"] + SCORE_COLUMNS
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for profile in profiles:
            scores = profile.get("scores", {})
            row = {
                "candidate_id": profile.get("candidate_id"),
                "full_name": profile.get("full_name"),
                "cargo": profile.get("cargo"),
            }
            for column in SCORE_COLUMNS:
                row[column] = scores.get(column)
            writer.writerow(row)
    return path


def write_top_report(run_dir, profiles, top_n, preset="balanced"):
    path = os.path.join(run_dir, "top_report.md")
    ranked = sorted(
        profiles,
        key=lambda p: (-(p.get("scores", {}).get(preset) or 0), p.get("candidate_id") or ""),
    )
    lines = [
        "# Top Candidates",
        "",
        f"Generated: {time.strftime('%Y-%m-%d %H:%M:%S UTC', time.gmtime())}",
        f"Ranked by: {preset}",
        "",
    ]
    for idx, profile in enumerate(ranked[:top_n], start=1):
        scores = profile.get("scores", {})
        name = profile.get("full_name") or profile.get("candidate_id")
        lines.append(f"## {idx}. {name} ({profile.get('cargo')})")
        lines.append(f"- {preset}: {scores.get(preset)}")
        lines.append(
            "- Dimensions: "
            f"competence {scores.get('competence')}, "
            f"integrity {scores.get('integrity')}, "
            f"transparency {scores.get('transparency')}, "
            f"confidence {scores.get('confidence')}"
        )
        for line in profile.get("score_rationale", []):
            lines.append(f"  - {line}")
        lines.append("")
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return path


def write_batch_summary(run_dir, summaries):
    return _write_jsonl(os.path.join(run_dir, "batch_summary.jsonl"), summaries)


def write_failures(run_dir, failures):
    return _write_jsonl(os.path.join(run_dir, "failures.jsonl"), failures)


def _write_jsonl(path, rows):
    with open(path, "w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=True) + "\n")
    return path
