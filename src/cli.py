import argparse
import json
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from config import load_config, merge_config
from logging_config import setup_logging
from outputs import (
    create_run_dir,
    write_batch_summary,
    write_failures,
    write_profiles_jsonl,
    write_scores_csv,
    write_top_report,
)
from schemas import validate_profile
from scoring import score_candidate


logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Candidate scoring batch run")
    parser.add_argument("--candidates", default="candidates.jsonl")
    parser.add_argument("--config", default="config.yml")
    parser.add_argument("--cargo", default=None, help="office to score for, overrides each record")
    parser.add_argument("--preset", default=None, choices=["balanced", "merit", "integrity_first"])
    parser.add_argument("--top-n", type=int, default=None)
    parser.add_argument(
        "--weights",
        default=None,
        help="custom blend, e.g. competence=0.5,integrity=0.4,transparency=0.1",
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    try:
        custom_weights = parse_weights(args.weights)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    config = load_config(args.config)
    setup_logging(config.get("logging", {}).get("level"), verbose=args.verbose)

    overrides = {}
    if args.preset:
        overrides["scoring"] = {"default_preset": args.preset}
    if args.top_n is not None:
        overrides["output"] = {"top_n": args.top_n}

    result = run_pipeline(
        args.candidates,
        args.config,
        cargo=args.cargo,
        config_overrides=overrides,
        custom_weights=custom_weights,
    )
    print("Run complete")
    print(f"Scored: {result['scored']} / {result['total']} (errors: {result['errors']})")
    print(f"Profiles: {result['profiles_path']}")
    print(f"Scores: {result['scores_path']}")
    print(f"Report: {result['report_path']}")
    if result["errors"]:
        print(f"Failures: {result['failures_path']}")


def run_pipeline(
    candidates_path,
    config_path,
    cargo=None,
    config_overrides=None,
    custom_weights=None,
    progress_callback=None,
):
    config = load_config(config_path)
    config = merge_config(config, config_overrides)

    candidates, failures = load_candidates(candidates_path)
    logger.info("Loaded %d candidate records from %s", len(candidates), candidates_path)

    profiles = []
    batch_summaries = []
    lock = threading.Lock()

    processing_config = config.get("processing", {})
    batch_size = int(processing_config.get("batch_size", 20))
    deviation_threshold = float(processing_config.get("batch_deviation_threshold", 0.2))
    parallel_workers = max(1, int(processing_config.get("parallel_workers", 8)))
    if batch_size <= 0:
        batch_size = max(1, len(candidates))
    preset = config.get("scoring", {}).get("default_preset") or "balanced"

    def _process_candidate(record):
        profile = score_candidate(record, cargo=cargo, config=config, custom_weights=custom_weights)
        valid, message = validate_profile(profile)
        if not valid:
            raise ValueError(f"invalid profile: {message}")
        return profile

    total = len(candidates) + len(failures)
    progress = {"done": len(failures), "total": total}
    if progress_callback:
        progress_callback(progress["done"], total)

    for batch_index, batch in enumerate(_chunked(candidates, batch_size), start=1):
        batch_profiles = []
        batch_errors = 0
        with ThreadPoolExecutor(max_workers=parallel_workers) as executor:
            futures = {
                executor.submit(_process_candidate, record): (line_no, record)
                for line_no, record in batch
            }
            for future in as_completed(futures):
                line_no, record = futures[future]
                display_id = _candidate_display_id(record, line_no)
                try:
                    profile = future.result()
                except Exception as exc:
                    logger.exception("Scoring failed for candidate %s", display_id)
                    with lock:
                        batch_errors += 1
                        failures.append(
                            {
                                "candidate_id": display_id,
                                "line": line_no,
                                "batch_id": batch_index,
                                "error": f"{type(exc).__name__}: {exc}",
                            }
                        )
                else:
                    profile["batch_id"] = batch_index
                    with lock:
                        batch_profiles.append((line_no, profile))
                with lock:
                    progress["done"] += 1
                    if progress_callback:
                        progress_callback(progress["done"], progress["total"])

        # as_completed order is arbitrary; keep input order in the outputs
        batch_profiles = [profile for _, profile in sorted(batch_profiles, key=lambda pair: pair[0])]
        profiles.extend(batch_profiles)
        summary = _batch_summary(batch_profiles, batch_index, deviation_threshold, preset)
        summary["errors"] = batch_errors
        batch_summaries.append(summary)
        logger.info(
            "Batch %d: scored %d, errors %d, avg %s %.2f",
            batch_index,
            len(batch_profiles),
            batch_errors,
            preset,
            summary["avg_total"],
        )

    run_dir = create_run_dir(config.get("output", {}).get("runs_dir", "runs"))
    profiles_path = write_profiles_jsonl(run_dir, profiles)
    scores_path = write_scores_csv(run_dir, profiles)
    report_path = write_top_report(
        run_dir, profiles, int(config.get("output", {}).get("top_n", 10)), preset=preset
    )
    batch_path = write_batch_summary(run_dir, batch_summaries)
    failures_path = write_failures(run_dir, failures)
    logger.info("Run written to %s (%d scored, %d errors)", run_dir, len(profiles), len(failures))

    return {
        "run_dir": run_dir,
        "profiles_path": profiles_path,
        "scores_path": scores_path,
        "report_path": report_path,
        "batch_summary_path": batch_path,
        "failures_path": failures_path,
        "total": total,
        "scored": len(profiles),
        "errors": len(failures),
    }


def load_candidates(path):
    """Read a JSONL file, or a file holding one JSON array, into
    ``(records, failures)``. Records are ``(line_no, dict)`` pairs.
    """
    if not os.path.exists(path):
        logger.warning("Candidates file not found: %s", path)
        return [], []
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()

    stripped = raw.lstrip()
    if stripped.startswith("["):
        try:
            rows = json.loads(stripped)
        except json.JSONDecodeError as exc:
            logger.error("Could not parse %s as a JSON array: %s", path, exc)
            return [], [{"candidate_id": None, "line": exc.lineno, "error": f"JSONDecodeError: {exc}"}]
        return _split_records(enumerate(rows, start=1))

    records = []
    failures = []
    for line_no, line in enumerate(raw.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append((line_no, json.loads(line)))
        except json.JSONDecodeError as exc:
            logger.warning("Skipping malformed line %d in %s: %s", line_no, path, exc)
            failures.append({"candidate_id": None, "line": line_no, "error": f"JSONDecodeError: {exc}"})
    good, bad = _split_records(records)
    return good, failures + bad


def parse_weights(text):
    if not text:
        return None
    weights = {}
    for part in text.split(","):
        if "=" not in part:
            raise argparse.ArgumentTypeError(f"expected name=value, got {part!r}")
        key, value = part.split("=", 1)
        try:
            weights[key.strip()] = float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"weight for {key.strip()!r} is not a number")
    return weights


def _split_records(rows):
    records = []
    failures = []
    for line_no, row in rows:
        if isinstance(row, dict):
            records.append((line_no, row))
        else:
            logger.warning("Skipping entry %d: expected an object, got %s", line_no, type(row).__name__)
            failures.append(
                {"candidate_id": None, "line": line_no, "error": f"expected object, got {type(row).__name__}"}
            )
    return records, failures


def _candidate_display_id(record, line_no):
    for key in ("candidate_id", "slug", "full_name"):
        if record.get(key):
            return record.get(key)
    return f"line-{line_no}"


def _chunked(items, size):
    for idx in range(0, len(items), size):
        yield items[idx : idx + size]


def _batch_summary(profiles, batch_id, deviation_threshold, preset="balanced"):
    scores = [p.get("scores", {}) for p in profiles]
    totals = [s.get(preset) or 0 for s in scores]
    avg_total = _avg(totals)
    deviation_flag = False
    if totals and avg_total > 0:
        deviation = max(totals) - min(totals)
        deviation_flag = (deviation / avg_total) > deviation_threshold
    return {
        "batch_id": batch_id,
        "count": len(profiles),
        "preset": preset,
        "avg_total": avg_total,
        "avg_competence": _avg([s.get("competence", 0) for s in scores]),
        "avg_integrity": _avg([s.get("integrity", 0) for s in scores]),
        "avg_transparency": _avg([s.get("transparency", 0) for s in scores]),
        "avg_confidence": _avg([s.get("confidence", 0) for s in scores]),
        "deviation_flag": deviation_flag,
        "deviation_threshold": deviation_threshold,
    }


def _avg(values):
    if not values:
        return 0
    return round(sum(values) / len(values), 2)


if __name__ == "__main__":
    main()
