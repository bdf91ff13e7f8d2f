import json
import logging
import os
import threading
import time
import uuid

from flask import Flask, jsonify, request

from cli import run_pipeline
from config import ConfigError, load_config, resolve_rubric
from logging_config import setup_logging
from schemas import validate_profile
from scoring import score_candidate


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SCORING_CONFIG"] = os.environ.get("SCORING_CONFIG", "config.yml")

# In-memory job store: job_id -> {status, done, total, run_dir, result, error}
JOBS = {}
JOBS_LOCK = threading.Lock()


@app.route("/score", methods=["POST"])
def score():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    if isinstance(payload.get("candidate"), dict):
        record = payload["candidate"]
        cargo = payload.get("cargo")
        weights = payload.get("weights")
    else:
        record = payload
        cargo = request.args.get("cargo")
        weights = None
    if weights is not None and not isinstance(weights, dict):
        return jsonify({"error": "weights must be an object"}), 400

    try:
        config = _load_config()
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 500
    profile = score_candidate(record, cargo=cargo, config=config, custom_weights=weights)
    valid, message = validate_profile(profile)
    if not valid:
        logger.error("Profile for %s failed validation: %s", profile.get("candidate_id"), message)
        return jsonify({"error": message}), 500
    return jsonify(profile)


@app.route("/runs", methods=["POST"])
def start_run():
    payload = request.get_json(silent=True)
    options = {}
    if isinstance(payload, dict):
        options = payload
        payload = payload.get("candidates")
    if not isinstance(payload, list):
        return jsonify({"error": "expected a JSON list of candidate records"}), 400

    config_overrides = None
    batch_size = options.get("batch_size")
    if batch_size is not None:
        try:
            batch_size = int(batch_size)
        except (TypeError, ValueError):
            return jsonify({"error": "batch_size must be an integer"}), 400
        if batch_size > 0:
            config_overrides = {"processing": {"batch_size": batch_size}}

    config_path = app.config["SCORING_CONFIG"]
    try:
        runs_dir = load_config(config_path).get("output", {}).get("runs_dir", "runs")
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 500
    candidates_path = write_candidates_jsonl(payload, runs_dir)

    job_id = uuid.uuid4().hex
    with JOBS_LOCK:
        JOBS[job_id] = {
            "status": "running",
            "done": 0,
            "total": len(payload),
            "run_dir": None,
            "result": None,
            "error": None,
        }

    def _run():
        try:
            def on_progress(done, total):
                with JOBS_LOCK:
                    JOBS[job_id]["done"] = done
                    JOBS[job_id]["total"] = total

            result = run_pipeline(
                candidates_path,
                config_path,
                cargo=options.get("cargo"),
                config_overrides=config_overrides,
                custom_weights=options.get("weights"),
                progress_callback=on_progress,
            )
            with JOBS_LOCK:
                JOBS[job_id]["status"] = "done"
                JOBS[job_id]["run_dir"] = result["run_dir"]
                JOBS[job_id]["result"] = result
        except Exception as exc:
            logger.exception("Run %s failed", job_id)
            with JOBS_LOCK:
                JOBS[job_id]["status"] = "error"
                JOBS[job_id]["error"] = str(exc)

    threading.Thread(target=_run, daemon=True).start()
    return jsonify({"job_id": job_id, "status": "running", "total": len(payload)}), 202


@app.route("/runs/<job_id>", methods=["GET"])
def run_status(job_id):
    with JOBS_LOCK:
        job = JOBS.get(job_id)
        job = dict(job) if job else None
    if not job:
        return jsonify({"status": "unknown", "error": f"no such job: {job_id}"}), 404
    return jsonify({"job_id": job_id, **job})


@app.route("/rubric", methods=["GET"])
def rubric():
    try:
        config = _load_config()
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 500
    active = resolve_rubric(config)
    return jsonify({"version": active["version"], "rubric": active})


def write_candidates_jsonl(records, runs_dir="runs"):
    os.makedirs(runs_dir, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S", time.gmtime())
    path = os.path.join(runs_dir, f"candidates_{timestamp}_{uuid.uuid4().hex[:6]}.jsonl")
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=True) + "\n")
    return path


def _load_config():
    return load_config(app.config["SCORING_CONFIG"])


if __name__ == "__main__":
    setup_logging(_load_config().get("logging", {}).get("level"))
    app.run(host="127.0.0.1", port=5000, debug=False)
