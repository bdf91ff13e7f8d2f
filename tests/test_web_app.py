import time

import pytest

import web_app
from rubric import RUBRIC_VERSION


@pytest.fixture
def client(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yml"
    config_path.write_text(
        "scoring:\n  as_of_year: 2026\n"
        "processing:\n  batch_size: 2\n  parallel_workers: 2\n"
        f"output:\n  runs_dir: {tmp_path / 'runs'}\n",
        encoding="utf-8",
    )
    monkeypatch.setitem(web_app.app.config, "SCORING_CONFIG", str(config_path))
    monkeypatch.setitem(web_app.app.config, "TESTING", True)
    with web_app.app.test_client() as client:
        yield client


def wait_for(client, job_id, timeout=10):
    deadline = time.time() + timeout
    while time.time() < deadline:
        body = client.get(f"/runs/{job_id}").get_json()
        if body["status"] != "running":
            return body
        time.sleep(0.05)
    raise AssertionError(f"job {job_id} did not finish")


class TestScoreEndpoint:
    def test_plain_record(self, client, full_record):
        response = client.post("/score", json=full_record)
        assert response.status_code == 200
        body = response.get_json()
        assert body["candidate_id"] == "c-100"
        assert body["scores"]["integrity"] == pytest.approx(30)
        assert body["score_rationale"]

    def test_wrapped_record_with_cargo_and_weights(self, client, full_record):
        response = client.post(
            "/score",
            json={
                "candidate": full_record,
                "cargo": "diputado",
                "weights": {"competence": 0.5, "integrity": 0.4, "transparency": 0.1},
            },
        )
        body = response.get_json()
        assert body["cargo"] == "deputy"
        assert body["scores"]["custom"]["weights"] == {"competence": 0.5, "integrity": 0.4, "transparency": 0.1}

    def test_cargo_query_parameter(self, client):
        body = client.post("/score?cargo=presidente", json={"candidate_id": "x"}).get_json()
        assert body["cargo"] == "president"

    def test_rejects_non_object(self, client):
        assert client.post("/score", json=[1, 2]).status_code == 400
        assert client.post("/score", data="not json", content_type="application/json").status_code == 400

    def test_rejects_bad_weights(self, client):
        response = client.post("/score", json={"candidate": {}, "weights": [0.5, 0.5]})
        assert response.status_code == 400


class TestRunEndpoints:
    def test_run_lifecycle(self, client, full_record):
        records = [full_record, {"candidate_id": "c-2"}, {"candidate_id": "c-3"}]
        response = client.post("/runs", json={"candidates": records, "batch_size": 1})
        assert response.status_code == 202
        started = response.get_json()
        assert started["status"] == "running"
        assert started["total"] == 3

        job = wait_for(client, started["job_id"])
        assert job["status"] == "done"
        assert job["done"] == 3
        assert job["result"]["scored"] == 3
        assert job["run_dir"] == job["result"]["run_dir"]

    def test_plain_list_body(self, client):
        started = client.post("/runs", json=[{"candidate_id": "a"}]).get_json()
        assert wait_for(client, started["job_id"])["status"] == "done"

    def test_rejects_non_list(self, client):
        assert client.post("/runs", json={"candidates": "nope"}).status_code == 400

    def test_rejects_bad_batch_size(self, client):
        response = client.post("/runs", json={"candidates": [], "batch_size": "big"})
        assert response.status_code == 400

    def test_unknown_job(self, client):
        response = client.get("/runs/does-not-exist")
        assert response.status_code == 404
        assert response.get_json()["status"] == "unknown"


class TestRubricEndpoint:
    def test_active_rubric(self, client):
        body = client.get("/rubric").get_json()
        assert body["version"] == RUBRIC_VERSION
        assert body["rubric"]["integrity"]["criminal"]["firm"] == 70
