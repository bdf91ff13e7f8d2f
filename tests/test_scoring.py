import copy

import pytest

from rubric import RUBRIC_VERSION
from schemas import validate_profile
from scoring import build_rationale, score_candidate


class TestEndToEnd:
    def test_reference_candidate(self, full_record, config):
        profile = score_candidate(full_record, config=config)
        scores = profile["scores"]

        assert scores["competence"] == pytest.approx(96)
        # one firm criminal sentence and nothing else
        assert scores["integrity"] == pytest.approx(30)
        assert scores["transparency"] == pytest.approx(97)
        assert scores["confidence"] == pytest.approx(100)
        assert scores["balanced"] == pytest.approx(66.4)
        assert scores["performance"] is None

        assert profile["cargo"] == "senator"
        assert profile["rubric_version"] == RUBRIC_VERSION
        assert profile["experience_timeline"]["unique_years"] == 20
        assert profile["experience_timeline"]["raw_years"] == 30
        assert profile["experience_timeline"]["has_overlap"] is True

    def test_profile_passes_validation(self, full_record, config):
        assert validate_profile(score_candidate(full_record, config=config)) == (True, "ok")

    def test_scoring_is_idempotent(self, full_record, config):
        original = copy.deepcopy(full_record)
        first = score_candidate(full_record, config=config)
        second = score_candidate(full_record, config=config)
        assert first == second
        assert full_record == original

    def test_cargo_argument_overrides_record(self, full_record, config):
        profile = score_candidate(full_record, cargo="parlamento andino", config=config)
        assert profile["cargo"] == "andean_parliament"
        assert profile["breakdown"]["competence"]["experience_relevant"]["cargo_table"] == "andean_parliament"

    def test_custom_weights(self, full_record, config):
        profile = score_candidate(
            full_record,
            config=config,
            custom_weights={"competence": 0.5, "integrity": 0.4, "transparency": 0.1},
        )
        assert profile["scores"]["custom"]["score"] == pytest.approx(0.5 * 96 + 0.4 * 30 + 0.1 * 97)

    def test_presidential_blends(self, full_record, config):
        record = dict(full_record, cargo="presidente", plan_viability=70)
        scores = score_candidate(record, config=config)["scores"]
        assert scores["balanced_p"] == pytest.approx(0.40 * 96 + 0.40 * 30 + 0.05 * 97 + 0.15 * 70)
        assert scores["plan_viability"] == 70

    def test_rubric_override_from_config(self, full_record, config):
        config["rubric"] = {"integrity": {"criminal": {"firm": 50}}}
        assert score_candidate(full_record, config=config)["scores"]["integrity"] == pytest.approx(50)


class TestMalformedInput:
    @pytest.mark.parametrize(
        "record",
        [
            {},
            None,
            {"education_details": "oops", "experience_details": [None, 5, {"start_year": "abc"}]},
            {"assets_declaration": "none", "party_resignations": "dos", "penal_sentences": [None]},
            {"experience_details": [{"position": 12, "start_date": "sometime", "end_date": float("nan")}]},
            {"tax_status": [], "voting_record": "x", "company_issues": {"penal": "many"}},
        ],
    )
    def test_always_produces_a_valid_profile(self, record, config):
        profile = score_candidate(record, config=config)
        valid, message = validate_profile(profile)
        assert valid, message
        assert profile["scores"]["integrity"] == 100

    def test_string_years_and_dates(self, config):
        record = {
            "experience_details": [
                {"position": "Analista", "start_date": "2010-03-01", "end_date": "15/06/2014"},
                {"position": "Consultor", "start_year": "2014", "end_year": "2016"},
            ]
        }
        timeline = score_candidate(record, config=config)["experience_timeline"]
        assert timeline["unique_years"] == 6
        assert timeline["has_overlap"] is False


class TestPerformance:
    def test_incumbent(self, config):
        record = {"incumbent_performance": {"budget_execution_pct": 80, "audit_reports": 1}}
        assert score_candidate(record, config=config)["scores"]["performance"] == pytest.approx(55)

    def test_direct_score_overrides_and_is_clamped(self, config):
        record = {"incumbent_performance": {"performance_score": 120, "audit_reports": 3}}
        assert score_candidate(record, config=config)["scores"]["performance"] == 100

    def test_performance_does_not_touch_other_scores(self, full_record, config):
        with_perf = dict(full_record, incumbent_performance={"budget_execution_pct": 10, "audit_reports": 9})
        plain = score_candidate(full_record, config=config)["scores"]
        scored = score_candidate(with_perf, config=config)["scores"]
        assert scored["performance"] == 0
        assert {k: v for k, v in scored.items() if k != "performance"} == {
            k: v for k, v in plain.items() if k != "performance"
        }


class TestRationale:
    def test_lines_per_dimension(self, full_record, config):
        profile = score_candidate(full_record, config=config)
        lines = build_rationale(profile)
        assert lines == profile["score_rationale"]
        assert lines[0].startswith("Competence 96")
        assert "criminal -70" in lines[1]
        assert lines[2].startswith("Transparency 97")
        assert lines[3].startswith("Confidence 100")
        assert "Overlapping tenures" in lines[4]
        assert "Senadora" in lines[4]
        assert profile["breakdown"]["competence"]["education"]["highest"]["level"] == "doctorate"


class TestValidateProfile:
    def test_detects_out_of_bounds_node(self, full_record, config):
        profile = score_candidate(full_record, config=config)
        profile["breakdown"]["competence"]["education"]["points"] = 31
        valid, message = validate_profile(profile)
        assert not valid
        assert "breakdown.competence.education" in message

    def test_detects_missing_scores(self):
        valid, message = validate_profile({"candidate_id": "x"})
        assert not valid
        assert message.startswith("missing fields")
