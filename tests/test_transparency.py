import pytest

from conftest import AS_OF_YEAR, job
from records import normalize_candidate
from transparency import score_confidence, score_transparency, trusted_source


def transparency(rubric, **record):
    return score_transparency(normalize_candidate(record, AS_OF_YEAR), rubric)


def confidence(rubric, **record):
    return score_confidence(normalize_candidate(record, AS_OF_YEAR), rubric)


DECLARATION = {
    "total_income": 180000,
    "public_salary": 120000,
    "private_rent": 60000,
    "vehicle_count": 1,
    "vehicle_total": 45000,
    "real_estate_count": 2,
    "real_estate_total": 620000,
}


class TestTransparency:
    def test_complete_and_consistent_record(self, rubric):
        result = transparency(
            rubric,
            birth_date="1970-01-01",
            plan_url="https://example.org/plan.pdf",
            education_details=[{"level": "Doctorado"}, {"level": "Maestría"}, {"level": "Universitario"}],
            experience_details=[job("Analista", "A", 2000, 2004)] * 4,
            political_trajectory=[{"type": "afiliacion"}, {"type": "candidatura"}],
            assets_declaration=DECLARATION,
        )
        assert result["completeness"]["points"] == 35
        assert result["consistency"]["points"] == 35
        assert result["assets_quality"]["points"] == 23
        assert result["points"] == 93

    def test_no_declaration(self, rubric):
        result = transparency(rubric, birth_date="1970-01-01")
        assert result["completeness"]["points"] == 2
        assert result["consistency"]["points"] == 0
        assert result["assets_quality"]["points"] == 0
        assert result["points"] == 2

    def test_declaration_with_no_income(self, rubric):
        result = transparency(rubric, assets_declaration={"total_income": 0})
        assert result["consistency"]["points"] == 5
        assert result["consistency"]["income_declared"] is False

    def test_income_mismatch_steps(self, rubric):
        result = transparency(
            rubric,
            assets_declaration={"total_income": 100000, "public_salary": 85000},
        )
        assert result["consistency"]["income_match"] == 12
        assert result["consistency"]["income_mismatch_ratio"] == pytest.approx(0.15)

    def test_large_mismatch_scores_nothing(self, rubric):
        result = transparency(rubric, assets_declaration={"total_income": 100000, "public_salary": 10000})
        assert result["consistency"]["income_match"] == 0

    def test_incoherent_vehicle_section(self, rubric):
        result = transparency(
            rubric,
            assets_declaration=dict(DECLARATION, vehicle_count=2, vehicle_total=0),
        )
        assert result["consistency"]["vehicles"] == 0
        assert result["consistency"]["real_estate"] == 5

    def test_future_dates_are_implausible(self, rubric):
        result = transparency(
            rubric,
            experience_details=[job("Analista", "A", AS_OF_YEAR + 3, None)],
            assets_declaration=DECLARATION,
        )
        assert result["consistency"]["dates"] == 0

    def test_inverted_dates_are_implausible(self, rubric):
        result = transparency(
            rubric,
            experience_details=[job("Analista", "A", 2015, 2010)],
            assets_declaration=DECLARATION,
        )
        assert result["consistency"]["dates"] == 0

    def test_income_granularity(self, rubric):
        declaration = {
            "total_income": 60,
            "public_salary": 10,
            "public_rent": 10,
            "other_public": 10,
            "private_salary": 10,
            "private_rent": 10,
            "other_private": 10,
        }
        result = transparency(rubric, assets_declaration=declaration)
        assert result["assets_quality"]["income_sources"] == 6
        assert result["assets_quality"]["points"] == 18

    @pytest.mark.parametrize("count, penalty", [(0, 0), (1, 15), (2, 30), (5, 30)])
    def test_sanctions(self, rubric, count, penalty):
        result = transparency(rubric, assets_declaration=DECLARATION, regulatory_sanctions=count)
        assert result["sanctions"]["points"] == penalty

    def test_total_never_negative(self, rubric):
        assert transparency(rubric, regulatory_sanctions=4)["points"] == 0


class TestConfidence:
    def test_fully_verified_and_covered(self, rubric):
        result = confidence(
            rubric,
            data_verified=True,
            data_source="jne_verified",
            education_details=[{"level": "Doctorado"}],
            experience_details=[job("Analista", "A", 2000, 2004)],
            political_trajectory=[{"type": "afiliacion"}],
            assets_declaration=DECLARATION,
            birth_date="1970-01-01",
            dni="40111222",
            plan_url="https://example.org/plan.pdf",
            djhv_url="https://example.org/hv",
        )
        assert result["points"] == 100
        assert result["coverage"]["missing"] == []

    def test_empty_record_keeps_base_verification(self, rubric):
        result = confidence(rubric)
        assert result["verification"]["points"] == 25
        assert result["coverage"]["points"] == 0
        assert result["points"] == 25

    def test_verified_flag_only(self, rubric):
        assert confidence(rubric, data_verified=True)["verification"]["points"] == 40

    def test_partial_coverage(self, rubric):
        result = confidence(rubric, birth_date="1970-01-01", dni="1", plan_url="x", djhv_url="y")
        assert result["coverage"]["points"] == 25
        assert "education" in result["coverage"]["missing"]

    @pytest.mark.parametrize(
        "source, points",
        [
            ("jne_verified", 35),
            ("jne", 25),
            ("unverified", 25),
            ("not_verified", 25),
            ("JNE - no verified", 25),
        ],
    )
    def test_only_verified_sources_earn_the_source_bonus(self, rubric, source, points):
        assert confidence(rubric, data_source=source)["verification"]["points"] == points


@pytest.mark.parametrize(
    "source, expected",
    [
        ("jne_verified", True),
        ("verified", True),
        ("unverified", False),
        ("not_verified", False),
        ("sin verified", False),
        ("", False),
        (None, False),
    ],
)
def test_trusted_source(source, expected):
    assert trusted_source(source) is expected
