import pytest

from taxonomy import (
    EDUCATION_LEVELS,
    UNKNOWN,
    education_rank,
    fold_text,
    normalize_cargo,
    normalize_civil_kind,
    normalize_education_level,
    normalize_role_type,
    normalize_seniority,
    normalize_trajectory_type,
    truthy,
)


class TestFoldText:
    def test_strips_accents_case_and_extra_spaces(self):
        assert fold_text("  Ministra   de  Economía ") == "ministra de economia"

    def test_none_and_numbers(self):
        assert fold_text(None) == ""
        assert fold_text(2010) == "2010"


class TestEducationLevel:
    @pytest.mark.parametrize(
        "level, degree, kwargs, expected",
        [
            ("Doctorado", "", {}, "doctorate"),
            ("Posgrado", "Doctor en Economía", {}, "doctorate"),
            ("Posgrado", "Doctor", {}, "doctorate"),
            ("Postgrado", "Doctor en Ciencias", {}, "doctorate"),
            ("Maestría", "", {}, "master"),
            ("Posgrado", "MBA", {}, "master"),
            ("Título profesional", "", {}, "professional_title"),
            ("Universitario", "Economista", {"is_completed": True}, "professional_title"),
            ("Universitario", "Administración", {"is_completed": True}, "university_complete"),
            ("Universitario", "Administración", {"has_bachelor": "si"}, "university_complete"),
            ("Universitario incompleto", "", {}, "university_incomplete"),
            ("Universitario", "", {}, "university_incomplete"),
            ("Técnico", "Computación", {"is_completed": True}, "technical_complete"),
            ("Técnico", "", {}, "technical_incomplete"),
            ("No Universitario", "Computación", {"is_completed": True}, "technical_complete"),
            ("No universitario incompleto", "", {}, "technical_incomplete"),
            ("Técnico", "Maestro de obras", {"is_completed": True}, "technical_complete"),
            ("Posgrado", "Maestro en Gestión Pública", {}, "master"),
            ("Secundaria completa", "", {}, "secondary_complete"),
            ("Secundaria", "", {}, "secondary_incomplete"),
            ("Primaria", "", {}, "primary"),
        ],
    )
    def test_free_text(self, level, degree, kwargs, expected):
        assert normalize_education_level(level, degree, **kwargs) == expected

    def test_more_specific_rule_wins(self):
        # "doctorado" is checked before the generic postgraduate words
        assert normalize_education_level("Posgrado - Doctorado") == "doctorate"

    @pytest.mark.parametrize(
        "legacy, expected",
        [
            ("sin_informacion", "none"),
            ("primaria_completa", "primary"),
            ("secundaria_incompleta", "secondary_incomplete"),
            ("titulo_profesional", "professional_title"),
            ("university_complete", "university_complete"),
            ("master", "master"),
        ],
    )
    def test_legacy_and_enum_values(self, legacy, expected):
        assert normalize_education_level(legacy) == expected

    @pytest.mark.parametrize("garbage", [None, "", "xyz", 42, 3.5, {}, [], "###"])
    def test_garbage_resolves_to_none(self, garbage):
        assert normalize_education_level(garbage) == "none"

    def test_always_inside_enumeration(self):
        samples = ["Bachiller", "UNIVERSIDAD", "phd", "tecnológico", "?", "Licenciatura"]
        for sample in samples:
            assert normalize_education_level(sample) in EDUCATION_LEVELS

    def test_rank_follows_order(self):
        assert education_rank("doctorate") > education_rank("master") > education_rank("none")
        assert education_rank("bogus") == 0


class TestRoleAndSeniorityVocabulary:
    def test_english_members_and_variants(self):
        assert normalize_role_type("elected_high") == "elected_high"
        assert normalize_role_type("Public-Exec-High") == "public_exec_high"
        assert normalize_seniority("individual contributor") == "individual_contributor"

    def test_legacy_spanish_tags(self):
        assert normalize_role_type("electivo_alto") == "elected_high"
        assert normalize_role_type("tecnico_profesional") == "technical_professional"
        assert normalize_seniority("direccion") == "executive"
        assert normalize_seniority("gerencia") == "managerial"
        assert normalize_seniority("jefatura") == "supervisory"

    def test_unknown(self):
        assert normalize_role_type("astronauta") == UNKNOWN
        assert normalize_seniority(None) == UNKNOWN


class TestCargo:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Presidente", "president"),
            ("president", "president"),
            ("Primer Vicepresidente", "vice_president"),
            ("senador", "senator"),
            ("DIPUTADO", "deputy"),
            ("congresista", "deputy"),
            ("parlamento_andino", "andean_parliament"),
            ("Representante ante el Parlamento Andino", "andean_parliament"),
            ("alcalde", UNKNOWN),
            (None, UNKNOWN),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_cargo(value) == expected


class TestTrajectoryAndCivil:
    def test_trajectory_tags(self):
        assert normalize_trajectory_type("cargo_electivo") == "elected"
        assert normalize_trajectory_type("cargo_publico") == "appointed"
        assert normalize_trajectory_type("cargo_partidario") == "party"
        assert normalize_trajectory_type("candidatura") == "candidacy"
        assert normalize_trajectory_type("afiliacion") == "affiliation"

    def test_elected_flag_fills_missing_type(self):
        assert normalize_trajectory_type(None, is_elected=True) == "elected"
        assert normalize_trajectory_type(None) == UNKNOWN

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Violencia familiar", "family_violence"),
            ("Omisión a la asistencia familiar (alimentos)", "support_obligation"),
            ("Deuda laboral", "labor"),
            ("Incumplimiento de contrato", "contractual"),
            ("otro", "contractual"),
            (None, "contractual"),
        ],
    )
    def test_civil_kind(self, text, expected):
        assert normalize_civil_kind(text) == expected


class TestTruthy:
    def test_values(self):
        assert truthy("si") is True
        assert truthy("Sí") is True
        assert truthy(1) is True
        assert truthy(True) is True
        assert truthy("no") is False
        assert truthy(0) is False
        assert truthy(None) is False
