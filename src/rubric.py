"""Point tables, penalty weights/caps and blend presets for the scoring rubric.

Calculators never embed literals; they read from a rubric dict shaped like
``DEFAULT_RUBRIC``. Overrides from ``config.yml`` are deep-merged on top of it
by ``config.load_config``.
"""

import copy


RUBRIC_VERSION = "2026.1"

_EXECUTIVE_CARGO_RELEVANCE = {
    "elected_high": 3.0,
    "public_exec_high": 3.0,
    "private_exec_high": 2.8,
    "public_exec_mid": 2.0,
    "private_exec_mid": 1.8,
    "international": 1.8,
    "elected_mid": 1.5,
    "technical_professional": 1.2,
    "academia": 1.0,
    "partisan": 0.6,
}

_LEGISLATIVE_CARGO_RELEVANCE = {
    "elected_high": 3.0,
    "public_exec_high": 2.6,
    "elected_mid": 2.2,
    "public_exec_mid": 2.0,
    "private_exec_high": 1.8,
    "technical_professional": 1.6,
    "private_exec_mid": 1.4,
    "academia": 1.4,
    "international": 1.2,
    "partisan": 0.8,
}

DEFAULT_RUBRIC = {
    "version": RUBRIC_VERSION,
    "competence": {
        "education": {
            "level_points": {
                "none": 0,
                "primary": 2,
                "secondary_incomplete": 4,
                "secondary_complete": 6,
                "technical_incomplete": 7,
                "technical_complete": 10,
                "university_incomplete": 9,
                "university_complete": 14,
                "professional_title": 16,
                "master": 18,
                "doctorate": 22,
            },
            "level_max": 22,
            "depth_min_points": 10,
            "depth_points_per_entry": 2,
            "depth_max": 8,
            "max": 30,
        },
        "experience": {
            # (min unique years, points), highest first
            "total_steps": [[15, 25], [11, 20], [8, 16], [5, 12], [2, 6], [0, 0]],
            "total_max": 25,
            "relevant_years_cap": 10,
            "relevant_max": 25,
            "unknown_role_points": 0.5,
            "default_cargo": "deputy",
            "relevance_by_cargo": {
                "president": dict(_EXECUTIVE_CARGO_RELEVANCE),
                "vice_president": dict(_EXECUTIVE_CARGO_RELEVANCE),
                "senator": dict(_LEGISLATIVE_CARGO_RELEVANCE),
                "deputy": dict(_LEGISLATIVE_CARGO_RELEVANCE),
                "andean_parliament": {
                    "international": 3.0,
                    "elected_high": 2.2,
                    "public_exec_high": 2.2,
                    "academia": 1.8,
                    "technical_professional": 1.6,
                    "private_exec_high": 1.6,
                    "public_exec_mid": 1.6,
                    "elected_mid": 1.6,
                    "private_exec_mid": 1.2,
                    "partisan": 0.8,
                },
            },
        },
        "leadership": {
            "seniority_points": {
                "individual_contributor": 2,
                "coordinator": 6,
                "supervisory": 8,
                "managerial": 10,
                "executive": 14,
            },
            "seniority_max": 14,
            "stability_steps": [[7, 6], [4, 4], [2, 2], [0, 0]],
            "stability_max": 6,
            "max": 20,
        },
        "weights": {
            "experience_total": 1.0,
            "experience_relevant": 1.0,
        },
    },
    "integrity": {
        "base": 100,
        "diminishing_factor": 0.5,
        "criminal": {
            "firm": 70,
            "pending": 35,
            "cap": 85,
        },
        "civil": {
            "weights": {
                "family_violence": 50,
                "support_obligation": 35,
                "labor": 25,
                "contractual": 15,
            },
            "type_caps": {
                "family_violence": 70,
                "support_obligation": 50,
                "labor": 40,
                "contractual": 25,
            },
            "cap": 85,
        },
        "resignations": {
            # (min count, penalty), highest first
            "steps": [[4, 15], [2, 10], [1, 5], [0, 0]],
            "cap": 15,
        },
        "company": {
            "weights": {
                "penal": 40,
                "environmental": 25,
                "labor": 20,
            },
            "consumer_threshold": 5,
            "consumer_penalty": 15,
            "cap": 60,
        },
        "voting": {
            "penalty_cap": 85,
            "bonus_cap": 15,
        },
        "tax": {
            "condition": {
                "no_habido": 50,
                "no_hallado": 20,
            },
            "status": {
                "suspendido": 15,
                "baja_definitiva": 10,
                "baja_provisional": 10,
            },
            "coactive_debt_penalty": 20,
            "coactive_debt_max_count": 3,
            "cap": 85,
        },
        "omissions": {
            "severity": {
                "none": 0,
                "minor": 20,
                "major": 40,
                "critical": 60,
            },
            "per_undeclared_case": 10,
            "cap": 85,
        },
    },
    "transparency": {
        "completeness": {
            "education_steps": [[3, 5], [1, 3], [0, 0]],
            "experience_steps": [[4, 6], [1, 4], [0, 0]],
            "political_steps": [[2, 2], [1, 1], [0, 0]],
            "birth_date": 2,
            "plan_url": 3,
            "income_declared": 6,
            "income_itemized": 4,
            "vehicles_declared": 3,
            "real_estate_declared": 4,
            "max": 35,
        },
        "consistency": {
            "undeclared_income_flat": 5,
            # (max mismatch ratio, points), tightest first
            "income_match_steps": [[0.05, 20], [0.2, 12], [0.5, 5]],
            "vehicles_coherent": 5,
            "real_estate_coherent": 5,
            "dates_plausible": 5,
            "max": 35,
        },
        "assets_quality": {
            "income_source_points": [0, 4, 8, 12, 15],
            "vehicles_itemized": 5,
            "real_estate_itemized": 7,
            "total_income_declared": 3,
            "max": 30,
        },
        "sanctions": {
            "per_sanction": 15,
            "cap": 30,
        },
    },
    "confidence": {
        "verification": {
            "base_level": 50,
            "verified_bonus": 30,
            "trusted_source_bonus": 20,
            "max": 50,
        },
        "coverage": {
            "categories": [
                "education",
                "experience",
                "political_trajectory",
                "assets_declaration",
                "birth_date",
                "dni",
                "plan_url",
                "djhv_url",
            ],
            "max": 50,
        },
    },
    "performance": {
        "base": 50,
        "budget_pivot": 50,
        "budget_factor": 0.5,
        "per_audit_report": 10,
    },
    "composer": {
        "tolerance": 0.001,
        "presets": {
            "balanced": {"competence": 0.45, "integrity": 0.45, "transparency": 0.10},
            "merit": {"competence": 0.60, "integrity": 0.30, "transparency": 0.10},
            "integrity": {"competence": 0.30, "integrity": 0.60, "transparency": 0.10},
        },
        "limits": {
            "competence": [0.20, 0.55],
            "integrity": [0.20, 0.55],
            "transparency": [0.05, 0.20],
        },
        "presidential_presets": {
            "balanced": {"competence": 0.40, "integrity": 0.40, "transparency": 0.05, "plan": 0.15},
            "merit": {"competence": 0.50, "integrity": 0.30, "transparency": 0.05, "plan": 0.15},
            "integrity": {"competence": 0.25, "integrity": 0.55, "transparency": 0.05, "plan": 0.15},
        },
        "presidential_limits": {
            "competence": [0.20, 0.55],
            "integrity": [0.20, 0.55],
            "transparency": [0.05, 0.20],
            "plan": [0.05, 0.30],
        },
        "presidential_cargos": ["president"],
    },
}


def default_rubric():
    return copy.deepcopy(DEFAULT_RUBRIC)


def step_points(value, steps):
    for threshold, points in steps:
        if value >= threshold:
            return points
    return 0


def cap(value, limit):
    return max(0, min(limit, value))
