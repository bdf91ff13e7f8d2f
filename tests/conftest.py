import copy

import pytest

from config import DEFAULT_CONFIG, merge_config
from rubric import default_rubric


AS_OF_YEAR = 2026


@pytest.fixture
def config():
    return merge_config(copy.deepcopy(DEFAULT_CONFIG), {"scoring": {"as_of_year": AS_OF_YEAR}})


@pytest.fixture
def rubric():
    return default_rubric()


def job(position, organization="", start=None, end=None, **extra):
    entry = {"position": position, "organization": organization, "start_year": start, "end_year": end}
    entry.update(extra)
    return entry


@pytest.fixture
def full_record():
    """Doctorate, 20 unique years as an elected official, one firm criminal
    sentence and a complete, consistent asset declaration."""
    return {
        "candidate_id": "c-100",
        "full_name": "Rosa Mamani Torres",
        "cargo": "senador",
        "birth_date": "1968-03-14",
        "dni": "40111222",
        "plan_url": "https://example.org/plan.pdf",
        "djhv_url": "https://example.org/hv",
        "data_verified": True,
        "data_source": "jne_verified",
        "education_details": [
            {"level": "Doctorado", "degree": "Doctor en Derecho", "year": 2004},
            {"level": "Maestría", "degree": "Magíster en Gestión Pública", "year": 1999},
            {"level": "Universitario", "degree": "Abogada", "is_completed": True, "title_year": 1992},
        ],
        "experience_details": [
            job("Congresista de la República", "Congreso", 2006, 2016),
            job("Alcaldesa provincial", "Municipalidad Provincial de Puno", 2016, 2026),
            job("Senadora", "Congreso", 2010, 2014),
            job("Gobernadora regional", "Gobierno Regional de Puno", 2008, 2012),
        ],
        "political_trajectory": [
            {"type": "cargo_partidario", "position": "Secretaria de organización", "party": "Partido Ejemplo",
             "year_start": 2006, "year_end": 2008},
            {"type": "afiliacion", "party": "Partido Ejemplo", "year_start": 2003},
        ],
        "penal_sentences": [{"description": "Colusión", "status": "firme", "date": "2015-05-20"}],
        "assets_declaration": {
            "total_income": 200000,
            "public_salary": 150000,
            "private_rent": 30000,
            "other_private": 20000,
            "vehicle_count": 1,
            "vehicle_total": 40000,
            "real_estate_count": 2,
            "real_estate_total": 500000,
        },
    }
