"""Normalization boundary between raw candidate records and the calculators.

Everything that could be missing, misspelled or stored under a different
field name is resolved here. The calculators only see the frozen types below
and never branch on the shape of the upstream record.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from classifier import classify_experience
from taxonomy import (
    UNKNOWN,
    fold_text,
    is_leadership,
    normalize_cargo,
    normalize_civil_kind,
    normalize_education_level,
    normalize_trajectory_type,
    truthy,
)


ASSET_FIELDS = [
    "total_income",
    "public_salary",
    "public_rent",
    "other_public",
    "private_salary",
    "private_rent",
    "other_private",
    "vehicle_count",
    "vehicle_total",
    "real_estate_count",
    "real_estate_total",
]

INCOME_SOURCE_FIELDS = [
    "public_salary",
    "public_rent",
    "other_public",
    "private_salary",
    "private_rent",
    "other_private",
]

_YEAR_PATTERN = re.compile(r"(?<!\d)(1[89]\d{2}|2[01]\d{2})(?!\d)")


@dataclass(frozen=True)
class NormalizedEducation:
    level: str
    field_of_study: str = ""
    institution: str = ""
    year: Optional[int] = None
    verified: bool = False

    def to_dict(self):
        return {
            "level": self.level,
            "field_of_study": self.field_of_study,
            "institution": self.institution,
            "year": self.year,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class NormalizedExperience:
    position: str
    organization: str
    role_type: str
    seniority: str
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    ongoing: bool = False
    source: str = "employment"

    @property
    def is_leadership(self):
        return is_leadership(self.seniority)


@dataclass(frozen=True)
class PenalSentence:
    firm: bool
    description: str = ""
    year: Optional[int] = None


@dataclass(frozen=True)
class CivilSentence:
    kind: str
    description: str = ""
    year: Optional[int] = None


@dataclass(frozen=True)
class AssetDeclaration:
    total_income: float = 0.0
    public_salary: float = 0.0
    public_rent: float = 0.0
    other_public: float = 0.0
    private_salary: float = 0.0
    private_rent: float = 0.0
    other_private: float = 0.0
    vehicle_count: int = 0
    vehicle_total: float = 0.0
    real_estate_count: int = 0
    real_estate_total: float = 0.0

    def income_sources(self):
        return [getattr(self, name) for name in INCOME_SOURCE_FIELDS]


@dataclass(frozen=True)
class NormalizedCandidate:
    candidate_id: str
    full_name: str
    cargo: str
    education: List[NormalizedEducation] = field(default_factory=list)
    experience: List[NormalizedExperience] = field(default_factory=list)
    political: List[NormalizedExperience] = field(default_factory=list)
    penal_sentences: List[PenalSentence] = field(default_factory=list)
    civil_sentences: List[CivilSentence] = field(default_factory=list)
    party_resignations: int = 0
    assets: Optional[AssetDeclaration] = None
    political_entries: int = 0
    has_birth_date: bool = False
    has_dni: bool = False
    has_plan_url: bool = False
    has_djhv_url: bool = False
    data_verified: bool = False
    data_source: str = ""
    regulatory_sanctions: int = 0
    integrity_base: Optional[float] = None
    company_issues: dict = field(default_factory=dict)
    voting_record: dict = field(default_factory=dict)
    tax_status: dict = field(default_factory=dict)
    judicial_discrepancy: dict = field(default_factory=dict)
    incumbent_performance: Optional[dict] = None
    plan_viability: Optional[float] = None
    as_of_year: int = 0

    @property
    def all_experience(self):
        return list(self.experience) + list(self.political)


def normalize_candidate(record, as_of_year, cargo=None):
    if not isinstance(record, dict):
        record = {}
    trajectory = _as_list(record.get("political_trajectory"))
    return NormalizedCandidate(
        candidate_id=_text(record.get("candidate_id") or record.get("id") or record.get("slug")),
        full_name=_text(record.get("full_name") or record.get("name")),
        cargo=normalize_cargo(cargo or record.get("cargo")),
        education=_education(record),
        experience=[
            item
            for item in (_employment(entry) for entry in _as_list(record.get("experience_details")))
            if item is not None
        ],
        political=[
            item
            for item in (_political(entry) for entry in trajectory)
            if item is not None
        ],
        penal_sentences=[_penal(entry) for entry in _as_list(record.get("penal_sentences")) if entry],
        civil_sentences=[_civil(entry) for entry in _as_list(record.get("civil_sentences")) if entry],
        party_resignations=to_count(record.get("party_resignations")),
        assets=_assets(record.get("assets_declaration")),
        political_entries=len(trajectory),
        has_birth_date=_present(record.get("birth_date")),
        has_dni=_present(record.get("dni")),
        has_plan_url=_present(record.get("plan_url")),
        has_djhv_url=_present(record.get("djhv_url")),
        data_verified=truthy(record.get("data_verified")),
        data_source=fold_text(record.get("data_source")),
        regulatory_sanctions=to_count(record.get("regulatory_sanctions")),
        integrity_base=_optional_number(record.get("integrity_base")),
        company_issues=_counts(record.get("company_issues"), ["penal", "environmental", "labor", "consumer"]),
        voting_record=_voting(record.get("voting_record")),
        tax_status=_tax(record.get("tax_status")),
        judicial_discrepancy=_discrepancy(record.get("judicial_discrepancy")),
        incumbent_performance=_performance(record.get("incumbent_performance")),
        plan_viability=_optional_number(record.get("plan_viability")),
        as_of_year=as_of_year,
    )


def to_number(value):
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = re.sub(r"[^0-9.\-]", "", value.replace(",", ""))
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_count(value):
    return max(0, int(to_number(value)))


def to_year(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return None
        value = str(int(value))
    match = _YEAR_PATTERN.search(str(value))
    if not match:
        return None
    return int(match.group(1))


def _education(record):
    entries = [entry for entry in _as_list(record.get("education_details")) if isinstance(entry, dict)]
    if not entries:
        level = normalize_education_level(record.get("education_level"))
        if level == "none":
            return []
        return [NormalizedEducation(level=level)]
    result = []
    for entry in entries:
        result.append(
            NormalizedEducation(
                level=normalize_education_level(
                    entry.get("level"),
                    entry.get("degree") or "",
                    is_completed=entry.get("is_completed"),
                    has_title=entry.get("has_title"),
                    has_bachelor=entry.get("has_bachelor"),
                ),
                field_of_study=_text(entry.get("field_of_study") or entry.get("degree")),
                institution=_text(entry.get("institution")),
                year=_first_year(
                    entry.get("title_year"),
                    entry.get("bachelor_year"),
                    entry.get("year"),
                    entry.get("end_date"),
                ),
                verified=truthy(entry.get("is_verified")),
            )
        )
    return result


def _employment(entry):
    if not isinstance(entry, dict):
        return None
    position = _text(entry.get("position"))
    organization = _text(entry.get("organization"))
    role_type, seniority = classify_experience(
        position,
        organization,
        role_type=entry.get("role_type"),
        seniority=entry.get("seniority_level"),
    )
    ongoing = truthy(entry.get("is_current"))
    end_year = None
    if not ongoing:
        end_year = _first_year(entry.get("end_year"), entry.get("end_date"))
        ongoing = end_year is None
    return NormalizedExperience(
        position=position,
        organization=organization,
        role_type=role_type,
        seniority=seniority,
        start_year=_first_year(entry.get("start_year"), entry.get("start_date")),
        end_year=end_year,
        ongoing=ongoing,
        source="employment",
    )


def _political(entry):
    if not isinstance(entry, dict):
        return None
    kind = normalize_trajectory_type(entry.get("type"), entry.get("is_elected"))
    if kind in ("candidacy", "affiliation", UNKNOWN):
        return None
    position = _text(entry.get("position"))
    organization = _text(entry.get("institution") or entry.get("party"))
    if kind == "elected":
        role_type, seniority = classify_experience(position, organization)
        if role_type != "elected_mid":
            role_type = "elected_high"
        if role_type == "elected_high":
            seniority = "executive"
        elif seniority not in ("executive", "managerial"):
            seniority = "supervisory"
    elif kind == "appointed":
        role_type, seniority = "public_exec_high", "executive"
    else:
        role_type, seniority = "partisan", "coordinator"
    end_year = to_year(entry.get("year_end"))
    return NormalizedExperience(
        position=position,
        organization=organization,
        role_type=role_type,
        seniority=seniority,
        start_year=_first_year(entry.get("year_start"), entry.get("year")),
        end_year=end_year,
        ongoing=end_year is None,
        source="political",
    )


def _penal(entry):
    if not isinstance(entry, dict):
        return PenalSentence(firm=False, description=_text(entry))
    status = fold_text(entry.get("status"))
    firm = truthy(entry.get("is_firm")) or status.startswith("firme") or status == "final"
    return PenalSentence(
        firm=firm,
        description=_text(entry.get("description")),
        year=to_year(entry.get("date")),
    )


def _civil(entry):
    if not isinstance(entry, dict):
        return CivilSentence(kind=normalize_civil_kind(entry), description=_text(entry))
    return CivilSentence(
        kind=normalize_civil_kind(entry.get("type") or entry.get("description")),
        description=_text(entry.get("description")),
        year=to_year(entry.get("date")),
    )


def _assets(value):
    if not isinstance(value, dict) or not value:
        return None
    values = {}
    for name in ASSET_FIELDS:
        if name.endswith("_count"):
            values[name] = to_count(value.get(name))
        else:
            values[name] = max(0.0, to_number(value.get(name)))
    return AssetDeclaration(**values)


def _counts(value, keys):
    value = value if isinstance(value, dict) else {}
    return {key: to_count(value.get(key)) for key in keys}


def _voting(value):
    value = value if isinstance(value, dict) else {}
    return {
        "votes_in_favor": to_count(value.get("votes_in_favor")),
        "votes_against": to_count(value.get("votes_against")),
        "penalty_points": max(0.0, to_number(value.get("penalty_points"))),
        "bonus_points": max(0.0, to_number(value.get("bonus_points"))),
    }


def _tax(value):
    value = value if isinstance(value, dict) else {}
    return {
        "condition": _enum_text(value.get("condition")),
        "status": _enum_text(value.get("status")),
        "has_coactive_debts": truthy(value.get("has_coactive_debts")),
        "coactive_debt_count": to_count(value.get("coactive_debt_count")),
    }


def _discrepancy(value):
    value = value if isinstance(value, dict) else {}
    return {
        "has_discrepancy": truthy(value.get("has_discrepancy")),
        "severity": _enum_text(value.get("severity")) or "none",
        "undeclared_cases": to_count(value.get("undeclared_cases")),
    }


def _performance(value):
    if not isinstance(value, dict) or not value:
        return None
    return {
        "budget_execution_pct": _optional_number(value.get("budget_execution_pct")),
        "audit_reports": to_count(value.get("audit_reports")),
        "performance_score": _optional_number(value.get("performance_score")),
    }


def _optional_number(value):
    if value is None or value == "":
        return None
    if isinstance(value, str) and not re.search(r"\d", value):
        return None
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    return to_number(value)


def _first_year(*values):
    for value in values:
        year = to_year(value)
        if year is not None:
            return year
    return None


def _as_list(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _text(value):
    if value is None:
        return ""
    return str(value).strip()


def _enum_text(value):
    return fold_text(value).replace(" ", "_").replace("-", "_")


def _present(value):
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
