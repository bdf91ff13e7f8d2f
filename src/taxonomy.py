"""Closed vocabularies used by the scoring engine and the normalizers that map
free-form upstream text onto them.

Every normalizer here is total: unknown input resolves to ``none`` /
``unknown`` instead of raising.
"""

import re
import unicodedata


UNKNOWN = "unknown"

EDUCATION_LEVELS = (
    "none",
    "primary",
    "secondary_incomplete",
    "secondary_complete",
    "technical_incomplete",
    "technical_complete",
    "university_incomplete",
    "university_complete",
    "professional_title",
    "master",
    "doctorate",
)

ROLE_TYPES = (
    "elected_high",
    "elected_mid",
    "public_exec_high",
    "public_exec_mid",
    "private_exec_high",
    "private_exec_mid",
    "technical_professional",
    "academia",
    "international",
    "partisan",
)

SENIORITY_LEVELS = (
    "individual_contributor",
    "coordinator",
    "supervisory",
    "managerial",
    "executive",
)

LEADERSHIP_LEVELS = ("supervisory", "managerial", "executive")

CARGOS = (
    "president",
    "vice_president",
    "senator",
    "deputy",
    "andean_parliament",
)

TRAJECTORY_TYPES = ("elected", "appointed", "party", "candidacy", "affiliation")

CIVIL_KINDS = ("family_violence", "support_obligation", "labor", "contractual")

DEFAULT_ROLE_TYPE = "technical_professional"
DEFAULT_SENIORITY = "individual_contributor"


# Ordered most specific first. Each rule: (level, level keywords, degree keywords).
_EDUCATION_RULES = [
    ("doctorate", ["doctorado", "doctorate", "phd"], ["doctorado", "phd", "doctor en", "doctor of"]),
    (
        "master",
        ["maestria", "posgrado", "postgrado", "master", "magister"],
        ["magister", "grado de maestro", "maestro en", "maestria", "master", "mba"],
    ),
    ("professional_title", ["titulo", "licenciatura"], []),
]

_TITLE_DEGREE_WORDS = [
    "titulo",
    "ingeniero",
    "ingeniera",
    "abogado",
    "abogada",
    "medico",
    "medica",
    "licenciado",
    "licenciada",
    "contador",
    "contadora",
    "arquitecto",
    "arquitecta",
    "economista",
    "cirujano",
]

_LEGACY_EDUCATION = {
    "sin_informacion": "none",
    "sin_estudios": "none",
    "ninguno": "none",
    "primaria_completa": "primary",
    "primaria_incompleta": "primary",
    "secundaria_incompleta": "secondary_incomplete",
    "secundaria_completa": "secondary_complete",
    "tecnico_incompleto": "technical_incomplete",
    "tecnico_completo": "technical_complete",
    "universitario_incompleto": "university_incomplete",
    "universitario_completo": "university_complete",
    "titulo_profesional": "professional_title",
    "maestria": "master",
    "doctorado": "doctorate",
}

_LEGACY_ROLE_TYPES = {
    "electivo_alto": "elected_high",
    "electivo_medio": "elected_mid",
    "ejecutivo_publico_alto": "public_exec_high",
    "ejecutivo_publico_medio": "public_exec_mid",
    "ejecutivo_privado_alto": "private_exec_high",
    "ejecutivo_privado_medio": "private_exec_mid",
    "tecnico_profesional": "technical_professional",
    "academia": "academia",
    "academico": "academia",
    "internacional": "international",
    "partidario": "partisan",
}

_LEGACY_SENIORITY = {
    "individual": "individual_contributor",
    "individual_contributor": "individual_contributor",
    "coordinador": "coordinator",
    "jefatura": "supervisory",
    "gerencia": "managerial",
    "direccion": "executive",
    "directivo": "executive",
}

_CARGO_ALIASES = {
    "presidente": "president",
    "presidente de la republica": "president",
    "president": "president",
    "vicepresidente": "vice_president",
    "primer vicepresidente": "vice_president",
    "segundo vicepresidente": "vice_president",
    "vice president": "vice_president",
    "senador": "senator",
    "senator": "senator",
    "diputado": "deputy",
    "deputy": "deputy",
    "congresista": "deputy",
    "parlamento andino": "andean_parliament",
    "representante ante el parlamento andino": "andean_parliament",
    "andean parliament": "andean_parliament",
}

_TRAJECTORY_ALIASES = {
    "cargo_electivo": "elected",
    "elected": "elected",
    "elected_office": "elected",
    "cargo_publico": "appointed",
    "appointed": "appointed",
    "appointed_office": "appointed",
    "cargo_partidario": "party",
    "party": "party",
    "party_office": "party",
    "candidatura": "candidacy",
    "candidacy": "candidacy",
    "afiliacion": "affiliation",
    "affiliation": "affiliation",
}

_CIVIL_RULES = [
    ("family_violence", ["violencia", "violence"]),
    ("support_obligation", ["alimento", "alimentari", "support", "child support"]),
    ("labor", ["laboral", "labor", "trabajo"]),
    ("contractual", ["contractual", "contrato", "contract"]),
]

_TRUE_STRINGS = {"1", "true", "t", "yes", "y", "si", "s"}


def fold_text(value):
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"\s+", " ", stripped.lower()).strip()


def truthy(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return fold_text(value) in _TRUE_STRINGS


def education_rank(level):
    if level in EDUCATION_LEVELS:
        return EDUCATION_LEVELS.index(level)
    return 0


def normalize_education_level(level, degree="", is_completed=None, has_title=None, has_bachelor=None):
    text = fold_text(level)
    degree_text = fold_text(degree)
    combined = f"{text} {degree_text}".strip()
    completed = truthy(is_completed)

    if _has_any(text, ["posgrado", "postgrado"]) and "doctor" in degree_text:
        return "doctorate"
    for member, level_words, degree_words in _EDUCATION_RULES:
        if _has_any(text, level_words) or _has_any(degree_text, degree_words):
            return member

    # JNE tags non-university higher education as "No Universitario"
    if "no universitari" in text:
        return _by_completion(text, completed, "technical_complete", "technical_incomplete")

    if _has_any(text, ["universitari", "universidad", "university", "bachiller", "bachelor"]):
        if truthy(has_title) or _has_any(degree_text, _TITLE_DEGREE_WORDS):
            return "professional_title"
        if "incomplet" in text:
            return "university_incomplete"
        if completed or truthy(has_bachelor) or "complet" in text or "bachiller" in combined:
            return "university_complete"
        return "university_incomplete"
    if _has_any(text, ["tecnico", "tecnologico", "technical"]):
        return _by_completion(text, completed, "technical_complete", "technical_incomplete")
    if _has_any(text, ["secundaria", "secondary"]):
        return _by_completion(text, completed, "secondary_complete", "secondary_incomplete")
    if _has_any(text, ["primaria", "primary"]):
        return "primary"

    raw = level.strip() if isinstance(level, str) else level
    if raw in EDUCATION_LEVELS:
        return raw
    if isinstance(raw, str):
        return _LEGACY_EDUCATION.get(raw, _LEGACY_EDUCATION.get(raw.lower(), "none"))
    return "none"


def normalize_role_type(value):
    key = _enum_key(value)
    if key in ROLE_TYPES:
        return key
    return _LEGACY_ROLE_TYPES.get(key, UNKNOWN)


def normalize_seniority(value):
    key = _enum_key(value)
    if key in SENIORITY_LEVELS:
        return key
    return _LEGACY_SENIORITY.get(key, UNKNOWN)


def normalize_cargo(value):
    key = _enum_key(value)
    if key in CARGOS:
        return key
    text = key.replace("_", " ")
    if text in _CARGO_ALIASES:
        return _CARGO_ALIASES[text]
    if "andino" in text or "andean" in text:
        return "andean_parliament"
    if "vicepresident" in text or "vice president" in text:
        return "vice_president"
    return UNKNOWN


def normalize_trajectory_type(value, is_elected=None):
    key = _enum_key(value)
    kind = _TRAJECTORY_ALIASES.get(key, UNKNOWN)
    if kind == UNKNOWN and truthy(is_elected):
        return "elected"
    return kind


def normalize_civil_kind(value):
    text = fold_text(value)
    for kind, words in _CIVIL_RULES:
        if _has_any(text, words):
            return kind
    key = _enum_key(value)
    if key in CIVIL_KINDS:
        return key
    return "contractual"


def is_leadership(seniority):
    return seniority in LEADERSHIP_LEVELS


def _enum_key(value):
    return fold_text(value).replace("-", "_").replace(" ", "_")


def _by_completion(text, completed, complete, incomplete):
    if "incomplet" in text:
        return incomplete
    if completed or "complet" in text:
        return complete
    return incomplete


def _has_any(text, words):
    return any(word in text for word in words)
