import re

from taxonomy import (
    DEFAULT_ROLE_TYPE,
    DEFAULT_SENIORITY,
    UNKNOWN,
    fold_text,
    normalize_role_type,
    normalize_seniority,
)


PUBLIC_ORGANIZATIONS = [
    "ministerio",
    "ministry",
    "gobierno",
    "government",
    "municipalidad",
    "municipio",
    "congreso",
    "poder judicial",
    "judiciary",
    "fiscalia",
    "contraloria",
    "defensoria",
    "defensa",
    "fuerzas armadas",
    "armed forces",
    "ejercito",
    "marina de guerra",
    "fuerza aerea",
    "policia",
    "police",
    "jurado nacional",
    "sunat",
    "essalud",
]

PUBLIC_SENIOR_TITLES = [
    "director",
    "directora",
    "general de brigada",
    "general de division",
    "oficial general",
    "jefe",
    "jefa",
    "comandante",
    "oficial superior",
    "chief",
    "commander",
]

ACADEMIC_ORGANIZATIONS = ["universidad", "university", "instituto", "colegio", "escuela"]

ACADEMIC_EXCLUDED_TITLES = ["director", "directora", "gerente", "empresario", "empresaria"]

# Each rule: (label, {"position": [...], "organization": [...]}). First match wins.
ROLE_RULES = [
    (
        "elected_high",
        {
            "position": [
                "congresista",
                "senador",
                "senadora",
                "diputado",
                "diputada",
                "alcalde",
                "alcaldesa",
                "gobernador",
                "gobernadora",
                "presidente regional",
                "presidenta regional",
                "congressman",
                "congresswoman",
                "senator",
                "mayor",
                "governor",
            ],
        },
    ),
    (
        "elected_mid",
        {
            "position": [
                "regidor",
                "regidora",
                "consejero regional",
                "consejera regional",
                "teniente alcalde",
                "councilor",
            ],
        },
    ),
    (
        "public_exec_high",
        {
            "position": [
                "ministro",
                "ministra",
                "viceministro",
                "viceministra",
                "embajador",
                "embajadora",
                "secretario general",
                "secretaria general",
                "jefe institucional",
                "superintendente",
                "contralor",
                "minister",
                "ambassador",
                "comptroller",
            ],
        },
    ),
    (
        "international",
        {
            "position": ["funcionario internacional", "consultor internacional"],
            "organization": [
                "naciones unidas",
                "onu",
                "oea",
                "banco mundial",
                "banco interamericano",
                "bid",
                "fmi",
                "cepal",
                "unesco",
                "unicef",
                "comunidad andina",
                "organismo internacional",
                "united nations",
                "world bank",
            ],
        },
    ),
    ("public_sector", {"organization": PUBLIC_ORGANIZATIONS}),
    (
        "academia",
        {
            "position": [
                "rector",
                "rectora",
                "decano",
                "decana",
                "catedratico",
                "catedratica",
                "profesor",
                "profesora",
                "docente",
                "investigador",
                "investigadora",
                "professor",
                "dean",
            ],
        },
    ),
    ("academic_institution", {"organization": ACADEMIC_ORGANIZATIONS}),
    (
        "private_exec_high",
        {
            "position": [
                "gerente general",
                "director",
                "directora",
                "ceo",
                "presidente ejecutivo",
                "presidente del directorio",
                "empresario",
                "empresaria",
                "propietario",
                "propietaria",
                "dueno",
                "duena",
                "fundador",
                "owner",
                "general manager",
            ],
        },
    ),
    (
        "private_exec_mid",
        {
            "position": [
                "gerente",
                "subgerente",
                "jefe",
                "jefa",
                "manager",
                "head",
            ],
        },
    ),
    (
        "partisan",
        {
            "position": ["dirigente", "secretario de organizacion", "personero"],
            "organization": ["partido", "movimiento regional", "alianza electoral"],
        },
    ),
]

SENIORITY_RULES = [
    (
        "executive",
        [
            "presidente",
            "presidenta",
            "vicepresidente",
            "vicepresidenta",
            "rector",
            "rectora",
            "ministro",
            "ministra",
            "viceministro",
            "viceministra",
            "alcalde",
            "alcaldesa",
            "gobernador",
            "gobernadora",
            "congresista",
            "senador",
            "senadora",
            "director general",
            "directora general",
            "ceo",
            "gerente general",
            "comandante general",
            "embajador",
            "embajadora",
            "superintendente",
            "contralor",
            "president",
            "minister",
            "mayor",
            "governor",
            "general manager",
        ],
    ),
    (
        "managerial",
        [
            "gerente",
            "director",
            "directora",
            "subdirector",
            "subdirectora",
            "decano",
            "decana",
            "oficial superior",
            "empresario",
            "empresaria",
            "secretario general",
            "secretaria general",
            "general de brigada",
            "general de division",
            "oficial general",
            "manager",
            "dean",
        ],
    ),
    (
        "supervisory",
        [
            "jefe",
            "jefa",
            "subgerente",
            "coordinador",
            "coordinadora",
            "regidor",
            "regidora",
            "asesor",
            "asesora",
            "supervisor",
            "supervisora",
            "encargado",
            "encargada",
            "head",
            "coordinator",
        ],
    ),
    (
        "coordinator",
        [
            "profesor",
            "profesora",
            "docente",
            "catedratico",
            "catedratica",
            "especialista",
            "analista",
            "abogado",
            "abogada",
            "ingeniero",
            "ingeniera",
            "medico",
            "medica",
            "contador",
            "contadora",
            "consultor",
            "consultora",
            "investigador",
            "investigadora",
            "specialist",
            "analyst",
        ],
    ),
]

_PATTERN_CACHE = {}


def classify_role(position, organization=""):
    pos = fold_text(position)
    org = fold_text(organization)
    for label, scopes in ROLE_RULES:
        if not _rule_matches(scopes, pos, org):
            continue
        if label == "public_sector":
            if _matches_any(pos, PUBLIC_SENIOR_TITLES):
                return "public_exec_high"
            return "public_exec_mid"
        if label == "academic_institution":
            if _matches_any(pos, ACADEMIC_EXCLUDED_TITLES):
                continue
            return "academia"
        return label
    return DEFAULT_ROLE_TYPE


def classify_seniority(position):
    pos = fold_text(position)
    for label, keywords in SENIORITY_RULES:
        if _matches_any(pos, keywords):
            return label
    return DEFAULT_SENIORITY


def classify_experience(position, organization="", role_type=None, seniority=None):
    role = normalize_role_type(role_type) if role_type else UNKNOWN
    if role == UNKNOWN:
        role = classify_role(position, organization)
    level = normalize_seniority(seniority) if seniority else UNKNOWN
    if level == UNKNOWN:
        level = classify_seniority(position)
    return role, level


def _rule_matches(scopes, pos, org):
    if _matches_any(pos, scopes.get("position", [])):
        return True
    return _matches_any(org, scopes.get("organization", []))


def _matches_any(text, keywords):
    if not text:
        return False
    return any(_keyword_pattern(keyword).search(text) for keyword in keywords)


def _keyword_pattern(keyword):
    pattern = _PATTERN_CACHE.get(keyword)
    if pattern is None:
        # Anchored at a word start so "jefe" does not match inside "subjefe".
        pattern = re.compile(r"(?<![a-z0-9])" + re.escape(keyword))
        _PATTERN_CACHE[keyword] = pattern
    return pattern
