import re

from rubric import cap, step_points


_NEGATIONS = {"not", "no", "non", "sin"}


def score_transparency(candidate, rubric):
    config = rubric["transparency"]
    completeness = score_completeness(candidate, config["completeness"])
    consistency = score_consistency(candidate, config["consistency"])
    assets = score_assets_quality(candidate.assets, config["assets_quality"])
    sanctions = sanction_penalty(candidate.regulatory_sanctions, config["sanctions"])
    total = completeness["points"] + consistency["points"] + assets["points"] - sanctions["points"]
    return {
        "points": cap(total, 100),
        "max": 100,
        "completeness": completeness,
        "consistency": consistency,
        "assets_quality": assets,
        "sanctions": sanctions,
    }


def score_completeness(candidate, config):
    profile = (
        step_points(len(candidate.education), config["education_steps"])
        + step_points(len(candidate.experience), config["experience_steps"])
        + step_points(candidate.political_entries, config["political_steps"])
    )
    if candidate.has_birth_date:
        profile += config["birth_date"]
    if candidate.has_plan_url:
        profile += config["plan_url"]

    financial = 0
    assets = candidate.assets
    if assets is not None:
        if assets.total_income > 0:
            financial += config["income_declared"]
        if any(value > 0 for value in assets.income_sources()):
            financial += config["income_itemized"]
        if assets.vehicle_count > 0 or assets.vehicle_total > 0:
            financial += config["vehicles_declared"]
        if assets.real_estate_count > 0 or assets.real_estate_total > 0:
            financial += config["real_estate_declared"]

    return {
        "points": cap(profile + financial, config["max"]),
        "max": config["max"],
        "profile": profile,
        "financial": financial,
    }


def score_consistency(candidate, config):
    assets = candidate.assets
    if assets is None:
        return {"points": 0, "max": config["max"], "declaration": False}
    sources = sum(assets.income_sources())
    if assets.total_income <= 0 and sources <= 0:
        return {
            "points": cap(config["undeclared_income_flat"], config["max"]),
            "max": config["max"],
            "declaration": True,
            "income_declared": False,
        }

    income = 0
    ratio = None
    if assets.total_income > 0:
        ratio = abs(sources - assets.total_income) / assets.total_income
        for threshold, points in config["income_match_steps"]:
            if ratio <= threshold:
                income = points
                break

    vehicles = config["vehicles_coherent"] if _coherent(assets.vehicle_count, assets.vehicle_total) else 0
    real_estate = (
        config["real_estate_coherent"]
        if _coherent(assets.real_estate_count, assets.real_estate_total)
        else 0
    )
    dates = config["dates_plausible"] if dates_plausible(candidate) else 0
    return {
        "points": cap(income + vehicles + real_estate + dates, config["max"]),
        "max": config["max"],
        "declaration": True,
        "income_declared": True,
        "income_mismatch_ratio": None if ratio is None else round(ratio, 4),
        "income_match": income,
        "vehicles": vehicles,
        "real_estate": real_estate,
        "dates": dates,
    }


def dates_plausible(candidate):
    limit = candidate.as_of_year
    for entry in candidate.all_experience:
        if entry.start_year is not None and entry.start_year > limit:
            return False
        if entry.end_year is not None:
            if entry.end_year > limit:
                return False
            if entry.start_year is not None and entry.end_year < entry.start_year:
                return False
    for item in candidate.education:
        if item.year is not None and item.year > limit:
            return False
    return True


def score_assets_quality(assets, config):
    if assets is None:
        return {"points": 0, "max": config["max"], "income_sources": 0}
    table = config["income_source_points"]
    sources = sum(1 for value in assets.income_sources() if value > 0)
    points = table[min(sources, len(table) - 1)]
    if assets.vehicle_count > 0 and assets.vehicle_total > 0:
        points += config["vehicles_itemized"]
    if assets.real_estate_count > 0 and assets.real_estate_total > 0:
        points += config["real_estate_itemized"]
    if assets.total_income > 0:
        points += config["total_income_declared"]
    return {"points": cap(points, config["max"]), "max": config["max"], "income_sources": sources}


def sanction_penalty(count, config):
    return {
        "points": cap(count * config["per_sanction"], config["cap"]),
        "max": config["cap"],
        "count": count,
    }


def score_confidence(candidate, rubric):
    config = rubric["confidence"]
    verification_config = config["verification"]
    level = verification_config["base_level"]
    if candidate.data_verified:
        level += verification_config["verified_bonus"]
    if trusted_source(candidate.data_source):
        level += verification_config["trusted_source_bonus"]
    full = (
        verification_config["base_level"]
        + verification_config["verified_bonus"]
        + verification_config["trusted_source_bonus"]
    )
    verification = round(cap(level / full * verification_config["max"], verification_config["max"]), 2)

    coverage_config = config["coverage"]
    present = _covered_categories(candidate)
    categories = coverage_config["categories"]
    filled = [name for name in categories if present.get(name)]
    coverage = 0
    if categories:
        coverage = round(len(filled) / len(categories) * coverage_config["max"], 2)

    return {
        "points": cap(verification + coverage, 100),
        "max": 100,
        "verification": {"points": verification, "max": verification_config["max"], "level": level},
        "coverage": {
            "points": cap(coverage, coverage_config["max"]),
            "max": coverage_config["max"],
            "filled": filled,
            "missing": [name for name in categories if name not in filled],
        },
    }


def _covered_categories(candidate):
    return {
        "education": bool(candidate.education),
        "experience": bool(candidate.experience),
        "political_trajectory": candidate.political_entries > 0,
        "assets_declaration": candidate.assets is not None,
        "birth_date": candidate.has_birth_date,
        "dni": candidate.has_dni,
        "plan_url": candidate.has_plan_url,
        "djhv_url": candidate.has_djhv_url,
    }


def _coherent(count, total):
    return (count > 0) == (total > 0)


def trusted_source(data_source):
    """True for sources tagged verified, e.g. ``jne_verified``.

    ``unverified`` or ``not_verified`` never count.
    """
    tokens = [token for token in re.split(r"[^a-z]+", data_source or "") if token]
    if "verified" not in tokens:
        return False
    return not any(token in _NEGATIONS for token in tokens)
