"""Integrity dimension: a base score minus capped, diminishing penalties.

Every category is computed independently and reported on its own so the
breakdown can be audited line by line. A category's penalty node carries its
points (the amount subtracted) and the category cap as ``max``.
"""

from rubric import cap, step_points
from taxonomy import CIVIL_KINDS


def diminishing_penalty(weights, limit, factor=0.5):
    """Sum occurrence weights, heaviest first, each counting ``factor``
    times the previous one. Returns ``(points, capped)``.
    """
    ordered = sorted((float(weight) for weight in weights if weight), reverse=True)
    total = 0.0
    for index, weight in enumerate(ordered):
        total += weight * (factor ** index)
    capped = total > limit
    return round(min(total, limit), 2), capped


def score_integrity(candidate, rubric):
    config = rubric["integrity"]
    factor = float(config.get("diminishing_factor", 0.5))
    base = float(config["base"])
    if candidate.integrity_base is not None:
        base = cap(candidate.integrity_base, config["base"])

    criminal = criminal_penalty(candidate.penal_sentences, config["criminal"], factor)
    civil = civil_penalty(candidate.civil_sentences, config["civil"], factor)
    resignations = resignation_penalty(candidate.party_resignations, config["resignations"])
    voting = voting_adjustment(candidate.voting_record, config["voting"])
    tax = tax_penalty(candidate.tax_status, config["tax"])
    omissions = omission_penalty(candidate.judicial_discrepancy, config["omissions"])
    company = company_penalty(candidate.company_issues, config["company"], factor)

    after_personal = base - criminal["points"] - civil["points"] - resignations["points"]
    after_voting = after_personal - voting["penalty"]["points"] + voting["bonus"]["points"]
    after_tax = after_voting - tax["points"]
    after_omissions = after_tax - omissions["points"]
    after_company = after_omissions - company["points"]
    final = round(cap(after_company, 100), 2)

    return {
        "points": final,
        "max": 100,
        "base": base,
        "criminal": criminal,
        "civil": civil,
        "resignations": resignations,
        "voting": voting,
        "tax": tax,
        "omissions": omissions,
        "company": company,
        "subtotals": {
            "after_personal_record": round(after_personal, 2),
            "after_voting": round(after_voting, 2),
            "after_tax": round(after_tax, 2),
            "after_omissions": round(after_omissions, 2),
            "after_company": round(after_company, 2),
            "final": final,
        },
    }


def criminal_penalty(sentences, config, factor=0.5):
    weights = [config["firm"] if item.firm else config["pending"] for item in sentences]
    points, capped = diminishing_penalty(weights, config["cap"], factor)
    return {
        "points": points,
        "max": config["cap"],
        "firm": sum(1 for item in sentences if item.firm),
        "pending": sum(1 for item in sentences if not item.firm),
        "capped": capped,
    }


def civil_penalty(sentences, config, factor=0.5):
    by_type = {}
    total = 0.0
    for kind in CIVIL_KINDS:
        count = sum(1 for item in sentences if item.kind == kind)
        weight = config["weights"].get(kind, 0)
        type_cap = config["type_caps"].get(kind, weight)
        points, capped = diminishing_penalty([weight] * count, type_cap, factor)
        by_type[kind] = {"points": points, "max": type_cap, "count": count, "capped": capped}
        total += points
    return {
        "points": round(min(total, config["cap"]), 2),
        "max": config["cap"],
        "capped": total > config["cap"],
        "by_type": by_type,
    }


def resignation_penalty(count, config):
    points = cap(step_points(count, config["steps"]), config["cap"])
    return {"points": points, "max": config["cap"], "count": count}


def company_penalty(issues, config, factor=0.5):
    total = 0.0
    by_type = {}
    for kind, weight in config["weights"].items():
        count = issues.get(kind, 0)
        points, _ = diminishing_penalty([weight] * count, config["cap"], factor)
        by_type[kind] = {"count": count, "points": points}
        total += points
    consumer = issues.get("consumer", 0)
    consumer_points = config["consumer_penalty"] if consumer > config["consumer_threshold"] else 0
    by_type["consumer"] = {"count": consumer, "points": consumer_points}
    total += consumer_points
    return {
        "points": round(min(total, config["cap"]), 2),
        "max": config["cap"],
        "capped": total > config["cap"],
        "by_type": by_type,
    }


def voting_adjustment(record, config):
    penalty = round(cap(record.get("penalty_points", 0), config["penalty_cap"]), 2)
    bonus = round(cap(record.get("bonus_points", 0), config["bonus_cap"]), 2)
    return {
        "penalty": {"points": penalty, "max": config["penalty_cap"]},
        "bonus": {"points": bonus, "max": config["bonus_cap"]},
        "net": round(bonus - penalty, 2),
        "votes_in_favor": record.get("votes_in_favor", 0),
        "votes_against": record.get("votes_against", 0),
    }


def tax_penalty(status, config):
    condition = config["condition"].get(status.get("condition") or "", 0)
    registry = config["status"].get(status.get("status") or "", 0)
    debts = 0
    if status.get("has_coactive_debts") or status.get("coactive_debt_count", 0) > 0:
        count = max(status.get("coactive_debt_count", 0), 1)
        debts = config["coactive_debt_penalty"] * min(count, config["coactive_debt_max_count"])
    total = condition + registry + debts
    return {
        "points": cap(total, config["cap"]),
        "max": config["cap"],
        "condition": condition,
        "status": registry,
        "coactive_debts": debts,
        "capped": total > config["cap"],
    }


def omission_penalty(discrepancy, config):
    if not discrepancy.get("has_discrepancy"):
        return {"points": 0, "max": config["cap"], "severity": "none", "undeclared_cases": 0}
    severity = discrepancy.get("severity") or "none"
    cases = discrepancy.get("undeclared_cases", 0)
    total = config["severity"].get(severity, 0) + config["per_undeclared_case"] * cases
    return {
        "points": cap(total, config["cap"]),
        "max": config["cap"],
        "severity": severity,
        "undeclared_cases": cases,
    }
