from competence import score_competence
from composer import compose
from config import DEFAULT_CONFIG, as_of_year, resolve_rubric
from integrity import score_integrity
from performance import score_performance
from records import normalize_candidate
from transparency import score_confidence, score_transparency


DIMENSIONS = ["competence", "integrity", "transparency", "confidence"]


def score_candidate(record, cargo=None, config=None, custom_weights=None):
    config = config or DEFAULT_CONFIG
    rubric = resolve_rubric(config)
    if not isinstance(record, dict):
        record = {}
    cargo = cargo or record.get("cargo") or config.get("scoring", {}).get("default_cargo")
    candidate = normalize_candidate(record, as_of_year(config), cargo=cargo)

    competence, timeline = score_competence(candidate, rubric)
    integrity = score_integrity(candidate, rubric)
    transparency = score_transparency(candidate, rubric)
    confidence = score_confidence(candidate, rubric)

    breakdown = {
        "competence": competence,
        "integrity": integrity,
        "transparency": transparency,
        "confidence": confidence,
    }
    scores = {name: breakdown[name]["points"] for name in DIMENSIONS}
    scores.update(
        compose(
            scores,
            candidate.cargo,
            plan_viability=candidate.plan_viability,
            custom=custom_weights,
            rubric=rubric,
        )
    )
    scores["performance"] = score_performance(candidate, rubric)

    profile = {
        "candidate_id": candidate.candidate_id,
        "full_name": candidate.full_name,
        "cargo": candidate.cargo,
        "rubric_version": rubric["version"],
        "scores": scores,
        "breakdown": breakdown,
        "experience_timeline": timeline.to_dict(),
    }
    profile["score_rationale"] = build_rationale(profile)
    return profile


def build_rationale(profile):
    scores = profile.get("scores", {})
    breakdown = profile.get("breakdown", {})
    rationale = []

    comp = breakdown.get("competence", {})
    education = comp.get("education", {})
    total = comp.get("experience_total", {})
    relevant = comp.get("experience_relevant", {})
    leadership = comp.get("leadership", {})
    seniority = leadership.get("seniority", {})
    rationale.append(
        f"Competence {scores.get('competence')}/100: "
        f"education {_pts(education)} (level {_pts(education.get('level', {}))}, "
        f"depth {_pts(education.get('depth', {}))}) | "
        f"experience {total.get('unique_years', 0)} unique yrs {_pts(total)} | "
        f"relevant for {relevant.get('cargo_table')} {_pts(relevant)} | "
        f"leadership {seniority.get('highest') or 'none'} {_pts(leadership)}"
    )

    integ = breakdown.get("integrity", {})
    penalties = []
    for key in ["criminal", "civil", "resignations", "tax", "omissions", "company"]:
        points = integ.get(key, {}).get("points", 0)
        if points:
            penalties.append(f"{key} -{points}")
    voting = integ.get("voting", {})
    if voting.get("net"):
        penalties.append(f"voting {voting['net']:+}")
    rationale.append(
        f"Integrity {scores.get('integrity')}/100: base {integ.get('base')} | "
        + (" | ".join(penalties) if penalties else "no penalties")
    )

    trans = breakdown.get("transparency", {})
    sanctions = trans.get("sanctions", {})
    rationale.append(
        f"Transparency {scores.get('transparency')}/100: "
        f"completeness {_pts(trans.get('completeness', {}))} | "
        f"consistency {_pts(trans.get('consistency', {}))} | "
        f"assets {_pts(trans.get('assets_quality', {}))}"
        + (f" | sanctions -{sanctions['points']}" if sanctions.get("points") else "")
    )

    conf = breakdown.get("confidence", {})
    missing = conf.get("coverage", {}).get("missing", [])
    rationale.append(
        f"Confidence {scores.get('confidence')}/100: "
        f"verification {_pts(conf.get('verification', {}))} | "
        f"coverage {_pts(conf.get('coverage', {}))}"
        + (f" (missing {', '.join(missing)})" if missing else "")
    )

    timeline = profile.get("experience_timeline", {})
    if timeline.get("has_overlap"):
        shared = [span["label"] for span in timeline.get("spans", []) if "; " in span.get("label", "")]
        rationale.append(
            f"Overlapping tenures: {timeline.get('raw_years')} raw yrs counted as "
            f"{timeline.get('unique_years')} unique yrs"
            + (f" ({' | '.join(shared)})" if shared else "")
        )
    return rationale


def _pts(node):
    return f"{node.get('points', 0)}/{node.get('max', 0)}"
