from intervals import build_timeline, make_interval
from rubric import cap, step_points
from taxonomy import SENIORITY_LEVELS


def score_competence(candidate, rubric):
    config = rubric["competence"]
    education = score_education(candidate.education, config["education"])
    intervals = experience_intervals(candidate.all_experience, candidate.as_of_year)
    timeline = build_timeline([interval for _, interval in intervals])
    experience_total = score_experience_total(timeline, config["experience"])
    experience_relevant = score_experience_relevant(intervals, candidate.cargo, config["experience"])
    leadership = score_leadership(candidate.all_experience, intervals, config["leadership"])

    weights = config.get("weights", {})
    total = (
        education["points"]
        + float(weights.get("experience_total", 1.0)) * experience_total["points"]
        + float(weights.get("experience_relevant", 1.0)) * experience_relevant["points"]
        + leadership["points"]
    )
    return {
        "points": round(cap(total, 100), 2),
        "max": 100,
        "education": education,
        "experience_total": experience_total,
        "experience_relevant": experience_relevant,
        "leadership": leadership,
    }, timeline


def experience_intervals(experience, as_of_year):
    pairs = []
    for entry in experience:
        interval = make_interval(entry.start_year, entry.end_year, as_of_year, label=entry.position)
        if interval is not None:
            pairs.append((entry, interval))
    return pairs


def score_education(education, config):
    level_points = config["level_points"]
    points = sorted((level_points.get(item.level, 0) for item in education), reverse=True)
    if not points:
        return {
            "points": 0,
            "max": config["max"],
            "level": {"points": 0, "max": config["level_max"]},
            "depth": {"points": 0, "max": config["depth_max"]},
            "highest": None,
        }
    top = points[0]
    qualifying = sum(1 for value in points[1:] if value >= config["depth_min_points"])
    level = cap(top, config["level_max"])
    depth = cap(qualifying * config["depth_points_per_entry"], config["depth_max"])
    # ties go to verified, then most recent, entries
    highest = max(education, key=lambda item: (level_points.get(item.level, 0), item.verified, item.year or 0))
    return {
        "points": cap(level + depth, config["max"]),
        "max": config["max"],
        "level": {"points": level, "max": config["level_max"]},
        "depth": {"points": depth, "max": config["depth_max"]},
        "highest": highest.to_dict(),
    }


def score_experience_total(timeline, config):
    points = step_points(timeline.unique_years, config["total_steps"])
    return {
        "points": cap(points, config["total_max"]),
        "max": config["total_max"],
        "unique_years": timeline.unique_years,
        "raw_years": timeline.raw_years,
    }


def score_experience_relevant(intervals, cargo, config):
    tables = config["relevance_by_cargo"]
    table = tables.get(cargo) or tables[config["default_cargo"]]
    unknown_points = config["unknown_role_points"]
    years_cap = config["relevant_years_cap"]
    raw = 0.0
    for entry, interval in intervals:
        years = min(interval.length, years_cap)
        raw += years * table.get(entry.role_type, unknown_points)
    return {
        "points": round(cap(raw, config["relevant_max"]), 2),
        "max": config["relevant_max"],
        "cargo_table": cargo if cargo in tables else config["default_cargo"],
    }


def score_leadership(experience, intervals, config):
    # the highest tier counts even for undated entries; only stability needs years
    leaders = [entry for entry in experience if entry.is_leadership]
    if not leaders:
        return {
            "points": 0,
            "max": config["max"],
            "seniority": {"points": 0, "max": config["seniority_max"], "highest": None},
            "stability": {"points": 0, "max": config["stability_max"], "years": 0},
        }
    highest = max((entry.seniority for entry in leaders), key=SENIORITY_LEVELS.index)
    seniority = cap(config["seniority_points"].get(highest, 0), config["seniority_max"])
    years = build_timeline([interval for entry, interval in intervals if entry.is_leadership]).unique_years
    stability = cap(step_points(years, config["stability_steps"]), config["stability_max"])
    return {
        "points": cap(seniority + stability, config["max"]),
        "max": config["max"],
        "seniority": {"points": seniority, "max": config["seniority_max"], "highest": highest},
        "stability": {"points": stability, "max": config["stability_max"], "years": years},
    }
