PROFILE_FIELDS = [
    "candidate_id",
    "cargo",
    "rubric_version",
    "scores",
    "breakdown",
    "experience_timeline",
    "score_rationale",
]

SCORE_FIELDS = [
    "competence",
    "integrity",
    "transparency",
    "confidence",
    "balanced",
    "merit",
    "integrity_first",
]


def validate_profile(profile):
    missing = [key for key in PROFILE_FIELDS if key not in profile]
    if missing:
        return False, f"missing fields: {', '.join(missing)}"
    scores = profile.get("scores", {})
    missing_scores = [key for key in SCORE_FIELDS if key not in scores]
    if missing_scores:
        return False, f"missing score fields: {', '.join(missing_scores)}"
    for key in SCORE_FIELDS:
        value = scores[key]
        if not isinstance(value, (int, float)) or not 0 <= value <= 100:
            return False, f"score out of range: {key}={value!r}"
    problem = _check_nodes(profile.get("breakdown", {}), "breakdown")
    if problem:
        return False, problem
    return True, "ok"


def _check_nodes(node, path):
    if not isinstance(node, dict):
        return None
    if "points" in node and "max" in node:
        points = node["points"]
        if points < 0 or points > node["max"]:
            return f"{path} out of bounds: {points} not in [0, {node['max']}]"
    for key, value in node.items():
        problem = _check_nodes(value, f"{path}.{key}")
        if problem:
            return problem
    return None
