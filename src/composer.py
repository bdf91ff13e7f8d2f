"""Blend the dimension scores into preset and custom composites.

Weights are keyed by dimension name (``competence``, ``integrity``,
``transparency`` and, for presidential blends, ``plan``).
"""

PRESET_NAMES = {
    "balanced": "balanced",
    "merit": "merit",
    "integrity": "integrity_first",
}


def normalize_weights(weights, limits=None, tolerance=0.001):
    """Clamp each weight into its ``(low, high)`` limit, then rescale so the
    weights sum to 1.0. Without limits the weights are only rescaled.
    """
    if limits is None:
        limits = {key: (0.0, 1.0) for key in weights}
    clamped = {}
    for key, (low, high) in limits.items():
        value = weights.get(key)
        try:
            value = float(value)
        except (TypeError, ValueError):
            value = low
        if value != value:
            value = low
        clamped[key] = min(high, max(low, value))

    total = sum(clamped.values())
    if abs(total - 1.0) <= tolerance:
        return clamped
    if total <= 0:
        clamped = {key: 1.0 for key in clamped}
        total = float(len(clamped))

    scaled = {key: round(value / total, 3) for key, value in clamped.items()}
    residue = round(1.0 - sum(scaled.values()), 3)
    if residue:
        # ties go to the first dimension in declared order
        largest = max(scaled, key=scaled.get)
        scaled[largest] = round(scaled[largest] + residue, 3)
    return scaled


def weights_valid(weights, limits, tolerance=0.001):
    if set(weights) != set(limits):
        return False
    for key, (low, high) in limits.items():
        value = weights[key]
        if not isinstance(value, (int, float)) or value < low - tolerance or value > high + tolerance:
            return False
    return abs(sum(weights.values()) - 1.0) <= tolerance


def blend(scores, weights):
    total = sum(float(weight) * float(scores.get(key) or 0) for key, weight in weights.items())
    return round(max(0.0, min(100.0, total)), 2)


def is_presidential(cargo, rubric):
    return cargo in rubric["composer"].get("presidential_cargos", [])


def compose(scores, cargo, plan_viability=None, custom=None, rubric=None):
    config = rubric["composer"]
    tolerance = config.get("tolerance", 0.001)
    result = {}
    # Fixed presets are trusted as declared; limits only guard custom weights.
    for preset, name in PRESET_NAMES.items():
        weights = normalize_weights(config["presets"][preset], tolerance=tolerance)
        result[name] = blend(scores, weights)

    presidential = is_presidential(cargo, rubric) and plan_viability is not None
    if presidential:
        with_plan = dict(scores, plan=plan_viability)
        for preset, name in PRESET_NAMES.items():
            weights = normalize_weights(config["presidential_presets"][preset], tolerance=tolerance)
            result[f"{name}_p"] = blend(with_plan, weights)
        result["plan_viability"] = round(max(0.0, min(100.0, plan_viability)), 2)

    if custom:
        if presidential and "plan" in custom:
            limits = config["presidential_limits"]
            source = dict(scores, plan=plan_viability)
        else:
            limits = config["limits"]
            source = scores
        weights = normalize_weights(custom, limits, tolerance)
        result["custom"] = {"score": blend(source, weights), "weights": weights}
    return result
