from rubric import cap


def score_performance(candidate, rubric):
    """Advisory score for sitting officials; None for everyone else."""
    record = candidate.incumbent_performance
    if record is None:
        return None
    if record.get("performance_score") is not None:
        return round(cap(record["performance_score"], 100), 2)
    config = rubric["performance"]
    score = float(config["base"])
    budget = record.get("budget_execution_pct")
    if budget is not None:
        score += (budget - config["budget_pivot"]) * config["budget_factor"]
    score -= config["per_audit_report"] * record.get("audit_reports", 0)
    return round(cap(score, 100), 2)
