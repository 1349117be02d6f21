def parse_amount(raw: object) -> float:
    """Coerce user-entered amounts to float; anything unparseable or negative counts as 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip().lstrip("$").replace(",", ""))
    except ValueError:
        return 0.0
    if value != value or value in (float("inf"), float("-inf")) or value < 0:
        return 0.0
    return value
