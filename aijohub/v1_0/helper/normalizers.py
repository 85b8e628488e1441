from typing import Any, Dict, Iterable

def to_text(v: Any) -> str:
    """Backend nulls become ''; everything else is kept as sent."""
    if v is None: return ""
    return v if isinstance(v, str) else str(v)

def normalize_row(row: Dict[str, Any], fields: Iterable[str]) -> Dict[str, str]:
    return {f: to_text(row.get(f)) for f in fields}
