from typing import Any, Dict, List, Tuple

from .normalize import normalize_text

REQUIRED_STR_FIELDS = ["name", "description"]
OPTIONAL_STR_FIELDS = [
    "type",
    "country",
    "industry",
]
KNOWN_TYPES = {"prototype", "mass_production", "license", "sell_idea"}


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_invention(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Checks only what the intake form guarantees; scoring tolerates the rest.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    materials = data.get("materials")
    if materials is not None and not isinstance(materials, (list, str)):
        errors.append("Field 'materials' must be a list or a comma-separated string")

    return errors


def validate_invention_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Like validate_invention, but also requires a known production type."""
    errors = validate_invention(data)
    kind = data.get("type")
    if _is_non_empty_str(kind) and normalize_text(kind).replace(" ", "_") not in KNOWN_TYPES:
        errors.append(f"Unknown production type: {kind} (expected one of {', '.join(sorted(KNOWN_TYPES))})")
    return (not errors, errors)


def validate_factory(data: Dict[str, Any]) -> List[str]:
    """Minimal checks for a roster row before it is stored."""
    errors: List[str] = []
    if not _is_non_empty_str(data.get("name")):
        errors.append("Field 'name' must be a non-empty string")
    for f in ("industry", "industries", "materials"):
        v = data.get(f)
        if v is not None and not isinstance(v, (list, str)):
            errors.append(f"Field '{f}' must be a list or a comma-separated string")
    approved = data.get("approved")
    if approved is not None and not isinstance(approved, bool):
        errors.append("Field 'approved' must be a boolean if provided")
    return errors
