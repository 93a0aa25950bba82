import re
from typing import Any, List


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_field(value: Any) -> str:
    """Coerce a possibly missing record field to a stripped string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def normalize_list(value: Any) -> List[str]:
    """Return a list of labels from a list or a legacy comma-joined string."""
    if isinstance(value, (list, tuple, set)):
        return [s.strip() for s in value if isinstance(s, str) and s.strip()]
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return []


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str) -> str:
    # Digits only; formatting and country prefixes like "+" are dropped
    return re.sub(r"\D", "", phone)


APPROVED_STATUSES = {"approved", "certified"}


def normalize_approved(value: Any, status: Any = None) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str) and value.strip():
        return value.strip().lower() in {"true", "1", "yes"} | APPROVED_STATUSES
    if isinstance(status, str):
        return status.strip().lower() in APPROVED_STATUSES
    return False
