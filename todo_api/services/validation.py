"""Normalization of raw filter, update and id input.

Values usually arrive as query-string text, so every parser accepts the
textual form of its type as well as the native one. Anything outside the
accepted set raises ValidationError; nothing is silently defaulted.
"""

from typing import Any

from todo_api.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest value a BIGINT or SQLite INTEGER column holds
MAX_ID = 2**63 - 1
# Keeps the (page - 1) * limit offset within MAX_ID
MAX_PAGE = MAX_ID // MAX_LIMIT

PRIORITY_LOW = 1
PRIORITY_MEDIUM = 2
PRIORITY_HIGH = 3
PRIORITY_MIN = PRIORITY_LOW
PRIORITY_MAX = PRIORITY_HIGH
DEFAULT_PRIORITY = PRIORITY_MEDIUM

TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

SORT_FIELDS = ("title", "created_at", "priority", "completed")
DEFAULT_SORT_FIELD = "created_at"
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_ORDER = "desc"

# Complete list of accepted boolean spellings (compared after strip + lower)
TRUE_STRINGS = frozenset({"true", "1"})
FALSE_STRINGS = frozenset({"false", "0"})


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def is_storable_id(value: int) -> bool:
    """True when an id fits the primary key column; larger ids cannot exist."""
    return value <= MAX_ID


def _to_int(value: Any, field: str) -> int:
    # bool is a subclass of int but True is not an id
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be an integer")


def parse_bool(value: Any, field: str = "completed") -> bool:
    """Coerce a boolean-like value.

    Accepted: True/False, the integers 1/0, and the strings "true"/"false"/"1"/"0"
    (surrounding whitespace and letter case ignored).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
    raise ValidationError(f"{field} must be a boolean value (true, false, 1 or 0)")


def parse_positive_int(value: Any, field: str = "id") -> int:
    """Coerce an id-like value to an integer >= 1."""
    try:
        number = _to_int(value, field)
    except ValidationError:
        raise ValidationError(f"{field} must be a positive integer") from None
    if number < 1:
        raise ValidationError(f"{field} must be a positive integer")
    return number


def parse_priority(value: Any, default: int | None = DEFAULT_PRIORITY) -> int | None:
    """Coerce a priority, falling back to ``default`` when the value is blank."""
    if is_blank(value):
        return default
    message = f"Priority must be a number between {PRIORITY_MIN} and {PRIORITY_MAX}"
    try:
        priority = _to_int(value, "priority")
    except ValidationError:
        raise ValidationError(message) from None
    if not PRIORITY_MIN <= priority <= PRIORITY_MAX:
        raise ValidationError(message)
    return priority


def normalize_title(value: Any) -> str:
    if value is None:
        raise ValidationError("Title is required")
    if not isinstance(value, str):
        raise ValidationError("Title must be a string")
    title = value.strip()
    if title == "":
        raise ValidationError("Title cannot be empty")
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
        )
    return title


def normalize_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def normalize_ids(ids: Any) -> list[int]:
    """Validate a batch id list and drop duplicates, keeping first-seen order."""
    if not isinstance(ids, list | tuple) or len(ids) == 0:
        raise ValidationError("ids must be a non-empty array")

    normalized = []
    invalid = []
    for raw in ids:
        try:
            normalized.append(parse_positive_int(raw))
        except ValidationError:
            invalid.append(raw)

    if invalid:
        listed = ", ".join(str(v) for v in invalid)
        raise ValidationError(f"Invalid IDs: [{listed}]. All IDs must be positive integers")

    return list(dict.fromkeys(normalized))


def _page_number(value: Any, default: int, field: str) -> int:
    if is_blank(value):
        return default
    try:
        number = _to_int(value, field)
    except ValidationError:
        raise ValidationError(f"{field} must be a number") from None
    return max(1, number)


def normalize_pagination(page: Any, limit: Any) -> tuple[int, int] | None:
    """Return (page, limit), or None when neither was supplied.

    Supplying either one turns pagination on. Both are floored at 1, the
    limit is capped at MAX_LIMIT and the page at MAX_PAGE.
    """
    if is_blank(page) and is_blank(limit):
        return None
    normalized_page = min(_page_number(page, DEFAULT_PAGE, "page"), MAX_PAGE)
    normalized_limit = min(_page_number(limit, DEFAULT_LIMIT, "limit"), MAX_LIMIT)
    return normalized_page, normalized_limit


def normalize_sort(sort_by: Any, sort_order: Any) -> tuple[str, str]:
    """Unknown sort fields and directions fall back to newest first."""
    field = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT_FIELD
    order = sort_order.lower() if isinstance(sort_order, str) else None
    if order not in SORT_ORDERS:
        order = DEFAULT_SORT_ORDER
    return field, order
