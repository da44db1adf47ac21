"""
Field validation for link create and update requests.

Validation never raises for bad input. It returns a LinkValidationResult that
holds either the normalized field values or a mapping of field name to the
errors found for that field. Every field is checked, so a request with several
problems reports all of them at once.
"""
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from models.base import INTEGER_MAX
from models.link import TITLE_MAX_LENGTH, URL_MAX_LENGTH

IssueLookup = Callable[[int], Awaitable[bool]]

# Fields a client may set. Anything else in the payload (id, user_id, ...) is dropped.
LINK_FIELDS = ("url", "title", "description", "issue_id", "position")

ERROR_MESSAGES: dict[str, str] = {
    "url.required": "URL is required",
    "url.string": "URL must be a string",
    "url.url": "Enter a valid URL",
    "url.max": f"URL must not exceed {URL_MAX_LENGTH} characters",
    "title.required": "Title is required",
    "title.string": "Title must be a string",
    "title.max": f"Title must not exceed {TITLE_MAX_LENGTH} characters",
    "description.string": "Description must be a string",
    "issue_id.exists": "The selected issue does not exist",
    "position.integer": "Position must be an integer",
    "position.min": "Position cannot be negative",
    "position.max": f"Position must not exceed {INTEGER_MAX}",
}

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class FieldError:
    """A single failed rule for one field."""

    code: str
    message: str

    @classmethod
    def from_code(cls, code: str) -> "FieldError":
        return cls(code=code, message=ERROR_MESSAGES[code])


@dataclass
class LinkValidationResult:
    """Outcome of validating a link payload."""

    fields: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[FieldError]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, code: str) -> None:
        self.errors.setdefault(field_name, []).append(FieldError.from_code(code))


def _normalize(value: Any) -> Any:
    """Trim strings and treat blank strings as missing."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _coerce_int(value: Any) -> int | None:
    """Return value as an int if it is an integer or an integer string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.match(value):
        try:
            return int(value)
        except ValueError:
            # longer than the interpreter allows for str -> int
            return None
    return None


def is_valid_url(value: str) -> bool:
    """Check that value is an absolute URL with a scheme and a host."""
    try:
        parsed = _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return bool(parsed.host)


def _check_url(value: Any) -> list[str]:
    if value is None:
        return ["url.required"]
    if not isinstance(value, str):
        return ["url.string"]
    codes = []
    if not is_valid_url(value):
        codes.append("url.url")
    if len(value) > URL_MAX_LENGTH:
        codes.append("url.max")
    return codes


def _check_title(value: Any) -> list[str]:
    if value is None:
        return ["title.required"]
    if not isinstance(value, str):
        return ["title.string"]
    if len(value) > TITLE_MAX_LENGTH:
        return ["title.max"]
    return []


async def validate_link_fields(
    data: Mapping[str, Any],
    issue_exists: IssueLookup,
) -> LinkValidationResult:
    """
    Validate a raw link payload.

    Args:
        data: Raw field mapping from the request body.
        issue_exists: Async callable reporting whether an issue ID exists.

    Returns:
        LinkValidationResult. When ok, `fields` holds the normalized values for
        url and title plus any optional field present in `data`.
    """
    result = LinkValidationResult()
    values = {name: _normalize(data[name]) for name in LINK_FIELDS if name in data}

    for name, check in (("url", _check_url), ("title", _check_title)):
        value = values.get(name)
        codes = check(value)
        for code in codes:
            result.add_error(name, code)
        if not codes:
            result.fields[name] = value

    if "description" in values:
        description = values["description"]
        if description is not None and not isinstance(description, str):
            result.add_error("description", "description.string")
        else:
            result.fields["description"] = description

    if "position" in values:
        raw_position = values["position"]
        if raw_position is None:
            result.fields["position"] = None
        else:
            position = _coerce_int(raw_position)
            if position is None:
                result.add_error("position", "position.integer")
            elif position < 0:
                result.add_error("position", "position.min")
            elif position > INTEGER_MAX:
                result.add_error("position", "position.max")
            else:
                result.fields["position"] = position

    if "issue_id" in values:
        raw_issue_id = values["issue_id"]
        if raw_issue_id is None:
            result.fields["issue_id"] = None
        else:
            issue_id = _coerce_int(raw_issue_id)
            # Ids outside the column range cannot exist, so skip the lookup
            if (
                issue_id is None
                or not 1 <= issue_id <= INTEGER_MAX
                or not await issue_exists(issue_id)
            ):
                result.add_error("issue_id", "issue_id.exists")
            else:
                result.fields["issue_id"] = issue_id

    return result
