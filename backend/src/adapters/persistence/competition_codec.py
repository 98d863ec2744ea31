"""
JSON codec for the competition document.

The key names match documents written by earlier releases of the app
("competition_type", "sprint_5jump", "kugel_*", "wsprint_time"), so they are
mapped explicitly here rather than derived from the model attribute names.
Absent optional fields are written as null; on read, null and a missing key
both mean "never recorded".
"""

import json
import math
from typing import Any, Dict, List, Optional

from core.exceptions import DocumentParseError
from core.utils import LoggerFactory
from domain.models import (
    Competition, Competitor, DisciplineCategory,
    PoleVaultAttempt, JumpAttempt, ShotAttempt
)

logger = LoggerFactory.get_logger(__name__)

DEFAULT_INDENT = 2


# =============================================================================
# Encoding
# =============================================================================

def _competitor_to_dict(competitor: Competitor) -> Dict[str, Any]:
    def attempts(values, to_dict):
        return None if values is None else [to_dict(a) for a in values]

    return {
        'id': competitor.id,
        'name': competitor.name,
        'competition_type': competitor.discipline_category.value,
        'pole_vault_attempts': attempts(
            competitor.pole_vault_attempts,
            lambda a: {'height': a.height, 'successful': a.successful}
        ),
        'climbing_time': competitor.climbing_time,
        'sprint_time': competitor.sprint_time,
        'sprint_5jump': attempts(
            competitor.jump_attempts, lambda a: {'distance': a.distance}
        ),
        'kugel_distance': competitor.shot_distance,
        'wsprint_time': competitor.throw_sprint_time,
        'kugel_attempts': attempts(
            competitor.shot_attempts, lambda a: {'distance': a.distance}
        ),
    }


def to_document(competition: Competition) -> Dict[str, Any]:
    """Convert a competition into its JSON-ready dictionary form."""
    return {
        'name': competition.name,
        'competitors': [_competitor_to_dict(c) for c in competition.competitors],
    }


def encode(competition: Competition, indent: int = DEFAULT_INDENT) -> str:
    """
    Serialize a competition to deterministic, human-readable JSON text.

    Raises:
        ValueError: if a result value is NaN or infinite (not valid JSON).
    """
    return json.dumps(
        to_document(competition),
        indent=indent,
        ensure_ascii=False,
        allow_nan=False
    )


# =============================================================================
# Decoding
# =============================================================================

def _fail(location: str, cause: str) -> None:
    raise DocumentParseError(cause=cause, location=location)


def _require(data: Dict[str, Any], key: str, location: str) -> Any:
    if key not in data:
        _fail(location, f"missing required field '{key}'")
    return data[key]


def _as_object(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        _fail(location, f"expected an object, got {type(value).__name__}")
    return value


def _as_list(value: Any, location: str) -> List[Any]:
    if not isinstance(value, list):
        _fail(location, f"expected an array, got {type(value).__name__}")
    return value


def _as_str(value: Any, location: str) -> str:
    if not isinstance(value, str):
        _fail(location, f"expected a string, got {type(value).__name__}")
    return value


def _as_bool(value: Any, location: str) -> bool:
    if not isinstance(value, bool):
        _fail(location, f"expected a boolean, got {type(value).__name__}")
    return value


def _as_real(value: Any, location: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _fail(location, f"expected a number, got {type(value).__name__}")
    try:
        value = float(value)
    except OverflowError:
        _fail(location, "number out of range")
    if not math.isfinite(value):
        _fail(location, "expected a finite number")
    return value


def _optional_real(data: Dict[str, Any], key: str, location: str) -> Optional[float]:
    value = data.get(key)
    return None if value is None else _as_real(value, f"{location}.{key}")


def _optional_attempts(data: Dict[str, Any], key: str, location: str, parse) -> Optional[tuple]:
    value = data.get(key)
    if value is None:
        return None
    location = f"{location}.{key}"
    return tuple(
        parse(_as_object(item, f"{location}[{i}]"), f"{location}[{i}]")
        for i, item in enumerate(_as_list(value, location))
    )


def _pole_vault_attempt(data: Dict[str, Any], location: str) -> PoleVaultAttempt:
    return PoleVaultAttempt(
        height=_as_real(_require(data, 'height', location), f"{location}.height"),
        successful=_as_bool(_require(data, 'successful', location), f"{location}.successful"),
    )


def _distance(data: Dict[str, Any], location: str) -> float:
    return _as_real(_require(data, 'distance', location), f"{location}.distance")


def _competitor_from_dict(data: Dict[str, Any], location: str) -> Competitor:
    tag = _as_str(_require(data, 'competition_type', location), f"{location}.competition_type")
    try:
        category = DisciplineCategory(tag)
    except ValueError:
        _fail(
            f"{location}.competition_type",
            f"unknown competition type '{tag}', expected one of "
            f"{', '.join(c.value for c in DisciplineCategory)}"
        )

    competitor_id = _as_str(_require(data, 'id', location), f"{location}.id")
    if not competitor_id:
        _fail(f"{location}.id", "competitor id must not be empty")

    return Competitor(
        id=competitor_id,
        name=_as_str(_require(data, 'name', location), f"{location}.name"),
        discipline_category=category,
        pole_vault_attempts=_optional_attempts(
            data, 'pole_vault_attempts', location, _pole_vault_attempt
        ),
        sprint_time=_optional_real(data, 'sprint_time', location),
        climbing_time=_optional_real(data, 'climbing_time', location),
        jump_attempts=_optional_attempts(
            data, 'sprint_5jump', location,
            lambda item, loc: JumpAttempt(_distance(item, loc))
        ),
        shot_distance=_optional_real(data, 'kugel_distance', location),
        shot_attempts=_optional_attempts(
            data, 'kugel_attempts', location,
            lambda item, loc: ShotAttempt(_distance(item, loc))
        ),
        throw_sprint_time=_optional_real(data, 'wsprint_time', location),
    )


def from_document(data: Any) -> Competition:
    """Build a competition from an already-parsed JSON value."""
    data = _as_object(data, "$")
    name = _as_str(_require(data, 'name', "$"), "$.name")
    raw_competitors = _as_list(_require(data, 'competitors', "$"), "$.competitors")

    competitors = []
    seen_ids = set()
    for i, item in enumerate(raw_competitors):
        location = f"$.competitors[{i}]"
        competitor = _competitor_from_dict(_as_object(item, location), location)
        if competitor.id in seen_ids:
            _fail(f"{location}.id", f"duplicate competitor id '{competitor.id}'")
        seen_ids.add(competitor.id)
        competitors.append(competitor)

    return Competition(name=name, competitors=tuple(competitors))


def decode(document: str) -> Competition:
    """
    Parse JSON text produced by ``encode`` (or an earlier release).

    Raises:
        DocumentParseError: if the text is not valid JSON or does not match
            the competition schema.
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DocumentParseError(cause=f"invalid UTF-8: {e}", original_error=e) from e
    if not isinstance(document, str):
        raise DocumentParseError(cause=f"expected text, got {type(document).__name__}")

    try:
        data = json.loads(document)
    except json.JSONDecodeError as e:
        raise DocumentParseError(
            cause=e.msg, location=f"line {e.lineno} column {e.colno}", original_error=e
        ) from e
    except (ValueError, RecursionError) as e:
        raise DocumentParseError(cause=str(e) or type(e).__name__, original_error=e) from e

    competition = from_document(data)
    logger.debug(
        f"Decoded competition '{competition.name}' "
        f"with {len(competition.competitors)} competitors"
    )
    return competition
