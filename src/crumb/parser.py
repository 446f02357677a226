"""Parse a raw ``Set-Cookie`` header value into a Cookie.

Only a single cookie is parsed. Attributes the header does not carry are
passed to ``Cookie`` as ``None``, so the result reflects exactly what was
on the wire rather than the constructor's convenience defaults.
"""

import logging
import re
from typing import Any
from urllib.parse import unquote_plus

from crumb._internal import clock
from crumb.cookie import Cookie
from crumb.errors import ParseError, ValidationError
from crumb.expires import resolve_expires

logger = logging.getLogger("crumb.parser")

_SEGMENT_SPLIT_RE = re.compile(r"\s*;\s*")
_LEADING_INTEGER_RE = re.compile(r"[+-]?\d+")

_VALUED_ATTRIBUTES = frozenset({"expires", "domain", "path", "samesite"})
_FLAG_ATTRIBUTES = frozenset({"secure", "httponly"})


def parse_set_cookie(raw: str, *, now: int | None = None) -> Cookie:
    """Parse *raw* (the value of one ``Set-Cookie`` header) into a Cookie.

    ``Max-Age`` is converted to an absolute ``expires`` using *now*. It
    shares the ``expires`` slot with the ``Expires`` attribute, so whichever
    of the two appears last in the header wins.

    A ``Max-Age`` such as ``3600.0`` counts by its leading integer; one with
    no leading integer is ignored.

    Raises ``ParseError`` for empty input or any attribute that fails
    Cookie validation.
    """
    segments = [segment for segment in _SEGMENT_SPLIT_RE.split(raw.strip()) if segment]
    if not segments:
        msg = f"The raw value of the `Set-Cookie` header `{raw}` could not be parsed."
        raise ParseError(msg, raw=raw)

    name, _, value = segments[0].partition("=")
    attributes: dict[str, Any] = {}

    for segment in segments[1:]:
        key, sep, attr_value = segment.partition("=")
        key = key.strip().lower()
        if key in _VALUED_ATTRIBUTES:
            attributes[key] = attr_value if sep else None
        elif key in _FLAG_ATTRIBUTES:
            attributes[key] = True
        elif key == "max-age":
            max_age = _LEADING_INTEGER_RE.match(attr_value.strip())
            if max_age is None:
                logger.debug("Ignoring non-numeric Max-Age %r", attr_value)
                continue
            attributes["expires"] = (clock.now() if now is None else now) + int(max_age.group())
        else:
            logger.debug("Ignoring unknown Set-Cookie attribute %r", key)

    try:
        return Cookie(
            name,
            unquote_plus(value),
            resolve_expires(attributes.get("expires"), now=now),
            attributes.get("domain"),
            attributes.get("path"),
            attributes.get("secure"),
            attributes.get("httponly"),
            attributes.get("samesite"),
        )
    except ValidationError as exc:
        raise ParseError(str(exc), raw=raw, attribute=exc.attribute, value=exc.value) from exc

