"""Cookie value object and ``Set-Cookie`` serialization.

Cookie is a frozen dataclass: every attribute is validated and normalized in
``__post_init__``, and the chainable ``.with_*()`` API returns new instances
through ``dataclasses.replace`` so the same validation runs again.
"""

import re
from dataclasses import dataclass, replace
from urllib.parse import quote

from crumb._internal import clock
from crumb.errors import ValidationError
from crumb.expires import ExpiresLike, format_expires, resolve_expires

# RFC 6265 cookie-name: US-ASCII token characters, no separators or controls
_NAME_RE = re.compile(r"[A-Za-z0-9!#$%&'*+\-.^_`|~]+")

# One year and one second, so an expired cookie stays expired under clock skew
_EXPIRE_OFFSET = 31536001


class SameSite:
    """Allowed ``SameSite`` attribute values."""

    NONE = "None"
    LAX = "Lax"
    STRICT = "Strict"

    VALUES = (NONE, LAX, STRICT)


def normalize_samesite(samesite: str | None) -> str | None:
    """Title-case *samesite* and check it against ``SameSite.VALUES``.

    ``None`` and ``""`` normalize to ``None``. Raises ``ValidationError`` otherwise.
    """
    if samesite is None:
        return None
    if not isinstance(samesite, str):
        msg = f"The sameSite attribute must be a string, got `{type(samesite).__name__}`."
        raise ValidationError(msg, attribute="samesite", value=samesite)
    if not samesite:
        return None
    normalized = samesite.capitalize()
    if normalized not in SameSite.VALUES:
        options = ", ".join(f'"{item}"' for item in SameSite.VALUES)
        msg = f"The sameSite attribute `{normalized}` is not valid; must be one of ({options})."
        raise ValidationError(msg, attribute="samesite", value=samesite)
    return normalized


def validate_name(name: str) -> str:
    """Return *name* unchanged if it is a valid cookie-name token."""
    if not isinstance(name, str):
        msg = f"The cookie name must be a string, got `{type(name).__name__}`."
        raise ValidationError(msg, attribute="name", value=name)
    if not name:
        msg = "The cookie name cannot be empty."
        raise ValidationError(msg, attribute="name", value=name)
    if not _NAME_RE.fullmatch(name):
        msg = (
            f"The cookie name `{name}` contains invalid characters; must contain any US-ASCII"
            " characters, except control and separator characters, spaces, or tabs."
        )
        raise ValidationError(msg, attribute="name", value=name)
    return name


def _check_optional(attribute: str, value: object, kind: type) -> None:
    if value is not None and not isinstance(value, kind):
        msg = (
            f"The cookie {attribute} must be {kind.__name__} or None, "
            f"got `{type(value).__name__}`."
        )
        raise ValidationError(msg, attribute=attribute, value=value)


@dataclass(frozen=True, slots=True)
class Cookie:
    """An HTTP cookie, immutable after construction.

    ``expires`` accepts anything ``resolve_expires`` understands and is
    stored as a Unix timestamp (``0`` for a session cookie)::

        cookie = Cookie("sid", "abc", "+1 day", domain="example.com")
        header = str(cookie.with_samesite("strict"))
    """

    name: str
    value: str = ""
    expires: int = 0
    domain: str | None = None
    path: str | None = "/"
    secure: bool | None = True
    httponly: bool | None = True
    samesite: str | None = SameSite.LAX

    def __post_init__(self) -> None:
        validate_name(self.name)
        if not isinstance(self.value, str):
            msg = f"The cookie value must be a string, got `{type(self.value).__name__}`."
            raise ValidationError(msg, attribute="value", value=self.value)
        _check_optional("domain", self.domain, str)
        _check_optional("path", self.path, str)
        _check_optional("secure", self.secure, bool)
        _check_optional("httponly", self.httponly, bool)
        object.__setattr__(self, "expires", resolve_expires(self.expires))
        object.__setattr__(self, "domain", self.domain or None)
        object.__setattr__(self, "path", self.path or None)
        object.__setattr__(self, "samesite", normalize_samesite(self.samesite))

    # -- Expiry --

    def is_session(self) -> bool:
        """True when the cookie has no expiry and lives for the browser session."""
        return self.expires == 0

    def max_age(self, now: int | None = None) -> int:
        """Seconds until expiry, never negative."""
        now = clock.now() if now is None else now
        return max(0, self.expires - now)

    def is_expired(self, now: int | None = None) -> bool:
        if self.is_session():
            return False
        now = clock.now() if now is None else now
        return self.expires < now

    def expire(self, now: int | None = None) -> Cookie:
        """Return a copy that has expired a year ago, or self if already expired."""
        now = clock.now() if now is None else now
        if self.is_expired(now):
            return self
        return replace(self, expires=now - _EXPIRE_OFFSET)

    def with_expires(self, expires: ExpiresLike = None, now: int | None = None) -> Cookie:
        resolved = resolve_expires(expires, now=now)
        if resolved == self.expires:
            return self
        return replace(self, expires=resolved)

    # -- Chainable transformations --

    def with_value(self, value: str) -> Cookie:
        if value == self.value:
            return self
        return replace(self, value=value)

    def with_domain(self, domain: str | None) -> Cookie:
        if (None if domain == "" else domain) == self.domain:
            return self
        return replace(self, domain=domain)

    def with_path(self, path: str | None) -> Cookie:
        if (None if path == "" else path) == self.path:
            return self
        return replace(self, path=path)

    def with_secure(self, secure: bool = True) -> Cookie:
        if secure is self.secure:
            return self
        return replace(self, secure=secure)

    def with_httponly(self, httponly: bool = True) -> Cookie:
        if httponly is self.httponly:
            return self
        return replace(self, httponly=httponly)

    def with_samesite(self, samesite: str | None) -> Cookie:
        normalized = normalize_samesite(samesite)
        if normalized == self.samesite:
            return self
        return replace(self, samesite=normalized)

    # -- Flags --

    @property
    def is_secure(self) -> bool:
        return bool(self.secure)

    @property
    def is_httponly(self) -> bool:
        return bool(self.httponly)

    # -- Serialization --

    def to_header_value(self, now: int | None = None) -> str:
        """Serialize to a ``Set-Cookie`` header value string.

        Attribute order is fixed: Expires, Max-Age, Domain, Path, Secure,
        HttpOnly, SameSite.
        """
        parts = [f"{self.name}={quote(self.value, safe='')}"]
        if not self.is_session():
            parts.append(f"Expires={format_expires(self.expires)}")
            parts.append(f"Max-Age={self.max_age(now)}")
        if self.domain is not None:
            parts.append(f"Domain={self.domain}")
        if self.path is not None:
            parts.append(f"Path={self.path}")
        if self.secure is True:
            parts.append("Secure")
        if self.httponly is True:
            parts.append("HttpOnly")
        if self.samesite is not None:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)

    def __str__(self) -> str:
        return self.to_header_value()
