"""CookieFactory: builds cookies with a shared set of defaults."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from crumb.config import CookieDefaults
from crumb.cookie import Cookie
from crumb.expires import ExpiresLike
from crumb.parser import parse_set_cookie


class _Unset(Enum):
    UNSET = "UNSET"


# Marks a keyword left out of create(); None is a real attribute value
_UNSET: Final = _Unset.UNSET


@dataclass(frozen=True, slots=True)
class CookieFactory:
    """Create cookies from attributes or from a raw ``Set-Cookie`` header.

    Keyword attributes left out of ``create()`` come from ``defaults``::

        factory = CookieFactory(CookieDefaults(domain="example.com"))
        cookie = factory.create("sid", "abc", "+1 hour")
    """

    defaults: CookieDefaults = field(default_factory=CookieDefaults)

    def create(
        self,
        name: str,
        value: str = "",
        expires: ExpiresLike = None,
        *,
        domain: str | None | _Unset = _UNSET,
        path: str | None | _Unset = _UNSET,
        secure: bool | None | _Unset = _UNSET,
        httponly: bool | None | _Unset = _UNSET,
        samesite: str | None | _Unset = _UNSET,
    ) -> Cookie:
        """Build a Cookie, filling omitted keyword attributes from ``defaults``."""
        return Cookie(
            name,
            value,
            expires,
            self.defaults.domain if domain is _UNSET else domain,
            self.defaults.path if path is _UNSET else path,
            self.defaults.secure if secure is _UNSET else secure,
            self.defaults.httponly if httponly is _UNSET else httponly,
            self.defaults.samesite if samesite is _UNSET else samesite,
        )

    def create_from_string(self, raw: str, *, now: int | None = None) -> Cookie:
        """Parse a raw ``Set-Cookie`` header value; see ``parse_set_cookie``."""
        return parse_set_cookie(raw, now=now)
