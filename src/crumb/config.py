"""Cookie defaults.

CookieDefaults is a frozen dataclass, immutable after creation and consumed by
``CookieFactory`` to fill in the attributes a caller leaves out.
"""

from dataclasses import dataclass

from crumb.cookie import SameSite, normalize_samesite
from crumb.errors import ConfigurationError, ValidationError


@dataclass(frozen=True, slots=True)
class CookieDefaults:
    """Attribute defaults for cookies built by a factory. Immutable after creation.

    Override what you need::

        defaults = CookieDefaults(domain="example.com", samesite="strict")
    """

    path: str | None = "/"
    domain: str | None = None
    secure: bool | None = True
    httponly: bool | None = True
    samesite: str | None = SameSite.LAX

    def __post_init__(self) -> None:
        for flag in ("secure", "httponly"):
            current = getattr(self, flag)
            if current is not None and not isinstance(current, bool):
                msg = f"CookieDefaults.{flag} must be a bool or None, got {current!r}"
                raise ConfigurationError(msg)
        try:
            samesite = normalize_samesite(self.samesite)
        except ValidationError as exc:
            msg = f"CookieDefaults.samesite is invalid: {exc}"
            raise ConfigurationError(msg) from exc
        object.__setattr__(self, "samesite", samesite)
