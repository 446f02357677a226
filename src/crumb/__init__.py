"""Crumb — immutable HTTP cookies and ``Set-Cookie`` parsing.

Basic usage::

    from crumb import Cookie, parse_set_cookie

    cookie = Cookie("sid", "abc123", "+1 day", domain="example.com")
    header = str(cookie)  # sid=abc123; Expires=...; Max-Age=86400; ...

    parsed = parse_set_cookie("sid=abc123; Path=/; Secure; HttpOnly")
    logged_out = parsed.expire()
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Cookie",
    "CookieDefaults",
    "CookieFactory",
    "CrumbError",
    "ParseError",
    "SameSite",
    "ValidationError",
    "parse_set_cookie",
    "resolve_expires",
]

_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "crumb.errors",
    "Cookie": "crumb.cookie",
    "CookieDefaults": "crumb.config",
    "CookieFactory": "crumb.factory",
    "CrumbError": "crumb.errors",
    "ParseError": "crumb.errors",
    "SameSite": "crumb.cookie",
    "ValidationError": "crumb.errors",
    "parse_set_cookie": "crumb.parser",
    "resolve_expires": "crumb.expires",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import crumb`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
