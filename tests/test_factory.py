"""Tests for crumb.factory — CookieFactory."""

import pytest

from crumb.config import CookieDefaults
from crumb.cookie import Cookie
from crumb.factory import CookieFactory

NOW = 1_700_000_000


class TestCreate:
    def test_create_matches_constructor(self) -> None:
        cookie = CookieFactory().create("sessionId", "42")

        assert isinstance(cookie, Cookie)
        assert cookie == Cookie("sessionId", "42")

    def test_create_with_expires(self) -> None:
        cookie = CookieFactory().create("id", "v", NOW)
        assert cookie.expires == NOW

    def test_defaults_applied(self) -> None:
        factory = CookieFactory(CookieDefaults(domain="example.com", path="/app", secure=False, samesite="strict"))
        cookie = factory.create("id", "v")

        assert cookie.domain == "example.com"
        assert cookie.path == "/app"
        assert cookie.secure is False
        assert cookie.httponly is True
        assert cookie.samesite == "Strict"

    def test_explicit_attributes_override_defaults(self) -> None:
        factory = CookieFactory(CookieDefaults(domain="example.com"))
        cookie = factory.create("id", domain=None, path=None, samesite=None)

        assert cookie.domain is None
        assert cookie.path is None
        assert cookie.samesite is None

    def test_unknown_attribute_raises(self) -> None:
        with pytest.raises(TypeError, match="max_age"):
            CookieFactory().create("id", max_age=10)


class TestCreateFromString:
    def test_create_from_string(self) -> None:
        cookie = CookieFactory().create_from_string(
            "sessionId=e8bb43229de9; Expires=Wed, 21 Oct 2015 07:28:00 GMT; "
            "Domain=foo.example.com; Path=/; Secure; HttpOnly"
        )

        assert cookie.name == "sessionId"
        assert cookie.value == "e8bb43229de9"
        assert cookie.expires == 1_445_412_480
        assert cookie.domain == "foo.example.com"
        assert cookie.path == "/"
        assert cookie.is_secure
        assert cookie.is_httponly

    def test_factory_defaults_not_applied_to_parsed(self) -> None:
        factory = CookieFactory(CookieDefaults(domain="example.com"))
        assert factory.create_from_string("id=v").domain is None

    def test_now_forwarded(self) -> None:
        assert CookieFactory().create_from_string("id=v; Max-Age=10", now=NOW).expires == NOW + 10
