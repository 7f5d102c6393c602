import logging

import pytest

from frozenuri import (
    Components,
    DefaultPortElision,
    HostRequired,
    InvalidUri,
    SchemeHook,
    SchemeHooks,
    SchemePolicyError,
    URIBuilder,
    default_hooks,
    parse,
)


def test_no_hooks_no_elision() -> None:
    assert str(parse("http://example.com:80/")) == "http://example.com:80/"


def test_default_port_elision() -> None:
    hooks = SchemeHooks([DefaultPortElision("http", 80)])
    assert str(parse("http://example.com:80/", hooks=hooks)) == "http://example.com/"
    assert str(parse("http://example.com:/", hooks=hooks)) == "http://example.com/"
    assert str(parse("http://example.com:080/", hooks=hooks)) == "http://example.com/"
    assert str(parse("http://example.com:8080/", hooks=hooks)) == "http://example.com:8080/"
    assert str(parse("https://example.com:80/", hooks=hooks)) == "https://example.com:80/"


def test_hooks_match_scheme_case_insensitively() -> None:
    hooks = SchemeHooks().register(DefaultPortElision("HTTPS", 443))
    assert "https" in hooks
    assert str(parse("HTTPS://h:443", hooks=hooks)) == "https://h"


def test_host_required_is_not_invalid_uri() -> None:
    hooks = default_hooks()
    with pytest.raises(SchemePolicyError) as info:
        parse("http:///path", hooks=hooks)
    assert not isinstance(info.value, InvalidUri)
    assert info.value.scheme == "http"
    with pytest.raises(SchemePolicyError):
        parse("http:relative", hooks=hooks)
    # Still fine as generic syntax.
    assert str(parse("http:///path")) == "http:///path"


def test_hooks_apply_to_build() -> None:
    builder = URIBuilder().with_scheme("wss").with_host("h").with_port(443)
    assert str(builder.build(hooks=default_hooks())) == "wss://h"
    with pytest.raises(SchemePolicyError):
        URIBuilder().with_scheme("https").build(hooks=SchemeHooks([HostRequired("https")]))


def test_custom_hook_runs_in_order() -> None:
    class LowerPath(SchemeHook):
        def apply(self, components: Components) -> Components:
            return components.replace(raw_path=components.raw_path.lower())

    hooks = SchemeHooks([LowerPath("x"), DefaultPortElision("x", 1)])
    assert str(parse("x://h:1/A/B", hooks=hooks)) == "x://h/a/b"
    assert repr(hooks.for_scheme("X")[0]) == "LowerPath('x')"


def test_hook_application_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="frozenuri"):
        parse("http://h:80/", hooks=default_hooks())
    assert any("DefaultPortElision('http', 80)" in record.getMessage() for record in caplog.records)
