import pytest

from frozenuri import (
    ABSENT,
    EMPTY,
    GrammarViolation,
    InvalidUri,
    MalformedEncoding,
    URIError,
    parse,
    parse_components,
    parse_relative_ref,
    parse_uri,
)


def test_components() -> None:
    uri = parse("foo://user:pw@example.com:8042/over/there?name=ferret#nose")
    assert uri.scheme == "foo"
    assert uri.authority == "user:pw@example.com:8042"
    assert uri.userinfo == "user:pw"
    assert uri.host == "example.com"
    assert uri.port == 8042
    assert uri.path == "/over/there"
    assert uri.query == "name=ferret"
    assert uri.fragment == "nose"


def test_absent_versus_empty_authority() -> None:
    assert parse("scheme:path").authority is ABSENT
    assert parse("scheme:path").host is ABSENT
    assert parse("scheme:///path").authority == ""
    assert parse("scheme:///path").host == ""
    assert parse("scheme:path") != parse("scheme:///path")


def test_absent_versus_empty_port() -> None:
    assert parse("s://h/").port is ABSENT
    assert parse("s://h:/").port is EMPTY
    assert parse("s://h:/").canonical_string() == "s://h:/"
    assert parse("s://h:/") != parse("s://h/")


def test_absent_versus_empty_query_and_fragment() -> None:
    assert parse("s:p").raw_query is None
    assert parse("s:p?").raw_query == ""
    assert parse("s:p#").raw_fragment == ""
    assert parse("s:p?#").canonical_string() == "s:p?#"
    assert parse("s:p?").query == ""


def test_scheme_case_is_folded() -> None:
    assert parse("HTTP://x").scheme == "http"
    assert parse_components("HTTP://x").raw_scheme == "HTTP"


def test_userinfo_and_port_split_on_last_delimiters() -> None:
    uri = parse("s://a:b:c@[::1]:80")
    assert uri.userinfo == "a:b:c"
    assert uri.host == "[::1]"
    assert uri.port == 80
    assert parse("s://[::1]").port is ABSENT


def test_relative_references() -> None:
    assert parse("//g").authority == "g"
    assert parse("//g").scheme == ""
    assert parse("?y").query == "y"
    assert parse("#s").fragment == "s"
    assert parse("").canonical_string() == ""
    assert parse("g;x=1/../y").path == "y"
    assert parse("../g").path == "../g"
    assert parse("../g").is_relative_reference


def test_invalid_scheme() -> None:
    with pytest.raises(InvalidUri) as info:
        parse("1http://x")
    assert isinstance(info.value.cause, GrammarViolation)
    assert info.value.component == "scheme"
    assert info.value.offset == 0


def test_malformed_encoding() -> None:
    with pytest.raises(InvalidUri) as info:
        parse("http://x/%zz")
    assert isinstance(info.value.cause, MalformedEncoding)
    assert isinstance(info.value.__cause__, MalformedEncoding)
    assert info.value.component == "path"
    assert info.value.offset == 9


@pytest.mark.parametrize(
    "data, component, offset",
    [
        ("http://us er@x/", "userinfo", 9),
        ("http://exa mple/", "host", 10),
        ("http://x:8o/", "port", 10),
        ("http://x/a b", "path", 10),
        ("http://x/?a b", "query", 11),
        ("http://x/#a#b", "fragment", 11),
        ("http://[::1/", "host", 7),
    ],
)
def test_component_errors(data: str, component: str, offset: int) -> None:
    with pytest.raises(InvalidUri) as info:
        parse(data)
    assert info.value.component == component
    assert info.value.offset == offset


def test_colon_in_first_segment() -> None:
    assert parse("a:b/c").scheme == "a"
    with pytest.raises(InvalidUri) as info:
        parse_relative_ref("a:b/c")
    assert info.value.component == "path"
    assert parse_relative_ref("./a:b/c").path == "./a:b/c"
    with pytest.raises(InvalidUri):
        parse(":foo")


def test_double_slash_path_without_authority() -> None:
    # "//" here would be read as an authority, so it can only come from a path after a scheme.
    assert parse("s:/.//p").path == "/.//p"
    assert parse("s:/.//p").authority is ABSENT


def test_parse_uri_requires_scheme() -> None:
    assert parse_uri("s:x").scheme == "s"
    with pytest.raises(InvalidUri) as info:
        parse_uri("//host/path")
    assert info.value.component == "scheme"


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        parse("http://x/%")
    with pytest.raises(URIError):
        parse("http://x/%")


def test_non_ascii_is_rejected() -> None:
    with pytest.raises(InvalidUri):
        parse("http://example.com/ῥόδος")


@pytest.mark.parametrize(
    "data",
    [
        "HTTP://Example.COM:8080/a/./b/../c?Q=%7e#F%2f",
        "s://[FE80::1%25ETH0]/",
        "mailto:John.Doe@example.com",
        "urn:oasis:names:specification:docbook:dtd:xml:4.1.2",
        "tel:+1-816-555-1212",
        "ldap://[2001:db8::7]/c=GB?objectClass?one",
        "news:comp.infosystems.www.servers.unix",
        "file:///etc/hosts",
        "s://u@:/",
        "a/../../b",
        "./a:b",
        "s:/.//x",
        ".",
        "..",
        "a/..//b",
        "",
    ],
)
def test_canonical_string_is_idempotent(data: str) -> None:
    once = parse(data).canonical_string()
    assert parse(once).canonical_string() == once
    assert parse(once) == parse(data)
