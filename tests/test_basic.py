import frozenuri


def test_version() -> None:
    """Test that version is defined."""
    assert frozenuri.__version__ == "0.1"


def test_exports() -> None:
    """Test that main exports are available."""
    for name in ("parse", "parse_uri", "parse_relative_ref", "resolve", "join", "URI", "URIBuilder", "ABSENT", "EMPTY"):
        assert hasattr(frozenuri, name)
