"""Verify package imports work correctly."""


def test_import_mathinline() -> None:
    """Test that mathinline can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import mathinline

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert mathinline.__version__ == expected


def test_version_format() -> None:
    from mathinline import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_all_exports_resolve() -> None:
    import mathinline

    for name in mathinline.__all__:
        assert hasattr(mathinline, name), name
