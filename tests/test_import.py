"""Verify package imports work correctly."""


def test_import_blogmark() -> None:
    """Test that blogmark can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import blogmark

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert blogmark.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from blogmark import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    """Every name in __all__ is importable from the package."""
    import blogmark

    for name in blogmark.__all__:
        assert hasattr(blogmark, name), name
