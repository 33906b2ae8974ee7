"""Verify package imports work correctly."""


def test_import_tinta() -> None:
    """Test that tinta can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import tinta

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert tinta.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from tinta import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_exist() -> None:
    """Everything in __all__ is importable."""
    import tinta

    for name in tinta.__all__:
        assert hasattr(tinta, name), name


def test_highlighting_imports_first() -> None:
    """Importing a collaborator module first does not hit an import cycle."""
    import importlib

    module = importlib.import_module("tinta.highlighting")
    assert callable(module.set_highlighter)
