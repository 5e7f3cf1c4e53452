"""Tests for package initialization and basic imports."""


def test_package_imports():
    """Verify the main package can be imported."""
    import mineplack_todo

    assert mineplack_todo is not None


def test_version_defined():
    """Verify __version__ is set and follows semver format."""
    from mineplack_todo import __version__

    assert isinstance(__version__, str)
    parts = __version__.split(".")
    assert len(parts) == 3, f"Expected semver (X.Y.Z), got {__version__}"
    for part in parts:
        assert part.isdigit(), f"Version part '{part}' is not a digit in {__version__}"


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import mineplack_todo.cli
    import mineplack_todo.models
    import mineplack_todo.storage

    assert mineplack_todo.models is not None
    assert mineplack_todo.storage is not None
    assert mineplack_todo.cli is not None


def test_cli_group_exists():
    """Verify the Click CLI group can be imported."""
    from mineplack_todo.cli.main import cli

    assert callable(cli)
