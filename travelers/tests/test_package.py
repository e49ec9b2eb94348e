"""Basic package tests for Travelers."""

import pytest


def test_package_imports():
    """Test that the package can be imported."""
    import travelers
    assert travelers.__version__ == "0.1.0"


def test_core_imports():
    """Test that core subpackage can be imported."""
    import travelers.core


def test_generation_imports():
    """Test that generation subpackage can be imported."""
    import travelers.generation


def test_engine_imports():
    """Test that engine subpackage can be imported."""
    import travelers.engine


def test_observe_imports():
    """Test that observe subpackage can be imported."""
    import travelers.observe


def test_tui_imports():
    """Test that the TUI can be imported."""
    from travelers.observe.tui import TravelersTUI
    assert TravelersTUI.CSS_PATH == "theme.tcss"


def test_bundled_schematic_is_packaged():
    """The default schematic ships inside the package."""
    from travelers.core.schematic import default_schematic_path
    assert default_schematic_path().is_file()
