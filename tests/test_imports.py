"""
Basic import tests to verify package structure.

Run with: pytest tests/test_imports.py -v
"""

import pytest


class TestPackageImports:
    """Test that all package modules can be imported."""

    def test_import_main_package(self):
        """Main package should be importable."""
        import kuhn_cfr
        assert kuhn_cfr.__version__ == "0.1.0"

    def test_import_games(self):
        """Games layer should be importable."""
        import kuhn_cfr.games
        assert kuhn_cfr.games is not None

    def test_import_engine(self):
        """Engine layer should be importable."""
        import kuhn_cfr.engine
        assert kuhn_cfr.engine is not None

    def test_import_solvers(self):
        """Solvers layer should be importable."""
        import kuhn_cfr.solvers
        assert kuhn_cfr.solvers is not None

    def test_import_cli(self):
        """Command line entry point should be importable."""
        from kuhn_cfr.cli import cli, main
        assert callable(main)
        assert cli.name == "cli"


class TestDependencyAvailability:
    """Test that required dependencies are available."""

    def test_numpy_available(self):
        """NumPy should be installed."""
        import numpy as np
        assert np.__version__ is not None

    def test_click_available(self):
        """Click should be installed."""
        import click
        assert click.__version__ is not None
