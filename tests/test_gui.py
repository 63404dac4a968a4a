"""Tests for the dashboard's handling of refresh results."""

from unittest.mock import MagicMock

import pytest

from conftest import make_player
from gui import TFTDashboard


@pytest.fixture
def dashboard():
    # Skip Tk setup; only the refresh bookkeeping is exercised
    app = object.__new__(TFTDashboard)
    app.refresh_generation = 2
    app.players = [make_player("old")]
    app.refresh_btn = MagicMock()
    app.status_var = MagicMock()
    app.results_text = MagicMock()
    app._show_icons = MagicMock()
    app.render = MagicMock()
    return app


class TestRefreshResults:

    def test_current_snapshot_is_applied(self, dashboard):
        dashboard._apply_snapshot(2, [make_player("new")])

        assert [p.name for p in dashboard.players] == ["new"]
        dashboard.render.assert_called_once()
        dashboard.refresh_btn.state.assert_called_with(["!disabled"])

    def test_stale_snapshot_is_discarded(self, dashboard):
        dashboard._apply_snapshot(1, [make_player("new")])

        assert [p.name for p in dashboard.players] == ["old"]
        dashboard.render.assert_not_called()
        dashboard.refresh_btn.state.assert_not_called()

    def test_stale_error_is_discarded(self, dashboard):
        dashboard._show_error(1, "Error: timeout")

        dashboard.results_text.insert.assert_not_called()
        dashboard.status_var.set.assert_not_called()

    def test_current_error_is_shown(self, dashboard):
        dashboard._show_error(2, "Error: timeout")

        dashboard.results_text.insert.assert_called_once_with(1.0, "❌ Error: timeout")
        dashboard.status_var.set.assert_called_with("Error")

    def test_empty_snapshot_shows_no_data(self, dashboard):
        dashboard._apply_snapshot(2, [])

        dashboard.results_text.insert.assert_called_once_with(1.0, "❌ No player data found.")
        dashboard.render.assert_not_called()
