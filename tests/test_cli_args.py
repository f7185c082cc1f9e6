"""Tests for CLI argument parsing."""

from unittest.mock import patch

import pytest


def test_areas_subcommand():
    """Test that 'areas' dispatches with the config file."""
    test_args = ["therethen", "areas", "config.yaml"]

    with patch("sys.argv", test_args), patch("therethen.cli.run_list_areas") as mock_run:
        from therethen.main import main

        mock_run.return_value = 0
        result = main()

        assert result == 0
        assert mock_run.call_args[0][0] == "config.yaml"


def test_create_area_subcommand():
    """Test that rectangle and period arguments are parsed into models."""
    test_args = [
        "therethen",
        "create-area",
        "config.yaml",
        "--top-left",
        "37.8",
        "-122.5",
        "--bottom-right",
        "37.7",
        "-122.3",
        "--start-year",
        "2020",
        "--end-year",
        "2024",
        "--start-month",
        "6",
        "--name",
        "Mission",
    ]

    with patch("sys.argv", test_args), patch("therethen.cli.run_create_area") as mock_run:
        from therethen.main import main

        mock_run.return_value = 0
        main()

        config, rectangle, period = mock_run.call_args[0]
        assert config == "config.yaml"
        assert rectangle.top_left.latitude == 37.8
        assert rectangle.bottom_right.longitude == -122.3
        assert period.start_year == 2020
        assert period.start_month == 6
        assert period.end_month is None
        assert mock_run.call_args[1]["name"] == "Mission"


def test_search_subcommand_rejects_bad_month():
    """Test that months outside 1-12 are rejected."""
    test_args = ["therethen", "search", "config.yaml", "--start-year", "2020", "--end-year", "2021", "--end-month", "13"]

    with patch("sys.argv", test_args):
        from therethen.main import main

        with pytest.raises(SystemExit):
            main()


def test_listen_subcommand():
    """Test that 'listen' passes the duration through."""
    test_args = ["therethen", "listen", "config.yaml", "--seconds", "2.5"]

    with patch("sys.argv", test_args), patch("therethen.cli.run_listen") as mock_run:
        from therethen.main import main

        mock_run.return_value = 0
        main()

        assert mock_run.call_args[1]["seconds"] == 2.5


def test_wkt_subcommand(capsys):
    """Test offline WKT encoding."""
    test_args = ["therethen", "wkt", "--top-left", "38", "-124", "--bottom-right", "36", "-120"]

    with patch("sys.argv", test_args):
        from therethen.main import main

        assert main() == 0

    assert capsys.readouterr().out.strip() == (
        "POLYGON((-124.0 38.0, -120.0 38.0, -120.0 36.0, -124.0 36.0, -124.0 38.0))"
    )


def test_no_subcommand_is_an_error():
    """Test that a subcommand is required."""
    with patch("sys.argv", ["therethen"]):
        from therethen.main import main

        with pytest.raises(SystemExit):
            main()


def test_search_subcommand_default_period():
    """Test that the period falls back to the default years."""
    test_args = ["therethen", "search", "config.yaml"]

    with patch("sys.argv", test_args), patch("therethen.cli.run_search_areas") as mock_run:
        from therethen.main import main

        mock_run.return_value = 0
        main()

        period = mock_run.call_args[0][1]
        assert (period.start_year, period.end_year) == (2020, 2024)
        assert period.start_month is None
