"""Main application entry point."""

import argparse
import logging

from therethen.core.config import DEFAULT_TIME_PERIOD
from therethen.models.geo import GeoPoint, GeoRectangle, TimePeriod


def setup_logging(verbose: bool = False):
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )


def _rectangle(args) -> GeoRectangle:
    return GeoRectangle(
        top_left=GeoPoint(latitude=args.top_left[0], longitude=args.top_left[1]),
        bottom_right=GeoPoint(latitude=args.bottom_right[0], longitude=args.bottom_right[1]),
    )


def _period(args) -> TimePeriod:
    return TimePeriod(
        start_year=args.start_year,
        end_year=args.end_year,
        start_month=args.start_month,
        end_month=args.end_month,
    )


def cmd_areas(args):
    """Handle areas subcommand."""
    setup_logging(args.verbose)
    from therethen.cli import run_list_areas

    return run_list_areas(args.config)


def cmd_search(args):
    """Handle search subcommand."""
    setup_logging(args.verbose)
    from therethen.cli import run_search_areas

    return run_search_areas(args.config, _period(args))


def cmd_create_area(args):
    """Handle create-area subcommand."""
    setup_logging(args.verbose)
    from therethen.cli import run_create_area

    return run_create_area(args.config, _rectangle(args), _period(args), name=args.name)


def cmd_listen(args):
    """Handle listen subcommand."""
    setup_logging(args.verbose)
    from therethen.cli import run_listen

    return run_listen(args.config, seconds=args.seconds)


def cmd_wkt(args):
    """Handle wkt subcommand - print the WKT polygon for a rectangle."""
    from therethen.utils.wkt import encode_polygon

    print(encode_polygon(_rectangle(args)))
    return 0


def _add_period_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--start-year", type=int, default=DEFAULT_TIME_PERIOD[0], help="First year of the period")
    parser.add_argument("--end-year", type=int, default=DEFAULT_TIME_PERIOD[1], help="Last year of the period (inclusive)")
    parser.add_argument("--start-month", type=int, choices=range(1, 13), help="Optional first month (1-12)")
    parser.add_argument("--end-month", type=int, choices=range(1, 13), help="Optional last month (1-12)")


def _add_rectangle_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--top-left", nargs=2, type=float, required=True, metavar=("LAT", "LON"), help="First corner"
    )
    parser.add_argument(
        "--bottom-right", nargs=2, type=float, required=True, metavar=("LAT", "LON"), help="Opposite corner"
    )


def main():
    """Main application entry point."""
    parser = argparse.ArgumentParser(
        description="There Then - location and time scoped channels from the command line",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    areas_parser = subparsers.add_parser("areas", help="List all geographic areas")
    areas_parser.add_argument("config", help="YAML configuration file")
    areas_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    areas_parser.set_defaults(func=cmd_areas)

    search_parser = subparsers.add_parser("search", help="Search areas by time period")
    search_parser.add_argument("config", help="YAML configuration file")
    _add_period_arguments(search_parser)
    search_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    search_parser.set_defaults(func=cmd_search)

    create_parser = subparsers.add_parser("create-area", help="Create an area from a rectangle and time period")
    create_parser.add_argument("config", help="YAML configuration file")
    _add_rectangle_arguments(create_parser)
    _add_period_arguments(create_parser)
    create_parser.add_argument("--name", help="Area name")
    create_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    create_parser.set_defaults(func=cmd_create_area)

    listen_parser = subparsers.add_parser("listen", help="Print realtime messages as they arrive")
    listen_parser.add_argument("config", help="YAML configuration file")
    listen_parser.add_argument("--seconds", type=float, help="Stop listening after this many seconds")
    listen_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    listen_parser.set_defaults(func=cmd_listen)

    wkt_parser = subparsers.add_parser("wkt", help="Print the WKT polygon for a rectangle")
    _add_rectangle_arguments(wkt_parser)
    wkt_parser.set_defaults(func=cmd_wkt)

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    main()
