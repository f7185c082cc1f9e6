"""CLI mode for talking to the backend with a YAML config."""

import asyncio
import logging
from pathlib import Path

import yaml

from therethen.core.api_client import APIClient
from therethen.core.areas import build_area_request
from therethen.core.config import DEFAULT_AREA_NAME, ClientConfig
from therethen.core.errors import APIError
from therethen.core.session import AuthSession
from therethen.core.stream_client import StreamClient
from therethen.models.entities import GeographicArea
from therethen.models.geo import GeoRectangle, TimePeriod

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> dict:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file) as f:
        config = yaml.safe_load(f)

    return config or {}


def validate_config(config: dict) -> None:
    """
    Validate configuration using Pydantic schema validation.

    Args:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    from pydantic import ValidationError

    from therethen.models.config_schema import ThereThenConfiguration

    try:
        ThereThenConfiguration.model_validate(config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed:\n{e}") from e


def read_client_config(config_path: str) -> ClientConfig:
    """Load, validate and parse a config file."""
    logger.info(f"Loading configuration from: {config_path}")
    config = load_config(config_path)
    validate_config(config)
    return ClientConfig.from_dict(config)


def format_area(area: GeographicArea) -> str:
    """One-line summary of an area."""
    period = TimePeriod(area.start_year, area.end_year, area.start_month, area.end_month)
    return f"{area.id}  {area.name or '(unnamed)'}  [{period.display_text}]  {area.geometry_wkt or ''}"


def _run(config_path: str, operation) -> int:
    """Run an async operation against the configured backend and map failures to an exit code."""
    try:
        client_config = read_client_config(config_path)
        asyncio.run(operation(client_config))
        return 0
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except APIError as e:
        logger.error(f"Request failed: {e}")
        return 1


def run_list_areas(config_path: str) -> int:
    """
    List every area known to the backend.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Exit code (0 for success, 1 for error)
    """

    async def operation(config: ClientConfig):
        async with APIClient(config) as client:
            areas = await client.get_all_areas()
        logger.info(f"Found {len(areas)} area(s)")
        for area in areas:
            print(format_area(area))

    return _run(config_path, operation)


def run_search_areas(config_path: str, period: TimePeriod) -> int:
    """
    List areas overlapping a time period.

    Args:
        config_path: Path to YAML configuration file
        period: Time period to search

    Returns:
        Exit code (0 for success, 1 for error)
    """

    async def operation(config: ClientConfig):
        async with APIClient(config) as client:
            areas = await client.search_areas_by_time(period)
        logger.info(f"Found {len(areas)} area(s) for {period.display_text}")
        for area in areas:
            print(format_area(area))

    return _run(config_path, operation)


def run_create_area(config_path: str, rectangle: GeoRectangle, period: TimePeriod, name: str | None = None) -> int:
    """
    Create an area from a rectangle and a time period.

    Args:
        config_path: Path to YAML configuration file
        rectangle: Area bounds
        period: Time period attached to the area
        name: Optional area name

    Returns:
        Exit code (0 for success, 1 for error)
    """

    async def operation(config: ClientConfig):
        request = build_area_request(rectangle, period, name=name or DEFAULT_AREA_NAME)
        async with APIClient(config) as client:
            area = await client.create_geographic_area(request)
        logger.info(f"Created area {area.id}")
        print(format_area(area))

    return _run(config_path, operation)


def run_listen(config_path: str, seconds: float | None = None) -> int:
    """
    Print realtime messages as they arrive.

    Args:
        config_path: Path to YAML configuration file
        seconds: Stop after this many seconds; listen until the connection ends if None

    Returns:
        Exit code (0 for success, 1 if the stream could not be opened)
    """
    connected = True

    async def operation(config: ClientConfig):
        nonlocal connected
        client = StreamClient(config.stream_url, on_message=print, auth=AuthSession(config.token))
        connected = await client.connect()
        if not connected:
            return

        try:
            if seconds is None:
                async for _ in client.messages():
                    pass
            else:
                await asyncio.sleep(seconds)
        finally:
            await client.disconnect()

    exit_code = _run(config_path, operation)
    return exit_code if connected else 1
