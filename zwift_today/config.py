"""Configuration for zwift_today."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from dotenv import dotenv_values

from .exceptions import ConfigurationError

# API structure
BASE_URL = 'https://intervals.icu'
EVENTS_PATH = '/api/v1/athlete/{athlete_id}/events?oldest={oldest}&newest={newest}'
DOWNLOAD_PATH = '/api/v1/athlete/{athlete_id}/events/{event_id}/download{ext}'
AUTH_USERNAME = 'API_KEY'

# Request behavior
DEFAULT_TIMEOUT = 30.0  # seconds
DOWNLOAD_METHODS = ('GET', 'POST')
DEFAULT_DOWNLOAD_METHOD = 'GET'

# User agent
USER_AGENT = 'ZwiftTodayBot/1.0 (intervals.icu workout fetcher)'

# Activity types treated as cycling (exact, case-sensitive match)
RIDE_TYPES = ('Ride', 'VirtualRide')

# Workout file formats offered by the download endpoint
FILE_FORMATS = ('zwo', 'mrc', 'erg', 'fit')
DEFAULT_FORMAT = 'zwo'
DEFAULT_OUTPUT_NAME = 'today'

# Environment variables
ENV_TOKEN = 'INTERVALS_TOKEN'
ENV_ATHLETE_ID = 'INTERVALS_ID'
ENV_OUTPUT = 'INTERVALS_OUTPUT'
ENV_BASE_URL = 'INTERVALS_BASE_URL'
ENV_TIMEOUT = 'INTERVALS_TIMEOUT'
ENV_RIDE_TYPES = 'INTERVALS_RIDE_TYPES'
DEFAULT_ENV_FILE = Path('.env')

MISSING_MESSAGES = {
    ENV_TOKEN: f"Please set your {ENV_TOKEN} environment variable to your API Key",
    ENV_ATHLETE_ID: f"Please set the {ENV_ATHLETE_ID} environment variable to your Athlete ID",
}


@dataclass(frozen=True)
class Settings:
    """Immutable run configuration, resolved once at startup."""
    token: str
    athlete_id: str
    output_path: Path
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    ride_types: Tuple[str, ...] = RIDE_TYPES
    file_format: str = DEFAULT_FORMAT
    download_method: str = DEFAULT_DOWNLOAD_METHOD

    @property
    def extension(self) -> str:
        """Suffix appended to the download endpoint, e.g. '.zwo'."""
        return f".{self.file_format}"


def read_environment(env_file: Optional[Path] = DEFAULT_ENV_FILE) -> Dict[str, str]:
    """Merge an optional dotenv file under the process environment.

    Values already present in the process environment win. os.environ
    itself is never modified.
    """
    merged: Dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    merged.update(os.environ)
    return merged


def _require(environ: Mapping[str, str], name: str) -> str:
    value = (environ.get(name) or '').strip()
    if not value:
        raise ConfigurationError(MISSING_MESSAGES[name])
    return value


def _parse_timeout(raw) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid timeout {raw!r}: expected a number of seconds") from e
    if timeout <= 0:
        raise ConfigurationError(f"Invalid timeout {raw!r}: must be greater than zero")
    return timeout


def _parse_ride_types(raw: str) -> Tuple[str, ...]:
    types = tuple(t.strip() for t in raw.split(',') if t.strip())
    if not types:
        raise ConfigurationError(f"{ENV_RIDE_TYPES} does not name any activity type")
    return types


def load_settings(
    environ: Mapping[str, str],
    output_path: Optional[Path] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    ride_types: Optional[Tuple[str, ...]] = None,
    file_format: str = DEFAULT_FORMAT,
    download_method: str = DEFAULT_DOWNLOAD_METHOD,
) -> Settings:
    """Build Settings from environment values and command line overrides.

    Explicit arguments take precedence over the environment, which takes
    precedence over the defaults above.

    Args:
        environ: Environment mapping (usually from read_environment())
        output_path: Where to write the workout file
        base_url: API origin
        timeout: Request timeout in seconds
        ride_types: Activity types that count as cycling
        file_format: Workout file format to request
        download_method: HTTP method for the download call

    Returns:
        Resolved Settings

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    token = _require(environ, ENV_TOKEN)
    athlete_id = _require(environ, ENV_ATHLETE_ID)

    if file_format not in FILE_FORMATS:
        raise ConfigurationError(f"Unsupported workout format: {file_format}")

    method = download_method.upper()
    if method not in DOWNLOAD_METHODS:
        raise ConfigurationError(f"Unsupported download method: {download_method}")

    if output_path is None:
        env_output = (environ.get(ENV_OUTPUT) or '').strip()
        output_path = Path(env_output) if env_output else Path(f"{DEFAULT_OUTPUT_NAME}.{file_format}")

    if base_url is None:
        base_url = (environ.get(ENV_BASE_URL) or '').strip() or BASE_URL

    if timeout is None:
        timeout = environ.get(ENV_TIMEOUT) or DEFAULT_TIMEOUT

    if ride_types is None:
        env_types = environ.get(ENV_RIDE_TYPES)
        ride_types = _parse_ride_types(env_types) if env_types else RIDE_TYPES

    return Settings(
        token=token,
        athlete_id=athlete_id,
        output_path=Path(output_path).expanduser(),
        base_url=base_url.rstrip('/'),
        timeout=_parse_timeout(timeout),
        ride_types=tuple(ride_types),
        file_format=file_format,
        download_method=method,
    )
