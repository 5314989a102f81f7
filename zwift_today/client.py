"""intervals.icu API client for zwift_today."""

import logging
from typing import Callable, List, Optional
from urllib.parse import urlsplit

import requests
from requests.auth import HTTPBasicAuth

from .config import AUTH_USERNAME, DOWNLOAD_PATH, EVENTS_PATH, USER_AGENT, Settings
from .exceptions import ConfigurationError, HTTPStatusError, InvalidURLError, NetworkError
from .parser import parse_events, select_workout
from .workout import SelectedWorkout, Workout

logger = logging.getLogger(__name__)


class IntervalsClient:
    """Authenticated client for the intervals.icu calendar endpoints."""

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        progress_callback: Optional[Callable[[str], None]] = None
    ):
        """Initialize the client.

        Args:
            settings: Resolved run configuration
            session: Session to reuse; a new one is created when omitted
            progress_callback: Optional callback for progress updates
        """
        if not settings.token:
            raise ConfigurationError("Refusing to build requests without an API token")
        self.settings = settings
        self.progress_callback = progress_callback or (lambda x: None)
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with default headers."""
        session = requests.Session()
        session.headers.update({
            'User-Agent': USER_AGENT,
            'Accept': '*/*',
        })
        return session

    @property
    def auth(self) -> HTTPBasicAuth:
        """Basic auth with the literal username API_KEY and the token as password."""
        return HTTPBasicAuth(AUTH_USERNAME, self.settings.token)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'IntervalsClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build_url(self, endpoint: str) -> str:
        """Join the base URL and an endpoint path, failing on invalid results.

        Raises:
            InvalidURLError: If the result is not an absolute http(s) URL
        """
        url = f"{self.settings.base_url}{endpoint}"
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise InvalidURLError(f"Failed to parse URI {url!r}: {e}") from e

        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise InvalidURLError(f"Failed to parse URI {url!r}: not an absolute http(s) URL")
        if any(c.isspace() for c in url):
            raise InvalidURLError(f"Failed to parse URI {url!r}: contains whitespace")
        return url

    def _request(self, method: str, endpoint: str) -> requests.Response:
        """Send one authenticated request and insist on 200 OK.

        Raises:
            InvalidURLError: If the endpoint does not form a valid URL
            NetworkError: If the request fails
            HTTPStatusError: If the response status is not 200
        """
        url = self.build_url(endpoint)
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                auth=self.auth,
                timeout=self.settings.timeout,
            )

        except (requests.exceptions.InvalidURL,
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as e:
            raise InvalidURLError(f"Failed to parse URI {url!r}: {e}") from e

        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout requesting {url}: {e}")
            raise NetworkError(f"Timeout after {self.settings.timeout}s requesting {url}") from e

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise NetworkError(f"Failed to request {url}: {e}") from e

        logger.debug(f"HTTP {response.status_code} from {url}")
        if response.status_code != 200:
            raise HTTPStatusError(response.status_code, url)
        return response

    def events_endpoint(self, day: str) -> str:
        return EVENTS_PATH.format(athlete_id=self.settings.athlete_id, oldest=day, newest=day)

    def download_endpoint(self, event_id: int) -> str:
        return DOWNLOAD_PATH.format(
            athlete_id=self.settings.athlete_id,
            event_id=event_id,
            ext=self.settings.extension,
        )

    def list_events(self, day: str) -> List[Workout]:
        """Fetch the events scheduled on a single day.

        Args:
            day: Date as YYYY-MM-DD, used for both ends of the range

        Returns:
            Parsed events in API order
        """
        endpoint = self.events_endpoint(day)
        self.progress_callback(f"Request URI: {self.build_url(endpoint)}")
        response = self._request('GET', endpoint)
        return parse_events(response.text)

    def find_workout(self, day: str) -> Optional[SelectedWorkout]:
        """Return the first cycling workout scheduled on day, or None."""
        return select_workout(self.list_events(day), self.settings.ride_types)

    def download_workout(self, event_id: int) -> bytes:
        """Download an event's structured workout file.

        The body is returned untouched; its contents are not inspected.
        """
        response = self._request(self.settings.download_method, self.download_endpoint(event_id))
        return response.content
