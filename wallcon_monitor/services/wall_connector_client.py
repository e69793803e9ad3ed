from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from wallcon_monitor.config import WallConnectorConfig
from wallcon_monitor.models.lifetime import Lifetime
from wallcon_monitor.models.payload import PayloadError
from wallcon_monitor.models.version import Version
from wallcon_monitor.models.vitals import Vitals
from wallcon_monitor.models.wifi import WifiStatus

T = TypeVar("T")

# endpoint under /api/1 -> record decoder
DECODERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "lifetime": Lifetime.from_payload,
    "version": Version.from_payload,
    "vitals": Vitals.from_payload,
    "wifi_status": WifiStatus.from_payload,
}


class WallConnectorError(Exception):
    """A request to the wall connector failed or returned an unusable body."""


class WallConnectorClient:
    """Blocking client for the Wall Connector local API (``/api/1``)."""

    API_PREFIX = "/api/1"

    def __init__(
        self,
        cfg: WallConnectorConfig,
        log,
        session: Optional[requests.Session] = None,
        response_log=None,
    ):
        self.cfg = cfg
        self.log = log
        self.session = session or requests.Session()
        self.response_log = response_log
        host = cfg.host.strip().rstrip("/")
        self.base_url = host if "://" in host else f"http://{host}"

    # ------------------------------------------------------------------
    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}{self.API_PREFIX}/{endpoint.lstrip('/')}"

    def _get(self, endpoint: str) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        self.log.debug("GET %s", url)

        try:
            resp = self.session.get(url, timeout=self.cfg.timeout)
        except requests.RequestException as exc:
            raise WallConnectorError(f"request to {url} failed: {exc}") from exc

        if self.response_log is not None:
            self.response_log.write(endpoint, resp.text)

        if resp.status_code != 200:
            raise WallConnectorError(f"{url} returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise WallConnectorError(f"{url} returned non-JSON payload: {exc}") from exc

        if not isinstance(data, dict):
            raise WallConnectorError(
                f"{url} returned {type(data).__name__} instead of a JSON object"
            )
        return data

    def _fetch(self, endpoint: str, decode: Callable[[Dict[str, Any]], T]) -> T:
        payload = self._get(endpoint)
        try:
            return decode(payload)
        except PayloadError as exc:
            raise WallConnectorError(f"unexpected {endpoint} response: {exc}") from exc

    # ------------------------------------------------------------------
    def fetch(self, endpoint: str) -> Any:
        """Fetch and decode the record served at ``/api/1/<endpoint>``."""
        try:
            decode = DECODERS[endpoint]
        except KeyError:
            raise ValueError(f"Unknown wall connector endpoint '{endpoint}'") from None
        return self._fetch(endpoint, decode)

    def fetch_vitals(self) -> Vitals:
        return self.fetch("vitals")
