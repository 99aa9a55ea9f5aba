# goe_charger/services/charger_client.py

from __future__ import annotations

from typing import Optional

import requests

from goe_charger.config import ChargerConfig
from goe_charger.models.status import ApiVersion, DeviceStatus
from goe_charger.models.values import WriteRequest
from goe_charger.services.status_parser import parse_status


READ_URLS = {
    ApiVersion.V1: "http://{ip}/status",
    ApiVersion.V2: "http://{ip}/api/status",
}

WRITE_URLS = {
    ApiVersion.V1: "http://{ip}/mqtt?payload={key}={value}",
    ApiVersion.V2: "http://{ip}/api/set?{key}={value}",
}

WRITE_OK_STATUSES = (200, 204)


class ChargerCommunicationError(Exception):
    """Raised when the charger cannot be reached or answers unusably."""


class GoEChargerClient:
    """Blocking HTTP access to a single go-e charger's local API."""

    def __init__(self, cfg: ChargerConfig, log, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.log = log
        self.session = session or requests.Session()
        self.version = ApiVersion(cfg.api_version)

    # ------------------------------------------------------------------
    @property
    def read_url(self) -> str:
        return READ_URLS[self.version].format(ip=self.cfg.ip)

    def write_url(self, request: WriteRequest) -> str:
        return WRITE_URLS[self.version].format(ip=self.cfg.ip, key=request.key, value=request.value)

    # ------------------------------------------------------------------
    def fetch_status(self) -> DeviceStatus:
        url = self.read_url
        self.log.debug("GET URL = %s", url)

        try:
            resp = self.session.get(url, timeout=self.cfg.timeout)
        except requests.RequestException as exc:
            raise ChargerCommunicationError(f"Status request failed: {exc}") from exc

        self.log.debug("GET Response: %s", getattr(resp, "text", ""))

        if not 200 <= resp.status_code < 300:
            raise ChargerCommunicationError(f"Status request returned HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ChargerCommunicationError(f"Status response was not valid JSON: {exc}") from exc

        try:
            return parse_status(payload, self.version)
        except ValueError as exc:
            raise ChargerCommunicationError(str(exc)) from exc

    # ------------------------------------------------------------------
    def send(self, request: WriteRequest) -> None:
        url = self.write_url(request)
        self.log.debug("POST URL = %s", url)

        try:
            resp = self.session.post(url, timeout=self.cfg.timeout)
        except requests.RequestException as exc:
            self.log.warning("Could not send data: %s, %s", url, exc)
            raise ChargerCommunicationError(f"Write request failed: {exc}") from exc

        self.log.debug("POST Response: %s", getattr(resp, "text", ""))

        if resp.status_code not in WRITE_OK_STATUSES:
            self.log.debug(
                "Could not send data, Response %s, StatusCode: %s",
                getattr(resp, "text", ""),
                resp.status_code,
            )
            raise ChargerCommunicationError("Request response was unsuccessful")
