"""HTTP client for the CBOM compliance backend."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests import Response
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from .config import Settings
from .errors import TransportError
from .models import PolicyDescriptor

logger = logging.getLogger(__name__)

POLICIES_PATH = "/api/v1/compliance/policies"
CHECK_PATH = "/api/v1/compliance/check"
UPLOAD_POLICY_PATH = "/api/v1/compliance/upload-policy"
CUSTOM_POLICY_PATH = "/api/v1/compliance/custom-policy"


class ComplianceClient:
    """Request/response boundary to the compliance backend.

    Every failure, including non-success statuses and undecodable bodies, is
    raised as :class:`TransportError`. Connection-level failures are retried
    before giving up.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._session = session or requests.Session()
        self._send = retry(
            reraise=True,
            retry=retry_if_exception_type(requests.RequestException),
            stop=stop_after_attempt(self.settings.retry_attempts),
            wait=wait_fixed(self.settings.retry_wait_seconds),
        )(self._request)

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Response:
        return self._session.request(
            method, self._url(path), timeout=self.settings.timeout, **kwargs
        )

    def _call(self, method: str, path: str, **kwargs: Any) -> Response:
        try:
            return self._send(method, path, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"Failed to reach compliance backend: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: Response, action: str) -> None:
        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Unexpected status code {response.status_code} {action}",
                status_code=response.status_code,
            )

    @staticmethod
    def _decode(response: Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON {action}: {exc}") from exc

    def list_policies(self) -> list[PolicyDescriptor]:
        """Return the compliance policies the backend can check against."""
        action = "loading compliance policies"
        response = self._call("GET", POLICIES_PATH)
        self._raise_for_status(response, action)
        data = self._decode(response, action)
        if not isinstance(data, list):
            raise TransportError("Compliance policy listing must be a JSON array")

        policies: list[PolicyDescriptor] = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                logger.warning("Skipping policy entry %d: not an object", index)
                continue
            try:
                policies.append(PolicyDescriptor.from_dict(entry))
            except ValueError as exc:
                logger.warning("Skipping policy entry %d: %s", index, exc)
        return policies

    def check_compliance(self, cbom: Any, policy_identifier: str) -> Any:
        """Submit a CBOM for a compliance check and return the decoded document.

        The returned document is not validated here.
        """
        action = f"checking compliance against policy '{policy_identifier}'"
        response = self._call(
            "POST",
            CHECK_PATH,
            params={"policyIdentifier": policy_identifier},
            json=cbom,
            headers={"Content-Type": "application/json"},
        )
        self._raise_for_status(response, action)
        return self._decode(response, action)

    def upload_policy(self, toml_text: str, filename: str = "policy.toml") -> str:
        """Register a custom TOML policy and return the backend's message."""
        response = self._call(
            "POST",
            UPLOAD_POLICY_PATH,
            files={"file": (filename, toml_text.encode("utf-8"), "application/toml")},
        )
        if not 200 <= response.status_code < 300:
            raise TransportError(
                response.text.strip() or f"Unexpected status code {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def delete_policy(self, policy_identifier: str) -> bool:
        """Remove a custom policy; False when the backend refuses (e.g. built-ins)."""
        response = self._call(
            "DELETE", f"{CUSTOM_POLICY_PATH}/{quote(policy_identifier, safe='')}"
        )
        if response.status_code == 400:
            return False
        self._raise_for_status(response, f"deleting policy '{policy_identifier}'")
        return True
