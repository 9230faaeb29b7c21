"""
HTTP client for the external resurrection service.

POST {RESURRECTION_URL}/check with a bearer WORKER_SECRET and {"itemId": ...};
the service answers {"resurrected": bool, "reason"?: str}. The blocking
requests call runs in a worker thread so the event loop is never held, with a
bounded timeout. Every failure is raised as ResurrectionServiceError.
"""

import asyncio
from typing import Optional

import requests
from pydantic import ValidationError

from skillrank import ResurrectionResult, ResurrectionServiceError


class HttpResurrectionClient:
    """Resurrection service client (requests, bounded timeout)."""

    def __init__(
        self,
        base_url: str,
        secret: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        if not base_url or not secret:
            raise ValueError("HttpResurrectionClient requires base_url and secret")
        self.base_url = base_url.rstrip("/")
        self._secret = secret
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def check_url(self) -> str:
        return f"{self.base_url}/check"

    def check_sync(self, item_id: str) -> ResurrectionResult:
        """Blocking call; raises ResurrectionServiceError on any failure."""
        try:
            response = self._session.post(
                self.check_url,
                json={"itemId": item_id},
                headers={"Authorization": f"Bearer {self._secret}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            raise ResurrectionServiceError(f"resurrection service returned {status}", status) from e
        except requests.exceptions.RequestException as e:
            raise ResurrectionServiceError(f"resurrection request failed: {e}") from e
        except ValueError as e:
            raise ResurrectionServiceError(f"resurrection response is not JSON: {e}") from e
        try:
            return ResurrectionResult.model_validate(payload)
        except ValidationError as e:
            raise ResurrectionServiceError(f"unexpected resurrection response: {e}") from e

    async def check(self, item_id: str) -> ResurrectionResult:
        return await asyncio.to_thread(self.check_sync, item_id)

    def close(self) -> None:
        self._session.close()
