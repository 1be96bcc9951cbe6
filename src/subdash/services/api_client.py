"""HTTP client for the remote subscription API."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from subdash.core.exceptions import APIError, AuthError, NotFoundError
from subdash.core.logging import get_logger
from subdash.core.session import Session
from subdash.models.subscription import Subscription
from subdash.models.user import User

log = get_logger(__name__)


class SubscriptionAPI:
    """Record source: talks to the subscription backend over HTTP.

    Every response is wrapped as ``{"data": ...}``; failures carry
    ``{"error": ...}`` or ``{"message": ...}``.
    """

    def __init__(
        self,
        base_url: str,
        session: Session | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.session = session
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SubscriptionAPI":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ── Auth ─────────────────────────────────────────────────────

    def sign_in(self, email: str, password: str) -> Session:
        data = self._request("POST", "/auth/sign-in", json={"email": email, "password": password})
        return self._session_from(data)

    def sign_up(self, name: str, email: str, password: str) -> Session:
        data = self._request(
            "POST", "/auth/sign-up", json={"name": name, "email": email, "password": password}
        )
        return self._session_from(data)

    # ── Subscriptions ────────────────────────────────────────────

    def list_subscriptions(self, user_id: str) -> tuple[Subscription, ...]:
        """Fetch a snapshot of the user's subscriptions.

        Records that do not parse (unknown enum values, negative prices,
        missing fields) are skipped with a warning.
        """
        data = self._request("GET", f"/subscriptions/user/{user_id}")
        records: list[Subscription] = []
        for raw in data or []:
            try:
                records.append(Subscription.model_validate(raw))
            except PydanticValidationError as e:
                log.warning(
                    "skipped_malformed_record",
                    record_id=raw.get("_id") if isinstance(raw, dict) else None,
                    errors=e.error_count(),
                )
        log.debug("fetched_subscriptions", user_id=user_id, count=len(records))
        return tuple(records)

    def create_subscription(self, user_id: str, payload: dict[str, Any]) -> Subscription:
        data = self._request("POST", "/subscriptions", json={"userId": user_id, **payload})
        return Subscription.model_validate(data)

    def get_user(self, user_id: str) -> User:
        data = self._request("GET", f"/users/{user_id}")
        return User.model_validate(data)

    # ── Internals ────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        if self.session is None:
            return {}
        return {"Authorization": f"Bearer {self.session.token}"}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise APIError(f"Request to {path} failed: {e}") from e

        if response.status_code == 401:
            raise AuthError(_error_message(response) or "Session expired. Sign in again.", 401)
        if response.status_code == 404:
            raise NotFoundError(_error_message(response) or f"Not found: {path}")
        if response.is_error:
            message = _error_message(response) or f"HTTP {response.status_code} from {path}"
            raise APIError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {path}", status_code=response.status_code) from e
        if not isinstance(body, dict) or "data" not in body:
            raise APIError(f"Unexpected response shape from {path}", status_code=response.status_code)
        return body["data"]

    @staticmethod
    def _session_from(data: Any) -> Session:
        try:
            return Session(token=data["token"], user=User.model_validate(data["user"]))
        except (KeyError, TypeError, PydanticValidationError) as e:
            raise APIError("Malformed sign-in response") from e


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error") or body.get("message")
    return None
