"""OAuth username-password token exchange against the Salesforce login host."""

import logging
from typing import Optional

import httpx

from contact_journey.config import Settings
from contact_journey.errors import AuthError, AuthFailureReason, ConfigError
from contact_journey.models.credential import Credential

logger = logging.getLogger(__name__)


class CredentialProvider:
    """
    Exchanges the Connected App credentials in Settings for an access token.
    Every call to acquire() performs a fresh exchange; nothing is cached.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=settings.timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "CredentialProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _check_settings(self) -> None:
        missing = self.settings.missing_keys()
        if missing:
            raise ConfigError(missing)

    def _log_attempt(self) -> None:
        s = self.settings
        logger.info(
            "Auth attempt: username=%s client_id_length=%d password_length=%d secret_length=%d",
            s.username,
            len(s.client_id or ""),
            len(s.password.get_secret_value()) if s.password else 0,
            len(s.client_secret.get_secret_value()) if s.client_secret else 0,
        )

    def acquire(self) -> Credential:
        """Return a new credential or raise ConfigError / AuthError."""
        self._check_settings()
        self._log_attempt()
        s = self.settings
        form = {
            "grant_type": "password",
            "client_id": s.client_id,
            "client_secret": s.client_secret.get_secret_value(),
            "username": s.username,
            "password": s.password.get_secret_value(),
        }

        try:
            resp = self._client.post(
                s.token_url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            logger.error("Token request to %s failed: %s", s.token_url, e)
            raise AuthError(AuthFailureReason.OTHER, detail=str(e)) from e

        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not resp.is_success:
            error_code = payload.get("error")
            logger.error(
                "Salesforce auth error: status=%s error=%s description=%s",
                resp.status_code,
                error_code,
                payload.get("error_description"),
            )
            detail = payload.get("error_description") or error_code or f"HTTP {resp.status_code}"
            raise AuthError(
                AuthFailureReason.from_code(error_code),
                detail=detail,
                status_code=resp.status_code,
            )

        if not payload.get("access_token") or not payload.get("instance_url"):
            raise AuthError(
                AuthFailureReason.OTHER,
                detail="Token response is missing access_token or instance_url",
                status_code=resp.status_code,
            )

        logger.info("Salesforce authentication successful")
        return Credential(
            access_token=payload["access_token"],
            instance_url=payload["instance_url"],
            token_type=payload.get("token_type") or "Bearer",
        )
