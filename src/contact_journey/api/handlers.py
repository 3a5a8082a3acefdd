"""HTTP entrypoints (functions-framework): auth exchange and journey building.

Deploy or run locally with e.g.:
    functions-framework --source src/contact_journey/api/handlers.py --target contact_journey
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import functions_framework

from contact_journey.config import Settings
from contact_journey.errors import JourneyError, ValidationError
from contact_journey.fetcher import RecordFetcher
from contact_journey.pipeline import build_journey
from contact_journey.salesforce.auth import CredentialProvider

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Content-Type": "application/json",
}


def _json_response(body: dict[str, Any], status: int) -> tuple[str, int, dict[str, str]]:
    return (json.dumps(body, default=str), status, dict(CORS_HEADERS))


def _preflight() -> tuple[str, int, dict[str, str]]:
    return ("", 200, dict(CORS_HEADERS))


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def handle_auth(
    request,
    *,
    settings: Optional[Settings] = None,
    provider: Optional[CredentialProvider] = None,
) -> tuple[str, int, dict[str, str]]:
    """
    Exchange the configured credentials for a token.
    Always answers 200; callers branch on the 'success' field.
    """
    if request.method == "OPTIONS":
        return _preflight()

    try:
        if provider is None:
            with CredentialProvider(settings or Settings.from_env()) as owned:
                credential = owned.acquire()
        else:
            credential = provider.acquire()
    except JourneyError as e:
        logger.error("Authentication error: %s", e)
        return _json_response({"success": False, "error": str(e), "timestamp": _utc_timestamp()}, 200)
    except Exception as e:
        logger.exception("Unexpected authentication error")
        return _json_response({"success": False, "error": str(e), "timestamp": _utc_timestamp()}, 200)

    return _json_response(
        {
            "success": True,
            "access_token": credential.access_token,
            "instance_url": credential.base_url,
            "token_type": credential.token_type,
        },
        200,
    )


def handle_journey(
    request,
    *,
    settings: Optional[Settings] = None,
    provider: Optional[CredentialProvider] = None,
    fetcher: Optional[RecordFetcher] = None,
) -> tuple[str, int, dict[str, str]]:
    """Build the journey for the posted contactId. Failures answer 500 with success=false."""
    if request.method == "OPTIONS":
        return _preflight()

    try:
        body = request.get_json(silent=True)
        contact_id = body.get("contactId") if isinstance(body, dict) else None
        if not contact_id:
            raise ValidationError("Contact ID is required")

        journey = build_journey(
            str(contact_id),
            settings=settings or Settings.from_env(),
            provider=provider,
            fetcher=fetcher,
        )
    except JourneyError as e:
        logger.error("Journey generation error: %s", e)
        return _json_response({"success": False, "error": str(e)}, 500)
    except Exception as e:
        logger.exception("Unexpected journey generation error")
        return _json_response({"success": False, "error": str(e)}, 500)

    return _json_response({"success": True, "journey": journey.to_payload()}, 200)


@functions_framework.http
def salesforce_auth(request):
    return handle_auth(request)


@functions_framework.http
def contact_journey(request):
    return handle_journey(request)
