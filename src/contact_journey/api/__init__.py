"""HTTP function entrypoints."""

from contact_journey.api.handlers import (
    contact_journey,
    handle_auth,
    handle_journey,
    salesforce_auth,
)

__all__ = ["contact_journey", "handle_auth", "handle_journey", "salesforce_auth"]
