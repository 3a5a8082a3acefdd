"""Salesforce REST API adapters: token exchange and SOQL queries."""

from contact_journey.salesforce.auth import CredentialProvider
from contact_journey.salesforce.client import SalesforceClient

__all__ = ["CredentialProvider", "SalesforceClient"]
