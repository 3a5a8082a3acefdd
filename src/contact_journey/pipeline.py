"""Pipeline orchestration: credential → fetch → merge → transform."""

from typing import Optional

import httpx

from contact_journey.config import Settings
from contact_journey.fetcher import RecordFetcher
from contact_journey.merging import merge_chronologically
from contact_journey.models.journey import Journey
from contact_journey.salesforce.auth import CredentialProvider
from contact_journey.transform import JourneyTransformer


def build_journey(
    contact_id: str,
    *,
    settings: Settings,
    provider: Optional[CredentialProvider] = None,
    fetcher: Optional[RecordFetcher] = None,
    transformer: Optional[JourneyTransformer] = None,
    client: Optional[httpx.Client] = None,
) -> Journey:
    """
    Run the full pipeline for one contact with a freshly acquired credential.
    Raises JourneyError subclasses for config, auth, validation and lookup failures;
    individual source failures are tolerated.
    When no client is given, one is opened for the run and closed before returning.
    """
    if client is None:
        with httpx.Client(timeout=settings.timeout) as owned:
            return build_journey(
                contact_id,
                settings=settings,
                provider=provider,
                fetcher=fetcher,
                transformer=transformer,
                client=owned,
            )

    provider = provider or CredentialProvider(settings, client=client)
    fetcher = fetcher or RecordFetcher(settings, client=client)
    transformer = transformer or JourneyTransformer()

    credential = provider.acquire()
    result = fetcher.fetch(credential, contact_id)
    ordered = merge_chronologically(*(o.records for o in result.outcomes if o.ok))
    return transformer.transform(ordered, result.contact)
