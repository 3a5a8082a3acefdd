"""Contact: the subject of a journey."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Contact(BaseModel):
    """CRM contact as returned by the lookup query."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str = ""
    email: Optional[str] = None
    account_name: Optional[str] = None

    @classmethod
    def from_salesforce(cls, record: dict[str, Any]) -> "Contact":
        """Build from a Contact query row (Id, Name, Email, Account.Name)."""
        account = record.get("Account") or {}
        return cls(
            id=record.get("Id") or "",
            display_name=record.get("Name") or "",
            email=(record.get("Email") or "").strip() or None,
            account_name=account.get("Name"),
        )
