"""Short-lived OAuth credential for the CRM REST API."""

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Access token plus the instance URL it is valid for. Lives for one request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    access_token: str = Field(repr=False)
    token_type: str = "Bearer"
    base_url: str = Field(..., alias="instance_url")

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        return f"{self.token_type} {self.access_token}"
