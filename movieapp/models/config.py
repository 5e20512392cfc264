"""
Provider Configuration Models
Pydantic models for the persisted client configuration
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class ProviderConfig(BaseModel):
    """
    Configuration consumed by the data providers.

    Instances are frozen: every change produces a new object so that
    dependents can detect a change by identity.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str = Field("https://api.themoviedb.org/3", description="TMDB API base URL")
    image_base_url: str = Field("https://image.tmdb.org/t/p", description="TMDB image CDN base URL")
    credential: Optional[str] = Field(None, description="TMDB read access token")
    locale: str = Field("en-US", description="Response language")
    region: str = Field("US", description="ISO 3166-1 region for release data")
    adult_content_allowed: bool = Field(False, description="Include adult titles")

    @property
    def has_credential(self) -> bool:
        return bool(self.credential and self.credential.strip())

    def replace(self, **changes: Any) -> "ProviderConfig":
        """Return a new config with the given fields replaced"""
        return self.model_validate({**self.model_dump(), **changes})

    def to_persisted(self, credential: Optional[str] = None) -> Dict[str, Any]:
        """
        Persisted (camelCase) representation

        Args:
            credential: Value stored for the credential (already encrypted)
        """
        return {
            "credential": credential,
            "baseUrl": self.base_url,
            "imageBaseUrl": self.image_base_url,
            "locale": self.locale,
            "region": self.region,
            "adultContentAllowed": self.adult_content_allowed,
        }

    @classmethod
    def from_persisted(
        cls,
        data: Dict[str, Any],
        defaults: "ProviderConfig",
        credential: Optional[str] = None,
    ) -> "ProviderConfig":
        """Merge a persisted object over defaults"""
        mapping = {
            "baseUrl": "base_url",
            "imageBaseUrl": "image_base_url",
            "locale": "locale",
            "region": "region",
            "adultContentAllowed": "adult_content_allowed",
        }
        changes = {
            field: data[key]
            for key, field in mapping.items()
            if data.get(key) is not None
        }
        changes["credential"] = credential
        return defaults.replace(**changes)
