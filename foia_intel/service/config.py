# foia_intel/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from foia_intel.core.definitions import RequestStatus


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'FOIA_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FOIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core Settings
    log_level: str = Field(default="INFO", description="Root logging level.")

    model_version: str = Field(
        default="v1.0", description="Version tag stored with each request analysis."
    )

    context_radius: int = Field(
        default=50,
        ge=0,
        description="Characters of context kept either side of a PII match.",
    )

    entity_context_radius: int = Field(
        default=50,
        ge=0,
        description="Characters of context kept around an extracted entity.",
    )

    # Routing and similarity
    max_departments: int = Field(default=5, ge=1)

    similar_request_limit: int = Field(default=5, ge=1)

    similarity_placeholder: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Constant similarity reported for keyword-overlap matches.",
    )

    completed_statuses: List[str] = Field(
        default_factory=lambda: [RequestStatus.RELEASED, RequestStatus.CLOSED],
        description="Request statuses searched for similar past requests.",
    )

    # Classification thresholds
    classification_threshold: float = Field(default=0.2, ge=0.0, le=1.0)

    exemption_threshold: float = Field(default=0.3, ge=0.0, le=1.0)

    # Fee schedule (per jurisdiction)
    search_fee_per_department: float = Field(default=15.0)
    review_fee_per_page: float = Field(default=0.10)
    copy_fee_per_page: float = Field(default=0.05)

    # Timeline
    base_response_days: int = Field(default=10, ge=0)
    calendar_day_factor: float = Field(default=1.4, ge=1.0)

    @field_validator(
        "search_fee_per_department", "review_fee_per_page", "copy_fee_per_page"
    )
    @classmethod
    def validate_rate(cls, v: float) -> float:
        """Ensure fee rates are not negative."""
        if v < 0:
            raise ValueError("Fee rates cannot be negative")
        return v

    @field_validator("completed_statuses")
    @classmethod
    def validate_statuses(cls, v: List[str]) -> List[str]:
        """Ensure at least one completed status is configured."""
        if not v:
            raise ValueError("completed_statuses cannot be empty")
        return v


# Singleton settings instance
settings = Settings()
