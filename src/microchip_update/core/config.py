"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables (or a ``.env`` file)
following 12-factor principles.  Command line options override the values
loaded here.
"""

import re
from dataclasses import dataclass

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class OrganizationProfile:
    """Identity used for dogs that are registered to the rescue itself.

    Found.org will not accept a registration with blank contact fields, so
    a dog that has not been adopted yet is registered under these values.
    """

    first_name: str
    last_name: str
    email: str
    phone: str
    species: str
    primary_breed: str
    notes_prefix: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Comparison
    cutoff_year: int = Field(
        default=2019,
        description="Dogs acquired before 1-JAN of this year are ignored",
        ge=2010,
        le=2050,
    )

    # Files
    updates_file: str = Field(
        default="updates.csv",
        description="Default output file for the Found.org update records",
    )
    errors_file: str = Field(
        default="errors.csv",
        description="Default output file for the error report",
    )
    default_extension: str = Field(
        default=".csv",
        description="Extension applied to file names given without one",
    )

    @field_validator("default_extension")
    @classmethod
    def validate_default_extension(cls, v: str) -> str:
        if not re.fullmatch(r"\.[A-Za-z0-9]+", v):
            msg = "Invalid default_extension: must look like '.csv'"
            raise ValueError(msg)
        return v

    # Organization identity
    org_first_name: str = Field(default="NGRR", description="First name for unadopted registrations")
    org_last_name: str = Field(default="Rescue", description="Last name for unadopted registrations")
    org_email: str = Field(
        default="microchips@ngrr.org",
        description="Rescue group email, also the contact email for unadopted dogs",
    )
    org_phone: str = Field(
        default="4085550100",
        description="Contact phone (10 digits) for unadopted registrations",
    )
    org_species: str = Field(default="Dog", description="Species reported for every registration")
    org_primary_breed: str = Field(
        default="Golden Retriever",
        description="Primary breed reported for every registration",
    )
    org_notes_prefix: str = Field(default="NGRR #", description="Text placed before the dog number in the notes field")

    @field_validator("org_phone")
    @classmethod
    def validate_org_phone(cls, v: str) -> str:
        if not re.fullmatch(r"\d{10}", v, re.ASCII):
            msg = "Invalid org_phone: must be exactly 10 digits"
            raise ValueError(msg)
        return v

    @field_validator("org_first_name", "org_last_name", "org_email")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "Organization contact fields cannot be blank"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @property
    def organization(self) -> OrganizationProfile:
        """Build the organization profile used by the update builder."""
        return OrganizationProfile(
            first_name=self.org_first_name,
            last_name=self.org_last_name,
            email=self.org_email,
            phone=self.org_phone,
            species=self.org_species,
            primary_breed=self.org_primary_breed,
            notes_prefix=self.org_notes_prefix,
        )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
