from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Settings.

    This class loads variables from the environment (or .env file).
    Pydantic automatically validates types and missing values.
    """

    # --- Core Settings ---
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment: dev or prod
    environment: Literal["dev", "prod"] = "dev"
    log_level: str = Field(default="INFO", description="Root logging level")

    # --- CSV exports ---
    internal_resources_csv_url: str = Field(
        default=(
            "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
            "USC%20Entrepreneurship%20Resources%2018cdbf52cd2c804b864dfa1355926b0b_all-"
            "y7RcigGsU0QxiUuST4Uouhl3jQNV52.csv"
        ),
        description="CSV export of the internal (USC) resources",
    )
    external_resources_csv_url: str = Field(
        default=(
            "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
            "External%20Entrepreneurship%20Resources%20199dbf52cd2c809eb16ed46a1c42ec1e_all-"
            "N2h1KN12c0o9MtqOIUH6ZUJ15P42rZ.csv"
        ),
        description="CSV export of the external resources",
    )
    resource_catalog_csv_url: str = Field(
        default=(
            "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
            "USC%20Entrepreneurship%20Resources%2018cdbf52cd2c804b864dfa1355926b0b-"
            "HR4OLDQxz9AMfe0acFMMVmpLUDRjWK.csv"
        ),
        description="Full internal catalog export including parent/sub items",
    )
    http_timeout_seconds: float = Field(
        default=15.0, description="Timeout applied to upstream HTTP fetches"
    )

    # --- External source selection ---
    external_source: Literal["csv", "notion"] = Field(
        default="csv",
        description="Where external resources are read from.",
    )

    # --- Notion ---
    notion_api_key: Optional[SecretStr] = Field(
        default=None, description="Required if external_source is 'notion'"
    )
    notion_resource_database_id: Optional[str] = Field(
        default=None, description="Database holding the external resources"
    )
    notion_provenance_property: str = Field(
        default="Type",
        description="Select property used to pick external records",
    )
    notion_provenance_value: str = Field(
        default="External",
        description="Value the provenance property must equal",
    )
    notion_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Records requested from Notion (first page only)",
    )

    # --- Favorites ---
    favorites_storage_path: str = Field(
        default=".data/favorites.json",
        description="JSON file backing the favorites store",
    )
    favorites_key: str = Field(
        default="favorites", description="Store key holding the favorite names"
    )

    # --- HTTP API ---
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    def validate_notion_config(self):
        """Ensure Notion credentials exist when Notion is the external source."""
        if self.external_source != "notion":
            return
        if not self.notion_api_key:
            raise ValueError("External source is Notion, but NOTION_API_KEY is missing!")
        if not self.notion_resource_database_id:
            raise ValueError(
                "NOTION_RESOURCE_DATABASE_ID is required when external_source is 'notion'."
            )


# Create a global settings object
settings = Settings()

# Validate immediately upon import
try:
    settings.validate_notion_config()
except ValueError as e:
    print(f"Configuration Error: {e}")
