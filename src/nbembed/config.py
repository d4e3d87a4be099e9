"""Configuration management for nbembed."""

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from nbembed import ConfigurationError, __version__

DEFAULT_USER_AGENT = f"Mozilla/5.0 (compatible; nbembed/{__version__})"


class EmbedConfig(BaseSettings):
    """Pipeline configuration loaded from arguments or environment variables.

    Environment variables should be prefixed with NBEMBED_
    Example: NBEMBED_FETCH_TIMEOUT_MS=15000

    One instance is fixed for the lifetime of a pipeline; every component
    receives the values it needs at construction time.

    Attributes:
        cache_dir: Directory holding one JSON file per cached notebook
        allow_remote_fetch: Download notebooks that are not cached yet
        fetch_timeout_ms: Timeout for notebook downloads
        icon_page_timeout_ms: Timeout for fetching the source site's root page
        icon_probe_timeout_ms: Timeout for each fallback icon existence check
        user_agent: User-Agent header sent when scraping site icons
    """

    # Cache Configuration
    cache_dir: Path = Field(
        default=Path(".nbembed-cache/notebooks"),
        description="Directory for cached notebooks",
    )

    # Download Configuration
    allow_remote_fetch: bool = Field(
        default=True,
        description="Download notebooks missing from the cache",
    )
    fetch_timeout_ms: int = Field(
        default=10000,
        ge=1000,
        le=120000,
        description="Notebook download timeout in milliseconds",
    )

    # Icon Configuration
    icon_page_timeout_ms: int = Field(
        default=5000,
        ge=100,
        le=60000,
        description="Timeout for fetching the site root page",
    )
    icon_probe_timeout_ms: int = Field(
        default=3000,
        ge=100,
        le=60000,
        description="Timeout for each fallback icon probe",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for icon scraping",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NBEMBED_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def fetch_timeout(self) -> float:
        """Download timeout in seconds."""
        return self.fetch_timeout_ms / 1000

    @property
    def icon_page_timeout(self) -> float:
        """Root page timeout in seconds."""
        return self.icon_page_timeout_ms / 1000

    @property
    def icon_probe_timeout(self) -> float:
        """Icon probe timeout in seconds."""
        return self.icon_probe_timeout_ms / 1000


def load_config(**overrides) -> EmbedConfig:
    """Build a configuration from the environment plus explicit overrides.

    Overrides set to None are ignored so CLI options can be passed through
    unconditionally.

    Returns:
        EmbedConfig: The configuration object

    Raises:
        ConfigurationError: If a value fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return EmbedConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
