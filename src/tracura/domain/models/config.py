"""
Tracura - Configuration Models (Pydantic v2)

Validated configuration classes for the budget core and its collaborators.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RemoteStoreConfig(BaseModel):
    """Remote document store (JSON REST) configuration."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default="", description="Document store base URL (empty = in-memory store)")
    timeout_seconds: float = Field(default=15.0, gt=0, le=300, description="Request timeout")
    api_key: str = Field(default="", description="Bearer token sent with every request")
    customer_id: str = Field(default="", description="Customer whose documents are read/written")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format"""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v.rstrip("/")


class LocalStoreConfig(BaseModel):
    """Local snapshot store configuration."""

    model_config = ConfigDict(frozen=True)

    directory: str = Field(default=".tracura/snapshots", description="Directory for snapshot files (empty = in-memory)")
    snapshot_key: str = Field(default="create_project_draft", min_length=1, description="Key of the autosave snapshot")


class DraftConfig(BaseModel):
    """Draft and name-check behaviour."""

    model_config = ConfigDict(frozen=True)

    name_check_debounce_ms: int = Field(default=500, ge=0, le=5000, description="Quiet period before the name check")
    remote_drafts_enabled: bool = Field(default=True, description="Mirror saved drafts to the remote draft list")


class ValidationConfig(BaseModel):
    """Validation engine switches."""

    model_config = ConfigDict(frozen=True)

    required_project_fields: tuple[str, ...] = Field(
        default=("name",),
        description="Project fields that must be non-empty (name, description, client, location)",
    )
    enforce_phase_timeline: bool = Field(default=False, description="Require each phase to start after the previous one ends")

    @field_validator("required_project_fields")
    @classmethod
    def validate_fields(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        allowed = {"name", "description", "client", "location"}
        unknown = [f for f in v if f not in allowed]
        if unknown:
            raise ValueError(f"Unknown project fields: {unknown}")
        return v


class FormattingConfig(BaseModel):
    """Currency rendering."""

    model_config = ConfigDict(frozen=True)

    currency: str = Field(default="INR", min_length=1, description="Default project currency")
    currency_symbol: str = Field(default="₹", description="Symbol prefixed to formatted amounts (empty = derived from currency)")


class AppConfig(BaseSettings):
    """
    Complete application configuration.

    Loaded from TRACURA_-prefixed environment variables or a .env file,
    nested with "__" (e.g. TRACURA_REMOTE__URL -> remote.url).
    """

    model_config = SettingsConfigDict(
        env_prefix="TRACURA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    remote: RemoteStoreConfig = Field(default_factory=RemoteStoreConfig)
    local: LocalStoreConfig = Field(default_factory=LocalStoreConfig)
    drafts: DraftConfig = Field(default_factory=DraftConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    formatting: FormattingConfig = Field(default_factory=FormattingConfig)
    log_level: str = Field(default="INFO", description="Root logging level used by quick_setup")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - TRACURA_REMOTE__URL -> remote.url
        - TRACURA_DRAFTS__NAME_CHECK_DEBOUNCE_MS -> drafts.name_check_debounce_ms
        - etc.

        Returns:
            AppConfig instance
        """
        return cls()

    @classmethod
    def for_testing(cls) -> "AppConfig":
        """
        Create minimal configuration for testing.

        In-memory stores and no debounce delay.

        Returns:
            AppConfig with test-friendly defaults
        """
        return cls(
            remote=RemoteStoreConfig(url="", customer_id="test-customer"),
            local=LocalStoreConfig(directory=""),
            drafts=DraftConfig(name_check_debounce_ms=0),
        )
