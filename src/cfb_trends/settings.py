"""Application settings for cfb-trends."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from cfb_trends.runtime_config import current_runtime_config


class Settings(BaseSettings):
    """Runtime settings, overridable through `CFB_TRENDS_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CFB_TRENDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    data_dir: str = "data/cfbd"
    reports_dir: str = "reports/trends"
    preferred_provider: str = "consensus"
    default_conference: str = "All"
    default_year: int = 2024
    log_level: str = "WARNING"

    @classmethod
    def from_runtime(cls) -> "Settings":
        """Construct settings from runtime config; environment values still win."""
        runtime = current_runtime_config()
        defaults = {
            "data_dir": str(runtime.data_dir),
            "reports_dir": str(runtime.reports_dir),
            "preferred_provider": runtime.preferred_provider,
            "default_conference": runtime.default_conference,
            "default_year": runtime.default_year,
        }
        env_values = cls().model_dump(exclude_unset=True)
        return cls(**{**defaults, **env_values})
