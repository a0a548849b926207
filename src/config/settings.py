"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FORMSCAN_ prefix (e.g., FORMSCAN_STRICT_MODE=true).

Settings can also be loaded from a .env file in the working directory.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FORMSCAN_ prefix.

    Examples:
        FORMSCAN_EOF_RESULT=-1
        FORMSCAN_STRICT_MODE=true
        FORMSCAN_RECORDS_FILENAME=out.yaml
        FORMSCAN_MAX_RECORDS=100
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scan configuration
    eof_result: int = Field(
        default=-1,
        description="Value returned by scan() when input ends before the first conversion",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: unknown conversion specifiers raise SyntaxError instead of being skipped",
    )

    # CLI output configuration
    records_filename: str = Field(
        default="records.yaml",
        description="Name of the YAML file the CLI writes extracted records to",
    )

    max_records: int = Field(
        default=0,
        ge=0,
        description="Maximum number of records the CLI extracts (0 for no limit)",
    )

    def records_limitReached(self, count: int) -> bool:
        """
        Check whether the CLI has extracted as many records as allowed.

        Example:
            >>> AppSettings(max_records=2).records_limitReached(2)
            True
            >>> AppSettings().records_limitReached(10_000)
            False
        """
        return bool(self.max_records) and count >= self.max_records


# Singleton instance - import this in your code
appsettings = AppSettings()
