"""Central Configuration System for VerifyZen.

This module is the single source of truth for application configuration.
Every other module that needs settings imports from here. Analysis
thresholds are plain values handed to the analyzer at construction time, so
the analyzer itself never reads ambient state.

The configuration system supports:
- Multi-source configuration (environment variables > config file > defaults)
- Tunable gap/overlap thresholds and risk weights
- Report and logging settings

Example:
    >>> from verifyzen.config import get_config
    >>>
    >>> cfg = get_config()
    >>> cfg.analysis.gap_high_days
    180

Config File Format (YAML):
    ```yaml
    analysis:
      gap_min_days: 30
      gap_medium_days: 60
      gap_high_days: 180
      overlap_medium_days: 30
      overlap_high_days: 90
      gap_weight: 15
      overlap_weight: 25
      max_work_positions: 10
      many_positions_weight: 10
      short_tenure_months: 6
      days_per_month: 30
      max_short_tenures: 3
      short_tenure_weight: 15
      max_risk_score: 100

    report:
      title: Timeline Analysis Report
      format: markdown  # markdown | json | table

    logging:
      level: WARNING
      file: ~/.verifyzen/verifyzen.log

    debug: false
    verbose: false
    ```
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from verifyzen.exceptions import VerifyZenError

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class ConfigError(VerifyZenError):
    """Base exception for configuration errors.

    All configuration-related exceptions inherit from this class to allow
    for easy exception handling at a higher level.
    """

    pass


class ConfigFileError(ConfigError):
    """Exception raised for YAML config file issues.

    Raised when an explicitly requested config file does not exist. Files
    found through the default search path never raise; problems with them
    are logged and defaults are used instead.
    """

    pass


# =============================================================================
# Configuration Sections
# =============================================================================


class AnalysisConfig(BaseModel):
    """Thresholds and weights for timeline analysis.

    Defaults reproduce the standard scoring table. Day thresholds are lower
    bounds: a gap of exactly ``gap_high_days`` days is already high.

    Attributes:
        gap_min_days: Smallest gap between consecutive entries that is reported.
        gap_medium_days: Gaps from here up to ``gap_high_days`` are medium.
        gap_high_days: Gaps from here on are high.
        overlap_medium_days: Overlaps from here up to ``overlap_high_days`` are medium.
        overlap_high_days: Overlaps from here on are high.
        gap_weight: Risk added per non-low gap.
        overlap_weight: Risk added per non-low overlap.
        max_work_positions: More work entries than this raises a flag.
        many_positions_weight: Risk added for too many positions.
        short_tenure_months: Tenures shorter than this many months are short.
        days_per_month: Divisor turning elapsed days into approximate months.
        max_short_tenures: More short tenures than this raises a flag.
        short_tenure_weight: Risk added for too many short tenures.
        max_risk_score: Upper clamp of the risk score.

    Example:
        >>> strict = AnalysisConfig(gap_min_days=14, gap_weight=20)
    """

    gap_min_days: int = Field(default=30, ge=1)
    gap_medium_days: int = Field(default=60, ge=1)
    gap_high_days: int = Field(default=180, ge=1)
    overlap_medium_days: int = Field(default=30, ge=1)
    overlap_high_days: int = Field(default=90, ge=1)

    gap_weight: int = Field(default=15, ge=0)
    overlap_weight: int = Field(default=25, ge=0)

    max_work_positions: int = Field(default=10, ge=0)
    many_positions_weight: int = Field(default=10, ge=0)

    short_tenure_months: float = Field(default=6, gt=0)
    days_per_month: int = Field(default=30, ge=1)
    max_short_tenures: int = Field(default=3, ge=0)
    short_tenure_weight: int = Field(default=15, ge=0)

    max_risk_score: int = Field(default=100, ge=0, le=100)

    @model_validator(mode="after")
    def check_threshold_order(self) -> "AnalysisConfig":
        """Ensure medium thresholds sit below high thresholds."""
        if self.gap_medium_days >= self.gap_high_days:
            raise ValueError("gap_medium_days must be lower than gap_high_days")
        if self.overlap_medium_days >= self.overlap_high_days:
            raise ValueError("overlap_medium_days must be lower than overlap_high_days")
        return self


class ReportConfig(BaseModel):
    """Configuration for timeline report rendering.

    Attributes:
        title: Heading of the markdown report.
        format: Default output format of the CLI.
        include_flags: Render the red flags section.
        include_gaps: Render the gaps section.
        include_overlaps: Render the overlapping positions section.
    """

    title: str = Field(default="Timeline Analysis Report", min_length=1)
    format: Literal["markdown", "json", "table"] = Field(
        default="markdown", description="Default output format."
    )
    include_flags: bool = True
    include_gaps: bool = True
    include_overlaps: bool = True


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Log level name for the ``verifyzen`` logger.
        file: Optional log file; console logging is always on.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("file", mode="before")
    @classmethod
    def expand_file(cls, v: Any) -> Any:
        if isinstance(v, str) and v:
            return Path(v).expanduser()
        return v


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Combines all configuration sections and supports loading from environment
    variables with the VERIFYZEN_ prefix. Nested fields use ``__``, e.g.
    ``VERIFYZEN_ANALYSIS__GAP_WEIGHT=20``.

    Configuration priority (highest wins):
    1. Environment variables (VERIFYZEN_*)
    2. Config file (YAML)
    3. In-code defaults

    Attributes:
        analysis: Timeline analysis thresholds and weights.
        report: Report rendering settings.
        logging: Logging settings.
        debug: Enable debug mode (debug logging, tracebacks).
        verbose: Enable verbose output to console.
    """

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = Field(default=False, description="Enable debug mode.")
    verbose: bool = Field(default=False, description="Enable verbose output.")

    model_config = SettingsConfigDict(
        env_prefix="VERIFYZEN_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values passed in from the config file
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def effective_log_level(self) -> str:
        """Log level after applying the debug/verbose switches."""
        if self.debug:
            return "DEBUG"
        if self.verbose and self.logging.level in ("WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return self.logging.level


# =============================================================================
# Loading
# =============================================================================

DEFAULT_SEARCH_PATHS = (
    Path("./verifyzen.yaml"),
    Path("./verifyzen.yml"),
    Path.home() / ".verifyzen" / "config.yaml",
    Path.home() / ".verifyzen" / "config.yml",
)


def _read_config_file(config_file: Path) -> dict[str, Any]:
    try:
        content = config_file.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"Failed to read config file {config_file}: {type(e).__name__}. Using defaults.")
        return {}

    if not content.strip():
        return {}

    try:
        loaded = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse config file {config_file}: {e}. Using defaults.")
        return {}

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning(f"Config file {config_file} has unexpected format. Using defaults.")
        return {}
    return loaded


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from file, environment, and defaults.

    If no config file is found, uses defaults only (not an error).
    If a config file is malformed, logs a warning and uses defaults.
    Invalid environment values are treated the same way.

    Args:
        path: Optional path to config file. If None, searches default locations.

    Returns:
        Fully-populated AppConfig instance.

    Raises:
        ConfigFileError: If ``path`` is given but does not exist.

    Example:
        >>> config = load_config()  # Use defaults and env vars
        >>> config = load_config(Path("./my-config.yaml"))  # Specific file
    """
    if path is not None:
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigFileError(f"Config file not found: {path}")
        config_file: Path | None = path
    else:
        config_file = next((p for p in DEFAULT_SEARCH_PATHS if p.exists()), None)

    config_data: dict[str, Any] = {}
    if config_file is not None:
        logger.debug(f"Loading configuration from {config_file}")
        config_data = _read_config_file(config_file)

    try:
        return AppConfig(**config_data)
    except ValueError as e:
        logger.warning(f"Error parsing config values: {e}. Using defaults.")

    # The environment is read again here and may be the invalid source
    try:
        return AppConfig()
    except ValueError as e:
        logger.warning(f"Error parsing VERIFYZEN_* environment values: {e}. Using defaults.")
        return AppConfig.model_construct()


@functools.lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the cached configuration singleton.

    Loads configuration once and returns the same instance on subsequent calls.

    Returns:
        Cached AppConfig instance.
    """
    return load_config()


def reset_config() -> None:
    """Clear the configuration cache for testing.

    After calling this, the next call to get_config() will reload
    configuration from sources.
    """
    get_config.cache_clear()
