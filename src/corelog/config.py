"""Configuration system for corelog.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (CORELOG_*) -> .env file -> field defaults.

Launch-time overrides (force debug, force non-debug, force raw output) can
come either from configuration or from the process arguments. They are
merged once, at initialization, by :meth:`LaunchOverrides.resolve`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import Sequence

# Process arguments recognised at initialization.
DEBUG_DISABLED_ARGUMENT = "--corelog-debug-disabled"
DEBUG_ENABLED_ARGUMENT = "--corelog-debug-enabled"
FORCE_STDERR_ARGUMENT = "--corelog-force-stderr"


def _default_cache_dir() -> Path:
    return Path.home() / ".cache" / "corelog"


def _default_preferences_path() -> Path:
    return Path.home() / ".config" / "corelog" / "preferences.json"


class CoreLogConfig(BaseSettings):
    """Configuration for corelog.

    Resolution order: init kwargs -> env vars (CORELOG_*) -> .env file -> defaults.

    Fields are divided into three groups:
    - **Storage**: where issue counters and the debug preference live.
    - **Output**: which destination receives formatted lines and how they
      are stamped.
    - **Policy**: launch overrides, strict mode, and the
      restricted-distribution signal.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Storage ---

    cache_dir: Path = Field(
        default_factory=_default_cache_dir,
        description="Per-application cache directory holding the issue counter files",
    )
    preferences_path: Path = Field(
        default_factory=_default_preferences_path,
        description="JSON file holding the persisted debug-mode preference",
    )

    # --- Output ---

    destination: str = Field(
        default="logging",
        description="Registered log destination: 'logging', 'stderr', 'memory'",
    )
    system_logger_name: str = Field(
        default="corelog.system",
        description="stdlib logger name used by the 'logging' destination",
    )
    version_stamp: str = Field(
        default="",
        description="Build/version stamp prefixed to every line (empty = package version)",
    )
    native_log_min_os_version: int = Field(
        default=0,
        description="OS major versions below this write raw lines to stderr (0 disables)",
    )

    # --- Policy ---

    strict_mode: bool = Field(
        default=False,
        description="Reject malformed diagnostic codes with MalformedCodeError",
    )
    force_debug: bool = Field(
        default=False,
        description="Enable debug mode at initialization and persist the preference",
    )
    force_no_debug: bool = Field(
        default=False,
        description="Disable debug mode at initialization and clear the preference",
    )
    force_raw_output: bool = Field(
        default=False,
        description="Write raw lines to stderr instead of the configured destination",
    )
    restricted_distribution: bool = Field(
        default=False,
        description="The host was installed from a curated distribution channel",
    )
    distribution_receipt_path: str = Field(
        default="",
        description="File whose presence signals restricted distribution (empty disables)",
    )


@dataclass(frozen=True, slots=True)
class LaunchOverrides:
    """Launch-time overrides read once at initialization.

    Precedence when applied: ``debug_disabled`` > ``debug_enabled`` >
    the previously persisted preference.
    """

    debug_disabled: bool = False
    debug_enabled: bool = False
    force_raw_output: bool = False

    @classmethod
    def resolve(
        cls,
        config: CoreLogConfig,
        argv: Sequence[str] | None = None,
    ) -> LaunchOverrides:
        """Merge configuration flags with process arguments.

        Args:
            config: Configuration providing the ``force_*`` flags.
            argv: Process arguments; defaults to ``sys.argv``.

        Returns:
            The merged overrides. A flag is set if either source sets it.
        """
        args = frozenset(sys.argv if argv is None else argv)
        return cls(
            debug_disabled=config.force_no_debug or DEBUG_DISABLED_ARGUMENT in args,
            debug_enabled=config.force_debug or DEBUG_ENABLED_ARGUMENT in args,
            force_raw_output=config.force_raw_output or FORCE_STDERR_ARGUMENT in args,
        )
