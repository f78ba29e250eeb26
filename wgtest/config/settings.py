from __future__ import annotations

"""wgtest/config/settings.py

Environment-driven settings for the config tester.

This module centralizes:
- binary names for the WireGuard / iproute2 collaborators
- default locations of the working set and result files
- lifecycle timing (settle delay, optional timeouts)
- line-ending handling for CRLF configs

Every field can be overridden with a `WGTEST_` prefixed environment
variable or a `.env` file.
"""
from functools import lru_cache
from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

from wgtest.models import LineEndingPolicy


class Settings(BaseSettings):
  app_name: str = "wgtest"

  # External collaborators
  wg_binary: str = "wg"
  wg_quick_binary: str = "wg-quick"
  ip_binary: str = "ip"

  # Layout (relative names resolve against the configs directory)
  default_configs_dir: str = "./configs"
  working_dir_name: str = "working_configs"
  log_file_name: str = "test_results.log"
  summary_file_name: str = "test_results.json"
  report_file_name: str = "test_results.md"

  # Lifecycle timing (seconds). None means "wait for completion".
  settle_delay_seconds: float = 2.0
  activation_timeout_seconds: int | None = None
  command_timeout_seconds: int | None = None

  # Extra environment for every wg / wg-quick / ip call, e.g.
  # WGTEST_COMMAND_ENV='{"WG_QUICK_USERSPACE_IMPLEMENTATION": "boringtun"}'
  command_env: Dict[str, str] = {}

  line_ending_policy: LineEndingPolicy = LineEndingPolicy.IN_PLACE

  require_root: bool = True
  log_level: str = "INFO"

  model_config = SettingsConfigDict(
      env_prefix="WGTEST_",
      env_file=".env",
      env_file_encoding="utf-8",
      extra="ignore",
  )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
