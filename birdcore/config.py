# =============================================================================
# birdcore/config.py  -  Runtime Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of knobs the server needs from environment variables
#   (optionally loaded from a .env file by the entry points):
#
#     BIRD_API_BASE_URL    Where the bird data REST API lives
#                          (default: http://shayk.dev/avibase-mcp)
#     BIRD_API_TIMEOUT     Seconds to wait for the API before giving up
#                          (default: 15)
#     BIRD_MCP_LOG_LEVEL   Log level for the tool server (default: INFO)
#     BIRD_AGENT_MODEL     LiteLlm model string for the console agent
#                          (default: openrouter/openai/gpt-4o)
#
#   Settings are read once and frozen.  Nothing else in birdcore/ touches
#   os.environ.
# =============================================================================

from dataclasses import dataclass
import os
from typing import Mapping, Optional

DEFAULT_BASE_URL = "http://shayk.dev/avibase-mcp"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class Settings:
    """Everything the server needs to reach the bird data API."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    agent_model: str = DEFAULT_AGENT_MODEL


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"BIRD_API_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"BIRD_API_TIMEOUT must be positive, got {raw!r}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass a
                 plain dict instead of patching the process environment.

    Returns:
        A frozen Settings instance.  Unset or blank variables fall back to
        the defaults above.

    Raises:
        ValueError: if BIRD_API_TIMEOUT is not a positive number.
    """
    env = os.environ if environ is None else environ

    base_url = (env.get("BIRD_API_BASE_URL") or "").strip() or DEFAULT_BASE_URL
    raw_timeout = (env.get("BIRD_API_TIMEOUT") or "").strip()
    log_level = (env.get("BIRD_MCP_LOG_LEVEL") or "").strip() or DEFAULT_LOG_LEVEL
    agent_model = (env.get("BIRD_AGENT_MODEL") or "").strip() or DEFAULT_AGENT_MODEL

    return Settings(
        base_url=base_url.rstrip("/"),
        timeout_seconds=_parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS,
        log_level=log_level.upper(),
        agent_model=agent_model,
    )
