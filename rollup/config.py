"""Process configuration for the rollup node."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from rollup.errors import ConfigurationError

SERVER_URL_ENV = "ROLLUP_HTTP_SERVER_URL"


@dataclass
class RollupConfig:
    """Settings for talking to the coordinating server.

    ``poll_interval`` is the pause after a ``202`` (no pending request);
    0 keeps the busy-poll behavior. Retry settings apply only to transport
    failures.
    """

    server_url: str
    read_timeout: float = 20.0
    max_retries: int = 5
    backoff_base: float = 0.5
    backoff_max: float = 30.0
    poll_interval: float = 0.0

    def __post_init__(self) -> None:
        self.server_url = self.server_url.rstrip("/")
        if not self.server_url:
            raise ConfigurationError(f"{SERVER_URL_ENV} must not be empty")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be >= 0")

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait before retry number *attempt* (0-based)."""
        return min(self.backoff_max, self.backoff_base * (2 ** attempt))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RollupConfig":
        env = os.environ if environ is None else environ
        server_url = env.get(SERVER_URL_ENV, "").strip()
        if not server_url:
            raise ConfigurationError(f"{SERVER_URL_ENV} is not set")
        try:
            return cls(
                server_url=server_url,
                read_timeout=float(env.get("ROLLUP_READ_TIMEOUT", "20")),
                max_retries=int(env.get("ROLLUP_MAX_RETRIES", "5")),
                backoff_base=float(env.get("ROLLUP_BACKOFF_BASE", "0.5")),
                backoff_max=float(env.get("ROLLUP_BACKOFF_MAX", "30")),
                poll_interval=float(env.get("ROLLUP_POLL_INTERVAL", "0")),
            )
        except ValueError as exc:
            raise ConfigurationError(f"invalid rollup setting: {exc}") from exc
