from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from .core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 600.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by every call a client makes.

    Instances are frozen: a client built from a config never changes it, so
    the same config can back any number of concurrent calls.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    organization: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    default_headers: Dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    proxy: Optional[str] = None

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("api_key must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, dotenv_path: str = None, **overrides) -> "ClientConfig":
        """Build a config from the process environment.

        A ``.env`` file is loaded first (existing variables win). The
        environment is read once here and never consulted again.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        values = {
            "api_key": api_key,
            "base_url": os.environ.get("OPENAI_API_BASE", os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL)),
            "organization": os.environ.get("OPENAI_ORG_ID", os.environ.get("OPENAI_ORGANIZATION")),
        }

        timeout = os.environ.get("OPENAI_TIMEOUT")
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                raise ConfigurationError(f"OPENAI_TIMEOUT is not a number: {timeout!r}")

        values.update(overrides)
        return cls(**values)

    def __repr__(self):
        return f"ClientConfig(base_url={self.base_url!r}, api_key='***', organization={self.organization!r})"
