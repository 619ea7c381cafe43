from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Self


@dataclass(frozen=True)
class RailwaySettings:
    """Credentials and options for the railwayapi.com v2 API."""

    api_key: str
    base_url: str = "https://api.railwayapi.com"
    user_agent: str = "india-rail"
    timeout: float = 15.0

    @classmethod
    def from_env_optional(cls) -> Optional[Self]:
        api_key = os.environ.get("RAILWAYAPI_KEY")
        if not api_key:
            return None

        base_url = os.environ.get("RAILWAYAPI_BASE_URL", cls.base_url)
        user_agent = os.environ.get("RAILWAYAPI_USER_AGENT", cls.user_agent)
        timeout = float(os.environ.get("RAILWAYAPI_TIMEOUT", cls.timeout))
        return cls(api_key=api_key, base_url=base_url, user_agent=user_agent, timeout=timeout)

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""

        settings = cls.from_env_optional()
        if settings is None:
            raise RuntimeError("Missing railwayapi.com credential in environment: RAILWAYAPI_KEY")
        return settings
