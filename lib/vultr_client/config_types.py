from __future__ import annotations

from dataclasses import dataclass

import httpx

DEFAULT_BASE_URL = "https://api.vultr.com/v1/"
DEFAULT_AGENT = "Vultr.com API Client"
DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class ClientConfig:
    token: str
    base_url: str = DEFAULT_BASE_URL
    agent: str = DEFAULT_AGENT
    version: str = "1.0"
    timeout_s: float = DEFAULT_TIMEOUT_S
    debug: bool = False
    verify_tls: bool = True
    # Swapped in by tests to talk to an httpx.MockTransport.
    transport: httpx.BaseTransport | None = None

    @property
    def user_agent(self) -> str:
        return f"{self.agent} v{self.version}"
