from __future__ import annotations

import logging

from vultr_client import ConfigError, VultrClient
from vultr_client.config_types import DEFAULT_BASE_URL, ClientConfig

from .config import AppConfig, normalize_base_url


def make_client(cfg: AppConfig, *, base_url_override: str | None = None) -> VultrClient:
    base_url = normalize_base_url(base_url_override or cfg.base_url)
    token = (cfg.auth.token or "").strip()
    if not token:
        raise ConfigError("API key is not set. Run 'vultr settings init' or export VULTR_API_KEY.")
    return VultrClient(
        ClientConfig(
            token=token,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout_s=cfg.timeout_s,
            verify_tls=cfg.verify_tls,
            debug=logging.getLogger("vultr_client").isEnabledFor(logging.DEBUG),
        )
    )
