from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.constants import DEFAULT_HTTP_TIMEOUT


@dataclass
class GatewayConfig:
    url: str
    api_key: str
    timeout: float = DEFAULT_HTTP_TIMEOUT


class SupabaseConnection:
    """Singleton-like factory for clients talking to the Supabase REST API.

    Note: We create short-lived clients per operation (safe for simple Flask apps).
    """

    _instance: Optional["SupabaseConnection"] = None

    def __init__(self, config: GatewayConfig, *, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._transport = transport

    @classmethod
    def get_instance(cls, config: GatewayConfig) -> "SupabaseConnection":
        if cls._instance is None:
            cls._instance = SupabaseConnection(config)
        return cls._instance

    @property
    def base_url(self) -> str:
        return self._config.url.rstrip("/") + "/rest/v1"

    def connect(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers={
                "apikey": self._config.api_key,
                "Authorization": f"Bearer {self._config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=float(self._config.timeout),
            transport=self._transport,
        )
