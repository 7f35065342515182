from typing import Optional

import httpx
from loguru import logger

from src.config.config_loader import RxResumeConfig
from src.rxresume_mcp.providers.rxresume_client import RxResumeClient


class RxResumeClientHolder:
    """Owns the single active API client for a server instance.

    Tools look the client up through the holder on every call, so replacing
    it (``set_base_url``) takes effect for the next invocation and drops any
    session state the previous client held.
    """

    def __init__(
        self,
        config: RxResumeConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.transport = transport
        self._client = self._build_client(config.base_url, config.api_key or None)

    def _build_client(self, base_url: str, api_key: Optional[str]) -> RxResumeClient:
        return RxResumeClient(
            base_url,
            api_version=self.config.api_version,
            api_key=api_key,
            timeout=self.config.timeout,
            transport=self.transport,
        )

    @property
    def client(self) -> RxResumeClient:
        return self._client

    def set_base_url(self, base_url: str) -> RxResumeClient:
        """Point at another instance with a fresh, unauthenticated client."""
        logger.info(f"Switching Reactive Resume base URL to {base_url}")
        self._client = self._build_client(base_url, api_key=None)
        return self._client
