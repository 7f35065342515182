from src.rxresume_mcp.providers.errors import (
    AuthenticationError,
    RxResumeAPIError,
    RxResumeConnectionError,
    RxResumeError,
)
from src.rxresume_mcp.providers.rxresume_client import RxResumeClient, SessionCredentials

__all__ = [
    "AuthenticationError",
    "RxResumeAPIError",
    "RxResumeClient",
    "RxResumeConnectionError",
    "RxResumeError",
    "SessionCredentials",
]
