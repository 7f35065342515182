# Reactive Resume MCP Package - Main exports
# Server and tools should be imported directly by modules that need them

from src.rxresume_mcp.model.types import (
    ApiVersion,
    Resume,
    ResumeListItem,
    SectionName,
)
from src.rxresume_mcp.providers.rxresume_client import RxResumeClient

__all__ = [
    "ApiVersion",
    "Resume",
    "ResumeListItem",
    "RxResumeClient",
    "SectionName",
]
