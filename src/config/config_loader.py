"""Central configuration loader for rxresume.yaml with env var overrides."""

import os
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel


class RxResumeConfig(BaseModel):
    base_url: str = "https://rxresu.me"
    api_version: Literal["v4", "v5"] = "v5"
    api_key: str = ""
    email: str = ""
    password: str = ""
    timeout: Optional[float] = None  # None disables the httpx timeout
    verify_on_startup: bool = True


class MCPServerConfig(BaseModel):
    name: str = "rxresume-mcp"
    version: str = "1.0.0"
    host: str = "localhost"
    port: int = 8000


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_file: Optional[str] = None


class AppConfig(BaseModel):
    rxresume: RxResumeConfig = RxResumeConfig()
    mcp_server: MCPServerConfig = MCPServerConfig()
    observability: ObservabilityConfig = ObservabilityConfig()


_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "rxresume.yaml"
_cached_config: Optional["AppConfig"] = None

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _cast_env_value(annotation, value: str):
    if annotation is bool:
        return value.strip().lower() in _TRUE_VALUES
    if annotation in (int, float):
        return annotation(value)
    if annotation == Optional[float]:
        return float(value) if value.strip() else None
    return value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load config from YAML file and merge with environment variable overrides.

    Priority: env vars > YAML file > defaults.
    """
    global _cached_config

    if _cached_config is not None and config_path is None:
        return _cached_config

    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    data: Dict = {}
    if path.exists():
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

    config = AppConfig(**data)

    # Env var overrides
    env_overrides = {
        "rxresume.base_url": os.getenv("RXRESUME_BASE_URL"),
        "rxresume.api_key": os.getenv("RXRESUME_API_KEY"),
        "rxresume.api_version": os.getenv("RXRESUME_API_VERSION"),
        "rxresume.email": os.getenv("RXRESUME_EMAIL"),
        "rxresume.password": os.getenv("RXRESUME_PASSWORD"),
        "rxresume.timeout": os.getenv("RXRESUME_TIMEOUT"),
        "rxresume.verify_on_startup": os.getenv("RXRESUME_VERIFY_ON_STARTUP"),
        "mcp_server.host": os.getenv("MCP_SERVER_HOST"),
        "mcp_server.port": os.getenv("MCP_SERVER_PORT"),
        "observability.log_level": os.getenv("RXRESUME_MCP_LOG_LEVEL"),
        "observability.log_file": os.getenv("RXRESUME_MCP_LOG_FILE"),
    }

    for dotted_key, value in env_overrides.items():
        if value is not None:
            parts = dotted_key.split(".")
            obj = config
            for part in parts[:-1]:
                obj = getattr(obj, part)
            field = parts[-1]
            field_info = type(obj).model_fields[field]
            setattr(obj, field, _cast_env_value(field_info.annotation, value))

    # Re-validate so an env-supplied api_version outside v4/v5 is rejected
    config = AppConfig.model_validate(config.model_dump())

    if config_path is None:
        _cached_config = config

    return config


def reset_config_cache() -> None:
    """Forget the cached default config so the next load re-reads file and env."""
    global _cached_config
    _cached_config = None
