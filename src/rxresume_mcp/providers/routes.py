"""Upstream endpoint paths for each supported Reactive Resume API version."""

from typing import Dict

from src.rxresume_mcp.model.types import ApiVersion

# Shared by both API versions
_AUTH_ROUTES = {
    "login": "/api/auth/login",
    "refresh": "/api/auth/refresh",
    "logout": "/api/auth/logout",
    "health": "/api/health",
}

ROUTES: Dict[ApiVersion, Dict[str, str]] = {
    "v4": {
        **_AUTH_ROUTES,
        "current_user": "/api/user/me",
        "resumes": "/api/resume",
        "resume": "/api/resume/{resume_id}",
        "resume_lock": "/api/resume/{resume_id}/lock",
        "resume_schema": "/api/resume/schema",
    },
    "v5": {
        **_AUTH_ROUTES,
        "current_user": "/api/openapi/user/me",
        "resumes": "/api/openapi/resumes",
        "resume": "/api/openapi/resumes/{resume_id}",
        "resume_lock": "/api/openapi/resumes/{resume_id}/lock",
        "resume_schema": "/api/openapi/resumes/schema",
    },
}

# HTTP verb used to push a full resume update
UPDATE_METHODS: Dict[ApiVersion, str] = {"v4": "PATCH", "v5": "PUT"}
LOCK_METHODS: Dict[ApiVersion, str] = {"v4": "PATCH", "v5": "POST"}


def route(version: ApiVersion, name: str, **params: str) -> str:
    """Return the path for endpoint ``name`` with ``params`` substituted."""
    return ROUTES[version][name].format(**params)
