import copy
from typing import Any, Callable, Dict, List, Literal, Optional

import httpx
from loguru import logger
from pydantic import BaseModel

from src.config.trace_context import inject_trace_id_to_headers
from src.rxresume_mcp.model.types import (
    ApiVersion,
    AuthTokens,
    LoginResponse,
    Resume,
    ResumeBasics,
    ResumeListItem,
    SectionItem,
    UpdateResumeDto,
    User,
    Visibility,
)
from src.rxresume_mcp.providers.errors import (
    AuthenticationError,
    RxResumeAPIError,
    RxResumeConnectionError,
    RxResumeError,
)
from src.rxresume_mcp.providers.routes import LOCK_METHODS, UPDATE_METHODS, route
from src.rxresume_mcp.services.schema_translator import (
    basics_to_upstream,
    find_section,
    item_to_upstream,
    resume_create_to_upstream,
    resume_from_upstream,
    resume_to_upstream,
    resume_update_to_upstream,
    section_visibility_patch,
)

API_KEY_HEADER = "x-api-key"
ACCESS_COOKIE = "Authentication"
REFRESH_COOKIE = "Refresh"


class SessionCredentials(BaseModel):
    """In-memory credentials for one client. Never persisted."""

    api_key: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    cookies: List[str] = []


class RxResumeClient:
    """
    Async HTTP client for a Reactive Resume instance.

    Holds at most one active credential (an API key, or a bearer/refresh token
    pair from a cookie session login) and translates between the normalized
    resume shape and the configured upstream API version. A fresh
    ``httpx.AsyncClient`` is opened per request, so an instance is not bound to
    any event loop.
    """

    def __init__(
        self,
        base_url: str,
        api_version: ApiVersion = "v5",
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self.transport = transport
        self.credentials = SessionCredentials()
        if api_key:
            self.set_api_key(api_key)

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def set_api_key(self, api_key: str) -> None:
        self.credentials.api_key = api_key

    def set_tokens(self, access_token: str, refresh_token: str) -> None:
        self.credentials.access_token = access_token
        self.credentials.refresh_token = refresh_token

    def get_tokens(self) -> Optional[AuthTokens]:
        if self.credentials.access_token and self.credentials.refresh_token:
            return AuthTokens(
                accessToken=self.credentials.access_token,
                refreshToken=self.credentials.refresh_token,
            )
        return None

    def is_authenticated(self) -> bool:
        return bool(self.credentials.api_key or self.credentials.access_token)

    @property
    def auth_mode(self) -> Optional[Literal["api_key", "bearer"]]:
        if self.credentials.api_key:
            return "api_key"
        if self.credentials.access_token:
            return "bearer"
        return None

    def _store_cookie(self, cookie: str) -> None:
        """Remember a ``name=value`` cookie, replacing any with the same name."""
        name, _, value = cookie.partition("=")
        self.credentials.cookies = [
            c for c in self.credentials.cookies if c.partition("=")[0] != name
        ] + [cookie]
        if name == ACCESS_COOKIE:
            self.credentials.access_token = value
        elif name == REFRESH_COOKIE:
            self.credentials.refresh_token = value

    @staticmethod
    def _extract_cookies(response: httpx.Response) -> List[str]:
        return [
            header.split(";")[0].strip()
            for header in response.headers.get_list("set-cookie")
            if header.strip()
        ]

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _route(self, name: str, **params: str) -> str:
        return route(self.api_version, name, **params)

    def _build_headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        request_headers = inject_trace_id_to_headers({"Content-Type": "application/json"})
        request_headers.update(headers or {})

        # An API key suppresses the legacy bearer session entirely
        if self.credentials.api_key:
            request_headers[API_KEY_HEADER] = self.credentials.api_key
            return request_headers

        if self.credentials.access_token:
            request_headers["Authorization"] = f"Bearer {self.credentials.access_token}"
        if self.credentials.cookies:
            request_headers["Cookie"] = "; ".join(self.credentials.cookies)
        return request_headers

    async def _send(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        json_body: Any = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                return await client.request(method, url, headers=headers, json=json_body)
        except httpx.TransportError as e:
            raise RxResumeConnectionError(f"Could not reach {url}: {e}") from e

    def _can_refresh(self) -> bool:
        return not self.credentials.api_key and bool(self.credentials.refresh_token)

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = await self._send(method, path, self._build_headers(headers), json_body)

        if response.status_code == 401 and self._can_refresh():
            logger.info("Access token rejected, attempting a silent refresh")
            if await self._refresh_access_token():
                response = await self._send(
                    method, path, self._build_headers(headers), json_body
                )
            else:
                logger.warning("Token refresh failed, surfacing the original 401")

        if not response.is_success:
            raise RxResumeAPIError(
                response.status_code, response.reason_phrase, response.text
            )

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type and response.content:
            return response.json()
        return response.text

    async def _refresh_access_token(self) -> bool:
        """Exchange the refresh token for a new access token. Never raises."""
        if not self.credentials.refresh_token:
            return False

        headers = inject_trace_id_to_headers(
            {
                "Content-Type": "application/json",
                "Cookie": f"{REFRESH_COOKIE}={self.credentials.refresh_token}",
            }
        )
        try:
            response = await self._send("POST", self._route("refresh"), headers)
        except RxResumeConnectionError as e:
            logger.warning(f"Token refresh request failed: {e}")
            return False

        if not response.is_success:
            return False

        refreshed = False
        for cookie in self._extract_cookies(response):
            if cookie.startswith(f"{ACCESS_COOKIE}="):
                refreshed = True
            self._store_cookie(cookie)
        return refreshed

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def login(self, identifier: str, password: str) -> LoginResponse:
        """Open a legacy cookie session with email/username and password."""
        response = await self._send(
            "POST",
            self._route("login"),
            inject_trace_id_to_headers({"Content-Type": "application/json"}),
            {"identifier": identifier, "password": password},
        )
        if not response.is_success:
            raise AuthenticationError(
                f"Login failed: {response.status_code} - {response.text}"
            )

        cookies = self._extract_cookies(response)
        if cookies:
            self.credentials.cookies = []
            for cookie in cookies:
                self._store_cookie(cookie)

        return response.json()

    async def login_with_tokens(self, access_token: str, refresh_token: str) -> User:
        self.set_tokens(access_token, refresh_token)
        return await self.get_current_user()

    async def logout(self) -> None:
        await self._request("POST", self._route("logout"))
        self.credentials.access_token = None
        self.credentials.refresh_token = None
        self.credentials.cookies = []

    async def health_check(self) -> Any:
        return await self._request("GET", self._route("health"))

    async def get_current_user(self) -> User:
        return await self._request("GET", self._route("current_user"))

    # ------------------------------------------------------------------
    # Resumes
    # ------------------------------------------------------------------

    @staticmethod
    def _expect_resume(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise RxResumeError(
                f"Unexpected response from upstream, expected a resume object: {payload!r}"
            )
        return payload

    async def list_resumes(self) -> List[ResumeListItem]:
        payload = await self._request("GET", self._route("resumes"))
        if not isinstance(payload, list):
            raise RxResumeError(
                f"Unexpected response from upstream, expected a list: {payload!r}"
            )
        return [resume_from_upstream(item, self.api_version) for item in payload]

    async def get_resume(self, resume_id: str) -> Resume:
        payload = await self._request("GET", self._route("resume", resume_id=resume_id))
        return resume_from_upstream(self._expect_resume(payload), self.api_version)

    async def create_resume(
        self, title: str, slug: str, visibility: Visibility = "private"
    ) -> Resume:
        body = resume_create_to_upstream(title, slug, visibility, self.api_version)
        created = await self._request("POST", self._route("resumes"), json_body=body)

        # v5 answers a create with the new resume id only
        if isinstance(created, str):
            resume_id = created.strip().strip('"')
            resume = None
        else:
            resume = resume_from_upstream(self._expect_resume(created), self.api_version)
            resume_id = resume["id"]

        if self.api_version == "v5" and visibility == "public":
            return await self.update_resume(resume_id, {"visibility": "public"})
        if resume is None:
            return await self.get_resume(resume_id)
        return resume

    async def update_resume(self, resume_id: str, updates: UpdateResumeDto) -> Resume:
        """Push a normalized partial resume (title, slug, visibility, data)."""
        body = resume_update_to_upstream(resume_id, updates, self.api_version)
        payload = await self._request(
            UPDATE_METHODS[self.api_version],
            self._route("resume", resume_id=resume_id),
            json_body=body,
        )
        return resume_from_upstream(self._expect_resume(payload), self.api_version)

    async def delete_resume(self, resume_id: str) -> None:
        await self._request("DELETE", self._route("resume", resume_id=resume_id))

    async def lock_resume(self, resume_id: str, locked: bool) -> Resume:
        payload = await self._request(
            LOCK_METHODS[self.api_version],
            self._route("resume_lock", resume_id=resume_id),
            json_body=resume_to_upstream({"locked": locked}, self.api_version),
        )
        return resume_from_upstream(self._expect_resume(payload), self.api_version)

    async def get_resume_schema(self) -> Any:
        return await self._request("GET", self._route("resume_schema"))

    # ------------------------------------------------------------------
    # Read-modify-write section editing
    #
    # Every call below fetches the resume once, edits a deep copy of its data
    # and pushes the whole data object back. There is no version check, so a
    # concurrent writer's change to the same resume can be overwritten.
    # ------------------------------------------------------------------

    async def _mutate_resume_data(
        self, resume_id: str, mutate: Callable[[Dict[str, Any]], None]
    ) -> Resume:
        resume = await self.get_resume(resume_id)
        data = copy.deepcopy(resume.get("data") or {})
        mutate(data)
        return await self.update_resume(resume_id, {"data": data})

    @staticmethod
    def _require_section(
        data: Dict[str, Any], section: str, resume_id: str
    ) -> Dict[str, Any]:
        payload = find_section(data, section)
        if payload is None:
            raise RxResumeError(f"Section '{section}' not found in resume {resume_id}")
        return payload

    async def update_section(
        self, resume_id: str, section: str, updates: Dict[str, Any]
    ) -> Resume:
        """Merge ``updates`` into a section, leaving its other fields and items as they are."""

        def apply(data: Dict[str, Any]) -> None:
            self._require_section(data, section, resume_id).update(copy.deepcopy(updates))

        return await self._mutate_resume_data(resume_id, apply)

    async def set_section_visibility(
        self, resume_id: str, section: str, visible: bool
    ) -> Resume:
        return await self.update_section(
            resume_id, section, section_visibility_patch(visible, self.api_version)
        )

    async def add_section_item(
        self, resume_id: str, section: str, item: SectionItem
    ) -> Resume:
        """Append a normalized item to the end of a section."""
        upstream_item = item_to_upstream(section, item, self.api_version)

        def apply(data: Dict[str, Any]) -> None:
            payload = self._require_section(data, section, resume_id)
            payload["items"] = [*payload.get("items", []), upstream_item]

        return await self._mutate_resume_data(resume_id, apply)

    async def update_section_item(
        self, resume_id: str, section: str, item_id: str, updates: Dict[str, Any]
    ) -> Resume:
        """Shallow-merge ``updates`` (upstream field names) into one item."""

        def apply(data: Dict[str, Any]) -> None:
            payload = self._require_section(data, section, resume_id)
            items = payload.get("items", [])
            if not any(item.get("id") == item_id for item in items):
                raise RxResumeError(f"Item {item_id} not found in section '{section}'")
            payload["items"] = [
                {**item, **updates} if item.get("id") == item_id else item
                for item in items
            ]

        return await self._mutate_resume_data(resume_id, apply)

    async def remove_section_item(
        self, resume_id: str, section: str, item_id: str
    ) -> Resume:
        """Drop the first item with ``item_id``; a missing id leaves the section unchanged."""

        def apply(data: Dict[str, Any]) -> None:
            payload = self._require_section(data, section, resume_id)
            items = payload.get("items", [])
            index = next(
                (i for i, item in enumerate(items) if item.get("id") == item_id), None
            )
            if index is not None:
                payload["items"] = items[:index] + items[index + 1 :]

        return await self._mutate_resume_data(resume_id, apply)

    async def update_basics(self, resume_id: str, basics: ResumeBasics) -> Resume:
        """Merge normalized basics into the resume; nested links merge per key."""
        upstream = basics_to_upstream(basics, self.api_version)

        def apply(data: Dict[str, Any]) -> None:
            current = data.setdefault("basics", {})
            for key, value in upstream.items():
                if isinstance(value, dict) and isinstance(current.get(key), dict):
                    current[key] = {**current[key], **value}
                else:
                    current[key] = value

        return await self._mutate_resume_data(resume_id, apply)
