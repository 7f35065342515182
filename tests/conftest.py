"""Shared fixtures: an in-memory Reactive Resume instance behind httpx.MockTransport."""

import copy
import json
import re
from typing import Any, Dict, List, Optional

import httpx
import pytest

from src.config.config_loader import AppConfig, RxResumeConfig
from src.rxresume_mcp.services.client_holder import RxResumeClientHolder

BASE_URL = "https://resume.test"
API_KEY = "test-api-key"
ACCESS_TOKEN = "access-1"

TEST_USER = {
    "id": "user-1",
    "name": "Ada Lovelace",
    "username": "ada",
    "email": "ada@example.com",
    "locale": "en-US",
}


def _section(title: str, items: List[dict], version: str) -> dict:
    section = {"id": title.lower(), "name": title, "columns": 1, "items": items}
    if version == "v5":
        section["hidden"] = False
    else:
        section["visible"] = True
    return section


def sample_resume_data(version: str = "v5") -> dict:
    """Resume data roughly as each API version stores it."""
    if version == "v5":
        experience = [
            {
                "id": "exp-1",
                "hidden": False,
                "company": "Analytical Engines",
                "position": "Engineer",
                "location": "London",
                "period": "1842 - 1843",
                "description": "<p>Notes on the engine</p>",
                "website": {"label": "", "url": ""},
            },
            {
                "id": "exp-2",
                "hidden": False,
                "company": "Royal Society",
                "position": "Correspondent",
                "location": "",
                "period": "1840",
                "description": "",
                "website": {"label": "", "url": ""},
            },
        ]
        skills = [
            {
                "id": "skill-1",
                "hidden": False,
                "icon": "",
                "name": "Mathematics",
                "proficiency": "Expert",
                "level": 5,
                "keywords": ["analysis"],
            }
        ]
        basics = {
            "name": "Ada Lovelace",
            "headline": "Engineer",
            "email": "ada@example.com",
            "phone": "",
            "location": "London",
            "website": {"label": "Home", "url": "https://ada.example.com"},
            "customFields": [],
        }
        data = {
            "basics": basics,
            "summary": {"title": "Summary", "columns": 1, "hidden": False, "content": ""},
        }
    else:
        experience = [
            {
                "id": "exp-1",
                "visible": True,
                "company": "Analytical Engines",
                "position": "Engineer",
                "location": "London",
                "date": "1842 - 1843",
                "summary": "<p>Notes on the engine</p>",
                "url": {"label": "", "href": ""},
            },
            {
                "id": "exp-2",
                "visible": True,
                "company": "Royal Society",
                "position": "Correspondent",
                "location": "",
                "date": "1840",
                "summary": "",
                "url": {"label": "", "href": ""},
            },
        ]
        skills = [
            {
                "id": "skill-1",
                "visible": True,
                "name": "Mathematics",
                "description": "Expert",
                "level": 5,
                "keywords": ["analysis"],
            }
        ]
        basics = {
            "name": "Ada Lovelace",
            "headline": "Engineer",
            "email": "ada@example.com",
            "phone": "",
            "location": "London",
            "url": {"label": "Home", "href": "https://ada.example.com"},
            "customFields": [],
        }
        data = {"basics": basics}

    sections = {
        "experience": _section("Experience", experience, version),
        "education": _section("Education", [], version),
        "skills": _section("Skills", skills, version),
        "projects": _section("Projects", [], version),
    }
    if version == "v4":
        sections["summary"] = {
            "id": "summary",
            "name": "Summary",
            "columns": 1,
            "visible": True,
            "content": "",
        }
    data["sections"] = sections
    data["metadata"] = {"template": "onyx"}
    return data


class FakeRxResume:
    """Minimal Reactive Resume upstream speaking either the v4 or the v5 API."""

    def __init__(self, version: str = "v5"):
        self.version = version
        self.resumes: Dict[str, dict] = {}
        self.requests: List[httpx.Request] = []
        self._next_id = 1
        prefix = "/api/openapi/resumes" if version == "v5" else "/api/resume"
        self._prefix = prefix
        self._item_path = re.compile(rf"^{re.escape(prefix)}/([^/]+)$")
        self._lock_path = re.compile(rf"^{re.escape(prefix)}/([^/]+)/lock$")

    # -- helpers for tests -------------------------------------------------

    def add_resume(
        self, resume_id: Optional[str] = None, title: str = "My Resume", slug: str = "my-resume"
    ) -> dict:
        resume_id = resume_id or self._new_id()
        if self.version == "v5":
            resume = {
                "id": resume_id,
                "name": title,
                "slug": slug,
                "tags": [],
                "isPublic": False,
                "isLocked": False,
                "hasPassword": False,
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-02T00:00:00.000Z",
                "data": sample_resume_data("v5"),
            }
        else:
            resume = {
                "id": resume_id,
                "title": title,
                "slug": slug,
                "visibility": "private",
                "locked": False,
                "userId": TEST_USER["id"],
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-02T00:00:00.000Z",
                "data": sample_resume_data("v4"),
            }
        self.resumes[resume_id] = resume
        return resume

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None

    # -- request handling --------------------------------------------------

    def _new_id(self) -> str:
        resume_id = f"resume-{self._next_id}"
        self._next_id += 1
        return resume_id

    def _authorized(self, request: httpx.Request) -> bool:
        if self.version == "v5":
            return request.headers.get("x-api-key") == API_KEY
        return request.headers.get("authorization") == f"Bearer {ACCESS_TOKEN}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if path == "/api/health":
            return httpx.Response(200, json={"status": "ok"})
        if not self._authorized(request):
            return httpx.Response(401, text="Unauthorized")

        if path.endswith("/user/me"):
            return httpx.Response(200, json=TEST_USER)
        if path == f"{self._prefix}/schema":
            return httpx.Response(200, json={"type": "object"})

        if path == self._prefix:
            if method == "GET":
                listing = [
                    {k: v for k, v in r.items() if k != "data"} for r in self.resumes.values()
                ]
                return httpx.Response(200, json=listing)
            if method == "POST":
                return self._create(self.body(request))

        match = self._lock_path.match(path)
        if match:
            resume = self.resumes.get(match.group(1))
            if resume is None:
                return httpx.Response(404, text="Resume not found")
            resume.update(self.body(request))
            return httpx.Response(200, json=resume)

        match = self._item_path.match(path)
        if match:
            resume = self.resumes.get(match.group(1))
            if resume is None:
                return httpx.Response(404, text="Resume not found")
            if method == "GET":
                return httpx.Response(200, json=resume)
            if method in ("PUT", "PATCH"):
                body = self.body(request)
                resume.update({k: copy.deepcopy(v) for k, v in body.items() if k != "id"})
                return httpx.Response(200, json=resume)
            if method == "DELETE":
                del self.resumes[resume["id"]]
                return httpx.Response(204)

        return httpx.Response(404, text=f"No route for {method} {path}")

    def _create(self, body: dict) -> httpx.Response:
        if self.version == "v5":
            resume = self.add_resume(title=body["name"], slug=body["slug"])
            # v5 answers with the new id only
            return httpx.Response(200, json=resume["id"])
        resume = self.add_resume(title=body["title"], slug=body["slug"])
        resume["visibility"] = body.get("visibility", "private")
        return httpx.Response(201, json=resume)


@pytest.fixture
def upstream() -> FakeRxResume:
    return FakeRxResume("v5")


@pytest.fixture
def legacy_upstream() -> FakeRxResume:
    return FakeRxResume("v4")


@pytest.fixture
def rxresume_config() -> RxResumeConfig:
    return RxResumeConfig(base_url=BASE_URL, api_key=API_KEY, verify_on_startup=False)


@pytest.fixture
def app_config(rxresume_config) -> AppConfig:
    return AppConfig(rxresume=rxresume_config)


@pytest.fixture
def holder(rxresume_config, upstream) -> RxResumeClientHolder:
    return RxResumeClientHolder(rxresume_config, transport=upstream.transport())
