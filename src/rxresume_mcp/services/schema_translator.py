"""Mapping between the normalized resume shape and the upstream API versions.

The tools work with one normalized shape (``title``, ``visibility``,
``locked``; items with ``date``/``url``/``summary``/``visible``). The legacy
v4 API already speaks that shape, so every v4 mapping is a copy. The v5
OpenAPI renames a handful of fields:

    resume:     title -> name, visibility -> isPublic, locked -> isLocked
    items:      visible -> hidden (negated), url{label, href} -> website{label, url}
    experience: date -> period, summary -> description
    education:  institution -> school, studyType -> degree, score -> grade,
                date -> period, summary -> description
    skills:     description -> proficiency
    projects:   date -> period, summary (or description) -> description

All functions are pure and return new objects; inputs are never mutated.
"""

import copy
from typing import Any, Dict, Optional, Union

from src.rxresume_mcp.model.types import (
    ApiVersion,
    CreateResumeDto,
    CreateResumeDtoV5,
    Resume,
    ResumeBasics,
    ResumeListItem,
    ResumeListItemV5,
    ResumeSection,
    ResumeV5,
    SectionItem,
    SectionItemV5,
    UpdateResumeDto,
    UpdateResumeDtoV5,
    UrlLink,
    Visibility,
    WebsiteLink,
)

_V5_ITEM_RENAMES: Dict[str, Dict[str, str]] = {
    "experience": {"date": "period", "summary": "description"},
    "education": {
        "institution": "school",
        "studyType": "degree",
        "score": "grade",
        "date": "period",
        "summary": "description",
    },
    "skills": {"description": "proficiency"},
    "projects": {"date": "period", "summary": "description"},
}

_V5_ITEM_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "experience": {"location": ""},
    "education": {"location": ""},
    "skills": {"icon": "", "keywords": []},
}

# v5 projects have no keyword list
_V5_ITEM_DROPPED: Dict[str, tuple] = {"projects": ("keywords",)}

_RESUME_RENAMES = {"title": "name", "locked": "isLocked"}


def _link_to_v5(link: UrlLink) -> WebsiteLink:
    return {("url" if key == "href" else key): value for key, value in link.items()}


def _link_from_v5(link: WebsiteLink) -> UrlLink:
    return {("href" if key == "url" else key): value for key, value in link.items()}


def visibility_from_flag(is_public: bool) -> Visibility:
    return "public" if is_public else "private"


def resume_from_upstream(
    raw: Union[ResumeV5, ResumeListItemV5, Resume], version: ApiVersion
) -> Union[Resume, ResumeListItem]:
    """Normalize a resume or resume list item returned by the upstream API."""
    if version == "v4":
        return dict(raw)

    inverse = {upstream: normalized for normalized, upstream in _RESUME_RENAMES.items()}
    resume: Dict[str, Any] = {}
    for key, value in raw.items():
        if key == "isPublic":
            resume["visibility"] = visibility_from_flag(bool(value))
        else:
            resume[inverse.get(key, key)] = value
    return resume


def resume_to_upstream(
    resume: UpdateResumeDto, version: ApiVersion
) -> Union[UpdateResumeDto, UpdateResumeDtoV5]:
    """Inverse of :func:`resume_from_upstream`."""
    if version == "v4":
        return dict(resume)

    raw: Dict[str, Any] = {}
    for key, value in resume.items():
        if key == "visibility":
            raw["isPublic"] = value == "public"
        else:
            raw[_RESUME_RENAMES.get(key, key)] = value
    return raw


def resume_create_to_upstream(
    title: str, slug: str, visibility: Visibility, version: ApiVersion
) -> Union[CreateResumeDto, CreateResumeDtoV5]:
    """Build the create payload. v5 cannot set visibility at creation time."""
    if version == "v4":
        return CreateResumeDto(title=title, slug=slug, visibility=visibility)
    return CreateResumeDtoV5(name=title, slug=slug, tags=[], withSampleData=False)


def resume_update_to_upstream(
    resume_id: str, updates: UpdateResumeDto, version: ApiVersion
) -> Union[UpdateResumeDto, UpdateResumeDtoV5]:
    """Build the body of a full update call from a normalized partial resume."""
    if version == "v4":
        return dict(updates)
    return {"id": resume_id, **resume_to_upstream(updates, version)}


def item_to_upstream(
    section: str, item: SectionItem, version: ApiVersion
) -> SectionItemV5:
    """Convert a normalized section item to the upstream layout."""
    item = copy.deepcopy(item)
    if version == "v4":
        return item

    if section == "projects":
        description = item.pop("description", "")
        if "summary" in item or description:
            item["summary"] = item.get("summary") or description

    renames = _V5_ITEM_RENAMES.get(section, {})
    dropped = _V5_ITEM_DROPPED.get(section, ())
    upstream: Dict[str, Any] = {}
    for key, value in item.items():
        if key in dropped:
            continue
        if key == "visible":
            upstream["hidden"] = not value
        elif key == "url" and isinstance(value, dict):
            upstream["website"] = _link_to_v5(value)
        else:
            upstream[renames.get(key, key)] = value

    for key, default in _V5_ITEM_DEFAULTS.get(section, {}).items():
        upstream.setdefault(key, copy.deepcopy(default))
    return upstream


def item_from_upstream(
    section: str, item: SectionItemV5, version: ApiVersion
) -> SectionItem:
    """Convert an upstream section item to the normalized layout."""
    item = copy.deepcopy(item)
    if version == "v4":
        return item

    inverse = {v: k for k, v in _V5_ITEM_RENAMES.get(section, {}).items()}
    normalized: Dict[str, Any] = {}
    for key, value in item.items():
        if key == "hidden":
            normalized["visible"] = not value
        elif key == "website" and isinstance(value, dict):
            normalized["url"] = _link_from_v5(value)
        else:
            normalized[inverse.get(key, key)] = value
    return normalized


def section_from_upstream(
    section: str, payload: Dict[str, Any], version: ApiVersion
) -> ResumeSection:
    """Normalize a whole section: its visibility flag and every item."""
    payload = copy.deepcopy(payload)
    if version == "v4":
        return payload

    normalized: Dict[str, Any] = {}
    for key, value in payload.items():
        if key == "hidden":
            normalized["visible"] = not value
        elif key == "items" and isinstance(value, list):
            normalized["items"] = [
                item_from_upstream(section, item, version) for item in value
            ]
        else:
            normalized[key] = value
    return normalized


def basics_to_upstream(basics: ResumeBasics, version: ApiVersion) -> Dict[str, Any]:
    basics = copy.deepcopy(basics)
    if version == "v4" or not isinstance(basics.get("url"), dict):
        return basics
    basics["website"] = _link_to_v5(basics.pop("url"))
    return basics


def basics_from_upstream(basics: Dict[str, Any], version: ApiVersion) -> ResumeBasics:
    basics = copy.deepcopy(basics)
    if version == "v4" or not isinstance(basics.get("website"), dict):
        return basics
    basics["url"] = _link_from_v5(basics.pop("website"))
    return basics


def section_visibility_patch(visible: bool, version: ApiVersion) -> Dict[str, bool]:
    if version == "v4":
        return {"visible": visible}
    return {"hidden": not visible}


def find_section(data: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
    """Locate a section in resume data.

    Sections normally live under ``data["sections"]``; v5 keeps ``summary``
    at the top level of ``data``. The returned dict is the one inside
    ``data`` so callers can mutate it in place.
    """
    sections = data.get("sections") or {}
    if isinstance(sections.get(name), dict):
        return sections[name]
    if isinstance(data.get(name), dict):
        return data[name]
    return None
