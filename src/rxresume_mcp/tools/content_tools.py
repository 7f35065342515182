"""MCP tools for editing resume content.

Every edit is a read-modify-write of the whole resume data object. Items are
built in the normalized shape here; the client converts them to the upstream
layout (v5 stores ``period``/``website``/``description``/``hidden``).
"""

import json
from typing import Annotated, List, Optional

from pydantic import Field

from src.rxresume_mcp.model.types import (
    EducationItem,
    ExperienceItem,
    ItemSectionName,
    ProjectItem,
    SectionName,
    SkillItem,
)
from src.rxresume_mcp.services.client_holder import RxResumeClientHolder
from src.rxresume_mcp.tools.common import EmailAddress, ResumeId, UrlString, tool_call
from src.rxresume_mcp.utils.identifiers import generate_item_id


def _link(url: Optional[str]) -> dict:
    return {"label": "", "href": url or ""}


def register_content_tools(mcp, holder: RxResumeClientHolder) -> list[str]:
    """Register content editing MCP tools."""

    @mcp.tool
    async def update_resume_basics(
        resume_id: ResumeId,
        name: Optional[str] = None,
        headline: Optional[str] = None,
        email: Optional[EmailAddress] = None,
        phone: Optional[str] = None,
        location: Optional[str] = None,
        url_label: Optional[str] = None,
        url_href: Optional[UrlString] = None,
    ) -> str:
        """
        Update basic information (name, headline, email, phone, location, URL).
        Fields that are not provided keep their current value.

        Args:
            resume_id: The resume ID
            name: Full name
            headline: Professional headline/title
            email: Email address
            phone: Phone number
            location: Location/Address
            url_label: Website label
            url_href: Website URL
        """
        with tool_call("update_resume_basics", "Failed to update basics"):
            fields = {
                "name": name,
                "headline": headline,
                "email": email,
                "phone": phone,
                "location": location,
            }
            updates = {key: value for key, value in fields.items() if value is not None}

            link = {"label": url_label, "href": url_href}
            link = {key: value for key, value in link.items() if value is not None}
            if link:
                updates["url"] = link

            if not updates:
                return "No basic information fields provided; nothing to update."

            await holder.client.update_basics(resume_id, updates)
            return "Basic information updated successfully."

    @mcp.tool
    async def update_summary(resume_id: ResumeId, content: str) -> str:
        """
        Update the professional summary section.

        Args:
            resume_id: The resume ID
            content: The summary content (supports HTML/Markdown)
        """
        with tool_call("update_summary", "Failed to update summary"):
            await holder.client.update_section(resume_id, "summary", {"content": content})
            return "Summary updated successfully."

    @mcp.tool
    async def add_experience(
        resume_id: ResumeId,
        company: str,
        position: str,
        location: str = "",
        date: str = "",
        summary: str = "",
        url: Optional[UrlString] = None,
    ) -> str:
        """
        Add a work experience entry.

        Args:
            resume_id: The resume ID
            company: Company name
            position: Job title/position
            location: Job location
            date: Date range (e.g., 'Jan 2020 - Present')
            summary: Description of responsibilities and achievements (supports HTML)
            url: Company website URL
        """
        with tool_call("add_experience", "Failed to add experience"):
            item = ExperienceItem(
                id=generate_item_id(),
                visible=True,
                company=company,
                position=position,
                location=location,
                date=date,
                summary=summary,
                url=_link(url),
            )
            await holder.client.add_section_item(resume_id, "experience", item)
            return f"Experience added: {position} at {company} (ID: {item['id']})"

    @mcp.tool
    async def add_education(
        resume_id: ResumeId,
        institution: str,
        study_type: str,
        area: str,
        score: str = "",
        date: str = "",
        summary: str = "",
        url: Optional[UrlString] = None,
    ) -> str:
        """
        Add an education entry.

        Args:
            resume_id: The resume ID
            institution: School/University name
            study_type: Degree type (e.g., 'Bachelor of Science')
            area: Field of study
            score: GPA or grade
            date: Date range
            summary: Additional details
            url: Institution website
        """
        with tool_call("add_education", "Failed to add education"):
            item = EducationItem(
                id=generate_item_id(),
                visible=True,
                institution=institution,
                studyType=study_type,
                area=area,
                score=score,
                date=date,
                summary=summary,
                url=_link(url),
            )
            await holder.client.add_section_item(resume_id, "education", item)
            return (
                f"Education added: {study_type} in {area} at {institution} "
                f"(ID: {item['id']})"
            )

    @mcp.tool
    async def add_skill(
        resume_id: ResumeId,
        name: str,
        description: str = "",
        level: Annotated[int, Field(ge=0, le=5)] = 3,
        keywords: Optional[List[str]] = None,
    ) -> str:
        """
        Add a skill entry.

        Args:
            resume_id: The resume ID
            name: Skill name or category
            description: Skill description
            level: Proficiency level (0-5)
            keywords: Related keywords/technologies
        """
        with tool_call("add_skill", "Failed to add skill"):
            item = SkillItem(
                id=generate_item_id(),
                visible=True,
                name=name,
                description=description,
                level=level,
                keywords=list(keywords or []),
            )
            await holder.client.add_section_item(resume_id, "skills", item)
            return f"Skill added: {name} (ID: {item['id']})"

    @mcp.tool
    async def add_project(
        resume_id: ResumeId,
        name: str,
        description: str = "",
        date: str = "",
        summary: str = "",
        keywords: Optional[List[str]] = None,
        url: Optional[UrlString] = None,
    ) -> str:
        """
        Add a project entry.

        Args:
            resume_id: The resume ID
            name: Project name
            description: Brief description
            date: Project date/duration
            summary: Detailed summary (supports HTML)
            keywords: Technologies/keywords (not stored by v5 instances)
            url: Project URL
        """
        with tool_call("add_project", "Failed to add project"):
            item = ProjectItem(
                id=generate_item_id(),
                visible=True,
                name=name,
                description=description,
                date=date,
                summary=summary,
                keywords=list(keywords or []),
                url=_link(url),
            )
            await holder.client.add_section_item(resume_id, "projects", item)
            return f"Project added: {name} (ID: {item['id']})"

    @mcp.tool
    async def update_section_item(
        resume_id: ResumeId,
        section: ItemSectionName,
        item_id: str,
        updates: str,
    ) -> str:
        """
        Update an existing item in any section.

        Args:
            resume_id: The resume ID
            section: Section name
            item_id: The item ID to update
            updates: JSON object string of fields to update, using the field
                names stored by the instance (see get_resume_section)
        """
        with tool_call("update_section_item", "Failed to update item"):
            try:
                parsed = json.loads(updates)
            except json.JSONDecodeError as e:
                raise ValueError(f"updates is not valid JSON: {e}") from e
            if not isinstance(parsed, dict):
                raise ValueError("updates must be a JSON object")

            await holder.client.update_section_item(resume_id, section, item_id, parsed)
            return f"Item {item_id} in {section} updated successfully."

    @mcp.tool
    async def remove_section_item(
        resume_id: ResumeId,
        section: ItemSectionName,
        item_id: str,
    ) -> str:
        """Remove an item from a section."""
        with tool_call("remove_section_item", "Failed to remove item"):
            await holder.client.remove_section_item(resume_id, section, item_id)
            return f"Item removed from {section}."

    @mcp.tool
    async def toggle_section_visibility(
        resume_id: ResumeId,
        section: SectionName,
        visible: bool,
    ) -> str:
        """
        Show or hide a section on the resume.

        Args:
            resume_id: The resume ID
            section: Section name
            visible: Whether the section should be visible
        """
        with tool_call("toggle_section_visibility", "Failed to toggle visibility"):
            await holder.client.set_section_visibility(resume_id, section, visible)
            return f"Section {section} is now {'visible' if visible else 'hidden'}."

    return [
        "update_resume_basics",
        "update_summary",
        "add_experience",
        "add_education",
        "add_skill",
        "add_project",
        "update_section_item",
        "remove_section_item",
        "toggle_section_visibility",
    ]
