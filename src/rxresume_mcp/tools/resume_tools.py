"""MCP tools for the resume lifecycle."""

from typing import Optional

from loguru import logger

from src.rxresume_mcp.model.types import ReadableSectionName, Visibility
from src.rxresume_mcp.providers.errors import RxResumeError
from src.rxresume_mcp.services.client_holder import RxResumeClientHolder
from src.rxresume_mcp.services.schema_translator import (
    basics_from_upstream,
    find_section,
    section_from_upstream,
)
from src.rxresume_mcp.tools.common import ResumeId, to_json_text, tool_call
from src.rxresume_mcp.utils.identifiers import slugify_title

LIST_FIELDS = ("id", "title", "slug", "visibility", "locked", "updatedAt")


def register_resume_tools(mcp, holder: RxResumeClientHolder) -> list[str]:
    """Register resume lifecycle MCP tools."""

    @mcp.tool
    async def list_resumes() -> str:
        """List all resumes for the authenticated user."""
        with tool_call("list_resumes", "Failed to list resumes"):
            resumes = await holder.client.list_resumes()
            logger.info(f"Found {len(resumes)} resumes")
            if not resumes:
                return "No resumes found. Create one using the create_resume tool."
            return to_json_text(
                [{field: resume.get(field) for field in LIST_FIELDS} for resume in resumes]
            )

    @mcp.tool
    async def get_resume(resume_id: ResumeId) -> str:
        """Get full details of a specific resume by ID."""
        with tool_call("get_resume", "Failed to get resume"):
            return to_json_text(await holder.client.get_resume(resume_id))

    @mcp.tool
    async def get_resume_section(
        resume_id: ResumeId,
        section: ReadableSectionName,
        normalize: bool = False,
    ) -> str:
        """
        Get a specific section from a resume.

        Args:
            resume_id: The resume ID
            section: Section name to retrieve ("basics" or any resume section)
            normalize: Rename upstream v5 fields to the normalized names
                (visible, url, date, summary, ...) before returning
        """
        with tool_call("get_resume_section", "Failed to get section"):
            client = holder.client
            resume = await client.get_resume(resume_id)
            data = resume.get("data") or {}

            if section == "basics":
                payload = data.get("basics", {})
                if normalize:
                    payload = basics_from_upstream(payload, client.api_version)
                return to_json_text(payload)

            payload = find_section(data, section)
            if payload is None:
                raise RxResumeError(f"Section '{section}' not found in resume {resume_id}")
            if normalize:
                payload = section_from_upstream(section, payload, client.api_version)
            return to_json_text(payload)

    @mcp.tool
    async def create_resume(
        title: str,
        slug: Optional[str] = None,
        visibility: Visibility = "private",
    ) -> str:
        """
        Create a new resume.

        Args:
            title: Resume title
            slug: URL-friendly slug (auto-generated from the title if not provided)
            visibility: Resume visibility, "private" (default) or "public"
        """
        with tool_call("create_resume", "Failed to create resume"):
            resume = await holder.client.create_resume(
                title=title,
                slug=slug or slugify_title(title),
                visibility=visibility,
            )
            return (
                "Resume created successfully!\n"
                f"ID: {resume.get('id')}\n"
                f"Title: {resume.get('title')}\n"
                f"Slug: {resume.get('slug')}"
            )

    @mcp.tool
    async def delete_resume(resume_id: ResumeId, confirm: bool) -> str:
        """
        Delete a resume permanently.

        Args:
            resume_id: The resume ID to delete
            confirm: Must be true to confirm deletion
        """
        if not confirm:
            logger.info(f"Deletion of resume {resume_id} cancelled, confirm not set")
            return "Deletion cancelled. Set confirm to true to delete."

        with tool_call("delete_resume", "Failed to delete resume"):
            await holder.client.delete_resume(resume_id)
            return "Resume deleted successfully."

    @mcp.tool
    async def export_resume_json(resume_id: ResumeId) -> str:
        """Export a resume as JSON."""
        with tool_call("export_resume_json", "Failed to export"):
            return to_json_text(await holder.client.get_resume(resume_id))

    @mcp.tool
    async def update_resume_visibility(resume_id: ResumeId, visibility: Visibility) -> str:
        """Change resume visibility (public/private)."""
        with tool_call("update_resume_visibility", "Failed to update visibility"):
            await holder.client.update_resume(resume_id, {"visibility": visibility})
            return f"Resume visibility set to {visibility}."

    @mcp.tool
    async def lock_resume(resume_id: ResumeId, locked: bool) -> str:
        """Lock a resume against edits in the Reactive Resume UI, or unlock it."""
        with tool_call("lock_resume", "Failed to change lock"):
            await holder.client.lock_resume(resume_id, locked)
            return f"Resume {'locked' if locked else 'unlocked'}."

    @mcp.tool
    async def get_resume_schema() -> str:
        """Get the JSON schema the instance uses to validate resume data."""
        with tool_call("get_resume_schema", "Failed to get resume schema"):
            return to_json_text(await holder.client.get_resume_schema())

    return [
        "list_resumes",
        "get_resume",
        "get_resume_section",
        "create_resume",
        "delete_resume",
        "export_resume_json",
        "update_resume_visibility",
        "lock_resume",
        "get_resume_schema",
    ]
