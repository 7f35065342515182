from src.rxresume_mcp.model.types import (
    ApiVersion,
    AuthTokens,
    EducationItem,
    ExperienceItem,
    ItemSectionName,
    ProjectItem,
    ReadableSectionName,
    Resume,
    ResumeListItem,
    SectionName,
    SkillItem,
    User,
    Visibility,
)

__all__ = [
    "ApiVersion",
    "AuthTokens",
    "EducationItem",
    "ExperienceItem",
    "ItemSectionName",
    "ProjectItem",
    "ReadableSectionName",
    "Resume",
    "ResumeListItem",
    "SectionName",
    "SkillItem",
    "User",
    "Visibility",
]
