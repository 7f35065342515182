from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

ApiVersion = Literal["v4", "v5"]
Visibility = Literal["public", "private"]

SectionName = Literal[
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "awards",
    "publications",
    "volunteer",
    "interests",
    "references",
    "profiles",
]

ItemSectionName = Literal[
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "awards",
    "publications",
    "volunteer",
    "interests",
    "references",
    "profiles",
]

ReadableSectionName = Literal[
    "basics",
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "awards",
    "publications",
    "volunteer",
    "interests",
    "references",
    "profiles",
]

class AuthTokens(TypedDict):
    accessToken: str
    refreshToken: str


class User(TypedDict, total=False):
    id: str
    name: str
    picture: Optional[str]
    username: str
    email: str
    locale: str
    emailVerified: bool
    twoFactorEnabled: bool
    createdAt: str
    updatedAt: str


class LoginResponse(TypedDict):
    status: str
    user: User


class UrlLink(TypedDict):
    label: str
    href: str


class WebsiteLink(TypedDict):
    """v5 link shape: ``url`` instead of ``href``."""

    label: str
    url: str


class ResumeBasics(TypedDict, total=False):
    name: str
    headline: str
    email: str
    phone: str
    location: str
    url: UrlLink
    customFields: List[Dict[str, Any]]
    picture: Dict[str, Any]


class ResumeSection(TypedDict, total=False):
    id: str
    name: str
    columns: int
    separateLinks: bool
    visible: bool
    items: List[Dict[str, Any]]


class ExperienceItem(TypedDict):
    id: str
    visible: bool
    company: str
    position: str
    location: str
    date: str
    summary: str
    url: UrlLink


class EducationItem(TypedDict):
    id: str
    visible: bool
    institution: str
    studyType: str
    area: str
    score: str
    date: str
    summary: str
    url: UrlLink


class SkillItem(TypedDict):
    id: str
    visible: bool
    name: str
    description: str
    level: int
    keywords: List[str]


class ProjectItem(TypedDict):
    id: str
    visible: bool
    name: str
    description: str
    date: str
    summary: str
    keywords: List[str]
    url: UrlLink


class ExperienceItemV5(TypedDict):
    id: str
    hidden: bool
    company: str
    position: str
    location: str
    period: str
    description: str
    website: WebsiteLink


class EducationItemV5(TypedDict):
    id: str
    hidden: bool
    school: str
    degree: str
    area: str
    grade: str
    location: str
    period: str
    description: str
    website: WebsiteLink


class SkillItemV5(TypedDict):
    id: str
    hidden: bool
    icon: str
    name: str
    proficiency: str
    level: int
    keywords: List[str]


class ProjectItemV5(TypedDict):
    id: str
    hidden: bool
    name: str
    period: str
    description: str
    website: WebsiteLink


# Items as the tools build them, and as a v5 instance stores them
SectionItem = Union[ExperienceItem, EducationItem, SkillItem, ProjectItem, Dict[str, Any]]
SectionItemV5 = Union[
    ExperienceItemV5, EducationItemV5, SkillItemV5, ProjectItemV5, Dict[str, Any]
]


class ResumeData(TypedDict, total=False):
    basics: ResumeBasics
    sections: Dict[str, ResumeSection]
    metadata: Dict[str, Any]


class Resume(TypedDict, total=False):
    id: str
    title: str
    slug: str
    data: ResumeData
    visibility: Visibility
    locked: bool
    userId: str
    createdAt: str
    updatedAt: str


class ResumeListItem(TypedDict, total=False):
    id: str
    title: str
    slug: str
    visibility: Visibility
    locked: bool
    createdAt: str
    updatedAt: str


class ResumeV5(TypedDict, total=False):
    id: str
    name: str
    slug: str
    tags: List[str]
    data: ResumeData
    isPublic: bool
    isLocked: bool
    hasPassword: bool


class ResumeListItemV5(TypedDict, total=False):
    id: str
    name: str
    slug: str
    tags: List[str]
    isPublic: bool
    isLocked: bool
    createdAt: str
    updatedAt: str


class CreateResumeDto(TypedDict):
    title: str
    slug: str
    visibility: Visibility


class CreateResumeDtoV5(TypedDict):
    name: str
    slug: str
    tags: List[str]
    withSampleData: bool


class UpdateResumeDto(TypedDict, total=False):
    title: str
    slug: str
    visibility: Visibility
    locked: bool
    data: ResumeData


class UpdateResumeDtoV5(TypedDict, total=False):
    id: str
    name: str
    slug: str
    tags: List[str]
    data: ResumeData
    isPublic: bool
