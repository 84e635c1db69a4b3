"""Load portfolio content from bundled or user-supplied JSON."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from .models import (
    AboutData,
    ContactData,
    ExperienceEntry,
    Link,
    Metric,
    PortfolioData,
    ProjectEntry,
    ShellIdentity,
    SkillsData,
    Stat,
)

logger = logging.getLogger(__name__)

CONTENT_PACKAGE = "folioshell.content"
CONTENT_FILE = "portfolio.json"


def _required(raw: dict[str, Any], key: str, where: str) -> str:
    """Return a stripped required string field."""
    value = str(raw.get(key, "")).strip()
    if not value:
        raise ValueError(f"{where} is missing required field '{key}'.")
    return value


def _optional(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _strings(raw: dict[str, Any], key: str) -> list[str]:
    values = raw.get(key, [])
    if not isinstance(values, list):
        raise ValueError(f"Field '{key}' must be a JSON list.")
    return [str(item).strip() for item in values if str(item).strip()]


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a nested object, rejecting any other JSON type."""
    value = raw.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Portfolio section '{key}' must be a JSON object.")
    return value


def _records(raw: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return a list of objects, rejecting any other JSON type."""
    values = raw.get(key, [])
    if not isinstance(values, list) or not all(isinstance(item, dict) for item in values):
        raise ValueError(f"Portfolio field '{key}' must be a list of JSON objects.")
    return values


def _identity_from_dict(raw: dict[str, Any], about: AboutData) -> ShellIdentity:
    """Build the shell identity, falling back to the about section for name and role."""
    username = str(raw.get("username", "")).strip() or about.name.split()[0].lower()
    return ShellIdentity(
        name=str(raw.get("name", "")).strip() or about.name,
        role=str(raw.get("role", "")).strip() or about.role,
        username=username,
        hostname=str(raw.get("hostname", "")).strip() or "portfolio",
        location=str(raw.get("location", "")).strip(),
        specialties=_strings(raw, "specialties"),
        since=str(raw.get("since", "")).strip(),
        experience_years=str(raw.get("experience_years", "")).strip(),
    )


def _about_from_dict(raw: dict[str, Any]) -> AboutData:
    stats = [
        Stat(label=_required(item, "label", "Stat"), value=str(item.get("value", "")).strip())
        for item in _records(raw, "stats")
    ]
    return AboutData(
        name=_required(raw, "name", "About section"),
        role=_required(raw, "role", "About section"),
        bio=str(raw.get("bio", "")).strip(),
        highlights=_strings(raw, "highlights"),
        stats=stats,
    )


def _experience_from_dict(raw: dict[str, Any]) -> ExperienceEntry:
    company = _required(raw, "company", "Experience entry")
    return ExperienceEntry(
        company=company,
        role=_required(raw, "role", f"Experience entry '{company}'"),
        period=str(raw.get("period", "")).strip(),
        achievements=_strings(raw, "achievements"),
        link=_optional(raw, "link"),
    )


def _project_from_dict(raw: dict[str, Any]) -> ProjectEntry:
    title = _required(raw, "title", "Project")
    metrics = [
        Metric(label=_required(item, "label", f"Metric of '{title}'"), value=str(item.get("value", "")).strip())
        for item in _records(raw, "metrics")
    ]
    links = [
        Link(
            label=_required(item, "label", f"Link of '{title}'"),
            url=_required(item, "url", f"Link of '{title}'"),
            type=str(item.get("type", "other")).strip() or "other",
        )
        for item in _records(raw, "links")
    ]
    return ProjectEntry(
        title=title,
        description=str(raw.get("description", "")).strip(),
        tech=_strings(raw, "tech"),
        metrics=metrics,
        links=links,
    )


def _skills_from_dict(raw: dict[str, Any]) -> SkillsData:
    return SkillsData(
        languages=_strings(raw, "languages"),
        frameworks=_strings(raw, "frameworks"),
        tools=_strings(raw, "tools"),
        databases=_strings(raw, "databases"),
    )


def _contact_from_dict(raw: dict[str, Any]) -> ContactData:
    return ContactData(
        email=_required(raw, "email", "Contact section"),
        github=str(raw.get("github", "")).strip(),
        linkedin=str(raw.get("linkedin", "")).strip(),
        resume=str(raw.get("resume", "")).strip(),
        twitter=_optional(raw, "twitter"),
    )


def _portfolio_from_dict(raw: dict[str, Any]) -> PortfolioData:
    """Build portfolio records from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError("Portfolio content must be a JSON object.")
    about = _about_from_dict(_section(raw, "about"))
    experience = [_experience_from_dict(item) for item in _records(raw, "experience")]
    projects = [_project_from_dict(item) for item in _records(raw, "projects")]
    _validate_unique("experience company", [entry.company for entry in experience])
    _validate_unique("project title", [project.title for project in projects])
    portfolio = PortfolioData(
        identity=_identity_from_dict(_section(raw, "identity"), about),
        about=about,
        experience=experience,
        projects=projects,
        skills=_skills_from_dict(_section(raw, "skills")),
        contact=_contact_from_dict(_section(raw, "contact")),
    )
    logger.debug("loaded portfolio: %d jobs, %d projects", len(experience), len(projects))
    return portfolio


def load_portfolio() -> PortfolioData:
    """Load the bundled portfolio."""
    entry = resources.files(CONTENT_PACKAGE).joinpath(CONTENT_FILE)
    return _portfolio_from_dict(json.loads(entry.read_text(encoding="utf-8-sig")))


def load_portfolio_from_file(path: Path | str) -> PortfolioData:
    """Load a portfolio from a JSON file on disk."""
    file_path = Path(path)
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid portfolio JSON in {file_path}: {exc}") from exc
    return _portfolio_from_dict(raw)


def _validate_unique(label: str, values: list[str]) -> None:
    """Reject duplicates that would collide as sibling file names."""
    seen: set[str] = set()
    for value in values:
        key = value.lower()
        if key in seen:
            raise ValueError(f"Duplicate {label}: {value}")
        seen.add(key)
