"""Turn portfolio records into the virtual file tree."""

from __future__ import annotations

import json
import re

from .models import (
    AboutData,
    ContactData,
    ExperienceEntry,
    Node,
    PortfolioData,
    ProjectEntry,
    SkillsData,
    directory_node,
    file_node,
)

ROOT_NAME = "/"


def build_file_system(data: PortfolioData) -> Node:
    """Create the complete tree for one portfolio."""
    return directory_node(
        ROOT_NAME,
        [
            file_node("README.md", create_readme(data)),
            file_node("about.txt", format_about_text(data.about)),
            directory_node(
                "experience",
                [file_node(experience_file_name(entry), format_experience_record(entry)) for entry in data.experience],
            ),
            directory_node(
                "projects",
                [file_node(project_file_name(project), format_project_markdown(project)) for project in data.projects],
            ),
            _skills_directory(data.skills),
            _contact_directory(data.contact),
            _secrets_directory(),
        ],
    )


def _stem(slug: str, source: str) -> str:
    stem = slug.strip("-")
    if not stem or stem in {".", ".."}:
        raise ValueError(f"Cannot derive a file name from '{source}'.")
    return stem


def experience_file_name(entry: ExperienceEntry) -> str:
    """`Monster API` -> `monster-api.json`; `R/GA` -> `r-ga.json`."""
    return _stem(re.sub(r"[\s/]+", "-", entry.company.strip().lower()), entry.company) + ".json"


def project_file_name(project: ProjectEntry) -> str:
    """`Neo - Autonomous ML Platform` -> `neo-autonomous-ml-platform.md`."""
    return _stem(re.sub(r"[^a-z0-9]+", "-", project.title.lower()), project.title) + ".md"


def format_about_text(about: AboutData) -> str:
    """Render the biography as plain text."""
    heading = f"{about.name} - {about.role}"
    lines = [heading, "=" * len(heading), "", about.bio, "", "Career Highlights:", "-" * 18]
    lines.extend(f"{index}. {highlight}" for index, highlight in enumerate(about.highlights, start=1))
    lines.extend(["", "Key Stats:", "-" * 10])
    lines.extend(f"• {stat.label}: {stat.value}" for stat in about.stats)
    return "\n".join(lines) + "\n"


def format_experience_record(entry: ExperienceEntry) -> str:
    """Render one job as an indented JSON record."""
    record: dict[str, object] = {
        "company": entry.company,
        "role": entry.role,
        "period": entry.period,
        "achievements": list(entry.achievements),
    }
    if entry.link:
        record["link"] = entry.link
    return json.dumps(record, indent=2, ensure_ascii=False)


def format_project_markdown(project: ProjectEntry) -> str:
    """Render one project as a markdown write-up."""
    lines = [f"# {project.title}", "", project.description, "", "## Metrics", ""]
    lines.extend(f"- **{metric.label}**: {metric.value}" for metric in project.metrics)
    lines.extend(["", "## Tech Stack", "", ", ".join(project.tech), "", "## Links", ""])
    lines.extend(f"- [{link.label}]({link.url})" for link in project.links)
    return "\n".join(lines) + "\n"


def _bullets(items: list[str], indent: str = "") -> str:
    return "\n".join(f"{indent}• {item}" for item in items)


def _titled(title: str, body: str) -> str:
    return f"{title}\n{'=' * len(title)}\n\n{body}"


def format_skills_text(skills: SkillsData) -> str:
    """Render every skill category in one overview."""
    sections = [
        ("Languages", skills.languages),
        ("Frameworks", skills.frameworks),
        ("Tools & Technologies", skills.tools),
        ("Databases", skills.databases),
    ]
    body = "\n\n".join(f"{label}:\n{_bullets(items, indent='  ')}" for label, items in sections)
    return _titled("Technical Skills", body) + "\n"


def format_contact_text(contact: ContactData) -> str:
    lines = [f"Email: {contact.email}", f"GitHub: {contact.github}", f"LinkedIn: {contact.linkedin}"]
    if contact.twitter:
        lines.append(f"Twitter: {contact.twitter}")
    lines.append(f"Resume: {contact.resume}")
    return _titled("Contact Information", "\n".join(lines)) + "\n"


def _skills_directory(skills: SkillsData) -> Node:
    return directory_node(
        "skills",
        [
            file_node("languages.txt", _titled("Programming Languages", _bullets(skills.languages))),
            file_node("frameworks.txt", _titled("Frameworks & Libraries", _bullets(skills.frameworks))),
            file_node("tools.txt", _titled("Tools & Technologies", _bullets(skills.tools))),
            file_node("databases.txt", _titled("Databases", _bullets(skills.databases))),
            file_node("overview.txt", format_skills_text(skills)),
        ],
    )


def _contact_directory(contact: ContactData) -> Node:
    email = (
        f"{contact.email}\n\nFeel free to reach out for:\n"
        + _bullets(["Job opportunities", "Collaboration proposals", "Technical discussions", "Speaking engagements"])
        + "\n"
    )
    social = [f"GitHub: {contact.github}", f"LinkedIn: {contact.linkedin}"]
    if contact.twitter:
        social.append(f"Twitter: {contact.twitter}")
    social.extend(["", "Connect with me on these platforms!"])
    return directory_node(
        "contact",
        [
            file_node("email.txt", _titled("Email Address", email)),
            file_node("social.txt", _titled("Social Media Links", "\n".join(social))),
            file_node("info.txt", format_contact_text(contact)),
        ],
    )


def create_readme(data: PortfolioData) -> str:
    """Welcome document at the root of the tree."""
    return f"""# {data.about.name} Portfolio Terminal

Welcome! This terminal lets you explore my experience, projects, and skills.

## Navigation Commands
- `ls` - List files and directories
- `cd <directory>` - Change directory
- `cd ..` - Go to parent directory
- `pwd` - Print working directory
- `cat <file>` - Display file contents

## Portfolio Shortcuts
- `about` - View about me
- `experience` - View work experience
- `projects` - View featured projects
- `skills` - View technical skills
- `contact` - View contact information

## Utility Commands
- `help` - Show all available commands
- `clear` - Clear terminal output
- `whoami` - Display user information
- `neofetch` - Display system banner
- `exit` or `gui` - Return to GUI view

## File System Structure

```
/
├── about.txt           # About me
├── README.md           # This file
├── experience/         # Work experience (JSON files)
├── projects/           # Featured projects (Markdown files)
├── skills/             # Technical skills
├── contact/            # Contact information
└── .secrets/           # Easter eggs
```

Use Tab for auto-completion. Happy exploring!
"""


EASTER_EGGS = """# Easter Eggs

Congratulations! You found the secret directory!

## Secret Commands

- `whoami` - Find out who you're talking to
- `neofetch` - See a cool system banner
- `date` - Check what year it is

"Any fool can write code that a computer can understand.
Good programmers write code that humans can understand."
- Martin Fowler

Keep exploring! There might be more secrets hidden around...
"""

QUOTES = """Favorite Programming Quotes
===========================

"First, solve the problem. Then, write the code."
- John Johnson

"Code is like humor. When you have to explain it, it's bad."
- Cory House

"Simplicity is the soul of efficiency."
- Austin Freeman

"Make it work, make it right, make it fast."
- Kent Beck
"""

FUN_FACTS = """Fun Developer Facts
===================

• The first computer bug was an actual bug (a moth) found in a computer in 1947
• The first programmer was Ada Lovelace in the 1840s
• "Hello, World!" was first used in a 1978 book about C programming
• Git was created by Linus Torvalds in just 2 weeks
"""


def _secrets_directory() -> Node:
    return directory_node(
        ".secrets",
        [
            file_node("easter-eggs.txt", EASTER_EGGS),
            file_node("quotes.txt", QUOTES),
            file_node("fun-facts.txt", FUN_FACTS),
        ],
    )
