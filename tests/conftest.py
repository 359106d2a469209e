"""Shared fixtures: throwaway template stores and sample profiles."""

import json
from pathlib import Path

import pytest

from cvtailor.contexts.templating import TemplateRegistry, UserProfile

FIXTURE_HTML = """<html>
<head><style>{{css}}</style></head>
<body>
<h1>{{fullName}}</h1>
<p class="contact">{{fullName}} | {{email}} | {{phone}} | {{location}} | {{currentTitle}}</p>
{{#if summary}}<section class="summary">{{summary}}</section>{{/if}}
<section class="skills">{{skills}}</section>
<section class="experiences">{{experiences}}</section>
<section class="education">{{education}}</section>
{{#if languages}}
<section class="languages">
  {{languages}}
</section>
{{/if}}
</body>
</html>
"""

FIXTURE_CSS = "body { color: #123456; }"

DEFAULT_PLACEHOLDERS = [
    "css",
    "fullName",
    "email",
    "phone",
    "location",
    "currentTitle",
    "summary",
    "skills",
    "experiences",
    "education",
    "languages",
]


def write_template(
    root: Path,
    dir_name: str,
    template_id: str = None,
    name: str = None,
    is_premium: bool = False,
    html: str = FIXTURE_HTML,
    css: str = FIXTURE_CSS,
    placeholders: list = None,
    skip: tuple = (),
) -> Path:
    """
    Write a template store entry.

    Args:
        root: Template store directory
        dir_name: Entry directory name
        template_id: Config id (defaults to dir_name)
        name: Display name (defaults to dir_name title-cased)
        is_premium: Premium flag
        html: Skeleton content
        css: Stylesheet content
        placeholders: Declared placeholder keys
        skip: File names to leave out ("config.json", "template.html", "styles.css")

    Returns:
        Path to the entry directory
    """
    entry = root / dir_name
    entry.mkdir(parents=True, exist_ok=True)

    config = {
        "id": template_id or dir_name,
        "name": name or dir_name.title(),
        "description": f"{dir_name} fixture",
        "category": "test",
        "isPremium": is_premium,
        "features": ["Fixture"],
        "placeholders": [{"key": key} for key in (placeholders or DEFAULT_PLACEHOLDERS)],
    }

    if "config.json" not in skip:
        (entry / "config.json").write_text(json.dumps(config), encoding="utf-8")
    if "template.html" not in skip:
        (entry / "template.html").write_text(html, encoding="utf-8")
    if "styles.css" not in skip:
        (entry / "styles.css").write_text(css, encoding="utf-8")

    return entry


@pytest.fixture
def template_store(tmp_path):
    """Template store with one free and one premium fixture template."""
    store = tmp_path / "templates"
    write_template(store, "basic", name="Basic")
    write_template(store, "deluxe", name="Deluxe", is_premium=True)
    return store


@pytest.fixture
def registry(template_store):
    return TemplateRegistry.load(template_store)


@pytest.fixture
def profile():
    """Profile with two work experiences, the second one current."""
    return UserProfile.from_dict(
        {
            "fullName": "Jean Dupont",
            "email": "jean.dupont@email.com",
            "phone": "+33 1 23 45 67 89",
            "location": "Paris, France",
            "currentTitle": "Développeur Full Stack",
            "experienceLevel": "3-5",
            "skills": "JavaScript, React, Node.js",
            "summary": "",
            "education": "Master Informatique",
            "languages": "Français, Anglais",
            "workExperiences": [
                {
                    "jobTitle": "Développeur Frontend",
                    "company": "StartupXYZ",
                    "startDate": "2020-01",
                    "endDate": "2022-06",
                    "responsibilities": "Interfaces React",
                },
                {
                    "jobTitle": "Développeur Full Stack Senior",
                    "company": "TechCorp",
                    "startDate": "2022-07",
                    "endDate": "",
                    "responsibilities": "Architecture microservices",
                },
            ],
        }
    )


@pytest.fixture
def make_template():
    """Expose write_template to tests that build their own stores."""
    return write_template
