"""
Default values for CVTAILOR template rendering.

Provides shared constants used by:
- header_classifier.py / section_parser.py (canonical section keys)
- binder.py (placeholder keys, conditional variables, preview sample data)
- registries.py (plan tiers and access rules)
"""

from typing import Any, Dict


class SectionKey:
    """Canonical section keys understood by the rendering pipeline."""

    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCES = "experiences"
    EDUCATION = "education"
    LANGUAGES = "languages"
    # Catch-all bucket, never rendered
    OTHER = "other"


# Section placeholders every template may use, in substitution order
RENDERED_SECTION_KEYS = (
    SectionKey.SUMMARY,
    SectionKey.SKILLS,
    SectionKey.EXPERIENCES,
    SectionKey.EDUCATION,
    SectionKey.LANGUAGES,
)

# Placeholder key -> UserProfile attribute
USER_FIELD_PLACEHOLDERS = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "location": "location",
    "currentTitle": "current_title",
}


class PlanTier:
    """Subscription tiers as sent by the web layer."""

    FREE = "FREE"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"


# Tiers allowed to use premium templates
PREMIUM_PLANS = frozenset({PlanTier.PREMIUM, PlanTier.ENTERPRISE})

# Template store layout: every entry directory must contain all three
TEMPLATE_CONFIG_FILE = "config.json"
TEMPLATE_HTML_FILE = "template.html"
TEMPLATE_CSS_FILE = "styles.css"
REQUIRED_TEMPLATE_FILES = (TEMPLATE_CONFIG_FILE, TEMPLATE_HTML_FILE, TEMPLATE_CSS_FILE)

PREVIEW_URL_FORMAT = "/api/templates/{template_id}/preview"
THUMBNAIL_URL_FORMAT = "/api/templates/{template_id}/thumbnail"


# Sample data used by template previews
SAMPLE_PROFILE: Dict[str, Any] = {
    "fullName": "Jean Dupont",
    "email": "jean.dupont@email.com",
    "phone": "+33 1 23 45 67 89",
    "location": "Paris, France",
    "currentTitle": "Développeur Full Stack",
    "experienceLevel": "3-5",
    "skills": "",
    "summary": "",
    "education": "",
    "languages": "",
}

SAMPLE_AI_CONTENT = """
# Jean Dupont

## Résumé Professionnel
Développeur Full Stack passionné avec 4 ans d'expérience dans le développement d'applications web modernes. Expert en JavaScript, React, Node.js avec une solide expérience en bases de données et déploiement cloud.

## Compétences
**Technologies Frontend:** React, Vue.js, HTML5, CSS3, JavaScript/TypeScript
**Technologies Backend:** Node.js, Express, Python, PostgreSQL, MongoDB
**Outils:** Git, Docker, AWS, Jenkins, Jest

## Expérience Professionnelle
**Développeur Full Stack Senior** - TechCorp (2022-2024)
- Développement d'applications web complexes avec React et Node.js
- Mise en place d'architectures microservices
- Amélioration des performances de 40%

**Développeur Frontend** - StartupXYZ (2020-2022)
- Création d'interfaces utilisateur modernes avec React
- Collaboration avec l'équipe UX/UI
- Intégration d'APIs REST

## Formation
**Master en Informatique** - Université Paris-Saclay (2020)
**Licence en Informatique** - Université Paris-Saclay (2018)

## Langues
- Français (Natif)
- Anglais (Courant)
- Espagnol (Intermédiaire)
"""

SAMPLE_LANGUAGE = "french"

# Phrasing used when no phrasing exists for the requested language
FALLBACK_LANGUAGE = "english"
