"""
Job posting language detection.

Scores a posting against per-language indicator phrases. The winning language
drives the phrasing of synthesized fallback text in the templating context.

Pattern classes follow the convention from templating/placeholder_patterns.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

from dataclasses import dataclass

from cvtailor.contexts.intake.logger import log_language_scores

DEFAULT_LANGUAGE = "english"

# Minimum number of indicator hits before a non-default language is trusted
MIN_LANGUAGE_SCORE = 2


@dataclass(frozen=True)
class LanguageIndicators:
    """
    Indicator phrases per supported language.

    Matching is plain substring containment on lower-cased text, so short
    words also count when embedded in longer ones ("job" in "jobs").
    """

    FRENCH: tuple = (
        "poste",
        "entreprise",
        "expérience",
        "compétences",
        "formation",
        "salaire",
        "à partir de",
        "nous recherchons",
        "vous serez",
        "profil recherché",
        "candidature",
        "offre",
        "équipe",
        "développement",
        "société",
        "temps plein",
        "cdi",
        "stage",
        "alternance",
        "télétravail",
    )

    ENGLISH: tuple = (
        "position",
        "company",
        "experience",
        "skills",
        "education",
        "salary",
        "we are looking",
        "you will",
        "requirements",
        "responsibilities",
        "application",
        "job",
        "team",
        "development",
        "full time",
        "remote",
        "hybrid",
        "benefits",
        "role",
        "opportunity",
    )

    GERMAN: tuple = (
        "stelle",
        "unternehmen",
        "erfahrung",
        "fähigkeiten",
        "ausbildung",
        "gehalt",
        "wir suchen",
        "sie werden",
        "anforderungen",
        "aufgaben",
        "bewerbung",
        "job",
        "team",
        "entwicklung",
        "vollzeit",
        "homeoffice",
        "hybrid",
        "benefits",
        "position",
    )

    SPANISH: tuple = (
        "puesto",
        "empresa",
        "experiencia",
        "habilidades",
        "formación",
        "salario",
        "buscamos",
        "serás",
        "requisitos",
        "responsabilidades",
        "solicitud",
        "trabajo",
        "equipo",
        "desarrollo",
        "tiempo completo",
        "remoto",
        "híbrido",
        "beneficios",
        "posición",
    )


# On equal scores the later entry wins
LANGUAGE_INDICATORS = {
    "french": LanguageIndicators.FRENCH,
    "english": LanguageIndicators.ENGLISH,
    "german": LanguageIndicators.GERMAN,
    "spanish": LanguageIndicators.SPANISH,
}

SUPPORTED_LANGUAGES = tuple(LANGUAGE_INDICATORS)


def score_languages(text: str) -> dict[str, int]:
    """
    Count indicator phrases present in text for each supported language.

    Args:
        text: Free text (case-insensitive)

    Returns:
        Dict mapping language name to number of matching indicators
    """
    lowered = (text or "").lower()
    return {
        language: sum(1 for indicator in indicators if indicator in lowered)
        for language, indicators in LANGUAGE_INDICATORS.items()
    }


def detect_language(description: str, title: str = "") -> str:
    """
    Detect the language of a job posting.

    The highest-scoring language wins; on a tie the language declared last
    wins. When the best score is below MIN_LANGUAGE_SCORE the posting is
    treated as English.

    Args:
        description: Job description text
        title: Job title

    Returns:
        One of SUPPORTED_LANGUAGES
    """
    scores = score_languages(f"{title or ''} {description or ''}")

    detected = DEFAULT_LANGUAGE
    best_score = -1
    for language, score in scores.items():
        if score >= best_score:
            detected, best_score = language, score

    if best_score < MIN_LANGUAGE_SCORE:
        detected = DEFAULT_LANGUAGE

    log_language_scores(scores, detected)
    return detected
