"""Unit tests for the summary and experience fallback layer."""

import pytest

from cvtailor.contexts.templating import UserProfile, WorkExperience
from cvtailor.contexts.templating.binder import build_section_map
from cvtailor.contexts.templating.fallbacks import (
    SUMMARY_FROM_AI,
    SUMMARY_FROM_GUARANTEE,
    SUMMARY_FROM_PROFILE,
    SUMMARY_FROM_TEMPLATE,
    build_fallback_experiences,
    build_fallback_summary,
    resolve_sections,
    resolve_summary,
)


@pytest.mark.unit
def test_guaranteed_summary_wins(profile):
    """Test the dedicated summary overrides the parsed one."""
    parsed = {"summary": "<p>AI parsed summary</p>"}

    resolved = resolve_sections(parsed, profile, guaranteed_summary="Guaranteed text.")

    assert resolved["summary"] == "<p>Guaranteed text.</p>"
    assert "AI parsed summary" not in resolved["summary"]


@pytest.mark.unit
def test_blank_guaranteed_summary_ignored(profile):
    """Test a whitespace-only guarantee falls through to the parsed summary."""
    fragment, source = resolve_summary("<p>Parsed</p>", profile, guaranteed_summary="   ")

    assert fragment == "<p>Parsed</p>"
    assert source == SUMMARY_FROM_AI


@pytest.mark.unit
def test_guaranteed_summary_source(profile):
    """Test provenance label for the guaranteed tier."""
    _, source = resolve_summary(None, profile, guaranteed_summary="Text")
    assert source == SUMMARY_FROM_GUARANTEE


@pytest.mark.unit
def test_profile_summary_before_synthesis():
    """Test the user's own summary is used when AI gave none."""
    profile = UserProfile(current_title="Designer", summary="Designer with 10 years.")

    fragment, source = resolve_summary("", profile)

    assert fragment == "<p>Designer with 10 years.</p>"
    assert source == SUMMARY_FROM_PROFILE


@pytest.mark.unit
def test_synthesized_summary_english():
    """Test the last-resort sentence uses title and first skill."""
    profile = UserProfile(current_title="Data Engineer", skills="Python, SQL")

    fragment, source = resolve_summary(None, profile, language="english")

    assert source == SUMMARY_FROM_TEMPLATE
    assert fragment.startswith("<p>Data Engineer with solid expertise in Python.")
    assert "SQL" not in fragment


@pytest.mark.unit
def test_synthesized_summary_french():
    """Test the sentence follows the job language."""
    profile = UserProfile(current_title="Développeur", skills="React, Vue")

    summary = build_fallback_summary(profile, language="french")

    assert summary.startswith("Développeur avec une solide expertise en React.")


@pytest.mark.unit
def test_synthesized_summary_defaults():
    """Test missing title and skills use language defaults."""
    summary = build_fallback_summary(UserProfile(), language="english")

    assert summary.startswith("Experienced professional with solid expertise in their field.")


@pytest.mark.unit
def test_unknown_language_uses_english():
    """Test unsupported languages fall back to English phrasing."""
    profile = UserProfile(current_title="Engineer", skills="Go")

    assert build_fallback_summary(profile, language="klingon") == build_fallback_summary(
        profile, language="english"
    )


@pytest.mark.unit
def test_synthesized_summary_is_escaped():
    """Test profile text is HTML-escaped in synthesized fragments."""
    profile = UserProfile(current_title="R&D Lead", skills="<script>")

    fragment, _ = resolve_summary(None, profile)

    assert "R&amp;D Lead" in fragment
    assert "<script>" not in fragment


@pytest.mark.unit
def test_experience_fallback_lists_all_entries(profile):
    """Test every profile experience appears when AI omitted the section."""
    resolved = resolve_sections({"skills": "<ul><li>JS</li></ul>"}, profile)

    experiences = resolved["experiences"]
    for entry in profile.work_experiences:
        assert entry.job_title in experiences
        assert entry.company in experiences
    assert experiences.index("StartupXYZ") < experiences.index("TechCorp")


@pytest.mark.unit
def test_experience_fallback_present_label(profile):
    """Test empty end dates render as the localized 'present'."""
    english = build_fallback_experiences(profile, language="english")
    french = build_fallback_experiences(profile, language="french")

    assert "2022-07 - Present" in english
    assert "2022-07 - Présent" in french
    assert "2020-01 - 2022-06" in english
    assert english.count('<div class="experience-item">') == 2


@pytest.mark.unit
def test_whitespace_end_date_is_current():
    """Test a blank-looking end date renders the present label."""
    experience = WorkExperience("Dev", "Acme", "2020", "  ", "Built things")
    profile = UserProfile(work_experiences=[experience])

    html = build_fallback_experiences(profile, "english")

    assert experience.is_current is True
    assert '<p class="experience-date">2020 - Present</p>' in html


@pytest.mark.unit
def test_past_end_date_rendered():
    """Test a finished position shows its end date."""
    profile = UserProfile(work_experiences=[WorkExperience("Dev", "Acme", "2018", "2020")])

    html = build_fallback_experiences(profile, "english")

    assert '<p class="experience-date">2018 - 2020</p>' in html
    assert "Present" not in html


@pytest.mark.unit
def test_parsed_experiences_kept(profile):
    """Test a non-blank parsed experience section is not replaced."""
    parsed = {"experiences": "<p>From AI</p>"}

    resolved = resolve_sections(parsed, profile)

    assert resolved["experiences"] == "<p>From AI</p>"


@pytest.mark.unit
def test_blank_parsed_experiences_replaced(profile):
    """Test an empty parsed experience section triggers the fallback."""
    resolved = resolve_sections({"experiences": "  "}, profile)

    assert "TechCorp" in resolved["experiences"]


@pytest.mark.unit
def test_no_experience_fallback_without_history():
    """Test nothing is synthesized when the profile has no work history."""
    resolved = resolve_sections({}, UserProfile(current_title="Student"))

    assert resolved.get("experiences", "") == ""


@pytest.mark.unit
def test_other_sections_have_no_fallback(profile):
    """Test skills, education and languages are not synthesized."""
    resolved = resolve_sections({}, profile)

    for key in ("skills", "education", "languages"):
        assert key not in resolved


@pytest.mark.unit
def test_resolve_updates_map_in_place(profile):
    """Test the parsed map is overlaid and returned."""
    parsed = {}

    resolved = resolve_sections(parsed, profile)

    assert resolved is parsed
    assert parsed["summary"]


@pytest.mark.unit
def test_empty_ai_text_with_history(profile):
    """Test empty AI output still yields summary and both experiences."""
    sections = build_section_map(profile, "")

    assert sections["summary"].strip()
    assert "Développeur Frontend" in sections["experiences"]
    assert "Développeur Full Stack Senior" in sections["experiences"]
    assert "StartupXYZ" in sections["experiences"]
    assert "TechCorp" in sections["experiences"]
    # Title and first skill from the profile
    assert "Développeur Full Stack" in sections["summary"]
    assert "JavaScript" in sections["summary"]


@pytest.mark.unit
def test_guarantee_beats_ai_summary_section(profile):
    """Test the guarantee holds against a conflicting AI summary section."""
    ai_text = "## Professional Summary\nSomething else entirely.\n\n## Skills\n- Go"

    sections = build_section_map(profile, ai_text, guaranteed_summary="Exact guaranteed text")

    assert "Exact guaranteed text" in sections["summary"]
    assert "Something else entirely" not in sections["summary"]
