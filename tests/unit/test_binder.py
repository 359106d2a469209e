"""Unit tests for TemplateBinder and its substitution helpers."""

import pytest

from cvtailor.contexts.templating import TemplateBinder, TemplateNotFound, TemplateRegistry
from cvtailor.contexts.templating.binder import (
    process_conditionals,
    substitute_placeholders,
    unfilled_placeholders,
)

AI_TEXT = (
    "## Résumé Professionnel\nDéveloppeur passionné.\n\n"
    "## Compétences\n- React\n- Node.js\n\n"
    "## Expérience Professionnelle\n**Senior Dev** - TechCorp\n\n"
    "## Formation\nMaster Informatique\n\n"
    "## Langues\n- Français\n- Anglais\n"
)


@pytest.fixture
def binder(registry):
    return TemplateBinder(registry)


@pytest.mark.unit
def test_render_unknown_template(binder, profile):
    """Test rendering an unregistered template fails loudly."""
    with pytest.raises(TemplateNotFound):
        binder.render("nonexistent-id", profile, "...")


@pytest.mark.unit
def test_render_substitutes_everything(binder, profile):
    """Test stylesheet, user fields and sections are bound."""
    html = binder.render("basic", profile, AI_TEXT)

    assert "body { color: #123456; }" in html
    assert "jean.dupont@email.com" in html
    assert "Paris, France" in html
    assert "<p>Développeur passionné.</p>" in html
    assert "<ul><li>React</li><li>Node.js</li></ul>" in html
    assert "<strong>Senior Dev</strong> - TechCorp" in html
    assert "<p>Master Informatique</p>" in html
    assert "<ul><li>Français</li><li>Anglais</li></ul>" in html


@pytest.mark.unit
def test_user_fields_replaced_globally(binder, profile):
    """Test every occurrence of a user field is substituted."""
    html = binder.render("basic", profile, AI_TEXT)

    assert html.count("Jean Dupont") == 2


@pytest.mark.unit
def test_no_placeholders_left(binder, profile):
    """Test no declared placeholder or conditional marker survives."""
    html = binder.render("basic", profile, "")

    assert "{{" not in html
    assert "}}" not in html


@pytest.mark.unit
def test_absent_fields_render_empty(binder):
    """Test a sparse profile leaves no tokens behind."""
    html = binder.render("basic", {"fullName": "Solo"}, "")

    assert "Solo" in html
    assert "{{phone}}" not in html
    assert "{{" not in html


@pytest.mark.unit
def test_languages_block_removed_when_empty(binder, profile):
    """Test the multi-line languages conditional is dropped without content."""
    html = binder.render("basic", profile, "## Skills\n- Go")

    assert 'class="languages"' not in html


@pytest.mark.unit
def test_languages_block_kept_with_content(binder, profile):
    """Test the languages conditional is kept when the section exists."""
    html = binder.render("basic", profile, AI_TEXT)

    assert 'class="languages"' in html


@pytest.mark.unit
def test_summary_block_always_present(binder, profile):
    """Test the summary conditional survives thanks to the fallback."""
    html = binder.render("basic", profile, "")

    assert 'class="summary"' in html


@pytest.mark.unit
def test_guaranteed_summary_rendered(binder, profile):
    """Test the guaranteed summary replaces the AI summary section."""
    html = binder.render("basic", profile, AI_TEXT, guaranteed_summary="Résumé garanti.")

    assert "<p>Résumé garanti.</p>" in html
    assert "Développeur passionné." not in html


@pytest.mark.unit
def test_experience_fallback_rendered(binder, profile):
    """Test profile history is rendered when AI text has none."""
    html = binder.render("basic", profile, "## Skills\n- Go")

    assert "Développeur Frontend - StartupXYZ" in html
    assert "Développeur Full Stack Senior - TechCorp" in html


@pytest.mark.unit
def test_render_is_idempotent(binder, profile):
    """Test identical inputs give byte-identical output."""
    first = binder.render("basic", profile, AI_TEXT, guaranteed_summary="Same.", language="french")
    second = binder.render("basic", profile, AI_TEXT, guaranteed_summary="Same.", language="french")

    assert first == second


@pytest.mark.unit
def test_render_accepts_profile_mapping(binder, profile):
    """Test a raw camelCase profile renders like a UserProfile."""
    raw = {
        "fullName": "Jean Dupont",
        "email": "jean.dupont@email.com",
        "phone": "+33 1 23 45 67 89",
        "location": "Paris, France",
        "currentTitle": "Développeur Full Stack",
        "skills": "JavaScript, React, Node.js",
    }

    html = binder.render("basic", raw, AI_TEXT)

    assert html == binder.render("basic", profile, AI_TEXT)


@pytest.mark.unit
def test_user_fields_escaped(binder):
    """Test profile values cannot inject markup."""
    html = binder.render("basic", {"fullName": "Anne & <b>Co</b>"}, "")

    assert "Anne &amp; &lt;b&gt;Co&lt;/b&gt;" in html
    assert "<b>Co</b>" not in html


@pytest.mark.unit
def test_extra_declared_placeholder_removed(tmp_path, make_template, profile):
    """Test declared keys the binder does not fill are stripped."""
    store = tmp_path / "templates"
    make_template(
        store,
        "extra",
        html="<html>{{fullName}} {{website}} {{ summary }}</html>",
        placeholders=["fullName", "website", "summary"],
    )
    binder = TemplateBinder(TemplateRegistry.load(store))

    html = binder.render("extra", profile, "")

    assert "{{" not in html
    assert "Jean Dupont" in html


@pytest.mark.unit
def test_tokens_in_profile_values_are_not_expanded(binder):
    """Test placeholder-like text in user fields is bound verbatim."""
    html = binder.render(
        "basic", {"fullName": "{{summary}}", "location": "{{skills}}"}, "## Skills\n- JS"
    )

    assert html.count("<ul><li>JS</li></ul>") == 1
    assert "<h1>{{summary}}</h1>" in html
    assert "| {{skills}} |" in html


@pytest.mark.unit
def test_tokens_in_ai_content_are_kept(binder, profile):
    """Test placeholder-like text written by the AI survives as content."""
    html = binder.render("basic", profile, "## Skills\n- Mail me at {{email}}")

    assert "<ul><li>Mail me at {{email}}</li></ul>" in html
    assert html.count("jean.dupont@email.com") == 1


@pytest.mark.unit
def test_render_preview(binder):
    """Test previews render with the built-in sample data."""
    html = binder.render_preview("deluxe")

    assert "Jean Dupont" in html
    assert "Développeur Full Stack" in html
    assert "<ul><li>Français (Natif)</li>" in html
    assert "{{" not in html


@pytest.mark.unit
def test_substitute_placeholders():
    """Test literal tokens are replaced everywhere."""
    html = substitute_placeholders("{{a}} {{b}} {{a}}", {"a": "1", "b": "2"})
    assert html == "1 2 1"


@pytest.mark.unit
def test_substitute_placeholders_single_pass():
    """Test replacement text is not rescanned and unknown tokens stay."""
    html = substitute_placeholders("{{a}} {{b}} {{c}}", {"a": "{{b}}", "b": "2"})
    assert html == "{{b}} 2 {{c}}"


@pytest.mark.unit
def test_unfilled_placeholders(registry):
    """Test only declared keys without a value are blanked."""
    template = registry.get("basic")
    values = {key: "x" for key in template.placeholders if key != "phone"}

    assert unfilled_placeholders(template, values) == {"phone": ""}


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("text", "<i>text</i>"),
        ("", ""),
        ("   ", ""),
        (None, ""),
    ],
)
def test_process_conditionals(value, expected):
    """Test blocks are kept only for non-blank variables."""
    html = process_conditionals("{{#if x}}<i>{{x}}</i>{{/if}}", {"x": value})
    html = html.replace("{{x}}", value or "")
    assert html == expected


@pytest.mark.unit
def test_process_conditionals_multiline_and_multiple():
    """Test non-greedy matching across lines with several blocks."""
    html = (
        "{{#if a}}\n<p>A</p>\n{{/if}}|"
        "{{#if b}}<p>B</p>{{/if}}|"
        "{{#if missing}}<p>M</p>{{/if}}"
    )

    result = process_conditionals(html, {"a": "yes", "b": ""})

    assert result == "\n<p>A</p>\n||"
