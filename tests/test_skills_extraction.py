"""Tests for skill, language and certification extraction."""

from __future__ import annotations

from hireflow.resume.skills import (
    MAX_SKILLS,
    categorize_skills,
    extract_certifications,
    extract_languages,
    extract_skills,
    find_known_skills,
    parse_languages,
)


def test_extract_skills_from_section(sample_resume_text: str) -> None:
    """Skills come from the skills section."""
    assert extract_skills(sample_resume_text) == [
        "Python",
        "PostgreSQL",
        "AWS",
        "Docker",
        "Kubernetes",
        "Leadership",
        "Communication",
    ]


def test_extract_skills_adds_capitalised_tokens_but_not_labels() -> None:
    """Capitalised tokens in the section count, category labels do not."""
    text = "Skills\nPython\nFrameworks: Django, Flask\nTools: Terraform, Ansible"
    assert extract_skills(text) == ["Python", "Django", "Flask", "Terraform", "Ansible"]


def test_extract_skills_whole_text_only_uses_known_skills() -> None:
    """Without a section only known skills are taken from the text."""
    text = "Worked with Java and Spring on Azure for Acme"
    assert extract_skills(text) == ["Java", "Azure"]


def test_known_skills_match_whole_words() -> None:
    """Known skills match whole words only."""
    assert find_known_skills("JavaScript developer") == ["JavaScript"]
    assert find_known_skills("Chair of the committee") == []


def test_extract_skills_is_capped() -> None:
    """The skill list is capped."""
    tokens = ", ".join(f"Skill{chr(97 + i)}x" for i in range(20))
    text = "Skills\n" + ", ".join(
        ["Python", "Java", "React", "Angular", "Docker", "Kubernetes"]
    ) + ", " + tokens
    assert len(extract_skills(text)) == MAX_SKILLS


def test_categorize_skills() -> None:
    """Skills are split into technical and soft skills."""
    technical, soft = categorize_skills(["Python", "Leadership", "Project Management", "Kafka"])
    assert technical == ["Python", "Kafka"]
    assert soft == ["Leadership", "Project Management"]


def test_extract_languages(sample_resume_text: str) -> None:
    """Spoken languages come from their section, or from the whole text without one."""
    assert extract_languages(sample_resume_text) == ["English", "Spanish"]
    assert extract_languages("Fluent in French and German") == ["French", "German"]
    assert extract_languages("Python developer") == []


def test_parse_languages_with_levels() -> None:
    """Proficiency levels are attached in parentheses."""
    assert parse_languages("English (Native), Spanish - B2; Mandarin | Hindi & Tamil (Basic)") == [
        "English (Native)",
        "Spanish (B2)",
        "Mandarin",
        "Hindi",
        "Tamil (Basic)",
    ]


def test_parse_languages_unknown_names_kept_verbatim() -> None:
    """Short unknown entries are kept as written."""
    assert parse_languages("Klingon, Old Elvish, x") == ["Klingon", "Old Elvish"]


def test_parse_languages_not_provided() -> None:
    """"Not provided" yields no languages."""
    assert parse_languages("Not provided") == []
    assert parse_languages("") == []


def test_extract_certifications_from_section(sample_resume_text: str) -> None:
    """Certifications come from their section."""
    assert extract_certifications(sample_resume_text) == ["AWS Certified Solutions Architect"]


def test_extract_certifications_without_section() -> None:
    """Without a section, lines mentioning certifications are used."""
    text = "Jane Doe\nPMP holder since 2019\nCertified Kubernetes Administrator\nLikes chess"
    assert extract_certifications(text) == [
        "PMP holder since 2019",
        "Certified Kubernetes Administrator",
    ]
