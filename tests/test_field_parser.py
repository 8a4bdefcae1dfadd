"""Tests for extracting candidate facts from a single resume chunk."""

from app.core.field_parser import (
    extract_education,
    extract_experience_years,
    extract_name,
    extract_phone,
    extract_skills,
    parse,
)
from app.core.schemas import CandidateFacts
from app.core.segmenter import segment
from app.core.vocabulary import Vocabulary


def test_labeled_resume_end_to_end():
    text = (
        "Name: Jane Doe\n"
        "Email: jane@x.com\n"
        "Key Skills:\n"
        "JavaScript, React\n"
        "\n"
        "Education:\n"
        "Bachelor of Computer Science, 2019"
    )
    facts = parse(text)

    assert facts.name == "Jane Doe"
    assert facts.email == "jane@x.com"
    assert {"javascript", "react"} <= set(facts.skills)
    assert len(facts.education) == 1
    assert "Bachelor of Computer Science" in facts.education[0].degree
    assert facts.education[0].institution == ""
    assert facts.education[0].year == ""
    assert facts.raw_text == text


def test_empty_chunk_gives_empty_facts():
    facts = parse("")
    assert facts == CandidateFacts()


class TestName:
    def test_name_label_wins_over_first_line(self):
        assert extract_name("JOHN SMITH\nName: Jane Doe\njane@x.com") == "Jane Doe"

    def test_prefixed_name_label(self):
        assert extract_name("Candidate Name: John Smith\nRole: Data Engineer\njohn@x.com") == "John Smith"
        assert extract_name("Full Name:   Jane Doe  \njane@x.com") == "Jane Doe"

    def test_label_must_start_a_word(self):
        assert extract_name("Username: jdoe\nJane Doe\njane@x.com") == "Jane Doe"

    def test_first_plausible_line(self):
        text = "\n\nJane Doe\njane.doe@example.com\n(555) 123-4567"
        assert extract_name(text) == "Jane Doe"

    def test_skips_lines_with_digits_punctuation_or_at(self):
        text = "jane.doe@example.com\n(555) 123-4567\nSenior Engineer, Acme\nJane Doe"
        assert extract_name(text) == "Jane Doe"

    def test_only_first_five_lines_are_scanned(self):
        text = "1\n2\n3\n4\n5\nJane Doe"
        assert extract_name(text) == ""

    def test_too_long_line_is_not_a_name(self):
        assert extract_name("A" * 51) == ""
        assert extract_name("A" * 50) == "A" * 50


class TestContact:
    def test_first_email_is_taken(self):
        facts = parse("Jane Doe\nprimary@example.com\nbackup@example.org")
        assert facts.email == "primary@example.com"

    def test_phone_formats(self):
        assert extract_phone("Call (555) 123-4567 today") == "(555) 123-4567"
        assert extract_phone("Phone: +1 555.123.4567") == "+1 555.123.4567"
        assert extract_phone("Mobile 5551234567") == "5551234567"

    def test_no_phone(self):
        assert extract_phone("Graduated 2019") == ""


class TestSkills:
    def test_key_skills_section_limits_search(self):
        text = (
            "Jane Doe\n"
            "Key Skills: Python, Docker\n"
            "\n"
            "Worked alongside a marketing team on SEO campaigns."
        )
        skills = extract_skills(text)
        assert set(skills) == {"python", "docker"}

    def test_whole_chunk_without_section(self):
        text = "Built dashboards in Tableau and pipelines in Python.\nLed agile ceremonies."
        assert set(extract_skills(text)) == {"tableau", "python", "agile"}

    def test_case_insensitive_and_deduplicated(self):
        skills = extract_skills("Key Skills: SQL, sql, MySQL")
        assert skills.count("sql") == 1
        assert "mysql" in skills

    def test_substring_containment(self):
        # 'java' is contained in 'javascript'
        assert set(extract_skills("Key Skills: JavaScript")) == {"javascript", "java"}

    def test_custom_vocabulary(self):
        vocab = Vocabulary(skills=("rust", "go"))
        assert extract_skills("Key Skills: Rust, Python", vocab) == ["rust"]


class TestExperience:
    def test_maximum_mention_wins(self):
        text = "2 years of experience with React. Overall 7+ years experience in web. 3 yrs exp in Go."
        assert extract_experience_years(text) == 7

    def test_labeled_experience(self):
        assert extract_experience_years("Experience: 4 years") == 4

    def test_both_families_combined(self):
        text = "Experience: 12 years\n5 years of experience leading teams"
        assert extract_experience_years(text) == 12

    def test_no_mentions(self):
        assert extract_experience_years("Graduated in 2019") == 0

    def test_implausible_values_ignored(self):
        assert extract_experience_years("2019 years of experience, 6 years of experience") == 6
        assert extract_experience_years("99 years experience", max_plausible=100) == 99


class TestEducation:
    def test_only_keyword_lines_are_kept(self):
        text = (
            "Education:\n"
            "Master of Business Administration (MBA)\n"
            "Graduated with honours\n"
            "State University\n"
            "\n"
            "Bachelor degree mentioned after the section"
        )
        degrees = [e.degree for e in extract_education(text)]
        assert degrees == ["Master of Business Administration (MBA)", "State University"]

    def test_no_section_means_no_education(self):
        assert extract_education("Bachelor of Science in Physics, MIT") == []

    def test_inline_section(self):
        degrees = [e.degree for e in extract_education("Education: B.Tech in Computer Science")]
        assert degrees == ["B.Tech in Computer Science"]


def test_prefixed_name_labels_survive_segmentation():
    body = "Data engineer with 5 years of experience running batch and streaming pipelines."
    resumes = [
        f"Candidate Name: {name}\nContact: (555) 987-6543\n{email}\nKey Skills: Python, SQL\n{body}"
        for name, email in [("John Smith", "john@example.com"), ("Ann Lee", "ann@example.org")]
    ]
    chunks = segment("\n\n".join(resumes))

    assert [parse(c).name for c in chunks] == ["John Smith", "Ann Lee"]
