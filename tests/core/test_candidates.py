import pytest

from fake_browser import FakeBrowser, FakeElement, job_card, jobs_dom
from insider_qa.candidates import (
    JobPreview,
    extract_matching_candidates,
    is_qa_job_in_istanbul,
    normalize_whitespace,
)
from insider_qa.locators import JOB_CARD_LAYOUT as LAYOUT


@pytest.mark.parametrize("raw,expected", [
    ("  Quality   Assurance ", "Quality Assurance"),
    ("Istanbul,\n\tTurkiye", "Istanbul, Turkiye"),
    (" QA  Engineer", "QA Engineer"),
    ("", ""),
    ("   ", ""),
    (None, ""),
])
def test_normalize_whitespace(raw, expected):
    assert normalize_whitespace(raw) == expected


@pytest.mark.parametrize("raw", ["a  b", " x\n\ny ", "\t", "plain", "Istanbul,   Turkey  Remote"])
def test_normalize_whitespace_is_idempotent(raw):
    once = normalize_whitespace(raw)
    assert normalize_whitespace(once) == once


def test_job_preview_normalizes_fields():
    job = JobPreview(" Senior  QA ", "Quality\nAssurance", " Istanbul,  Turkiye", " https://jobs.lever.co/x ")

    assert job == JobPreview("Senior QA", "Quality Assurance", "Istanbul, Turkiye", "https://jobs.lever.co/x")


@pytest.mark.parametrize("title,department,location,expected", [
    ("Senior Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkiye", True),
    ("Quality Assurance Engineer", "QUALITY ASSURANCE", "Istanbul, TURKEY", True),
    ("Senior Quality Assurance Engineer", "Engineering", "Istanbul, Turkey Remote", False),
    ("Software Engineer", "Quality Assurance", "Istanbul, Turkiye", False),
    ("Quality Assurance Engineer", "Quality Assurance", "Ankara, Turkiye", False),
    ("Quality Assurance Engineer", "Quality Assurance", "Istanbul", False),
])
def test_qa_istanbul_predicate(title, department, location, expected):
    assert is_qa_job_in_istanbul(JobPreview(title, department, location, "href")) is expected


def test_extraction_keeps_matching_cards_in_dom_order():
    cards = [
        job_card(LAYOUT, "Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkiye", "https://jobs.lever.co/insider/1"),
        job_card(LAYOUT, "Senior Quality Assurance Engineer", "Engineering", "Istanbul, Turkey Remote", "https://jobs.lever.co/insider/2"),
        job_card(LAYOUT, "Senior  Quality Assurance\nEngineer", "Quality Assurance", "Istanbul,  Turkey", "https://jobs.lever.co/insider/3"),
    ]
    found = extract_matching_candidates(FakeBrowser(jobs_dom(LAYOUT, cards)), LAYOUT)

    assert [j.href for j in found] == ["https://jobs.lever.co/insider/1", "https://jobs.lever.co/insider/3"]
    assert [j.source_index for j in found] == [0, 2]
    assert found[1].title == "Senior Quality Assurance Engineer"


def test_broken_card_does_not_hide_the_others():
    broken = job_card(LAYOUT, "Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkiye", "h0")
    broken.children[LAYOUT.title][0].stale = True
    good = job_card(LAYOUT, "Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkiye", "h1")
    no_button = FakeElement(children={
        LAYOUT.title: [FakeElement("Quality Assurance Lead")],
        LAYOUT.department: [FakeElement("Quality Assurance")],
        LAYOUT.location: [FakeElement("Istanbul, Turkiye")],
    })

    found = extract_matching_candidates(FakeBrowser(jobs_dom(LAYOUT, [broken, good, no_button])), LAYOUT)

    assert [j.href for j in found] == ["h1", ""]
    assert found[1].title == "Quality Assurance Lead"


def test_custom_predicate():
    cards = [
        job_card(LAYOUT, "QA Engineer", "Quality Assurance", "Istanbul, Turkiye", "a"),
        job_card(LAYOUT, "Data Engineer", "Data", "Istanbul, Turkiye", "b"),
    ]
    found = extract_matching_candidates(
        FakeBrowser(jobs_dom(LAYOUT, cards)), LAYOUT, predicate=lambda j: j.department == "Data"
    )

    assert [j.href for j in found] == ["b"]


def test_no_cards_gives_empty_list():
    assert extract_matching_candidates(FakeBrowser(), LAYOUT) == []
    assert extract_matching_candidates(FakeBrowser(jobs_dom(LAYOUT, [])), LAYOUT) == []
