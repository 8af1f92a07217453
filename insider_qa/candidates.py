"""
Job card model and extraction of matching cards from the live list.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from insider_qa.driver import BrowserDriver, BrowserError, Locator
from insider_qa.locators import CardLayout

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(s: Optional[str]) -> str:
    """Collapse every whitespace run to one space and trim. None becomes ''."""
    if s is None:
        return ""
    return _WHITESPACE.sub(" ", s).strip()


@dataclass(frozen=True)
class JobPreview:
    title: str
    department: str
    location: str
    href: str
    source_index: int = -1

    def __post_init__(self):
        for name in ("title", "department", "location", "href"):
            object.__setattr__(self, name, normalize_whitespace(getattr(self, name)))


def is_qa_job_in_istanbul(job: JobPreview) -> bool:
    return all(qa_istanbul_criteria(job).values())


def qa_istanbul_criteria(job: JobPreview) -> dict:
    """Per-criterion flags, kept separate so skipped cards can be logged with the reason."""
    title = job.title.casefold()
    department = job.department.casefold()
    location = job.location.casefold()
    return {
        "matchedTitle": "quality assurance" in title,
        "matchedDept": "quality assurance" in department,
        "matchedLoc": "istanbul" in location and ("turkey" in location or "turkiye" in location),
    }


def read_text_in(driver: BrowserDriver, root: Any, locator: Locator) -> str:
    """Text of the first match under `root`, or '' when it cannot be read."""
    try:
        elements = driver.find_elements(locator, within=root)
        if not elements:
            return ""
        return (driver.get_text(elements[0]) or "").strip()
    except BrowserError:
        return ""


def read_attribute_in(driver: BrowserDriver, root: Any, locator: Locator, name: str) -> str:
    try:
        elements = driver.find_elements(locator, within=root)
        if not elements:
            return ""
        return (driver.get_attribute(elements[0], name) or "").strip()
    except BrowserError:
        return ""


def find_cards(driver: BrowserDriver, layout: CardLayout) -> List[Any]:
    """Cards currently rendered inside the list container (empty when the container is missing)."""
    containers = driver.find_elements(layout.container)
    if not containers:
        return []
    return driver.find_elements(layout.card, within=containers[0])


def read_card(driver: BrowserDriver, card: Any, layout: CardLayout, index: int = -1) -> JobPreview:
    return JobPreview(
        title=read_text_in(driver, card, layout.title),
        department=read_text_in(driver, card, layout.department),
        location=read_text_in(driver, card, layout.location),
        href=read_attribute_in(driver, card, layout.action, "href"),
        source_index=index,
    )


def extract_matching_candidates(
    driver: BrowserDriver,
    layout: CardLayout,
    predicate: Callable[[JobPreview], bool] = is_qa_job_in_istanbul,
) -> List[JobPreview]:
    """
    Read every card in DOM order and keep those `predicate` accepts.

    Read-only and single pass; a card with unreadable fields contributes empty
    strings for them instead of aborting the whole extraction.
    """
    try:
        cards = find_cards(driver, layout)
    except BrowserError as e:
        logger.warning(f"Could not read job cards: {e}")
        return []
    if not cards:
        logger.warning(f"No job cards found (locator={layout.card}).")
        return []

    matching = []
    for index, card in enumerate(cards):
        job = read_card(driver, card, layout, index)
        logger.info(
            f"Card(index={index}) title='{job.title}' dept='{job.department}' "
            f"loc='{job.location}' href='{job.href}'"
        )
        if not predicate(job):
            if predicate is is_qa_job_in_istanbul:
                flags = ", ".join(f"{k}={v}" for k, v in qa_istanbul_criteria(job).items())
                logger.warning(f"Skipping card(index={index}) because criteria not met. {flags}")
            else:
                logger.warning(f"Skipping card(index={index}) because criteria not met.")
            continue
        matching.append(job)
    return matching
