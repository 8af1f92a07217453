"""
Open positions page: department/location filters and the job card list.
"""
import logging
import random
import time
from typing import List, Optional, Sequence

from insider_qa import settings
from insider_qa.actions import perform_select
from insider_qa.candidates import JobPreview, extract_matching_candidates, normalize_whitespace
from insider_qa.conditions import count_at_least
from insider_qa.driver import BrowserDriver, BrowserError
from insider_qa.locators import (
    DEPARTMENT_SELECT,
    DEPARTMENT_SELECTED_OPTION,
    DEPARTMENT_SELECTED_OPTION_FALLBACK,
    JOB_CARD_LAYOUT,
    JOB_CARDS,
    JOBS_LIST,
    LOCATION_SELECT,
)
from insider_qa.pages import common
from insider_qa.polling import poll_until
from insider_qa.run_logger import log_keyword
from insider_qa.selection import select_with_fallback
from insider_qa.stabilization import read_text_safe, wait_for_content_change, wait_for_populated

logger = logging.getLogger(__name__)


def is_at(driver: BrowserDriver) -> bool:
    return common.is_at(driver, settings.OPEN_POSITIONS_PATH)


def _department_state(driver: BrowserDriver):
    """(selected option text, selected option class, select value), each '' when unreadable."""
    select_el = common.first(driver, DEPARTMENT_SELECT)
    if select_el is None:
        return "", "", ""
    try:
        text = driver.selected_option_text(select_el)
    except BrowserError:
        text = ""
    css_class = ""
    try:
        options = (driver.find_elements(DEPARTMENT_SELECTED_OPTION, within=select_el)
                   or driver.find_elements(DEPARTMENT_SELECTED_OPTION_FALLBACK, within=select_el))
        if options:
            css_class = driver.get_attribute(options[0], "class") or ""
    except BrowserError:
        css_class = ""
    value = common.attribute_safe(driver, select_el, "value") or ""
    return normalize_whitespace(text), normalize_whitespace(css_class), normalize_whitespace(value)


@log_keyword("Department Should Be Quality Assurance")
def is_department_auto_selected_as_qa(driver: BrowserDriver, timeout: float = settings.DEFAULT_WAIT) -> bool:
    try:
        logger.info(f"Check department auto-selected on URL: {driver.get_current_url()}")
        common.wait_for_visible(driver, DEPARTMENT_SELECT, timeout)

        def _qa_selected():
            text, css_class, _ = _department_state(driver)
            return "quality assurance" in text.lower() or "qualityassurance" in css_class.lower()

        ok = poll_until(_qa_selected, common.poll_config(timeout)).success

        text, css_class, value = _department_state(driver)
        logger.info(
            f"Department dropdown state: selectedText='{text}', selectedClass='{css_class}', selectValue='{value}'"
        )
        if ok:
            logger.info("Department auto-selected as Quality Assurance.")
        return ok
    except BrowserError as e:
        logger.warning(f"is_department_auto_selected_as_qa failed (non-fatal): {e}")
        return False


@log_keyword("Wait For Job Cards")
def wait_for_job_cards_loaded(driver: BrowserDriver, timeout: float = settings.CARDS_LOADED_WAIT) -> bool:
    layout = JOB_CARD_LAYOUT
    return wait_for_populated(driver, layout.container, layout.card, layout.required_fields, timeout)


@log_keyword("Select Location")
def select_location(driver: BrowserDriver, location_text: str = settings.LOCATION_FILTER_TEXT) -> bool:
    """Apply the location filter and wait for the list to re-render. Returns the populate result."""
    before = read_text_safe(driver, JOBS_LIST)
    perform_select(driver, LOCATION_SELECT, location_text)
    wait_for_content_change(driver, JOBS_LIST, before, settings.CONTENT_CHANGE_WAIT)
    # list keeps re-rendering for a moment after the first change
    time.sleep(settings.FILTER_SETTLE_WAIT)
    return wait_for_job_cards_loaded(driver, settings.POPULATE_AFTER_FILTER_WAIT)


@log_keyword("Jobs List Should Be Visible")
def is_jobs_list_visible(driver: BrowserDriver, timeout: float = settings.TEXT_WAIT) -> bool:
    try:
        el = common.wait_for_visible(driver, JOBS_LIST, timeout)
    except BrowserError as e:
        logger.warning(f"is_jobs_list_visible failed (non-fatal): {e}")
        return False
    visible = common.is_displayed_safe(driver, el)
    if not visible:
        logger.warning(f"Jobs list container not visible (locator={JOBS_LIST})")
    return visible


@log_keyword("Jobs List Should Have Cards")
def has_job_cards(driver: BrowserDriver, timeout: float = settings.CARD_COUNT_WAIT) -> bool:
    result = poll_until(count_at_least(driver, JOB_CARDS, 1), common.poll_config(timeout))
    if not result.success:
        logger.debug("Waiting for at least one job card did not succeed (continuing).")
    try:
        count = len(driver.find_elements(JOB_CARDS))
    except BrowserError:
        count = 0
    if count == 0:
        logger.warning(f"No job cards found (count={count}) (locator={JOB_CARDS})")
    return count > 0


@log_keyword("Collect QA Jobs In Istanbul")
def collect_valid_qa_jobs_in_istanbul(driver: BrowserDriver) -> List[JobPreview]:
    wait_for_job_cards_loaded(driver)
    valid = extract_matching_candidates(driver, JOB_CARD_LAYOUT)
    logger.info(f"Valid QA Istanbul cards count={len(valid)}")
    return valid


@log_keyword("Click Random View Role")
def click_random_valid_view_role(
    driver: BrowserDriver,
    valid_jobs: Sequence[JobPreview],
    rng: Optional[random.Random] = None,
) -> Optional[JobPreview]:
    return select_with_fallback(driver, valid_jobs, JOB_CARD_LAYOUT, rng=rng)
