"""
Careers / Quality Assurance landing page.
"""
import logging
from typing import Optional

from insider_qa import settings
from insider_qa.actions import perform_click
from insider_qa.driver import BrowserDriver, BrowserError
from insider_qa.locators import SEE_ALL_QA_JOBS_BUTTON
from insider_qa.overlays import accept_cookies_within
from insider_qa.pages import common
from insider_qa.run_logger import log_keyword

logger = logging.getLogger(__name__)


@log_keyword("Open Careers QA Page")
def open_careers_qa(driver: BrowserDriver, url: str = settings.CAREERS_QA_URL) -> None:
    logger.info(f"Open Careers QA page: {url}")
    common.open_url(driver, url)


def is_at(driver: BrowserDriver) -> bool:
    return common.is_at(driver, settings.CAREERS_QA_PATH)


@log_keyword("See All QA Jobs Should Be Visible")
def is_see_all_jobs_visible(driver: BrowserDriver, timeout: float = settings.TEXT_WAIT) -> bool:
    try:
        el = common.wait_for_visible(driver, SEE_ALL_QA_JOBS_BUTTON, timeout)
    except BrowserError as e:
        logger.warning(f"See All QA Jobs button not visible in time (locator={SEE_ALL_QA_JOBS_BUTTON}): {e}")
        return False
    visible = common.is_displayed_safe(driver, el)
    if not visible:
        logger.warning(f"See All QA Jobs button present but not visible (locator={SEE_ALL_QA_JOBS_BUTTON})")
    return visible


def find_see_all_jobs_href(driver: BrowserDriver) -> Optional[str]:
    """Href of the button that carries the QA department filter, else the first button's href."""
    try:
        elements = driver.find_elements(SEE_ALL_QA_JOBS_BUTTON)
    except BrowserError:
        return None
    for el in elements:
        href = common.attribute_safe(driver, el, "href")
        if href and settings.QA_DEPARTMENT_QUERY in href:
            return href
    return common.attribute_safe(driver, elements[0], "href") if elements else None


@log_keyword("See All QA Jobs Href Should Filter Department")
def is_see_all_jobs_href_correct(driver: BrowserDriver) -> bool:
    href = find_see_all_jobs_href(driver)
    ok = href is not None and settings.QA_DEPARTMENT_QUERY in href
    if not ok:
        logger.warning(f"See All QA Jobs href invalid (href='{href}') (locator={SEE_ALL_QA_JOBS_BUTTON})")
    return ok


@log_keyword("Click See All QA Jobs")
def click_see_all_jobs(driver: BrowserDriver) -> None:
    """
    Click through to the open positions list.

    The site sometimes drops the department query on the way; in that case
    the button's own href is opened directly so the list starts filtered.
    """
    expected_href = find_see_all_jobs_href(driver)
    accept_cookies_within(driver)

    perform_click(driver, SEE_ALL_QA_JOBS_BUTTON)
    common.wait_for_document_ready(driver)

    if expected_href:
        url = driver.get_current_url()
        if not url or settings.QA_DEPARTMENT_QUERY not in url:
            logger.info(f"Re-navigate using See All QA Jobs href to ensure department filter (href='{expected_href}')")
            common.open_url(driver, expected_href)
