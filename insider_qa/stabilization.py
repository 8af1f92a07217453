"""
Waits for an asynchronously re-rendered result list.

After a filter change the list is cleared and refilled piece by piece, so a
read straight after the action races the re-render. Both waits here answer
with a bool and never raise.
"""
import logging
from typing import Sequence

from insider_qa import settings
from insider_qa.candidates import normalize_whitespace, read_text_in
from insider_qa.driver import BrowserDriver, BrowserError, Locator
from insider_qa.polling import PollConfig, poll_until

logger = logging.getLogger(__name__)


def _config(timeout: float) -> PollConfig:
    # at least one poll interval, so a zero or negative setting still checks once
    timeout = max(timeout, settings.POLL_INTERVAL)
    return PollConfig(timeout=timeout, interval=settings.POLL_INTERVAL)


def read_text_safe(driver: BrowserDriver, locator: Locator) -> str:
    try:
        elements = driver.find_elements(locator)
        return driver.get_text(elements[0]) if elements else ""
    except BrowserError:
        return ""


def wait_for_populated(
    driver: BrowserDriver,
    list_locator: Locator,
    row_locator: Locator,
    field_locators: Sequence[Locator],
    timeout: float,
) -> bool:
    """
    True as soon as any one row inside the list shows every required field non-blank.

    Rows are not expected to become ready together (the list renders
    incrementally), so a single complete row is enough.
    """
    def _populated():
        containers = driver.find_elements(list_locator)
        if not containers:
            return False
        rows = driver.find_elements(row_locator, within=containers[0])
        for row in rows:
            if all(normalize_whitespace(read_text_in(driver, row, f)) for f in field_locators):
                return True
        return False

    result = poll_until(_populated, _config(timeout))
    if result.success:
        logger.debug(f"Job list populated after {result.elapsed:.2f}s ({result.attempts} polls).")
        return True
    if result.timed_out:
        logger.warning(f"Timed out waiting for job list to populate (timeout={timeout:g}s).")
    else:
        logger.warning(f"wait_for_populated failed (non-fatal): {result.error}")
    return False


def wait_for_content_change(
    driver: BrowserDriver,
    container_locator: Locator,
    before_snapshot: str,
    timeout: float,
) -> bool:
    """
    True when the container's text differs from `before_snapshot`.

    Some filter results leave the visible text unchanged, so False only
    means "no change seen"; callers continue either way.
    """
    before = normalize_whitespace(before_snapshot)

    def _changed():
        return normalize_whitespace(read_text_safe(driver, container_locator)) != before

    result = poll_until(_changed, _config(timeout))
    if result.success:
        return True
    if result.timed_out:
        logger.info(f"Jobs list did not change within settle timeout ({timeout:g}s). Continuing.")
    else:
        logger.debug(f"wait_for_content_change failed (non-fatal): {result.error}. Continuing.")
    return False
