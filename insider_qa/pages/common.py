"""
Helpers shared by the page modules.
"""
import logging
from typing import Any, Optional

from insider_qa import settings
from insider_qa.actions import DEFAULT_WAIT
from insider_qa.conditions import clickable, document_ready, new_window_opened, visibility_of
from insider_qa.driver import BrowserDriver, BrowserError, Locator
from insider_qa.polling import PollConfig, poll_until, wait_until

logger = logging.getLogger(__name__)


def poll_config(timeout: float) -> PollConfig:
    return DEFAULT_WAIT.with_timeout(timeout)


def wait_for_document_ready(driver: BrowserDriver, timeout: float = settings.DOCUMENT_READY_WAIT) -> None:
    logger.debug("Wait document.readyState=complete")
    wait_until(document_ready(driver), poll_config(timeout), "document.readyState=complete")


def open_url(driver: BrowserDriver, url: str) -> None:
    driver.navigate(url)
    wait_for_document_ready(driver)


def is_at(driver: BrowserDriver, fragment: str) -> bool:
    try:
        url = driver.get_current_url()
    except BrowserError as e:
        logger.warning(f"is_at('{fragment}') could not read current url: {e}")
        return False
    ok = bool(url) and fragment in url
    if not ok:
        logger.warning(f"is_at('{fragment}') failed (currentUrl='{url}')")
    return ok


def wait_for_visible(driver: BrowserDriver, target: Any, timeout: float) -> Any:
    logger.debug(f"Wait visible: {target}")
    return wait_until(visibility_of(driver, target), poll_config(timeout), f"visible {target}")


def is_clickable(driver: BrowserDriver, locator: Locator, timeout: float) -> bool:
    return poll_until(clickable(driver, locator), poll_config(timeout)).success


def get_text(driver: BrowserDriver, locator: Locator, timeout: float = settings.TEXT_WAIT) -> str:
    el = wait_for_visible(driver, locator, timeout)
    return (driver.get_text(el) or "").strip()


def first(driver: BrowserDriver, locator: Locator) -> Optional[Any]:
    elements = driver.find_elements(locator)
    return elements[0] if elements else None


def is_displayed_safe(driver: BrowserDriver, element: Any) -> bool:
    try:
        return driver.is_visible(element)
    except BrowserError:
        return False


def is_enabled_safe(driver: BrowserDriver, element: Any) -> bool:
    try:
        return driver.is_enabled(element)
    except BrowserError:
        return False


def attribute_safe(driver: BrowserDriver, element: Any, name: str) -> Optional[str]:
    try:
        return driver.get_attribute(element, name)
    except BrowserError:
        return None


def switch_to_new_window(driver: BrowserDriver, handles_before, timeout: float = settings.DEFAULT_WAIT) -> str:
    """Switch the session to a window opened after `handles_before` was taken. Returns its handle."""
    opened = wait_until(new_window_opened(driver, handles_before), poll_config(timeout), "new window")
    handle = sorted(opened)[0]
    driver.switch_to_window(handle)
    logger.info(f"Switched to new window. url={driver.get_current_url()}, title={driver.get_title()}")
    return handle
