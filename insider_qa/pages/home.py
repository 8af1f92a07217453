"""
insiderone.com home page checks.
"""
import logging

from insider_qa import settings
from insider_qa.conditions import clickable, visibility_of
from insider_qa.driver import BrowserDriver
from insider_qa.locators import HERO_GET_DEMO, HOME_EMAIL_INPUT, NAVBAR, NAVBAR_GET_DEMO, NAVBAR_LOGO
from insider_qa.pages.common import (
    attribute_safe,
    first,
    is_clickable,
    is_displayed_safe,
    is_enabled_safe,
    open_url,
    poll_config,
)
from insider_qa.polling import wait_until
from insider_qa.run_logger import log_keyword

logger = logging.getLogger(__name__)


@log_keyword("Open Home Page")
def open_home(driver: BrowserDriver, url: str = settings.HOME_URL) -> None:
    open_url(driver, url)


@log_keyword("Wait For Home Page Elements")
def wait_for_main_elements(driver: BrowserDriver, timeout: float = settings.DEFAULT_WAIT) -> None:
    config = poll_config(timeout)
    wait_until(visibility_of(driver, NAVBAR), config, "navbar visible")
    wait_until(visibility_of(driver, HOME_EMAIL_INPUT), config, "email input visible")
    wait_until(clickable(driver, NAVBAR_GET_DEMO), config, "navbar Get a demo clickable")
    logger.info("Homepage main elements loaded.")


@log_keyword("Navbar Should Be Visible")
def is_navbar_visible(driver: BrowserDriver) -> bool:
    el = first(driver, NAVBAR)
    visible = el is not None and is_displayed_safe(driver, el)
    if visible:
        logger.info(f"is_navbar_visible ok (locator={NAVBAR})")
    else:
        logger.error(f"is_navbar_visible failed (exists={el is not None}, visible={visible}) (locator={NAVBAR})")
    return visible


@log_keyword("Logo Should Link Home")
def is_logo_valid(driver: BrowserDriver) -> bool:
    el = first(driver, NAVBAR_LOGO)
    visible = False
    href = None
    if el is not None:
        visible = is_displayed_safe(driver, el)
        href = attribute_safe(driver, el, "href")
    href_ok = href is not None and settings.HOME_HOST in href

    ok = el is not None and visible and href_ok
    if ok:
        logger.info(f"is_logo_valid ok (href='{href}') (locator={NAVBAR_LOGO})")
    else:
        logger.error(
            f"is_logo_valid failed (exists={el is not None}, visible={visible}, href='{href}', "
            f"hrefContains={href_ok}) (locator={NAVBAR_LOGO})"
        )
    return ok


def _clickable_check(driver: BrowserDriver, name: str, locator, timeout: float) -> bool:
    exists = first(driver, locator) is not None
    ok = exists and is_clickable(driver, locator, timeout)
    if ok:
        logger.info(f"{name} ok (locator={locator})")
    else:
        logger.error(f"{name} failed (exists={exists}, clickable={ok}) (locator={locator})")
    return ok


@log_keyword("Navbar Get A Demo Should Be Clickable")
def is_navbar_get_demo_clickable(driver: BrowserDriver, timeout: float = settings.DEFAULT_WAIT) -> bool:
    return _clickable_check(driver, "is_navbar_get_demo_clickable", NAVBAR_GET_DEMO, timeout)


@log_keyword("Hero Get A Demo Should Be Clickable")
def is_hero_get_demo_clickable(driver: BrowserDriver, timeout: float = settings.DEFAULT_WAIT) -> bool:
    return _clickable_check(driver, "is_hero_get_demo_clickable", HERO_GET_DEMO, timeout)


@log_keyword("Email Input Should Be Usable")
def is_email_input_visible(driver: BrowserDriver) -> bool:
    el = first(driver, HOME_EMAIL_INPUT)
    visible = el is not None and is_displayed_safe(driver, el)
    enabled = el is not None and is_enabled_safe(driver, el)
    ok = visible and enabled
    if ok:
        logger.info(f"is_email_input_visible ok (locator={HOME_EMAIL_INPUT})")
    else:
        logger.error(
            f"is_email_input_visible failed (exists={el is not None}, visible={visible}, "
            f"enabled={enabled}) (locator={HOME_EMAIL_INPUT})"
        )
    return ok
