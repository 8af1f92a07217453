"""
Lever job posting page, reached through a job card's View Role button.
"""
from insider_qa import settings
from insider_qa.conditions import url_contains
from insider_qa.driver import BrowserDriver
from insider_qa.locators import LEVER_DEPARTMENT, LEVER_LOCATION, LEVER_TITLE
from insider_qa.pages import common
from insider_qa.polling import poll_until


def is_at(driver: BrowserDriver, timeout: float = settings.DEFAULT_WAIT) -> bool:
    # a freshly opened tab can still be on about:blank
    poll_until(url_contains(driver, settings.LEVER_HOST), common.poll_config(timeout))
    return common.is_at(driver, settings.LEVER_HOST)


def get_title(driver: BrowserDriver) -> str:
    return common.get_text(driver, LEVER_TITLE)


def get_department(driver: BrowserDriver) -> str:
    return common.get_text(driver, LEVER_DEPARTMENT)


def get_location(driver: BrowserDriver) -> str:
    return common.get_text(driver, LEVER_LOCATION)
