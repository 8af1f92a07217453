"""
Readiness conditions for `poll_until`, in the spirit of Selenium's expected_conditions.

Each factory returns a zero-argument callable. The callable returns a truthy
value (usually the element) when the condition holds. Driver errors propagate
so the poller can decide whether they are ignorable.
"""
from typing import Any, Callable, Iterable

from insider_qa.driver import BrowserDriver, BrowserError, Locator, NotFoundError


def _resolve(driver: BrowserDriver, target: Any):
    if isinstance(target, Locator):
        elements = driver.find_elements(target)
        if not elements:
            raise NotFoundError(f"No element matches {target}")
        return elements[0]
    return target


def visibility_of(driver: BrowserDriver, target: Any) -> Callable[[], Any]:
    def _condition():
        el = _resolve(driver, target)
        return el if driver.is_visible(el) else False
    return _condition


def clickable(driver: BrowserDriver, target: Any) -> Callable[[], Any]:
    def _condition():
        el = _resolve(driver, target)
        return el if driver.is_visible(el) and driver.is_enabled(el) else False
    return _condition


def invisibility_of(driver: BrowserDriver, locator: Locator) -> Callable[[], bool]:
    """True once nothing matching `locator` is displayed (absent counts as invisible)."""
    def _condition():
        for el in driver.find_elements(locator):
            try:
                if driver.is_visible(el):
                    return False
            except BrowserError:
                # element went away between lookup and check
                continue
        return True
    return _condition


def document_ready(driver: BrowserDriver) -> Callable[[], bool]:
    def _condition():
        return driver.execute_script("return document.readyState") == "complete"
    return _condition


def count_at_least(driver: BrowserDriver, locator: Locator, min_count: int) -> Callable[[], bool]:
    def _condition():
        return len(driver.find_elements(locator)) >= min_count
    return _condition


def url_contains(driver: BrowserDriver, fragment: str) -> Callable[[], bool]:
    def _condition():
        return fragment in (driver.get_current_url() or "")
    return _condition


def new_window_opened(driver: BrowserDriver, handles_before: Iterable[str]) -> Callable[[], Any]:
    """Returns the set of handles that were not open before, once there is at least one."""
    before = set(handles_before)

    def _condition():
        opened = set(driver.get_window_handles()) - before
        return opened or False
    return _condition
