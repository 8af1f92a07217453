"""
`BrowserDriver` backed by a Selenium WebDriver.
"""
import logging
from contextlib import contextmanager
from typing import Any, List, Optional, Set

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    ElementNotVisibleException,
    JavascriptException,
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import Select

from insider_qa.driver import (
    InterceptedError,
    Locator,
    NotFoundError,
    NotVisibleError,
    PollTimeout,
    StaleReferenceError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)

# Order matters: subclasses before WebDriverException
_TRANSLATIONS = (
    (NoSuchElementException, NotFoundError),
    (NoSuchWindowException, NotFoundError),
    (StaleElementReferenceException, StaleReferenceError),
    (ElementClickInterceptedException, InterceptedError),
    (ElementNotVisibleException, NotVisibleError),
    (ElementNotInteractableException, NotVisibleError),
    (TimeoutException, PollTimeout),
    (JavascriptException, UnexpectedError),
    (WebDriverException, UnexpectedError),
)


@contextmanager
def _translated(action: str):
    try:
        yield
    except WebDriverException as e:
        for native, ours in _TRANSLATIONS:
            if isinstance(e, native):
                raise ours(f"{action}: {e.msg or type(e).__name__}") from e
        raise UnexpectedError(f"{action}: {e}") from e


class SeleniumDriver:
    def __init__(self, webdriver: WebDriver):
        self.webdriver = webdriver

    def navigate(self, url: str) -> None:
        logger.info(f"Navigate: {url}")
        with _translated(f"navigate {url}"):
            self.webdriver.get(url)

    def find_elements(self, locator: Locator, within: Any = None) -> List[Any]:
        root = within if within is not None else self.webdriver
        with _translated(f"find {locator}"):
            return list(root.find_elements(locator.by, locator.value))

    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        with _translated(f"attribute {name}"):
            return element.get_attribute(name)

    def get_text(self, element: Any) -> str:
        with _translated("text"):
            return element.text or ""

    def is_visible(self, element: Any) -> bool:
        with _translated("is displayed"):
            return element.is_displayed()

    def is_enabled(self, element: Any) -> bool:
        with _translated("is enabled"):
            return element.is_enabled()

    def click(self, element: Any) -> None:
        with _translated("click"):
            element.click()

    def select_by_visible_text(self, element: Any, text: str) -> None:
        with _translated(f"select '{text}'"):
            Select(element).select_by_visible_text(text)

    def selected_option_text(self, element: Any) -> str:
        with _translated("selected option"):
            return Select(element).first_selected_option.text or ""

    def execute_script(self, source: str, *args: Any) -> Any:
        with _translated("execute script"):
            return self.webdriver.execute_script(source, *args)

    def get_current_url(self) -> str:
        with _translated("current url"):
            return self.webdriver.current_url or ""

    def get_title(self) -> str:
        with _translated("title"):
            return self.webdriver.title or ""

    def get_window_handles(self) -> Set[str]:
        with _translated("window handles"):
            return set(self.webdriver.window_handles)

    def get_current_window_handle(self) -> str:
        with _translated("current window handle"):
            return self.webdriver.current_window_handle

    def switch_to_window(self, handle: str) -> None:
        with _translated(f"switch to window {handle}"):
            self.webdriver.switch_to.window(handle)

    def save_screenshot(self, path: str) -> bool:
        with _translated("screenshot"):
            return bool(self.webdriver.save_screenshot(path))

    def quit(self) -> None:
        self.webdriver.quit()
