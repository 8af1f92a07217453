"""
`BrowserDriver` backed by a Playwright browser context (FAST_MODE).

Playwright has no window handles, so every page of the context gets a stable
generated handle. Selenium-style scripts (`arguments[0]`, `return ...`) are
wrapped so page modules can share one script dialect.
"""
import itertools
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Set

from playwright.sync_api import BrowserContext, Error as PWError, Page, TimeoutError as PWTimeoutError

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

ACTION_TIMEOUT_MS = 5000

_ATTRIBUTE_JS = """(el, name) => {
    const v = el[name];
    return (typeof v === 'string') ? v : el.getAttribute(name);
}"""
_SELECTED_OPTION_JS = "el => (el.selectedIndex >= 0 ? el.options[el.selectedIndex].text : '')"


def to_selector(locator: Locator) -> str:
    by, value = locator.by, locator.value
    if by == "css selector":
        return f"css={value}"
    if by == "xpath":
        return f"xpath={value}"
    if by == "id":
        return f'css=[id="{value}"]'
    if by == "name":
        return f'css=[name="{value}"]'
    if by == "tag name":
        return f"css={value}"
    if by == "link text":
        return f'text="{value}"'
    raise UnexpectedError(f"Unsupported locator strategy for Playwright: {by}")


def _classify(message: str, timed_out: bool):
    text = message.lower()
    if "intercepts pointer events" in text:
        return InterceptedError
    if "not attached" in text or "execution context was destroyed" in text:
        return StaleReferenceError
    if "not visible" in text:
        return NotVisibleError
    if "did not find some options" in text or "no element" in text:
        return NotFoundError
    if timed_out:
        return PollTimeout
    return UnexpectedError


@contextmanager
def _translated(action: str):
    try:
        yield
    except PWTimeoutError as e:
        raise _classify(str(e), True)(f"{action}: {e}") from e
    except PWError as e:
        raise _classify(str(e), False)(f"{action}: {e}") from e


class PlaywrightDriver:
    def __init__(self, context: BrowserContext, page: Optional[Page] = None):
        self.context = context
        self.page = page or (context.pages[0] if context.pages else context.new_page())
        self._handles: Dict[Page, str] = {}
        self._counter = itertools.count(1)

    def _handle(self, page: Page) -> str:
        if page not in self._handles:
            self._handles[page] = f"page-{next(self._counter)}"
        return self._handles[page]

    def navigate(self, url: str) -> None:
        logger.info(f"Navigate: {url}")
        with _translated(f"navigate {url}"):
            self.page.goto(url, wait_until="domcontentloaded")

    def find_elements(self, locator: Locator, within: Any = None) -> List[Any]:
        root = within if within is not None else self.page
        with _translated(f"find {locator}"):
            return list(root.query_selector_all(to_selector(locator)))

    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        with _translated(f"attribute {name}"):
            return element.evaluate(_ATTRIBUTE_JS, name)

    def get_text(self, element: Any) -> str:
        with _translated("text"):
            return element.inner_text() or ""

    def is_visible(self, element: Any) -> bool:
        with _translated("is visible"):
            return element.is_visible()

    def is_enabled(self, element: Any) -> bool:
        with _translated("is enabled"):
            return element.is_enabled()

    def click(self, element: Any) -> None:
        with _translated("click"):
            element.click(timeout=ACTION_TIMEOUT_MS)

    def select_by_visible_text(self, element: Any, text: str) -> None:
        with _translated(f"select '{text}'"):
            element.select_option(label=text, timeout=ACTION_TIMEOUT_MS)

    def selected_option_text(self, element: Any) -> str:
        with _translated("selected option"):
            return element.evaluate(_SELECTED_OPTION_JS) or ""

    def execute_script(self, source: str, *args: Any) -> Any:
        wrapper = f"(args) => (function() {{ {source} }}).apply(null, args)"
        with _translated("execute script"):
            return self.page.evaluate(wrapper, list(args))

    def get_current_url(self) -> str:
        return self.page.url or ""

    def get_title(self) -> str:
        with _translated("title"):
            return self.page.title() or ""

    def get_window_handles(self) -> Set[str]:
        return {self._handle(p) for p in self.context.pages if not p.is_closed()}

    def get_current_window_handle(self) -> str:
        return self._handle(self.page)

    def switch_to_window(self, handle: str) -> None:
        for page in self.context.pages:
            if not page.is_closed() and self._handle(page) == handle:
                self.page = page
                with _translated(f"switch to window {handle}"):
                    page.bring_to_front()
                return
        raise NotFoundError(f"No open page with handle {handle}")

    def save_screenshot(self, path: str) -> bool:
        with _translated("screenshot"):
            self.page.screenshot(path=path, full_page=True)
        return True

    def quit(self) -> None:
        self.context.close()
