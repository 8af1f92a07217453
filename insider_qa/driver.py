"""
Browser driver capability used by the interaction layer.

Everything above this module talks to the browser through `BrowserDriver`,
so the same waits, guards and selection logic run on Selenium or Playwright.
Adapters translate their native exceptions into the `BrowserError` family below.
"""
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Protocol, Set


class Locator(NamedTuple):
    """How to find elements. `by` uses the Selenium strategy names."""
    by: str
    value: str

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls("id", value)

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls("css selector", value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls("xpath", value)

    def __str__(self) -> str:
        return f"{self.by}={self.value}"


class ErrorKind(Enum):
    NOT_FOUND = "NotFound"
    NOT_VISIBLE = "NotVisible"
    STALE_REFERENCE = "StaleReference"
    INTERCEPTED = "Intercepted"
    TIMEOUT_EXCEEDED = "TimeoutExceeded"
    UNEXPECTED = "Unexpected"


class BrowserError(Exception):
    """Base class for every error raised through the driver capability."""
    kind = ErrorKind.UNEXPECTED


class NotFoundError(BrowserError):
    kind = ErrorKind.NOT_FOUND


class NotVisibleError(BrowserError):
    kind = ErrorKind.NOT_VISIBLE


class StaleReferenceError(BrowserError):
    kind = ErrorKind.STALE_REFERENCE


class InterceptedError(BrowserError):
    kind = ErrorKind.INTERCEPTED


class PollTimeout(BrowserError):
    kind = ErrorKind.TIMEOUT_EXCEEDED


class UnexpectedError(BrowserError):
    kind = ErrorKind.UNEXPECTED


class BrowserDriver(Protocol):
    """Minimal surface the interaction layer needs from a browser session."""

    def navigate(self, url: str) -> None: ...

    def find_elements(self, locator: Locator, within: Any = None) -> List[Any]: ...

    def get_attribute(self, element: Any, name: str) -> Optional[str]: ...

    def get_text(self, element: Any) -> str: ...

    def is_visible(self, element: Any) -> bool: ...

    def is_enabled(self, element: Any) -> bool: ...

    def click(self, element: Any) -> None: ...

    def select_by_visible_text(self, element: Any, text: str) -> None: ...

    def selected_option_text(self, element: Any) -> str: ...

    def execute_script(self, source: str, *args: Any) -> Any: ...

    def get_current_url(self) -> str: ...

    def get_title(self) -> str: ...

    def get_window_handles(self) -> Set[str]: ...

    def get_current_window_handle(self) -> str: ...

    def switch_to_window(self, handle: str) -> None: ...

    def save_screenshot(self, path: str) -> bool: ...

    def quit(self) -> None: ...


def describe(target: Any) -> str:
    """Short label for a click/select target, used in log lines."""
    if isinstance(target, Locator):
        return str(target)
    return "WebElement"
