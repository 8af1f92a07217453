"""
Guarded user actions: overlay guard, readiness wait, scroll, act, one retry.
"""
import logging
from typing import Any, Sequence

from insider_qa import settings
from insider_qa.conditions import clickable, visibility_of
from insider_qa.driver import BrowserDriver, BrowserError, InterceptedError, StaleReferenceError, describe
from insider_qa.overlays import DEFAULT_OVERLAYS, Overlay, dismiss_transient_overlays
from insider_qa.polling import PollConfig, wait_until

logger = logging.getLogger(__name__)

DEFAULT_WAIT = PollConfig(timeout=settings.DEFAULT_WAIT, interval=settings.POLL_INTERVAL)

SCROLL_INTO_VIEW_JS = "arguments[0].scrollIntoView({block:'center', inline:'nearest'});"


def scroll_into_view(driver: BrowserDriver, element: Any) -> None:
    try:
        driver.execute_script(SCROLL_INTO_VIEW_JS, element)
    except BrowserError:
        # best-effort
        pass


def _click_once(driver: BrowserDriver, target: Any, config: PollConfig) -> None:
    el = wait_until(clickable(driver, target), config, f"clickable {describe(target)}")
    scroll_into_view(driver, el)
    driver.click(el)


def _select_once(driver: BrowserDriver, target: Any, text: str, config: PollConfig) -> None:
    el = wait_until(visibility_of(driver, target), config, f"visible {describe(target)}")
    scroll_into_view(driver, el)
    driver.select_by_visible_text(el, text)


def perform_click(
    driver: BrowserDriver,
    target: Any,
    config: PollConfig = DEFAULT_WAIT,
    overlays: Sequence[Overlay] = DEFAULT_OVERLAYS,
) -> None:
    """
    Click `target` (a Locator or a resolved element).

    An intercepted click gets the overlay guard again and exactly one more try.
    A second failure, or any other first failure, is raised to the caller.
    """
    dismiss_transient_overlays(driver, overlays)
    label = describe(target)
    logger.info(f"Safe click: {label}")
    try:
        _click_once(driver, target, config)
    except InterceptedError as e:
        logger.warning(f"Click intercepted, retrying once: {label} ({e})")
        dismiss_transient_overlays(driver, overlays)
        try:
            _click_once(driver, target, config)
        except Exception as retry_error:
            logger.error(f"Safe click failed after retry: {label} ({retry_error})")
            raise
    except Exception as e:
        logger.error(f"Safe click failed: {label} ({e})")
        raise


def perform_select(
    driver: BrowserDriver,
    target: Any,
    visible_text: str,
    config: PollConfig = DEFAULT_WAIT,
    overlays: Sequence[Overlay] = DEFAULT_OVERLAYS,
) -> None:
    """Select the option showing `visible_text`; stale or intercepted selects are retried once."""
    if visible_text is None:
        raise ValueError("visible_text must not be None")
    dismiss_transient_overlays(driver, overlays)
    label = describe(target)
    logger.info(f"Safe select by visible text: {label} -> {visible_text}")
    try:
        _select_once(driver, target, visible_text, config)
    except (StaleReferenceError, InterceptedError) as e:
        logger.warning(f"Select failed ({type(e).__name__}), retrying once: {label} -> {visible_text}")
        dismiss_transient_overlays(driver, overlays)
        try:
            _select_once(driver, target, visible_text, config)
        except Exception as retry_error:
            logger.error(f"Safe select failed after retry: {label} -> {visible_text} ({retry_error})")
            raise
    except Exception as e:
        logger.error(f"Safe select failed: {label} -> {visible_text} ({e})")
        raise
