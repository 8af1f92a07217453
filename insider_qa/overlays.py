"""
Best-effort dismissal of short-lived overlays (cookie consent, marketing pop-up).

Nothing in here raises. An overlay that cannot be closed is logged and the
caller carries on; the guarded action's own retry handles what is left.
"""
import logging
from dataclasses import dataclass
from typing import Sequence

from insider_qa import settings
from insider_qa.conditions import clickable, invisibility_of
from insider_qa.driver import BrowserDriver, Locator
from insider_qa.locators import COOKIE_ACCEPT_BUTTON, COOKIE_BANNER, MARKETING_POPUP_CLOSE
from insider_qa.polling import PollConfig, poll_until, wait_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Overlay:
    name: str
    # Element whose visibility means the overlay is up
    trigger: Locator
    # Control that closes it
    dismiss: Locator
    timeout: float = 2.0


COOKIE_OVERLAY = Overlay("cookie banner", COOKIE_BANNER, COOKIE_ACCEPT_BUTTON, settings.COOKIE_GUARD_WAIT)
MARKETING_OVERLAY = Overlay("marketing popup", MARKETING_POPUP_CLOSE, MARKETING_POPUP_CLOSE, settings.POPUP_GUARD_WAIT)
DEFAULT_OVERLAYS = (COOKIE_OVERLAY, MARKETING_OVERLAY)


def _guard_config(timeout: float) -> PollConfig:
    timeout = max(timeout, settings.POLL_INTERVAL)
    return PollConfig(timeout=timeout, interval=settings.POLL_INTERVAL)


def dismiss_overlay(driver: BrowserDriver, overlay: Overlay) -> bool:
    """Close one overlay if it is showing. Returns True only when it was closed."""
    try:
        triggers = driver.find_elements(overlay.trigger)
        if not triggers:
            logger.debug(f"{overlay.name} not present.")
            return False
        if not driver.is_visible(triggers[0]):
            logger.debug(f"{overlay.name} present but not displayed.")
            return False

        config = _guard_config(overlay.timeout)
        button = wait_until(clickable(driver, overlay.dismiss), config, f"{overlay.name} close control")
        driver.click(button)
        wait_until(invisibility_of(driver, overlay.trigger), config, f"{overlay.name} to disappear")
        logger.info(f"Closed {overlay.name}.")
        return True
    except Exception as e:
        logger.warning(f"Dismissing {overlay.name} failed (non-fatal): {e}")
        return False


def dismiss_transient_overlays(driver: BrowserDriver, overlays: Sequence[Overlay] = DEFAULT_OVERLAYS) -> int:
    """Run the guard for every known overlay. Returns how many were closed."""
    closed = 0
    for overlay in overlays:
        if dismiss_overlay(driver, overlay):
            closed += 1
    return closed


def accept_cookies_within(driver: BrowserDriver, timeout: float = settings.COOKIE_ACCEPT_WAIT) -> bool:
    """
    Wait up to `timeout` for the cookie accept button and click it.

    Used right after opening a page, where the banner tends to slide in late
    and the guard's "is it visible right now" check would miss it.
    """
    result = poll_until(clickable(driver, COOKIE_ACCEPT_BUTTON), _guard_config(timeout))
    if not result.success:
        if result.timed_out:
            logger.info(f"No cookie popup detected within {timeout:g} seconds. Continuing.")
        else:
            logger.warning(f"Cookie popup handling failed (non-fatal): {result.error}")
        return False
    try:
        driver.click(result.value)
        logger.info("Cookie popup detected and accepted.")
        return True
    except Exception as e:
        logger.warning(f"Cookie popup click failed (non-fatal): {e}")
        return False
