"""
Pick one matching job card whose "View Role" click opens a new tab.

One pass over a shuffled copy of the candidates: locate the live card by its
href, snapshot window handles, guarded click, watch for a new handle. The
first candidate that opens a tab wins; the rest are never touched.
"""
import logging
import random
from typing import Any, List, Optional, Sequence

from insider_qa import settings
from insider_qa.actions import DEFAULT_WAIT, perform_click
from insider_qa.candidates import JobPreview, find_cards, normalize_whitespace, read_attribute_in
from insider_qa.conditions import new_window_opened
from insider_qa.driver import BrowserDriver, BrowserError, InterceptedError
from insider_qa.locators import CardLayout
from insider_qa.overlays import DEFAULT_OVERLAYS, Overlay
from insider_qa.polling import PollConfig, poll_until
from insider_qa.stabilization import wait_for_populated

logger = logging.getLogger(__name__)

NEW_WINDOW_WAIT = PollConfig(timeout=settings.NEW_WINDOW_WAIT, interval=settings.POLL_INTERVAL)


def shuffled_copy(candidates: Sequence[JobPreview], rng: Optional[random.Random] = None) -> List[JobPreview]:
    """Randomized consumption order; `candidates` itself is left as is."""
    order = list(candidates)
    (rng or random).shuffle(order)
    return order


def locate_action(driver: BrowserDriver, layout: CardLayout, href: str) -> Optional[Any]:
    """Action element of the live card whose href matches exactly, or None."""
    for card in find_cards(driver, layout):
        if normalize_whitespace(read_attribute_in(driver, card, layout.action, "href")) == href:
            actions = driver.find_elements(layout.action, within=card)
            if actions:
                return actions[0]
    return None


def select_with_fallback(
    driver: BrowserDriver,
    candidates: Sequence[JobPreview],
    layout: CardLayout,
    rng: Optional[random.Random] = None,
    observe: PollConfig = NEW_WINDOW_WAIT,
    click_config: PollConfig = DEFAULT_WAIT,
    overlays: Sequence[Overlay] = DEFAULT_OVERLAYS,
    ready_timeout: float = settings.CARDS_LOADED_WAIT,
) -> Optional[JobPreview]:
    """
    Click candidates in random order until one opens a new browsing context.

    Returns that candidate, or None once every candidate was tried. Failures
    of a single candidate (card gone, click intercepted, no new tab) only move
    on to the next one. The active window is not switched here.
    """
    if not candidates:
        logger.warning("select_with_fallback: no candidates; nothing to click.")
        return None

    order = shuffled_copy(candidates, rng)
    wait_for_populated(driver, layout.container, layout.card, layout.required_fields, ready_timeout)

    for candidate_index, candidate in enumerate(order):
        href = normalize_whitespace(candidate.href)
        try:
            action = locate_action(driver, layout, href)
            if action is None:
                logger.warning(
                    f"Candidate card not found on page by href; skipping "
                    f"(candidateIndex={candidate_index}, href='{href}')."
                )
                continue

            handles_before = set(driver.get_window_handles())
            logger.info(
                f"Attempting View Role click (candidateIndex={candidate_index}, title='{candidate.title}', "
                f"dept='{candidate.department}', loc='{candidate.location}', href='{href}')"
            )
            perform_click(driver, action, config=click_config, overlays=overlays)

            opened = poll_until(new_window_opened(driver, handles_before), observe)
            if opened.success:
                logger.info(
                    f"New tab opened successfully for candidate (candidateIndex={candidate_index}, href='{href}')."
                )
                return candidate

            logger.warning(
                f"Click did not open a new tab in time; trying next candidate "
                f"(candidateIndex={candidate_index}, href='{href}')."
            )
        except InterceptedError as e:
            logger.warning(
                f"View Role click intercepted; trying next candidate "
                f"(candidateIndex={candidate_index}, href='{href}'): {e}"
            )
        except BrowserError as e:
            logger.warning(
                f"Candidate click attempt failed; trying next candidate "
                f"(candidateIndex={candidate_index}, href='{href}'): {e}"
            )

    logger.error(f"All valid candidates exhausted; could not open any View Role tab (count={len(candidates)}).")
    return None
