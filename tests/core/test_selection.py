import random

import pytest

from fake_browser import FakeBrowser, action_of, job_card, jobs_dom
from insider_qa.candidates import JobPreview
from insider_qa.driver import InterceptedError
from insider_qa.locators import JOB_CARD_LAYOUT as LAYOUT
from insider_qa.polling import PollConfig
from insider_qa.selection import select_with_fallback, shuffled_copy

FAST = dict(
    observe=PollConfig(timeout=0.05, interval=0.01),
    click_config=PollConfig(timeout=0.05, interval=0.01),
    overlays=(),
    ready_timeout=0.05,
)


def _preview(i):
    return JobPreview("Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkiye",
                      f"https://jobs.lever.co/insider/{i}", source_index=i)


def _page(previews, openers=()):
    cards = {
        p.href: job_card(LAYOUT, p.title, p.department, p.location, p.href, opens_window=p.href in openers)
        for p in previews
    }
    return FakeBrowser(jobs_dom(LAYOUT, list(cards.values()))), cards


def test_shuffled_copy_leaves_source_untouched():
    previews = [_preview(i) for i in range(10)]
    snapshot = list(previews)

    order = shuffled_copy(previews, random.Random(3))

    assert previews == snapshot
    assert sorted(order, key=lambda p: p.source_index) == previews


@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_returns_first_candidate_that_opens_a_window(k):
    previews = [_preview(i) for i in range(4)]
    expected_order = shuffled_copy(previews, random.Random(7))
    winner = expected_order[k - 1]
    browser, cards = _page(previews, openers={winner.href})

    selected = select_with_fallback(browser, previews, LAYOUT, rng=random.Random(7), **FAST)

    assert selected == winner
    clicked = [action_of(LAYOUT, cards[p.href]) for p in expected_order[:k]]
    assert browser.clicked == clicked
    for later in expected_order[k:]:
        assert action_of(LAYOUT, cards[later.href]).clicks == 0


def test_later_openers_are_never_tried_after_success():
    previews = [_preview(i) for i in range(5)]
    browser, cards = _page(previews, openers={p.href for p in previews})

    selected = select_with_fallback(browser, previews, LAYOUT, rng=random.Random(1), **FAST)

    assert selected is not None
    assert len(browser.clicked) == 1
    assert len(browser.get_window_handles()) == 2


def test_returns_none_after_exactly_n_attempts():
    previews = [_preview(i) for i in range(4)]
    browser, cards = _page(previews)

    assert select_with_fallback(browser, previews, LAYOUT, rng=random.Random(2), **FAST) is None
    assert len(browser.clicked) == 4
    assert all(action_of(LAYOUT, c).clicks == 1 for c in cards.values())


def test_candidate_missing_from_page_is_skipped():
    previews = [_preview(i) for i in range(3)]
    browser, cards = _page(previews[1:], openers={previews[1].href, previews[2].href})

    selected = select_with_fallback(browser, previews, LAYOUT, rng=random.Random(5), **FAST)

    assert selected in previews[1:]


def test_intercepted_candidate_is_skipped():
    previews = [_preview(i) for i in range(2)]
    browser, cards = _page(previews, openers={p.href for p in previews})
    first = shuffled_copy(previews, random.Random(11))[0]
    action_of(LAYOUT, cards[first.href]).click_errors.extend(
        [InterceptedError("overlay"), InterceptedError("overlay again")]
    )

    selected = select_with_fallback(browser, previews, LAYOUT, rng=random.Random(11), **FAST)

    assert selected is not None
    assert selected != first


def test_disabled_action_is_skipped():
    previews = [_preview(i) for i in range(2)]
    browser, cards = _page(previews, openers={p.href for p in previews})
    first = shuffled_copy(previews, random.Random(4))[0]
    action_of(LAYOUT, cards[first.href]).enabled = False

    selected = select_with_fallback(browser, previews, LAYOUT, rng=random.Random(4), **FAST)

    assert selected is not None
    assert selected != first


def test_no_candidates():
    assert select_with_fallback(FakeBrowser(), [], LAYOUT, **FAST) is None


def test_active_window_is_not_switched():
    previews = [_preview(0)]
    browser, _ = _page(previews, openers={previews[0].href})
    original = browser.get_current_window_handle()

    assert select_with_fallback(browser, previews, LAYOUT, **FAST) == previews[0]
    assert browser.get_current_window_handle() == original


def test_zero_ready_timeout_still_runs_the_pass():
    previews = [_preview(0)]
    browser, _ = _page(previews, openers={previews[0].href})
    fast = dict(FAST, ready_timeout=0)

    assert select_with_fallback(browser, previews, LAYOUT, **fast) == previews[0]
