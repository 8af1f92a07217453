"""
Run configuration for the Insider careers QA suite.

Every value can be overridden with an environment variable of the same name,
e.g. (PowerShell) `$env:DEFAULT_WAIT="15"` or (bash) `export NEW_WINDOW_WAIT=8`.
"""
import os


def _seconds(name: str, default: str) -> float:
    return float(os.getenv(name, default))


# -----------------------------
# Site under test
# -----------------------------
HOME_URL = os.getenv("HOME_URL", "https://insiderone.com/")
CAREERS_QA_URL = os.getenv("CAREERS_QA_URL", "https://insiderone.com/careers/quality-assurance/")
LOCATION_FILTER_TEXT = os.getenv("LOCATION_FILTER_TEXT", "Istanbul, Turkiye")

# URL fragments used by the "is at page" checks
CAREERS_QA_PATH = "/careers/quality-assurance/"
OPEN_POSITIONS_PATH = "/careers/open-positions/"
QA_DEPARTMENT_QUERY = "department=qualityassurance"
LEVER_HOST = "jobs.lever.co"
HOME_HOST = "insiderone.com"

# -----------------------------
# Timeouts (seconds)
# -----------------------------
# Polling cadence shared by every wait
POLL_INTERVAL = _seconds("POLL_INTERVAL", "0.2")
# Readiness wait before a guarded click/select
DEFAULT_WAIT = _seconds("DEFAULT_WAIT", "10")
# Overlay guard: cookie banner and marketing pop-up
COOKIE_GUARD_WAIT = _seconds("COOKIE_GUARD_WAIT", "3")
POPUP_GUARD_WAIT = _seconds("POPUP_GUARD_WAIT", "2")
# Explicit "accept cookies if they show up" step after opening a page
COOKIE_ACCEPT_WAIT = _seconds("COOKIE_ACCEPT_WAIT", "5")
# How long a View Role click gets to open a new tab
NEW_WINDOW_WAIT = _seconds("NEW_WINDOW_WAIT", "5")
DOCUMENT_READY_WAIT = _seconds("DOCUMENT_READY_WAIT", "20")
TEXT_WAIT = _seconds("TEXT_WAIT", "15")
# Job list refresh after a filter change
CONTENT_CHANGE_WAIT = _seconds("CONTENT_CHANGE_WAIT", "4")
FILTER_SETTLE_WAIT = _seconds("FILTER_SETTLE_WAIT", "4")
POPULATE_AFTER_FILTER_WAIT = _seconds("POPULATE_AFTER_FILTER_WAIT", "20")
CARDS_LOADED_WAIT = _seconds("CARDS_LOADED_WAIT", "25")
CARD_COUNT_WAIT = _seconds("CARD_COUNT_WAIT", "20")
