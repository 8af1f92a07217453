"""
Pytest configuration and fixtures for the Insider careers QA automation tests
"""
import pytest
import time
import logging
import os
import re
from datetime import datetime

import requests
from selenium import webdriver
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.chrome.options import Options
from webdriver_manager.chrome import ChromeDriverManager
from playwright.sync_api import sync_playwright

from insider_qa import settings
from insider_qa.drivers.playwright_driver import PlaywrightDriver
from insider_qa.drivers.selenium_driver import SeleniumDriver
from insider_qa.run_logger import get_run_logger

_ROOT = os.path.dirname(os.path.abspath(__file__))
LOG_DIR = os.path.join(_ROOT, 'logs')
FAILURES_DIR = os.path.join(_ROOT, 'reports', 'failures')

logger = logging.getLogger(__name__)


def setup_logging():
    """File log gets everything (DEBUG), console gets INFO and up."""
    os.makedirs(LOG_DIR, exist_ok=True)
    log_file = os.path.join(LOG_DIR, "insider_qa.log")

    file_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)8s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)8s] %(filename)s:%(lineno)d - %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger('selenium').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('webdriver_manager').setLevel(logging.WARNING)

    return log_file


def cleanup_old_failures(max_age_days: int = 7):
    """Remove failure screenshots/url files older than `max_age_days`."""
    if not os.path.isdir(FAILURES_DIR):
        return
    cutoff = time.time() - max_age_days * 86400
    removed = 0
    for name in os.listdir(FAILURES_DIR):
        path = os.path.join(FAILURES_DIR, name)
        try:
            if os.path.isfile(path) and os.path.getmtime(path) < cutoff:
                os.remove(path)
                removed += 1
        except OSError as e:
            logger.debug(f"Could not remove old failure file {name}: {e}")
    if removed:
        logger.info(f"Cleanup: Removed {removed} old failure file(s) (older than {max_age_days} days)")


LOG_FILE = setup_logging()
logger.info("=" * 80)
logger.info("Insider Careers QA Test Suite - Logging Initialized")
logger.info(f"Log file: {LOG_FILE}")
logger.info("=" * 80)


# -----------------------------
# Browser behaviour
# -----------------------------
# FAST_MODE=1 runs the same flow on Playwright Chromium instead of Selenium Chrome
FAST_MODE = os.getenv("FAST_MODE", "0").strip().lower() in ("1", "true", "yes", "on")
MAXIMIZE_BROWSER = os.getenv("MAXIMIZE_BROWSER", "1").strip().lower() in ("1", "true", "yes", "on")
HEADLESS = os.getenv("HEADLESS", "0").strip().lower() in ("1", "true", "yes", "on")

NET_CHECK_TIMEOUT = float(os.getenv("NET_CHECK_TIMEOUT", "5"))
NET_CHECK_CACHE_TTL = float(os.getenv("NET_CHECK_CACHE_TTL", "300"))
_NET_CHECK_CACHE: dict = {"result": None, "timestamp": 0.0}

runtime_data = {'timings': {}}


def _chrome_options() -> Options:
    chrome_options = Options()
    chrome_options.add_argument("--disable-infobars")
    chrome_options.add_argument("--disable-notifications")
    if MAXIMIZE_BROWSER:
        chrome_options.add_argument("--start-maximized")
    if HEADLESS:
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--window-size=1920,1080")
    chrome_options.add_experimental_option("prefs", {
        "credentials_enable_service": False,
        "profile.password_manager_enabled": False,
    })
    return chrome_options


def _resolve_chromedriver(driver_path: str) -> str:
    """webdriver-manager sometimes returns a sibling file (e.g. THIRD_PARTY_NOTICES); find the binary."""
    driver_dir = os.path.dirname(driver_path)
    driver_file = os.path.basename(driver_path)
    candidate_paths = []
    if driver_file.lower().startswith("chromedriver") and (driver_file.endswith(".exe") or os.access(driver_path, os.X_OK)):
        candidate_paths.append(driver_path)
    if os.path.isdir(driver_path):
        candidate_paths.append(os.path.join(driver_path, "chromedriver.exe"))
        candidate_paths.append(os.path.join(driver_path, "chromedriver"))
    if driver_dir and os.path.isdir(driver_dir):
        candidate_paths.append(os.path.join(driver_dir, "chromedriver.exe"))
        candidate_paths.append(os.path.join(driver_dir, "chromedriver"))
    for path in candidate_paths:
        if os.path.exists(path):
            return path
    raise FileNotFoundError(f"Could not find chromedriver executable near {driver_path}")


def _start_selenium() -> SeleniumDriver:
    logger.info("Initializing Chrome WebDriver...")
    try:
        resolved_path = _resolve_chromedriver(ChromeDriverManager().install())
        logger.info(f"Using ChromeDriver at: {resolved_path}")
        chrome = webdriver.Chrome(service=Service(resolved_path), options=_chrome_options())
    except Exception as e:
        logger.error(f"Failed to initialize Chrome WebDriver: {e}")
        logger.error("Try clearing the webdriver-manager cache (~/.wdm/drivers/chromedriver)")
        raise
    logger.info("Chrome WebDriver initialized successfully")
    return SeleniumDriver(chrome)


@pytest.fixture(scope="session")
def playwright_instance():
    if not FAST_MODE:
        yield None
        return
    pw = sync_playwright().start()
    yield pw
    pw.stop()


@pytest.fixture(scope="function")
def browser(playwright_instance):
    """One fresh browser session per test, Selenium by default, Playwright in FAST_MODE."""
    if FAST_MODE:
        args = ["--start-maximized"] if MAXIMIZE_BROWSER else []
        pw_browser = playwright_instance.chromium.launch(headless=HEADLESS, args=args)
        context = pw_browser.new_context(no_viewport=MAXIMIZE_BROWSER and not HEADLESS)
        session = PlaywrightDriver(context)
        logger.info("Playwright Chromium session started (FAST_MODE)")
    else:
        pw_browser = None
        session = _start_selenium()

    yield session

    logger.info("Closing browser session...")
    try:
        session.quit()
    finally:
        if pw_browser is not None:
            pw_browser.close()
    logger.info("Browser session closed")


@pytest.fixture(scope="function")
def start_runtime_measurement():
    """Start runtime measurement for a test"""
    def _start(test_name: str):
        runtime_data['current_test'] = test_name
        runtime_data['start_time'] = time.time()
        logger.info(f"Started runtime measurement for: {test_name}")
    return _start


@pytest.fixture(scope="function")
def end_runtime_measurement():
    """End runtime measurement and return elapsed seconds"""
    def _end(operation_name: str = None):
        if 'start_time' not in runtime_data:
            logger.warning("No start time recorded. Call start_runtime_measurement first.")
            return 0.0
        elapsed = time.time() - runtime_data.pop('start_time')
        test_name = runtime_data.get('current_test', operation_name or "Unknown")
        runtime_data['timings'].setdefault(test_name, []).append({
            'operation': operation_name or 'total',
            'elapsed_seconds': elapsed,
            'timestamp': datetime.now().isoformat(),
        })
        logger.info(f"Runtime for '{test_name}': {elapsed:.2f} seconds")
        return elapsed
    return _end


def check_network_connectivity(url: str | None = None, timeout: float | None = None) -> bool:
    """
    Check that the site under test is reachable before driving a browser at it.

    Controls:
    - NET_CHECK_URL: override the check target.
    - NET_CHECK_MODE: one of {"skip","fail","warn"} when all checks fail (default: "skip").
    """
    now = time.time()
    cached_ts = float(_NET_CHECK_CACHE.get("timestamp") or 0.0)
    if _NET_CHECK_CACHE.get("result") is True and (now - cached_ts) <= NET_CHECK_CACHE_TTL:
        logger.info(f"Network connectivity check: using cached PASS (age={now - cached_ts:.2f}s)")
        return True

    timeout = float(timeout if timeout is not None else NET_CHECK_TIMEOUT)
    primary = url or (os.getenv("NET_CHECK_URL") or "").strip() or settings.HOME_URL
    candidates = []
    for u in [primary, settings.HOME_URL, "https://www.google.com"]:
        if u and u not in candidates:
            candidates.append(u)

    logger.info(f"Checking network connectivity (timeout={timeout}s). Targets: {candidates}")
    last_err = None
    session = requests.Session()
    for target in candidates:
        try:
            try:
                resp = session.head(target, timeout=timeout, allow_redirects=True)
            except requests.RequestException:
                resp = session.get(target, timeout=timeout, allow_redirects=True)
            # any non-5xx answer means the network path works
            if resp.status_code < 500:
                logger.info(f"Network connectivity check: Connected (Target: {target}, Status: {resp.status_code})")
                _NET_CHECK_CACHE["result"] = True
                _NET_CHECK_CACHE["timestamp"] = time.time()
                return True
            logger.warning(f"Network connectivity check: Failed (Target: {target}, Status: {resp.status_code})")
        except requests.RequestException as e:
            last_err = str(e)
            logger.warning(f"Network connectivity check failed for {target}: {last_err}")

    mode = (os.getenv("NET_CHECK_MODE") or "skip").strip().lower()
    msg = f"Network connectivity check failed for all targets {candidates}. Last error: {last_err}"
    logger.error(msg)
    if mode == "warn":
        return True
    if mode == "fail":
        return False
    pytest.skip(msg)


def _safe_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_.-]+", "_", name or "test")


def _capture_failure_artifacts(session, test_name: str):
    """Save a screenshot and the current URL next to each other under reports/failures/."""
    os.makedirs(FAILURES_DIR, exist_ok=True)
    base = os.path.join(FAILURES_DIR, f"{_safe_filename(test_name)}_{datetime.now().strftime('%Y%m%d_%H%M%S')}")
    screenshot_path = base + ".png"
    url_path = base + ".url.txt"
    current_url = session.get_current_url()
    session.save_screenshot(screenshot_path)
    with open(url_path, "w", encoding="utf-8") as f:
        f.write(current_url)
    return screenshot_path, url_path, current_url


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Close the TEST record and keep artifacts for failures"""
    run_logger = get_run_logger()

    outcome = yield
    rep = outcome.get_result()
    test_name = item.name
    elapsed = getattr(rep, 'duration', None)

    if rep.when == "setup" and rep.outcome == "failed":
        run_logger.test_end(test_name, "FAIL", message=str(rep.longrepr) or "Test setup failed", elapsed=elapsed)
        return
    if rep.when == "setup" and rep.outcome == "skipped":
        run_logger.test_end(test_name, "SKIP", message=str(rep.longrepr) or "Test skipped", elapsed=elapsed)
        return
    if rep.when != "call":
        return

    if rep.outcome == "passed":
        run_logger.test_end(test_name, "PASS", elapsed=elapsed)
    elif rep.outcome == "skipped":
        run_logger.test_end(test_name, "SKIP", message=str(rep.longrepr) or "Test skipped", elapsed=elapsed)
    else:
        run_logger.test_end(test_name, "FAIL", message=str(rep.longrepr) or "Test failed", elapsed=elapsed)
        session = item.funcargs.get("browser") if hasattr(item, "funcargs") else None
        if session is not None:
            try:
                screenshot_path, url_path, current_url = _capture_failure_artifacts(session, test_name)
                logger.info("Failure artifacts saved:")
                logger.info(f"  URL: {current_url}")
                logger.info(f"  Screenshot: {screenshot_path}")
                logger.info(f"  URL file: {url_path}")
            except Exception as e:
                logger.debug(f"Could not capture failure artifacts: {e}")

    for handler in logging.getLogger().handlers:
        handler.flush()


@pytest.fixture(autouse=True)
def log_test_start_end(request):
    """Open the TEST record; the makereport hook closes it"""
    test_file = str(request.node.fspath) if hasattr(request.node, 'fspath') else None
    get_run_logger().test_start(request.node.name, test_file)
    yield


def pytest_configure(config):
    """
    Record suite start here rather than in pytest_sessionstart: this module is
    pulled in by a sub-directory conftest, which pytest loads after session start.
    """
    config.addinivalue_line("markers", "insider: live scenario against insiderone.com")
    cleanup_old_failures()
    run_logger = get_run_logger()
    if not run_logger.get_statistics().get("start_time"):
        run_logger.suite_start("Insider Careers QA", str(getattr(config, "rootpath", "")) or None)
    logger.info(f"Session start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


def pytest_sessionfinish(session, exitstatus):
    get_run_logger().suite_end("Insider Careers QA")
    for test_name, timings in runtime_data['timings'].items():
        for entry in timings:
            logger.info(f"Runtime: {test_name} [{entry['operation']}] {entry['elapsed_seconds']:.2f}s")
