"""
Insider careers QA scenarios

Scenario 1: home page main elements.
Scenarios 2-4: careers QA page -> open positions filtered to Istanbul ->
a random matching job opens on Lever with the expected title, department and location.
"""
import logging

import pytest

from Insider_Conftest import check_network_connectivity
from insider_qa.candidates import normalize_whitespace
from insider_qa.overlays import accept_cookies_within
from insider_qa.pages import careers, common, home, lever, qa_jobs

logger = logging.getLogger(__name__)


@pytest.mark.insider
def test_insider_qa_scenario_1_home_page(browser, start_runtime_measurement, end_runtime_measurement):
    assert check_network_connectivity(), "Network connectivity check failed"
    start_runtime_measurement("test_insider_qa_scenario_1_home_page")

    home.open_home(browser)
    logger.info("Scenario1: Checking for cookie popup...")
    accept_cookies_within(browser)

    logger.info("Scenario1: Waiting for homepage elements to load...")
    home.wait_for_main_elements(browser)

    assert home.is_navbar_visible(browser), "Navbar should be visible (id=navigation)"
    assert home.is_logo_valid(browser), \
        "Logo anchor should be visible and href should contain \"insiderone.com\" (#navigation .header-logo a)"
    assert home.is_navbar_get_demo_clickable(browser), "Navbar \"Get a demo\" link should be clickable"
    assert home.is_email_input_visible(browser), "Email input should be visible and enabled (id=email)"
    assert home.is_hero_get_demo_clickable(browser), "Hero \"Get a demo\" button should be clickable"

    end_runtime_measurement("Scenario 1")


@pytest.mark.insider
def test_insider_qa_scenario_2_to_4_qa_jobs_in_istanbul(browser, start_runtime_measurement, end_runtime_measurement):
    assert check_network_connectivity(), "Network connectivity check failed"
    start_runtime_measurement("test_insider_qa_scenario_2_to_4_qa_jobs_in_istanbul")

    careers.open_careers_qa(browser)
    assert careers.is_at(browser), "Careers QA page did not open"
    assert careers.is_see_all_jobs_visible(browser), "\"See all QA jobs\" button should be visible"
    assert careers.is_see_all_jobs_href_correct(browser), \
        "\"See all QA jobs\" href should contain department=qualityassurance"

    careers.click_see_all_jobs(browser)
    assert qa_jobs.is_at(browser), "Open positions page did not open"
    assert qa_jobs.wait_for_job_cards_loaded(browser), "Job cards did not load"

    logger.info("Job cards loaded, proceeding with department verification.")
    assert qa_jobs.is_department_auto_selected_as_qa(browser), "Department filter should be Quality Assurance"

    qa_jobs.select_location(browser)
    assert qa_jobs.wait_for_job_cards_loaded(browser), "Job cards did not load after location filter"
    assert qa_jobs.is_jobs_list_visible(browser), "Jobs list should be visible"
    assert qa_jobs.has_job_cards(browser), "Jobs list should contain job cards"

    valid = qa_jobs.collect_valid_qa_jobs_in_istanbul(browser)
    assert valid, "No valid QA jobs found for Istanbul, Turkey/Turkiye."

    handles_before = browser.get_window_handles()
    selected = qa_jobs.click_random_valid_view_role(browser, valid)
    assert selected is not None, f"None of the {len(valid)} valid QA jobs opened a View Role tab"
    assert "jobs.lever.co" in selected.href, f"View Role href should point to Lever (href='{selected.href}')"

    common.switch_to_new_window(browser, handles_before)
    assert lever.is_at(browser), "Lever job page did not open"

    lever_title = normalize_whitespace(lever.get_title(browser))
    lever_dept = normalize_whitespace(lever.get_department(browser))
    lever_loc = normalize_whitespace(lever.get_location(browser))
    logger.info(f"Step: Lever page actual values: title='{lever_title}', dept='{lever_dept}', loc='{lever_loc}'")
    logger.info(
        f"Step: Expected job preview: title='{selected.title}', dept='{selected.department}', "
        f"loc='{selected.location}', href='{selected.href}'"
    )

    assert selected.title in lever_title, f"Lever title '{lever_title}' should contain '{selected.title}'"
    assert "quality assurance" in lever_dept.lower(), f"Lever department '{lever_dept}' should be Quality Assurance"
    loc = lever_loc.lower()
    assert "istanbul" in loc, f"Lever location '{lever_loc}' should be Istanbul"
    assert "turkey" in loc or "turkiye" in loc, f"Lever location '{lever_loc}' should be in Turkey/Turkiye"

    end_runtime_measurement("Scenarios 2-4")
