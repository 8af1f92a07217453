"""
Element locators for insiderone.com and the Lever job pages.
"""
from dataclasses import dataclass

from insider_qa.driver import Locator


@dataclass(frozen=True)
class CardLayout:
    """Locators describing a result list: container, card rows and fields inside a card."""
    container: Locator
    card: Locator
    title: Locator
    department: Locator
    location: Locator
    action: Locator

    @property
    def required_fields(self):
        return (self.title, self.department, self.location)


# Overlays
COOKIE_BANNER = Locator.id("wt-cli-cookie-banner")
COOKIE_ACCEPT_BUTTON = Locator.id("wt-cli-accept-all-btn")
MARKETING_POPUP_CLOSE = Locator.xpath("//*[starts-with(@id,'close-button-')]")

# Home page
NAVBAR = Locator.id("navigation")
NAVBAR_LOGO = Locator.css("#navigation .header-logo a")
NAVBAR_GET_DEMO = Locator.xpath("//header[@id='navigation']//a[contains(normalize-space(.),'Get a demo')]")
HOME_EMAIL_INPUT = Locator.id("email")
HERO_GET_DEMO = Locator.css("section.homepage-hero form .redirect-button")

# Careers / Quality Assurance
SEE_ALL_QA_JOBS_BUTTON = Locator.css("a.btn.btn-outline-secondary.rounded")

# Open positions
LOCATION_SELECT = Locator.id("filter-by-location")
DEPARTMENT_SELECT = Locator.id("filter-by-department")
DEPARTMENT_SELECTED_OPTION = Locator.css("option:checked")
DEPARTMENT_SELECTED_OPTION_FALLBACK = Locator.css("option[selected]")
JOBS_LIST = Locator.id("jobs-list")
JOB_CARDS = Locator.css("#jobs-list .position-list-item")

JOB_CARD_LAYOUT = CardLayout(
    container=JOBS_LIST,
    card=Locator.css(".position-list-item"),
    title=Locator.css("p.position-title"),
    department=Locator.css("span.position-department"),
    location=Locator.css("div.position-location"),
    action=Locator.css("a.btn.btn-navy"),
)

# Lever job posting
LEVER_TITLE = Locator.css(".posting-headline h2")
LEVER_LOCATION = Locator.css(".posting-categories .location")
LEVER_DEPARTMENT = Locator.css(".posting-categories .department")
