"""
Configuration constants for the site probe.
All hardcoded selectors, limits and headers are centralized here for easy maintenance.
"""

from ..core.strategies import (
    ByAttribute, ByClassPattern, ByStructure, ByTag, ByText, SelectorCascade
)


class SiteConfig:
    """Defaults for the site the probe was first written against."""

    BASE_URL = "https://www.greenchef.com/"

    TARGET_URLS = (
        "https://www.greenchef.com/",
        "https://www.greenchef.com/menus",
        "https://www.greenchef.com/menu",
        "https://www.greenchef.com/pages/menus-and-plans",
        "https://www.greenchef.com/recipes",
        "https://www.greenchef.com/keto",
        "https://www.greenchef.com/plant-based",
        "https://www.greenchef.com/mediterranean",
        "https://www.greenchef.com/gluten-free",
        "https://www.greenchef.com/high-protein",
        "https://www.greenchef.com/quick-easy",
        "https://www.greenchef.com/calorie-smart",
    )

    SECTIONS = (
        "Our Plans", "How it works", "Our values", "Gift cards", "Nutrition guide",
        "Weekly Menu", "Recipes", "Keto", "Plant-based", "Mediterranean",
    )

    # First keyword found in the location wins; order matters ("menus" after the diets)
    CATEGORY_KEYWORDS = (
        ("keto", "Keto"),
        ("plant-based", "Plant-Based"),
        ("mediterranean", "Mediterranean"),
        ("gluten-free", "Gluten-Free"),
        ("high-protein", "High Protein"),
        ("quick-easy", "Quick & Easy"),
        ("calorie-smart", "Calorie Smart"),
        ("recipes", "Recipes"),
        ("menus", "Menus"),
    )
    DEFAULT_CATEGORY = "General"


class Limits:
    """Hard ceilings that bound every loop of a run."""

    MAX_LINKS = 20
    MAX_PAGE_ELEMENTS = 10
    MAX_PAGES = 5
    MAX_SCROLLS = 10
    MAX_FIELD_LENGTH = 100
    IDENTITY_TEXT_LENGTH = 20
    MIN_PARAGRAPH_LENGTH = 20


class Delays:
    """Upper bounds (seconds) for the settle waits after each kind of action."""

    AFTER_NAVIGATION = 2.0
    AFTER_HOVER = 0.5
    AFTER_CLICK = 2.0
    AFTER_SECTION_CLICK = 3.0
    AFTER_PAGINATION = 3.0
    AFTER_OVERLAY = 1.0
    AFTER_SCROLL = 1.5
    AFTER_SCROLL_TOP = 1.0


class Safety:
    DENY_TOKENS = ("delete", "remove", "cancel")
    CLICKABLE_TAGS = ("a", "button")
    CLICKABLE_ROLES = ("link", "button")
    PROBE_EMAIL = "test@example.com"


class Headers:
    """CSV headers per run mode."""

    SCRAPE = (
        "id", "title", "description", "price", "calories", "servings",
        "cook_time", "difficulty", "ingredients", "dietary_tags",
        "category", "url", "image_url", "scraped_at", "source_page",
    )
    INTERACTIONS = (
        "test_id", "element_type", "action", "element_text", "element_url",
        "success", "error_message", "current_url", "timestamp",
    )
    SECTIONS = (
        "test_id", "section", "element_type", "action", "element_text", "element_url",
        "scraped_data", "success", "error_message", "current_url", "timestamp",
    )


def _field(name: str, fragment: str, *leading) -> SelectorCascade:
    """Per-field content cascade: explicit classes, class fragment, data-test hooks."""
    return SelectorCascade.of(
        name,
        *leading,
        ByClassPattern(fragment, exact=False),
        ByAttribute("data-test", fragment, match="contains"),
        ByAttribute("data-testid", fragment, match="contains"),
    )


class Cascades:
    """Every selector cascade the probe evaluates."""

    TITLE = SelectorCascade.of(
        "title",
        ByTag("h1"), ByTag("h2"), ByTag("h3"), ByTag("h4"),
        ByClassPattern("title"), ByClassPattern("name"), ByClassPattern("card-title"),
        ByAttribute("data-test", "title", match="contains"),
        ByAttribute("data-testid", "title", match="contains"),
    )
    DESCRIPTION = SelectorCascade.of(
        "description",
        ByTag("p"),
        ByClassPattern("description"), ByClassPattern("desc"), ByClassPattern("summary"),
        ByClassPattern("card-description"),
        ByAttribute("data-test", "description", match="contains"),
        ByAttribute("data-testid", "description", match="contains"),
    )
    PRICE = _field("price", "price", ByClassPattern("price"), ByClassPattern("cost"),
                   ByClassPattern("amount"))
    CALORIES = _field("calories", "calorie", ByClassPattern("calories"), ByClassPattern("cal"))
    SERVINGS = _field("servings", "serving", ByClassPattern("servings"))
    COOK_TIME = _field("cook_time", "time", ByClassPattern("time"), ByClassPattern("cook-time"),
                       ByClassPattern("duration"))
    DIFFICULTY = _field("difficulty", "difficulty", ByClassPattern("level"))
    INGREDIENTS = _field("ingredients", "ingredient", ByClassPattern("ingredients"),
                         ByClassPattern("ingredient-list"))
    TAGS = _field("tags", "tag", ByClassPattern("tags"), ByClassPattern("dietary"),
                  ByClassPattern("badges"))
    LINK = SelectorCascade.of("link", ByTag("a"))
    IMAGE = SelectorCascade.of("image", ByTag("img"))

    CLOSE_OVERLAY = SelectorCascade.of(
        "close-overlay",
        ByAttribute("aria-label", "Close", tag="button"),
        ByStructure(".modal .close, .modal .close-btn"),
        ByStructure(".overlay .close, .overlay .close-btn"),
        ByAttribute("id", "onetrust-accept-btn-handler"),
        ByStructure(".cookie, .cookies, .cookie-banner button"),
        ByAttribute("data-test", "close", match="contains"),
        ByAttribute("data-testid", "close", match="contains"),
        ByStructure(".popup-close, .banner-close"),
    )

    NEXT_PAGE = SelectorCascade.of(
        "next-page",
        ByAttribute("aria-label", "Next", match="contains", tag="button"),
        ByStructure(".pagination-next, .next-page"),
        ByAttribute("data-test", "next", match="contains"),
        ByAttribute("data-testid", "next", match="contains"),
        ByText(("Next", "More"), tag="button"),
        ByText(("Next", "More"), tag="a"),
    )

    CLICKABLE = SelectorCascade.of(
        "clickable",
        ByAttribute("href", match="present", tag="a"),
        ByTag("a"),
        ByTag("button"),
        ByAttribute("type", "button", tag="input"),
        ByAttribute("type", "submit", tag="input"),
        ByAttribute("onclick", match="present"),
        ByAttribute("role", "button"),
        ByStructure(".btn, .button"),
        ByAttribute("data-test", "button", match="contains"),
        ByAttribute("data-testid", "button", match="contains"),
    )

    CONTENT = SelectorCascade.of(
        "content",
        ByStructure("[data-test*='recipe'], [data-testid*='recipe']"),
        ByStructure("article[class*='recipe'], div[class*='recipe']"),
        ByStructure(".recipe-card, .meal-card, .menu-item"),
        ByAttribute("href", "/recipes/", match="contains", tag="a"),
        ByStructure(".menu-item, .meal-plan-item"),
        ByStructure("[class*='menu'], [class*='meal']"),
        ByStructure(".product-card, .card"),
        ByStructure("[class*='product'], [class*='item']"),
        ByStructure("h1, h2, h3, h4"),
        ByAttribute("href", "greenchef", match="contains", tag="a"),
    )

    LINKS = SelectorCascade.of("links", ByAttribute("href", match="present", tag="a"))
    BUTTONS = SelectorCascade.of(
        "buttons", ByStructure("button, input[type='button'], input[type='submit']")
    )
    NAVIGATION = SelectorCascade.of(
        "navigation", ByStructure("nav a, .nav a, .navigation a, .menu a")
    )
    TEXT_INPUTS = SelectorCascade.of(
        "text-inputs",
        ByStructure("input[type='text'], input[type='email'], input[type='search'], textarea"),
    )
    SELECTS = SelectorCascade.of("selects", ByTag("select"))
    PAGE_ELEMENTS = SelectorCascade.of("page-elements", ByStructure("a[href], button"))

    HEADINGS = SelectorCascade.of("headings", ByStructure("h1, h2, h3, h4"))
    PARAGRAPHS = SelectorCascade.of("paragraphs", ByTag("p"))
    IMAGES = SelectorCascade.of("images", ByTag("img"))

    FIELDS = {
        "title": TITLE,
        "description": DESCRIPTION,
        "price": PRICE,
        "calories": CALORIES,
        "servings": SERVINGS,
        "cook_time": COOK_TIME,
        "difficulty": DIFFICULTY,
        "ingredients": INGREDIENTS,
        "tags": TAGS,
    }
