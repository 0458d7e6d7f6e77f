"""
Tests for InteractionExecutor.
"""
from unittest.mock import patch

from selenium.common.exceptions import JavascriptException, StaleElementReferenceException

from siteprobe.handlers.interaction import SCRIPT_CLICK, InteractionExecutor
from siteprobe.models import OutcomeCategory
from tests.conftest import FakeElement, counter, intercepted


def make_executor(session, settler):
    return InteractionExecutor(session, settler, counter())


class TestClick:

    def test_native_click(self, session, settler):
        element = FakeElement("button", "Get started")
        outcome = make_executor(session, settler).click(element, "Button click")

        assert outcome.succeeded
        assert outcome.label == "Button click"
        assert outcome.mechanism == "native"
        assert outcome.subject_text == "Get started"
        assert outcome.category is OutcomeCategory.CLICK
        assert not outcome.navigated
        assert element.clicks == 1
        assert SCRIPT_CLICK not in session.scripts

    def test_script_fallback_when_native_click_is_intercepted(self, session, settler):
        element = FakeElement("a", "Menu", click_error=intercepted())
        outcome = make_executor(session, settler).click(element, "Link click")

        assert outcome.succeeded
        assert outcome.label == "Link click (JS)"
        assert outcome.mechanism == "script"
        assert element.script_clicks == 1

    def test_both_mechanisms_fail(self, session, settler):
        element = FakeElement(
            "a", "Menu", click_error=intercepted(),
            script_error=JavascriptException("element is detached"),
        )
        outcome = make_executor(session, settler).click(element, "Link click")

        assert not outcome.succeeded
        assert outcome.label == "Link click"
        assert outcome.error_detail == "element is detached"
        assert outcome.location_before == session.location

    def test_location_change_is_reported(self, session, settler):
        def go():
            session.location = "https://shop.example.com/menus"

        element = FakeElement("a", "Menus", on_click=go)
        outcome = make_executor(session, settler).click(
            element, "Menus click", category=OutcomeCategory.CLICK_NAVIGATE,
        )

        assert outcome.navigated
        assert outcome.navigated_to == "https://shop.example.com/menus"
        assert outcome.location_before == "https://shop.example.com/"
        assert outcome.resulting_location_or_value == "https://shop.example.com/menus"
        assert outcome.category is OutcomeCategory.CLICK_NAVIGATE

    def test_stale_element_becomes_failed_outcome(self, session, settler):
        element = FakeElement("a", "Gone", stale=True, script_error=StaleElementReferenceException("stale"))
        outcome = make_executor(session, settler).click(element, "Link click")

        assert not outcome.succeeded
        assert outcome.subject_text == ""

    def test_attempt_ids_increase(self, session, settler):
        executor = make_executor(session, settler)
        ids = [executor.click(FakeElement("a"), "click").attempt_id for _ in range(3)]
        assert ids == [1, 2, 3]


class TestHover:

    def test_hover(self, session, settler):
        element = FakeElement("a", "Plans")
        outcome = make_executor(session, settler).hover(element, "Link hover")

        assert outcome.succeeded
        assert outcome.category is OutcomeCategory.HOVER
        assert session.hovered == [element]

    def test_hover_failure_is_recorded(self, session, settler):
        session.hover_error = intercepted()
        outcome = make_executor(session, settler).hover(FakeElement("a", "Plans"), "Link hover")

        assert not outcome.succeeded
        assert "element click intercepted" in outcome.error_detail

    def test_section_stamp(self, session, settler):
        executor = make_executor(session, settler)
        with executor.in_section("Recipes"):
            inside = executor.hover(FakeElement("a"), "Recipes hover")
        outside = executor.hover(FakeElement("a"), "hover")

        assert inside.section == "Recipes"
        assert outside.section == ""


class TestForms:

    def test_skip(self, session, settler):
        outcome = make_executor(session, settler).skip(FakeElement("button", "Delete"), "click_skipped")

        assert outcome.category is OutcomeCategory.CLICK_SKIPPED
        assert not outcome.succeeded
        assert outcome.error_detail == "Potentially unsafe to click"

    def test_fill_email_types_and_clears(self, session, settler):
        field = FakeElement("input", attrs={"type": "email", "placeholder": "Your email"})
        outcome = make_executor(session, settler).fill(field, "input")

        assert outcome.succeeded
        assert outcome.label == "input sendKeys"
        assert outcome.subject_text == "Your email"
        assert outcome.resulting_location_or_value == "test@example.com"
        assert field.typed == ["test@example.com"]
        assert field.attrs["value"] == ""

    def test_fill_other_inputs_only_focuses(self, session, settler):
        field = FakeElement("input", attrs={"type": "search"})
        outcome = make_executor(session, settler).fill(field, "input")

        assert outcome.label == "input focus"
        assert field.clicks == 1
        assert field.typed == []

    def test_fill_failure(self, session, settler):
        field = FakeElement("input", attrs={"type": "email"}, click_error=intercepted())
        outcome = make_executor(session, settler).fill(field, "input")

        assert not outcome.succeeded
        assert outcome.category is OutcomeCategory.INPUT

    @patch("siteprobe.handlers.interaction.Select")
    def test_select_second_option(self, mock_select, session, settler):
        select = mock_select.return_value
        select.options = ["Choose", "Keto", "Vegan"]
        select.first_selected_option.text = "Keto"

        outcome = make_executor(session, settler).select_option(FakeElement("select"), "selectByIndex")

        select.select_by_index.assert_called_once_with(1)
        assert outcome.succeeded
        assert outcome.resulting_location_or_value == "Keto"
        assert outcome.subject_text == "Dropdown"

    @patch("siteprobe.handlers.interaction.Select")
    def test_select_with_single_option_is_not_recorded(self, mock_select, session, settler):
        mock_select.return_value.options = ["Only"]

        assert make_executor(session, settler).select_option(FakeElement("select"), "selectByIndex") is None
        mock_select.return_value.select_by_index.assert_not_called()

    def test_scraped(self, session, settler):
        outcome = make_executor(session, settler).scraped("image", "Bowl", "https://cdn/x.png", "https://cdn/x.png")
        record = outcome.to_record()

        assert record["element_type"] == "image"
        assert record["action"] == "scrape"
        assert record["element_url"] == "https://cdn/x.png"
        assert record["success"] == "true"
