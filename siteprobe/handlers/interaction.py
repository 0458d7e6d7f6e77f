"""
Hover, click and form interactions that always end in an outcome.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Optional

from selenium.webdriver.support.ui import Select

from ..config import Delays, Safety
from ..core.interfaces import BrowserSession
from ..core.settling import Settler
from ..models import InteractionOutcome, OutcomeCategory, now_stamp

SCRIPT_CLICK = "arguments[0].click();"


def error_message(error: Exception) -> str:
    """Selenium messages without the remote stacktrace."""
    return (getattr(error, "msg", None) or str(error)).strip()


class InteractionExecutor:
    """
    Performs one interaction per call and reports it as an InteractionOutcome.

    Nothing raised by the element or the session escapes: stale handles,
    intercepted clicks and script errors all become failed outcomes so the
    caller's loop over elements keeps going.
    """

    def __init__(
        self,
        session: BrowserSession,
        settler: Settler,
        next_id: Callable[[], int],
        click_delay: float = Delays.AFTER_CLICK,
        hover_delay: float = Delays.AFTER_HOVER,
    ):
        self.session = session
        self.settler = settler
        self.next_id = next_id
        self.click_delay = click_delay
        self.hover_delay = hover_delay
        self.section = ""
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def in_section(self, section: str):
        """Stamp every outcome produced inside the block with ``section``."""
        previous, self.section = self.section, section
        try:
            yield self
        finally:
            self.section = previous

    # ========================================
    # HELPERS
    # ========================================

    def _outcome(self, category: OutcomeCategory, label: str, **values) -> InteractionOutcome:
        values.setdefault("timestamp", now_stamp())
        values.setdefault("section", self.section)
        return InteractionOutcome(
            attempt_id=self.next_id(), category=category, label=label, **values
        )

    def _location(self) -> str:
        try:
            return self.session.current_location()
        except Exception as e:
            self.logger.debug(f"Could not read current location: {e}")
            return ""

    @staticmethod
    def _text(element) -> str:
        try:
            return (element.text or "").strip()
        except Exception:
            return ""

    # ========================================
    # POINTER INTERACTIONS
    # ========================================

    def hover(self, element, label: str) -> InteractionOutcome:
        """Move the pointer onto ``element``; failures are recorded, never raised."""
        location = self._location()
        text = self._text(element)
        try:
            self.session.hover(element)
        except Exception as e:
            self.logger.info(f"  ❌ Hover failed: {error_message(e)}")
            return self._outcome(
                OutcomeCategory.HOVER, label, subject_text=text, succeeded=False,
                error_detail=error_message(e), location_before=location,
            )

        self.logger.info("  ✓ Hover successful")
        self.settler.settle(self.hover_delay)
        return self._outcome(
            OutcomeCategory.HOVER, label, subject_text=text, location_before=location,
        )

    def click(
        self,
        element,
        label: str,
        category: OutcomeCategory = OutcomeCategory.CLICK,
        settle: Optional[float] = None,
    ) -> InteractionOutcome:
        """
        Native click first, scripted click as fallback.

        After a successful trigger the page is given time to settle and the
        location is compared with the one before the click. A change is
        reported through ``outcome.navigated_to``.
        """
        before = self._location()
        text = self._text(element)
        used_label = label
        mechanism = "native"

        try:
            element.click()
            self.logger.info("  ✓ Click successful")
        except Exception as native_error:
            self.logger.debug(f"Native click failed, trying script: {error_message(native_error)}")
            try:
                self.session.run_script(SCRIPT_CLICK, element)
                used_label = f"{label} (JS)"
                mechanism = "script"
                self.logger.info("  ✓ JavaScript click successful")
            except Exception as script_error:
                self.logger.info(f"  ❌ Both click methods failed: {error_message(script_error)}")
                return self._outcome(
                    category, label, subject_text=text, succeeded=False,
                    error_detail=error_message(script_error), location_before=before,
                )

        self.settler.settle(self.click_delay if settle is None else settle)
        after = self._location()
        navigated_to = after if after and after != before else None
        if navigated_to:
            self.logger.info(f"  📍 URL changed: {navigated_to}")

        return self._outcome(
            category, used_label, subject_text=text, resulting_location_or_value=after,
            location_before=before, navigated_to=navigated_to, mechanism=mechanism,
        )

    def skip(self, element, label: str, reason: str = "Potentially unsafe to click") -> InteractionOutcome:
        """Record a click that was deliberately not performed."""
        return self._outcome(
            OutcomeCategory.CLICK_SKIPPED, label, subject_text=self._text(element),
            succeeded=False, error_detail=reason, location_before=self._location(),
        )

    # ========================================
    # FORM INTERACTIONS
    # ========================================

    def fill(self, element, label: str, value: str = Safety.PROBE_EMAIL) -> InteractionOutcome:
        """
        Focus an input; email inputs additionally get ``value`` typed in,
        read back, and cleared again.
        """
        location = self._location()
        placeholder = ""
        try:
            placeholder = element.get_attribute("placeholder") or ""
            input_type = element.get_attribute("type") or ""
            element.click()
            if input_type != "email":
                return self._outcome(
                    OutcomeCategory.INPUT, f"{label} focus", subject_text=placeholder,
                    location_before=location,
                )

            element.clear()
            element.send_keys(value)
            typed = element.get_attribute("value") or ""
            element.clear()
        except Exception as e:
            return self._outcome(
                OutcomeCategory.INPUT, label, subject_text=placeholder, succeeded=False,
                error_detail=error_message(e), location_before=location,
            )

        return self._outcome(
            OutcomeCategory.INPUT, f"{label} sendKeys", subject_text=placeholder,
            resulting_location_or_value=typed, location_before=location,
        )

    def select_option(self, element, label: str, index: int = 1) -> Optional[InteractionOutcome]:
        """Pick option ``index`` of a dropdown; None when there is nothing to pick."""
        location = self._location()
        try:
            select = Select(element)
            if len(select.options) <= index:
                return None
            select.select_by_index(index)
            chosen = (select.first_selected_option.text or "").strip()
        except Exception as e:
            return self._outcome(
                OutcomeCategory.SELECT, label, subject_text="Dropdown", succeeded=False,
                error_detail=error_message(e), location_before=location,
            )

        self.logger.info(f"  - Selection successful: {chosen}")
        return self._outcome(
            OutcomeCategory.SELECT, label, subject_text="Dropdown",
            resulting_location_or_value=chosen, location_before=location,
        )

    # ========================================
    # OBSERVATIONS
    # ========================================

    def scraped(self, element_type: str, text: str, url: str = "", data: str = "") -> InteractionOutcome:
        """Outcome for page content that was read, not triggered."""
        return self._outcome(
            OutcomeCategory.SCRAPE, "scrape", subject_text=text,
            resulting_location_or_value=url, scraped_data=data,
            element_type=element_type, location_before=self._location(),
        )
