"""
Run orchestration for siteprobe.

The orchestrator composes the element handlers and owns the run state: the
visited locations, the attempt counter and the output recorder. Three modes
share the same visit / discover / interact / extract cycle:

- ``scrape``: extract content cards from every target location, paginating
- ``interactions``: hover and click every clickable element of the base page
- ``sections``: reach named sections of the site, test and scrape their pages
"""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from selenium.common.exceptions import WebDriverException

from .config import Cascades, Delays, Headers, Limits, ProbeConfig
from .core.interfaces import BrowserSession, OutputSink
from .core.progress_tracker import ProgressTracker
from .core.results import ErrorKind, Result
from .core.settling import Settler
from .core.strategies import SelectorCascade
from .handlers import (
    ContentExtractor, ElementLocator, ExtractionRecorder, InteractionExecutor,
    LazyLoadScroller, OverlayDismisser, PaginationWalker, SafetyClassifier, VisitTracker,
    inspect, is_live,
)
from .handlers.interaction import error_message
from .models import InteractionOutcome, OutcomeCategory
from .output import RunArtifacts

HEADERS = {
    "scrape": Headers.SCRAPE,
    "interactions": Headers.INTERACTIONS,
    "sections": Headers.SECTIONS,
}


def _read_heading(element):
    text = (element.text or "").strip()
    return (text, "", text) if text else None


def _read_paragraph(element):
    text = (element.text or "").strip()
    return (text, "", text) if len(text) > Limits.MIN_PARAGRAPH_LENGTH else None


def _read_link(element):
    text = (element.text or "").strip()
    href = element.get_attribute("href")
    return (text, href, text) if text and href else None


def _read_image(element):
    src = element.get_attribute("src")
    return (element.get_attribute("alt") or "", src, src) if src else None


# (cascade, element type, reader) in recording order
PAGE_DATA_READERS = (
    (Cascades.HEADINGS, "heading", _read_heading),
    (Cascades.PARAGRAPHS, "paragraph", _read_paragraph),
    (Cascades.LINKS, "link", _read_link),
    (Cascades.IMAGES, "image", _read_image),
)


class Phase(Enum):
    IDLE = "idle"
    VISITING = "visiting"
    DISCOVERING = "discovering"
    INTERACTING = "interacting"
    EXTRACTING = "extracting"
    PAGINATING = "paginating"


@dataclass
class RunState:
    """Everything a run accumulates; owned by exactly one orchestrator."""
    visits: VisitTracker = field(default_factory=VisitTracker)
    items_scraped: int = 0
    attempts: int = 0
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_attempt_id(self) -> int:
        self.attempts = next(self._ids)
        return self.attempts


@dataclass(frozen=True)
class RunSummary:
    mode: str
    locations_visited: int
    attempts: int
    items_scraped: int
    rows_written: int
    sink_failures: int
    failed_locations: Sequence[str] = ()


class Orchestrator:
    """
    Drives one browser session through a run.

    Uses composition: the locator, safety classifier, interaction executor,
    pagination walker and recorder are separate components sharing the
    session, the settler and this orchestrator's RunState.
    """

    def __init__(
        self,
        session: BrowserSession,
        sink: OutputSink,
        config: Optional[ProbeConfig] = None,
        artifacts: Optional[RunArtifacts] = None,
        settler: Optional[Settler] = None,
        state: Optional[RunState] = None,
    ):
        self.session = session
        self.config = config or ProbeConfig()
        self.artifacts = artifacts or RunArtifacts(self.config.output_dir)
        self.settler = settler or Settler(session, mode=self.config.settle_mode)
        self.state = state or RunState()

        self.locator = ElementLocator(session)
        self.safety = SafetyClassifier(self.config.deny_tokens)
        self.executor = InteractionExecutor(session, self.settler, self.state.next_attempt_id)
        self.recorder = ExtractionRecorder(
            sink, HEADERS[self.config.mode], self.state.next_attempt_id,
            max_field_length=self.config.max_field_length,
        )
        self.extractor = ContentExtractor(self.locator)
        self.paginator = PaginationWalker(session, self.locator, self.settler)
        self.scroller = LazyLoadScroller(session, self.settler, self.config.max_scrolls)
        self.overlays = OverlayDismisser(session, self.locator, self.settler)
        self.progress = ProgressTracker(
            logger=logging.getLogger(f"{self.__class__.__name__}.Progress")
        )

        self.phase = Phase.IDLE
        self.failed_locations: List[str] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    # ========================================
    # MAIN WORKFLOW
    # ========================================

    def run(self) -> RunSummary:
        """Run the configured mode to completion and return its summary."""
        self.recorder.start()
        mode = self.config.mode
        if mode == "scrape":
            self.scrape_targets(self.config.target_urls)
        elif mode == "interactions":
            self.probe_interactions(self.config.base_url)
        else:
            self.explore_sections(self.config.base_url, self.config.sections)
        self._enter(Phase.IDLE)
        return self.summary()

    def summary(self) -> RunSummary:
        return RunSummary(
            mode=self.config.mode,
            locations_visited=len(self.state.visits),
            attempts=self.state.attempts,
            items_scraped=self.state.items_scraped,
            rows_written=self.recorder.rows_written,
            sink_failures=self.recorder.failures,
            failed_locations=tuple(self.failed_locations),
        )

    def _enter(self, phase: Phase) -> None:
        if phase is not self.phase:
            self.logger.debug(f"{self.phase.value} -> {phase.value}")
            self.phase = phase

    # ========================================
    # VISITING
    # ========================================

    def visit(self, location: str) -> Result:
        """
        Open ``location`` unless it was already visited.

        Returns:
            success(True) after a navigation, success(False) when skipped,
            a ``SESSION`` failure when the location could not be opened
        """
        self._enter(Phase.VISITING)
        if self.state.visits.seen(location):
            self.logger.info(f"⏭️  Already visited: {location}")
            return Result.success(False)
        return self._open(location)

    def revisit(self, location: str) -> Result:
        """Open ``location`` even when it was visited before (returning home)."""
        self._enter(Phase.VISITING)
        return self._open(location)

    def _open(self, location: str) -> Result:
        self.logger.info(f"🌐 Navigating to: {location}")
        try:
            self.session.navigate(location)
            self.session.wait_until_ready()
        except Exception as e:
            self.logger.error(f"❌ Error navigating to {location}: {e}")
            self.failed_locations.append(location)
            return Result.failure(ErrorKind.SESSION, str(e))

        self.overlays.dismiss()
        self.state.visits.mark(location)
        self.settler.settle(Delays.AFTER_NAVIGATION)
        return Result.success(True)

    def follow(self, outcome: InteractionOutcome) -> Optional[Result]:
        """Visit the location a click navigated to, if it is new."""
        if not outcome.navigated:
            return None
        return self.visit(outcome.navigated_to)

    def is_same_site(self, href: Optional[str]) -> bool:
        if not href:
            return False
        if href.startswith("/"):
            return True
        return urlparse(href).netloc == urlparse(self.config.base_url).netloc

    # ========================================
    # RECORDING
    # ========================================

    def _record(self, entry) -> Result:
        result = self.recorder.record(entry)
        succeeded = getattr(entry, "succeeded", True)
        self.progress.advance(succeeded and result.ok)
        return result

    def _interact(self, outcome: Optional[InteractionOutcome]) -> Optional[InteractionOutcome]:
        self._enter(Phase.INTERACTING)
        if outcome is not None:
            self._record(outcome)
        return outcome

    def _skipped(self, result: Result, what: str) -> None:
        if result.kind is ErrorKind.STALE:
            self.logger.info(f"  - {what} became stale, skipping")
        else:
            self.logger.info(f"  - {what} could not be read, skipping: {result.reason}")

    # ========================================
    # DISCOVERY AND ELEMENT TESTING
    # ========================================

    def discover(self, cascade: SelectorCascade, seen: Optional[dict] = None) -> list:
        """Live elements of every strategy of ``cascade``, one per identity key."""
        self._enter(Phase.DISCOVERING)
        return self.locator.discover(cascade, seen=seen)

    def test_element(self, element, label: str = "") -> None:
        """Hover, then click when the safety heuristic allows it."""
        read = inspect(element, lambda el: (el.tag_name, (el.text or "").strip()))
        if not read.ok:
            self._skipped(read, "Element")
            return

        tag_name, text = read.value
        label = label or tag_name
        self.logger.info(f"🧪 Testing {tag_name}: '{text}'")
        self._interact(self.executor.hover(element, f"{label} hover"))

        if self.safety.is_safe_to_trigger(element):
            self._interact(self.executor.click(element, f"{label} click"))

    def test_clickable_elements(self) -> int:
        """Test every unique clickable element; returns how many were tested."""
        self.progress.start_task("Testing All Clickable Elements")
        elements = self.discover(Cascades.CLICKABLE)
        self.logger.info(f"Found {len(elements)} unique clickable elements")
        for element in elements:
            self.test_element(element)
        self.progress.complete_task()
        return len(elements)

    def test_links(self) -> None:
        self.progress.start_task("Testing All Links")
        links = self.locator.locate_all(Cascades.LINKS, live_only=False)
        self.logger.info(f"Found {len(links)} links to test")

        for link in links[:self.config.max_links]:
            read = inspect(link, lambda el: (is_live(el), el.get_attribute("href"), (el.text or "").strip()))
            if not read.ok:
                self._skipped(read, "Link")
                continue

            live, href, text = read.value
            if not live or not self.is_same_site(href):
                continue

            self.logger.info(f"🔗 Testing link: '{text}' -> {href}")
            self._interact(self.executor.hover(link, "Link hover"))
            if not self.state.visits.seen(href):
                outcome = self._interact(self.executor.click(link, "Link click"))
                self.follow(outcome)
        self.progress.complete_task()

    def test_buttons(self) -> None:
        self.progress.start_task("Testing All Buttons")
        buttons = self.locator.locate_all(Cascades.BUTTONS)
        self.logger.info(f"Found {len(buttons)} buttons to test")

        for button in buttons:
            read = inspect(button, lambda el: ((el.text or "").strip(), el.get_attribute("type")))
            if not read.ok:
                self._skipped(read, "Button")
                continue

            text, button_type = read.value
            self.logger.info(f"🔘 Testing button: '{text}' (type: {button_type})")
            self._interact(self.executor.hover(button, "Button hover"))
            if self.safety.is_safe_to_trigger(button):
                self._interact(self.executor.click(button, "Button click"))
            else:
                self.logger.info("  - Skipping click (potentially unsafe)")
                self._interact(self.executor.skip(button, "click_skipped"))
        self.progress.complete_task()

    def test_form_elements(self) -> None:
        self.progress.start_task("Testing Form Elements")
        for field_element in self.locator.locate_all(Cascades.TEXT_INPUTS):
            self._interact(self.executor.fill(field_element, "input"))

        for dropdown in self.locator.locate_all(Cascades.SELECTS):
            self._interact(self.executor.select_option(dropdown, "selectByIndex"))
        self.progress.complete_task()

    def test_navigation_elements(self) -> None:
        self.progress.start_task("Testing Navigation Elements")
        for nav_item in self.locator.locate_all(Cascades.NAVIGATION):
            read = inspect(nav_item, lambda el: ((el.text or "").strip(), el.get_attribute("href")))
            if not read.ok:
                self._skipped(read, "Navigation item")
                continue

            text, href = read.value
            if not text or not self.is_same_site(href):
                continue

            self.logger.info(f"🧭 Testing navigation: '{text}'")
            self._interact(self.executor.hover(nav_item, "Navigation hover"))
            if not self.state.visits.seen(href):
                outcome = self._interact(self.executor.click(nav_item, "Navigation click"))
                self.follow(outcome)
        self.progress.complete_task()

    def probe_interactions(self, base_location: str) -> None:
        """Every testing pass against the base location; a broken pass does not stop the rest."""
        if not self.visit(base_location).ok:
            return

        passes = (
            self.test_clickable_elements, self.test_links, self.test_buttons,
            self.test_form_elements, self.test_navigation_elements,
        )
        for test_pass in passes:
            try:
                test_pass()
            except WebDriverException as e:
                self.logger.error(f"❌ {test_pass.__name__} stopped: {error_message(e)}")
                self.progress.fail_task(error_message(e))

    # ========================================
    # SECTIONS
    # ========================================

    def explore_sections(self, base_location: str, sections: Iterable[str]) -> None:
        for section in sections:
            self.logger.info(f"\n=== Testing Section: {section} ===")
            with self.executor.in_section(section):
                if not self.revisit(base_location).ok:
                    continue
                try:
                    self.test_section(section)
                    self.scrape_page_data(section)
                except WebDriverException as e:
                    self.logger.error(f"❌ Error testing section {section}: {error_message(e)}")
                    self.progress.fail_task(error_message(e))

    def _matching(self, elements: list, section: str) -> List[Tuple[object, str]]:
        """``(element, text)`` pairs whose text contains ``section``."""
        wanted = section.lower()
        matches = []
        for element in elements:
            read = inspect(element, lambda el: (el.text or "").strip())
            if read.ok and wanted in read.value.lower():
                matches.append((element, read.value))
        return matches

    def test_section(self, section: str) -> bool:
        """Reach ``section`` by link, navigation entry or button; True when reached."""
        self.progress.start_task(f"Section {section}")
        reached = (
            self._section_via_links(section, Cascades.LINKS, "")
            or self._section_via_links(section, Cascades.NAVIGATION, "nav ")
            or self._section_via_buttons(section)
        )
        if not reached:
            self.progress.fail_task(f"Section '{section}' not found on the page")
            return False

        self.test_page_elements(section)
        self.progress.complete_task()
        return True

    def _section_via_links(self, section: str, cascade: SelectorCascade, prefix: str) -> bool:
        links = self.locator.locate_all(cascade, live_only=False)
        for link, text in self._matching(links, section):
            read = inspect(link, lambda el: el.get_attribute("href"))
            if not read.ok:
                self._skipped(read, "Section link")
                continue

            href = read.value
            if not self.is_same_site(href) or self.state.visits.seen(href):
                continue

            self.logger.info(f"🔗 Found section link: '{text}' -> {href}")
            self._interact(self.executor.hover(link, f"{section} {prefix}hover"))
            outcome = self._interact(self.executor.click(
                link, f"{section} {prefix}click", category=OutcomeCategory.CLICK_NAVIGATE,
                settle=Delays.AFTER_SECTION_CLICK,
            ))
            self.follow(outcome)
            return True
        return False

    def _section_via_buttons(self, section: str) -> bool:
        buttons = self.locator.locate_all(Cascades.BUTTONS, live_only=False)
        for button, text in self._matching(buttons, section):
            self.logger.info(f"🔘 Found as button: '{text}'")
            self._interact(self.executor.hover(button, f"{section} button hover"))
            if self.safety.is_safe_to_trigger(button):
                self._interact(self.executor.click(
                    button, f"{section} button click", settle=Delays.AFTER_SECTION_CLICK,
                ))
                return True
        return False

    def test_page_elements(self, section: str) -> None:
        """Hover and safely click the first text-bearing elements of the page."""
        self.logger.info(f"📄 Testing elements on {section} page")
        candidates = self.locator.locate_all(Cascades.PAGE_ELEMENTS, live_only=False)
        for element in candidates[:self.config.max_page_elements]:
            read = inspect(element, lambda el: is_live(el) and bool((el.text or "").strip()))
            if not read.ok:
                self._skipped(read, "Element")
                continue
            if not read.value:
                continue

            self._interact(self.executor.hover(element, f"{section} page element hover"))
            if self.safety.is_safe_to_trigger(element):
                self._interact(self.executor.click(element, f"{section} page element click"))

    def scrape_page_data(self, section: str) -> int:
        """Record headings, paragraphs, links and images of the current page."""
        self._enter(Phase.EXTRACTING)
        self.logger.info(f"📊 Scraping data from {section} page")
        recorded = 0

        for cascade, element_type, read in PAGE_DATA_READERS:
            for element in self.locator.locate_all(cascade, live_only=False):
                values = inspect(element, read)
                if not values.ok:
                    self._skipped(values, element_type.capitalize())
                    continue
                if values.value is None:
                    continue
                text, url, data = values.value
                self._record(self.executor.scraped(element_type, text, url, data))
                recorded += 1

        self.artifacts.save_screenshot(self.session, section)
        return recorded

    # ========================================
    # CONTENT SCRAPING
    # ========================================

    def scrape_targets(self, targets: Iterable[str]) -> None:
        """Visit every target once, extract its content and follow pagination."""
        targets = list(targets)
        for location in targets:
            result = self.visit(location)
            if not result.ok or not result.value:
                continue

            self.progress.start_task(f"Scraping {location}")
            try:
                self.scroller.scroll()
                self.extract_page(location)

                self._enter(Phase.PAGINATING)
                walked = self.paginator.walk(self.extract_page, location, self.config.max_pages)
            except WebDriverException as e:
                self.logger.error(f"❌ Error scraping {location}: {error_message(e)}")
                self.failed_locations.append(location)
                self.progress.fail_task(error_message(e))
                continue

            if not walked.ok:
                self.logger.warning(f"Pagination of {location} stopped: {walked.reason}")
            self.progress.complete_task(f"{walked.value or 0} extra page(s)")

        self.save_final_snapshot()

    def extract_page(self, source_location: str) -> int:
        """Record every meaningful content item of the current document."""
        self._enter(Phase.EXTRACTING)
        seen_items = set()
        kept = 0
        for element in self.locator.locate_all(Cascades.CONTENT, live_only=False):
            try:
                item = self.extractor.extract(element, source_location)
            except Exception as e:
                self.logger.debug(f"Skipping element: {error_message(e)}")
                continue

            if not item.is_meaningful or item.dedup_key in seen_items:
                continue
            seen_items.add(item.dedup_key)

            if self._record(item).ok:
                kept += 1
                self.state.items_scraped += 1
                if self.state.items_scraped % 10 == 0:
                    self.logger.info(f"Scraped {self.state.items_scraped} items so far...")
        return kept

    def save_final_snapshot(self) -> None:
        try:
            html_path, png_path = self.artifacts.save_snapshot(self.session)
            self.logger.info(f"HTML: {html_path.resolve()}")
            self.logger.info(f"PNG:  {png_path.resolve()}")
        except Exception as e:
            self.logger.error(f"Failed to save page artifacts: {e}")
