"""
Selenium-backed browser session with context manager support.
"""

import logging
from typing import Optional, List, Any

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from .browser_factory import BrowserFactory
from .exceptions import (
    DriverNotStartedError, DriverStartError, NavigationError, PageLoadError,
    ScraperError
)
from .interfaces import Locator
from ..utils import retry_on_exception


class SeleniumSession:
    """
    The one browser session a run owns.

    Wraps a Selenium driver behind the small surface the probing components
    need, so they can be exercised against an in-memory fake in tests.
    """

    def __init__(
        self,
        browser: str = "chrome",
        debug: bool = False,
        wait_timeout: int = 15,
        **browser_options
    ):
        self.browser = browser.strip().lower()
        self.debug = debug
        self.wait_timeout = wait_timeout
        self.browser_options = browser_options

        self.driver = None
        self.wait: Optional[WebDriverWait] = None
        self.browser_factory = BrowserFactory()
        self.logger = logging.getLogger(self.__class__.__name__)

        self._driver_started = False

    # ========================================
    # CONTEXT MANAGER SUPPORT
    # ========================================

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        if exc_type:
            self.logger.error(f"Exception in session context: {exc_val}")
        return False

    # ========================================
    # DRIVER LIFECYCLE MANAGEMENT
    # ========================================

    def start(self):
        """Start the web driver. Failure here is fatal for the run."""
        if self._driver_started:
            self.logger.warning("Driver already started")
            return

        try:
            self.logger.info(f"Starting {self.browser} driver (debug: {self.debug})")
            self.driver = self.browser_factory.create_driver(
                self.browser,
                debug=self.debug,
                **self.browser_options
            )
            self.wait = WebDriverWait(self.driver, self.wait_timeout)
            self._driver_started = True
            self.logger.info("Driver started successfully")

        except Exception as e:
            self.logger.error(f"Failed to start driver: {e}")
            raise DriverStartError(f"Could not start {self.browser} driver: {e}") from e

    def stop(self):
        """Stop the web driver with proper cleanup."""
        if not self._driver_started or not self.driver:
            return

        try:
            self.driver.quit()
            self.logger.info("Driver stopped successfully")
        except Exception as e:
            self.logger.warning(f"Error stopping driver: {e}")
        finally:
            self.driver = None
            self.wait = None
            self._driver_started = False

    def _ensure_driver(self):
        if not self._driver_started or not self.driver:
            raise DriverNotStartedError("Driver not started. Call start() first.")

    # ========================================
    # BROWSER SESSION SURFACE
    # ========================================

    @retry_on_exception(max_retries=1, delay=1.0, exceptions=(NavigationError,))
    def navigate(self, location: str) -> None:
        """Open a location, retrying once on driver errors."""
        self._ensure_driver()
        try:
            self.logger.debug(f"Navigating to: {location}")
            self.driver.get(location)
        except WebDriverException as e:
            raise NavigationError(f"Failed to navigate to {location}: {e}") from e

    def wait_until_ready(self, timeout: Optional[float] = None) -> None:
        """Wait for ``<body>`` and ``document.readyState == 'complete'``."""
        self._ensure_driver()
        timeout = timeout or self.wait_timeout
        wait = self.wait if timeout == self.wait_timeout else WebDriverWait(self.driver, timeout)

        try:
            wait.until(EC.presence_of_element_located((By.TAG_NAME, "body")))
            wait.until(lambda d: d.execute_script("return document.readyState") == "complete")
        except TimeoutException as e:
            raise PageLoadError(f"Page failed to load within {timeout} seconds") from e

    def current_location(self) -> str:
        self._ensure_driver()
        return self.driver.current_url

    def page_title(self) -> str:
        self._ensure_driver()
        return self.driver.title

    def page_source(self) -> str:
        self._ensure_driver()
        return self.driver.page_source

    def screenshot(self) -> bytes:
        self._ensure_driver()
        try:
            return self.driver.get_screenshot_as_png()
        except WebDriverException as e:
            raise ScraperError(f"Screenshot failed: {e}") from e

    def find(self, locator: Locator, scope: Optional[WebElement] = None) -> List[WebElement]:
        self._ensure_driver()
        by, value = locator
        return (scope or self.driver).find_elements(by, value)

    def run_script(self, code: str, *args) -> Any:
        self._ensure_driver()
        return self.driver.execute_script(code, *args)

    def hover(self, element: WebElement) -> None:
        self._ensure_driver()
        ActionChains(self.driver).move_to_element(element).perform()
