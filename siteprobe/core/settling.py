"""
Settle waits after navigation, clicks and scrolling.

``fixed`` mode sleeps for the whole delay. ``stable`` mode polls the number of
elements in the document with Selenium's ``WebDriverWait`` and returns as soon
as two consecutive samples agree, using the delay only as the upper bound.
"""

import logging
import time
from typing import Callable, Optional

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from .interfaces import BrowserSession

DOM_SIZE_SCRIPT = "return document.getElementsByTagName('*').length"


class DomStable:
    """Wait condition: the DOM size did not change since the previous sample."""

    def __init__(self, script: str = DOM_SIZE_SCRIPT):
        self.script = script
        self.last_sample: Optional[int] = None

    def __call__(self, session: BrowserSession) -> bool:
        try:
            sample = session.run_script(self.script)
        except WebDriverException:
            # Document is being replaced; not stable yet
            self.last_sample = None
            return False
        stable = sample is not None and sample == self.last_sample
        self.last_sample = sample
        return stable


class Settler:
    """Waits for the page to settle after an action."""

    def __init__(
        self,
        session: BrowserSession,
        mode: str = "stable",
        poll_frequency: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.mode = mode
        self.poll_frequency = poll_frequency
        self._sleep = sleep
        self.logger = logging.getLogger(self.__class__.__name__)

    def settle(self, max_wait: float) -> bool:
        """
        Wait up to ``max_wait`` seconds.

        Returns:
            False when the stability condition was never met (the caller goes
            on regardless, settling is best-effort)
        """
        if max_wait <= 0:
            return True

        if self.mode == "fixed":
            self._sleep(max_wait)
            return True

        try:
            WebDriverWait(
                self.session, max_wait, poll_frequency=self.poll_frequency
            ).until(DomStable())
            return True
        except TimeoutException:
            self.logger.debug(f"Page did not settle within {max_wait}s")
            return False
