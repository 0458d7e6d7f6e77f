"""Dismissal of cookie banners and marketing pop-ups."""

import logging

from ..config import Cascades, Delays
from ..core.interfaces import BrowserSession
from ..core.settling import Settler
from ..core.strategies import SelectorCascade
from .interaction import SCRIPT_CLICK
from .locator import ElementLocator


class OverlayDismisser:
    """Best-effort: closes the first live overlay control, ignores every failure."""

    def __init__(
        self,
        session: BrowserSession,
        locator: ElementLocator,
        settler: Settler,
        cascade: SelectorCascade = Cascades.CLOSE_OVERLAY,
    ):
        self.session = session
        self.locator = locator
        self.settler = settler
        self.cascade = cascade
        self.logger = logging.getLogger(self.__class__.__name__)

    def dismiss(self) -> bool:
        """Returns True when an overlay control was clicked."""
        try:
            found = self.locator.require(self.cascade)
            if not found.ok:
                return False
            control = found.value
            try:
                control.click()
            except Exception:
                self.session.run_script(SCRIPT_CLICK, control)
            self.settler.settle(Delays.AFTER_OVERLAY)
            self.logger.debug("Dismissed overlay")
            return True
        except Exception as e:
            self.logger.debug(f"Ignoring overlay error: {e}")
            return False
