"""
Browser factory using strategy pattern for creating driver instances.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Type, Tuple

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from .exceptions import DriverStartError, InvalidConfigurationError


WINDOW_SIZE: Tuple[int, int] = (1280, 900)


class BrowserStrategy(ABC):
    """Abstract base class for browser strategies."""

    @abstractmethod
    def get_options(self, headless: bool = True, **options):
        """Get browser-specific options."""
        pass

    @abstractmethod
    def create_driver(self, headless: bool = True, **options) -> webdriver.Remote:
        """Create and return a configured web driver."""
        pass

    @staticmethod
    def _apply_custom(browser_options, options: dict):
        # Extra flags from the caller: True -> --flag, "x" -> --flag=x
        for key, value in options.items():
            if isinstance(value, bool) and value:
                browser_options.add_argument(f"--{key}")
            elif isinstance(value, str):
                browser_options.add_argument(f"--{key}={value}")
        return browser_options


class ChromeStrategy(BrowserStrategy):
    """Chrome tuned for probing sites that sniff automation."""

    def get_options(self, headless: bool = True, **options) -> ChromeOptions:
        chrome_options = ChromeOptions()
        if headless:
            chrome_options.add_argument("--headless=new")

        width, height = WINDOW_SIZE
        chrome_options.add_argument(f"--window-size={width},{height}")
        chrome_options.add_argument("--disable-blink-features=AutomationControlled")
        chrome_options.add_argument("--disable-extensions")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])

        return self._apply_custom(chrome_options, options)

    def create_driver(self, headless: bool = True, **options) -> webdriver.Chrome:
        try:
            return webdriver.Chrome(options=self.get_options(headless, **options))
        except Exception as e:
            raise DriverStartError(f"Failed to create Chrome driver: {e}") from e


class FirefoxStrategy(BrowserStrategy):
    """Firefox with the same viewport as Chrome."""

    def get_options(self, headless: bool = True, **options) -> FirefoxOptions:
        firefox_options = FirefoxOptions()
        if headless:
            firefox_options.add_argument("--headless")

        width, height = WINDOW_SIZE
        firefox_options.add_argument(f"--width={width}")
        firefox_options.add_argument(f"--height={height}")

        return self._apply_custom(firefox_options, options)

    def create_driver(self, headless: bool = True, **options) -> webdriver.Firefox:
        try:
            return webdriver.Firefox(options=self.get_options(headless, **options))
        except Exception as e:
            raise DriverStartError(f"Failed to create Firefox driver: {e}") from e


class BrowserFactory:
    """Factory class for creating browser instances using strategy pattern."""

    def __init__(self):
        self._strategies: Dict[str, Type[BrowserStrategy]] = {
            'chrome': ChromeStrategy,
            'firefox': FirefoxStrategy,
        }
        self.logger = logging.getLogger(self.__class__.__name__)

    def register_strategy(self, browser_name: str, strategy_class: Type[BrowserStrategy]):
        """Register a new browser strategy."""
        self._strategies[browser_name.lower()] = strategy_class
        self.logger.info(f"Registered browser strategy: {browser_name}")

    def create_driver(self, browser: str, debug: bool = False, **options) -> webdriver.Remote:
        """
        Create a web driver using the appropriate strategy.

        Args:
            browser: Browser type ('chrome', 'firefox')
            debug: Run with a visible window instead of headless
            **options: Additional browser-specific flags

        Returns:
            Configured web driver instance

        Raises:
            InvalidConfigurationError: If browser type is not supported
            DriverStartError: If driver creation fails
        """
        browser = browser.lower().strip()

        if browser not in self._strategies:
            available = ', '.join(self._strategies.keys())
            raise InvalidConfigurationError(
                f"Unsupported browser: {browser}. Available: {available}"
            )

        strategy = self._strategies[browser]()
        self.logger.info(f"Creating {browser} driver (debug: {debug})")

        return strategy.create_driver(headless=not debug, **options)

    def get_supported_browsers(self) -> list:
        """Get list of supported browser names."""
        return list(self._strategies.keys())
