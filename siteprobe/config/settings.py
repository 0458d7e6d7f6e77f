from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
import os

from .constants import Limits, Safety, SiteConfig
from ..core.browser_factory import BrowserFactory
from ..core.exceptions import InvalidConfigurationError
from ..utils import split_csv, str_to_bool

MODES = ("scrape", "interactions", "sections")
SETTLE_MODES = ("stable", "fixed")


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"{key} must be an integer, got {raw!r}")
    if value < 0:
        raise InvalidConfigurationError(f"{key} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class ProbeConfig:
    mode: str = "scrape"
    browser: str = "chrome"
    debug: bool = False
    wait_timeout: int = 15
    base_url: str = SiteConfig.BASE_URL
    target_urls: Tuple[str, ...] = SiteConfig.TARGET_URLS
    sections: Tuple[str, ...] = SiteConfig.SECTIONS
    output_dir: str = "output"
    log_file: Optional[str] = None
    settle_mode: str = "stable"
    max_pages: int = Limits.MAX_PAGES
    max_links: int = Limits.MAX_LINKS
    max_page_elements: int = Limits.MAX_PAGE_ELEMENTS
    max_scrolls: int = Limits.MAX_SCROLLS
    max_field_length: int = Limits.MAX_FIELD_LENGTH
    deny_tokens: Tuple[str, ...] = Safety.DENY_TOKENS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProbeConfig":
        env = dict(environ) if environ is not None else os.environ
        base_url = env.get("BASE_URL", "").strip() or SiteConfig.BASE_URL
        config = cls(
            mode=env.get("MODE", "scrape").strip().lower() or "scrape",
            browser=env.get("BROWSER", "chrome").strip().lower() or "chrome",
            debug=str_to_bool(env.get("DEBUG", "False")),
            wait_timeout=_int(env, "WAIT_TIMEOUT", 15),
            base_url=base_url,
            target_urls=split_csv(env.get("TARGET_URLS")) or SiteConfig.TARGET_URLS,
            sections=split_csv(env.get("SECTIONS")) or SiteConfig.SECTIONS,
            output_dir=env.get("OUTPUT_DIR", "output").strip() or "output",
            log_file=env.get("LOG_FILE", "").strip() or None,
            settle_mode=env.get("SETTLE_MODE", "stable").strip().lower() or "stable",
            max_pages=_int(env, "MAX_PAGES", Limits.MAX_PAGES),
            max_links=_int(env, "MAX_LINKS", Limits.MAX_LINKS),
            max_page_elements=_int(env, "MAX_PAGE_ELEMENTS", Limits.MAX_PAGE_ELEMENTS),
            max_scrolls=_int(env, "MAX_SCROLLS", Limits.MAX_SCROLLS),
            max_field_length=_int(env, "MAX_FIELD_LENGTH", Limits.MAX_FIELD_LENGTH),
            deny_tokens=tuple(
                token.lower() for token in split_csv(env.get("DENY_TOKENS"))
            ) or Safety.DENY_TOKENS,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.mode not in MODES:
            raise InvalidConfigurationError(
                f"Unsupported mode: {self.mode}. Available: {', '.join(MODES)}"
            )
        if self.settle_mode not in SETTLE_MODES:
            raise InvalidConfigurationError(
                f"Unsupported settle mode: {self.settle_mode}. Available: {', '.join(SETTLE_MODES)}"
            )
        browsers = BrowserFactory().get_supported_browsers()
        if self.browser not in browsers:
            raise InvalidConfigurationError(
                f"Unsupported browser: {self.browser}. Available: {', '.join(browsers)}"
            )
        if not self.base_url.startswith(("http://", "https://")):
            raise InvalidConfigurationError(f"BASE_URL must be an http(s) URL, got {self.base_url!r}")
