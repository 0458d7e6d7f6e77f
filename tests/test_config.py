"""
Tests for configuration loading and the command line.
"""
from unittest.mock import patch

import pytest

from siteprobe.config import ProbeConfig, SiteConfig
from siteprobe.core.exceptions import DriverStartError, InvalidConfigurationError
from siteprobe.main import build_parser, main, resolve_config


class TestProbeConfig:

    def test_defaults(self):
        config = ProbeConfig.from_env({})
        assert config.mode == "scrape"
        assert config.browser == "chrome"
        assert config.debug is False
        assert config.wait_timeout == 15
        assert config.base_url == SiteConfig.BASE_URL
        assert config.target_urls == SiteConfig.TARGET_URLS
        assert config.max_pages == 5
        assert config.max_links == 20
        assert config.deny_tokens == ("delete", "remove", "cancel")
        assert config.settle_mode == "stable"

    def test_environment_overrides(self):
        config = ProbeConfig.from_env({
            "MODE": "Sections",
            "BROWSER": "Firefox",
            "DEBUG": "true",
            "BASE_URL": "https://shop.example.com/",
            "TARGET_URLS": "https://shop.example.com/a, https://shop.example.com/b",
            "SECTIONS": "Deals,Help",
            "MAX_PAGES": "2",
            "DENY_TOKENS": "Delete,Abmelden",
            "SETTLE_MODE": "fixed",
        })
        assert config.mode == "sections"
        assert config.browser == "firefox"
        assert config.debug is True
        assert config.target_urls == ("https://shop.example.com/a", "https://shop.example.com/b")
        assert config.sections == ("Deals", "Help")
        assert config.max_pages == 2
        assert config.deny_tokens == ("delete", "abmelden")
        assert config.settle_mode == "fixed"

    @pytest.mark.parametrize("environ", [
        {"MODE": "crawl"},
        {"MAX_PAGES": "many"},
        {"MAX_LINKS": "-1"},
        {"SETTLE_MODE": "forever"},
        {"BASE_URL": "shop.example.com"},
        {"BROWSER": "netscape"},
    ])
    def test_invalid_settings(self, environ):
        with pytest.raises(InvalidConfigurationError):
            ProbeConfig.from_env(environ)


class TestCommandLine:

    def test_arguments_override_environment(self):
        args = build_parser().parse_args([
            "--mode", "interactions", "--debug", "--output-dir", "runs", "https://shop.example.com/",
        ])
        config = resolve_config(args, {"MODE": "scrape", "OUTPUT_DIR": "elsewhere"})

        assert config.mode == "interactions"
        assert config.debug is True
        assert config.output_dir == "runs"
        assert config.base_url == "https://shop.example.com/"
        assert config.target_urls == ("https://shop.example.com/",)

    def test_environment_kept_without_arguments(self):
        config = resolve_config(build_parser().parse_args([]), {"DEBUG": "1"})
        assert config.debug is True

    def test_invalid_configuration_exit_code(self, monkeypatch):
        monkeypatch.setenv("MODE", "crawl")
        with patch("builtins.print"):
            assert main([]) == 2

    @patch("siteprobe.main.setup_logging")
    @patch("siteprobe.main.run")
    def test_driver_start_failure_exit_code(self, mock_run, _logging, monkeypatch):
        monkeypatch.delenv("MODE", raising=False)
        mock_run.side_effect = DriverStartError("chromedriver not found")
        with patch("builtins.print"):
            assert main(["--mode", "scrape"]) == 1

    @patch("siteprobe.main.setup_logging")
    @patch("siteprobe.main.run")
    def test_interrupt_exit_code(self, mock_run, _logging):
        mock_run.side_effect = KeyboardInterrupt
        with patch("builtins.print"):
            assert main(["--mode", "sections"]) == 130
