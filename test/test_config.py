#!/usr/bin/env python3
import os
import time
import unittest
from datetime import timezone

from alertmanager_discord.config import Config, ConfigError, parse_listen_address, resolve_timezone
from alertmanager_discord.utils import format_datetime, format_value, parse_timestamp

WEBHOOK_URL = "https://discord.com/api/webhooks/123456789012345678/token-abc_DEF"


class TestConfig(unittest.TestCase):
    def test_defaults_from_env(self):
        config = Config.from_env({"DISCORD_WEBHOOK_URL": WEBHOOK_URL})
        self.assertEqual(config.webhook_url, WEBHOOK_URL)
        self.assertEqual(config.listen_address, "127.0.0.1:9094")
        self.assertFalse(config.debug)
        self.assertIsNone(config.timezone)

    def test_legacy_env_names(self):
        config = Config.from_env({"DISCORD_WEBHOOK": WEBHOOK_URL, "DEBUG": "1", "LISTEN_ADDRESS": "0.0.0.0:8080"})
        self.assertTrue(config.debug)
        self.assertEqual((config.listen_host, config.listen_port), ("0.0.0.0", 8080))

    def test_overrides_win_over_env(self):
        config = Config.from_env(
            {"DISCORD_WEBHOOK_URL": "https://example.com/a", "DEBUG_MODE": "false"},
            webhook_url=WEBHOOK_URL,
            debug=True,
            listen_address=None,
        )
        self.assertEqual(config.webhook_url, WEBHOOK_URL)
        self.assertTrue(config.debug)
        self.assertEqual(config.listen_port, 9094)

    def test_missing_webhook_is_fatal(self):
        with self.assertRaises(ConfigError):
            Config.from_env({})

    def test_invalid_webhook_is_fatal(self):
        for url in ("not a url", "discord.com/api/webhooks/1/x", "http://[::1"):
            with self.assertRaises(ConfigError, msg=url):
                Config.build(url)

    def test_non_discord_url_only_warns(self):
        with self.assertLogs("alertmanager_discord.config", "WARNING") as logs:
            config = Config.build("https://example.com/hooks/abc")
        self.assertEqual(config.webhook_url, "https://example.com/hooks/abc")
        self.assertIn("doesn't seem to be valid", logs.output[0])

    def test_listen_address(self):
        self.assertEqual(parse_listen_address(":9094"), ("0.0.0.0", 9094))
        self.assertEqual(parse_listen_address("[::1]:9094"), ("::1", 9094))
        for address in ("localhost", "host:port", "host:70000"):
            with self.assertRaises(ConfigError, msg=address):
                parse_listen_address(address)

    def test_timezone_fallback(self):
        self.assertIsNone(resolve_timezone(""))
        with self.assertLogs("alertmanager_discord.config", "WARNING"):
            self.assertIsNone(resolve_timezone("Not/AZone"))

    def test_explicit_timezone_is_kept(self):
        config = Config(webhook_url=WEBHOOK_URL, timezone=timezone.utc)
        self.assertIs(config.display_timezone, timezone.utc)


@unittest.skipUnless(hasattr(time, "tzset"), "time.tzset indisponível")
class TestLocalTimezoneFallback(unittest.TestCase):
    """Sem TZ configurado o horário local deve respeitar o horário de verão."""

    def setUp(self):
        previous = os.environ.get("TZ")
        os.environ["TZ"] = "America/New_York"
        time.tzset()
        self.addCleanup(self._restore_tz, previous)

    @staticmethod
    def _restore_tz(previous):
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()

    def test_winter_and_summer_offsets(self):
        config = Config.build(WEBHOOK_URL, timezone_name=None)
        tz = config.display_timezone

        self.assertEqual(format_datetime(parse_timestamp("2024-01-15T12:00:00Z"), tz), "2024-01-15 07:00:00")
        self.assertEqual(format_datetime(parse_timestamp("2024-07-15T12:00:00Z"), tz), "2024-07-15 08:00:00")

    def test_timestamp_metric_follows_local_zone(self):
        tz = Config.build(WEBHOOK_URL).display_timezone
        # 2024-01-15T12:00:00Z e 2024-07-15T12:00:00Z
        self.assertEqual(format_value(1705320000, "timestamp", tz), "2024-01-15 07:00:00")
        self.assertEqual(format_value(1721044800, "timestamp", tz), "2024-07-15 08:00:00")


if __name__ == '__main__':
    unittest.main()
