"""
Tests for utility helpers (taskcal/utils/*).
"""

from datetime import date, datetime, timezone
from unittest.mock import Mock, patch

import pytest

from taskcal.utils import prompts
from taskcal.utils.date import coerce_datetime, parse_clock_time, parse_date, parse_timestamp, to_utc_iso
from taskcal.utils.macos import LinkOpener, WorkspaceLinkOpener, default_link_opener
from taskcal.utils.prompts import ConsoleAlerter


class TestDateHelpers:

    @pytest.mark.parametrize("value,expected", [
        ("08:00", (8, 0)),
        ("23:59:30", (23, 59)),
        (" 7:05 ", (7, 5)),
        ("24:00", None),
        ("8", None),
        ("a:b", None),
        (None, None),
    ])
    def test_parse_clock_time(self, value, expected):
        assert parse_clock_time(value) == expected

    def test_parse_clock_time_from_timestamp(self):
        stamp = datetime(2025, 3, 12, 18, 45).astimezone().isoformat()
        assert parse_clock_time(stamp) == (18, 45)

    def test_parse_timestamp_zulu(self):
        assert parse_timestamp("2025-03-12T07:00:00Z") == datetime(2025, 3, 12, 7, 0, tzinfo=timezone.utc)
        assert parse_timestamp("yesterday") is None

    def test_parse_date(self):
        assert parse_date("2025-03-12T10:00:00Z") == date(2025, 3, 12)
        assert parse_date("2025-3-2") == date(2025, 3, 2)
        assert parse_date("March 2nd") is None

    def test_coerce_datetime(self):
        assert coerce_datetime(None) is None
        assert coerce_datetime("") is None
        morning = coerce_datetime("2025-03-12")
        assert (morning.hour, morning.minute) == (9, 0)
        assert coerce_datetime(date(2025, 3, 12)) == morning

    def test_to_utc_iso(self):
        value = datetime(2025, 3, 12, 7, 0, tzinfo=timezone.utc)
        assert to_utc_iso(value) == "2025-03-12T07:00:00+00:00"


class TestConsoleAlerter:

    def test_alerter_is_abstract(self):
        with pytest.raises(TypeError):
            prompts.Alerter()

    def test_alert_prints(self, capsys):
        ConsoleAlerter().alert("Calendar", "Something happened")
        assert "Calendar: Something happened" in capsys.readouterr().out

    def test_offer_settings_accepts(self, monkeypatch):
        monkeypatch.setattr(prompts, "input", lambda _: "y", raising=False)
        on_open = Mock()

        ConsoleAlerter().offer_settings("Title", "Message", on_open)

        on_open.assert_called_once()

    def test_offer_settings_declines(self, monkeypatch):
        monkeypatch.setattr(prompts, "input", lambda _: "", raising=False)
        on_open = Mock()

        ConsoleAlerter().offer_settings("Title", "Message", on_open)

        on_open.assert_not_called()

    def test_non_interactive_does_not_prompt(self, capsys):
        on_open = Mock()
        with patch.object(prompts, "is_interactive", return_value=False):
            ConsoleAlerter().offer_settings("Title", "Message", on_open)

        on_open.assert_not_called()
        assert "System Settings" in capsys.readouterr().out


class TestLinkOpeners:

    def test_base_opener_supports_nothing(self):
        opener = LinkOpener()
        assert opener.can_open("calshow:0") is False
        assert opener.open("calshow:0") is False

    def test_default_opener_off_darwin(self):
        with patch("taskcal.utils.macos.platform.system", return_value="Linux"):
            assert type(default_link_opener()) is LinkOpener

    def test_default_opener_on_darwin(self):
        with patch("taskcal.utils.macos.platform.system", return_value="Darwin"):
            assert isinstance(default_link_opener(), WorkspaceLinkOpener)

    def test_workspace_opener(self):
        opener = WorkspaceLinkOpener()
        opener._workspace = Mock()
        opener._NSURL = Mock()
        opener._workspace.URLForApplicationToOpenURL_.return_value = "Calendar.app"
        opener._workspace.openURL_.return_value = True

        assert opener.can_open("calshow:0") is True
        assert opener.open("calshow:0") is True

        opener._workspace.URLForApplicationToOpenURL_.return_value = None
        assert opener.can_open("unknown-scheme:x") is False
