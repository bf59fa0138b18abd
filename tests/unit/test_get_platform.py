"""Unit tests for get_platform module."""

import os
from unittest.mock import patch

import pytest

from basebot.lib.get_platform import get_data_directory, get_platform, is_android


class TestIsAndroid:
    def test_android_detected(self):
        with patch("os.path.exists", return_value=True):
            assert is_android() is True

    def test_not_android(self):
        with patch("os.path.exists", return_value=False):
            assert is_android() is False


class TestGetPlatform:
    @pytest.mark.parametrize(
        "sys_platform, expected",
        [("darwin", "osx"), ("linux", "linux"), ("win32", "windows"), ("sunos5", "unknown")],
    )
    def test_platforms(self, sys_platform, expected):
        with patch("basebot.lib.get_platform.sys.platform", sys_platform), patch(
            "basebot.lib.get_platform.is_android", return_value=False
        ):
            assert get_platform() == expected

    def test_android_wins_over_linux(self):
        with patch("basebot.lib.get_platform.sys.platform", "linux"), patch(
            "basebot.lib.get_platform.is_android", return_value=True
        ):
            assert get_platform() == "android"


class TestGetDataDirectory:
    def test_creates_directory_under_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        with patch("basebot.lib.get_platform.get_platform", return_value="linux"):
            path = get_data_directory()

        assert path == os.path.join(str(tmp_path), ".basebot")
        assert os.path.isdir(path)

    def test_windows_uses_appdata(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APPDATA", str(tmp_path))
        with patch("basebot.lib.get_platform.get_platform", return_value="windows"):
            path = get_data_directory()

        assert path == os.path.join(str(tmp_path), "basebot")
        assert os.path.isdir(path)
