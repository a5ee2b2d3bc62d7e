"""Tests for AppSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kubeprobe.constants.defaults import EVENT_LIMIT_DEFAULT, LOG_TAIL_LINES_DEFAULT
from kubeprobe.models.state.app_settings import AppSettings


class TestAppSettings:
    """Tests for settings defaults, environment overrides and validation."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        for key in ("KUBEPROBE_EVENT_LIMIT", "KUBEPROBE_IN_CLUSTER", "KUBEPROBE_CONTEXT"):
            monkeypatch.delenv(key, raising=False)

    def test_defaults(self) -> None:
        """Defaults come from the constants module."""
        settings = AppSettings()
        assert settings.default_tail_lines == LOG_TAIL_LINES_DEFAULT
        assert settings.event_limit == EVENT_LIMIT_DEFAULT
        assert settings.in_cluster == "auto"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """KUBEPROBE_* variables override defaults."""
        monkeypatch.setenv("KUBEPROBE_EVENT_LIMIT", "200")
        monkeypatch.setenv("KUBEPROBE_CONTEXT", "staging")
        settings = AppSettings()
        assert settings.event_limit == 200
        assert settings.context == "staging"

    def test_in_cluster_normalization(self) -> None:
        """Boolean-like in_cluster values are normalized."""
        assert AppSettings(in_cluster="YES").in_cluster == "true"
        assert AppSettings(in_cluster="0").in_cluster == "false"

    def test_in_cluster_rejects_unknown(self) -> None:
        """Unknown in_cluster modes fail validation."""
        with pytest.raises(ValidationError):
            AppSettings(in_cluster="sometimes")

    def test_bounds(self) -> None:
        """Out-of-range numeric settings fail validation."""
        with pytest.raises(ValidationError):
            AppSettings(event_limit=0)
        with pytest.raises(ValidationError):
            AppSettings(request_timeout=0.1)
        with pytest.raises(ValidationError):
            AppSettings(default_tail_lines=-1)
