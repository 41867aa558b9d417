"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_default_dialect,
    get_default_theme,
    get_environment,
    get_environment_info,
    get_log_level,
    get_svg_fallback_size,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("SHEET_EXPORT_SVG_WIDTH", raising=False)
        assert get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH) == 200

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("SHEET_EXPORT_REACT_DIALECT", "css-modules")
        result = get_environment(
            EnvVar.SHEET_EXPORT_REACT_DIALECT, override="styled-components"
        )
        assert result == "styled-components"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("SHEET_EXPORT_FLUTTER_THEME", "cupertino")
        assert get_environment(EnvVar.SHEET_EXPORT_FLUTTER_THEME) == "cupertino"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("SHEET_EXPORT_SVG_HEIGHT", "640")
        result = get_environment(EnvVar.SHEET_EXPORT_SVG_HEIGHT)
        assert result == 640
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers fall back to the default."""
        monkeypatch.setenv("SHEET_EXPORT_SVG_HEIGHT", "tall")
        assert get_environment(EnvVar.SHEET_EXPORT_SVG_HEIGHT) == 100


class TestConvertValue:
    """Tests for raw string conversion."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,var_type,expected",
        [("375", int, 375), ("-4", int, -4), ("wide", int, 10), ("42", str, "42")],
    )
    def test_str_and_int_conversion(self, raw, var_type, expected):
        """Strings pass through, integers parse or fall back to the default."""
        assert _convert_value(raw, var_type, 10) == expected

    @pytest.mark.unit
    def test_missing_value_uses_default(self):
        """An unset variable resolves to the default."""
        assert _convert_value(None, int, 10) == 10

    @pytest.mark.unit
    def test_every_variable_is_str_or_int(self):
        """Declared variables only use the supported conversions."""
        for var in EnvVar:
            assert var.value.var_type in (str, int)


class TestConvenienceFunctions:
    """Tests for the convenience accessors."""

    @pytest.mark.unit
    def test_default_dialect(self, monkeypatch):
        """Default dialect is tailwind."""
        monkeypatch.delenv("SHEET_EXPORT_REACT_DIALECT", raising=False)
        assert get_default_dialect() == "tailwind"

    @pytest.mark.unit
    def test_default_theme_override(self):
        """Explicit theme wins over config."""
        assert get_default_theme("cupertino") == "cupertino"

    @pytest.mark.unit
    def test_svg_fallback_size(self, monkeypatch):
        """Fallback size reads both dimensions."""
        monkeypatch.setenv("SHEET_EXPORT_SVG_WIDTH", "375")
        monkeypatch.delenv("SHEET_EXPORT_SVG_HEIGHT", raising=False)
        assert get_svg_fallback_size() == (375, 100)

    @pytest.mark.unit
    def test_log_level_upper_cased(self, monkeypatch):
        """Log level names are normalized to upper case."""
        monkeypatch.setenv("SHEET_EXPORT_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"


class TestIntrospection:
    """Tests for metadata access."""

    @pytest.mark.unit
    def test_environment_info(self):
        """EnvVar members carry EnvConfig metadata."""
        info = get_environment_info(EnvVar.SHEET_EXPORT_REACT_DIALECT)
        assert isinstance(info, EnvConfig)
        assert info.name == "SHEET_EXPORT_REACT_DIALECT"
        assert info.category == "react"

    @pytest.mark.unit
    def test_list_all(self):
        """Listing without category returns every variable."""
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter only returns matching variables."""
        svg_vars = list_environment_variables("svg")
        assert set(svg_vars) == {
            EnvVar.SHEET_EXPORT_SVG_WIDTH,
            EnvVar.SHEET_EXPORT_SVG_HEIGHT,
        }

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member name matches its environment variable name."""
        for var in EnvVar:
            assert var.name == var.value.name
