"""Tests for configuration loading and validation."""

import pytest

from projectdash.config import DashboardConfig, SettingsConfig, load_config
from projectdash.exceptions import ConfigurationError, InvalidConfigError


class TestDefaults:
    def test_defaults(self, isolated_config_env):
        config = load_config()
        assert config == DashboardConfig()
        assert config.page_size == 5
        assert config.mutation_delay_ms == 500
        assert config.mutation_delay_seconds == 0.5
        assert config.settings == SettingsConfig(
            theme="light",
            email_notifications=True,
            default_language="es",
            api_url="https://api.dashboard.com/v1",
        )

    def test_config_is_frozen(self):
        config = DashboardConfig()
        with pytest.raises(AttributeError):
            config.page_size = 10


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs, key",
        [
            ({"page_size": 0}, "page_size"),
            ({"mutation_delay_ms": -1}, "mutation_delay_ms"),
            ({"verbosity": "loud"}, "verbosity"),
        ],
    )
    def test_dashboard_values(self, kwargs, key):
        with pytest.raises(InvalidConfigError) as exc:
            DashboardConfig(**kwargs)
        assert exc.value.key == key

    @pytest.mark.parametrize(
        "kwargs, key",
        [
            ({"api_url": "http://api.dashboard.com/v1"}, "api_url"),
            ({"api_url": "api.dashboard.com"}, "api_url"),
            ({"theme": "neon"}, "theme"),
            ({"default_language": "fr"}, "default_language"),
        ],
    )
    def test_settings_values(self, kwargs, key):
        with pytest.raises(InvalidConfigError) as exc:
            SettingsConfig(**kwargs)
        assert exc.value.key == key
        assert exc.value.details["reason"]

    def test_with_settings_revalidates(self):
        config = DashboardConfig()
        with pytest.raises(InvalidConfigError):
            config.with_settings(api_url="ftp://example.com")
        assert config.with_settings(theme="system").settings.theme == "system"


class TestFiles:
    def test_project_file(self, isolated_config_env):
        (isolated_config_env / "projectdash.toml").write_text(
            'page_size = 10\n\n[settings]\ntheme = "dark"\n'
        )
        config = load_config()
        assert config.page_size == 10
        assert config.settings.theme == "dark"
        assert config.settings.default_language == "es"

    def test_project_file_overrides_global(self, isolated_config_env):
        (isolated_config_env / ".projectdash.toml").write_text(
            'page_size = 7\nmutation_delay_ms = 0\n\n[settings]\ndefault_language = "en"\n'
        )
        (isolated_config_env / "projectdash.toml").write_text(
            'page_size = 3\n\n[settings]\ntheme = "dark"\n'
        )
        config = load_config()
        assert config.page_size == 3
        assert config.mutation_delay_ms == 0
        assert config.settings.theme == "dark"
        assert config.settings.default_language == "en"

    def test_explicit_file(self, isolated_config_env):
        path = isolated_config_env / "custom.toml"
        path.write_text("hours_per_completed_task = 6\n")
        assert load_config(config_file=path).hours_per_completed_task == 6

    def test_missing_explicit_file(self, isolated_config_env):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=isolated_config_env / "missing.toml")

    def test_unknown_key(self, isolated_config_env):
        (isolated_config_env / "projectdash.toml").write_text("colour = 'blue'\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config()

    def test_unknown_settings_key(self, isolated_config_env):
        (isolated_config_env / "projectdash.toml").write_text("[settings]\nfont = 'mono'\n")
        with pytest.raises(ConfigurationError, match=r"\[settings\]"):
            load_config()

    def test_malformed_toml(self, isolated_config_env):
        (isolated_config_env / "projectdash.toml").write_text("page_size = = 3\n")
        with pytest.raises(ConfigurationError, match="Invalid project config"):
            load_config()

    def test_invalid_api_url_in_file(self, isolated_config_env):
        (isolated_config_env / "projectdash.toml").write_text(
            '[settings]\napi_url = "http://insecure.example.com"\n'
        )
        with pytest.raises(InvalidConfigError):
            load_config()


class TestEnvironment:
    def test_env_overrides_file(self, isolated_config_env, monkeypatch):
        (isolated_config_env / "projectdash.toml").write_text("page_size = 10\n")
        monkeypatch.setenv("PROJECTDASH_PAGE_SIZE", "20")
        monkeypatch.setenv("PROJECTDASH_SETTINGS_EMAIL_NOTIFICATIONS", "off")
        monkeypatch.setenv("PROJECTDASH_SETTINGS_THEME", "dark")

        config = load_config()

        assert config.page_size == 20
        assert config.settings.email_notifications is False
        assert config.settings.theme == "dark"

    def test_bad_int(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("PROJECTDASH_MUTATION_DELAY_MS", "fast")
        with pytest.raises(ConfigurationError, match="PROJECTDASH_MUTATION_DELAY_MS"):
            load_config()

    def test_bad_bool(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("PROJECTDASH_SETTINGS_EMAIL_NOTIFICATIONS", "sometimes")
        with pytest.raises(ConfigurationError):
            load_config()


class TestOverrides:
    def test_overrides_win(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("PROJECTDASH_PAGE_SIZE", "20")
        assert load_config(page_size=2).page_size == 2

    def test_verbose_and_quiet_flags(self, isolated_config_env):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"


class TestValueTypes:
    @pytest.mark.parametrize(
        "toml, key",
        [
            ("[settings]\napi_url = 5\n", "api_url"),
            ('[settings]\nemail_notifications = "no"\n', "email_notifications"),
            ("[settings]\ntheme = 1\n", "theme"),
            ("page_size = true\n", "page_size"),
            ('mutation_delay_ms = "500"\n', "mutation_delay_ms"),
            ("new_project_window_days = 30.5\n", "new_project_window_days"),
            ('settings = "dark"\n', "settings"),
        ],
    )
    def test_mistyped_file_values(self, isolated_config_env, toml, key):
        (isolated_config_env / "projectdash.toml").write_text(toml)
        with pytest.raises(InvalidConfigError) as exc:
            load_config()
        assert exc.value.key == key

    def test_bool_is_not_an_int(self):
        with pytest.raises(InvalidConfigError, match="page_size"):
            DashboardConfig(page_size=True)

    def test_settings_must_be_settings_config(self):
        with pytest.raises(InvalidConfigError):
            DashboardConfig(settings={"theme": "dark"})
