"""Tests for settings and package discovery."""

import pytest

from loader.discovery import iter_package_libs
from loader.errors import ConfigError
from loader.settings import Settings, default_env, default_home, load_settings


class TestDefaults:
    """Tests for environment-driven defaults."""

    def test_home_from_env(self, tmp_path, monkeypatch):
        """Test DEPCAT_HOME overrides the home directory."""
        monkeypatch.setenv("DEPCAT_HOME", str(tmp_path))

        assert default_home() == tmp_path

    def test_env_default(self, monkeypatch):
        """Test the environment name falls back to 'default'."""
        monkeypatch.delenv("DEPCAT_ENV", raising=False)

        assert default_env() == "default"

    def test_env_from_env(self, monkeypatch):
        """Test DEPCAT_ENV selects the environment."""
        monkeypatch.setenv("DEPCAT_ENV", "staging")

        assert default_env() == "staging"


class TestLoadSettings:
    """Tests for reading settings files."""

    def test_no_file(self, tmp_path, monkeypatch):
        """Test defaults are used without a settings file."""
        monkeypatch.delenv("DEPCAT_ENV", raising=False)
        settings = load_settings(cwd=tmp_path)

        assert settings.load_path == []
        assert settings.env == "default"
        assert settings.strip_directives is False

    def test_yaml_file(self, tmp_path):
        """Test .depcat.yml in the working directory is read."""
        (tmp_path / ".depcat.yml").write_text(
            "load_path:\n  - vendor/css\n  - /opt/shared\n"
            "env: production\n"
            "strip_directives: true\n"
            "prefer_source_dir: false\n"
            "log_level: debug\n",
            encoding="utf-8",
        )

        settings = load_settings(cwd=tmp_path)

        assert settings.load_path[0] == tmp_path / "vendor" / "css"
        assert str(settings.load_path[1]).replace("\\", "/").endswith("/opt/shared")
        assert settings.env == "production"
        assert settings.strip_directives is True
        assert settings.prefer_source_dir is False
        assert settings.log_level == "DEBUG"

    def test_pyproject_table(self, tmp_path):
        """Test [tool.depcat] in pyproject.toml is read."""
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "site"\n\n[tool.depcat]\nload_path = ["lib"]\nenv = "test"\n',
            encoding="utf-8",
        )

        settings = load_settings(cwd=tmp_path)

        assert settings.load_path == [tmp_path / "lib"]
        assert settings.env == "test"

    def test_explicit_toml(self, tmp_path):
        """Test an explicit TOML file is read at top level."""
        config = tmp_path / "conf" / "depcat.toml"
        config.parent.mkdir()
        config.write_text('load_path = "assets"\n', encoding="utf-8")

        settings = load_settings(config)

        assert settings.load_path == [config.parent.resolve() / "assets"]

    def test_malformed_yaml(self, tmp_path):
        """Test malformed files raise ConfigError."""
        (tmp_path / ".depcat.yml").write_text("load_path: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings(cwd=tmp_path)

    def test_non_mapping(self, tmp_path):
        """Test documents that are not mappings raise ConfigError."""
        (tmp_path / ".depcat.yml").write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings(cwd=tmp_path)

    def test_missing_explicit_file(self, tmp_path):
        """Test an explicit file that does not exist raises ConfigError."""
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "nope.yml")

    def test_empty_file(self, tmp_path):
        """Test an empty settings file gives defaults."""
        (tmp_path / ".depcat.yaml").write_text("", encoding="utf-8")

        assert load_settings(cwd=tmp_path).load_path == []


class TestSearchPaths:
    """Tests for building the search path."""

    def test_order(self, tmp_path):
        """Test cwd, load path and package libs come in that order."""
        home = tmp_path / "home"
        lib = home / "packages" / "default" / "jquery" / "lib"
        lib.mkdir(parents=True)
        extra = tmp_path / "extra"
        extra.mkdir()
        cwd = tmp_path / "site"
        cwd.mkdir()

        settings = Settings(home=home, env="default", load_path=[extra])

        assert settings.search_paths(cwd) == [cwd.resolve(), extra.resolve(), lib.resolve()]

    def test_duplicates_removed(self, tmp_path):
        """Test directories are listed once."""
        settings = Settings(home=tmp_path / "home", env="default", load_path=[tmp_path])

        assert settings.search_paths(tmp_path) == [tmp_path.resolve()]


class TestPackageDiscovery:
    """Tests for finding package library directories."""

    def test_finds_lib_dirs(self, tmp_path):
        """Test lib directories below the environment are found, sorted."""
        base = tmp_path / "packages" / "default"
        (base / "b" / "1.0" / "lib").mkdir(parents=True)
        (base / "a" / "lib" / "lib").mkdir(parents=True)
        (base / "c" / "src").mkdir(parents=True)

        found = list(iter_package_libs(tmp_path, "default"))

        assert found == [(base / "a" / "lib").resolve(), (base / "b" / "1.0" / "lib").resolve()]

    def test_other_env_ignored(self, tmp_path):
        """Test only the selected environment is searched."""
        (tmp_path / "packages" / "other" / "x" / "lib").mkdir(parents=True)

        assert list(iter_package_libs(tmp_path, "default")) == []

    def test_missing_home(self, tmp_path):
        """Test a missing home yields nothing."""
        assert list(iter_package_libs(tmp_path / "nowhere", "default")) == []
