"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from autorelease.config.loader import (
    apply_environment,
    extract_autorelease_config,
    find_pyproject_toml,
    load_config,
    load_pyproject_toml,
)
from autorelease.config.models import (
    AutoreleaseConfig,
    BranchesConfig,
    GitHubConfig,
    HooksConfig,
    IdentityConfig,
)
from autorelease.exceptions import ConfigNotFoundError, ConfigValidationError


class TestAutoreleaseConfig:
    """Tests for AutoreleaseConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = AutoreleaseConfig()

        assert config.changelog_path == Path("CHANGELOG.md")
        assert config.manifest_path == Path("pyproject.toml")
        assert config.remote == "origin"
        assert config.release_base_ref == "HEAD^1"

    def test_published_ref(self):
        """published_ref points at the downstream branch on the remote."""
        assert AutoreleaseConfig().published_ref == "origin/dev"

        config = AutoreleaseConfig(remote="upstream", branches=BranchesConfig(downstream="develop"))
        assert config.published_ref == "upstream/develop"

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError):
            AutoreleaseConfig.model_validate({"changelog": "x"})


class TestBranchesConfig:
    """Tests for BranchesConfig model."""

    def test_defaults(self):
        config = BranchesConfig()

        assert config.release == "release"
        assert config.prerelease == "pre-release"
        assert config.stable == "master"
        assert config.downstream == "dev"

    def test_release_branches(self):
        assert BranchesConfig().release_branches == [
            "release",
            "release/patch",
            "release/minor",
            "release/major",
        ]

    def test_guard_exempt(self):
        exempt = BranchesConfig(prerelease="staging").guard_exempt

        assert "release" in exempt
        assert "release/major" in exempt
        assert "staging" in exempt
        assert "master" not in exempt


class TestIdentityConfig:
    def test_defaults(self):
        assert IdentityConfig().name == "Autorelease Script"


class TestHooksConfig:
    """Tests for HooksConfig model."""

    def test_defaults(self):
        """Default hooks configuration (empty lists)."""
        config = HooksConfig()

        assert config.post_bump == []
        assert config.dist_paths == []

    def test_custom_hooks(self):
        config = HooksConfig(post_bump=["make dist", "git add dist"], dist_paths=["dist"])

        assert config.post_bump == ["make dist", "git add dist"]
        assert config.dist_paths == ["dist"]


class TestGitHubConfig:
    """Tests for GitHubConfig model."""

    def test_defaults(self):
        config = GitHubConfig()

        assert config.owner is None
        assert config.repo is None
        assert config.token is None
        assert config.api_url == "https://api.github.com"
        assert not config.is_configured

    def test_token_is_secret(self):
        config = GitHubConfig(owner="acme", repo="widgets", token="s3cret")

        assert config.is_configured
        assert "s3cret" not in repr(config)
        assert config.token is not None
        assert config.token.get_secret_value() == "s3cret"


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, temp_project: Path):
        data = load_pyproject_toml(temp_project / "pyproject.toml")

        assert data["project"]["name"] == "test-project"

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[project\n")

        with pytest.raises(ConfigValidationError):
            load_pyproject_toml(path)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, temp_project: Path):
        assert find_pyproject_toml(temp_project).name == "pyproject.toml"

    def test_find_in_parent_dir(self, temp_project: Path):
        subdir = temp_project / "src" / "package"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == (temp_project / "pyproject.toml").resolve()


class TestExtractConfig:
    def test_extract_existing_config(self):
        pyproject = {"tool": {"autorelease": {"remote": "upstream"}}}

        assert extract_autorelease_config(pyproject) == {"remote": "upstream"}

    def test_extract_missing_config(self):
        assert extract_autorelease_config({"project": {"name": "test"}}) == {}


class TestApplyEnvironment:
    """Tests for apply_environment()."""

    def test_github_repository(self):
        data = apply_environment({}, {"GITHUB_REPOSITORY": "acme/widgets", "GITHUB_TOKEN": "t"})

        assert data["github"] == {"owner": "acme", "repo": "widgets", "token": "t"}

    def test_explicit_variables_win(self):
        env = {"GITHUB_REPOSITORY": "acme/widgets", "GH_OWNER": "other", "GH_REPO": "thing", "GH_TOKEN": "gh"}
        data = apply_environment({"github": {"owner": "from-file"}}, env)

        assert data["github"]["owner"] == "other"
        assert data["github"]["repo"] == "thing"
        assert data["github"]["token"] == "gh"

    def test_file_values_kept_without_environment(self):
        data = apply_environment({"github": {"owner": "acme", "repo": "widgets"}}, {})

        assert data["github"] == {"owner": "acme", "repo": "widgets"}


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_with_config(self, temp_project: Path):
        config = load_config(temp_project, environ={})

        assert isinstance(config, AutoreleaseConfig)
        assert config.changelog_path == Path("CHANGELOG.md")

    def test_load_nested_tables(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(
            """\
[project]
name = "test"
version = "1.0.0"

[tool.autorelease.branches]
stable = "main"

[tool.autorelease.hooks]
post_bump = ["make dist"]
"""
        )

        config = load_config(tmp_path, environ={"GITHUB_REPOSITORY": "acme/widgets", "GH_TOKEN": "t"})

        assert config.branches.stable == "main"
        assert config.hooks.post_bump == ["make dist"]
        assert config.github.is_configured

    def test_load_defaults_when_no_config(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "test"\nversion = "1.0.0"\n')

        assert load_config(tmp_path, environ={}).branches.stable == "master"

    def test_invalid_config_raises(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[tool.autorelease]\nunknown = 1\n")

        with pytest.raises(ConfigValidationError):
            load_config(tmp_path, environ={})
