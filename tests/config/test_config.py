"""Tests for configuration defaults, validation and source merging."""

import os

import pytest

from smellscope.config import AnalysisConfig, DetectionThresholds, load_config
from smellscope.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No global/project config files and no SMELLSCOPE_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SMELLSCOPE_"):
            monkeypatch.delenv(key)
    return tmp_path


class TestDefaults:
    def test_threshold_defaults(self):
        t = DetectionThresholds()
        assert t.large_class_field_threshold == 10
        assert t.large_class_statement_threshold == 200
        assert t.feature_envy_ratio == 0.5
        assert t.long_parameter_list_threshold == 4
        assert t.message_chain_min_depth == 2
        assert t.data_clump_min_group_size == 3
        assert t.data_clump_min_recurrence == 3

    def test_config_defaults(self):
        config = AnalysisConfig()
        assert config.workers is None
        assert not config.parallel
        assert config.max_findings == 200
        assert config.detector_timeout_seconds is None


class TestValidation:
    def test_ratio_out_of_range(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            DetectionThresholds(feature_envy_ratio=1.5)
        assert exc_info.value.key == "feature_envy_ratio"

    def test_comment_thresholds(self):
        assert DetectionThresholds().comments_min_lines == 3
        with pytest.raises(InvalidConfigError) as exc_info:
            DetectionThresholds(comments_ratio=1.5)
        assert exc_info.value.key == "comments_ratio"
        with pytest.raises(InvalidConfigError):
            DetectionThresholds(comments_min_lines=0)

    def test_chain_depth_minimum(self):
        with pytest.raises(InvalidConfigError):
            DetectionThresholds(message_chain_min_depth=1)

    def test_non_positive_threshold(self):
        with pytest.raises(InvalidConfigError):
            DetectionThresholds(large_class_field_threshold=0)

    def test_workers(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(workers=0)
        assert AnalysisConfig(workers=4).parallel

    def test_timeout_positive(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(detector_timeout_seconds=0)

    def test_detector_both_enabled_and_disabled(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(enabled_detectors=("dead_code",), disabled_detectors=("dead_code",))

    def test_detector_enabled(self):
        config = AnalysisConfig(disabled_detectors=("dead_code",))
        assert config.detector_enabled("lazy_class")
        assert not config.detector_enabled("dead_code")


class TestLoadConfig:
    def test_defaults_without_sources(self, isolated):
        assert load_config() == AnalysisConfig()

    def test_toml_file(self, isolated):
        path = isolated / "custom.toml"
        path.write_text(
            "max_findings = 25\n"
            "disabled_detectors = ['dead_code']\n"
            "[thresholds]\n"
            "largeClassFieldThreshold = 12\n"
            "feature_envy_ratio = 0.6\n"
        )
        config = load_config(path)
        assert config.max_findings == 25
        assert config.disabled_detectors == ("dead_code",)
        assert config.thresholds.large_class_field_threshold == 12
        assert config.thresholds.feature_envy_ratio == 0.6

    def test_project_file_discovered(self, isolated):
        (isolated / "smellscope.toml").write_text("[thresholds]\nmessageChainMinDepth = 3\n")
        assert load_config().thresholds.message_chain_min_depth == 3

    def test_missing_explicit_file(self, isolated):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(isolated / "absent.toml")

    def test_invalid_toml(self, isolated):
        path = isolated / "broken.toml"
        path.write_text("max_findings = [")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_env_vars(self, isolated, monkeypatch):
        monkeypatch.setenv("SMELLSCOPE_WORKERS", "4")
        monkeypatch.setenv("SMELLSCOPE_FEATURE_ENVY_RATIO", "0.7")
        monkeypatch.setenv("SMELLSCOPE_DISABLED_DETECTORS", "dead_code, lazy_class")
        config = load_config()
        assert config.workers == 4
        assert config.thresholds.feature_envy_ratio == 0.7
        assert config.disabled_detectors == ("dead_code", "lazy_class")

    def test_invalid_env_var(self, isolated, monkeypatch):
        monkeypatch.setenv("SMELLSCOPE_MAX_FINDINGS", "many")
        with pytest.raises(ConfigurationError, match="SMELLSCOPE_MAX_FINDINGS"):
            load_config()

    def test_overrides_beat_env(self, isolated, monkeypatch):
        monkeypatch.setenv("SMELLSCOPE_MAX_FINDINGS", "10")
        assert load_config(max_findings=5).max_findings == 5

    def test_threshold_override_at_top_level(self, isolated):
        config = load_config(large_class_field_threshold=20)
        assert config.thresholds.large_class_field_threshold == 20

    def test_none_overrides_ignored(self, isolated):
        assert load_config(max_findings=None, workers=None) == AnalysisConfig()

    def test_verbosity_flags(self, isolated):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_unknown_option(self, isolated):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(bogus_option=1)

    def test_invalid_value_from_override(self, isolated):
        with pytest.raises(InvalidConfigError):
            load_config(feature_envy_ratio=2.0)
