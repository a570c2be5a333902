"""Config loader and AnalysisSettings tests."""

import pytest

from face_scoring.config.settings import AnalysisSettings
from face_scoring.utils.config_loader import Config, ConfigSection, get_config
from face_scoring.utils.exceptions import ConfigurationError, FaceScoringException


class TestPackagedConfig:
    def test_analysis_section(self):
        config = get_config()
        assert config.get('analysis.min_denominator') == pytest.approx(1e-6)
        assert config.analysis.raise_on_degenerate is False
        assert config.get('analysis.min_landmarks') == 468

    def test_batch_section(self):
        config = get_config()
        assert '.png' in config.batch.image_extensions
        assert config.get('batch.landmarks_suffix') == '.landmarks.json'

    def test_missing_key_default(self):
        assert get_config().get('analysis.nope', 'fallback') == 'fallback'

    def test_attribute_error(self):
        with pytest.raises(AttributeError):
            get_config().not_a_section

    def test_nested_section(self):
        section = get_config().logging
        assert isinstance(section, ConfigSection)
        assert isinstance(section.console, ConfigSection)


class TestCustomConfig:
    def test_load_from_path(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("analysis:\n  min_denominator: 0.01\n  raise_on_degenerate: true\n", encoding='utf-8')

        settings = AnalysisSettings.from_config(Config(str(path)))
        assert settings.min_denominator == 0.01
        assert settings.raise_on_degenerate is True
        assert settings.min_landmarks == 468

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / 'custom.yaml'
        path.write_text("recommendations:\n  max_items: 3\n", encoding='utf-8')
        monkeypatch.setenv('FACE_SCORING_CONFIG_PATH', str(path))

        assert Config().get('recommendations.max_items') == 3

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        assert Config(str(path)).to_dict() == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match='not found'):
            Config(str(tmp_path / 'missing.yaml'))

    def test_missing_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv('FACE_SCORING_CONFIG_PATH', str(tmp_path / 'gone.yaml'))
        with pytest.raises(ConfigurationError):
            Config()

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            Config(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("analysis: [unclosed\n", encoding='utf-8')
        with pytest.raises(ConfigurationError, match='Invalid YAML'):
            Config(str(path))

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n", encoding='utf-8')
        with pytest.raises(ConfigurationError, match='mapping'):
            Config(str(path))

    def test_is_package_exception(self, tmp_path):
        with pytest.raises(FaceScoringException):
            Config(str(tmp_path / 'missing.yaml'))

    def test_dotted_get_through_non_mapping(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("recommendations:\n  max_items: 3\n", encoding='utf-8')
        config = Config(str(path))
        assert config.get('recommendations.max_items.extra', 'd') == 'd'
        assert isinstance(config.get('recommendations'), ConfigSection)
        assert 'recommendations' in config


class TestAnalysisSettings:
    def test_defaults(self):
        settings = AnalysisSettings()
        assert settings.min_denominator == 1e-6
        assert settings.raise_on_degenerate is False
        assert settings.min_landmarks == 468

    @pytest.mark.parametrize("kwargs", [
        {'min_denominator': 0},
        {'min_denominator': -1.0},
        {'min_landmarks': 100},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            AnalysisSettings(**kwargs)

    def test_frozen(self):
        settings = AnalysisSettings()
        with pytest.raises(Exception):
            settings.min_denominator = 1.0
