"""FaceScoreAnalyzer (landmark path, basic mode, degenerate input) tests."""

import logging

import numpy as np
import pytest

from face_scoring import analyze
from face_scoring.config.constants import CONDITION_DEGENERATE_FACE, FEATURE_NAMES
from face_scoring.config.settings import AnalysisSettings
from face_scoring.core.face_analyzer import FaceScoreAnalyzer
from face_scoring.models import Classifications, LandmarkSet, PixelStats
from face_scoring.utils.exceptions import (
    DegenerateFaceError,
    InvalidImageError,
    InvalidLandmarksError,
)

from conftest import FACE_POINTS, gray_image, make_landmarks


@pytest.fixture
def analyzer(settings):
    return FaceScoreAnalyzer(settings)


class TestLandmarkPath:
    def test_fixture_face(self, analyzer, face_landmarks, gray_128):
        result = analyzer.analyze(gray_128, face_landmarks)

        assert result.is_basic_mode is False
        assert result.current == 84
        assert result.potential == 95
        assert result.conditions == ()
        assert isinstance(result.measurements, Classifications)

        features = result.features.to_dict()
        assert features['symmetry'] == 94
        assert features['jawline'] == 100
        assert features['cheekbones'] == 65
        assert features['noseShape'] == 80
        assert features['eyeArea'] == 100
        assert features['faceShape'] == 81
        assert features['forehead'] == 60
        assert features['skinQuality'] == 98
        assert features['hairstyle'] == 70
        # 0.4·100 + 0.3·65 + 0.3·60 = 77.5, rounded half up
        assert features['masculinity'] == 78

    def test_near_ideal_face_keeps_potential_at_current(self, analyzer, gray_128):
        points = dict(FACE_POINTS)
        points.update({
            205: (100, 215), 425: (300, 215),   # cheekbone ratio 1.0
            109: (100, 90), 338: (300, 90),     # forehead ratio 1.0
            98: (195, 230), 327: (205, 230),    # nose ratio 0.05
            152: (200, 393.6),                  # face ratio 1.618
        })
        result = analyzer.analyze(gray_128, make_landmarks(points))

        assert result.current == 99
        assert result.potential == 99

    def test_accepts_raw_points(self, analyzer, face_points, face_landmarks, gray_128):
        from_array = analyzer.analyze(gray_128, face_points)
        from_list = analyzer.analyze(gray_128, face_points.tolist())
        from_set = analyzer.analyze(gray_128, face_landmarks)
        assert from_array == from_set
        assert from_list == from_set

    def test_deterministic(self, analyzer, face_landmarks):
        rng = np.random.default_rng(11)
        image = rng.integers(0, 256, size=(400, 400, 3), dtype=np.uint8)
        first = analyzer.analyze(image, face_landmarks)
        second = analyzer.analyze(image.copy(), face_landmarks)
        assert first.to_dict() == second.to_dict()

    def test_to_dict_shape(self, analyzer, face_landmarks, gray_128):
        data = analyzer.analyze(gray_128, face_landmarks).to_dict()
        assert set(data) == {'current', 'potential', 'isBasicMode', 'features', 'measurements'}
        assert list(data['features']) == FEATURE_NAMES
        assert data['measurements']['faceShape'] == 'Oval'

    def test_random_faces_stay_in_range(self, analyzer):
        rng = np.random.default_rng(5)
        image = rng.integers(0, 256, size=(320, 240, 3), dtype=np.uint8)
        for _ in range(25):
            points = rng.uniform(-100, 400, size=(468, 2))
            result = analyzer.analyze(image, points)
            assert 0 <= result.current <= 100
            assert result.potential == max(result.current, min(result.current + 15, 95))
            for value in result.features.to_dict().values():
                assert isinstance(value, int)
                assert 0 <= value <= 100


class TestDegenerate:
    def test_collapsed_face_reports_condition(self, analyzer, gray_128):
        result = analyzer.analyze(gray_128, make_landmarks())
        assert result.conditions == (CONDITION_DEGENERATE_FACE,)
        assert result.to_dict()['conditions'] == [CONDITION_DEGENERATE_FACE]
        for value in result.features.to_dict().values():
            assert 0 <= value <= 100

    def test_collapsed_face_logs_warning(self, analyzer, gray_128, caplog):
        with caplog.at_level(logging.WARNING):
            analyzer.analyze(gray_128, make_landmarks())
        assert any('Degenerate' in record.getMessage() for record in caplog.records)

    def test_raise_on_degenerate(self, gray_128):
        analyzer = FaceScoreAnalyzer(AnalysisSettings(raise_on_degenerate=True))
        with pytest.raises(DegenerateFaceError):
            analyzer.analyze(gray_128, make_landmarks())


class TestBasicMode:
    def test_gray_128(self, analyzer, gray_128):
        result = analyzer.analyze(gray_128)

        assert result.is_basic_mode is True
        assert isinstance(result.measurements, PixelStats)
        assert result.features.skin_quality == 64
        assert result.current == 50
        assert result.potential == 65

    def test_to_dict(self, analyzer, gray_128):
        data = analyzer.analyze(gray_128).to_dict()
        assert data['isBasicMode'] is True
        assert data['measurements']['brightness'] == 128
        assert data['measurements']['colorBalance'] == '100%'
        assert data['measurements']['note'].startswith('⚠️ Basic estimation mode')

    def test_grayscale_matches_bgr(self, analyzer, gray_128):
        gray = np.full((400, 400), 128, dtype=np.uint8)
        assert analyzer.analyze(gray) == analyzer.analyze(gray_128)

    def test_deterministic(self, analyzer):
        rng = np.random.default_rng(2)
        image = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        assert analyzer.analyze(image).to_dict() == analyzer.analyze(image).to_dict()

    def test_scores_in_range(self, analyzer):
        rng = np.random.default_rng(9)
        for _ in range(10):
            image = rng.integers(0, 256, size=(32, 48, 3), dtype=np.uint8)
            result = analyzer.analyze(image)
            features = result.features.to_dict()
            assert 30 <= features['skinQuality'] <= 95
            assert 40 <= features['hairstyle'] <= 90
            for name in FEATURE_NAMES[:8]:
                assert 35 <= features[name] <= 95


class TestInvalidInput:
    def test_invalid_image(self, analyzer, face_landmarks):
        with pytest.raises(InvalidImageError):
            analyzer.analyze(None, face_landmarks)
        with pytest.raises(InvalidImageError):
            analyzer.analyze(None)

    def test_too_few_landmarks(self, analyzer, gray_128):
        with pytest.raises(InvalidLandmarksError):
            analyzer.analyze(gray_128, make_landmarks(count=20))

    def test_empty_landmarks(self, analyzer, gray_128):
        with pytest.raises(InvalidLandmarksError):
            analyzer.analyze(gray_128, [])

    def test_huge_coordinates(self, analyzer, gray_128):
        points = make_landmarks(FACE_POINTS)
        points[10] = (1.7e308, 70)
        points[234] = (1.7e308, 200)
        with pytest.raises(InvalidLandmarksError):
            analyzer.analyze(gray_128, points)

    def test_large_but_finite_coordinates(self, analyzer, gray_128):
        points = make_landmarks(FACE_POINTS)
        points[10] = (1e8, 70)
        result = analyzer.analyze(gray_128, points)
        assert 0 <= result.current <= 100


def test_module_level_analyze(gray_128, face_landmarks):
    assert analyze(gray_128, face_landmarks).current == 84
    assert analyze(gray_128).is_basic_mode


def test_shared_analyzer_is_stateless(analyzer, face_landmarks):
    first = analyzer.analyze(gray_image(90), face_landmarks)
    analyzer.analyze(gray_image(200))
    assert analyzer.analyze(gray_image(90), face_landmarks) == first


def test_landmark_set_reused(analyzer, face_landmarks, gray_128):
    analyzer.analyze(gray_128, face_landmarks)
    assert isinstance(face_landmarks, LandmarkSet)
    assert face_landmarks.point(234) == (100.0, 200.0)
