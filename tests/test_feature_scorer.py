"""FeatureScorer and region sampling tests."""

import numpy as np
import pytest

from face_scoring.core.feature_extractor import LandmarkFeatureExtractor
from face_scoring.core.feature_scorer import (
    FeatureScorer,
    cheekbone_score,
    eye_area_score,
    face_shape_score,
    forehead_score,
    hair_region,
    hairstyle_score,
    jawline_score,
    masculinity_score,
    nose_score,
    skin_quality_score,
    skin_region,
    symmetry_score,
)
from face_scoring.core.pixel_statistics import sample_region, to_rgb
from face_scoring.config.constants import FEATURE_NAMES
from face_scoring.models import LandmarkSet

from conftest import gray_image


class TestGeometricScores:
    def test_symmetry_perfect(self):
        assert symmetry_score([(10, 10)] * 4, 200) == 100

    def test_symmetry_offsets(self):
        offsets = [(70, 25), (75, 75), (100, 100), (95, 95)]
        assert symmetry_score(offsets, 200) == pytest.approx(94.375)

    def test_symmetry_zero_width_is_finite(self):
        assert symmetry_score([(5, 0)] * 4, 0.0) == 0.0

    def test_jawline(self):
        assert jawline_score(0.80) == 60
        assert jawline_score(0.90) == pytest.approx(80.0)
        assert jawline_score(1.0) == 100

    def test_cheekbones(self):
        assert cheekbone_score(0.7) == 65
        assert cheekbone_score(0.98) == pytest.approx(89.0)
        assert cheekbone_score(1.2) == 100

    def test_nose(self):
        assert nose_score(0.2) == pytest.approx(80.0)
        assert nose_score(0.5) == 40
        assert nose_score(0.0) == 100

    def test_eye_area_capped(self):
        assert eye_area_score(0.40, 0.5) == 100

    def test_eye_area_spacing_bonus(self):
        assert eye_area_score(0.05, 0.5) == pytest.approx(80.0)
        assert eye_area_score(0.05, 0.3) == pytest.approx(60.0)

    def test_face_shape(self):
        assert face_shape_score(1.618) == pytest.approx(100.0)
        assert face_shape_score(1.3) == pytest.approx(80.92)
        assert face_shape_score(3.0) == 50

    def test_forehead(self):
        assert forehead_score(0.8) == 60
        assert forehead_score(0.95) == pytest.approx(90.0)

    def test_masculinity(self):
        assert masculinity_score(100, 65, 60) == pytest.approx(77.5)
        assert masculinity_score(100, 100, 100) == 100


class TestRegions:
    def test_skin_region(self, face_landmarks):
        assert skin_region(face_landmarks) == (130.0, 150.0, 95.0, 120.0)

    def test_hair_region_clipped_at_top(self, face_landmarks):
        assert hair_region(face_landmarks, 260.0) == (120.0, 0.0, 160.0, 70.0)

    def test_uniform_skin(self):
        rgb = to_rgb(gray_image(128))
        region = sample_region(rgb, 130, 150, 95, 120)
        assert skin_quality_score(region) == pytest.approx(97.6)

    def test_dark_uniform_hair(self):
        rgb = to_rgb(gray_image(128))
        assert hairstyle_score(sample_region(rgb, 120, 0, 160, 70)) == pytest.approx(70.0)

    def test_bright_hair_region(self):
        rgb = to_rgb(gray_image(230))
        assert hairstyle_score(sample_region(rgb, 0, 0, 10, 10)) == pytest.approx(40.0)

    def test_striped_hair_contrast(self):
        image = np.zeros((10, 10, 3), dtype=np.uint8)
        image[:, ::2] = 100
        rgb = to_rgb(image)
        # mean 50, std 50
        assert hairstyle_score(sample_region(rgb, 0, 0, 10, 10)) == pytest.approx(95.0)


class TestScore:
    def test_fixture_face(self, face_landmarks, gray_128, settings):
        measurements = LandmarkFeatureExtractor(settings).extract(face_landmarks)
        scores, degenerate = FeatureScorer(settings).score(measurements, face_landmarks, to_rgb(gray_128))

        assert not degenerate
        assert list(scores) == FEATURE_NAMES
        assert scores['symmetry'] == pytest.approx(94.375)
        assert scores['jawline'] == 100
        assert scores['cheekbones'] == 65
        assert scores['noseShape'] == pytest.approx(80.0)
        assert scores['eyeArea'] == 100
        assert scores['faceShape'] == pytest.approx(80.92)
        assert scores['forehead'] == 60
        assert scores['masculinity'] == pytest.approx(77.5)
        assert scores['skinQuality'] == pytest.approx(97.6)
        assert scores['hairstyle'] == pytest.approx(70.0)

    def test_region_outside_image_reads_black(self, face_landmarks, settings):
        # 100x100 image: skin region lies entirely outside
        image = gray_image(128, size=100)
        measurements = LandmarkFeatureExtractor(settings).extract(face_landmarks)
        scores, degenerate = FeatureScorer(settings).score(measurements, face_landmarks, to_rgb(image))

        assert not degenerate
        # black region: smoothness 100, brightness 100 - 140 * 0.5 = 30
        assert scores['skinQuality'] == pytest.approx(72.0)

    def test_empty_regions_fall_back_to_full_image(self, face_landmarks, gray_128, settings):
        points = face_landmarks.points.copy()
        points[13] = points[168]  # zero-height skin region
        landmarks = LandmarkSet(points)

        measurements = LandmarkFeatureExtractor(settings).extract(landmarks)
        scores, degenerate = FeatureScorer(settings).score(measurements, landmarks, to_rgb(gray_128))

        assert degenerate
        assert scores['skinQuality'] == pytest.approx(97.6)

    def test_all_scores_in_range(self, settings):
        rng = np.random.default_rng(7)
        image = rng.integers(0, 256, size=(300, 300, 3), dtype=np.uint8)
        for _ in range(20):
            landmarks = LandmarkSet(rng.uniform(-50, 350, size=(468, 2)))
            measurements = LandmarkFeatureExtractor(settings).extract(landmarks)
            scores, _ = FeatureScorer(settings).score(measurements, landmarks, to_rgb(image))
            for value in scores.values():
                assert 0 <= value <= 100
