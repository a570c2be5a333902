"""Shared test fixtures."""

import numpy as np
import pytest

from face_scoring.config.settings import AnalysisSettings
from face_scoring.models import LandmarkSet

IMAGE_SIZE = 400

# Hand-placed front-facing face on a 400x400 canvas.
# Every other landmark sits at (200, 200).
FACE_POINTS = {
    234: (100, 200), 454: (300, 200),   # face / jaw width 200
    10: (200, 70), 152: (200, 330),     # face height 260
    98: (180, 230), 327: (220, 230),    # nose width 40
    61: (170, 280), 291: (230, 280),
    109: (120, 90), 338: (280, 90),     # forehead width 160
    33: (130, 160), 133: (175, 160),    # left eye width 45
    362: (225, 160), 263: (270, 160),   # right eye width 45
    205: (130, 215), 425: (270, 215),   # cheekbone width 140
    1: (200, 225),
    130: (125, 162), 359: (275, 162),
    127: (105, 170), 356: (295, 170),
    159: (152, 152), 145: (152, 168),
    386: (248, 152), 374: (248, 168),
    168: (200, 150), 13: (200, 270),
    6: (200, 180), 19: (200, 195), 2: (200, 240),
}


def make_landmarks(overrides=None, default=(200.0, 200.0), count=468):
    """(count, 2) array with default everywhere and overrides applied."""
    points = np.tile(np.array(default, dtype=np.float64), (count, 1))
    for index, (x, y) in (overrides or {}).items():
        points[index] = (x, y)
    return points


def gray_image(value=128, size=IMAGE_SIZE):
    return np.full((size, size, 3), value, dtype=np.uint8)


@pytest.fixture
def settings():
    return AnalysisSettings()


@pytest.fixture
def face_points():
    return make_landmarks(FACE_POINTS)


@pytest.fixture
def face_landmarks(face_points):
    return LandmarkSet(face_points)


@pytest.fixture
def gray_128():
    return gray_image(128)
