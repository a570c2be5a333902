"""입력 검증 유틸리티 함수"""

import math

import numpy as np

from .exceptions import InvalidImageError, InvalidLandmarksError


def validate_image(image: np.ndarray) -> None:
    """
    이미지 유효성 검증

    Args:
        image: 검증할 이미지 (numpy array, BGR / BGRA / Grayscale)

    Raises:
        InvalidImageError: 이미지가 유효하지 않은 경우
    """
    if image is None:
        raise InvalidImageError("Image is None")

    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Image must be numpy.ndarray, got {type(image)}")

    if image.size == 0:
        raise InvalidImageError("Image is empty")

    if len(image.shape) not in [2, 3]:
        raise InvalidImageError(f"Image must be 2D or 3D, got shape {image.shape}")

    if len(image.shape) == 3 and image.shape[2] not in [1, 3, 4]:
        raise InvalidImageError(f"Image channels must be 1, 3, or 4, got {image.shape[2]}")


def validate_landmark_count(count: int, min_landmarks: int = 468) -> None:
    """랜드마크 개수 검증 (MediaPipe FaceMesh: 468, refine 시 478)"""
    if count < min_landmarks:
        raise InvalidLandmarksError(
            f"Expected at least {min_landmarks} landmarks, got {count}"
        )


def validate_score(score: float, name: str = "score") -> None:
    """점수 값 검증 (0 ~ 100, 유한값)"""
    if score is None or not math.isfinite(score):
        raise ValueError(f"{name} must be a finite number, got {score}")
    if not 0 <= score <= 100:
        raise ValueError(f"{name} must be between 0 and 100, got {score}")
