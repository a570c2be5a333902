"""커스텀 예외 클래스 정의"""


class FaceScoringException(Exception):
    """기본 예외 클래스"""
    pass


class DegenerateFaceError(FaceScoringException):
    """얼굴 기하 정보가 퇴화된 경우 (얼굴 너비 ≈ 0, 겹친 랜드마크 등)"""
    pass


class InvalidImageError(FaceScoringException):
    """잘못된 이미지 입력 예외"""
    pass


class InvalidLandmarksError(FaceScoringException):
    """잘못된 랜드마크 입력 예외 (개수 부족, NaN 좌표 등)"""
    pass


class NoFaceDetectedError(FaceScoringException):
    """상위 단계에서 얼굴이 검출되지 않음"""
    pass


class ConfigurationError(FaceScoringException):
    """설정 오류 예외"""
    pass
