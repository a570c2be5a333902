"""얼굴 랜드마크 인덱스 및 점수 계산 상수 정의"""

from typing import Dict, List, Tuple

# MediaPipe FaceMesh 랜드마크 개수 (refine_landmarks 사용 시 홍채 10개 추가 → 478)
MEDIAPIPE_LANDMARK_COUNT = 468

# 픽셀 좌표 절댓값 상한
MAX_LANDMARK_COORDINATE = 1e9

# 측정용 주요 포인트 (MediaPipe FaceMesh 인덱스)
# 인덱스-의미 매핑은 외부 계약이므로 변경 금지
MEASUREMENT_LANDMARKS: Dict[str, Tuple[int, int]] = {
    'face_width': (234, 454),       # 좌우 얼굴 윤곽
    'face_height': (10, 152),       # 이마 상단 ~ 턱 끝
    'jaw_width': (234, 454),
    'cheekbone_width': (205, 425),  # 광대
    'forehead_width': (109, 338),   # 이마
    'nose_width': (98, 327),        # 콧볼
    'mouth_width': (61, 291),       # 입꼬리
    'left_eye_width': (33, 133),
    'right_eye_width': (362, 263),
    'eye_distance': (133, 362),     # 양 눈 안쪽 사이
}

# 눈꼬리 분석용 포인트
EYE_LANDMARKS: Dict[str, Dict[str, int]] = {
    'left_eye': {
        'outer_corner': 33,
        'inner_corner': 133,
        'top_center': 159,
        'bottom_center': 145,
    },
    'right_eye': {
        'inner_corner': 362,
        'outer_corner': 263,
        'top_center': 386,
        'bottom_center': 374,
    },
}

# 대칭 분석용 좌우 쌍 (코끝 기준 수평 거리 비교)
SYMMETRY_NOSE_TIP = 1
SYMMETRY_LEFT_POINTS: List[int] = [33, 130, 234, 127]
SYMMETRY_RIGHT_POINTS: List[int] = [362, 359, 454, 356]

# 상악 분석용 포인트
MAXILLA_LANDMARKS: Dict[str, int] = {
    'cheekbone_left': 205,
    'cheekbone_right': 425,
    'nose_base': 2,
    'lip_top': 13,
    'chin': 152,
    'jaw_left': 234,
    'jaw_right': 454,
}

# 코 형태 분석용 포인트
NOSE_LANDMARKS: Dict[str, int] = {
    'tip': 1,
    'bridge': 6,
    'top': 19,
    'left': 98,
    'right': 327,
    'bottom': 2,
}

# 얼굴형 보정값 계산용 포인트: (x10 + y152 + x234) mod 100 / 1000
FACE_SHAPE_OFFSET_LANDMARKS: Dict[str, int] = {
    'forehead_top': 10,
    'chin': 152,
    'face_left': 234,
}

# 피부/헤어 영역 기준 포인트
SKIN_REGION_LANDMARKS: Dict[str, int] = {
    'left_eye_outer': 33,
    'right_eye_inner': 362,
    'nose_bridge': 168,
    'lip_top': 13,
}
HAIR_REGION_LANDMARKS: Dict[str, int] = {
    'forehead_left': 109,
    'forehead_right': 338,
    'forehead_top': 10,
}
HAIR_REGION_HEIGHT_RATIO = 0.3  # 얼굴 높이 대비 이마 위 헤어 영역 높이

# 특징 이름 (외부 출력 키, 순서 고정)
FEATURE_NAMES: List[str] = [
    'symmetry',
    'jawline',
    'cheekbones',
    'noseShape',
    'eyeArea',
    'faceShape',
    'forehead',
    'masculinity',
    'skinQuality',
    'hairstyle',
]

# 종합 점수 가중치 (skinQuality, hairstyle은 구조적 특징이 아니므로 제외)
OVERALL_WEIGHTS: Dict[str, float] = {
    'symmetry': 0.20,
    'jawline': 0.15,
    'cheekbones': 0.15,
    'noseShape': 0.12,
    'eyeArea': 0.12,
    'faceShape': 0.10,
    'forehead': 0.08,
    'masculinity': 0.08,
}

POTENTIAL_BONUS = 15
POTENTIAL_CAP = 95

GOLDEN_RATIO = 1.618

# 기본 모드 (랜드마크 없음) 점수 범위 및 시드 배수
BASIC_MODE_DEFAULT_RANGE: Tuple[int, int] = (35, 95)
BASIC_MODE_SEED_MULTIPLIERS: Dict[str, int] = {
    'symmetry': 7,
    'jawline': 11,
    'cheekbones': 9,
    'noseShape': 13,
    'eyeArea': 8,
    'faceShape': 12,
    'forehead': 6,
    'masculinity': 14,
    'hairstyle': 15,
}
BASIC_MODE_SCORE_RANGES: Dict[str, Tuple[int, int]] = {
    'hairstyle': (40, 90),
}
BASIC_MODE_NOTE = (
    "⚠️ Basic estimation mode - AI model not loaded. "
    "Results are deterministic based on image properties."
)

# 결과 조건 코드
CONDITION_DEGENERATE_FACE = 'DegenerateFace'
