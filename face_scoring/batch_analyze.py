"""배치 이미지 점수 분석 스크립트"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2

from .core.face_analyzer import FaceScoreAnalyzer
from .utils import get_config, get_logger
from .utils.exceptions import FaceScoringException, InvalidLandmarksError, NoFaceDetectedError
from .utils.json_exporter import to_json_dict

logger = get_logger(__name__)


def load_landmarks(landmarks_path: Path) -> Optional[List[List[float]]]:
    """
    랜드마크 파일 로드

    파일 형식: [[x, y], ...] 또는 {"landmarks": [[x, y], ...]}

    Args:
        landmarks_path: <stem>.landmarks.json 경로

    Returns:
        포인트 리스트, 파일이 없거나 비어 있으면 None

    Raises:
        InvalidLandmarksError: JSON 형식 오류
    """
    if not landmarks_path.exists():
        return None

    try:
        with landmarks_path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidLandmarksError(f"Invalid landmarks file {landmarks_path.name}: {e}")

    if isinstance(data, dict):
        data = data.get('landmarks')

    return data or None


def find_image_files(directory: str) -> List[Path]:
    """설정된 확장자의 이미지 파일 목록 (이름순)"""
    extensions = {ext.lower() for ext in get_config().get('batch.image_extensions', ['.jpg', '.png'])}
    image_dir = Path(directory)
    return sorted(p for p in image_dir.iterdir() if p.is_file() and p.suffix.lower() in extensions)


def analyze_image_file(
    image_path: Path, analyzer: FaceScoreAnalyzer, require_face: bool = False
) -> Dict[str, Any]:
    """
    이미지 파일 하나 분석

    Raises:
        FaceScoringException: 이미지 로드 실패, 얼굴 없음(require_face) 등
    """
    image = cv2.imread(str(image_path))
    if image is None:
        raise FaceScoringException(f"Failed to load image: {image_path}")

    suffix = get_config().get('batch.landmarks_suffix', '.landmarks.json')
    landmarks = load_landmarks(image_path.with_name(image_path.stem + suffix))

    if landmarks is None and require_face:
        raise NoFaceDetectedError(f"No face landmarks for {image_path.name}")

    result = analyzer.analyze(image, landmarks)

    return {
        'filename': image_path.name,
        'success': True,
        'image_size': {
            'width': image.shape[1],
            'height': image.shape[0]
        },
        'result': to_json_dict(result, str(image_path)),
    }


def analyze_images_in_directory(
    directory: str, require_face: bool = False, analyzer: Optional[FaceScoreAnalyzer] = None
) -> List[Dict[str, Any]]:
    """
    디렉토리 내 모든 이미지 분석

    Args:
        directory: 이미지 디렉토리 경로
        require_face: True면 랜드마크 파일이 없는 이미지를 실패로 기록
        analyzer: 사용할 분석기 (None이면 기본 설정)

    Returns:
        분석 결과 리스트
    """
    analyzer = analyzer or FaceScoreAnalyzer()
    image_files = find_image_files(directory)

    results = []

    print("=" * 80)
    print(f"배치 얼굴 점수 분석 - {len(image_files)}개 이미지")
    print("=" * 80)
    print()

    for idx, image_path in enumerate(image_files, 1):
        print(f"[{idx}/{len(image_files)}] 분석 중: {image_path.name}")

        try:
            entry = analyze_image_file(image_path, analyzer, require_face)
        except FaceScoringException as e:
            logger.error(f"Analysis failed for {image_path.name}: {e}")
            print(f"   ❌ {e}\n")
            results.append({
                'filename': image_path.name,
                'success': False,
                'error': str(e),
                'error_type': type(e).__name__,
            })
            continue

        result = entry['result']
        mode = "기본 모드" if result['isBasicMode'] else "랜드마크"
        print(f"   ✅ {mode}: current={result['current']}, potential={result['potential']}")
        if result.get('conditions'):
            print(f"   ⚠️  조건: {', '.join(result['conditions'])}")
        print()

        results.append(entry)

    return results


def print_summary(results: List[Dict[str, Any]]):
    """결과 요약 출력"""
    print("=" * 80)
    print("📊 분석 결과 요약")
    print("=" * 80)
    print()

    successful = [r for r in results if r.get('success', False)]
    failed = [r for r in results if not r.get('success', False)]
    basic = [r for r in successful if r['result']['isBasicMode']]

    print(f"✅ 성공: {len(successful)}개 (랜드마크 {len(successful) - len(basic)}개, 기본 모드 {len(basic)}개)")
    print(f"❌ 실패: {len(failed)}개")
    print()

    if not successful:
        return

    avg_current = sum(r['result']['current'] for r in successful) / len(successful)
    print(f"📏 평균 점수: {avg_current:.1f}")
    print()

    face_shapes = {}
    for r in successful:
        if r['result']['isBasicMode']:
            continue
        shape = r['result']['measurements']['faceShape']
        face_shapes[shape] = face_shapes.get(shape, 0) + 1

    if face_shapes:
        print("🎭 얼굴형 분포:")
        for shape, count in sorted(face_shapes.items()):
            print(f"   - {shape}: {count}개")
        print()


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    import argparse

    parser = argparse.ArgumentParser(description='배치 얼굴 점수 분석')
    parser.add_argument(
        '--directory',
        default='data/sample_images',
        help='분석할 이미지 디렉토리 (기본: data/sample_images)'
    )
    parser.add_argument(
        '--output',
        default='analysis_results.json',
        help='결과 저장 파일 (기본: analysis_results.json)'
    )
    parser.add_argument(
        '--require-face',
        action='store_true',
        help='랜드마크 파일이 없는 이미지를 기본 모드 대신 실패로 처리'
    )

    args = parser.parse_args(argv)

    if not Path(args.directory).is_dir():
        parser.error(f"Directory not found: {args.directory}")

    # 분석 실행
    results = analyze_images_in_directory(args.directory, require_face=args.require_face)

    # 요약 출력
    print_summary(results)

    # JSON 저장
    output_path = Path(args.output)
    with output_path.open('w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    print(f"💾 결과 저장: {output_path}")
    print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
