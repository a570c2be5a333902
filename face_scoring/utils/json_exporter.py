"""
분석 결과(AnalysisResult)를 JSON으로 변환
"""
import json
import os
from datetime import datetime


def to_json_dict(result, image_path=""):
    """
    분석 결과를 JSON 직렬화 가능한 딕셔너리로 변환

    Args:
        result: FaceScoreAnalyzer.analyze()의 결과 (AnalysisResult)
        image_path: 원본 이미지 경로 (선택)

    Returns:
        dict: current, potential, isBasicMode, features, measurements,
              (conditions), timestamp, image_path
    """
    output = result.to_dict()

    # 메타데이터
    output["timestamp"] = datetime.now().isoformat()
    output["image_path"] = image_path

    return output


def save_json(result, output_path, image_path=""):
    """
    분석 결과를 JSON 파일로 저장

    Args:
        result: AnalysisResult
        output_path: 저장할 JSON 파일 경로 (상위 폴더가 없으면 생성)
        image_path: 원본 이미지 경로 (선택)

    Returns:
        dict: 저장한 JSON 데이터
    """
    dir_path = os.path.dirname(output_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    json_data = to_json_dict(result, image_path)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(json_data, f, indent=2, ensure_ascii=False)

    return json_data


def to_json_string(result, image_path=""):
    """
    분석 결과를 JSON 문자열로 변환

    Args:
        result: AnalysisResult
        image_path: 원본 이미지 경로 (선택)

    Returns:
        str: JSON 문자열
    """
    json_data = to_json_dict(result, image_path)
    return json.dumps(json_data, indent=2, ensure_ascii=False)
