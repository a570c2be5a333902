"""
Feature improvement recommendations

외부 추천 제공자(RecommendationProvider)를 순서대로 시도하고,
모두 실패하면 로컬 고정 테이블로 대체한다.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..utils import get_config, get_logger
from ..utils.validators import validate_score

logger = get_logger(__name__)

TIER_VERY_LOW = 'veryLow'
TIER_LOW = 'low'
TIER_MEDIUM = 'medium'
TIER_EXCELLENT = 'excellent'

FALLBACK_RECOMMENDATIONS: Dict[str, Dict[str, List[str]]] = {
    'symmetry': {
        TIER_VERY_LOW: [
            'Start facial massage therapy 2x daily',
            'Sleep exclusively on your back',
            'Practice mirror symmetry exercises',
            'Chew food alternating sides equally',
            'Consider facial cupping therapy',
        ],
        TIER_LOW: [
            'Practice facial exercises evenly on both sides',
            'Sleep on your back to avoid facial pressure',
            'Chew food evenly on both sides',
            'Facial massage for muscle balance',
            'Use jade roller for lymphatic drainage',
        ],
        TIER_MEDIUM: [
            'Maintain current symmetry routine',
            'Weekly professional facial massage',
            'Continue balanced chewing habits',
        ],
    },
    'jawline': {
        TIER_VERY_LOW: [
            'Mewing technique 4+ hours daily',
            'Chew jaw trainer gum 45min/day',
            'Reduce body fat to 10-15%',
            'Testosterone optimization protocol',
            'Consider jawline filler consultation',
        ],
        TIER_LOW: [
            'Jaw exercises: chin lifts daily',
            'Chew harder foods (carrots, nuts)',
            'Mewing technique: tongue on palate',
            'Reduce sodium to minimize bloating',
            'Maintain low body fat (12-18%)',
        ],
        TIER_MEDIUM: [
            'Continue mewing practice',
            'Maintain lean physique',
            'Weekly jawline massage',
        ],
    },
    'cheekbones': {
        TIER_VERY_LOW: [
            'Buccal fat reduction consultation',
            'Intensive face yoga 2x daily',
            'Achieve 8-12% body fat',
            'Cheekbone contouring makeup daily',
            'Consider dermal filler enhancement',
        ],
        TIER_LOW: [
            'Face yoga: cheek lifts',
            'Chew sugar-free gum 30min daily',
            'Facial massage upward strokes',
            'Reduce overall body fat',
            'Gua sha stone therapy',
        ],
        TIER_MEDIUM: [
            'Maintain facial exercises',
            'Continue body fat optimization',
            'Weekly gua sha treatment',
        ],
    },
    'noseShape': {
        TIER_VERY_LOW: [
            'Non-surgical nose job consultation',
            'Daily nose contouring makeup',
            'Nose exercise routine 3x daily',
            'Breathing exercises for nose function',
            'Consider rhinoplasty consultation',
        ],
        TIER_LOW: [
            'Nose exercises daily',
            'Proper breathing through nose',
            'Facial contouring techniques',
            'Consider professional consultation',
            'Nose massage with oils',
        ],
        TIER_MEDIUM: [
            'Continue nose exercises',
            'Maintain breathing practices',
            'Subtle contouring when needed',
        ],
    },
    'eyeArea': {
        TIER_VERY_LOW: [
            'Under-eye filler consultation',
            'Professional LED light therapy',
            'Prescription retinoid treatment',
            "Botox for crow's feet",
            'Vitamin C + E serum combo',
        ],
        TIER_LOW: [
            'Eye cream with caffeine & retinol',
            'Get 7-8 hours sleep',
            'Reduce screen time, use blue light filter',
            'Stay hydrated (8+ glasses)',
            'Cold compress morning',
        ],
        TIER_MEDIUM: [
            'Maintain eye care routine',
            'Continue sleep optimization',
            'Weekly eye masks',
        ],
    },
    'faceShape': {
        TIER_VERY_LOW: [
            'Surgical consultation for face shape',
            'Strategic beard styling',
            'Professional hairstyle consultation',
            'Face slimming exercises daily',
            'Optimize facial hair growth',
        ],
        TIER_LOW: [
            'Overall facial exercises',
            'Maintain healthy weight',
            'Proper posture',
            'Strategic hairstyle choice',
            'Face yoga comprehensive routine',
        ],
        TIER_MEDIUM: [
            'Continue face exercises',
            'Maintain ideal weight',
            'Regular hairstyle updates',
        ],
    },
    'forehead': {
        TIER_VERY_LOW: [
            'Botox for forehead lines',
            'Prescription retinoid cream',
            'LED light therapy sessions',
            'Micro-needling treatment',
            'Bangs hairstyle consideration',
        ],
        TIER_LOW: [
            'Forehead massage',
            'Reduce frowning',
            'Botox for lines (optional)',
            'Hairstyle to complement',
            'Daily SPF 50+ protection',
        ],
        TIER_MEDIUM: [
            'Maintain skincare routine',
            'Continue sun protection',
            'Occasional professional treatments',
        ],
    },
    'masculinity': {
        TIER_VERY_LOW: [
            'Testosterone replacement therapy consult',
            'Heavy compound lifting 4x/week',
            'Grow full beard if possible',
            'Posture coaching sessions',
            'Voice deepening exercises',
        ],
        TIER_LOW: [
            'Strength training compound lifts',
            'Grow facial hair if possible',
            'Improve posture',
            'Dress in structured clothing',
            'Increase testosterone naturally',
        ],
        TIER_MEDIUM: [
            'Maintain fitness routine',
            'Continue grooming practices',
            'Optimize hormone levels',
        ],
    },
    'skinQuality': {
        TIER_VERY_LOW: [
            'Dermatologist consultation ASAP',
            'Professional chemical peel series',
            'Prescription tretinoin 0.05%',
            'LED therapy + microneedling',
            'Comprehensive supplement stack',
        ],
        TIER_LOW: [
            'Daily cleansing routine 2x',
            'Vitamin C serum (morning)',
            'Retinol serum (night)',
            'Sunscreen SPF 50+ daily',
            'Hydrate well + 7-8 hours sleep',
        ],
        TIER_MEDIUM: [
            'Maintain skincare regimen',
            'Monthly professional facial',
            'Continue sun protection',
        ],
    },
    'hairstyle': {
        TIER_VERY_LOW: [
            'Hair transplant consultation',
            'Professional stylist monthly',
            'Hair growth treatment protocol',
            'Modern trendy cut update',
            'Quality styling product investment',
        ],
        TIER_LOW: [
            'Consult professional stylist',
            'Modern textured cut',
            'Use quality styling products',
            'Consider hair growth supplements',
            'Update cut every 6-8 weeks',
        ],
        TIER_MEDIUM: [
            'Maintain current style',
            'Regular trims',
            'Quality product maintenance',
        ],
    },
}

# 테이블에 없는 특징용 기본 문구
GENERIC_RECOMMENDATIONS: Dict[str, List[str]] = {
    TIER_VERY_LOW: ['Consult professionals for improvement options'],
    TIER_LOW: ['Focus on improvement techniques'],
    TIER_MEDIUM: ['Maintain and optimize current routine'],
    TIER_EXCELLENT: [
        'Excellent! Focus on maintenance and fine-tuning',
        'Consider helping others with your routine',
    ],
}


def score_tier(score: float) -> str:
    """점수 구간: < 50 veryLow, < 70 low, < 85 medium, 나머지 excellent"""
    if score < 50:
        return TIER_VERY_LOW
    if score < 70:
        return TIER_LOW
    if score < 85:
        return TIER_MEDIUM
    return TIER_EXCELLENT


class RecommendationProvider(ABC):
    """추천 문구 제공자 인터페이스 (원격 LLM 등)"""

    name = 'provider'

    @abstractmethod
    def get_recommendations(
        self, feature: str, score: float, measurements: Optional[Mapping[str, Any]] = None
    ) -> List[str]:
        """
        특징 개선 추천 문구

        Args:
            feature: 특징 이름 (예: 'jawline')
            score: 0-100 점수
            measurements: 분류 결과 등 참고용 측정값

        Returns:
            추천 문구 리스트
        """


class FallbackRecommendationProvider(RecommendationProvider):
    """로컬 고정 테이블 (항상 성공)"""

    name = 'fallback'

    def get_recommendations(
        self, feature: str, score: float, measurements: Optional[Mapping[str, Any]] = None
    ) -> List[str]:
        tier = score_tier(score)
        if tier == TIER_EXCELLENT:
            return list(GENERIC_RECOMMENDATIONS[TIER_EXCELLENT])

        table = FALLBACK_RECOMMENDATIONS.get(feature)
        if table is None:
            return list(GENERIC_RECOMMENDATIONS[tier])
        return list(table[tier])


def _is_valid(recommendations: Any) -> bool:
    return (
        isinstance(recommendations, list)
        and len(recommendations) > 0
        and all(isinstance(item, str) and item.strip() for item in recommendations)
    )


class RecommendationService:
    """
    제공자를 순서대로 시도하고 실패 시 로컬 테이블 사용

    실패 조건: 예외 발생, 빈 리스트, 문자열이 아닌 항목 포함
    """

    def __init__(
        self,
        providers: Optional[Sequence[RecommendationProvider]] = None,
        max_items: Optional[int] = None,
    ):
        self.providers = list(providers or [])
        self.fallback = FallbackRecommendationProvider()

        if max_items is None:
            max_items = get_config().get('recommendations.max_items', 6)
        self.max_items = int(max_items)

    def recommend(
        self, feature: str, score: float, measurements: Optional[Mapping[str, Any]] = None
    ) -> List[str]:
        """
        특징 하나에 대한 추천

        Returns:
            최대 max_items 개의 추천 문구
        """
        validate_score(score, feature)

        for provider in self.providers:
            try:
                recommendations = provider.get_recommendations(feature, score, measurements)
            except Exception as e:
                logger.warning(f"Recommendation provider '{provider.name}' failed: {e}")
                continue

            if _is_valid(recommendations):
                logger.debug(f"Recommendations for {feature} from '{provider.name}'")
                return recommendations[:self.max_items]

            logger.warning(
                f"Recommendation provider '{provider.name}' returned invalid result for {feature}"
            )

        if self.providers:
            logger.info(f"All recommendation providers failed for {feature}, using fallback table")
        return self.fallback.get_recommendations(feature, score, measurements)[:self.max_items]

    def recommend_all(self, result) -> Dict[str, List[str]]:
        """
        분석 결과의 모든 특징에 대한 추천

        Args:
            result: AnalysisResult

        Returns:
            특징 이름 → 추천 문구 리스트
        """
        measurements = result.measurements.to_dict()
        return {
            name: self.recommend(name, score, measurements)
            for name, score in result.features.to_dict().items()
        }
