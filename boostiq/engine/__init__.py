from .assembler import CompletionGateway, ResultAssembler, degraded_result
from .gains import GainEstimator
from .gateway import LLMGateway
from .parser import ResponseParser
from .request_builder import RecommendationRequest, RecommendationRequestBuilder
from .rule_recommender import RecommendationRule, RuleCondition, RuleRecommender
from .service import OptimizationService

__all__ = [
    "CompletionGateway",
    "ResultAssembler",
    "degraded_result",
    "GainEstimator",
    "LLMGateway",
    "ResponseParser",
    "RecommendationRequest",
    "RecommendationRequestBuilder",
    "RecommendationRule",
    "RuleCondition",
    "RuleRecommender",
    "OptimizationService",
]
