"""등기부등본 리스크 분석 코어

    import deungi

    parsed = deungi.parse(raw_text)
    risk = deungi.score(parsed, estimated_price=600_000_000)
    result = deungi.validate(parsed, 600_000_000, risk_score=risk)
"""

from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import ValidationResult
from deungi.services.parser.extractors import extract_amount
from deungi.services.parser.registry_parser import RegistryParser
from deungi.services.pipeline import AnalysisResult, RegistryRiskPipeline
from deungi.services.rules.risk_scorer import RiskScorer
from deungi.services.validation.engine import ValidationEngine

__all__ = [
    "analyze",
    "extract_amount",
    "parse",
    "score",
    "validate",
]

_parser = RegistryParser()
_scorer = RiskScorer()
_engine = ValidationEngine()


def parse(raw_text: str) -> ParsedRegistry:
    """원문 → ParsedRegistry (예외 없음)"""
    return _parser.parse_text(raw_text)


def score(parsed: ParsedRegistry, estimated_price: int = 0) -> RiskScore:
    """ParsedRegistry → RiskScore"""
    return _scorer.score(parsed, estimated_price)


def validate(
    parsed: ParsedRegistry,
    estimated_price: int = 0,
    risk_score: RiskScore | None = None,
    advisory_text: str = "",
) -> ValidationResult:
    """ParsedRegistry (+ 점수/시세/자문 의견) → ValidationResult"""
    return _engine.validate(parsed, estimated_price, risk_score, advisory_text)


def analyze(
    raw_text: str, estimated_price: int = 0, advisory_text: str = ""
) -> AnalysisResult:
    """살균 → 파싱 → 검증 → 점수 → 재검증"""
    return RegistryRiskPipeline(_parser, _scorer, _engine).analyze(
        raw_text, estimated_price, advisory_text
    )
