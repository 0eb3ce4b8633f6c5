"""등기부 리스크 분석 파이프라인 — 원문 → 파싱 → 검증 → 점수 → 재검증

살균 → RegistryParser → ValidationEngine(점수 없이) → RiskScorer
→ ValidationEngine(점수 + 시세 + 자문 의견) 을 하나의 호출로 연결한다.

사용:
    pipeline = RegistryRiskPipeline()
    result = pipeline.analyze(raw_text, estimated_price=600_000_000)
    result.risk_score.grade       # RiskGrade.B
    result.validation.is_valid    # True
"""

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from deungi.config import settings
from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import ValidationResult
from deungi.services.parser.registry_parser import RegistryParser
from deungi.services.rules.risk_scorer import RiskScorer
from deungi.services.sanitize import sanitize_registry_text
from deungi.services.validation.engine import ValidationEngine

logger = logging.getLogger(__name__)


# ── 예외 ──────────────────────────────────────────────────────


class InputTooShortError(Exception):
    """살균 후 텍스트가 최소 길이보다 짧을 때 발생"""

    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"등기부 텍스트가 너무 짧습니다 ({length}자, 최소 {minimum}자)"
        )


# ── 결과 모델 ─────────────────────────────────────────────────


class AnalysisResult(BaseModel):
    """파이프라인 실행 결과"""

    model_config = ConfigDict(frozen=True)

    parsed: ParsedRegistry
    risk_score: RiskScore
    pre_validation: ValidationResult      # 점수 산출 전 (파싱 결과만)
    validation: ValidationResult          # 점수/시세/자문 의견 포함
    estimated_price: int = 0
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ── 파이프라인 ────────────────────────────────────────────────


class RegistryRiskPipeline:
    """등기부 원문 → AnalysisResult

    구성 요소는 모두 상태가 없으므로 인스턴스 하나를 공유해도 된다.
    """

    def __init__(
        self,
        parser: RegistryParser | None = None,
        scorer: RiskScorer | None = None,
        engine: ValidationEngine | None = None,
    ) -> None:
        self._parser = parser or RegistryParser()
        self._scorer = scorer or RiskScorer()
        self._engine = engine or ValidationEngine()

    def analyze(
        self,
        raw_text: str,
        estimated_price: int = 0,
        advisory_text: str = "",
        require_min_length: bool = False,
    ) -> AnalysisResult:
        """원문 분석

        Args:
            raw_text: 등기부등본 원문 (HTML 포함 가능)
            estimated_price: 시세 추정치 (원), 0 = 미입력
            advisory_text: 자문 의견 원문 (관련성 체크용)
            require_min_length: True면 살균 후 settings.MIN_INPUT_LENGTH 미만일 때 예외

        Raises:
            InputTooShortError: require_min_length=True이고 텍스트가 짧을 때
        """
        text = sanitize_registry_text(raw_text)
        if require_min_length and len(text.strip()) < settings.MIN_INPUT_LENGTH:
            raise InputTooShortError(len(text.strip()), settings.MIN_INPUT_LENGTH)

        # 1. 파싱
        parsed = self._parser.parse_text(text)
        if not parsed.gapgu and not parsed.eulgu:
            logger.warning("등기 항목을 찾지 못했습니다 (길이 %d)", len(text))

        # 2. 점수 산출 전 검증
        pre_validation = self._engine.validate(parsed, estimated_price)

        # 3. 점수
        risk_score = self._scorer.score(parsed, estimated_price)

        # 4. 점수 포함 재검증
        validation = self._engine.validate(
            parsed,
            estimated_price,
            risk_score=risk_score,
            advisory_text=advisory_text,
        )

        logger.info(
            "등기부 분석 완료: %d점 %s등급, 검증 %d점 (오류 %d)",
            risk_score.total_score,
            risk_score.grade.value,
            validation.score,
            validation.summary.errors,
        )

        return AnalysisResult(
            parsed=parsed,
            risk_score=risk_score,
            pre_validation=pre_validation,
            validation=validation,
            estimated_price=estimated_price,
        )
