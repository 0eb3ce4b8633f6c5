"""등기부 파싱 결과 4단계 검증 엔진

  1. 포맷 및 타입 (format_checks)
  2. 합계 및 산술 (arithmetic_checks)
  3. 문맥 및 규칙 (context_checks)
  4. 크로스체크 (crosscheck_checks)

단계끼리는 독립적이며 어느 단계도 다른 단계를 중단시키지 않는다.
점수 = 통과 체크 비율. 체크 하나가 이슈를 여러 개 내도 분모는 1만 늘어난다.
"""

import logging
import math

from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import (
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    ValidationSummary,
)
from deungi.services.validation.arithmetic_checks import run_arithmetic_checks
from deungi.services.validation.context_checks import run_context_checks
from deungi.services.validation.crosscheck_checks import run_crosscheck_checks
from deungi.services.validation.format_checks import run_format_checks

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class ValidationEngine:
    """등기부 검증 엔진 (상태 없음)"""

    def validate(
        self,
        parsed: ParsedRegistry,
        estimated_price: int = 0,
        risk_score: RiskScore | None = None,
        advisory_text: str = "",
    ) -> ValidationResult:
        """파싱 결과 검증

        Args:
            parsed: 등기부 파싱 결과
            estimated_price: 시세 추정치 (원). 0이면 시세 관련 체크 생략
            risk_score: RiskScorer 결과. 없으면 점수 관련 체크 생략
            advisory_text: 자문 의견 원문. 비어 있으면 관련성 체크 생략

        Returns:
            ValidationResult
        """
        tiers = (
            run_format_checks(parsed),
            run_arithmetic_checks(parsed, estimated_price, risk_score),
            run_context_checks(parsed),
            run_crosscheck_checks(parsed, estimated_price, risk_score, advisory_text),
        )

        total_checks = sum(t.checks for t in tiers)
        issues: list[ValidationIssue] = [i for t in tiers for i in t.issues]

        errors = sum(1 for i in issues if i.severity == ValidationSeverity.ERROR)
        warnings = sum(1 for i in issues if i.severity == ValidationSeverity.WARNING)
        infos = sum(1 for i in issues if i.severity == ValidationSeverity.INFO)
        passed = max(0, total_checks - errors - warnings)
        score = _round_half_up(100 * passed / total_checks) if total_checks else 100

        if errors:
            logger.info(
                "검증 오류 %d건 (경고 %d, 정보 %d, 점수 %d)", errors, warnings, infos, score,
            )

        return ValidationResult(
            is_valid=errors == 0,
            score=score,
            issues=issues,
            summary=ValidationSummary(
                total_checks=total_checks,
                passed=passed,
                errors=errors,
                warnings=warnings,
                infos=infos,
            ),
        )
