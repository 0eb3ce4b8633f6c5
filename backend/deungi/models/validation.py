"""검증 결과 모델

ValidationEngine의 4단계 검증(포맷/산술/문맥/크로스체크) 결과.
오류는 예외가 아니라 ValidationIssue 데이터로만 표현한다.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValidationCategory(str, Enum):
    """검증 단계"""

    FORMAT = "format"
    ARITHMETIC = "arithmetic"
    CONTEXT = "context"
    CROSSCHECK = "crosscheck"


class ValidationSeverity(str, Enum):
    """이슈 심각도"""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """개별 검증 이슈"""

    model_config = ConfigDict(frozen=True)

    id: str                                # "FMT_DATE_PATTERN" 등
    category: ValidationCategory
    severity: ValidationSeverity
    field: str                             # "갑구[3].date" 등
    message: str
    expected: str | None = None
    actual: str | None = None


class ValidationSummary(BaseModel):
    """검증 통계"""

    model_config = ConfigDict(frozen=True)

    total_checks: int = 0
    passed: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0


class ValidationResult(BaseModel):
    """검증 최종 결과"""

    model_config = ConfigDict(frozen=True)

    is_valid: bool                                         # error 0건
    score: int                                             # 통과 체크 비율 (0~100)
    issues: tuple[ValidationIssue, ...] = ()
    summary: ValidationSummary = Field(default_factory=ValidationSummary)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
