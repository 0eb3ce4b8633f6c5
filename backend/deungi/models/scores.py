"""리스크 점수 결과 모델

RiskScorer 산출 결과(감점 방식 0~100점 + 등급 + 감점 요인)를 담는 Pydantic DTO.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FactorSeverity(str, Enum):
    """감점 요인 심각도"""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskGrade(str, Enum):
    """종합 안전등급 — A(85+) / B(70+) / C(50+) / D(30+) / F"""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class RiskFactor(BaseModel):
    """개별 감점 요인"""

    model_config = ConfigDict(frozen=True)

    id: str                       # "seizure", "mortgage_high" 등
    category: str                 # "압류", "근저당" 등
    description: str
    deduction: int = Field(ge=0)
    severity: FactorSeverity
    detail: str = ""


class RiskScore(BaseModel):
    """리스크 점수 최종 결과 (0~100, 높을수록 안전)"""

    model_config = ConfigDict(frozen=True)

    total_score: int                                  # max(0, 100 - total_deduction)
    grade: RiskGrade
    grade_label: str = ""                             # 안전 / 양호 / 주의 / 위험 / 매우위험
    factors: tuple[RiskFactor, ...] = ()              # 감점 큰 순
    mortgage_ratio: float = 0.0                       # 근저당/시세 (%), 시세 미입력 시 0
    total_deduction: int = 0
    summary: str = ""
