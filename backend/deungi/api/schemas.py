"""API 요청/응답 스키마

내부 모델(AnalysisResult 등)을 API 응답용으로 래핑.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import ValidationResult
from deungi.services.pipeline import AnalysisResult


# ── 요청 ──────────────────────────────────────────────────────


class AnalyzeRequest(BaseModel):
    """등기부 원문 분석 요청"""

    raw_text: str = Field(..., description="등기부등본 원문 텍스트")
    estimated_price: int = Field(0, ge=0, description="시세 추정치 (원), 0 = 미입력")
    advisory_text: str = Field("", description="자문 의견 (관련성 체크용)")


class ValidateRequest(BaseModel):
    """이미 파싱된 결과 검증 요청"""

    parsed: ParsedRegistry
    estimated_price: int = Field(0, ge=0)
    risk_score: RiskScore | None = None
    advisory_text: str = ""


# ── 응답 ──────────────────────────────────────────────────────


class AnalysisResponse(BaseModel):
    """등기부 분석 응답"""

    parsed: ParsedRegistry
    risk_score: RiskScore
    validation: ValidationResult
    pre_validation_score: int
    estimated_price: int
    analyzed_at: datetime


def analysis_to_response(result: AnalysisResult) -> AnalysisResponse:
    """AnalysisResult → AnalysisResponse"""
    return AnalysisResponse(
        parsed=result.parsed,
        risk_score=result.risk_score,
        validation=result.validation,
        pre_validation_score=result.pre_validation.score,
        estimated_price=result.estimated_price,
        analyzed_at=result.analyzed_at,
    )
