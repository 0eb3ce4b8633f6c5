"""등기부 분석 API 라우터

엔드포인트:
- POST /api/registry/analyze   — 원문 → 파싱 + 점수 + 검증
- POST /api/registry/validate  — 파싱 결과(+점수) 재검증
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from deungi.api.dependencies import get_pipeline, get_validation_engine
from deungi.api.schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    ValidateRequest,
    analysis_to_response,
)
from deungi.models.validation import ValidationResult
from deungi.services.pipeline import InputTooShortError, RegistryRiskPipeline
from deungi.services.validation.engine import ValidationEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/registry", tags=["registry"])


# ── POST /api/registry/analyze ────────────────────────────────


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_registry(
    request: AnalyzeRequest,
    pipeline: RegistryRiskPipeline = Depends(get_pipeline),
):
    """등기부 원문 분석

    HTML은 제거되고, 살균 후 최소 길이 미만이면 400을 반환한다.
    """
    try:
        result = pipeline.analyze(
            request.raw_text,
            estimated_price=request.estimated_price,
            advisory_text=request.advisory_text,
            require_min_length=True,
        )
    except InputTooShortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return analysis_to_response(result)


# ── POST /api/registry/validate ───────────────────────────────


@router.post("/validate", response_model=ValidationResult)
def validate_registry(
    request: ValidateRequest,
    engine: ValidationEngine = Depends(get_validation_engine),
):
    """파싱 결과 검증 (외부에서 수정된 결과의 일관성 확인용)"""
    return engine.validate(
        request.parsed,
        estimated_price=request.estimated_price,
        risk_score=request.risk_score,
        advisory_text=request.advisory_text,
    )
