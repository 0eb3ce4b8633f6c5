"""FastAPI 의존성 주입

서비스 인스턴스를 싱글톤으로 관리한다.
"""

from functools import lru_cache

from deungi.services.pipeline import RegistryRiskPipeline
from deungi.services.validation.engine import ValidationEngine


@lru_cache()
def get_pipeline() -> RegistryRiskPipeline:
    """싱글톤 RegistryRiskPipeline 인스턴스"""
    return RegistryRiskPipeline()


@lru_cache()
def get_validation_engine() -> ValidationEngine:
    """싱글톤 ValidationEngine 인스턴스"""
    return ValidationEngine()
