"""공용 테스트 픽스처

등기부 샘플 텍스트와 상태 없는 서비스 인스턴스.
"""

from __future__ import annotations

import os

import pytest

from deungi.services.parser.registry_parser import RegistryParser
from deungi.services.rules.risk_scorer import RiskScorer
from deungi.services.validation.engine import ValidationEngine

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(filename: str) -> str:
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path, encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def apt_text() -> str:
    """아파트 등기부 (가압류 1건 현행, 근저당 2건 말소, 전세권 1건)"""
    return load_fixture("registry_sample_apt.txt")


@pytest.fixture
def risky_text() -> str:
    """오피스텔 등기부 (압류/경매/신탁/임차권등기)"""
    return load_fixture("registry_sample_risky.txt")


@pytest.fixture
def parser() -> RegistryParser:
    return RegistryParser()


@pytest.fixture
def scorer() -> RiskScorer:
    return RiskScorer()


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()
