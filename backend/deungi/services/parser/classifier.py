"""등기목적 분류기 — 자유 텍스트 → (RightType, RiskLevel)

테이블(right_tables)에 있는 용어 중 텍스트에 포함된 가장 긴 용어를 선택한다.
짧은 용어("가등기")가 더 구체적인 복합 용어("소유권이전청구권가등기")를
가리지 않도록 길이 내림차순으로 검사한다.
"""

from collections.abc import Mapping

from deungi.models.registry import RightType, RiskLevel


def classify_right_type(
    text: str, table: Mapping[RightType, RiskLevel]
) -> tuple[RightType, RiskLevel]:
    """텍스트 → (등기목적, 위험도). 매칭 없으면 (OTHER, INFO)"""
    for term in sorted(table, key=lambda t: len(t.value), reverse=True):
        if term.value in text:
            return term, table[term]
    return RightType.OTHER, RiskLevel.INFO


def has_right_keyword(text: str, table: Mapping[RightType, RiskLevel]) -> bool:
    """테이블 용어 중 하나라도 포함되어 있는지"""
    return any(term.value in text for term in table)
