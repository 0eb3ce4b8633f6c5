"""등기부 리스크 점수 엔진

ParsedRegistry(+ 시세 추정치)를 입력받아 100점 만점 감점 방식의
안전 점수(높을수록 안전)와 등급을 산출한다. I/O 없음, LLM 호출 없음.

구조: 12개 독립 규칙의 감점 합산
  total_score = max(0, 100 - Σ deduction)
  등급: A(85+) / B(70+) / C(50+) / D(30+) / F

규칙끼리는 서로 참조하지 않는다. 평가 순서는 최종 정렬 순서에만 영향을 준다.
시세(estimated_price)가 0이면 시세 대비 비율 규칙 2개만 비활성화된다.
"""

from __future__ import annotations

import logging

from deungi.models.registry import ParsedRegistry, RightType
from deungi.models.scores import FactorSeverity, RiskFactor, RiskGrade, RiskScore
from deungi.services.parser.summary_builder import LEASE_TYPES, MORTGAGE_TYPES

logger = logging.getLogger(__name__)

# 등급 하한 (내림차순)
GRADE_THRESHOLDS: tuple[tuple[int, RiskGrade], ...] = (
    (85, RiskGrade.A),
    (70, RiskGrade.B),
    (50, RiskGrade.C),
    (30, RiskGrade.D),
)

GRADE_LABELS: dict[RiskGrade, str] = {
    RiskGrade.A: "안전",
    RiskGrade.B: "양호",
    RiskGrade.C: "주의",
    RiskGrade.D: "위험",
    RiskGrade.F: "매우위험",
}

# 근저당/시세 비율(%) 구간: (초과 기준, id, 감점, 심각도, 설명, 상세 꼬리말)
_MORTGAGE_TIERS = (
    (120, "mortgage_extreme", 30, FactorSeverity.CRITICAL, "근저당 비율 매우 위험",
     "120%를 초과합니다. 깡통주택 위험이 매우 높습니다."),
    (100, "mortgage_very_high", 25, FactorSeverity.CRITICAL, "근저당 비율 초과위험",
     "시세를 초과합니다. 깡통주택 위험이 높습니다."),
    (80, "mortgage_high", 20, FactorSeverity.HIGH, "근저당 비율 위험",
     "80%를 초과하여 보증금 회수 위험이 있습니다."),
    (70, "mortgage_elevated", 10, FactorSeverity.MEDIUM, "근저당 비율 주의",
     "70%를 초과하여 주의가 필요합니다."),
    (50, "mortgage_moderate", 5, FactorSeverity.LOW, "근저당 비율 보통",
     "일반적인 수준이나 모니터링이 필요합니다."),
)

# 선순위채권(근저당+전세)/시세 비율(%) 구간
_CLAIMS_TIERS = (
    (100, "total_claims_critical", 25, FactorSeverity.CRITICAL, "선순위채권 합산 초과",
     "시세를 초과합니다. 보증금 전액 미회수 위험이 매우 높습니다."),
    (80, "total_claims_high", 15, FactorSeverity.HIGH, "선순위채권 합산 위험",
     "경매 시 보증금 전액 회수가 어려울 수 있습니다."),
    (60, "total_claims_moderate", 8, FactorSeverity.MEDIUM, "선순위채권 합산 주의",
     "추가 채권 설정 시 위험 수준에 도달할 수 있습니다."),
)

_EOK = 100_000_000


def grade_for(score: int) -> RiskGrade:
    """점수 → 등급"""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return RiskGrade.F


class RiskScorer:
    """등기부 리스크 점수 산출기 (상태 없음)"""

    def score(self, parsed: ParsedRegistry, estimated_price: int = 0) -> RiskScore:
        """리스크 점수 산출

        Args:
            parsed: 등기부 파싱 결과
            estimated_price: 시세 추정치 (원). 0 이하이면 비율 규칙 생략

        Returns:
            RiskScore (0~100, 높을수록 안전)
        """
        price = estimated_price if estimated_price and estimated_price > 0 else 0

        mortgage_factors, ratio = self._eval_mortgage_ratio(parsed, price)
        factors: list[RiskFactor] = [
            *mortgage_factors,
            *self._eval_seizure(parsed),
            *self._eval_disposition(parsed),
            *self._eval_auction(parsed),
            *self._eval_provisional_registration(parsed),
            *self._eval_trust(parsed),
            *self._eval_ownership_frequency(parsed),
            *self._eval_multiple_mortgages(parsed),
            *self._eval_total_claims(parsed, price),
            *self._eval_lease_registration(parsed),
            *self._eval_warning_registration(parsed),
            *self._eval_redemption(parsed),
        ]

        total_deduction = sum(f.deduction for f in factors)
        total_score = max(0, 100 - total_deduction)
        grade = grade_for(total_score)
        label = GRADE_LABELS[grade]

        logger.debug(
            "리스크 점수: %d점 %s등급 (감점 %d, 요인 %d개)",
            total_score, grade.value, total_deduction, len(factors),
        )

        return RiskScore(
            total_score=total_score,
            grade=grade,
            grade_label=label,
            factors=sorted(factors, key=lambda f: f.deduction, reverse=True),
            mortgage_ratio=ratio,
            total_deduction=total_deduction,
            summary=self._build_summary(total_score, grade, label, factors, parsed),
        )

    # ──────────────────────────────────────
    # 시세 대비 비율 규칙
    # ──────────────────────────────────────

    @staticmethod
    def _eval_mortgage_ratio(
        parsed: ParsedRegistry, price: int
    ) -> tuple[list[RiskFactor], float]:
        """근저당/시세 비율. 해당하는 가장 높은 구간 하나만 적용"""
        if price <= 0:
            return [], 0.0

        ratio = parsed.summary.total_mortgage_amount / price * 100
        for threshold, factor_id, deduction, severity, description, tail in _MORTGAGE_TIERS:
            if ratio > threshold:
                factor = RiskFactor(
                    id=factor_id,
                    category="근저당",
                    description=description,
                    deduction=deduction,
                    severity=severity,
                    detail=f"근저당 총액이 시세의 {ratio:.1f}%입니다. {tail}",
                )
                return [factor], ratio
        return [], ratio

    @staticmethod
    def _eval_total_claims(parsed: ParsedRegistry, price: int) -> list[RiskFactor]:
        """근저당 + 전세보증금 합산 / 시세"""
        claims = parsed.summary.total_claims_amount
        if price <= 0 or claims <= 0:
            return []

        ratio = claims / price * 100
        for threshold, factor_id, deduction, severity, description, tail in _CLAIMS_TIERS:
            if ratio > threshold:
                return [RiskFactor(
                    id=factor_id,
                    category="선순위채권",
                    description=description,
                    deduction=deduction,
                    severity=severity,
                    detail=(
                        f"근저당+전세보증금 합산({claims / _EOK:.1f}억)이 "
                        f"시세의 {ratio:.1f}%입니다. {tail}"
                    ),
                )]
        return []

    # ──────────────────────────────────────
    # 갑구 규칙
    # ──────────────────────────────────────

    @staticmethod
    def _count_active_gapgu(parsed: ParsedRegistry, purpose: RightType) -> int:
        return sum(1 for e in parsed.gapgu if e.purpose == purpose and not e.is_cancelled)

    def _eval_seizure(self, parsed: ParsedRegistry) -> list[RiskFactor]:
        """압류 25점 × 건수, 가압류 20점 × 건수"""
        factors: list[RiskFactor] = []
        if parsed.summary.has_seizure:
            count = self._count_active_gapgu(parsed, RightType.SEIZURE)
            factors.append(RiskFactor(
                id="seizure",
                category="압류",
                description="압류 등기 존재",
                deduction=25 * count,
                severity=FactorSeverity.CRITICAL,
                detail=(
                    f"현행 압류가 {count}건 설정되어 있습니다. "
                    "소유권 행사에 심각한 제한이 있으며, 경매 진행 가능성이 높습니다."
                ),
            ))
        if parsed.summary.has_provisional_seizure:
            count = self._count_active_gapgu(parsed, RightType.PROVISIONAL_SEIZURE)
            factors.append(RiskFactor(
                id="provisional_seizure",
                category="가압류",
                description="가압류 등기 존재",
                deduction=20 * count,
                severity=FactorSeverity.CRITICAL,
                detail=(
                    f"현행 가압류가 {count}건 설정되어 있습니다. "
                    "채무 분쟁이 있으며, 본압류로 전환될 수 있습니다."
                ),
            ))
        return factors

    def _eval_disposition(self, parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_provisional_disposition:
            return []
        count = self._count_active_gapgu(parsed, RightType.PROVISIONAL_DISPOSITION)
        return [RiskFactor(
            id="disposition",
            category="가처분",
            description="가처분 등기 존재",
            deduction=15 * count,
            severity=FactorSeverity.HIGH,
            detail=f"처분금지 가처분이 {count}건 설정되어 있습니다. 소유권 이전에 법적 분쟁이 있습니다.",
        )]

    @staticmethod
    def _eval_auction(parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_auction_order:
            return []
        return [RiskFactor(
            id="auction",
            category="경매",
            description="경매개시결정 존재",
            deduction=30,
            severity=FactorSeverity.CRITICAL,
            detail=(
                "경매가 개시된 부동산입니다. 보증금 회수가 매우 어려울 수 있으며, "
                "임차인 보호에 각별한 주의가 필요합니다."
            ),
        )]

    @staticmethod
    def _eval_provisional_registration(parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_provisional_registration:
            return []
        return [RiskFactor(
            id="provisional_reg",
            category="가등기",
            description="가등기 존재",
            deduction=10,
            severity=FactorSeverity.MEDIUM,
            detail="가등기가 설정되어 있습니다. 본등기로 전환 시 후순위 권리가 말소될 수 있습니다.",
        )]

    @staticmethod
    def _eval_trust(parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_trust:
            return []
        return [RiskFactor(
            id="trust",
            category="신탁",
            description="신탁등기 존재",
            deduction=15,
            severity=FactorSeverity.HIGH,
            detail="신탁등기가 설정된 부동산입니다. 수탁자의 동의 없이 처분이 불가하며, 신탁원부 확인이 필요합니다.",
        )]

    @staticmethod
    def _eval_ownership_frequency(parsed: ParsedRegistry) -> list[RiskFactor]:
        """소유권이전 4회 이상 15점, 정확히 3회 10점"""
        count = parsed.summary.ownership_transfer_count
        if count >= 4:
            return [RiskFactor(
                id="ownership_freq_high",
                category="소유권",
                description="소유권 이전 빈도 매우 높음",
                deduction=15,
                severity=FactorSeverity.HIGH,
                detail=f"소유권이 {count}회 이전되었습니다. 잦은 거래는 투기 또는 하자 물건의 징후일 수 있습니다.",
            )]
        if count == 3:
            return [RiskFactor(
                id="ownership_freq",
                category="소유권",
                description="소유권 이전 빈도 높음",
                deduction=10,
                severity=FactorSeverity.MEDIUM,
                detail=f"소유권이 {count}회 이전되었습니다. 평균 이상의 거래 빈도로 주의가 필요합니다.",
            )]
        return []

    @staticmethod
    def _eval_warning_registration(parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_warning_registration:
            return []
        return [RiskFactor(
            id="warning_reg",
            category="예고등기",
            description="예고등기 존재",
            deduction=12,
            severity=FactorSeverity.HIGH,
            detail="예고등기가 설정되어 있습니다. 등기원인의 무효·취소 소송이 진행 중이며, 소유권 변동 가능성이 있습니다.",
        )]

    @staticmethod
    def _eval_redemption(parsed: ParsedRegistry) -> list[RiskFactor]:
        if not parsed.summary.has_redemption_registration:
            return []
        return [RiskFactor(
            id="redemption",
            category="환매등기",
            description="환매등기 존재",
            deduction=10,
            severity=FactorSeverity.MEDIUM,
            detail="환매등기가 설정되어 있습니다. 매도인의 환매권 행사로 소유권이 원복될 수 있습니다.",
        )]

    # ──────────────────────────────────────
    # 을구 규칙
    # ──────────────────────────────────────

    @staticmethod
    def _eval_multiple_mortgages(parsed: ParsedRegistry) -> list[RiskFactor]:
        count = sum(
            1 for e in parsed.eulgu
            if e.purpose in MORTGAGE_TYPES and not e.is_cancelled
        )
        if count < 3:
            return []
        return [RiskFactor(
            id="multi_mortgage",
            category="근저당",
            description="다수 근저당 설정",
            deduction=10,
            severity=FactorSeverity.MEDIUM,
            detail=f"현행 근저당이 {count}건 설정되어 있습니다. 다수의 채권자가 존재하여 권리관계가 복잡합니다.",
        )]

    @staticmethod
    def _eval_lease_registration(parsed: ParsedRegistry) -> list[RiskFactor]:
        """임차권등기는 건수와 무관하게 20점 (건수는 상세 문구에만 표시)"""
        if not parsed.summary.has_lease_registration:
            return []
        count = sum(
            1 for e in parsed.eulgu
            if e.purpose in LEASE_TYPES and not e.is_cancelled
        )
        return [RiskFactor(
            id="lease_registration",
            category="임차권등기",
            description="임차권등기명령 존재",
            deduction=20,
            severity=FactorSeverity.CRITICAL,
            detail=(
                f"임차권등기가 {count}건 설정되어 있습니다. "
                "이전 임차인이 보증금을 반환받지 못한 상태이며, "
                "해당 물건의 보증금 미반환 이력을 의미합니다."
            ),
        )]

    # ──────────────────────────────────────
    # 요약 문장
    # ──────────────────────────────────────

    @staticmethod
    def _build_summary(
        score: int,
        grade: RiskGrade,
        label: str,
        factors: list[RiskFactor],
        parsed: ParsedRegistry,
    ) -> str:
        parts = [f"종합 안전등급 {grade.value}등급 ({label}, {score}점/100점)."]

        critical = sum(1 for f in factors if f.severity == FactorSeverity.CRITICAL)
        high = sum(1 for f in factors if f.severity == FactorSeverity.HIGH)
        if critical:
            parts.append(f"치명적 위험요소 {critical}건 발견.")
        if high:
            parts.append(f"고위험 요소 {high}건 발견.")
        if not factors:
            parts.append("특이 위험요소가 발견되지 않았습니다.")

        summary = parsed.summary
        parts.append(
            f"현행 갑구 {summary.active_gapgu_entries}건, 을구 {summary.active_eulgu_entries}건."
        )
        return " ".join(parts)
