"""2단계: 합계 및 산술 검증

요약 통계를 항목 리스트에서 다시 계산(recompute)하여 비교한다.
불일치는 error, 근저당비율만 부동소수 오차를 감안해 0.1 초과 차이에서 warning.
"""

from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import (
    ValidationCategory,
    ValidationIssue,
    ValidationSeverity,
)
from deungi.services.validation import recompute
from deungi.services.validation.common import CheckCounter, TierResult, won

RATIO_TOLERANCE = 0.1


def _mismatch(issue_id: str, field: str, message: str, expected, actual) -> ValidationIssue:
    return ValidationIssue(
        id=issue_id,
        category=ValidationCategory.ARITHMETIC,
        severity=ValidationSeverity.ERROR,
        field=field,
        message=message,
        expected=str(expected),
        actual=str(actual),
    )


def check_mortgage_sum(parsed: ParsedRegistry) -> list[ValidationIssue]:
    stored = parsed.summary.total_mortgage_amount
    recalculated = recompute.mortgage_sum(parsed.eulgu)
    if recalculated == stored:
        return []
    return [_mismatch(
        "ARITH_MORTGAGE_SUM", "summary.total_mortgage_amount",
        f"근저당 합계 불일치: 요약값({won(stored)}) ≠ 재계산값({won(recalculated)})",
        won(recalculated), won(stored),
    )]


def check_jeonse_sum(parsed: ParsedRegistry) -> list[ValidationIssue]:
    stored = parsed.summary.total_jeonse_amount
    recalculated = recompute.jeonse_sum(parsed.eulgu)
    if recalculated == stored:
        return []
    return [_mismatch(
        "ARITH_JEONSE_SUM", "summary.total_jeonse_amount",
        f"전세권 합계 불일치: 요약값({won(stored)}) ≠ 재계산값({won(recalculated)})",
        won(recalculated), won(stored),
    )]


def check_total_claims(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """총채권액 = 근저당 + 전세 (요약값끼리 비교)"""
    s = parsed.summary
    expected = s.total_mortgage_amount + s.total_jeonse_amount
    if s.total_claims_amount == expected:
        return []
    return [_mismatch(
        "ARITH_TOTAL_CLAIMS", "summary.total_claims_amount",
        f"총채권액 불일치: 요약값({won(s.total_claims_amount)}) ≠ "
        f"근저당({won(s.total_mortgage_amount)}) + 전세({won(s.total_jeonse_amount)})",
        won(expected), won(s.total_claims_amount),
    )]


def check_entry_counts(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """현행/전체/말소 건수"""
    s = parsed.summary
    issues: list[ValidationIssue] = []

    active_gapgu = len(recompute.active(parsed.gapgu))
    if active_gapgu != s.active_gapgu_entries:
        issues.append(_mismatch(
            "ARITH_ACTIVE_GAPGU", "summary.active_gapgu_entries",
            f"갑구 활성건수 불일치: 요약값({s.active_gapgu_entries}) ≠ 재계산값({active_gapgu})",
            active_gapgu, s.active_gapgu_entries,
        ))

    active_eulgu = len(recompute.active(parsed.eulgu))
    if active_eulgu != s.active_eulgu_entries:
        issues.append(_mismatch(
            "ARITH_ACTIVE_EULGU", "summary.active_eulgu_entries",
            f"을구 활성건수 불일치: 요약값({s.active_eulgu_entries}) ≠ 재계산값({active_eulgu})",
            active_eulgu, s.active_eulgu_entries,
        ))

    if s.total_gapgu_entries != len(parsed.gapgu):
        issues.append(_mismatch(
            "ARITH_TOTAL_GAPGU", "summary.total_gapgu_entries",
            f"갑구 전체건수 불일치: 요약값({s.total_gapgu_entries}) ≠ 배열길이({len(parsed.gapgu)})",
            len(parsed.gapgu), s.total_gapgu_entries,
        ))

    if s.total_eulgu_entries != len(parsed.eulgu):
        issues.append(_mismatch(
            "ARITH_TOTAL_EULGU", "summary.total_eulgu_entries",
            f"을구 전체건수 불일치: 요약값({s.total_eulgu_entries}) ≠ 배열길이({len(parsed.eulgu)})",
            len(parsed.eulgu), s.total_eulgu_entries,
        ))

    cancelled = recompute.cancelled_count(parsed)
    if cancelled != s.cancelled_entries:
        issues.append(_mismatch(
            "ARITH_CANCELLED_COUNT", "summary.cancelled_entries",
            f"말소건수 불일치: 요약값({s.cancelled_entries}) ≠ 재계산값({cancelled})",
            cancelled, s.cancelled_entries,
        ))

    return issues


def check_ownership_count(parsed: ParsedRegistry) -> list[ValidationIssue]:
    stored = parsed.summary.ownership_transfer_count
    recalculated = recompute.ownership_transfer_count(parsed.gapgu)
    if recalculated == stored:
        return []
    return [_mismatch(
        "ARITH_OWNERSHIP_COUNT", "summary.ownership_transfer_count",
        f"소유권이전 횟수 불일치: 요약값({stored}) ≠ 재계산값({recalculated})",
        recalculated, stored,
    )]


def check_mortgage_ratio(
    parsed: ParsedRegistry, estimated_price: int, risk_score: RiskScore
) -> list[ValidationIssue]:
    """스코어러의 근저당비율(%) vs 재계산"""
    if estimated_price <= 0:
        return []
    recalculated = parsed.summary.total_mortgage_amount / estimated_price * 100
    if abs(recalculated - risk_score.mortgage_ratio) <= RATIO_TOLERANCE:
        return []
    return [ValidationIssue(
        id="ARITH_MORTGAGE_RATIO",
        category=ValidationCategory.ARITHMETIC,
        severity=ValidationSeverity.WARNING,
        field="risk_score.mortgage_ratio",
        message=(
            f"근저당비율 불일치: 스코어링값({risk_score.mortgage_ratio:.1f}%) ≠ "
            f"재계산값({recalculated:.1f}%)"
        ),
        expected=f"{recalculated:.1f}%",
        actual=f"{risk_score.mortgage_ratio:.1f}%",
    )]


def run_arithmetic_checks(
    parsed: ParsedRegistry,
    estimated_price: int = 0,
    risk_score: RiskScore | None = None,
) -> TierResult:
    counter = CheckCounter()
    counter.run(check_mortgage_sum(parsed))
    counter.run(check_jeonse_sum(parsed))
    counter.run(check_total_claims(parsed))
    counter.run(check_entry_counts(parsed))
    counter.run(check_ownership_count(parsed))
    if estimated_price and risk_score is not None:
        counter.run(check_mortgage_ratio(parsed, estimated_price, risk_score))
    return counter.result()
