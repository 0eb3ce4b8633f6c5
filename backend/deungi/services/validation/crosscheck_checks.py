"""4단계: 크로스체크 검증

- 요약 플래그 9개 vs 항목 기반 재판정
- 리스크 점수 요인 vs 요약 플래그, 감점 합계, 점수 공식
- 시세 추정치 합리성
- 자문 의견(advisory text) 관련성 (소프트 체크, info)
"""

from typing import NamedTuple

from deungi.models.registry import ParsedRegistry
from deungi.models.scores import RiskScore
from deungi.models.validation import (
    ValidationCategory,
    ValidationIssue,
    ValidationSeverity,
)
from deungi.services.validation import recompute
from deungi.services.validation.common import CheckCounter, TierResult, eok, won

MIN_REASONABLE_PRICE = 50_000_000          # 5천만원
MAX_REASONABLE_PRICE = 50_000_000_000      # 500억원
MIN_ADVISORY_LENGTH = 10


class FactorFlag(NamedTuple):
    factor_id: str
    flag: str
    label: str


# 리스크 요인 id ↔ 요약 플래그
FACTOR_FLAGS: tuple[FactorFlag, ...] = (
    FactorFlag("seizure", "has_seizure", "압류"),
    FactorFlag("provisional_seizure", "has_provisional_seizure", "가압류"),
    FactorFlag("disposition", "has_provisional_disposition", "가처분"),
    FactorFlag("auction", "has_auction_order", "경매"),
    FactorFlag("trust", "has_trust", "신탁"),
    FactorFlag("provisional_reg", "has_provisional_registration", "가등기"),
    FactorFlag("lease_registration", "has_lease_registration", "임차권등기"),
    FactorFlag("warning_reg", "has_warning_registration", "예고등기"),
    FactorFlag("redemption", "has_redemption_registration", "환매등기"),
)


class AdvisoryCheck(NamedTuple):
    name: str                    # 이슈 id 접미사
    flag: str
    keywords: tuple[str, ...]
    label: str


# 자문 의견에서 반드시 언급되어야 할 치명 플래그
ADVISORY_CHECKS: tuple[AdvisoryCheck, ...] = (
    AdvisoryCheck("SEIZURE", "has_seizure", ("압류",), "압류"),
    AdvisoryCheck("AUCTION", "has_auction_order", ("경매",), "경매"),
    AdvisoryCheck("TRUST", "has_trust", ("신탁",), "신탁"),
    AdvisoryCheck(
        "LEASE_REGISTRATION", "has_lease_registration", ("임차권", "임차권등기"), "임차권등기",
    ),
)


def _issue(issue_id, severity, field, message, expected=None, actual=None) -> ValidationIssue:
    return ValidationIssue(
        id=issue_id,
        category=ValidationCategory.CROSSCHECK,
        severity=severity,
        field=field,
        message=message,
        expected=expected,
        actual=actual,
    )


def _bool(value: bool) -> str:
    return "true" if value else "false"


def check_summary_flags(parsed: ParsedRegistry) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for check in recompute.flag_checks(parsed):
        stored = getattr(parsed.summary, check.flag)
        if stored != check.expected:
            issues.append(_issue(
                f"XCHK_FLAG_{check.flag.upper()}", ValidationSeverity.ERROR,
                f"summary.{check.flag}",
                f"{check.label} 플래그 불일치: 요약값({_bool(stored)}) ≠ "
                f"실제 엔트리 기반({_bool(check.expected)})",
                _bool(check.expected), _bool(stored),
            ))
    return issues


def check_price_sanity(estimated_price: int) -> list[ValidationIssue]:
    """시세 추정치 범위 (0 이하면 검사 생략)"""
    if estimated_price <= 0:
        return []
    if estimated_price < MIN_REASONABLE_PRICE:
        return [_issue(
            "XCHK_PRICE_SANITY", ValidationSeverity.ERROR, "estimated_price",
            f"추정가격({won(estimated_price // 10_000)}만원)이 한국 부동산으로서 비정상적으로 낮습니다.",
            f"{eok(MIN_REASONABLE_PRICE)}억원 이상", f"{eok(estimated_price, 2)}억원",
        )]
    if estimated_price > MAX_REASONABLE_PRICE:
        return [_issue(
            "XCHK_PRICE_SANITY", ValidationSeverity.WARNING, "estimated_price",
            f"추정가격({eok(estimated_price, 0)}억원)이 비정상적으로 높습니다.",
            f"{eok(MAX_REASONABLE_PRICE, 0)}억원 이하", f"{eok(estimated_price, 0)}억원",
        )]
    return []


def check_risk_score(parsed: ParsedRegistry, risk_score: RiskScore) -> list[ValidationIssue]:
    """요인 ↔ 플래그, 감점 합계, 점수 공식"""
    issues: list[ValidationIssue] = []
    factor_ids = {f.id for f in risk_score.factors}

    for item in FACTOR_FLAGS:
        has_factor = item.factor_id in factor_ids
        has_flag = bool(getattr(parsed.summary, item.flag))

        if has_factor and not has_flag:
            issues.append(_issue(
                f"XCHK_FACTOR_{item.factor_id.upper()}", ValidationSeverity.ERROR,
                f"risk_score.factors.{item.factor_id}",
                f"{item.label} 리스크 팩터가 존재하지만 파싱 요약에서는 false입니다.",
                f"summary.{item.flag} == true", "false",
            ))
        if has_flag and not has_factor:
            issues.append(_issue(
                f"XCHK_MISSING_FACTOR_{item.factor_id.upper()}", ValidationSeverity.INFO,
                "risk_score.factors",
                f"{item.label}이(가) 파싱에서 감지되었으나 리스크 팩터에 포함되지 않았습니다.",
            ))

    deduction = sum(f.deduction for f in risk_score.factors)
    if deduction != risk_score.total_deduction:
        issues.append(_issue(
            "XCHK_DEDUCTION_SUM", ValidationSeverity.ERROR, "risk_score.total_deduction",
            f"총감점 불일치: 기록값({risk_score.total_deduction}) ≠ 팩터합산({deduction})",
            str(deduction), str(risk_score.total_deduction),
        ))

    expected_score = max(0, 100 - risk_score.total_deduction)
    if risk_score.total_score != expected_score:
        issues.append(_issue(
            "XCHK_SCORE_CALC", ValidationSeverity.ERROR, "risk_score.total_score",
            f"점수 계산 불일치: 기록값({risk_score.total_score}) ≠ "
            f"max(0, 100-{risk_score.total_deduction})={expected_score}",
            str(expected_score), str(risk_score.total_score),
        ))

    return issues


def check_advisory_relevance(parsed: ParsedRegistry, advisory_text: str) -> list[ValidationIssue]:
    """치명 플래그가 켜져 있는데 자문 의견이 해당 키워드를 언급하지 않음"""
    if len(advisory_text) < MIN_ADVISORY_LENGTH:
        return []
    issues: list[ValidationIssue] = []
    for check in ADVISORY_CHECKS:
        if not getattr(parsed.summary, check.flag):
            continue
        if any(kw in advisory_text for kw in check.keywords):
            continue
        issues.append(_issue(
            f"XCHK_ADVISORY_MISSING_{check.name}", ValidationSeverity.INFO, "advisory_text",
            f"자문 의견에서 '{check.label}' 관련 위험이 언급되지 않았습니다. (감지됨: {check.label})",
        ))
    return issues


def run_crosscheck_checks(
    parsed: ParsedRegistry,
    estimated_price: int = 0,
    risk_score: RiskScore | None = None,
    advisory_text: str = "",
) -> TierResult:
    counter = CheckCounter()
    counter.run(check_summary_flags(parsed))
    if estimated_price:
        counter.run(check_price_sanity(estimated_price))
    if risk_score is not None:
        counter.run(check_risk_score(parsed, risk_score))
    if advisory_text:
        counter.run(check_advisory_relevance(parsed, advisory_text))
    return counter.result()
