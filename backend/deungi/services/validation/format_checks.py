"""1단계: 포맷 및 타입 검증

항목별 날짜/금액/권리자/위험도, 섹션별 순위번호, 섹션 완전성.
금액 0은 "미기재"로 간주하여 통과시킨다.
"""

import re

from deungi.models.registry import ParsedRegistry, RiskLevel
from deungi.models.validation import (
    ValidationCategory,
    ValidationIssue,
    ValidationSeverity,
)
from deungi.services.validation.common import CheckCounter, TierResult, eok, won

MIN_DATE_YEAR = 1900
MAX_DATE_YEAR = 2035
MIN_REASONABLE_AMOUNT = 1_000_000          # 100만원
MAX_REASONABLE_AMOUNT = 50_000_000_000     # 500억원
MIN_HOLDER_LENGTH = 2
MAX_HOLDER_LENGTH = 30

_RE_DATE = re.compile(r"^(\d{4})\.(\d{2})\.(\d{2})$")
_VALID_RISK_LEVELS = tuple(level.value for level in RiskLevel)

_ERROR = ValidationSeverity.ERROR
_WARNING = ValidationSeverity.WARNING
_INFO = ValidationSeverity.INFO


def _issue(issue_id, severity, field, message, expected=None, actual=None) -> ValidationIssue:
    return ValidationIssue(
        id=issue_id,
        category=ValidationCategory.FORMAT,
        severity=severity,
        field=field,
        message=message,
        expected=expected,
        actual=actual,
    )


def check_date(date: str, field: str) -> ValidationIssue | None:
    """YYYY.MM.DD + 연/월/일 범위 (달력 유효성은 보지 않는다)"""
    if not date:
        return _issue(
            "FMT_DATE_EMPTY", _WARNING, field,
            f"{field}: 날짜가 비어 있습니다.", "YYYY.MM.DD 형식", "(빈 값)",
        )

    m = _RE_DATE.match(date)
    if not m:
        return _issue(
            "FMT_DATE_PATTERN", _ERROR, field,
            f"{field}: 날짜 형식이 올바르지 않습니다.", "YYYY.MM.DD", date,
        )

    year, month, day = (int(g) for g in m.groups())
    if not MIN_DATE_YEAR <= year <= MAX_DATE_YEAR:
        return _issue(
            "FMT_DATE_YEAR", _ERROR, field,
            f"{field}: 연도({year})가 합리적 범위({MIN_DATE_YEAR}~{MAX_DATE_YEAR}) 밖입니다.",
            f"{MIN_DATE_YEAR}~{MAX_DATE_YEAR}", str(year),
        )
    if not 1 <= month <= 12:
        return _issue(
            "FMT_DATE_MONTH", _ERROR, field,
            f"{field}: 월({month})이 유효하지 않습니다.", "01~12", str(month),
        )
    if not 1 <= day <= 31:
        return _issue(
            "FMT_DATE_DAY", _ERROR, field,
            f"{field}: 일({day})이 유효하지 않습니다.", "01~31", str(day),
        )
    return None


def check_amount(amount: int, field: str) -> ValidationIssue | None:
    """금액 범위 (0 = 미기재, 통과)"""
    if amount == 0:
        return None
    if amount < 0:
        return _issue(
            "FMT_AMOUNT_NEGATIVE", _ERROR, field,
            f"{field}: 금액이 음수({won(amount)}원)입니다.", "0 이상", str(amount),
        )
    if amount < MIN_REASONABLE_AMOUNT:
        return _issue(
            "FMT_AMOUNT_TOO_LOW", _WARNING, field,
            f"{field}: 금액({won(amount)}원)이 부동산 등기로서 비정상적으로 낮습니다.",
            f"{won(MIN_REASONABLE_AMOUNT)}원 이상", f"{won(amount)}원",
        )
    if amount > MAX_REASONABLE_AMOUNT:
        return _issue(
            "FMT_AMOUNT_TOO_HIGH", _WARNING, field,
            f"{field}: 금액({eok(amount)}억원)이 비정상적으로 높습니다.",
            f"{eok(MAX_REASONABLE_AMOUNT, 0)}억원 이하", f"{eok(amount)}억원",
        )
    return None


def check_holder(holder: str, field: str) -> ValidationIssue | None:
    """권리자명 길이"""
    if not holder:
        return _issue(
            "FMT_HOLDER_EMPTY", _INFO, field, f"{field}: 권리자명이 추출되지 않았습니다.",
        )
    if len(holder) < MIN_HOLDER_LENGTH:
        return _issue(
            "FMT_HOLDER_SHORT", _WARNING, field,
            f"{field}: 권리자명({holder})이 너무 짧습니다.",
            f"{MIN_HOLDER_LENGTH}자 이상", f"{len(holder)}자",
        )
    if len(holder) > MAX_HOLDER_LENGTH:
        return _issue(
            "FMT_HOLDER_LONG", _WARNING, field,
            f"{field}: 권리자명이 비정상적으로 깁니다 ({len(holder)}자).",
            f"{MAX_HOLDER_LENGTH}자 이내", f"{len(holder)}자",
        )
    return None


def check_risk_level(level, field: str) -> ValidationIssue | None:
    """위험도 열거값 멤버십 (model_construct로 만든 객체도 검사 대상)"""
    value = getattr(level, "value", level)
    if value in _VALID_RISK_LEVELS:
        return None
    return _issue(
        "FMT_RISKTYPE_INVALID", _ERROR, field,
        f"{field}: 위험유형({value})이 유효하지 않습니다.",
        " | ".join(_VALID_RISK_LEVELS), str(value),
    )


def check_orders(orders: list[int], section: str) -> list[ValidationIssue]:
    """순위번호 중복(warning) / 0 이하(error)"""
    issues: list[ValidationIssue] = []
    field = f"{section}.order"

    seen: set[int] = set()
    for order in orders:
        if order in seen:
            issues.append(_issue(
                "FMT_ORDER_DUPLICATE", _WARNING, field,
                f"{section}: 순위번호 {order}이(가) 중복됩니다.",
                "고유한 순위번호", f"{order} (중복)",
            ))
        seen.add(order)

    for order in orders:
        if order <= 0:
            issues.append(_issue(
                "FMT_ORDER_INVALID", _ERROR, field,
                f"{section}: 순위번호({order})가 유효하지 않습니다.",
                "1 이상 양수", str(order),
            ))
    return issues


def check_sections(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """표제부 주소 / 갑구 존재"""
    issues: list[ValidationIssue] = []
    if not parsed.title.address.strip():
        issues.append(_issue(
            "FMT_SECTION_NO_ADDRESS", _WARNING, "title.address",
            "표제부에서 소재지 주소를 추출하지 못했습니다.",
        ))
    if not parsed.gapgu:
        issues.append(_issue(
            "FMT_SECTION_NO_GAPGU", _WARNING, "gapgu",
            "갑구(소유권) 항목이 없습니다. 파싱이 실패했을 수 있습니다.",
        ))
    return issues


def run_format_checks(parsed: ParsedRegistry) -> TierResult:
    """갑구 항목당 3회, 을구 항목당 4회, 순위번호 2회, 섹션 1회"""
    counter = CheckCounter()

    for entry in parsed.gapgu:
        prefix = f"갑구[{entry.order}]"
        counter.run(check_date(entry.date, f"{prefix}.date"))
        counter.run(check_holder(entry.holder, f"{prefix}.holder"))
        counter.run(check_risk_level(entry.risk_level, f"{prefix}.risk_level"))

    for entry in parsed.eulgu:
        prefix = f"을구[{entry.order}]"
        counter.run(check_date(entry.date, f"{prefix}.date"))
        counter.run(check_amount(entry.amount, f"{prefix}.amount"))
        counter.run(check_holder(entry.holder, f"{prefix}.holder"))
        counter.run(check_risk_level(entry.risk_level, f"{prefix}.risk_level"))

    counter.run(check_orders([e.order for e in parsed.gapgu], "갑구"))
    counter.run(check_orders([e.order for e in parsed.eulgu], "을구"))
    counter.run(check_sections(parsed))

    return counter.result()
