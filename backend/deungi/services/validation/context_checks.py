"""3단계: 문맥 및 규칙 검증

등기부 구조상 있어야 할 관계(시간순, 말소 원본, 소유권 체인)를 확인한다.
"""

import re
from collections.abc import Sequence

from deungi.models.registry import OwnershipEntry, ParsedRegistry
from deungi.models.validation import (
    ValidationCategory,
    ValidationIssue,
    ValidationSeverity,
)
from deungi.services.validation import recompute
from deungi.services.validation.common import CheckCounter, TierResult

_RE_CANCEL_REF = re.compile(r"(?<!\d)(\d{1,9})번[가-힣]*말소")
_DATE_LENGTH = len("YYYY.MM.DD")


def _issue(issue_id, severity, field, message, expected=None, actual=None) -> ValidationIssue:
    return ValidationIssue(
        id=issue_id,
        category=ValidationCategory.CONTEXT,
        severity=severity,
        field=field,
        message=message,
        expected=expected,
        actual=actual,
    )


def check_chronological(entries: Sequence[OwnershipEntry], section: str) -> list[ValidationIssue]:
    """날짜가 있는 항목끼리 접수일 비내림차순 (같은 날 허용)"""
    dated = [e for e in entries if e.date and len(e.date) == _DATE_LENGTH]
    issues: list[ValidationIssue] = []
    for prev, cur in zip(dated, dated[1:]):
        if cur.date < prev.date:
            issues.append(_issue(
                "CTX_CHRONOLOGICAL", ValidationSeverity.WARNING,
                f"{section}[{cur.order}].date",
                f"{section} {cur.order}번 항목({cur.date})이 이전 항목({prev.date})보다 앞선 날짜입니다.",
                f"{prev.date} 이후", cur.date,
            ))
    return issues


def check_cancellation_refs(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """말소 행의 "N번…말소" 참조 대상 존재 여부

    을구는 을구 안에서만 찾고(warning), 갑구는 갑구/을구 어느 쪽이든 허용(info).
    """
    issues: list[ValidationIssue] = []
    eulgu_orders = {e.order for e in parsed.eulgu}
    gapgu_orders = {e.order for e in parsed.gapgu}

    for entry in parsed.eulgu:
        if not (entry.is_cancelled and entry.detail):
            continue
        m = _RE_CANCEL_REF.search(entry.detail)
        if m and int(m.group(1)) not in eulgu_orders:
            ref = int(m.group(1))
            issues.append(_issue(
                "CTX_CANCEL_NO_ORIGINAL", ValidationSeverity.WARNING, f"을구[{entry.order}]",
                f"을구 {entry.order}번 말소등기가 참조하는 {ref}번 원본 항목을 찾을 수 없습니다.",
                f"을구 {ref}번 항목 존재", "미발견",
            ))

    for entry in parsed.gapgu:
        if not (entry.is_cancelled and entry.detail):
            continue
        m = _RE_CANCEL_REF.search(entry.detail)
        if m and int(m.group(1)) not in gapgu_orders | eulgu_orders:
            ref = int(m.group(1))
            issues.append(_issue(
                "CTX_CANCEL_NO_ORIGINAL", ValidationSeverity.INFO, f"갑구[{entry.order}]",
                f"갑구 {entry.order}번 말소등기가 참조하는 {ref}번 원본을 찾을 수 없습니다.",
            ))

    return issues


def check_owner_exists(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """갑구 항목이 있으면 현행 소유권(보존/이전)이 하나 이상"""
    if not parsed.gapgu:
        return []
    if any(recompute.is_ownership(e) for e in recompute.active(parsed.gapgu)):
        return []
    return [_issue(
        "CTX_NO_OWNER", ValidationSeverity.ERROR, "gapgu",
        "활성 소유권(보존/이전) 항목이 없습니다. 현재 소유자를 확인할 수 없습니다.",
    )]


def _active_dated_mortgages(parsed: ParsedRegistry) -> list[OwnershipEntry]:
    return [e for e in recompute.active(parsed.eulgu) if recompute.is_mortgage(e) and e.date]


def check_mortgage_after_seizure(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """가장 이른 현행 압류/가압류 이후 설정된 근저당"""
    seizure_dates = sorted(
        e.date for e in recompute.active(parsed.gapgu)
        if recompute.term(e) in ("압류", "가압류") and e.date
    )
    if not seizure_dates:
        return []
    earliest = seizure_dates[0]

    return [
        _issue(
            "CTX_MORTGAGE_AFTER_SEIZURE", ValidationSeverity.WARNING, f"을구[{m.order}]",
            f"을구 {m.order}번 근저당({m.date})이 압류({earliest}) 이후에 설정되었습니다. "
            "비정상적 거래 패턴입니다.",
            f"압류({earliest}) 이전", m.date,
        )
        for m in _active_dated_mortgages(parsed)
        if m.date > earliest
    ]


def check_trust_mortgage_conflict(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """첫 현행 신탁 이후 설정된 근저당 (수탁자 동의 필요)"""
    trusts = [
        e for e in recompute.active(parsed.gapgu)
        if "신탁" in recompute.term(e) and e.date
    ]
    if not trusts:
        return []
    trust_date = trusts[0].date

    return [
        _issue(
            "CTX_TRUST_MORTGAGE_CONFLICT", ValidationSeverity.WARNING, f"을구[{m.order}]",
            f"을구 {m.order}번 근저당({m.date})이 신탁등기({trust_date}) 이후에 설정되었습니다. "
            "수탁자 동의 여부를 확인하세요.",
            "신탁 이전 또는 수탁자 동의", f"신탁({trust_date}) 후 근저당({m.date})",
        )
        for m in _active_dated_mortgages(parsed)
        if m.date > trust_date
    ]


def check_first_entry(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """갑구 첫 항목은 소유권보존 또는 소유권이전"""
    if not parsed.gapgu:
        return []
    first = parsed.gapgu[0]
    if recompute.is_ownership(first):
        return []
    purpose = recompute.term(first)
    return [_issue(
        "CTX_FIRST_ENTRY", ValidationSeverity.WARNING, "갑구[1]",
        f"갑구 1번 항목이 '{purpose}'입니다. 일반적으로 '소유권보존' 또는 '소유권이전'이어야 합니다.",
        "소유권보존 또는 소유권이전", purpose,
    )]


def check_eulgu_without_owner(parsed: ParsedRegistry) -> list[ValidationIssue]:
    """을구 항목이 있는데 현행 소유권이 없음"""
    if not parsed.eulgu:
        return []
    if any(recompute.is_ownership(e) for e in recompute.active(parsed.gapgu)):
        return []
    return [_issue(
        "CTX_EULGU_NO_OWNER", ValidationSeverity.ERROR, "을구",
        "활성 소유권 항목이 없는데 을구(권리) 항목이 존재합니다. 등기부 구조가 비정상적입니다.",
    )]


def run_context_checks(parsed: ParsedRegistry) -> TierResult:
    counter = CheckCounter()
    counter.run(check_chronological(parsed.gapgu, "갑구"))
    counter.run(check_chronological(parsed.eulgu, "을구"))
    counter.run(check_cancellation_refs(parsed))
    counter.run(check_owner_exists(parsed))
    counter.run(check_mortgage_after_seizure(parsed))
    counter.run(check_trust_mortgage_conflict(parsed))
    counter.run(check_first_entry(parsed))
    counter.run(check_eulgu_without_owner(parsed))
    return counter.result()
