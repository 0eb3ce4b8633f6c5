"""검증 단계 공용 타입"""

from typing import NamedTuple

from deungi.models.validation import ValidationIssue


class TierResult(NamedTuple):
    """단계별 결과: 수행한 체크 수 + 발견한 이슈"""

    checks: int
    issues: list[ValidationIssue]


class CheckCounter:
    """체크 1회 = total_checks 1 증가 (이슈 개수와 무관)"""

    def __init__(self) -> None:
        self.checks = 0
        self.issues: list[ValidationIssue] = []

    def run(self, found: list[ValidationIssue] | ValidationIssue | None) -> None:
        self.checks += 1
        if found is None:
            return
        if isinstance(found, ValidationIssue):
            self.issues.append(found)
        else:
            self.issues.extend(found)

    def result(self) -> TierResult:
        return TierResult(self.checks, self.issues)


def won(amount: int) -> str:
    """1,234,567 형식"""
    return f"{amount:,}"


def eok(amount: int, digits: int = 1) -> str:
    """억 단위 소수 표기"""
    return f"{amount / 100_000_000:.{digits}f}"
