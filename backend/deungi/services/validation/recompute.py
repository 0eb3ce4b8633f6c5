"""검증용 요약 통계 재계산

파서의 summary_builder와 같은 정의를 별도 코드로 다시 계산한다.
summary_builder는 RightType 집합 멤버십으로, 이 모듈은 등기목적 용어 문자열
매칭으로 판정한다. 두 경로가 어긋나면 검증 엔진이 불일치를 보고한다.
이 모듈은 parser 패키지를 import하지 않는다.
"""

import re
from collections.abc import Sequence
from typing import NamedTuple

from deungi.models.registry import EncumbranceEntry, OwnershipEntry, ParsedRegistry

_RE_MORTGAGE = re.compile(r"근저당|저당")
_RE_JEONSE = re.compile(r"전세권")
_RE_AUCTION = re.compile(r"경매개시결정")
_RE_TRUST = re.compile(r"신탁")
_RE_LEASE = re.compile(r"임차권등기|임차권설정")
_RE_REDEMPTION = re.compile(r"환매")

# 정확히 "가등기"만이 아니라 소유권이전청구권가등기도 포함
_PROVISIONAL_REGISTRATION_TERMS = ("가등기", "소유권이전청구권가등기")


class FlagCheck(NamedTuple):
    """요약 플래그 재계산 결과"""

    flag: str          # ParseSummary 필드명
    label: str         # 한글 표시명
    expected: bool     # 항목 기반 재계산 값


def term(entry: OwnershipEntry) -> str:
    """등기목적 용어 문자열"""
    return getattr(entry.purpose, "value", entry.purpose)


def active(entries: Sequence[OwnershipEntry]) -> list[OwnershipEntry]:
    return [e for e in entries if not e.is_cancelled]


def mortgage_sum(eulgu: Sequence[EncumbranceEntry]) -> int:
    return sum(e.amount for e in active(eulgu) if _RE_MORTGAGE.search(term(e)))


def jeonse_sum(eulgu: Sequence[EncumbranceEntry]) -> int:
    return sum(e.amount for e in active(eulgu) if _RE_JEONSE.search(term(e)))


def ownership_transfer_count(gapgu: Sequence[OwnershipEntry]) -> int:
    return sum(1 for e in active(gapgu) if term(e) == "소유권이전")


def cancelled_count(parsed: ParsedRegistry) -> int:
    return sum(1 for e in [*parsed.gapgu, *parsed.eulgu] if e.is_cancelled)


def is_mortgage(entry: OwnershipEntry) -> bool:
    return bool(_RE_MORTGAGE.search(term(entry)))


def is_ownership(entry: OwnershipEntry) -> bool:
    return term(entry) in ("소유권이전", "소유권보존")


def flag_checks(parsed: ParsedRegistry) -> list[FlagCheck]:
    """9개 요약 플래그를 항목 리스트에서 다시 판정"""
    gapgu_terms = [term(e) for e in active(parsed.gapgu)]
    eulgu_terms = [term(e) for e in active(parsed.eulgu)]

    return [
        FlagCheck("has_seizure", "압류", "압류" in gapgu_terms),
        FlagCheck("has_provisional_seizure", "가압류", "가압류" in gapgu_terms),
        FlagCheck("has_provisional_disposition", "가처분", "가처분" in gapgu_terms),
        FlagCheck(
            "has_auction_order", "경매개시결정",
            any(_RE_AUCTION.search(t) for t in gapgu_terms),
        ),
        FlagCheck("has_trust", "신탁", any(_RE_TRUST.search(t) for t in gapgu_terms)),
        FlagCheck(
            "has_provisional_registration", "가등기",
            any(t in _PROVISIONAL_REGISTRATION_TERMS for t in gapgu_terms + eulgu_terms),
        ),
        FlagCheck(
            "has_lease_registration", "임차권등기",
            any(_RE_LEASE.search(t) for t in eulgu_terms),
        ),
        FlagCheck("has_warning_registration", "예고등기", "예고등기" in gapgu_terms),
        FlagCheck(
            "has_redemption_registration", "환매등기",
            any(_RE_REDEMPTION.search(t) for t in gapgu_terms),
        ),
    ]
