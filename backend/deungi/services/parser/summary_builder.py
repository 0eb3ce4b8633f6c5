"""갑구/을구 항목 → ParseSummary

현행(말소되지 않은) 항목 기준으로 건수/금액/플래그를 집계한다.
검증 엔진은 같은 값을 별도 코드(validation.recompute)로 다시 계산하므로,
이 모듈의 함수를 검증 쪽에서 가져다 쓰지 않는다.
"""

from deungi.models.registry import (
    EncumbranceEntry,
    OwnershipEntry,
    ParseSummary,
    RightType,
)

MORTGAGE_TYPES = frozenset({
    RightType.MORTGAGE,
    RightType.PLAIN_MORTGAGE,
    RightType.MORTGAGE_TRANSFER,
    RightType.MORTGAGE_MODIFICATION,
})
JEONSE_TYPES = frozenset({RightType.JEONSE, RightType.JEONSE_TRANSFER})
AUCTION_TYPES = frozenset({
    RightType.AUCTION_START,
    RightType.VOLUNTARY_AUCTION_START,
    RightType.COMPULSORY_AUCTION_START,
})
TRUST_TYPES = frozenset({RightType.TRUST, RightType.TRUST_REGISTRATION})
# 소유권이전청구권가등기도 가등기로 본다 (validation.recompute와 같은 정의)
PROVISIONAL_REGISTRATION_TYPES = frozenset({
    RightType.PROVISIONAL_REGISTRATION,
    RightType.TRANSFER_CLAIM_PROVISIONAL_REGISTRATION,
})
LEASE_TYPES = frozenset({RightType.LEASE_REGISTRATION, RightType.LEASE_RIGHT})


def _any_of(entries: list[OwnershipEntry], types: frozenset[RightType]) -> bool:
    return any(e.purpose in types for e in entries)


def build_summary(
    gapgu: list[OwnershipEntry], eulgu: list[EncumbranceEntry]
) -> ParseSummary:
    """항목 리스트 → 요약 통계"""
    active_gapgu = [e for e in gapgu if not e.is_cancelled]
    active_eulgu = [e for e in eulgu if not e.is_cancelled]

    mortgage = sum(e.amount for e in active_eulgu if e.purpose in MORTGAGE_TYPES)
    jeonse = sum(e.amount for e in active_eulgu if e.purpose in JEONSE_TYPES)

    return ParseSummary(
        total_gapgu_entries=len(gapgu),
        total_eulgu_entries=len(eulgu),
        active_gapgu_entries=len(active_gapgu),
        active_eulgu_entries=len(active_eulgu),
        cancelled_entries=(len(gapgu) - len(active_gapgu)) + (len(eulgu) - len(active_eulgu)),
        total_mortgage_amount=mortgage,
        total_jeonse_amount=jeonse,
        total_claims_amount=mortgage + jeonse,
        has_seizure=_any_of(active_gapgu, frozenset({RightType.SEIZURE})),
        has_provisional_seizure=_any_of(active_gapgu, frozenset({RightType.PROVISIONAL_SEIZURE})),
        has_provisional_disposition=_any_of(
            active_gapgu, frozenset({RightType.PROVISIONAL_DISPOSITION})
        ),
        has_auction_order=_any_of(active_gapgu, AUCTION_TYPES),
        has_trust=_any_of(active_gapgu, TRUST_TYPES),
        has_provisional_registration=_any_of(
            active_gapgu + active_eulgu, PROVISIONAL_REGISTRATION_TYPES
        ),
        has_lease_registration=_any_of(active_eulgu, LEASE_TYPES),
        has_warning_registration=_any_of(
            active_gapgu, frozenset({RightType.WARNING_REGISTRATION})
        ),
        has_redemption_registration=_any_of(active_gapgu, frozenset({RightType.REDEMPTION})),
        ownership_transfer_count=sum(
            1 for e in active_gapgu if e.purpose == RightType.OWNERSHIP_TRANSFER
        ),
    )
