"""갑구/을구 원문 → 등기 항목 리스트 (상태 기계)

상태:
  NO_CURRENT_ENTRY — 아직 항목이 시작되지 않음 (이 상태의 행은 버린다)
  ACCUMULATING     — EntryDraft를 누적 중

전이:
  새 항목 시작 행  = 순위번호(숫자 + 공백)로 시작하거나, 등기목적 키워드와 날짜를 함께 포함
    → 누적 중인 항목 flush 후 새 EntryDraft 생성
  그 외 행         = 계속 행
    → detail에 덧붙이고, 비어 있는 필드(날짜/권리자/금액/등기목적)를 소급 보완
    → 말소 키워드가 있으면 말소 처리 + 위험도 info 강제
  입력 끝          = 누적 중인 항목 flush

등기목적이 끝까지 OTHER인 항목은 결과에 넣지 않는다 (잡음 행).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from deungi.models.registry import (
    EncumbranceEntry,
    OwnershipEntry,
    RightType,
    RiskLevel,
)
from deungi.services.parser.classifier import classify_right_type, has_right_keyword
from deungi.services.parser.extractors import (
    extract_amount,
    extract_date,
    extract_holder,
    is_cancelled,
)

logger = logging.getLogger(__name__)

_RE_ORDER = re.compile(r"^(\d{1,9})\s")
_RE_WHITESPACE = re.compile(r"\s+")
_HEADER_TOKENS = ("순위번호", "등기목적", "접수")


class ParserState(str, Enum):
    """항목 누적 상태"""

    NO_CURRENT_ENTRY = "NO_CURRENT_ENTRY"
    ACCUMULATING = "ACCUMULATING"


@dataclass
class EntryDraft:
    """누적 중인 항목 (flush 시 불변 모델로 변환)"""

    order: int
    date: str
    purpose: RightType
    detail: str
    holder: str
    is_cancelled: bool
    risk_level: RiskLevel
    amount: int = 0

    @property
    def is_resolved(self) -> bool:
        return self.purpose != RightType.OTHER


def split_lines(raw: str) -> list[str]:
    """행 분리 + strip + 빈 행 제거"""
    return [line.strip() for line in raw.split("\n") if line.strip()]


def find_data_start(lines: list[str]) -> int:
    """표 헤더 행(순위번호/등기목적/접수 모두 포함) 다음 인덱스. 없으면 0"""
    for i, line in enumerate(lines):
        compact = _RE_WHITESPACE.sub("", line)
        if all(token in compact for token in _HEADER_TOKENS):
            return i + 1
    return 0


class EntryStateMachine:
    """섹션 하나의 행 스트림을 소비하여 항목 리스트를 만든다

    Args:
        table: 섹션별 등기목적 → 위험도 테이블
        with_amount: 을구이면 True (금액 추출)
    """

    def __init__(
        self,
        table: Mapping[RightType, RiskLevel],
        *,
        with_amount: bool = False,
    ) -> None:
        self._table = table
        self._with_amount = with_amount
        self._state = ParserState.NO_CURRENT_ENTRY
        self._draft: EntryDraft | None = None
        self._counter = 0
        self._drafts: list[EntryDraft] = []

    @property
    def state(self) -> ParserState:
        return self._state

    def feed(self, line: str) -> None:
        """행 하나 처리"""
        order_match = _RE_ORDER.match(line)
        if order_match or self._starts_entry(line):
            self._flush()
            self._start(line, int(order_match.group(1)) if order_match else None)
        elif self._state == ParserState.ACCUMULATING:
            self._continue(line)

    def finish(self) -> list[EntryDraft]:
        """입력 끝 — 남은 항목 flush 후 결과 반환"""
        self._flush()
        return list(self._drafts)

    # ──────────────────────────────────────
    # 전이
    # ──────────────────────────────────────

    def _starts_entry(self, line: str) -> bool:
        return has_right_keyword(line, self._table) and extract_date(line) != ""

    def _start(self, line: str, explicit_order: int | None) -> None:
        self._counter += 1
        purpose, risk = classify_right_type(line, self._table)
        cancelled = is_cancelled(line)
        self._draft = EntryDraft(
            order=explicit_order if explicit_order is not None else self._counter,
            date=extract_date(line),
            purpose=purpose,
            detail=line,
            holder=extract_holder(line),
            is_cancelled=cancelled,
            risk_level=RiskLevel.INFO if cancelled else risk,
            amount=extract_amount(line) if self._with_amount else 0,
        )
        self._state = ParserState.ACCUMULATING

    def _continue(self, line: str) -> None:
        draft = self._draft
        draft.detail = f"{draft.detail} {line}"

        if self._with_amount and draft.amount == 0:
            amount = extract_amount(line)
            if amount > 0:
                draft.amount = amount
        if not draft.date:
            draft.date = extract_date(line)
        if not draft.holder:
            draft.holder = extract_holder(line)
        if not draft.is_resolved:
            purpose, risk = classify_right_type(line, self._table)
            if purpose != RightType.OTHER:
                draft.purpose = purpose
                draft.risk_level = RiskLevel.INFO if draft.is_cancelled else risk
        if is_cancelled(line):
            draft.is_cancelled = True
            draft.risk_level = RiskLevel.INFO

    def _flush(self) -> None:
        if self._state == ParserState.ACCUMULATING:
            draft = self._draft
            if draft.is_resolved:
                self._drafts.append(draft)
            else:
                logger.debug("등기목적 미확인 항목 제외: %s", draft.detail[:80])
        self._draft = None
        self._state = ParserState.NO_CURRENT_ENTRY


def _run(raw: str, table: Mapping[RightType, RiskLevel], with_amount: bool) -> list[EntryDraft]:
    lines = split_lines(raw)
    machine = EntryStateMachine(table, with_amount=with_amount)
    for line in lines[find_data_start(lines):]:
        machine.feed(line)
    return machine.finish()


def parse_gapgu(raw: str, table: Mapping[RightType, RiskLevel]) -> list[OwnershipEntry]:
    """갑구 원문 → OwnershipEntry 리스트"""
    if not raw:
        return []
    return [
        OwnershipEntry(
            order=d.order,
            date=d.date,
            purpose=d.purpose,
            detail=d.detail,
            holder=d.holder,
            is_cancelled=d.is_cancelled,
            risk_level=d.risk_level,
        )
        for d in _run(raw, table, with_amount=False)
    ]


def parse_eulgu(raw: str, table: Mapping[RightType, RiskLevel]) -> list[EncumbranceEntry]:
    """을구 원문 → EncumbranceEntry 리스트"""
    if not raw:
        return []
    return [
        EncumbranceEntry(
            order=d.order,
            date=d.date,
            purpose=d.purpose,
            detail=d.detail,
            holder=d.holder,
            is_cancelled=d.is_cancelled,
            risk_level=d.risk_level,
            amount=d.amount,
        )
        for d in _run(raw, table, with_amount=True)
    ]
