"""등기부등본 텍스트 → 표제부/갑구/을구 원문 분리

섹션 헤더는 3단계 패턴으로 찾는다 (앞 단계가 문서 어디서든 매칭되면 채택):
  1. 전각 괄호   【 갑 구 】
  2. ASCII 괄호  [ 갑 구 ]
  3. 괄호 없는 텍스트  갑구
헤더가 없으면 해당 섹션은 빈 문자열 (오류 아님).
"""

import re
from typing import NamedTuple

from deungi.models.registry import SectionType


class RawSections(NamedTuple):
    """섹션별 원문"""

    title: str
    gapgu: str
    eulgu: str


def _header_patterns(*syllables: str) -> tuple[re.Pattern, ...]:
    body = r"\s*".join(syllables)
    return (
        re.compile(rf"【\s*{body}\s*】"),
        re.compile(rf"\[\s*{body}\s*\]"),
        re.compile(body),
    )


_HEADER_PATTERNS: dict[SectionType, tuple[re.Pattern, ...]] = {
    SectionType.TITLE: _header_patterns("표", "제", "부"),
    SectionType.GAPGU: _header_patterns("갑", "구"),
    SectionType.EULGU: _header_patterns("을", "구"),
}


def _find_header(text: str, section: SectionType) -> int:
    """첫 번째로 매칭되는 단계의 위치 (없으면 -1)"""
    for pattern in _HEADER_PATTERNS[section]:
        m = pattern.search(text)
        if m:
            return m.start()
    return -1


def _section_end(start: int, others: list[int], length: int) -> int:
    """start 이후에 오는 가장 가까운 다른 헤더 위치 (없으면 문서 끝)"""
    later = [pos for pos in others if pos > start]
    return min(later) if later else length


def normalize_text(text: str) -> str:
    """줄바꿈/탭 정규화"""
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")


def split_sections(text: str) -> RawSections:
    """텍스트를 표제부/갑구/을구 원문으로 분리"""
    if not text:
        return RawSections("", "", "")

    normalized = normalize_text(text)
    length = len(normalized)

    title_idx = _find_header(normalized, SectionType.TITLE)
    gapgu_idx = _find_header(normalized, SectionType.GAPGU)
    eulgu_idx = _find_header(normalized, SectionType.EULGU)

    title = ""
    if title_idx != -1:
        end = _section_end(title_idx, [gapgu_idx, eulgu_idx], length)
        title = normalized[title_idx:end]

    gapgu = ""
    if gapgu_idx != -1:
        end = _section_end(gapgu_idx, [eulgu_idx], length)
        gapgu = normalized[gapgu_idx:end]

    eulgu = normalized[eulgu_idx:] if eulgu_idx != -1 else ""

    return RawSections(title=title, gapgu=gapgu, eulgu=eulgu)
