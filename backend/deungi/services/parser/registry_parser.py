"""등기부등본 텍스트 → ParsedRegistry 파싱

등기부등본 텍스트를 표제부/갑구/을구로 분리하고,
각 섹션에서 등기 항목을 추출하여 ParsedRegistry를 생성한다.

파싱 전략:
- 행 기반 텍스트 파싱 (표 파싱 라이브러리 사용 금지)
- 순위번호 또는 (등기목적 키워드 + 날짜)를 항목 경계로 사용
- 정규식으로 필드 추출
- raw_text 반드시 보존
- 예외 없음: 인식 불가 입력은 빈 섹션 + 0/False 요약
"""

import logging

from deungi.models.registry import ParsedRegistry
from deungi.services.parser.entry_parser import parse_eulgu, parse_gapgu
from deungi.services.parser.right_tables import EULGU_RISK_TABLE, GAPGU_RISK_TABLE
from deungi.services.parser.sections import split_sections
from deungi.services.parser.summary_builder import build_summary
from deungi.services.parser.title_parser import parse_title

logger = logging.getLogger(__name__)


class RegistryParser:
    """등기부등본 텍스트 → ParsedRegistry (상태 없음, 인스턴스 공유 가능)"""

    def parse_text(self, text: str) -> ParsedRegistry:
        """텍스트 → ParsedRegistry"""
        text = text or ""

        # 1. 섹션 분리
        sections = split_sections(text)
        if text.strip() and not sections.gapgu:
            logger.warning("갑구 섹션을 찾을 수 없습니다 (길이 %d)", len(text))

        # 2. 표제부
        title = parse_title(sections.title)

        # 3. 갑구 / 을구
        gapgu = parse_gapgu(sections.gapgu, GAPGU_RISK_TABLE)
        eulgu = parse_eulgu(sections.eulgu, EULGU_RISK_TABLE)

        # 4. 요약
        summary = build_summary(gapgu, eulgu)

        logger.debug(
            "등기부 파싱: 갑구 %d건(현행 %d), 을구 %d건(현행 %d)",
            summary.total_gapgu_entries,
            summary.active_gapgu_entries,
            summary.total_eulgu_entries,
            summary.active_eulgu_entries,
        )

        return ParsedRegistry(
            title=title,
            gapgu=gapgu,
            eulgu=eulgu,
            summary=summary,
            raw_text=text,
        )
