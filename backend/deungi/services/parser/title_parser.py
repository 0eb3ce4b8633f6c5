"""표제부 원문 → TitleSection

행 단위 best-effort 추출. 행 순서와 무관하게 필드마다 처음 찾은 값을 사용하고,
매칭되지 않는 행은 무시한다.
"""

import re

from deungi.models.registry import TitleSection
from deungi.services.parser.extractors import extract_area

_RE_ADDRESS_HINT = re.compile(r"소재지|[가-힣]+[시도]\s*[가-힣]+[시군구]")
_RE_ADDRESS = re.compile(
    r"([가-힣]+(?:시|도)\s+[가-힣]+(?:시|군|구)[\s가-힣\d\-호동층]*)"
)
_RE_STRUCTURE = re.compile(
    r"((?:철근콘크리트|철골철근콘크리트|철골|벽돌|목조|경량철골|조적)[가-힣\s]*조)"
)
_RE_PURPOSE = re.compile(
    r"(아파트|다세대주택|다가구주택|단독주택|오피스텔|제[12]종근린생활시설|업무시설|공동주택)"
)
_RE_LAND_RIGHT_HINT = re.compile(r"대지권\s*비율")
_RE_LAND_RIGHT_RATIO = re.compile(r"([\d.]+분의\s*[\d.]+|[\d.]+/[\d.]+)")
_RE_LEADING_ORDER = re.compile(r"^(?:\d+\s+|\|\s*)+")
_RE_SPACES = re.compile(r"\s+")


def parse_title(raw: str) -> TitleSection:
    """표제부 텍스트 → TitleSection (실패 필드는 빈 문자열)"""
    if not raw:
        return TitleSection()

    fields: dict[str, str] = {
        "address": "",
        "building_detail": "",
        "area": "",
        "structure": "",
        "purpose": "",
        "land_right_ratio": "",
    }

    for line in (ln.strip() for ln in raw.split("\n")):
        if not line:
            continue

        if not fields["address"] and _RE_ADDRESS_HINT.search(line):
            m = _RE_ADDRESS.search(line)
            if m:
                fields["address"] = _RE_SPACES.sub(" ", m.group(1)).strip()

        if not fields["area"]:
            fields["area"] = extract_area(line)

        if not fields["structure"]:
            m = _RE_STRUCTURE.search(line)
            if m:
                fields["structure"] = m.group(1).strip()

        if not fields["purpose"]:
            m = _RE_PURPOSE.search(line)
            if m:
                fields["purpose"] = m.group(1)

        if not fields["land_right_ratio"] and _RE_LAND_RIGHT_HINT.search(line):
            m = _RE_LAND_RIGHT_RATIO.search(line)
            if m:
                fields["land_right_ratio"] = m.group(1)

        # 건물내역: 면적이 포함된 첫 행
        if not fields["building_detail"] and "㎡" in line:
            fields["building_detail"] = _RE_LEADING_ORDER.sub("", line).strip()

    return TitleSection(**fields)
