"""등기부 행 텍스트 → 필드 추출 헬퍼

금액/날짜/면적/권리자/말소 여부를 정규식으로 추출한다.
모든 함수는 예외를 던지지 않는다. 추출 실패 = 중립값 (0 또는 "").
"""

import re

# 금액 패턴 (구체적인 것부터)
_RE_AMOUNT_WON = re.compile(r"금\s*([\d,]+)\s*원")            # 금 420,000,000원
_RE_AMOUNT_BARE_WON = re.compile(r"([\d,]{4,})\s*원")        # 420,000,000원
_RE_AMOUNT_EOK_MAN = re.compile(r"금\s*(\d+)\s*억\s*([\d,]*)\s*만")  # 금3억5,000만원
_RE_AMOUNT_EOK = re.compile(r"금\s*(\d+)\s*억\s*원")           # 금3억원
_RE_AMOUNT_MAN = re.compile(r"금\s*([\d,]+)\s*만\s*원")        # 금5,000만원
_RE_AMOUNT_DIGITS = re.compile(r"([\d,]{7,})")                # 숫자만 7자리 이상

_EOK = 100_000_000
_MAN = 10_000
_MAX_AMOUNT_DIGITS = 15                                       # 999조 원까지

# 날짜 패턴
_RE_DATE_KOREAN = re.compile(r"(\d{4})\s*년\s*(\d{1,2})\s*월\s*(\d{1,2})\s*일")
_RE_DATE_NUMERIC = re.compile(r"(\d{4})[.\-/](\d{1,2})[.\-/](\d{1,2})")

_RE_AREA = re.compile(r"([\d.]+)\s*㎡")

# 권리자: 법인/기관명을 개인명보다 먼저 검사 (법인명이 더 긴 패턴)
_CORP_SUFFIXES = (
    "은행|보험|저축은행|캐피탈|신용협동조합|신탁|증권|자산관리|공사|조합|재단|"
    "학교법인|종교법인|사단법인|재단법인|유한회사|합자회사|합명회사"
)
_RE_HOLDER_CORP = (
    re.compile(r"((?:주식회사|㈜)\s*[가-힣A-Za-z0-9\s]{1,30})"),
    re.compile(rf"([가-힣]+(?:{_CORP_SUFFIXES})[가-힣\s]*)"),
    re.compile(r"((?:사\)|사\(|법인)[가-힣\s]{2,20})"),
)
_RE_HOLDER_PERSON = re.compile(r"([가-힣]{2,5})\s*(?:\d{6}|[（(]|$)")

_RE_CANCELLED = re.compile(r"말소|말소기준등기|말소회복")


def _to_int(digits: str) -> int | None:
    """쉼표 포함 숫자 문자열 → int

    숫자가 없거나 금액으로 볼 수 없을 만큼 길면 None.
    """
    cleaned = digits.replace(",", "")
    if not cleaned or len(cleaned) > _MAX_AMOUNT_DIGITS:
        return None
    return int(cleaned)


def extract_amount(text: str) -> int:
    """텍스트에서 금액(원) 추출. 없으면 0.

    예: "채권최고액 금 480,000,000원" → 480000000
        "금3억5,000만원" → 350000000
    """
    if not text:
        return 0

    for pattern in (_RE_AMOUNT_WON, _RE_AMOUNT_BARE_WON):
        m = pattern.search(text)
        if m:
            value = _to_int(m.group(1))
            if value is not None:
                return value

    m = _RE_AMOUNT_EOK_MAN.search(text)
    if m:
        eok = _to_int(m.group(1))
        if eok is not None:
            man = _to_int(m.group(2)) or 0
            return eok * _EOK + man * _MAN

    m = _RE_AMOUNT_EOK.search(text)
    if m:
        eok = _to_int(m.group(1))
        if eok is not None:
            return eok * _EOK

    m = _RE_AMOUNT_MAN.search(text)
    if m:
        value = _to_int(m.group(1))
        if value is not None:
            return value * _MAN

    m = _RE_AMOUNT_DIGITS.search(text)
    if m:
        value = _to_int(m.group(1))
        if value is not None:
            return value

    return 0


def extract_date(text: str) -> str:
    """한국식/숫자식 날짜 → "YYYY.MM.DD". 없으면 "".

    달력상 유효성은 검사하지 않는다 (검증 엔진 포맷 단계의 책임).
    """
    if not text:
        return ""
    m = _RE_DATE_KOREAN.search(text) or _RE_DATE_NUMERIC.search(text)
    if not m:
        return ""
    y, mo, d = m.groups()
    return f"{y}.{int(mo):02d}.{int(d):02d}"


def extract_area(text: str) -> str:
    """면적 추출 (예: "84.97㎡")"""
    m = _RE_AREA.search(text)
    return f"{m.group(1)}㎡" if m else ""


def extract_holder(text: str) -> str:
    """권리자/소유자 이름 추출 (휴리스틱, best-effort)"""
    for pattern in _RE_HOLDER_CORP:
        m = pattern.search(text)
        if m:
            return m.group(1).strip()

    m = _RE_HOLDER_PERSON.search(text)
    if m:
        return m.group(1)
    return ""


def is_cancelled(text: str) -> bool:
    """말소 키워드 포함 여부"""
    return bool(_RE_CANCELLED.search(text))
