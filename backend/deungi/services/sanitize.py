"""입력 텍스트 살균

붙여넣기/업로드된 등기부 텍스트에서 HTML 마크업과 스크립트 패턴을 제거하고
길이를 제한한다. 파서에 넘기기 전 단계.
"""

import re

from deungi.config import settings

_RE_SCRIPT = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_RE_STYLE = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_RE_DANGEROUS_TAG = re.compile(
    r"</?(?:iframe|object|embed|form|input|button|select|textarea)\b[^>]*>", re.IGNORECASE
)
_RE_TAG = re.compile(r"<[^>]+>")
_RE_JS_PROTOCOL = re.compile(r"javascript\s*:", re.IGNORECASE)
_RE_EVENT_HANDLER = re.compile(r"""\bon\w+\s*=\s*["'][^"']*["']""", re.IGNORECASE)

# 기본 엔티티만 디코딩
_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#x27;", "'"),
)


def strip_html(text: str) -> str:
    """HTML 태그/스크립트/이벤트 핸들러 제거"""
    if not text:
        return ""

    text = _RE_SCRIPT.sub("", text)
    text = _RE_STYLE.sub("", text)
    text = _RE_DANGEROUS_TAG.sub("", text)
    text = _RE_TAG.sub("", text)
    text = _RE_JS_PROTOCOL.sub("", text)
    text = _RE_EVENT_HANDLER.sub("", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)

    # 디코딩으로 되살아난 태그 제거
    return _RE_TAG.sub("", text)


def truncate_input(text: str, max_len: int | None = None) -> str:
    """최대 길이 제한 (기본값: settings.MAX_INPUT_LENGTH)"""
    if not text:
        return ""
    limit = settings.MAX_INPUT_LENGTH if max_len is None else max_len
    return text[:limit]


def sanitize_registry_text(text: str) -> str:
    """등기부 원문 살균 = HTML 제거 후 길이 제한"""
    return truncate_input(strip_html(text))
