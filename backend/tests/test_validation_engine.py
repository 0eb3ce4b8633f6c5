"""ValidationEngine 단위 테스트

4단계 검증의 집계(체크 수/점수/유효성)와 드리프트 감지를 검증한다.
"""

from datetime import timezone

import pytest

from deungi.models.registry import (
    OwnershipEntry,
    ParsedRegistry,
    RightType,
    TitleSection,
)
from deungi.models.validation import ValidationCategory, ValidationSeverity
from deungi.services.parser.summary_builder import build_summary


@pytest.fixture
def apt(parser, apt_text):
    return parser.parse_text(apt_text)


@pytest.fixture
def risky(parser, risky_text):
    return parser.parse_text(risky_text)


def _ids(result) -> list[str]:
    return [i.id for i in result.issues]


# ============================================================
# 집계
# ============================================================


class TestAggregation:
    def test_clean_apt_without_price(self, engine, apt):
        result = engine.validate(apt)
        assert result.summary.total_checks == 51
        assert result.issues == ()
        assert result.score == 100
        assert result.is_valid

    def test_clean_apt_with_price_and_score(self, engine, scorer, apt):
        risk = scorer.score(apt, 850_000_000)
        result = engine.validate(apt, 850_000_000, risk_score=risk)
        assert result.summary.total_checks == 54
        assert result.issues == ()
        assert result.summary.passed == 54

    def test_empty_document(self, engine, parser):
        result = engine.validate(parser.parse_text(""))
        assert result.summary.total_checks == 17
        assert sorted(_ids(result)) == ["FMT_SECTION_NO_ADDRESS", "FMT_SECTION_NO_GAPGU"]
        assert result.summary.passed == 15
        assert result.score == 88
        assert result.is_valid

    def test_counts_consistent(self, engine, scorer, risky):
        risk = scorer.score(risky, 500_000_000)
        result = engine.validate(risky, 500_000_000, risk, "짧지 않은 자문 의견 텍스트입니다")
        s = result.summary
        assert s.errors + s.warnings + s.infos == len(result.issues)
        assert s.passed == max(0, s.total_checks - s.errors - s.warnings)
        assert 0 <= result.score <= 100
        assert result.is_valid == (s.errors == 0)

    def test_idempotent(self, engine, apt):
        first = engine.validate(apt, 100)
        second = engine.validate(apt, 100)
        assert first.issues == second.issues
        assert first.score == second.score

    def test_timestamp_utc(self, engine, apt):
        assert engine.validate(apt).timestamp.tzinfo == timezone.utc


# ============================================================
# 샘플 문맥 이슈
# ============================================================


class TestSampleIssues:
    def test_risky_context_warnings(self, engine, risky):
        result = engine.validate(risky)
        context = [i for i in result.issues if i.category == ValidationCategory.CONTEXT]
        assert sorted(i.id for i in context) == [
            "CTX_MORTGAGE_AFTER_SEIZURE", "CTX_TRUST_MORTGAGE_CONFLICT",
        ]
        assert all(i.field == "을구[2]" for i in context)
        assert all(i.severity == ValidationSeverity.WARNING for i in context)
        assert result.is_valid

    def test_first_entry_not_ownership(self, engine, parser):
        parsed = parser.parse_text(
            "【 갑 구 】\n"
            "1 가압류 2020년1월2일 채권자 이상호\n"
            "2 소유권이전 2020년5월1일 소유자 김철수"
        )
        result = engine.validate(parsed)
        first = [i for i in result.issues if i.id == "CTX_FIRST_ENTRY"]
        assert len(first) == 1
        assert first[0].field == "갑구[1]"
        assert first[0].actual == "가압류"

    def test_price_too_low(self, engine, apt):
        result = engine.validate(apt, 100)
        assert "XCHK_PRICE_SANITY" in _ids(result)
        assert not result.is_valid


# ============================================================
# 드리프트 감지
# ============================================================


class TestDrift:
    def test_mortgage_sum_drift(self, engine, apt):
        tampered = apt.model_copy(update={
            "summary": apt.summary.model_copy(update={"total_mortgage_amount": 1}),
        })
        result = engine.validate(tampered)
        assert "ARITH_MORTGAGE_SUM" in _ids(result)
        assert "ARITH_TOTAL_CLAIMS" in _ids(result)
        assert not result.is_valid

    def test_cancelled_count_drift(self, engine, apt):
        tampered = apt.model_copy(update={
            "summary": apt.summary.model_copy(update={"cancelled_entries": 0}),
        })
        assert _ids(engine.validate(tampered)) == ["ARITH_CANCELLED_COUNT"]

    def test_flag_drift(self, engine, apt):
        tampered = apt.model_copy(update={
            "summary": apt.summary.model_copy(update={"has_seizure": True}),
        })
        result = engine.validate(tampered)
        issue = next(i for i in result.issues if i.id == "XCHK_FLAG_HAS_SEIZURE")
        assert issue.expected == "false"
        assert issue.actual == "true"

    def test_invalid_risk_level(self, engine):
        entry = OwnershipEntry.model_construct(
            order=1,
            date="2020.01.01",
            purpose=RightType.OWNERSHIP_PRESERVATION,
            detail="1 소유권보존",
            holder="홍길동",
            is_cancelled=False,
            risk_level="critical",
        )
        parsed = ParsedRegistry.model_construct(
            title=TitleSection(address="서울특별시 중구"),
            gapgu=[entry],
            eulgu=[],
            summary=build_summary([entry], []),
            raw_text="",
        )
        result = engine.validate(parsed)
        assert _ids(result) == ["FMT_RISKTYPE_INVALID"]
        assert result.issues[0].field == "갑구[1].risk_level"

    def test_deduction_and_score_drift(self, engine, scorer, apt):
        risk = scorer.score(apt, 850_000_000)
        tampered = risk.model_copy(update={"total_deduction": 0})
        ids = _ids(engine.validate(apt, 850_000_000, risk_score=tampered))
        assert "XCHK_DEDUCTION_SUM" in ids
        assert "XCHK_SCORE_CALC" in ids

    def test_missing_factor_is_info(self, engine, scorer, apt):
        risk = scorer.score(apt)
        factors = [f for f in risk.factors if f.id != "provisional_seizure"]
        tampered = risk.model_copy(update={
            "factors": factors,
            "total_deduction": sum(f.deduction for f in factors),
            "total_score": 100 - sum(f.deduction for f in factors),
        })
        result = engine.validate(apt, risk_score=tampered)
        assert _ids(result) == ["XCHK_MISSING_FACTOR_PROVISIONAL_SEIZURE"]
        assert result.issues[0].severity == ValidationSeverity.INFO

    def test_factor_without_flag(self, engine, scorer, apt):
        risk = scorer.score(apt)
        tampered = apt.model_copy(update={
            "summary": apt.summary.model_copy(update={"has_provisional_seizure": False}),
        })
        ids = _ids(engine.validate(tampered, risk_score=risk))
        assert "XCHK_FACTOR_PROVISIONAL_SEIZURE" in ids
        assert "XCHK_FLAG_HAS_PROVISIONAL_SEIZURE" in ids

    def test_mortgage_ratio_drift(self, engine, scorer, apt):
        risk = scorer.score(apt, 850_000_000).model_copy(update={"mortgage_ratio": 10.0})
        result = engine.validate(apt, 850_000_000, risk_score=risk)
        issue = next(i for i in result.issues if i.id == "ARITH_MORTGAGE_RATIO")
        assert issue.severity == ValidationSeverity.WARNING


# ============================================================
# 자문 의견 관련성
# ============================================================


class TestAdvisory:
    def test_missing_mentions(self, engine, risky):
        result = engine.validate(risky, advisory_text="권리관계가 복잡하니 신중히 검토하시기 바랍니다.")
        advisory = sorted(i for i in _ids(result) if i.startswith("XCHK_ADVISORY_"))
        assert advisory == [
            "XCHK_ADVISORY_MISSING_AUCTION",
            "XCHK_ADVISORY_MISSING_LEASE_REGISTRATION",
            "XCHK_ADVISORY_MISSING_SEIZURE",
            "XCHK_ADVISORY_MISSING_TRUST",
        ]
        assert result.summary.infos == engine.validate(risky).summary.infos + 4

    def test_all_mentioned(self, engine, risky):
        text = "압류와 경매가 진행 중이며 신탁 및 임차권등기가 있어 위험합니다."
        result = engine.validate(risky, advisory_text=text)
        assert not any(i.startswith("XCHK_ADVISORY_") for i in _ids(result))

    def test_short_text_counted_but_silent(self, engine, risky):
        without = engine.validate(risky)
        short = engine.validate(risky, advisory_text="주의")
        assert short.summary.total_checks == without.summary.total_checks + 1
        assert short.issues == without.issues

    def test_infos_do_not_lower_score(self, engine, risky):
        without = engine.validate(risky)
        with_info = engine.validate(risky, advisory_text="권리관계가 복잡하니 신중히 검토하시기 바랍니다.")
        assert with_info.summary.passed == without.summary.passed + 1
