"""RegistryParser 단위 테스트

등기부등본 텍스트 파싱 로직을 검증한다.
"""

import re

import pytest

from deungi.models.registry import RightType, RiskLevel


@pytest.fixture
def apt(parser, apt_text):
    return parser.parse_text(apt_text)


@pytest.fixture
def risky(parser, risky_text):
    return parser.parse_text(risky_text)


# === TestGapgu ===


class TestGapgu:
    """갑구 파싱"""

    def test_entry_count(self, apt):
        """순위 1~5 + 순위번호 없는 가압류말소 항목"""
        assert len(apt.gapgu) == 6

    def test_first_is_preservation(self, apt):
        first = next(e for e in apt.gapgu if e.order == 1)
        assert first.purpose == RightType.OWNERSHIP_PRESERVATION
        assert first.risk_level == RiskLevel.SAFE

    def test_transfers(self, apt):
        transfers = [e for e in apt.gapgu if e.purpose == RightType.OWNERSHIP_TRANSFER]
        assert [e.order for e in transfers] == [2, 3, 5]
        assert [e.holder for e in transfers] == ["김영수", "박지민", "최현우"]

    def test_provisional_seizure_active(self, apt):
        seizure = next(e for e in apt.gapgu if e.order == 4)
        assert seizure.purpose == RightType.PROVISIONAL_SEIZURE
        assert seizure.risk_level == RiskLevel.DANGER
        assert not seizure.is_cancelled
        assert seizure.holder == "이상호"

    def test_cancellation_entry(self, apt):
        """가압류말소 행은 카운터 순위(6)의 말소 항목"""
        last = apt.gapgu[-1]
        assert last.order == 6
        assert last.purpose == RightType.PROVISIONAL_SEIZURE
        assert last.is_cancelled
        assert last.risk_level == RiskLevel.INFO
        assert last.date == "2025.01.10"

    def test_date_format(self, apt):
        for entry in apt.gapgu:
            assert re.fullmatch(r"\d{4}\.\d{2}\.\d{2}", entry.date)

    def test_detail_accumulates(self, apt):
        second = next(e for e in apt.gapgu if e.order == 2)
        assert "850101-1234567" in second.detail
        assert "역삼로 123" in second.detail


# === TestEulgu ===


class TestEulgu:
    """을구 파싱"""

    def test_entry_count(self, apt):
        assert [e.order for e in apt.eulgu] == [1, 2, 3, 4]

    def test_mortgage_amount(self, apt):
        first = apt.eulgu[0]
        assert first.purpose == RightType.MORTGAGE
        assert first.amount == 480_000_000
        assert first.holder == "국민은행"
        assert first.risk_level == RiskLevel.WARNING

    def test_cancel_line_marks_preceding_entry(self, apt):
        """'N번근저당권말소' 계속 행은 바로 앞 항목을 말소 처리"""
        assert not apt.eulgu[0].is_cancelled
        assert apt.eulgu[1].is_cancelled
        assert apt.eulgu[1].risk_level == RiskLevel.INFO
        assert apt.eulgu[3].is_cancelled

    def test_jeonse(self, apt):
        jeonse = apt.eulgu[2]
        assert jeonse.purpose == RightType.JEONSE
        assert jeonse.amount == 550_000_000
        assert jeonse.holder == "정민수"

    def test_eok_man_amount(self, risky):
        assert risky.eulgu[1].amount == 350_000_000
        assert risky.eulgu[1].holder == "농협은행"

    def test_lease_registration(self, risky):
        lease = risky.eulgu[2]
        assert lease.purpose == RightType.LEASE_REGISTRATION
        assert lease.holder == "김민지"


# === TestSummary ===


class TestSummary:
    """요약 통계"""

    def test_apt_counts(self, apt):
        s = apt.summary
        assert s.total_gapgu_entries == 6
        assert s.active_gapgu_entries == 5
        assert s.total_eulgu_entries == 4
        assert s.active_eulgu_entries == 2
        assert s.cancelled_entries == 3

    def test_apt_amounts(self, apt):
        s = apt.summary
        assert s.total_mortgage_amount == 480_000_000
        assert s.total_jeonse_amount == 550_000_000
        assert s.total_claims_amount == 1_030_000_000

    def test_apt_flags(self, apt):
        s = apt.summary
        assert s.has_provisional_seizure
        assert not s.has_seizure
        assert not s.has_auction_order
        assert s.ownership_transfer_count == 3

    def test_risky_flags(self, risky):
        s = risky.summary
        assert s.has_seizure
        assert s.has_auction_order
        assert s.has_trust
        assert s.has_lease_registration
        assert not s.has_provisional_seizure
        assert s.total_mortgage_amount == 650_000_000


# === TestEdgeCases ===


class TestEdgeCases:
    """비정상 입력"""

    def test_empty(self, parser):
        result = parser.parse_text("")
        assert result.gapgu == ()
        assert result.eulgu == ()
        assert result.summary.total_claims_amount == 0
        assert not result.summary.has_seizure

    def test_no_headers(self, parser):
        result = parser.parse_text("text with no recognizable headers")
        assert result.gapgu == ()
        assert result.eulgu == ()
        assert result.title.address == ""

    def test_raw_text_preserved(self, parser, apt_text):
        assert parser.parse_text(apt_text).raw_text == apt_text

    def test_crlf_input(self, parser, apt_text):
        result = parser.parse_text(apt_text.replace("\n", "\r\n"))
        assert len(result.gapgu) == 6
        assert len(result.eulgu) == 4

    def test_overlong_digit_runs(self, parser):
        """금액/순위번호로 볼 수 없는 긴 숫자열도 예외 없이 파싱"""
        result = parser.parse_text(
            "【 갑 구 】\n"
            + "1" * 5000 + " 소유권보존 2020년1월1일\n"
            + "【 을 구 】\n"
            + "1 근저당권설정 2020년2월1일 " + "9" * 5000
        )
        assert [e.purpose for e in result.gapgu] == [RightType.OWNERSHIP_PRESERVATION]
        assert result.gapgu[0].order == 1
        assert result.eulgu[0].amount == 0
        assert result.summary.total_mortgage_amount == 0

    def test_result_is_frozen(self, apt):
        with pytest.raises(Exception):
            apt.summary.has_seizure = True

    def test_entry_lists_are_immutable(self, apt):
        """항목 리스트도 생성 후 변경 불가 (요약과 어긋나지 않도록)"""
        assert isinstance(apt.gapgu, tuple)
        assert isinstance(apt.eulgu, tuple)
        with pytest.raises(AttributeError):
            apt.gapgu.append(apt.gapgu[0])
        assert len(apt.gapgu) == apt.summary.total_gapgu_entries
