"""섹션 분리 + 표제부 파싱 테스트"""

from deungi.services.parser.sections import normalize_text, split_sections
from deungi.services.parser.title_parser import parse_title


class TestSplitSections:
    """표제부/갑구/을구 분리"""

    def test_three_sections(self, apt_text):
        sections = split_sections(apt_text)
        assert sections.title.startswith("【 표 제 부 】")
        assert sections.gapgu.startswith("【 갑 구 】")
        assert sections.eulgu.startswith("【 을 구 】")

    def test_gapgu_stops_at_eulgu(self, apt_text):
        sections = split_sections(apt_text)
        assert "근저당권설정" not in sections.gapgu
        assert "소유권보존" in sections.gapgu

    def test_title_stops_at_gapgu(self, apt_text):
        sections = split_sections(apt_text)
        assert "소유권" not in sections.title
        assert "대지권비율" in sections.title

    def test_ascii_brackets(self):
        text = "[표제부]\n주소\n[갑구]\n1 소유권보존\n[을구]\n1 근저당권설정"
        sections = split_sections(text)
        assert sections.title.startswith("[표제부]")
        assert sections.gapgu.startswith("[갑구]")
        assert sections.eulgu.startswith("[을구]")

    def test_bare_headers(self):
        text = "표 제 부\n주소\n갑 구\n1 소유권보존\n을 구\n1 근저당권설정"
        sections = split_sections(text)
        assert "1 소유권보존" in sections.gapgu
        assert "근저당권설정" not in sections.gapgu
        assert "1 근저당권설정" in sections.eulgu

    def test_missing_eulgu(self):
        sections = split_sections("【 갑 구 】\n1 소유권보존 2020년1월1일")
        assert sections.title == ""
        assert "소유권보존" in sections.gapgu
        assert sections.eulgu == ""

    def test_empty(self):
        assert split_sections("") == ("", "", "")

    def test_no_headers(self):
        assert split_sections("아무 관련 없는 텍스트") == ("", "", "")

    def test_normalize(self):
        assert normalize_text("a\r\nb\rc\td") == "a\nb\nc d"


class TestParseTitle:
    """표제부 필드 추출"""

    def test_apt_fields(self, apt_text):
        title = parse_title(split_sections(apt_text).title)
        assert "강남구" in title.address
        assert "역삼동" in title.address
        assert title.area == "84.97㎡"
        assert "철근콘크리트" in title.structure
        assert title.purpose == "아파트"
        assert "52718.4" in title.land_right_ratio

    def test_building_detail(self, apt_text):
        title = parse_title(split_sections(apt_text).title)
        assert title.building_detail.startswith("84.97㎡")

    def test_leading_order_removed(self):
        title = parse_title("1  전용 59.8㎡")
        assert title.building_detail == "전용 59.8㎡"

    def test_address_whitespace_collapsed(self, risky_text):
        title = parse_title(split_sections(risky_text).title)
        assert title.address.startswith("경기도 성남시 분당구 정자동")
        assert "  " not in title.address
        assert title.purpose == "오피스텔"

    def test_first_value_wins(self):
        title = parse_title("아파트\n오피스텔")
        assert title.purpose == "아파트"

    def test_ratio_slash(self):
        title = parse_title("대지권비율 1234.5/56.7")
        assert title.land_right_ratio == "1234.5/56.7"

    def test_ratio_requires_label(self):
        assert parse_title("1234.5/56.7").land_right_ratio == ""

    def test_empty(self):
        title = parse_title("")
        assert title.address == ""
        assert title.area == ""
