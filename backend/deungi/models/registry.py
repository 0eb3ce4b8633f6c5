"""등기부등본 파싱 결과 모델

등기부등본 원문 텍스트를 구조화한 결과(표제부/갑구/을구 + 요약 통계)를 담는
Pydantic 모델. 모든 모델은 생성 후 변경하지 않는다 (frozen).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    """등기부등본 섹션 구분"""

    TITLE = "TITLE"   # 표제부
    GAPGU = "GAPGU"   # 갑구 (소유권)
    EULGU = "EULGU"   # 을구 (소유권 이외)


class RightType(str, Enum):
    """등기목적 (권리 유형) — 값은 등기부 원문 용어"""

    # 갑구
    OWNERSHIP_TRANSFER = "소유권이전"
    OWNERSHIP_PRESERVATION = "소유권보존"
    PROVISIONAL_SEIZURE = "가압류"
    SEIZURE = "압류"
    PROVISIONAL_DISPOSITION = "가처분"
    AUCTION_START = "경매개시결정"
    VOLUNTARY_AUCTION_START = "임의경매개시결정"
    COMPULSORY_AUCTION_START = "강제경매개시결정"
    TRUST = "신탁"
    TRUST_REGISTRATION = "신탁등기"
    PROVISIONAL_REGISTRATION = "가등기"
    TRANSFER_CLAIM_PROVISIONAL_REGISTRATION = "소유권이전청구권가등기"
    REDEMPTION = "환매등기"
    WARNING_REGISTRATION = "예고등기"
    # 을구
    MORTGAGE = "근저당권설정"
    PLAIN_MORTGAGE = "저당권설정"
    JEONSE = "전세권설정"
    SUPERFICIES = "지상권설정"
    EASEMENT = "지역권설정"
    LEASE_REGISTRATION = "임차권등기"
    LEASE_RIGHT = "임차권설정"
    JEONSE_TRANSFER = "전세권이전"
    MORTGAGE_TRANSFER = "근저당권이전"
    MORTGAGE_MODIFICATION = "근저당권변경"
    OTHER = "기타"


class RiskLevel(str, Enum):
    """개별 등기 항목 위험도"""

    DANGER = "danger"
    WARNING = "warning"
    SAFE = "safe"
    INFO = "info"


class TitleSection(BaseModel):
    """표제부 파싱 결과 (추출 실패 필드는 빈 문자열)"""

    model_config = ConfigDict(frozen=True)

    address: str = ""               # 소재지
    building_detail: str = ""       # 건물내역 원문 행
    area: str = ""                  # 면적 (예: "84.97㎡")
    structure: str = ""             # 구조 (예: "철근콘크리트조")
    purpose: str = ""               # 용도 (예: "아파트")
    land_right_ratio: str = ""      # 대지권비율 (예: "52718.4분의 84.97")


class OwnershipEntry(BaseModel):
    """갑구 (소유권에 관한 사항) 개별 항목"""

    model_config = ConfigDict(frozen=True)

    order: int                              # 순위번호 (없으면 누적 카운터)
    date: str = ""                          # 접수일자 (YYYY.MM.DD)
    purpose: RightType = RightType.OTHER    # 등기목적
    detail: str = ""                        # 원문 행 연결
    holder: str = ""                        # 권리자/소유자
    is_cancelled: bool = False              # 말소 여부
    risk_level: RiskLevel = RiskLevel.INFO  # 말소 시 항상 info


class EncumbranceEntry(OwnershipEntry):
    """을구 (소유권 이외의 권리) 개별 항목"""

    amount: int = Field(default=0, ge=0)    # 채권최고액/전세금 (원), 0 = 미기재


class ParseSummary(BaseModel):
    """갑구/을구 항목에서 파생된 요약 통계"""

    model_config = ConfigDict(frozen=True)

    total_gapgu_entries: int = 0
    total_eulgu_entries: int = 0
    active_gapgu_entries: int = 0
    active_eulgu_entries: int = 0
    cancelled_entries: int = 0
    total_mortgage_amount: int = 0          # 현행 근저당 채권최고액 합계
    total_jeonse_amount: int = 0            # 현행 전세금 합계
    total_claims_amount: int = 0            # 근저당 + 전세
    has_seizure: bool = False
    has_provisional_seizure: bool = False
    has_provisional_disposition: bool = False
    has_auction_order: bool = False
    has_trust: bool = False
    has_provisional_registration: bool = False
    has_lease_registration: bool = False
    has_warning_registration: bool = False
    has_redemption_registration: bool = False
    ownership_transfer_count: int = 0


class ParsedRegistry(BaseModel):
    """등기부등본 전체 파싱 결과"""

    model_config = ConfigDict(frozen=True)

    title: TitleSection = Field(default_factory=TitleSection)
    gapgu: tuple[OwnershipEntry, ...] = ()
    eulgu: tuple[EncumbranceEntry, ...] = ()
    summary: ParseSummary = Field(default_factory=ParseSummary)
    raw_text: str = ""                      # 원문 (반드시 보존)
