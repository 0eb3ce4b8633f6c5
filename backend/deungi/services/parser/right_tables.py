"""등기목적 → 위험도 매핑 테이블

갑구/을구 각각의 등기목적 용어와 위험도. 파싱 로직과 분리된 순수 데이터로,
용어를 추가할 때 파서 코드는 건드리지 않는다.

- 키는 RightType, 값은 RiskLevel
- 읽기 전용 (MappingProxyType)
- 매칭 순서(긴 용어 우선)는 classifier가 결정한다
"""

from types import MappingProxyType

from deungi.models.registry import RightType, RiskLevel

# 갑구 (소유권에 관한 사항)
GAPGU_RISK_TABLE = MappingProxyType({
    RightType.OWNERSHIP_TRANSFER: RiskLevel.SAFE,
    RightType.OWNERSHIP_PRESERVATION: RiskLevel.SAFE,
    RightType.PROVISIONAL_SEIZURE: RiskLevel.DANGER,
    RightType.SEIZURE: RiskLevel.DANGER,
    RightType.PROVISIONAL_DISPOSITION: RiskLevel.DANGER,
    RightType.AUCTION_START: RiskLevel.DANGER,
    RightType.VOLUNTARY_AUCTION_START: RiskLevel.DANGER,
    RightType.COMPULSORY_AUCTION_START: RiskLevel.DANGER,
    RightType.TRUST: RiskLevel.WARNING,
    RightType.TRUST_REGISTRATION: RiskLevel.WARNING,
    RightType.PROVISIONAL_REGISTRATION: RiskLevel.WARNING,
    RightType.TRANSFER_CLAIM_PROVISIONAL_REGISTRATION: RiskLevel.WARNING,
    RightType.REDEMPTION: RiskLevel.WARNING,
    RightType.WARNING_REGISTRATION: RiskLevel.WARNING,
})

# 을구 (소유권 이외의 권리에 관한 사항)
EULGU_RISK_TABLE = MappingProxyType({
    RightType.MORTGAGE: RiskLevel.WARNING,
    RightType.PLAIN_MORTGAGE: RiskLevel.WARNING,
    RightType.JEONSE: RiskLevel.INFO,
    RightType.SUPERFICIES: RiskLevel.INFO,
    RightType.EASEMENT: RiskLevel.INFO,
    RightType.LEASE_REGISTRATION: RiskLevel.INFO,
    RightType.LEASE_RIGHT: RiskLevel.INFO,
    RightType.PROVISIONAL_SEIZURE: RiskLevel.DANGER,
    RightType.SEIZURE: RiskLevel.DANGER,
    RightType.PROVISIONAL_REGISTRATION: RiskLevel.WARNING,
    RightType.JEONSE_TRANSFER: RiskLevel.INFO,
    RightType.MORTGAGE_TRANSFER: RiskLevel.WARNING,
    RightType.MORTGAGE_MODIFICATION: RiskLevel.WARNING,
})
