#!/usr/bin/env python
"""등기부등본 파싱 + 리스크 점수 + 검증 CLI

사용법:
  python scripts/analyze_registry.py --text backend/tests/fixtures/registry_sample_apt.txt
  python scripts/analyze_registry.py --text registry.txt --price 600000000
  python scripts/analyze_registry.py --text registry.txt --json
"""

import argparse
import logging
import sys
from pathlib import Path

# backend를 import path에 추가
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "backend"))

from deungi.config import settings  # noqa: E402
from deungi.services.pipeline import RegistryRiskPipeline  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(
        description="등기부등본 파싱 + 리스크 점수 + 검증 CLI"
    )
    parser.add_argument("--text", required=True, help="텍스트 파일 경로")
    parser.add_argument("--price", type=int, default=0, help="시세 추정치 (원)")
    parser.add_argument("--advisory", default="", help="자문 의견 텍스트 파일 경로")
    parser.add_argument("--json", action="store_true", help="JSON으로 출력")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    path = Path(args.text)
    if not path.exists():
        print(f"파일을 찾을 수 없습니다: {path}")
        sys.exit(1)
    text = path.read_text(encoding="utf-8")

    advisory = ""
    if args.advisory:
        advisory_path = Path(args.advisory)
        if not advisory_path.exists():
            print(f"파일을 찾을 수 없습니다: {advisory_path}")
            sys.exit(1)
        advisory = advisory_path.read_text(encoding="utf-8")

    result = RegistryRiskPipeline().analyze(
        text, estimated_price=args.price, advisory_text=advisory
    )

    if args.json:
        print(result.model_dump_json(indent=2))
        return

    parsed = result.parsed
    risk = result.risk_score
    validation = result.validation

    print("=" * 60)
    print("등기부등본 분석 결과")
    print("=" * 60)
    print()
    print(risk.summary)
    print()
    print("-" * 60)
    print(f"소재지: {parsed.title.address or '(미추출)'}")
    print(f"항목 수: 갑구 {len(parsed.gapgu)} / 을구 {len(parsed.eulgu)} "
          f"(말소 {parsed.summary.cancelled_entries})")
    print(f"근저당 합계: {parsed.summary.total_mortgage_amount:,}원 / "
          f"전세 합계: {parsed.summary.total_jeonse_amount:,}원")
    if args.price:
        print(f"근저당 비율: {risk.mortgage_ratio:.1f}%")
    print("-" * 60)
    for factor in risk.factors:
        print(f"  -{factor.deduction:>3}  [{factor.severity.value}] {factor.description}")
    print("-" * 60)
    print(f"검증 점수: {validation.score} "
          f"(체크 {validation.summary.total_checks}, "
          f"오류 {validation.summary.errors}, 경고 {validation.summary.warnings}, "
          f"정보 {validation.summary.infos})")
    for issue in validation.issues:
        print(f"  [{issue.severity.value}] {issue.id} {issue.field}: {issue.message}")
    print("-" * 60)


if __name__ == "__main__":
    main()
