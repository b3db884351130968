#!/usr/bin/env python3
"""
SafeHer 테스트 실행 스크립트

이 스크립트는 모듈별 테스트 묶음을 실행합니다.
"""

import os
import sys
import subprocess
import argparse
from pathlib import Path

# 테스트 유형 → (대상 경로, 설명)
SUITES = {
    "all": ("tests/", "전체 테스트"),
    "unit": ("tests/unit/", "단위 테스트"),
    "core": ("tests/unit/core/", "Core 모듈 테스트"),
    "features": ("tests/unit/features/", "Features 모듈 테스트"),
    "adapters": ("tests/unit/adapters/", "Adapters 모듈 테스트"),
    "ports": ("tests/unit/ports/", "Ports 모듈 테스트"),
    "observability": ("tests/unit/observability/", "Observability/API 테스트"),
    "common": ("tests/unit/common/", "Common 모듈 테스트"),
}


def run_command(cmd, description):
    """명령어 실행"""
    print(f"\n{'='*60}")
    print(f"실행 중: {description}")
    print(f"명령어: {cmd}")
    print(f"{'='*60}")

    result = subprocess.run(cmd, shell=True, capture_output=True, text=True)

    if result.returncode != 0:
        print("실패")
        print(result.stdout)
        if result.stderr:
            print(result.stderr)
        return False

    print("성공")
    if result.stdout:
        print(result.stdout)
    return True


def main():
    """메인 함수"""
    parser = argparse.ArgumentParser(description="SafeHer 테스트 실행")
    parser.add_argument("--type", choices=sorted(SUITES), default="all", help="실행할 테스트 유형")
    parser.add_argument("--coverage", action="store_true", help="코드 커버리지 포함 (pytest-cov 필요)")
    parser.add_argument("--verbose", action="store_true", help="상세 출력")
    parser.add_argument("--fast", action="store_true", help="slow 마커 테스트 제외")

    args = parser.parse_args()

    # 프로젝트 루트 디렉토리로 이동
    os.chdir(Path(__file__).parent)

    pytest_opts = []
    if args.verbose:
        pytest_opts.append("-v")
    if args.coverage:
        pytest_opts.extend(["--cov=safeher", "--cov-report=term"])
    if args.fast:
        pytest_opts.extend(["-m", "'not slow'"])

    target, description = SUITES[args.type]
    cmd = f"{sys.executable} -m pytest {' '.join(pytest_opts)} {target}"
    success = run_command(cmd, description)

    print(f"\n{'='*60}")
    if not success:
        print("일부 테스트가 실패했습니다.")
        sys.exit(1)
    print("모든 테스트가 성공적으로 완료되었습니다!")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
