#!/usr/bin/env python3
"""Project estimate maker script.

Usage:
    python -m app.scripts.estimate_maker --description "Build a booking app" --budget 18000 --deadline 2030-06-15
    python -m app.scripts.estimate_maker --description "..." --budget 18000 --currency EUR --deadline 2030-06-15 --format pdf
"""

import argparse
import json
import sys
import time
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

FORMATS = ("json", "pdf", "docx", "all")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="프로젝트 추정 및 제안서 생성")
    parser.add_argument("--description", type=str, required=True, help="프로젝트 설명")
    parser.add_argument("--budget", type=float, required=True, help="예산 금액")
    parser.add_argument("--currency", type=str, default="USD", help="통화 코드 (ISO)")
    parser.add_argument("--deadline", type=str, required=True, help="마감일 (YYYY-MM-DD)")
    parser.add_argument(
        "--output-dir", type=str, default="workspace/outputs/estimates", help="출력 디렉토리"
    )
    parser.add_argument("--format", type=str, choices=FORMATS, default="all", help="출력 형식")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    from app.exceptions import InputValidationError
    from app.layers.layer5_export import create_docx_buffer, create_pdf_buffer, export_filename
    from app.services.estimator import create_estimate
    from app.utils.validation import validate_estimate_input

    raw_input = {
        "projectDescription": args.description,
        "budget": {"amount": args.budget, "currency": args.currency},
        "deadline": args.deadline,
    }

    try:
        validate_estimate_input(raw_input)
    except InputValidationError as e:
        print(f'입력 오류: {e.message}')
        for detail in e.details or []:
            print(f'  - {detail}')
        return 1

    print('\n' + '=' * 70)
    print('프로젝트 추정 시작')
    print(f'시작 시간: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print('=' * 70)

    total_start = time.time()
    result = create_estimate(raw_input)
    total_time = time.time() - total_start

    # 결과 요약
    cost = result.cost_estimate
    signals = result.estimation_signals
    print(f'\n  작업 수: {len(result.task_breakdown)}')
    print(f'  총 공수: {signals.timeline_model.total_hours} h ({signals.timeline_model.required_weeks} 주)')
    print(f'  총 비용: {cost.total} {cost.currency}')
    print(f'  예산 상태: {signals.budget_status.status.value}')
    print(f'  마감 상태: {signals.deadline_status.status.value}')
    print(f'  리스크: {len(result.risk_flags)}건')
    print(f'  총 소요시간: {total_time:.3f}초')

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    estimate_data = result.to_dict()

    if args.format in ("json", "all"):
        json_path = output_dir / export_filename("json")
        json_path.write_text(
            json.dumps({"input": raw_input, **estimate_data}, ensure_ascii=False, indent=2),
            encoding='utf-8',
        )
        md_path = output_dir / export_filename("md")
        md_path.write_text(result.proposal_markdown, encoding='utf-8')
        print(f'\nJSON 저장: {json_path}')
        print(f'Markdown 저장: {md_path}')

    if args.format in ("pdf", "all"):
        pdf_path = output_dir / export_filename("pdf")
        pdf_path.write_bytes(create_pdf_buffer(result))
        print(f'PDF 저장: {pdf_path}')

    if args.format in ("docx", "all"):
        docx_path = output_dir / export_filename("docx")
        docx_path.write_bytes(create_docx_buffer(result))
        print(f'DOCX 저장: {docx_path}')

    return 0


if __name__ == "__main__":
    sys.exit(main())
