from __future__ import annotations
import argparse
import logging
from dataclasses import replace
from pathlib import Path

from geocoder_bridge.batch import read_queries, results_frame, write_results
from geocoder_bridge.config import load_api_config, load_settings
from geocoder_bridge.service import LookupService

import dotenv
dotenv.load_dotenv()

"""
批量坐标反查：读取含 lat/lng 列的 CSV/Excel，逐行调用反查接口，把结果写入 CSV/Excel。
未指定 --url 时使用服务端已保存的接口配置。
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="geocoder-batch", description="批量坐标反查工具")
    parser.add_argument("input", type=Path, help="输入文件（.csv / .xlsx），需包含 lat、lng 列")
    parser.add_argument("output", type=Path, help="输出文件（.csv / .xlsx）")
    parser.add_argument("--url", default=None, help="接口 URL 模板，支持 {lat} {lng} {long} 占位符")
    return parser


def main() -> None:
    args = build_parser().parse_args()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_api_config(settings.config_path)
    if args.url:
        cfg = replace(cfg, custom_url=args.url)
    service = LookupService(cfg, settings.config_path, timeout=settings.timeout)

    queries = read_queries(args.input)
    results = [service.process(q) for q in queries]
    write_results(results_frame(queries, results), args.output)

    failed = sum(1 for r in results if r.status == "error")
    print(f"Resolved {len(results) - failed}/{len(results)} points")
    print("Output:", str(args.output))


if __name__ == "__main__":
    main()
