#!/usr/bin/env python3
"""YAML 场景入口（CLI）

使用示例::

    python -m dimerprobe.cli.run -c examples/ibs_cutoff.yaml

说明
----
- 本入口只负责 YAML 解析与场景调度；具体实现见 ``pipelines/*`` 模块。
"""

from __future__ import annotations

import argparse
import logging

from dimerprobe.core.config import ConfigManager
from dimerprobe.utils.log_config import setup_logging

from .pipelines.common import potential_from_config
from .pipelines.curve import run_curve_pipeline
from .pipelines.cutoff import run_cutoff_pipeline
from .pipelines.elastic import run_elastic_pipeline


def main(argv: list[str] | None = None) -> int:
    """解析 YAML 并调度对应场景。"""
    ap = argparse.ArgumentParser(description="DimerProbe: YAML 驱动运行入口")
    ap.add_argument("-c", "--config", required=True, help="YAML配置文件路径")
    ap.add_argument("-v", "--verbose", action="store_true", help="控制台输出DEBUG日志")
    args = ap.parse_args(argv)

    cfg = ConfigManager(files=[args.config])
    outdir = cfg.make_output_dir()
    setup_logging(outdir, level=logging.DEBUG if args.verbose else logging.INFO)
    log = logging.getLogger(__name__)
    cfg.snapshot(outdir)

    scenario = cfg.scenario
    log.info(f"场景: {scenario} | 配置: {cfg.sources or '默认'}")

    if scenario in ("curve", "curves"):
        run_curve_pipeline(cfg, outdir, potential_from_config(cfg))
    elif scenario in ("cutoff", "cutoff_adjusted"):
        estimate = run_cutoff_pipeline(cfg, outdir, potential_from_config(cfg))
        log.info(
            f"经验截断 r* = {estimate.adjusted_cutoff:.6g}（名义 {estimate.nominal_cutoff:.6g}）"
        )
    elif scenario in ("elastic", "elastic_constants"):
        run_elastic_pipeline(cfg, outdir)
    else:
        raise ValueError(f"未知场景类型 scenario: {scenario}")

    log.info(f"完成。输出目录: {outdir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
