"""配置加载模块

YAML 场景配置的加载、合并与访问。内置默认值 :data:`DEFAULTS` 即双原子扫描的
配置结构，用户 YAML 在其上逐层覆盖（后者覆盖前者）：

- ``scenario``：``curve`` / ``cutoff`` / ``elastic``
- ``potential``：势函数类型及参数
- ``dimer``：元素符号与立方盒边长
- ``sweep``：间距扫描（``r`` 显式列表或 ``start/stop/num``）与线程数
- ``cutoff``：经验截断的容差、点数、扫描起点比例与收敛检测器
- ``elastic``：弹性常数场景的可选覆盖（如 ``poisson_ratio``）
- ``plot``：是否输出曲线图
- ``run``：运行名与输出目录模板
"""

from __future__ import annotations

import copy
import datetime as _dt
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "scenario": "cutoff",
    "potential": {"type": "ibs"},
    "dimer": {"symbol": "H", "cell_size": 30.0},
    "sweep": {"start": 0.4, "stop": 2.5, "num": 2000, "workers": None},
    "cutoff": {
        "tol": 1e-6,
        "num": 1000,
        "start_fraction": 0.5,
        "detector": {"type": "tail_mean"},
    },
    "elastic": {},
    "plot": True,
    "run": {"name": None, "output_dir": "runs/{name}_{timestamp}"},
}
"""内置默认配置；流水线只通过 :class:`ConfigManager` 读取这些值。"""


def _deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _get_by_path(d: dict, path: str, default: Any = None) -> Any:
    cur = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


class ConfigManager:
    """场景配置管理器

    以 :data:`DEFAULTS` 为底层，依次合并 ``defaults`` 与 YAML 文件。

    Parameters
    ----------
    files : Iterable[str] | None, optional
        需要加载的 YAML 文件列表，后者覆盖前者；不存在的文件被跳过。
    defaults : dict | None, optional
        覆盖内置默认值的配置，文件内容在其上覆盖。

    Attributes
    ----------
    data : dict
        合并后的配置数据。
    sources : list[str]
        实际加载的配置文件路径。

    Examples
    --------
    >>> cfg = ConfigManager(defaults={"cutoff": {"tol": 1e-3}})
    >>> cfg.get("cutoff.tol"), cfg.get("cutoff.num")
    (0.001, 1000)
    """

    def __init__(
        self, files: Iterable[str] | None = None, defaults: dict | None = None
    ) -> None:
        self._data: dict[str, Any] = _deep_update(copy.deepcopy(DEFAULTS), defaults)
        self._sources: list[str] = []
        for p in files or ():
            path = Path(p)
            if not path.exists():
                logger.warning(f"Config file not found, skipped: {path}")
                continue
            with open(path, encoding="utf-8") as f:
                self._data = _deep_update(self._data, yaml.safe_load(f) or {})
            self._sources.append(str(path))

        unknown = sorted(set(self._data) - set(DEFAULTS))
        if unknown:
            logger.warning(f"Unknown config sections ignored: {unknown}")

    @property
    def data(self) -> dict:
        return self._data

    @property
    def sources(self) -> list[str]:
        return list(self._sources)

    @property
    def scenario(self) -> str:
        """场景名（小写）"""
        return str(self._data["scenario"]).lower()

    @property
    def run_name(self) -> str:
        """运行名：``run.name``，未设置时取场景名"""
        return str(self.get("run.name") or self.scenario)

    def get(self, path: str, default: Any | None = None) -> Any:
        """按点路径（如 ``"cutoff.detector.type"``）读取配置值，不存在时返回 ``default``"""
        return _get_by_path(self._data, path, default)

    def section(self, name: str) -> dict:
        """返回顶层配置节的副本；节不是字典时抛出 ``ValueError``"""
        value = self._data.get(name, {})
        if not isinstance(value, dict):
            raise ValueError(f"配置节 {name} 必须是映射，得到: {value!r}")
        return copy.deepcopy(value)

    def make_output_dir(self, name: str | None = None) -> str:
        """按模板 ``run.output_dir`` 创建输出目录

        模板支持 ``{name}`` 与 ``{timestamp}`` 占位符；``name`` 缺省时取 :attr:`run_name`。
        """
        pattern = str(self.get("run.output_dir"))
        name = name or self.run_name
        ts = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
        out = pattern.format(name=name, timestamp=ts)
        os.makedirs(out, exist_ok=True)
        logger.debug(f"Output directory: {out}")
        return out

    def snapshot(self, output_dir: str) -> None:
        """在输出目录写入 ``resolved_config.yaml`` 与 ``manifest.json``

        快照失败只记录警告，不阻断主流程。
        """
        try:
            with open(Path(output_dir) / "resolved_config.yaml", "w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, allow_unicode=True, sort_keys=True)
            manifest = {
                "timestamp": _dt.datetime.now().isoformat(),
                "scenario": self.scenario,
                "sources": self._sources,
            }
            with open(Path(output_dir) / "manifest.json", "w", encoding="utf-8") as f:
                json.dump(manifest, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Failed to write config snapshot: {e}")
