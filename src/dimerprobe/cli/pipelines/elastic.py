"""理想脆性固体弹性常数场景流水线

由 ``potential.k`` / ``potential.a`` 计算 E、nu 与 (C11, C12, C44)，
可用 ``elastic.poisson_ratio`` 覆盖默认泊松比；写入 ``elastic_constants.json``。
"""

from __future__ import annotations

import logging

from ...elastic.ideal_brittle_solid import (
    elastic_constants_ideal_brittle_solid,
    poisson_ratio_ideal_brittle_solid,
    youngs_modulus_ideal_brittle_solid,
)
from .common import write_json

logger = logging.getLogger(__name__)


def run_elastic_pipeline(cfg, outdir: str):
    """计算理想脆性固体弹性常数。

    Returns
    -------
    ElasticConstants

    Raises
    ------
    InvalidElasticDomainError
        泊松比超出物理定义域。
    """
    k = float(cfg.get("potential.k", 1.0))
    a = float(cfg.get("potential.a", 1.0))
    E = youngs_modulus_ideal_brittle_solid(k, a)
    nu = float(cfg.get("elastic.poisson_ratio", poisson_ratio_ideal_brittle_solid()))
    constants = elastic_constants_ideal_brittle_solid(E, nu)
    logger.info(
        f"k={k}, a={a}: E={E:.6g}, nu={nu:.6g} -> "
        f"C11={constants.C11:.6g}, C12={constants.C12:.6g}, C44={constants.C44:.6g}"
    )
    write_json(outdir, "elastic_constants.json", {"k": k, "a": a, **constants.as_dict()})
    return constants
