#!/usr/bin/env python3
r"""
理想脆性固体弹性常数模块

由势的微观参数 :math:`(k, a)` 得到宏观弹性参数 :math:`(E, \nu)`，
再换算为立方刚度常数三元组 :math:`(C_{11}, C_{12}, C_{44})`：

.. math::
   K = \frac{E}{3(1-2\nu)},\qquad
   C_{44} = \frac{E}{2(1+\nu)},\qquad
   C_{11} = K + \tfrac{4}{3} C_{44},\qquad
   C_{12} = K - \tfrac{2}{3} C_{44}

全部为无状态纯函数。

基本使用：
    >>> E = youngs_modulus_ideal_brittle_solid(k=1.0, a=1.0)
    >>> nu = poisson_ratio_ideal_brittle_solid()
    >>> C11, C12, C44 = elastic_constants_ideal_brittle_solid(E, nu)
"""

import logging
import math
from dataclasses import dataclass

from dimerprobe.core.exceptions import InvalidElasticDomainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElasticConstants:
    """
    立方刚度常数三元组

    可直接解包为 ``C11, C12, C44``。

    Attributes
    ----------
    C11 : float
        正应力-正应变常数
    C12 : float
        泊松效应常数
    C44 : float
        剪切常数
    bulk_modulus : float
        体积模量 K
    youngs_modulus : float
        输入的杨氏模量 E
    poisson_ratio : float
        输入的泊松比 nu
    """

    C11: float
    C12: float
    C44: float
    bulk_modulus: float
    youngs_modulus: float
    poisson_ratio: float

    def __iter__(self):
        return iter((self.C11, self.C12, self.C44))

    @property
    def shear_modulus(self) -> float:
        """剪切模量 G = C44"""
        return self.C44

    def as_dict(self) -> dict[str, float]:
        return {
            "C11": self.C11,
            "C12": self.C12,
            "C44": self.C44,
            "K": self.bulk_modulus,
            "E": self.youngs_modulus,
            "nu": self.poisson_ratio,
        }


def youngs_modulus_ideal_brittle_solid(k: float = 1.0, a: float = 1.0) -> float:
    r"""理想脆性固体的杨氏模量 :math:`E = \frac{5\sqrt{3}}{4}\,\frac{k}{a}`

    对应势的参考二维三角晶格。

    Raises
    ------
    ValueError
        ``k`` 或 ``a`` 非正
    """
    if k <= 0 or a <= 0:
        raise ValueError(f"k 与 a 必须为正数，得到 k={k}, a={a}")
    return 5.0 * math.sqrt(3.0) / 4.0 * k / a


def poisson_ratio_ideal_brittle_solid() -> float:
    """理想脆性固体的泊松比，该势族与几何下为常数 0.25"""
    return 0.25


def elastic_constants_ideal_brittle_solid(E: float, nu: float) -> ElasticConstants:
    """由 :math:`(E, \\nu)` 计算 :math:`(C_{11}, C_{12}, C_{44})`

    Parameters
    ----------
    E : float
        杨氏模量，须为正
    nu : float
        泊松比，须满足 -1 < nu < 0.5

    Returns
    -------
    ElasticConstants

    Raises
    ------
    InvalidElasticDomainError
        ``nu >= 0.5``（体积模量发散或为负）、``nu <= -1``（剪切模量非物理）
        或 ``E <= 0``
    """
    if not E > 0:
        raise InvalidElasticDomainError(f"杨氏模量必须为正数，得到: {E}")
    if not nu < 0.5:
        raise InvalidElasticDomainError(
            f"泊松比 nu={nu} >= 0.5，体积模量 K = E/(3(1-2nu)) 非物理"
        )
    if not nu > -1.0:
        raise InvalidElasticDomainError(
            f"泊松比 nu={nu} <= -1，剪切模量 C44 = E/(2(1+nu)) 非物理"
        )

    K = E / (3.0 * (1.0 - 2.0 * nu))
    C44 = E / (2.0 * (1.0 + nu))
    C11 = K + 4.0 * C44 / 3.0
    C12 = K - 2.0 * C44 / 3.0

    logger.debug(f"Elastic constants from E={E}, nu={nu}: C11={C11}, C12={C12}, C44={C44}")
    return ElasticConstants(
        C11=C11, C12=C12, C44=C44, bulk_modulus=K, youngs_modulus=E, poisson_ratio=nu
    )


def ideal_brittle_solid_elastic_constants(k: float = 1.0, a: float = 1.0) -> ElasticConstants:
    """由势参数 ``(k, a)`` 直接得到弹性常数"""
    return elastic_constants_ideal_brittle_solid(
        youngs_modulus_ideal_brittle_solid(k, a), poisson_ratio_ideal_brittle_solid()
    )
