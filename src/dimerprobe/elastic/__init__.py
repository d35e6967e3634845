"""弹性常数计算模块"""

from .ideal_brittle_solid import (
    ElasticConstants,
    elastic_constants_ideal_brittle_solid,
    ideal_brittle_solid_elastic_constants,
    poisson_ratio_ideal_brittle_solid,
    youngs_modulus_ideal_brittle_solid,
)

__all__ = [
    "ElasticConstants",
    "youngs_modulus_ideal_brittle_solid",
    "poisson_ratio_ideal_brittle_solid",
    "elastic_constants_ideal_brittle_solid",
    "ideal_brittle_solid_elastic_constants",
]
