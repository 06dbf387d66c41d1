"""
因子与赋值

MRF和采样器共用的基础代数：赋值的合并与一致性判断，
以及离散因子的限制、乘积、归一化与采样。
"""

from .assignments import (
    Assignment,
    consistent,
    merge,
    without,
    restrict_to
)

from .discrete_factor import (
    Factor,
    DiscreteFactor
)
