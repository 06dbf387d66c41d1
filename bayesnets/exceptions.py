"""
异常类型 (Exceptions)
=====================

所有错误都在调用开始时立即报告，不做任何重试或部分结果恢复。
"""


class BayesNetsError(Exception):
    """本包所有异常的基类"""


class InvalidParameterError(BayesNetsError, ValueError):
    """参数非法，例如 n_samples < 1 或 burn_in < 0"""


class IncompleteInitialSampleError(BayesNetsError, ValueError):
    """给定的初始样本没有覆盖模型中的全部变量"""


class EvidenceConflictError(BayesNetsError, ValueError):
    """给定的初始样本与证据不一致"""


class UnknownVariableError(BayesNetsError, KeyError):
    """查询中引用了模型中不存在的变量"""


class DegenerateConditionalError(BayesNetsError, ZeroDivisionError):
    """
    完全条件分布退化

    某个变量的条件势函数之和为零（或非有限），无法归一化为概率分布。
    """
