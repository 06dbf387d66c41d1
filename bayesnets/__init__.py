"""
bayesnets - 离散概率图模型
==========================

用无向图模型（马尔可夫随机场）表示离散随机变量的联合分布，
并用马尔可夫链蒙特卡罗方法从条件分布中近似采样。

子模块：
- factors: 赋值与离散因子（限制、乘积、归一化、采样）
- models: 从因子构建的马尔可夫随机场，图分离查询
- sampling: 系统扫描Gibbs采样与收敛诊断
"""

from omegaconf import DictConfig

from .exceptions import (
    BayesNetsError,
    InvalidParameterError,
    IncompleteInitialSampleError,
    EvidenceConflictError,
    UnknownVariableError,
    DegenerateConditionalError
)

from .factors import (
    Assignment,
    Factor,
    DiscreteFactor,
    consistent,
    merge
)

from .models import MarkovRandomField, run_models

from .sampling import (
    MRFGibbsSampler,
    RandomInitialSample,
    FixedInitialSample,
    gibbs_sample,
    run_sampling
)

from .config import create_default_config

__version__ = "0.1.0"

SECTIONS = {
    'models': run_models,
    'sampling': run_sampling,
}


def run_section(section: str, cfg: DictConfig) -> None:
    """
    运行指定部分的演示

    Args:
        section: 'models'、'sampling' 或 'all'
        cfg: 配置对象
    """
    if section == 'all':
        for runner in SECTIONS.values():
            runner(cfg)
        return

    if section not in SECTIONS:
        raise ValueError(f"未知的部分: {section}，可选: {sorted(SECTIONS)} 或 'all'")
    SECTIONS[section](cfg)
