"""
图模型 (Graphical Models)
=========================

马尔可夫随机场：从因子集合构建无向图，并回答图分离形式的条件独立查询。

核心概念：
1. 团和势函数：同一因子中的变量两两相连
2. 马尔可夫毯：MRF中就是节点的邻居
3. 全局马尔可夫性质：图分离蕴含条件独立
"""

from omegaconf import DictConfig

from .markov_random_fields import (
    MarkovRandomField,
    ising_factors,
    demonstrate_mrf,
    demonstrate_independence
)


def run_models(cfg: DictConfig) -> None:
    """
    运行图模型部分的演示代码

    Args:
        cfg: Hydra配置对象
    """
    print("\n" + "="*80)
    print("马尔可夫随机场 (Markov Random Fields)")
    print("="*80)

    demonstrate_mrf()

    demonstrate_independence()

    print("\n" + "="*80)
    print("图模型演示完成！")
    print("="*80)
