"""
采样诊断 (Sampling Diagnostics)
===============================

从Gibbs样本表中估计边际分布，以及MCMC收敛诊断：
- 经验边际/联合分布
- 有效样本大小(ESS)
- R̂统计量（Gelman-Rubin）
"""

from typing import Dict, Hashable, List, Mapping, Sequence, Union

import numpy as np
import pandas as pd


def empirical_marginals(samples: pd.DataFrame,
                        cardinalities: Mapping[Hashable, int]) -> Dict[Hashable, np.ndarray]:
    """
    计算每个变量的经验边际分布

    Args:
        samples: Gibbs样本表，每列一个变量
        cardinalities: 变量名 → 类别数

    Returns:
        变量名 → 长度为类别数的频率向量
    """
    marginals = {}
    for name in samples.columns:
        counts = np.bincount(samples[name].to_numpy(dtype=int),
                             minlength=cardinalities[name])
        marginals[name] = counts / len(samples)
    return marginals


def empirical_joint(samples: pd.DataFrame, names: Sequence[Hashable],
                    cardinalities: Mapping[Hashable, int]) -> np.ndarray:
    """
    计算若干变量的经验联合分布

    Args:
        samples: Gibbs样本表
        names: 变量名列表，决定结果的轴顺序
        cardinalities: 变量名 → 类别数

    Returns:
        形状为[card(names[0]), card(names[1]), ...]的频率表
    """
    shape = [cardinalities[name] for name in names]
    joint_counts = np.zeros(shape, dtype=int)
    configs, counts = np.unique(samples[list(names)].to_numpy(dtype=int),
                                axis=0, return_counts=True)
    # 每列是一个轴上的索引
    joint_counts[tuple(configs[:, n] for n in range(len(names)))] = counts
    return joint_counts / len(samples)


def effective_sample_size(chain: Union[np.ndarray, pd.Series, pd.DataFrame]
                          ) -> Union[float, Dict[Hashable, float]]:
    """
    计算有效样本大小(ESS)

    ESS = n / τ，其中积分自相关时间 τ = 1 + 2 Σ_{t≥1} ρ_t。
    按Geyer的初始正序列截断：把相邻两个滞后的自相关配对，
    Γ_k = ρ_{2k} + ρ_{2k+1}，第一次出现非正的Γ_k时停止求和。

    Args:
        chain: 一条MCMC链（数组或pandas.Series），
               或gibbs_sample返回的样本表（每列一条链）

    Returns:
        ESS；输入为DataFrame时返回 列名 → ESS
    """
    if isinstance(chain, pd.DataFrame):
        return {name: effective_sample_size(chain[name]) for name in chain.columns}

    series = pd.Series(np.asarray(chain, dtype=float))
    n_samples = len(series)

    # 常数链没有自相关
    if n_samples < 2 or series.var() == 0:
        return float(n_samples)

    # τ = -1 + 2 Σ_k Γ_k，Γ_0 = 1 + ρ_1
    tau = -1.0
    for k in range(n_samples // 2):
        rho_even = 1.0 if k == 0 else series.autocorr(2 * k)
        rho_odd = series.autocorr(2 * k + 1)
        pair = rho_even + rho_odd
        if not pair > 0:
            break
        tau += 2 * pair

    return float(n_samples / max(tau, 1e-12))


def gelman_rubin(chains: List[np.ndarray]) -> float:
    """
    计算R̂统计量（Gelman-Rubin）

    接近1表示多条链已混合。

    Args:
        chains: 多条等长的MCMC链

    Returns:
        R̂值
    """
    chains = [np.asarray(chain, dtype=float) for chain in chains]
    n = len(chains[0])

    # 链间方差
    chain_means = [np.mean(chain) for chain in chains]
    B = n * np.var(chain_means, ddof=1)

    # 链内方差
    W = np.mean([np.var(chain, ddof=1) for chain in chains])
    if W == 0:
        return 1.0 if B == 0 else float('inf')

    var_plus = ((n - 1) * W + B) / n

    return float(np.sqrt(var_plus / W))
