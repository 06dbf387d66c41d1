"""
离散因子 (Discrete Factors)
===========================

因子（势函数）是定义在一组离散变量上的非负函数：
ψ(x₁, ..., xₖ) ≥ 0

与条件概率表不同，因子不需要归一化。MRF的联合分布正比于所有因子的乘积：
p(x) = (1/Z) Π ψ_c(x_c)

因子支持的基本运算：
1. 求值：给定所有维度的取值，返回势函数值
2. 限制(restriction)：固定部分变量，得到剩余变量上的因子
3. 乘积：两个因子逐点相乘，共享维度按名称对齐
4. 归一化：得到一个概率分布
5. 采样：按势函数值成比例地抽取一个赋值

MRF和Gibbs采样器只依赖抽象的Factor接口。
"""

from abc import ABC, abstractmethod
from typing import Dict, Hashable, Iterable, Sequence, Tuple

import numpy as np

from ..exceptions import DegenerateConditionalError
from .assignments import Assignment


class Factor(ABC):
    """
    因子接口

    可求值、可限制、可相乘的离散因子。
    """

    @property
    @abstractmethod
    def dimensions(self) -> Tuple[Hashable, ...]:
        """因子的维度（有序的变量名）"""

    @property
    @abstractmethod
    def potential(self) -> np.ndarray:
        """势函数表，第i个轴对应第i个维度"""

    @abstractmethod
    def __getitem__(self, assignment: Assignment) -> 'Factor':
        pass

    @abstractmethod
    def __mul__(self, other: 'Factor') -> 'Factor':
        pass

    @abstractmethod
    def normalize(self) -> 'Factor':
        pass

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> Assignment:
        pass

    def cardinality(self, name: Hashable) -> int:
        """变量name的类别数"""
        return self.potential.shape[self.dimensions.index(name)]

    @property
    def cardinalities(self) -> Dict[Hashable, int]:
        return dict(zip(self.dimensions, self.potential.shape))


class DiscreteFactor(Factor):
    """
    稠密表格表示的离散因子

    势函数存放在numpy数组中，形状为各维度的类别数。
    构造后不可修改。
    """

    def __init__(self, dimensions: Sequence[Hashable], potential):
        """
        初始化因子

        Args:
            dimensions: 变量名列表
            potential: 势函数表，形状必须与维度数一致
        """
        dimensions = tuple(dimensions)
        potential = np.array(potential, dtype=float)

        if len(set(dimensions)) != len(dimensions):
            raise ValueError(f"因子维度中存在重复变量: {dimensions}")
        if potential.ndim != len(dimensions):
            raise ValueError(
                f"势函数表维数({potential.ndim})与变量数({len(dimensions)})不一致"
            )
        if any(n == 0 for n in potential.shape):
            raise ValueError(f"每个变量至少需要一个类别: {potential.shape}")
        if not np.all(np.isfinite(potential)) or np.any(potential < 0):
            raise ValueError("势函数值必须是有限的非负实数")

        potential.setflags(write=False)
        self._dimensions = dimensions
        self._potential = potential

    @property
    def dimensions(self) -> Tuple[Hashable, ...]:
        return self._dimensions

    @property
    def potential(self) -> np.ndarray:
        return self._potential

    def __getitem__(self, assignment: Assignment) -> 'DiscreteFactor':
        """
        限制：把assignment中出现的维度固定下来

        assignment中不属于本因子的变量会被忽略。

        Args:
            assignment: 部分赋值

        Returns:
            剩余维度上的因子（全部固定时为标量因子）
        """
        index = []
        remaining = []
        for name, n_categories in zip(self._dimensions, self._potential.shape):
            if name in assignment:
                value = int(assignment[name])
                if not 0 <= value < n_categories:
                    raise IndexError(
                        f"变量{name!r}的取值{value}超出范围[0, {n_categories})"
                    )
                index.append(value)
            else:
                index.append(slice(None))
                remaining.append(name)

        return DiscreteFactor(remaining, self._potential[tuple(index)])

    def __mul__(self, other: Factor) -> 'DiscreteFactor':
        """
        因子乘积

        结果的维度为两个因子维度的有序并集，共享维度逐元素对齐。
        """
        if not isinstance(other, Factor):
            return NotImplemented

        dimensions = self._dimensions + tuple(
            d for d in other.dimensions if d not in self._dimensions
        )

        for name in set(self._dimensions) & set(other.dimensions):
            if self.cardinality(name) != other.cardinality(name):
                raise ValueError(
                    f"变量{name!r}的类别数不一致: "
                    f"{self.cardinality(name)} vs {other.cardinality(name)}"
                )

        return DiscreteFactor(
            dimensions, _broadcast(self, dimensions) * _broadcast(other, dimensions)
        )

    def value(self, assignment: Assignment) -> float:
        """
        求值

        Args:
            assignment: 至少覆盖本因子全部维度的赋值

        Returns:
            势函数值
        """
        return float(self._potential[tuple(int(assignment[d]) for d in self._dimensions)])

    def marginalize(self, names: Iterable[Hashable]) -> 'DiscreteFactor':
        """对names中的变量求和"""
        names = set(names)
        axes = tuple(i for i, d in enumerate(self._dimensions) if d in names)
        remaining = [d for d in self._dimensions if d not in names]
        return DiscreteFactor(remaining, self._potential.sum(axis=axes))

    def normalize(self) -> 'DiscreteFactor':
        """
        归一化为概率分布

        总和为零时分布没有定义，直接报错而不是退化为均匀分布。
        """
        total = self._potential.sum()
        if not np.isfinite(total) or total <= 0:
            raise DegenerateConditionalError(
                f"因子{self._dimensions}的势函数之和为{total}，无法归一化"
            )
        return DiscreteFactor(self._dimensions, self._potential / total)

    def sample(self, rng: np.random.Generator) -> Assignment:
        """
        按势函数值成比例地采样一个赋值

        Args:
            rng: 随机数生成器

        Returns:
            本因子全部维度上的赋值
        """
        probs = self.normalize().potential.ravel()
        flat_index = rng.choice(probs.size, p=probs)
        index = np.unravel_index(flat_index, self._potential.shape)
        return {name: int(i) for name, i in zip(self._dimensions, index)}

    def __repr__(self) -> str:
        return f"DiscreteFactor(dimensions={self._dimensions}, shape={self._potential.shape})"


def _broadcast(factor: Factor, dimensions: Tuple[Hashable, ...]) -> np.ndarray:
    """把因子的势函数表转置、扩展到dimensions的轴顺序，以便广播相乘"""
    present = [d for d in dimensions if d in factor.dimensions]
    table = np.transpose(
        factor.potential, [factor.dimensions.index(d) for d in present]
    )
    shape = [factor.cardinality(d) if d in factor.dimensions else 1 for d in dimensions]
    return table.reshape(shape)
