"""
马尔可夫随机场 (Markov Random Fields)
=====================================

马尔可夫随机场(MRF)是无向图模型，用于表示变量之间的对称依赖关系。

联合概率分布：
p(x) = (1/Z) Π ψ_c(x_c)

其中：
- ψ_c是团c上的势函数（因子）
- Z是配分函数(归一化常数)
- x_c是团c中的变量

从因子构建无向图：
同一个因子中的变量两两相连（团补全），图是所有因子团的并。

条件独立性（全局马尔可夫性质）：
如果删除与Z相连的所有边后，X和Y处于不同的连通分量，
则给定Z时X与Y条件独立。

与贝叶斯网络的区别：
在贝叶斯网络中，观测汇聚节点会"打开"路径；
在MRF中，观测一个变量只会切断经过它的路径。
"""

from itertools import combinations
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

import networkx as nx
import numpy as np

from ..exceptions import UnknownVariableError
from ..factors import Assignment, DiscreteFactor, Factor


class MarkovRandomField:
    """
    马尔可夫随机场

    由一组因子构建，构建后不可修改。

    属性：
    - graph: 无向图，顶点为0..n-1
    - factors: 因子元组
    - names: 顶点索引 → 变量名（按在因子中首次出现的顺序）
    - name_to_index: 变量名 → 顶点索引
    - variable_to_factors: 变量名 → 引用该变量的因子索引列表
    """

    def __init__(self, factors: Sequence[Factor] = ()):
        """
        初始化MRF

        Args:
            factors: 因子列表
        """
        self.factors: Tuple[Factor, ...] = tuple(factors)

        # 按首次出现的顺序收集变量
        self.names: List[Hashable] = []
        self.name_to_index: Dict[Hashable, int] = {}
        self.cardinalities: Dict[Hashable, int] = {}
        for factor in self.factors:
            for name in factor.dimensions:
                n_categories = factor.cardinality(name)
                if name not in self.name_to_index:
                    self.name_to_index[name] = len(self.names)
                    self.names.append(name)
                    self.cardinalities[name] = n_categories
                elif self.cardinalities[name] != n_categories:
                    raise ValueError(
                        f"变量{name!r}在不同因子中的类别数不一致: "
                        f"{self.cardinalities[name]} vs {n_categories}"
                    )

        self.variable_to_factors: Dict[Hashable, List[int]] = {
            name: [] for name in self.names
        }
        self.graph = self._build_graph()

    def _build_graph(self) -> nx.Graph:
        """
        构建无向图

        每个因子的维度构成一个团：两两之间加边。
        同时登记每个变量被哪些因子引用。
        """
        graph = nx.Graph()
        graph.add_nodes_from(range(len(self.names)))

        for factor_index, factor in enumerate(self.factors):
            for name in factor.dimensions:
                if factor_index not in self.variable_to_factors[name]:
                    self.variable_to_factors[name].append(factor_index)

            for d1, d2 in combinations(factor.dimensions, 2):
                i, j = self.name_to_index[d1], self.name_to_index[d2]
                if not graph.has_edge(i, j):
                    graph.add_edge(i, j)

        return graph

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: Hashable) -> bool:
        return name in self.name_to_index

    def __repr__(self) -> str:
        return (f"MarkovRandomField(variables={len(self)}, "
                f"factors={len(self.factors)}, edges={self.graph.number_of_edges()})")

    def name_of(self, index: int) -> Hashable:
        """顶点索引对应的变量名"""
        return self.names[index]

    def index_of(self, name: Hashable) -> int:
        """变量名对应的顶点索引"""
        try:
            return self.name_to_index[name]
        except KeyError:
            raise UnknownVariableError(name) from None

    def _indices(self, names: Iterable[Hashable]) -> set:
        return {self.index_of(name) for name in names}

    def factors_of(self, name: Hashable) -> List[Factor]:
        """引用变量name的所有因子"""
        self.index_of(name)
        return [self.factors[i] for i in self.variable_to_factors[name]]

    def neighbors(self, name: Hashable) -> List[Hashable]:
        """
        获取邻居节点

        Args:
            name: 变量名

        Returns:
            邻居变量名列表（按顶点索引排序）
        """
        index = self.index_of(name)
        return [self.names[j] for j in sorted(self.graph.neighbors(index))]

    def markov_blanket(self, name: Hashable) -> List[Hashable]:
        """
        获取马尔可夫毯

        在MRF中，马尔可夫毯就是节点的邻居。
        """
        return self.neighbors(name)

    def has_edge(self, source: Hashable, target: Hashable) -> bool:
        """两个变量之间是否有边；未知变量返回False"""
        u = self.name_to_index.get(source)
        v = self.name_to_index.get(target)
        return u is not None and v is not None and self.graph.has_edge(u, v)

    def is_independent(self, x: Iterable[Hashable], y: Iterable[Hashable],
                       given: Iterable[Hashable] = ()) -> bool:
        """
        判断给定given时x与y是否图分离

        复制无向图，删除与given中每个节点相连的所有边，然后计算连通分量。
        如果某个连通分量同时包含x和y中的节点，则二者不独立。

        Args:
            x: 变量集合X
            y: 变量集合Y
            given: 条件变量集合Z

        Returns:
            是否条件独立
        """
        x_index = self._indices(x)
        y_index = self._indices(y)
        g_index = self._indices(given)

        graph = self.graph.copy()
        for g in g_index:
            graph.remove_edges_from(list(graph.edges(g)))

        for component in nx.connected_components(graph):
            if component & x_index and component & y_index:
                return False

        return True

    def unnormalized_probability(self, assignment: Assignment) -> float:
        """
        计算未归一化的概率

        P_unnorm(x) = Π ψ_c(x_c)

        Args:
            assignment: 覆盖全部变量的赋值

        Returns:
            未归一化的概率
        """
        missing = [name for name in self.names if name not in assignment]
        if missing:
            raise KeyError(f"赋值缺少变量: {missing}")

        prob = 1.0
        for factor in self.factors:
            prob *= factor[assignment].potential.item()
        return prob

    def energy(self, assignment: Assignment) -> float:
        """
        计算给定赋值的能量

        能量 E(x) = -Σ log ψ_c(x_c)，势函数为零时能量为无穷大
        """
        prob = self.unnormalized_probability(assignment)
        if prob <= 0:
            return np.inf
        return -np.log(prob)


def ising_factors(width: int, height: int, J: float = 1.0,
                  h: float = 0.0) -> List[DiscreteFactor]:
    """
    Ising模型的因子

    二值变量的格子模型，类别0表示自旋-1，类别1表示自旋+1。

    能量函数：
    E(x) = -J Σ_{<i,j>} x_i x_j - h Σ_i x_i

    Args:
        width: 格子宽度
        height: 格子高度
        J: 耦合强度（正值偏好相同状态）
        h: 外场强度

    Returns:
        成对因子和单节点因子列表
    """
    pair_potential = np.array([[np.exp(J), np.exp(-J)],
                               [np.exp(-J), np.exp(J)]])
    node_potential = np.array([np.exp(-h), np.exp(h)])

    factors = []
    for i in range(height):
        for j in range(width):
            node = f"({i},{j})"

            # 右邻居
            if j < width - 1:
                factors.append(DiscreteFactor([node, f"({i},{j+1})"], pair_potential))
            # 下邻居
            if i < height - 1:
                factors.append(DiscreteFactor([node, f"({i+1},{j})"], pair_potential))

            factors.append(DiscreteFactor([node], node_potential))

    return factors


def demonstrate_mrf() -> None:
    """演示马尔可夫随机场"""
    print("\n马尔可夫随机场演示")
    print("=" * 60)

    # 环形MRF：A-B-C-D-A
    edges = [('A', 'B'), ('B', 'C'), ('C', 'D'), ('D', 'A')]

    # 成对势函数（偏好相同状态）
    potential_same = np.array([[2.0, 1.0],
                               [1.0, 2.0]])
    # 单节点势函数
    potential_node = np.array([1.0, 1.5])

    factors = [DiscreteFactor(edge, potential_same) for edge in edges]
    factors += [DiscreteFactor([node], potential_node) for node in 'ABCD']

    mrf = MarkovRandomField(factors)
    print(f"\n{mrf}")

    print("\n未归一化概率：")
    print("-" * 40)

    configs = [
        {'A': 0, 'B': 0, 'C': 0, 'D': 0},
        {'A': 1, 'B': 1, 'C': 1, 'D': 1},
        {'A': 0, 'B': 1, 'C': 0, 'D': 1},
    ]

    for config in configs:
        prob = mrf.unnormalized_probability(config)
        energy = mrf.energy(config)
        print(f"配置 {config}")
        print(f"  未归一化概率: {prob:.4f}")
        print(f"  能量: {energy:.4f}")

    print("\n马尔可夫毯：")
    print("-" * 40)
    for node in mrf.names:
        print(f"{node}: {mrf.markov_blanket(node)}")


def demonstrate_independence() -> None:
    """
    演示图分离

    ψ(A,B,C)ψ(C,D) 是贝叶斯网络 A→C←B, C→D 道德化后的MRF。
    """
    print("\nMRF中的条件独立性")
    print("=" * 60)

    factors = [
        DiscreteFactor(['A', 'B', 'C'], np.ones((2, 2, 2))),
        DiscreteFactor(['C', 'D'], np.ones((2, 2))),
        DiscreteFactor(['E'], np.ones(2)),
    ]
    mrf = MarkovRandomField(factors)

    queries = [
        (['A'], ['B'], []),
        (['A'], ['D'], []),
        (['A'], ['D'], ['C']),
        (['A', 'B'], ['D'], ['C']),
        (['A'], ['E'], []),
    ]

    print(f"{'查询':<24} | 独立？")
    print("-" * 40)
    for x, y, given in queries:
        query = f"{x} ⊥ {y} | {given}"
        print(f"{query:<24} | {mrf.is_independent(x, y, given)}")

    print("\n观察：")
    print("1. 同一因子中的变量直接相连（A-B是道德边）")
    print("2. 观测C切断了A、B与D之间的所有路径")
    print("3. 不共享任何因子的变量（E）总是独立")
