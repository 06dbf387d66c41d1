from itertools import product

import numpy as np
import pytest

from bayesnets.factors import DiscreteFactor
from bayesnets.models import MarkovRandomField


@pytest.fixture
def chain_mrf():
    """A - B - C，外加C上的单节点因子"""
    factors = [
        DiscreteFactor(['A', 'B'], [[2.0, 1.0], [1.0, 2.0]]),
        DiscreteFactor(['B', 'C'], [[3.0, 1.0], [1.0, 3.0]]),
        DiscreteFactor(['C'], [1.0, 4.0]),
    ]
    return MarkovRandomField(factors)


@pytest.fixture
def two_variable_mrf():
    """联合分布 p(a, b) ∝ exp(T[a, b] + u[b])"""
    factors = [
        DiscreteFactor(['A', 'B'], np.exp([[5.0, 2.0], [1.0, 0.0]])),
        DiscreteFactor(['B'], np.exp([-1.0, 1.0])),
    ]
    return MarkovRandomField(factors)


def exact_marginals(mrf):
    """枚举所有赋值得到精确边际分布"""
    marginals = {name: np.zeros(mrf.cardinalities[name]) for name in mrf.names}
    for values in product(*[range(mrf.cardinalities[name]) for name in mrf.names]):
        assignment = dict(zip(mrf.names, values))
        prob = mrf.unnormalized_probability(assignment)
        for name, value in assignment.items():
            marginals[name][value] += prob
    return {name: m / m.sum() for name, m in marginals.items()}


@pytest.fixture(name='exact_marginals')
def exact_marginals_fixture():
    return exact_marginals
