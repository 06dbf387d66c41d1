from itertools import combinations

import numpy as np
import pytest

from bayesnets.exceptions import UnknownVariableError
from bayesnets.factors import DiscreteFactor
from bayesnets.models import MarkovRandomField, ising_factors


class TestConstruction:

    def test_names_in_first_seen_order(self, chain_mrf):
        assert chain_mrf.names == ['A', 'B', 'C']
        assert chain_mrf.name_to_index == {'A': 0, 'B': 1, 'C': 2}
        assert chain_mrf.name_of(2) == 'C'
        assert chain_mrf.index_of('B') == 1
        assert len(chain_mrf) == 3

    def test_variable_to_factors(self, chain_mrf):
        assert chain_mrf.variable_to_factors == {'A': [0], 'B': [0, 1], 'C': [1, 2]}

    def test_variable_to_factors_matches_dimensions(self):
        factors = [
            DiscreteFactor(['X', 'Y', 'Z'], np.ones((2, 2, 2))),
            DiscreteFactor(['Z', 'W'], np.ones((2, 3))),
            DiscreteFactor(['Y'], np.ones(2)),
            DiscreteFactor(['W', 'X'], np.ones((3, 2))),
        ]
        mrf = MarkovRandomField(factors)

        for name in mrf.names:
            expected = [i for i, f in enumerate(factors) if name in f.dimensions]
            assert mrf.variable_to_factors[name] == expected

    def test_clique_completion(self):
        factors = [
            DiscreteFactor(['A', 'B', 'C', 'D'], np.ones((2, 2, 2, 2))),
            DiscreteFactor(['D', 'E'], np.ones((2, 2))),
            DiscreteFactor(['F'], np.ones(3)),
        ]
        mrf = MarkovRandomField(factors)

        for factor in factors:
            for u, v in combinations(factor.dimensions, 2):
                assert mrf.has_edge(u, v)
                assert mrf.has_edge(v, u)

        # 6条团内边 + D-E
        assert mrf.graph.number_of_edges() == 7
        assert not mrf.has_edge('A', 'E')

    def test_chain_has_no_shortcut_edge(self, chain_mrf):
        assert chain_mrf.has_edge('A', 'B')
        assert chain_mrf.has_edge('B', 'C')
        assert not chain_mrf.has_edge('A', 'C')

    def test_cardinality_mismatch_between_factors(self):
        with pytest.raises(ValueError):
            MarkovRandomField([
                DiscreteFactor(['A'], np.ones(2)),
                DiscreteFactor(['A', 'B'], np.ones((3, 2))),
            ])

    def test_cardinalities(self):
        mrf = MarkovRandomField([DiscreteFactor(['A', 'B'], np.ones((2, 4)))])
        assert mrf.cardinalities == {'A': 2, 'B': 4}

    def test_empty_model(self):
        mrf = MarkovRandomField()
        assert len(mrf) == 0
        assert mrf.graph.number_of_nodes() == 0
        assert mrf.factors == ()


class TestQueries:

    def test_neighbors_and_markov_blanket(self, chain_mrf):
        assert chain_mrf.neighbors('B') == ['A', 'C']
        assert chain_mrf.markov_blanket('A') == ['B']

    def test_unknown_names(self, chain_mrf):
        with pytest.raises(UnknownVariableError):
            chain_mrf.neighbors('Z')
        with pytest.raises(KeyError):
            chain_mrf.index_of('Z')
        assert not chain_mrf.has_edge('A', 'Z')
        assert 'Z' not in chain_mrf
        assert 'A' in chain_mrf

    def test_factors_of(self, chain_mrf):
        assert chain_mrf.factors_of('C') == [chain_mrf.factors[1], chain_mrf.factors[2]]

    def test_unnormalized_probability_and_energy(self, chain_mrf):
        assignment = {'A': 0, 'B': 0, 'C': 1}
        # ψ(A,B)=2, ψ(B,C)=1, ψ(C)=4
        assert chain_mrf.unnormalized_probability(assignment) == pytest.approx(8.0)
        assert chain_mrf.energy(assignment) == pytest.approx(-np.log(8.0))

    def test_zero_probability_has_infinite_energy(self):
        mrf = MarkovRandomField([DiscreteFactor(['A'], [0.0, 1.0])])
        assert mrf.energy({'A': 0}) == np.inf

    def test_incomplete_assignment(self, chain_mrf):
        with pytest.raises(KeyError) as excinfo:
            chain_mrf.unnormalized_probability({'A': 0})
        assert not isinstance(excinfo.value, UnknownVariableError)
        assert 'B' in str(excinfo.value)


class TestIndependence:

    @pytest.fixture
    def separate_mrf(self):
        return MarkovRandomField([
            DiscreteFactor(['A', 'B'], np.ones((2, 2))),
            DiscreteFactor(['C'], np.ones(2)),
        ])

    def test_disconnected_variables_are_independent(self, separate_mrf):
        assert separate_mrf.is_independent(['A'], ['C'], [])
        assert separate_mrf.is_independent(['C'], ['A'], [])

    def test_variables_sharing_a_factor_are_dependent(self, separate_mrf):
        assert not separate_mrf.is_independent(['A'], ['B'], [])
        assert not separate_mrf.is_independent(['B'], ['A'], [])

    def test_conditioning_blocks_the_chain(self, chain_mrf):
        assert not chain_mrf.is_independent(['A'], ['C'], [])
        assert chain_mrf.is_independent(['A'], ['C'], ['B'])
        assert chain_mrf.is_independent(['C'], ['A'], ['B'])

    def test_conditioning_on_an_endpoint(self, chain_mrf):
        assert chain_mrf.is_independent(['A'], ['B'], ['A'])

    def test_overlapping_sets_are_dependent(self, chain_mrf):
        assert not chain_mrf.is_independent(['A'], ['A'], [])
        assert not chain_mrf.is_independent(['A'], ['A'], ['A'])

    def test_set_queries(self):
        # 道德化的 A→C←B, C→D
        mrf = MarkovRandomField([
            DiscreteFactor(['A', 'B', 'C'], np.ones((2, 2, 2))),
            DiscreteFactor(['C', 'D'], np.ones((2, 2))),
        ])
        assert not mrf.is_independent(['A'], ['B'], ['C'])
        assert mrf.is_independent(['A', 'B'], ['D'], ['C'])
        assert not mrf.is_independent(['A', 'B'], ['D'], [])

    def test_symmetry_on_ising_grid(self):
        mrf = MarkovRandomField(ising_factors(3, 3))
        names = mrf.names
        given = ['(1,1)', '(0,1)', '(1,0)']
        for x in names:
            for y in names:
                assert mrf.is_independent([x], [y], given) == \
                    mrf.is_independent([y], [x], given)

    def test_query_does_not_modify_graph(self, chain_mrf):
        edges = set(chain_mrf.graph.edges())
        chain_mrf.is_independent(['A'], ['C'], ['B'])
        assert set(chain_mrf.graph.edges()) == edges

    def test_unknown_variable(self, chain_mrf):
        with pytest.raises(UnknownVariableError):
            chain_mrf.is_independent(['A'], ['Z'], [])
        with pytest.raises(UnknownVariableError):
            chain_mrf.is_independent(['A'], ['C'], ['Z'])


def test_ising_factors():
    factors = ising_factors(2, 2, J=0.5, h=0.1)
    mrf = MarkovRandomField(factors)

    assert len(factors) == 8
    assert len(mrf) == 4
    assert mrf.graph.number_of_edges() == 4
    assert mrf.has_edge('(0,0)', '(0,1)')
    assert not mrf.has_edge('(0,0)', '(1,1)')
