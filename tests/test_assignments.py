from bayesnets.factors import consistent, merge, restrict_to, without


def test_consistent_on_shared_keys():
    assert consistent({'A': 0, 'B': 1}, {'B': 1, 'C': 2})
    assert not consistent({'A': 0, 'B': 1}, {'B': 0})


def test_disjoint_and_empty_assignments_are_consistent():
    assert consistent({'A': 0}, {'B': 1})
    assert consistent({}, {'A': 3})


def test_merge_later_values_win():
    assert merge({'A': 0, 'B': 0}, {'B': 1}) == {'A': 0, 'B': 1}


def test_helpers_do_not_mutate_inputs():
    a = {'A': 0, 'B': 1}
    b = {'B': 2}

    merged = merge(a, b)
    dropped = without(a, 'A')
    kept = restrict_to(a, ['B'])

    assert a == {'A': 0, 'B': 1}
    assert b == {'B': 2}
    assert merged is not a
    assert dropped == {'B': 1}
    assert kept == {'B': 1}


def test_without_missing_key_returns_copy():
    a = {'A': 0}
    result = without(a, 'Z')
    assert result == a
    assert result is not a
