from scripts.smoke_memories import _expected_excerpt, _rand_suffix


def test_expected_excerpt_matches_server_rule():
    assert _expected_excerpt('short') == 'short...'
    assert _expected_excerpt('z' * 200) == 'z' * 115 + '...'


def test_rand_suffix_length():
    value = _rand_suffix(6)
    assert len(value) == 6
    assert value.isalnum()
