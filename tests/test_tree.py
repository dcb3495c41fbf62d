from motext.tree import SearchTree


def numeric(a, b):
    return (a > b) - (a < b)


def by_first(a, b):
    return numeric(a[0], b[0])


def test_find_in_empty_tree():
    tree = SearchTree(numeric)
    assert tree.find(3) is None
    assert len(tree) == 0


def test_search_inserts_and_find_returns():
    tree = SearchTree(numeric)
    assert tree.search(5) == 5
    assert tree.find(5) == 5
    assert len(tree) == 1


def test_search_existing_returns_stored_key():
    tree = SearchTree(by_first)
    original = ("k", "first")
    tree.search(original)
    again = tree.search(("k", "second"))
    assert again is original
    assert len(tree) == 1


def test_find_returns_stored_key_not_probe():
    tree = SearchTree(by_first)
    stored = (1, "payload")
    tree.search(stored)
    assert tree.find((1, None)) is stored


def test_find_missing_key():
    tree = SearchTree(numeric)
    for value in (4, 2, 6):
        tree.search(value)
    assert tree.find(5) is None
    assert 5 not in tree
    assert 6 in tree


def test_iteration_is_sorted_and_unique():
    tree = SearchTree(numeric)
    values = [7, 3, 9, 1, 5, 3, 8, 7, 2]
    for value in values:
        tree.search(value)
    assert list(tree) == sorted(set(values))
    assert len(tree) == len(set(values))


def test_every_inserted_key_is_found():
    tree = SearchTree(numeric)
    values = list(range(50, 0, -3)) + list(range(0, 60, 7))
    for value in values:
        tree.search(value)
    for value in values:
        assert tree.find(value) == value


def test_custom_ordering_reversed():
    tree = SearchTree(lambda a, b: numeric(b, a))
    for value in (1, 2, 3):
        tree.search(value)
    assert list(tree) == [3, 2, 1]