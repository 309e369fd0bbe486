import random
import time

from honeycomb.grid import Honeycomb, symbol_count
from honeycomb.solver import SearchPath, WordStore, find_all_words, solve
from honeycomb.trie import Trie, load_trie

# columns: ["FG", "EAB", "DC"]
SMALL = list("ABCDEFG")


def _make_trie(words: list[str]) -> Trie:
    trie = Trie()
    for w in words:
        trie.insert(w)
    return trie


def _random_honeycomb(rng: random.Random, layers: int, letters: str = "AEIRSTN") -> Honeycomb:
    return Honeycomb.build(layers, [rng.choice(letters) for _ in range(symbol_count(layers))])


def _brute_force(grid: Honeycomb, words: set[str], max_len: int) -> set[str]:
    """All dictionary words spelled by simple paths of at most max_len cells."""
    found = set()

    def walk(cell, seen, spelled):
        spelled += grid.cell_at(*cell)
        if spelled in words:
            found.add(spelled)
        if len(spelled) == max_len:
            return
        for nxt in grid.adjacent(*cell):
            if nxt not in seen:
                walk(nxt, seen | {nxt}, spelled)

    for cell in grid.cells():
        walk(cell, {cell}, "")
    return found


def test_basic_solve():
    grid = Honeycomb.build(2, SMALL)
    words = ["FAB", "BAD", "DAB", "CAB", "CAFE", "FED", "BED", "ABBA", "ZOO"]
    result, paths = solve(grid, _make_trie(words))
    assert result == ["BAD", "CAB", "CAFE", "DAB", "FAB", "FED"]
    assert paths["CAFE"] == [(2, 1), (1, 1), (0, 0), (1, 0)]


def test_unreachable_word_not_found():
    grid = Honeycomb.build(2, SMALL)
    # B only touches G, A and C
    store = find_all_words(grid, _make_trie(["BED", "BE"]))
    assert list(store) == []


def test_no_revisit():
    grid = Honeycomb.build(2, SMALL)
    store = find_all_words(grid, _make_trie(["ABA", "AB", "ABAB"]))
    assert list(store) == ["AB"]


def test_single_cell_honeycomb():
    grid = Honeycomb.build(1, ["Q"])
    store = find_all_words(grid, _make_trie(["Q"]))
    assert store.words == ["Q"]
    assert store.paths["Q"] == [(0, 0)]


def test_empty_dictionary():
    grid = Honeycomb.build(3, list("ABCDEFGHIJKLMNOPQRS"))
    assert find_all_words(grid, Trie()).words == []
    assert solve(grid, Trie()) == ([], {})


def test_each_word_recorded_once():
    grid = Honeycomb(2, ["AA", "AAA", "AA"])
    store = find_all_words(grid, _make_trie(["AA", "AAA"]))
    assert store.words == ["AA", "AAA"]


def test_discovery_order():
    grid = Honeycomb.build(2, SMALL)
    store = find_all_words(grid, _make_trie(["CAB", "FAB", "GAB"]))
    # start cells are visited column by column: F, G, ..., C
    assert store.words == ["FAB", "GAB", "CAB"]


def test_trie_reusable_across_searches():
    grid = Honeycomb.build(2, SMALL)
    trie = _make_trie(["FAB", "BAD", "CAFE"])
    first = find_all_words(grid, trie).words
    second = find_all_words(grid, trie).words
    assert first == second
    assert trie.find("FAB").is_word


def test_grid_restored_after_search():
    rng = random.Random(7)
    grid = _random_honeycomb(rng, 4)
    before = list(grid.columns)
    find_all_words(grid, _make_trie(["AT", "ART", "STAR", "RAT", "TEA", "SEAT", "NEST"]))
    assert grid.columns == before
    assert grid.visited == frozenset()


def test_path_properties():
    rng = random.Random(11)
    words = {"".join(rng.choice("AEIRST") for _ in range(rng.randint(1, 6))) for _ in range(3000)}
    grid = _random_honeycomb(rng, 4, "AEIRST")
    store = find_all_words(grid, _make_trie(sorted(words)))
    assert len(store) > 0
    for word in store:
        assert word in words
        path = store.paths[word]
        assert len(path) == len(word)
        assert len(set(path)) == len(path)
        assert "".join(grid.cell_at(*cell) for cell in path) == word
        for (c1, p1), (c2, p2) in zip(path, path[1:]):
            assert abs(c1 - c2) <= 1 and abs(p1 - p2) <= 1
            assert (c1, p1) != (c2, p2)


def test_matches_brute_force():
    rng = random.Random(3)
    words = {"".join(rng.choice("AEIRSTN") for _ in range(rng.randint(1, 4))) for _ in range(2000)}
    grid = _random_honeycomb(rng, 3)
    store = find_all_words(grid, _make_trie(sorted(words)))
    assert set(store.words) == _brute_force(grid, words, 4)


def test_max_results_cap():
    grid = Honeycomb.build(2, SMALL)
    result, paths = solve(grid, _make_trie(["FAB", "BAD", "DAB", "CAB", "CAFE", "FED"]), max_results=2)
    assert result == ["BAD", "CAB"]
    assert set(paths) == {"BAD", "CAB"}


def test_search_path_scoping():
    path = SearchPath()
    assert not path
    with path.extended((0, 0), "C"):
        with path.extended((1, 1), "A"):
            assert path.word == "CA"
            assert path.cells == [(0, 0), (1, 1)]
        assert path.word == "C"
    assert not path
    assert path.letters == []


def test_word_store_ignores_repeats():
    store = WordStore()
    assert store.record("BEE", [(0, 0), (0, 1), (1, 1)])
    assert not store.record("BEE", [(2, 0), (2, 1), (1, 1)])
    assert store.words == ["BEE"]
    assert store.paths["BEE"] == [(0, 0), (0, 1), (1, 1)]
    assert "BEE" in store


def test_performance_with_generated_dictionary(tmp_path):
    """Solve a 6-layer honeycomb against a few thousand words in under a second."""
    import itertools

    dict_file = tmp_path / "dict.txt"
    words = []
    letters = "ABCDEFGHIKLMNOPRSTU"
    for length in range(3, 6):
        for combo in itertools.combinations(letters, length):
            words.append("".join(combo))
            if len(words) > 5000:
                break
        if len(words) > 5000:
            break
    dict_file.write_text("\n".join(words))
    trie = load_trie(str(dict_file))

    grid = _random_honeycomb(random.Random(1), 6, letters)

    start = time.perf_counter()
    result, _ = solve(grid, trie)
    elapsed = time.perf_counter() - start

    assert elapsed < 1.0, f"Solver took {elapsed:.3f}s (expected <1s)"
    assert len(result) > 0
