from inksheet.utils.rect_helpers import (clamp, contains, expanded, intersect, is_degenerate,
                                        prune, rect_from_edges, subtract)


def edges(rect):
    return (rect.left(), rect.top(), rect.right(), rect.bottom())


def test_intersect_overlapping():
    a = rect_from_edges(0, 0, 50, 50)
    b = rect_from_edges(25, 10, 80, 40)
    assert edges(intersect(a, b)) == (25, 10, 50, 40)


def test_intersect_touching_edges_is_none():
    a = rect_from_edges(0, 0, 50, 50)
    b = rect_from_edges(50, 0, 80, 50)
    assert intersect(a, b) is None
    assert intersect(a, rect_from_edges(60, 60, 70, 70)) is None


def test_is_degenerate():
    assert is_degenerate(None)
    assert is_degenerate(rect_from_edges(10, 10, 10, 20))
    assert is_degenerate(rect_from_edges(10, 10, 5, 20))
    assert not is_degenerate(rect_from_edges(0, 0, 1, 1))


def test_subtract_center_blocker_gives_four_bands():
    free = rect_from_edges(0, 0, 100, 100)
    blocker = rect_from_edges(30, 30, 70, 70)
    pieces = [edges(r) for r in subtract(free, blocker)]
    assert pieces == [
        (0, 0, 100, 30),    # top
        (0, 70, 100, 100),  # bottom
        (0, 30, 30, 70),    # left
        (70, 30, 100, 70),  # right
    ]


def test_subtract_without_overlap_returns_free_unchanged():
    free = rect_from_edges(0, 0, 100, 100)
    result = subtract(free, rect_from_edges(100, 0, 150, 50))
    assert len(result) == 1
    assert result[0] is free


def test_subtract_drops_slivers():
    free = rect_from_edges(0, 0, 100, 100)
    # leaves a 1px band on top and a 0.5px band on the left
    blocker = rect_from_edges(0.5, 1, 100, 100)
    assert subtract(free, blocker) == []


def test_subtract_full_cover_leaves_nothing():
    free = rect_from_edges(10, 10, 20, 20)
    assert subtract(free, rect_from_edges(0, 0, 50, 50)) == []


def test_clamp():
    bounds = rect_from_edges(0, 0, 100, 100)
    assert edges(clamp(rect_from_edges(-10, 90, 20, 120), bounds)) == (0, 90, 20, 100)
    assert clamp(rect_from_edges(-10, -10, 0, 50), bounds) is None


def test_expanded_and_contains():
    inner = rect_from_edges(10, 10, 20, 20)
    outer = expanded(inner, 5)
    assert edges(outer) == (5, 5, 25, 25)
    assert contains(outer, inner)
    assert contains(inner, inner)
    assert not contains(inner, outer)


def test_prune_removes_contained_and_duplicates():
    big = rect_from_edges(0, 0, 100, 50)
    small = rect_from_edges(10, 10, 20, 20)
    other = rect_from_edges(0, 40, 30, 100)
    dup = rect_from_edges(0, 0, 100, 50)
    kept = prune([big, small, other, dup])
    assert [edges(r) for r in kept] == [edges(big), edges(other)]
