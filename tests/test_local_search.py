import pytest

from gridsearch.cost import total_cost, total_grid_cost
from gridsearch.layout import HORIZONTAL_FIRST, STRATEGIES, VERTICAL_FIRST
from gridsearch.local_search import LocalSearch


def test_search_vertical_first_100_50_3_1():
    sol = LocalSearch(VERTICAL_FIRST.build(100, 50, 3, 1)).find_solution()

    assert list(sol.horizontal_caches) == [34, 56, 78]
    assert list(sol.vertical_caches) == [25]
    assert sol.cost == 164_053


def test_search_vertical_first_100_80_2_2():
    sol = LocalSearch(VERTICAL_FIRST.build(100, 80, 2, 2)).find_solution()

    assert list(sol.horizontal_caches) == [44, 74]
    assert list(sol.vertical_caches) == [29, 58]
    assert sol.cost == 350_224


def test_search_horizontal_first_100_60_3_1():
    sol = LocalSearch(HORIZONTAL_FIRST.build(100, 60, 3, 1)).find_solution()

    assert list(sol.horizontal_caches) == [27, 54, 77]
    assert list(sol.vertical_caches) == [37]
    assert sol.cost == 220_407


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_search_single_cut_on_square(strategy):
    sol = LocalSearch(strategy.build(100, 100, 1, 0)).find_solution()

    assert list(sol.horizontal_caches) == [50]
    assert list(sol.vertical_caches) == []
    assert sol.cost == 740_050


def test_empty_movable_set_is_rejected():
    with pytest.raises(ValueError):
        LocalSearch(HORIZONTAL_FIRST.build(10, 5, 0, 0))


def test_try_advance_rejects_collapsing_same_axis_cuts():
    # buffer [0, 1, 50, 2, 50, 100, 50]: two horizontal cuts at 1 and 2
    search = LocalSearch(HORIZONTAL_FIRST.build(100, 50, 2, 0))
    assert not search.try_advance(0)


def test_try_advance_rejects_inverted_neighbours():
    search = LocalSearch(HORIZONTAL_FIRST.build(100, 50, 2, 0))
    search.view[0] = 30
    search.view[1] = 20
    assert not search.try_advance(0)


def test_try_advance_respects_axis_bounds():
    search = LocalSearch(HORIZONTAL_FIRST.build(100, 50, 1, 1))
    # view is [horizontal, vertical]
    search.view[1] = 50
    assert not search.try_advance(1)

    search = LocalSearch(HORIZONTAL_FIRST.build(100, 50, 1, 0))
    search.view[0] = 100
    assert not search.try_advance(0)


def test_try_advance_leaves_buffer_untouched():
    search = LocalSearch(VERTICAL_FIRST.build(100, 50, 3, 1))
    before = list(search.view.raw)
    for i in range(len(search.view)):
        search.try_advance(i)
    assert list(search.view.raw) == before


def test_try_advance_accepts_cheaper_move():
    # a lone cut at 1 on a 100 wide grid: moving right is strictly cheaper
    search = LocalSearch(HORIZONTAL_FIRST.build(100, 50, 1, 0))
    cost = total_cost(search.view.raw)
    assert search.try_advance(0)
    search.commit_advance(0)
    assert search.view[0] == 2
    assert total_cost(search.view.raw) < cost
    assert search.moves == 1


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_result_is_a_local_optimum(strategy):
    search = LocalSearch(strategy.build(60, 40, 4, 2))
    search.run()
    assert all(not search.try_advance(i) for i in range(len(search.view)))


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
@pytest.mark.parametrize("grid", [(100, 50, 3, 0), (37, 20, 5, 0), (64, 64, 2, 0)])
def test_final_cost_matches_total_grid_cost(strategy, grid):
    width, height, nh, nv = grid
    sol = LocalSearch(strategy.build(width, height, nh, nv)).find_solution()
    widths, heights = sol.full_axes(width, height)
    assert total_grid_cost(widths, heights) == sol.cost


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_same_axis_cuts_stay_strictly_increasing(strategy):
    sol = LocalSearch(strategy.build(30, 10, 8, 0)).find_solution()
    h = list(sol.horizontal_caches)
    assert len(h) == 8
    assert all(a < b for a, b in zip(h, h[1:]))
    assert all(0 < x <= 30 for x in h)


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_vertical_cuts_stay_inside_the_grid(strategy):
    sol = LocalSearch(strategy.build(30, 10, 8, 2)).find_solution()
    assert len(sol.vertical_caches) == 2
    assert all(0 < y <= 10 for y in sol.vertical_caches)
    assert all(0 < x <= 30 for x in sol.horizontal_caches)


class RecordingSearch(LocalSearch):

    def __init__(self, layout):
        super().__init__(layout)
        self.tried = []

    def try_advance(self, index):
        accepted = super().try_advance(index)
        self.tried.append((index, accepted))
        return accepted


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_accepted_move_restarts_scan_from_last_cut(strategy):
    search = RecordingSearch(strategy.build(100, 50, 3, 1))
    search.run()
    last = len(search.view) - 1

    after_accept = [
        search.tried[k + 1][0]
        for k, (_, accepted) in enumerate(search.tried[:-1])
        if accepted
    ]
    assert after_accept
    assert all(index == last for index in after_accept)
    assert any(accepted and index < last for index, accepted in search.tried)
    assert search.tried[-1] == (0, False)
    assert search.moves == sum(accepted for _, accepted in search.tried)


def test_search_reports_moves_and_sweeps():
    search = LocalSearch(VERTICAL_FIRST.build(100, 50, 3, 1))
    sol = search.find_solution()
    assert search.sweeps >= 2
    assert search.moves > 0
    assert sol.cost == search.final_cost()
