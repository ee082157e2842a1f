import itertools

import pytest

from campusnav.services.geospatial import distance, haversine_m, heuristic

from conftest import CAMPUS_LOCATIONS, build_campus, make_location


def test_one_degree_of_longitude_on_the_equator():
    assert haversine_m(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_194.93, rel=1e-6)


def test_distance_is_symmetric_and_zero_on_identity():
    for first, second in itertools.combinations(CAMPUS_LOCATIONS, 2):
        assert distance(first, second) == pytest.approx(distance(second, first))
    for location in CAMPUS_LOCATIONS:
        assert distance(location, location) == 0.0


def test_time_heuristic_uses_walking_speed():
    a = make_location("a", 0.0, 0.0)
    b = make_location("b", 0.0, 0.01)
    meters = distance(a, b)

    assert heuristic(a, b, False) == pytest.approx(meters)
    assert heuristic(a, b, True) == pytest.approx(meters / 83.33)


@pytest.mark.parametrize("optimize_for_time", [False, True])
def test_heuristic_is_consistent_on_every_edge(optimize_for_time):
    graph = build_campus()
    for destination in graph.all_locations():
        for location in graph.all_locations():
            for edge in graph.outgoing_edges(location):
                here = heuristic(edge.source, destination, optimize_for_time)
                there = heuristic(edge.target, destination, optimize_for_time)
                assert here <= edge.cost(optimize_for_time) + there + 1e-9
