import itertools
import json
import logging
from pathlib import Path

import pytest

from campusnav.data import graph_repository
from campusnav.data.graph import GraphBuilder
from campusnav.errors import InvalidInputError
from campusnav.models.domain import Edge, Location, LocationCategory
from campusnav.services.geospatial import heuristic
from campusnav.services.routing.astar import HeuristicSearchEngine
from campusnav.services.routing.dijkstra import ShortestPathEngine

from conftest import make_location


@pytest.fixture(autouse=True)
def clear_graph_cache():
    graph_repository.load_graph.cache_clear()
    yield
    graph_repository.load_graph.cache_clear()


def test_locations_compare_by_id_only():
    first = make_location("lib", 5.0, -0.1, LocationCategory.LIBRARY, name="Library")
    renamed = make_location("lib", 6.0, -0.2, LocationCategory.OTHER, name="Old Library")

    assert first == renamed
    assert hash(first) == hash(renamed)
    assert len({first, renamed}) == 1


def test_edge_effective_time_and_cost():
    a = make_location("a", 0.0, 0.0)
    b = make_location("b", 0.0, 0.001)
    edge = Edge(a, b, distance=120.0, base_travel_time=2.0, difficulty_multiplier=1.5, path_type="stairs")

    assert edge.effective_time == pytest.approx(3.0)
    assert edge.cost(True) == pytest.approx(3.0)
    assert edge.cost(False) == pytest.approx(120.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"distance": -1.0, "base_travel_time": 1.0},
        {"distance": 1.0, "base_travel_time": -1.0},
        {"distance": 1.0, "base_travel_time": 1.0, "difficulty_multiplier": 0.9},
    ],
)
def test_edge_rejects_invalid_weights(kwargs):
    a = make_location("a", 0.0, 0.0)
    b = make_location("b", 0.0, 0.001)
    with pytest.raises(InvalidInputError):
        Edge(a, b, **kwargs)


def test_lookups(campus):
    assert campus.location_by_id("balme_library").name == "Balme Library"
    assert campus.location_by_id("nowhere") is None
    assert campus.location_by_name("gcb BANK").id == "gcb_bank"
    assert campus.location_by_name("  great hall ").id == "great_hall"
    assert campus.location_by_name("Unknown Place") is None
    assert {location.id for location in campus.locations_by_category(LocationCategory.BANK)} == {
        "gcb_bank",
        "remote_atm",
    }
    assert len(campus) == 9


def test_search_by_keyword_matches_name_description_and_category(campus):
    assert [location.id for location in campus.search_by_keyword("library")] == ["balme_library"]
    assert [location.id for location in campus.search_by_keyword("FOOD")] == ["night_market"]
    assert {location.id for location in campus.search_by_keyword("bank/atm")} == {"gcb_bank", "remote_atm"}
    assert campus.search_by_keyword("zzz") == []


def test_outgoing_edges_are_read_only(campus):
    gate = campus.location_by_id("main_gate")
    edges = campus.outgoing_edges(gate)

    assert isinstance(edges, tuple)
    assert {edge.target.id for edge in edges} == {"admin_block", "great_hall"}
    assert all(edge.source == gate for edge in edges)
    assert campus.outgoing_edges(campus.location_by_id("remote_atm")) == ()


def test_builder_rejects_duplicates_and_unknown_endpoints():
    builder = GraphBuilder().add_location(make_location("a", 0.0, 0.0))
    with pytest.raises(InvalidInputError):
        builder.add_location(make_location("a", 1.0, 1.0))
    with pytest.raises(InvalidInputError):
        builder.add_edge("a", "missing")


def test_builder_defaults_to_walking_weights():
    builder = GraphBuilder().add_locations([make_location("a", 0.0, 0.0), make_location("b", 0.0, 0.01)])
    edge = builder.add_edge("a", "b")
    explicit = builder.add_edge("b", "a", distance=2000.0)

    assert edge.distance == pytest.approx(edge.source.distance_to(edge.target))
    assert edge.base_travel_time == pytest.approx(edge.distance / 83.33)
    assert explicit.base_travel_time == pytest.approx(2000.0 / 83.33)


def test_built_graph_is_not_affected_by_later_builder_changes():
    builder = GraphBuilder().add_locations([make_location("a", 0.0, 0.0), make_location("b", 0.0, 0.01)])
    graph = builder.build()
    builder.add_edge("a", "b")

    assert graph.outgoing_edges(graph.location_by_id("a")) == ()


def _write_graph(path: Path) -> Path:
    document = {
        "locations": [
            {"id": "gate", "name": "Main Gate", "latitude": 5.65, "longitude": -0.187, "category": "entrance"},
            {"id": "lib", "name": "Library", "latitude": 5.652, "longitude": -0.186, "category": "LIBRARY"},
            {"id": "hall", "name": "Hall", "latitude": 5.653, "longitude": -0.185, "category": "castle"},
        ],
        "edges": [
            {"from": "gate", "to": "lib", "distance": 250, "walking_time": 3.0, "difficulty": 1.1, "path_type": "road"},
            {"from": "lib", "to": "hall", "bidirectional": False},
        ],
    }
    graph_file = path / "campus_graph.json"
    graph_file.write_text(json.dumps(document), encoding="utf-8")
    return graph_file


def test_load_graph_from_json(tmp_path: Path):
    graph = graph_repository.load_graph(_write_graph(tmp_path))

    gate = graph.location_by_id("gate")
    library = graph.location_by_id("lib")
    hall = graph.location_by_id("hall")

    assert library.category == LocationCategory.LIBRARY
    assert hall.category == LocationCategory.OTHER
    assert graph.edge_between(gate, library).distance == 250
    assert graph.edge_between(library, gate).effective_time == pytest.approx(3.3)
    assert graph.edge_between(library, hall) is not None
    assert graph.edge_between(hall, library) is None
    assert graph.edge_count() == 3


def test_load_graph_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        graph_repository.load_graph(tmp_path / "missing.json")


def test_build_graph_rejects_bad_rows():
    with pytest.raises(ValueError):
        graph_repository.build_graph({"locations": [{"id": "x", "latitude": "north"}]})
    with pytest.raises(ValueError):
        graph_repository.build_graph(
            {
                "locations": [{"id": "x", "latitude": 0, "longitude": 0}],
                "edges": [{"from": "x", "to": "y"}],
            }
        )


def test_location_is_immutable():
    location = make_location("a", 0.0, 0.0)
    with pytest.raises(AttributeError):
        location.name = "changed"
    assert isinstance(location, Location)


BUNDLED_GRAPH = Path(__file__).resolve().parents[1] / "data" / "campus_graph.json"


def test_bundled_campus_graph_loads_cleanly(caplog):
    with caplog.at_level(logging.WARNING, logger="campusnav.data.graph_repository"):
        graph = graph_repository.load_graph(BUNDLED_GRAPH)

    assert len(graph) == 25
    assert graph.edge_count() == 58
    assert {location.id for location in graph.locations_by_category(LocationCategory.BANK)} == {
        "gcb_bank",
        "uba_bank",
        "stanbic_atm",
    }
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]


@pytest.mark.parametrize("optimize_for_time", [False, True])
def test_bundled_graph_heuristic_is_consistent(optimize_for_time):
    graph = graph_repository.load_graph(BUNDLED_GRAPH)
    for destination in graph.all_locations():
        for location in graph.all_locations():
            for edge in graph.outgoing_edges(location):
                here = heuristic(edge.source, destination, optimize_for_time)
                there = heuristic(edge.target, destination, optimize_for_time)
                assert here <= edge.cost(optimize_for_time) + there + 1e-9


@pytest.mark.parametrize("optimize_for_time", [False, True])
def test_bundled_graph_astar_matches_dijkstra(optimize_for_time):
    graph = graph_repository.load_graph(BUNDLED_GRAPH)
    dijkstra = ShortestPathEngine(graph)
    astar = HeuristicSearchEngine(graph)

    for source, destination in itertools.permutations(graph.all_locations(), 2):
        expected = dijkstra.shortest_path(source, destination, optimize_for_time)
        actual = astar.shortest_path(source, destination, optimize_for_time)
        assert expected is not None
        if optimize_for_time:
            assert actual.total_time == pytest.approx(expected.total_time)
        else:
            assert actual.total_distance == pytest.approx(expected.total_distance)


def test_edges_below_the_straight_line_are_raised(caplog):
    document = {
        "locations": [
            {"id": "a", "latitude": 0.0, "longitude": 0.0},
            {"id": "b", "latitude": 0.0, "longitude": 0.01},
        ],
        "edges": [{"from": "a", "to": "b", "distance": 500, "walking_time": 5.0, "difficulty": 1.2}],
    }

    with caplog.at_level(logging.WARNING):
        graph = graph_repository.build_graph(document)

    a, b = graph.location_by_id("a"), graph.location_by_id("b")
    straight = a.distance_to(b)
    for edge in (graph.edge_between(a, b), graph.edge_between(b, a)):
        assert edge.distance == pytest.approx(straight)
        assert edge.effective_time == pytest.approx(straight / 83.33)
        assert edge.difficulty_multiplier == 1.2
    assert "shorter than the straight line" in caplog.text
    assert "faster than walking speed" in caplog.text


def test_edges_above_the_straight_line_are_kept(caplog):
    document = {
        "locations": [
            {"id": "a", "latitude": 0.0, "longitude": 0.0},
            {"id": "b", "latitude": 0.0, "longitude": 0.001},
        ],
        "edges": [{"from": "a", "to": "b", "distance": 150, "walking_time": 2.0, "bidirectional": False}],
    }

    with caplog.at_level(logging.WARNING):
        graph = graph_repository.build_graph(document)

    edge = graph.edge_between(graph.location_by_id("a"), graph.location_by_id("b"))
    assert edge.distance == 150
    assert edge.base_travel_time == 2.0
    assert caplog.text == ""
