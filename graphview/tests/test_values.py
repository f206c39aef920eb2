import json
from unittest.mock import MagicMock

import pytest
import neo4j.time
from neo4j.graph import Graph, Node, Relationship
from neo4j.spatial import CartesianPoint

from graphview.graph.values import classify_value, to_identity
from graphview.types import NodeValue, RelationshipValue


def driver_node(element_id: str, labels, properties) -> MagicMock:
    node = MagicMock(spec=Node)
    node.element_id = element_id
    node.labels = frozenset(labels)
    node.keys.return_value = list(properties)
    node.__getitem__.side_effect = properties.__getitem__
    return node


def driver_relationship(element_id: str, rel_type: str, start: str, end: str) -> MagicMock:
    rel = MagicMock(spec=Relationship)
    rel.element_id = element_id
    rel.type = rel_type
    rel.start_node = MagicMock(element_id=start)
    rel.end_node = MagicMock(element_id=end)
    rel.keys.return_value = []
    return rel


class TestToIdentity:
    """Test conversion of raw identities to integers."""

    @pytest.mark.parametrize("raw, expected", [
        (5, 5),
        (5.0, 5),
        ("12", 12),
        ("4:2d0b1c5e-9a1f-4c1e-a8a8-1d2b3c4d5e6f:17", 17),
    ])
    def test_accepted(self, raw, expected):
        assert to_identity(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, 1.5, "abc", "4:db:x", [1], {}])
    def test_rejected(self, raw):
        assert to_identity(raw) is None


class TestClassifyValue:
    """Test that values are resolved once into node or relationship values."""

    def test_mapping_node(self):
        value = classify_value({"identity": 1, "labels": ["Person"], "properties": {"name": "Ana"}})

        assert value == NodeValue(identity=1, labels=["Person"], properties={"name": "Ana"})

    def test_mapping_relationship(self):
        value = classify_value({"identity": 3, "type": "KNOWS", "start": 1, "end": 2})

        assert value == RelationshipValue(identity=3, type="KNOWS", start=1, end=2, properties={})

    def test_node_shape_wins_over_relationship_shape(self):
        value = classify_value({"identity": 1, "labels": [], "type": "X", "start": 1, "end": 2})

        assert isinstance(value, NodeValue)

    def test_labels_must_be_a_collection(self):
        assert classify_value({"identity": 1, "labels": "Person"}) is None

    @pytest.mark.parametrize("value", [None, 3, "text", 2.5, [1, 2], {"name": "Ana"}])
    def test_scalars(self, value):
        assert classify_value(value) is None

    def test_driver_node(self):
        node = driver_node("4:db:7", ["Person", "Admin"], {"name": "Ana"})

        value = classify_value(node)

        assert value == NodeValue(identity=7, labels=["Admin", "Person"], properties={"name": "Ana"})

    def test_driver_relationship(self):
        rel = driver_relationship("5:db:30", "KNOWS", "4:db:1", "4:db:2")

        value = classify_value(rel)

        assert value == RelationshipValue(identity=30, type="KNOWS", start=1, end=2, properties={})

    def test_driver_relationship_without_endpoints(self):
        rel = driver_relationship("5:db:30", "KNOWS", "4:db:1", "4:db:2")
        rel.end_node = None

        assert classify_value(rel) is None


class TestPropertyValues:
    """Test that driver property values come out JSON-native."""

    def test_temporal_spatial_and_nested_node_properties(self):
        born = neo4j.time.DateTime(2020, 1, 1, 0, 0, 0)
        node = Node(Graph(), "4:db:1", 1, {"Person"}, {
            "name": "Ana",
            "born": born,
            "home": CartesianPoint((1.0, 2.0)),
            "visits": [neo4j.time.Date(2021, 5, 4), {"stay": neo4j.time.Duration(days=3)}],
            "photo": b"\x01\xff",
        })

        value = classify_value(node)

        assert value.identity == 1
        assert value.properties["name"] == "Ana"
        assert value.properties["born"] == born.iso_format()
        assert value.properties["born"].startswith("2020-01-01T00:00:00")
        assert value.properties["home"] == {"srid": 7203, "coordinates": [1.0, 2.0]}
        assert value.properties["visits"] == [
            neo4j.time.Date(2021, 5, 4).iso_format(),
            {"stay": neo4j.time.Duration(days=3).iso_format()},
        ]
        assert value.properties["photo"] == "01ff"
        json.dumps(value.properties)

    def test_relationship_properties(self):
        graph = Graph()
        start = Node(graph, "4:db:1", 1, {"Person"}, {})
        end = Node(graph, "4:db:2", 2, {"Person"}, {})
        rel = graph.relationship_type("KNOWS")(graph, "5:db:9", 9, {"since": neo4j.time.Date(2019, 3, 1)})
        rel._start_node = start
        rel._end_node = end

        value = classify_value(rel)

        assert value == RelationshipValue(
            identity=9, type="KNOWS", start=1, end=2,
            properties={"since": neo4j.time.Date(2019, 3, 1).iso_format()},
        )

    def test_mapping_properties_are_converted(self):
        value = classify_value({
            "identity": 3,
            "labels": ["Event"],
            "properties": {"at": neo4j.time.DateTime(2024, 6, 1, 12, 0, 0)},
        })

        assert isinstance(value.properties["at"], str)
