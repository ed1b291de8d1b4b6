"""Tests for scene line classification."""
from node_generator.grammar import (
    NodeDeclaration,
    PropertyAssignment,
    ResourceDeclaration,
    is_section_header,
    parse_line,
    scan_attributes,
    split_tag,
)


class TestParseLine:
    """Each line is a node, a resource, a property, or nothing."""

    def test_node_declaration(self):
        record = parse_line('[node name="Player" type="CharacterBody2D" parent="."]')
        assert record == NodeDeclaration(name="Player", type="CharacterBody2D", parent=".")

    def test_node_without_parent_defaults_to_root(self):
        record = parse_line('[node name="Root" type="Node2D"]')
        assert record == NodeDeclaration(name="Root", type="Node2D", parent=".")

    def test_attribute_order_does_not_matter(self):
        record = parse_line('[node parent="Root" type="Sprite2D" name="Sprite"]')
        assert record == NodeDeclaration(name="Sprite", type="Sprite2D", parent="Root")

    def test_extra_spacing_around_equals(self):
        record = parse_line('[node  name = "Spaced"   type="Node"  ]')
        assert isinstance(record, NodeDeclaration)
        assert record.name == "Spaced"

    def test_node_missing_type_is_unrecognized(self):
        assert parse_line('[node name="Orphan" parent="."]') is None

    def test_node_missing_name_is_unrecognized(self):
        assert parse_line('[node type="Node2D"]') is None

    def test_resource_declaration(self):
        record = parse_line('[ext_resource type="Script" path="res://scripts/Player.cs" id="1_player"]')
        assert record == ResourceDeclaration(id="1_player", path="res://scripts/Player.cs", type="Script")

    def test_resource_missing_path_is_unrecognized(self):
        assert parse_line('[ext_resource type="Script" id="1"]') is None

    def test_property_assignment(self):
        assert parse_line("speed = 300.0") == PropertyAssignment(key="speed", value="300.0")

    def test_property_value_keeps_inner_equals(self):
        record = parse_line('text = "a = b"')
        assert record == PropertyAssignment(key="text", value='"a = b"')

    def test_property_requires_spaced_equals(self):
        assert parse_line("speed=300") is None

    def test_other_headers_and_blank_lines(self):
        assert parse_line("[gd_scene load_steps=3 format=3]") is None
        assert parse_line('[sub_resource type="RectangleShape2D" id="1"]') is None
        assert parse_line("") is None
        assert parse_line("   ") is None

    def test_surrounding_whitespace_is_ignored(self):
        record = parse_line('   [node name="Indented" type="Node"]   ')
        assert isinstance(record, NodeDeclaration)


class TestAttributes:

    def test_unquoted_values(self):
        attrs = scan_attributes('load_steps=4 format=3 uid="uid://abc"')
        assert attrs == {"load_steps": "4", "format": "3", "uid": "uid://abc"}

    def test_unquoted_call_with_spaces_inside_parens(self):
        attrs = scan_attributes('name="Level" parent="." instance=ExtResource( "2" )')
        assert attrs["instance"] == 'ExtResource( "2" )'
        assert attrs["name"] == "Level"

    def test_later_duplicate_wins(self):
        assert scan_attributes('name="A" name="B"')["name"] == "B"

    def test_unterminated_quote_stops_scan(self):
        assert scan_attributes('name="A" type="Node') == {"name": "A"}

    def test_split_tag(self):
        assert split_tag('[node name="A"]') == ("node", 'name="A"')
        assert split_tag("[editable]") == ("editable", "")

    def test_is_section_header(self):
        assert is_section_header("[node]")
        assert is_section_header("[connection signal=\"x\"]")
        assert not is_section_header("[1, 2, 3]")
        assert not is_section_header("speed = 1")
