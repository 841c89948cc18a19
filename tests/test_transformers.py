"""Tests for key-case normalization and write-field filtering."""

import copy

import pytest

from conftest import ROOM_ONE
from core.transformers import camel_case_keys, camel_key, pick, snake_case_keys, snake_key


class TestKeyNaming:
    """Single-key conversions."""

    @pytest.mark.parametrize(
        ("wire", "domain"),
        [
            ("display_name", "displayName"),
            ("is_recording_available", "isRecordingAvailable"),
            ("rooms_callback_url", "roomsCallbackUrl"),
            ("id", "id"),
            ("metadata", "metadata"),
        ],
    )
    def test_snake_and_camel_are_inverse(self, wire, domain):
        assert camel_key(wire) == domain
        assert snake_key(domain) == wire

    def test_keys_without_convertible_characters_are_unchanged(self):
        assert camel_key("type") == "type"
        assert snake_key("type") == "type"

    def test_camel_key_is_idempotent(self):
        assert camel_key(camel_key("expire_after_use")) == "expireAfterUse"

    @pytest.mark.parametrize(
        ("wire", "domain"),
        [
            ("h264_enabled", "h264Enabled"),
            ("layout_v2", "layoutV2"),
            ("x_request_id", "xRequestId"),
        ],
    )
    def test_digits_stay_attached_to_their_word(self, wire, domain):
        assert camel_key(wire) == domain
        assert snake_key(domain) == wire

    @pytest.mark.parametrize("key", ["v2beta", "h264", "content-type", "x-request-id", "utf8.encoding"])
    def test_keys_without_underscores_or_capitals_are_unchanged(self, key):
        assert camel_key(key) == key
        assert snake_key(key) == key


class TestCamelCaseKeys:
    """wire -> domain."""

    def test_scalars_and_none_pass_through(self):
        for value in (None, 0, 1.5, "display_name", True):
            assert camel_case_keys(value, True) == value

    def test_deep_renames_nested_maps_and_lists(self):
        result = camel_case_keys(
            {"callback_urls": {"rooms_callback_url": "x"}, "stream_ids": [{"stream_id": 1}, "raw_value"]},
            True,
        )

        assert result == {
            "callbackUrls": {"roomsCallbackUrl": "x"},
            "streamIds": [{"streamId": 1}, "raw_value"],
        }

    def test_shallow_renames_top_level_only(self):
        value = {"recording_options": {"auto_record": True}}

        result = camel_case_keys(value, False)

        assert result == {"recordingOptions": {"auto_record": True}}
        assert result["recordingOptions"] is value["recording_options"]

    def test_shallow_list_renames_each_element_top_level(self):
        result = camel_case_keys([{"page_size": 1, "nested_map": {"a_b": 1}}, 3])

        assert result == [{"pageSize": 1, "nestedMap": {"a_b": 1}}, 3]

    def test_sequences_keep_order_and_length(self):
        value = [{"a_b": i} for i in range(5)]

        result = camel_case_keys(value, True)

        assert [item["aB"] for item in result] == [0, 1, 2, 3, 4]

    def test_tuples_become_lists(self):
        assert camel_case_keys(({"a_b": 1},), True) == [{"aB": 1}]

    def test_does_not_mutate_input(self):
        original = copy.deepcopy(ROOM_ONE)

        result = camel_case_keys(ROOM_ONE, True)

        assert ROOM_ONE == original
        assert result is not ROOM_ONE

    def test_non_string_keys_are_kept(self):
        assert camel_case_keys({1: {"a_b": 2}}, True) == {1: {"aB": 2}}

    def test_idempotent_on_camel_case_map(self):
        domain = camel_case_keys(ROOM_ONE, True)

        assert camel_case_keys(domain, True) == domain


class TestSnakeCaseKeys:
    """domain -> wire."""

    def test_deep_renames_nested_structures(self):
        result = snake_case_keys({"availableFeatures": {"isChatAvailable": True}, "uiSettings": [{"language": "en"}]}, True)

        assert result == {"available_features": {"is_chat_available": True}, "ui_settings": [{"language": "en"}]}

    def test_round_trip_wire_domain_wire(self):
        assert snake_case_keys(camel_case_keys(ROOM_ONE, True), True) == ROOM_ONE

    def test_round_trip_domain_wire_domain(self):
        domain = camel_case_keys(ROOM_ONE, True)

        assert camel_case_keys(snake_case_keys(domain, True), True) == domain

    def test_round_trip_keeps_digit_and_punctuation_keys(self):
        wire = {"h264_enabled": True, "metadata": {"v2beta": 1, "content-type": "x", "x-request-id": "r"}}

        domain = camel_case_keys(wire, True)

        assert domain == {"h264Enabled": True, "metadata": {"v2beta": 1, "content-type": "x", "x-request-id": "r"}}
        assert snake_case_keys(domain, True) == wire


class TestPick:
    """Write-field filtering."""

    def test_keeps_only_allowed_keys_in_allowed_order(self):
        result = pick({"extra": 1, "name": "n", "id": "x", "type": "t"}, ["type", "name"])

        assert result == {"type": "t", "name": "n"}
        assert list(result) == ["type", "name"]

    def test_missing_allowed_keys_are_omitted(self):
        result = pick({"name": "n"}, ["name", "expires_at"])

        assert result == {"name": "n"}
        assert "expires_at" not in result

    def test_present_none_values_are_kept(self):
        assert pick({"theme_id": None}, ["theme_id"]) == {"theme_id": None}

    def test_returns_new_mapping(self):
        source = {"name": "n"}

        result = pick(source, ["name"])

        result["name"] = "changed"
        assert source == {"name": "n"}

    def test_duplicate_allowed_keys_do_not_duplicate_output(self):
        assert pick({"name": "n"}, ["name", "name"]) == {"name": "n"}
