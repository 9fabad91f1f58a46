"""Tests for the preference store and key helpers."""

from datetime import date

import pytest

from modules.preferences import (
    IPreferenceStore,
    InMemoryPreferenceStore,
    ad_rewards_key,
    daily_plays_key,
    notifications_enabled_key,
    parse_counter,
    parse_flag,
)


class TestInMemoryPreferenceStore:
    def test_implements_interface(self):
        assert isinstance(InMemoryPreferenceStore(), IPreferenceStore)

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        store = InMemoryPreferenceStore()

        await store.set("theme", "dark")
        assert await store.get("theme") == "dark"

        await store.remove("theme")
        assert await store.get("theme") is None

    @pytest.mark.asyncio
    async def test_remove_missing_key_is_noop(self):
        store = InMemoryPreferenceStore({"a": "1"})

        await store.remove("b")

        assert store.keys() == ["a"]


class TestKeys:
    def test_keys_are_namespaced_per_user(self):
        assert notifications_enabled_key("u1") != notifications_enabled_key("u2")
        assert ad_rewards_key("u1") == "ad_reward:u1"

    def test_daily_key_includes_iso_day(self):
        assert daily_plays_key("u1", date(2025, 3, 9)) == "daily_plays:u1:2025-03-09"


class TestParsing:
    @pytest.mark.parametrize(
        "raw,expected",
        [(None, 0), ("", 0), ("7", 7), ("-3", 0), ("abc", 0)],
    )
    def test_parse_counter(self, raw, expected):
        assert parse_counter(raw) == expected

    @pytest.mark.parametrize(
        "raw,default,expected",
        [(None, True, True), (None, False, False), ("true", False, True), ("False", True, False), (" TRUE ", False, True)],
    )
    def test_parse_flag(self, raw, default, expected):
        assert parse_flag(raw, default) is expected
