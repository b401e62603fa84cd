"""Unit tests for the ProfileService (remembered display name and avatar)."""

import pytest


def test_recall_without_saved_values(profiles):
    profile = profiles.recall("confession")
    assert profile.username is None
    assert profile.avatar is None


def test_remember_is_per_form(profiles, storage):
    profiles.remember("comment", "night-owl", "https://api.dicebear.com/7.x/bottts/svg?seed=o")

    assert profiles.recall("comment").username == "night-owl"
    assert profiles.recall("confession").username is None
    assert storage.get("commentUsername") == "night-owl"


def test_none_leaves_saved_value_untouched(profiles):
    profiles.remember("confession", "first", "https://api.dicebear.com/7.x/micah/svg?seed=a")
    profiles.remember("confession", None, None)

    profile = profiles.recall("confession")
    assert profile.username == "first"
    assert profile.avatar == "https://api.dicebear.com/7.x/micah/svg?seed=a"


def test_unknown_form_is_rejected(profiles):
    with pytest.raises(ValueError):
        profiles.recall("signup")
