from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.preferences import AppearancePreferencesUpdate, Preferences, ThemeUpdate
from app.schemas.user import UserAccount


def test_missing_preferences_use_defaults() -> None:
    prefs = Preferences.from_metadata({"full_name": "Rina"})

    assert prefs.theme == "system"
    assert prefs.reduce_animations is False
    assert prefs.email_notifications is True
    assert prefs.activity_reminders is True
    assert prefs.achievement_notifications is True
    assert prefs.marketing_emails is False


def test_malformed_values_fall_back_to_defaults() -> None:
    prefs = Preferences.from_metadata(
        {"preferences": {"theme": "neon", "reduceAnimations": "yes", "emailNotifications": "maybe", "marketingEmails": None}}
    )

    assert prefs.theme == "system"
    assert prefs.reduce_animations is True
    assert prefs.email_notifications is True
    assert prefs.marketing_emails is False


def test_non_dict_preferences_are_ignored() -> None:
    assert Preferences.from_metadata({"preferences": "dark"}) == Preferences()


def test_merge_only_touches_given_fields_and_keeps_unknown_keys() -> None:
    prefs = Preferences.from_metadata(
        {"preferences": {"theme": "dark", "emailNotifications": False, "language": "id"}}
    )

    merged = prefs.merged(theme="light", reduce_animations=True, marketing_emails=None)
    stored = merged.to_metadata()

    assert stored["theme"] == "light"
    assert stored["reduceAnimations"] is True
    assert stored["emailNotifications"] is False
    assert stored["marketingEmails"] is False
    assert stored["language"] == "id"


def test_user_account_reads_metadata() -> None:
    user = UserAccount.from_auth_payload(
        {"id": "u1", "email": "rina@example.com", "user_metadata": {"full_name": "  rina   putri ", "preferences": {"theme": "dark"}}}
    )

    assert user.full_name == "rina putri"
    assert user.display_name == "rina putri"
    assert user.initials == "RP"
    assert user.preferences.theme == "dark"


def test_user_account_fallbacks() -> None:
    user = UserAccount.from_auth_payload({"id": "u1", "email": "zed@example.com", "user_metadata": None})

    assert user.display_name == "User"
    assert user.initials == "Z"
    assert UserAccount.from_auth_payload({"id": "u2"}).initials == "U"


def test_theme_updates_reject_unknown_themes() -> None:
    assert ThemeUpdate(theme=" Dark ").theme == "dark"
    with pytest.raises(ValidationError):
        ThemeUpdate(theme="neon")
    with pytest.raises(ValidationError):
        AppearancePreferencesUpdate(theme="neon")
    assert AppearancePreferencesUpdate(reduce_animations=True).theme is None
