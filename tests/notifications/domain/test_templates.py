"""Tests for notification templates and the builder."""

import pytest
from notifications.templates import FALLBACK, TEMPLATE_REGISTRY, build, get_template
from notifications.templates.base import PLACEHOLDER, or_placeholder
from shared.events.envelope import EventType


class TestRegistry:
    def test_every_event_type_has_a_template(self):
        assert set(TEMPLATE_REGISTRY) == {t.value for t in EventType}

    def test_template_event_type_matches_key(self):
        for key, template_cls in TEMPLATE_REGISTRY.items():
            assert template_cls.event_type == key

    def test_get_template_unknown(self):
        with pytest.raises(ValueError, match="No template registered"):
            get_template("order.placed")


class TestPlaceholder:
    @pytest.mark.parametrize("value", [None, "", []])
    def test_missing_values(self, value):
        assert or_placeholder(value) == PLACEHOLDER

    def test_present_value(self):
        assert or_placeholder(0) == "0"


class TestPassportTemplates:
    def test_passport_created(self):
        result = build(
            EventType.PASSPORT_CREATED,
            {"batteryIdentifier": "B-1", "modelName": "M", "manufacturerName": "Acme"},
        )
        assert result["title"] == "New Battery Passport Created"
        assert "Battery Identifier: B-1" in result["body"]
        assert "Model: M" in result["body"]
        assert "Manufacturer: Acme" in result["body"]

    def test_passport_created_missing_fields(self):
        result = build("passport.created", {"batteryIdentifier": "B-1"})
        assert "Model: N/A" in result["body"]
        assert "Manufacturer: N/A" in result["body"]

    def test_passport_updated_lists_fields(self):
        result = build(
            EventType.PASSPORT_UPDATED,
            {"batteryIdentifier": "B-1", "updatedFields": ["modelName", "capacity"]},
        )
        assert result["title"] == "Battery Passport Updated"
        assert "Updated Fields: modelName, capacity" in result["body"]

    def test_passport_updated_no_fields(self):
        result = build(EventType.PASSPORT_UPDATED, {"batteryIdentifier": "B-1", "updatedFields": []})
        assert "Updated Fields: N/A" in result["body"]

    def test_passport_deleted_without_actor(self):
        result = build(EventType.PASSPORT_DELETED, {"batteryIdentifier": "B-1"})
        assert result["title"] == "Battery Passport Deleted"
        assert "Deleted By: N/A" in result["body"]


class TestOtherTemplates:
    def test_document_uploaded_size_in_megabytes(self):
        result = build(EventType.DOCUMENT_UPLOADED, {"fileName": "cert.pdf", "fileSize": 3 * 1024 * 1024})
        assert "File Name: cert.pdf" in result["body"]
        assert "Size: 3.00 MB" in result["body"]

    def test_document_uploaded_missing_size(self):
        result = build(EventType.DOCUMENT_UPLOADED, {"fileName": "cert.pdf"})
        assert "Size: N/A" in result["body"]

    def test_document_deleted(self):
        result = build(EventType.DOCUMENT_DELETED, {"fileName": "cert.pdf", "deletedBy": "user-001"})
        assert "Deleted By: user-001" in result["body"]

    def test_user_registered(self):
        result = build(EventType.USER_REGISTERED, {"userId": "user-001"})
        assert result["title"] == "Welcome to Battery Passport System"

    def test_user_login_time(self):
        result = build(EventType.USER_LOGIN, {"loginAt": "2026-01-01T10:00:00Z"})
        assert "Login Time: 2026-01-01T10:00:00Z" in result["body"]

    def test_user_login_without_time(self):
        assert "Login Time: N/A" in build(EventType.USER_LOGIN, {})["body"]

    def test_system_alert_uses_message(self):
        result = build(EventType.SYSTEM_ALERT, {"message": "Disk almost full"})
        assert result == {"title": "System Alert", "body": "Disk almost full"}

    def test_general_info_defaults(self):
        result = build(EventType.GENERAL_INFO, None)
        assert result["title"] == "Information"


class TestFallback:
    def test_unknown_event_type(self):
        assert build("order.placed", {"orderId": "o1"}) == FALLBACK

    def test_fallback_is_a_copy(self):
        result = build("order.placed")
        result["title"] = "changed"
        assert FALLBACK["title"] == "Notification"

    def test_build_is_pure(self):
        payload = {"batteryIdentifier": "B-1"}
        assert build(EventType.PASSPORT_CREATED, payload) == build(EventType.PASSPORT_CREATED, payload)
        assert payload == {"batteryIdentifier": "B-1"}
