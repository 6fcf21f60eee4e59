"""Payload validation for workspace settings and services."""

from __future__ import annotations

from rest_framework import serializers

from apps.workspaces.config import is_valid_timezone

WEEKDAY_KEYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class WorkspaceUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=255)
    timezone = serializers.CharField(min_length=2, max_length=64)
    brand_tone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    opening_hours = serializers.DictField(
        child=serializers.CharField(allow_blank=True), required=False
    )

    def validate_timezone(self, value: str) -> str:
        value = value.strip()
        if not is_valid_timezone(value):
            raise serializers.ValidationError("Unknown IANA time zone.")
        return value

    def validate_opening_hours(self, value: dict) -> dict:
        unknown = sorted(set(value) - set(WEEKDAY_KEYS))
        if unknown:
            raise serializers.ValidationError(f"Unknown weekday keys: {', '.join(unknown)}")
        return value


class ServiceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
