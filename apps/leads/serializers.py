"""Payload validation for manual lead creation."""

from __future__ import annotations

from rest_framework import serializers

from apps.leads.models import LeadSource
from apps.leads.utils import normalize_phone


class LeadCreateSerializer(serializers.Serializer):
    first_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=150)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=120)
    consent_whatsapp = serializers.BooleanField(required=False, default=False)
    desired_service = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    problem_summary = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    source = serializers.ChoiceField(choices=LeadSource.choices, required=False, default=LeadSource.MANUAL)

    def validate_phone(self, value):
        if value in (None, ""):
            return None
        normalized = normalize_phone(value)
        if normalized is None:
            raise serializers.ValidationError("Phone number must contain digits.")
        return normalized

    def validate(self, attrs):
        for field in ("first_name", "last_name", "city", "desired_service", "problem_summary"):
            if attrs.get(field) == "":
                attrs[field] = None
        return attrs
