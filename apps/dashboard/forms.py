from django import forms

from apps.leads.utils import normalize_phone
from apps.workspaces.config import is_valid_timezone


class LeadForm(forms.Form):
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)
    phone = forms.CharField(max_length=32, required=False)
    city = forms.CharField(max_length=120, required=False)
    desired_service = forms.CharField(max_length=255, required=False)
    problem_summary = forms.CharField(widget=forms.Textarea, required=False)
    consent_whatsapp = forms.BooleanField(required=False)

    def clean_phone(self):
        raw = self.cleaned_data.get("phone")
        if not raw:
            return None
        phone = normalize_phone(raw)
        if phone is None:
            raise forms.ValidationError("Phone number must contain digits.")
        return phone


class ServiceForm(forms.Form):
    name = forms.CharField(min_length=2, max_length=255)
    description = forms.CharField(widget=forms.Textarea, required=False)


class WorkspaceSettingsForm(forms.Form):
    name = forms.CharField(min_length=2, max_length=255)
    timezone = forms.CharField(max_length=64)
    brand_tone = forms.CharField(max_length=255, required=False)

    def clean_timezone(self):
        value = self.cleaned_data["timezone"].strip()
        if not is_valid_timezone(value):
            raise forms.ValidationError("Unknown IANA time zone.")
        return value


class ChatMessageForm(forms.Form):
    message = forms.CharField(max_length=2000)
