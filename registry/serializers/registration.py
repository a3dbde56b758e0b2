import html
import re

import bleach
from rest_framework import serializers

_MOBILE_RE = re.compile(r'^[0-9]{10}$')
_AADHAAR_RE = re.compile(r'^[0-9]{12}$')


def _clean(v):
    # plain text: drop every tag, then undo bleach's entity escaping
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True)).strip()


class RegistrationSerializer(serializers.Serializer):
    """Input validation for creating and editing a registration.

    Use ``partial=True`` for edits.  Contact numbers must be exactly ten
    digits and Aadhaar exactly twelve; empty optional values are stored
    as ``None``.
    """
    name = serializers.CharField(max_length=100)
    surname = serializers.CharField(max_length=100)
    mobile_number = serializers.CharField(max_length=10)
    alternate_mobile_number = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=10)
    emergency_contact_number = serializers.CharField(max_length=10)
    aadhaar_number = serializers.CharField(max_length=14)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    age = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=150)
    bp = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    hypertension = serializers.ChoiceField(choices=['Yes', 'No'], required=False, allow_blank=True, allow_null=True)
    sugar = serializers.ChoiceField(choices=['Yes', 'No'], required=False, allow_blank=True, allow_null=True)
    image = serializers.FileField(required=False, allow_null=True, write_only=True)

    def validate_name(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_surname(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Surname is required')
        return v

    def validate_mobile_number(self, v):
        v = (v or '').strip()
        if not _MOBILE_RE.match(v):
            raise serializers.ValidationError('Mobile number must be 10 digits')
        return v

    def validate_alternate_mobile_number(self, v):
        v = (v or '').strip()
        if not v:
            return None
        if not _MOBILE_RE.match(v):
            raise serializers.ValidationError('Alternate mobile must be 10 digits')
        return v

    def validate_emergency_contact_number(self, v):
        v = (v or '').strip()
        if not _MOBILE_RE.match(v):
            raise serializers.ValidationError('Emergency contact must be 10 digits')
        return v

    def validate_aadhaar_number(self, v):
        # "1234 5678 9012" is accepted and stored without the spaces
        v = (v or '').replace(' ', '')
        if not _AADHAAR_RE.match(v):
            raise serializers.ValidationError('Aadhaar must be 12 digits')
        return v

    def validate_address(self, v):
        return _clean(v) or None

    def validate_bp(self, v):
        return _clean(v) or None

    def validate_hypertension(self, v):
        return v or None

    def validate_sugar(self, v):
        return v or None


class RegistrationListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, max_length=100)
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=200)


class BadgeQuerySerializer(serializers.Serializer):
    """``ids`` is a comma separated list of registration UUIDs."""
    ids = serializers.CharField()

    def validate_ids(self, v):
        ids = []
        for raw in v.split(','):
            raw = raw.strip()
            if not raw:
                continue
            try:
                ids.append(str(serializers.UUIDField().to_internal_value(raw)))
            except serializers.ValidationError:
                raise serializers.ValidationError(f'invalid registration id: {raw}')
        if not ids:
            raise serializers.ValidationError('at least one registration id is required')
        return ids
