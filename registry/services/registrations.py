"""
Registration persistence and queries.

Views stay thin: validation happens in the serializers, everything that
touches the database or photo storage lives here.  Failures from storage
or the database propagate to the caller and end up in the API error
envelope.
"""
from __future__ import annotations

import csv
import io
import logging

from django.db import transaction
from django.db.models import Q, Value
from django.db.models.functions import Concat
from rest_framework.exceptions import NotFound

from registry.models import Registration
from registry.services.audit import log_action
from registry.services.storage import upload_photo, delete_photo, photo_url

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'name',
    'surname',
    'mobile_number',
    'alternate_mobile_number',
    'emergency_contact_number',
    'aadhaar_number',
    'address',
    'age',
    'bp',
    'hypertension',
    'sugar',
)

EXPORT_COLUMNS = ('id',) + EDITABLE_FIELDS + ('image_url', 'created_at')

# spreadsheet apps evaluate cells starting with these as formulas
_FORMULA_PREFIXES = ('=', '+', '-', '@', '\t', '\r')


def registration_to_dict(reg: Registration, request=None) -> dict:
    data = {'id': str(reg.id)}
    for field in EDITABLE_FIELDS:
        data[field] = getattr(reg, field)
    data['image_url'] = photo_url(reg.image, request)
    data['created_at'] = reg.created_at.isoformat() if reg.created_at else None
    data['updated_at'] = reg.updated_at.isoformat() if reg.updated_at else None
    return data


def get_registration(pk) -> Registration:
    reg = Registration.objects.filter(pk=pk).first()
    if not reg:
        raise NotFound('registration not found')
    return reg


def search_registrations(q: str | None = None):
    """Newest first; ``q`` matches the full name or part of a mobile/Aadhaar number."""
    qs = Registration.objects.order_by('-created_at')
    q = (q or '').strip()
    if q:
        qs = qs.annotate(full_name_search=Concat('name', Value(' '), 'surname')).filter(
            Q(full_name_search__icontains=q)
            | Q(mobile_number__contains=q)
            | Q(aadhaar_number__contains=q.replace(' ', ''))
        )
    return qs


def create_registration(*, user=None, image=None, **fields) -> Registration:
    image_name = None
    if image:
        image_name, _ = upload_photo(image)
    try:
        with transaction.atomic():
            reg = Registration.objects.create(
                created_by=user if getattr(user, 'pk', None) else None,
                image=image_name,
                **{k: v for k, v in fields.items() if k in EDITABLE_FIELDS},
            )
            log_action(user=user, action='registration_create', object_type='registration', object_id=reg.id,
                       detail={'has_photo': bool(image_name)})
    except Exception:
        # keep storage consistent with the database
        delete_photo(image_name)
        raise
    return reg


def update_registration(reg: Registration, *, user=None, **fields) -> Registration:
    changed = [k for k in EDITABLE_FIELDS if k in fields and getattr(reg, k) != fields[k]]
    for k in changed:
        setattr(reg, k, fields[k])
    if changed:
        with transaction.atomic():
            reg.save(update_fields=changed + ['updated_at'])
            log_action(user=user, action='registration_update', object_type='registration', object_id=reg.id,
                       detail={'fields': changed})
    return reg


def replace_photo(reg: Registration, image, *, user=None) -> Registration:
    old = reg.image
    new_name, _ = upload_photo(image)
    try:
        reg.image = new_name
        reg.save(update_fields=['image', 'updated_at'])
    except Exception:
        reg.image = old
        delete_photo(new_name)
        raise
    delete_photo(old)
    log_action(user=user, action='registration_update', object_type='registration', object_id=reg.id,
               detail={'fields': ['image']})
    return reg


def delete_registration(reg: Registration, *, user=None) -> None:
    image = reg.image
    reg_id = reg.id
    with transaction.atomic():
        reg.delete()
        log_action(user=user, action='registration_delete', object_type='registration', object_id=reg_id)
    delete_photo(image)


def _csv_cell(value):
    if value is None:
        return ''
    if isinstance(value, str) and value.startswith(_FORMULA_PREFIXES):
        return "'" + value
    return value


def export_csv(registrations, request=None) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(EXPORT_COLUMNS)
    count = 0
    for reg in registrations:
        row = registration_to_dict(reg, request)
        writer.writerow([_csv_cell(row.get(c)) for c in EXPORT_COLUMNS])
        count += 1
    logger.info('exported %d registrations', count)
    return buf.getvalue()
