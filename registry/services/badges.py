"""
Badge and ID card view-models.

A badge is rendered from an immutable snapshot of a registration: free
text goes through :func:`~registry.services.hindi.to_hindi_text`, numbers
through :func:`~registry.services.hindi.to_hindi_number`.  The printable
sheet is an A4 page holding ``BADGES_PER_PAGE`` cards in two columns.
"""
from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, asdict

from django.conf import settings
from django.utils import timezone

from registry.models import Registration
from registry.services.hindi import to_hindi_text, to_hindi_number
from registry.services.storage import photo_url

_AADHAAR_GROUP_RE = re.compile(r'(\d{4})')


@dataclass(frozen=True)
class Badge:
    id: str
    full_name: str
    name_hindi: str
    address_hindi: str
    emergency_numbers: str
    emergency_numbers_hindi: str
    age_hindi: str
    hypertension: bool
    diabetes: bool
    image_url: str | None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class IdCard:
    id: str
    member_id: str
    name: str
    surname: str
    mobile_number: str
    aadhaar_number: str
    image_url: str | None
    issue_date: datetime.date
    expiry_date: datetime.date

    def to_dict(self) -> dict:
        data = asdict(self)
        data['issue_date'] = self.issue_date.isoformat()
        data['expiry_date'] = self.expiry_date.isoformat()
        return data


def format_aadhaar(aadhaar: str) -> str:
    """``"123456789012"`` -> ``"1234 5678 9012"``."""
    return _AADHAAR_GROUP_RE.sub(r'\1 ', aadhaar or '').strip()


def emergency_numbers(reg: Registration) -> str:
    numbers = [(v or '').strip() for v in (reg.emergency_contact_number, reg.alternate_mobile_number)]
    return '/'.join(n for n in numbers if n)


def build_badge(reg: Registration, request=None) -> Badge:
    numbers = emergency_numbers(reg)
    return Badge(
        id=str(reg.id),
        full_name=reg.full_name,
        name_hindi=to_hindi_text(reg.full_name),
        address_hindi=to_hindi_text(reg.address or '-'),
        emergency_numbers=numbers,
        emergency_numbers_hindi=to_hindi_number(numbers or '-'),
        age_hindi=to_hindi_number(reg.age) if reg.age is not None else '-',
        hypertension=reg.hypertension == 'Yes',
        diabetes=reg.sugar == 'Yes',
        image_url=photo_url(reg.image, request),
    )


def paginate_badges(badges, per_page: int | None = None) -> list[list[Badge]]:
    per_page = per_page or settings.BADGES_PER_PAGE
    badges = list(badges)
    return [badges[i:i + per_page] for i in range(0, len(badges), per_page)]


def member_id(reg: Registration) -> str:
    # UUID keys have no natural number
    return f"{settings.ID_CARD_PREFIX}-{reg.id.hex[:6].upper()}"


def build_id_card(reg: Registration, today: datetime.date | None = None, request=None) -> IdCard:
    today = today or timezone.localdate()
    try:
        expiry = today.replace(year=today.year + 1)
    except ValueError:
        # 29 February
        expiry = today.replace(year=today.year + 1, day=28)
    return IdCard(
        id=str(reg.id),
        member_id=member_id(reg),
        name=reg.name,
        surname=reg.surname,
        mobile_number=reg.mobile_number,
        aadhaar_number=format_aadhaar(reg.aadhaar_number),
        image_url=photo_url(reg.image, request),
        issue_date=today,
        expiry_date=expiry,
    )
