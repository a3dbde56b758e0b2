import datetime

import pytest
from django.template import Context, Template

from registry.services.badges import (
    build_badge,
    build_id_card,
    emergency_numbers,
    format_aadhaar,
    paginate_badges,
)

pytestmark = pytest.mark.django_db


def test_badge_for_latin_registration(make_registration):
    reg = make_registration(alternate_mobile_number='9000000001')
    badge = build_badge(reg)
    assert badge.full_name == 'Ram Singh'
    assert badge.name_hindi == 'रम सिनघ'
    assert badge.age_hindi == '६५'
    assert badge.address_hindi == '-'
    assert badge.emergency_numbers == '9123456789/9000000001'
    assert badge.emergency_numbers_hindi == '९१२३४५६७८९/९०००००००००१'
    assert badge.hypertension is False and badge.diabetes is False
    assert badge.image_url is None


def test_badge_keeps_hindi_text_and_flags(make_registration):
    reg = make_registration(name='सुरेश', surname='कुमार', address='गली 4, पीथमपुर', age=None,
                            hypertension='Yes', sugar='Yes')
    badge = build_badge(reg)
    assert badge.name_hindi == 'सुरेश कुमार'
    assert badge.address_hindi == 'गली ४, पीथमपुर'
    assert badge.age_hindi == '-'
    assert badge.hypertension and badge.diabetes


def test_emergency_numbers_skip_blank(make_registration):
    reg = make_registration(alternate_mobile_number='  ')
    assert emergency_numbers(reg) == '9123456789'


def test_format_aadhaar():
    assert format_aadhaar('123456789012') == '1234 5678 9012'
    assert format_aadhaar('') == ''


def test_paginate_badges_eight_per_page(make_registration):
    badges = [build_badge(make_registration(name=f'N{i}')) for i in range(17)]
    pages = paginate_badges(badges)
    assert [len(p) for p in pages] == [8, 8, 1]
    assert paginate_badges([]) == []
    assert [len(p) for p in paginate_badges(badges, per_page=10)] == [10, 7]


def test_id_card(make_registration):
    reg = make_registration()
    card = build_id_card(reg, today=datetime.date(2024, 2, 29))
    assert card.member_id.startswith('RSSB-')
    assert len(card.member_id) == len('RSSB-') + 6
    assert card.aadhaar_number == '1234 5678 9012'
    assert card.issue_date == datetime.date(2024, 2, 29)
    assert card.expiry_date == datetime.date(2025, 2, 28)
    data = card.to_dict()
    assert data['issue_date'] == '2024-02-29'
    assert data['id'] == str(reg.id)


def test_template_filters():
    tpl = Template('{% load hindi %}{{ name|hindi_text }}|{{ age|hindi_number }}|{{ missing|hindi_text }}')
    out = tpl.render(Context({'name': 'Ram Singh', 'age': 70, 'missing': None}))
    assert out == 'रम सिनघ|७०|'
