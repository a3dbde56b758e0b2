import pytest

from registry.services.hindi import (
    CONSONANTS,
    VOWELS,
    has_devanagari,
    roman_to_hindi,
    to_devanagari_digits,
    to_hindi_number,
    to_hindi_text,
)


@pytest.mark.parametrize('text, expected', [
    ('0123456789', '०१२३४५६७८९'),
    ('age 65', 'age ६५'),
    ('98765-43210', '९८७६५-४३२१०'),
    ('', ''),
    ('no digits', 'no digits'),
])
def test_digits(text, expected):
    assert to_devanagari_digits(text) == expected


@pytest.mark.parametrize('text', ['12 ab 34', '', 'उम्र 60', '   '])
def test_digits_idempotent_and_length_preserving(text):
    once = to_devanagari_digits(text)
    assert to_devanagari_digits(once) == once
    assert len(once) == len(text)
    for original, converted in zip(text, once):
        if not original.isascii() or not original.isdigit():
            assert original == converted


def test_has_devanagari():
    assert has_devanagari('hello') is False
    assert has_devanagari('नमस्ते') is True
    assert has_devanagari('hello नमस्ते') is True
    assert has_devanagari('') is False
    assert has_devanagari('१२') is True


@pytest.mark.parametrize('text, expected', [
    ('namaste', 'नमसते'),
    ('a ka', 'अ क'),
    ('ksh', 'क्ष'),
    ('kaa', 'का'),
    ('aai', 'आइ'),
    ('om', 'ओम'),
    ('deepak', 'दीपक'),
    ('krishna', 'क्रिशन'),
    ('chhaya', 'छय'),
    ('x', 'क्स'),
    ('Ram Singh', 'रम सिनघ'),
    ('  NAMASTE   ji ', 'नमसते जि'),
])
def test_roman_to_hindi_golden(text, expected):
    assert roman_to_hindi(text) == expected


def test_longest_match_wins_over_prefix():
    assert roman_to_hindi('ksh') != 'क' + roman_to_hindi('sh')
    assert roman_to_hindi('aa') == 'आ'
    assert roman_to_hindi('chh') == 'छ'


def test_vowel_form_depends_on_position():
    # independent at word start and after a vowel, matra after a consonant
    assert roman_to_hindi('i') == 'इ'
    assert roman_to_hindi('ki') == 'कि'
    assert roman_to_hindi('ai i') == 'ऐ इ'
    assert roman_to_hindi('oi') == 'ओइ'


def test_unmatched_characters_pass_through():
    assert roman_to_hindi('flat 12') == 'फलत 12'
    assert roman_to_hindi('ram-lal') == 'रम-लल'
    # after punctuation a vowel is not attached to anything
    assert roman_to_hindi('-a') == '-अ'
    # "c" alone is not a token
    assert roman_to_hindi('ca') == 'cअ'
    assert roman_to_hindi('café') == 'cअफé'


@pytest.mark.parametrize('text', ['', '   ', '\t\n'])
def test_blank_input(text):
    assert roman_to_hindi(text) == ''
    assert to_hindi_text(text) == ''


def test_to_hindi_text_dispatch():
    assert to_hindi_text('उम्र 60') == 'उम्र ६०'
    assert to_hindi_text('Ram Singh') == 'रम सिनघ'
    assert to_hindi_text('flat 12') == 'फलत १२'
    # mixed text counts as already Hindi
    assert to_hindi_text('राम Singh 5') == 'राम Singh ५'
    assert to_hindi_text(None) == ''


def test_to_hindi_number():
    assert to_hindi_number(65) == '६५'
    assert to_hindi_number('9876543210') == '९८७६५४३२१०'
    assert to_hindi_number(None) == ''


def test_tables_are_longest_first():
    for table in (VOWELS, CONSONANTS):
        lengths = [len(e.token) for e in table]
        assert lengths == sorted(lengths, reverse=True)
    # same-length tokens keep their declared order
    two_letter = [c.token for c in CONSONANTS if len(c.token) == 2]
    assert two_letter[:3] == ['gy', 'kh', 'gh']
    assert [v.token for v in VOWELS][:2] == ['aa', 'ai']
