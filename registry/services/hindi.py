"""
Romanized Hindi to Devanagari transliteration for printed badges.

Registration data is usually typed in Latin letters ("Ram Singh") while the
badges are printed in Hindi script.  ``roman_to_hindi`` converts a phonetic
Latin spelling with a greedy longest-match scan over small vowel and
consonant tables; ``to_hindi_text`` decides per field whether conversion is
needed at all.  Every function here is total: unrecognised characters are
copied through as-is rather than raising.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_DIGITS = str.maketrans("0123456789", "०१२३४५६७८९")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Vowel:
    token: str
    independent: str
    matra: str


@dataclass(frozen=True)
class Consonant:
    token: str
    out: str


def _longest_first(entries):
    # sorted() is stable, so same-length tokens keep declaration order
    return tuple(sorted(entries, key=lambda e: -len(e.token)))


VOWELS: tuple[Vowel, ...] = _longest_first((
    Vowel("aa", "आ", "ा"),
    Vowel("ai", "ऐ", "ै"),
    Vowel("au", "औ", "ौ"),
    Vowel("ii", "ई", "ी"),
    Vowel("ee", "ई", "ी"),
    Vowel("uu", "ऊ", "ू"),
    Vowel("oo", "ऊ", "ू"),
    Vowel("ri", "ऋ", "ृ"),
    Vowel("a", "अ", ""),  # inherent vowel: no sign after a consonant
    Vowel("i", "इ", "ि"),
    Vowel("u", "उ", "ु"),
    Vowel("e", "ए", "े"),
    Vowel("o", "ओ", "ो"),
))

CONSONANTS: tuple[Consonant, ...] = _longest_first((
    Consonant("ksh", "क्ष"),
    Consonant("gy", "ज्ञ"),
    Consonant("kh", "ख"),
    Consonant("gh", "घ"),
    Consonant("chh", "छ"),
    Consonant("ch", "च"),
    Consonant("jh", "झ"),
    Consonant("th", "थ"),
    Consonant("dh", "ध"),
    Consonant("ph", "फ"),
    Consonant("bh", "भ"),
    Consonant("sh", "श"),
    Consonant("gn", "ग्न"),
    Consonant("tr", "त्र"),
    Consonant("dr", "द्र"),
    Consonant("kr", "क्र"),
    Consonant("gr", "ग्र"),
    Consonant("pr", "प्र"),
    Consonant("br", "ब्र"),
    Consonant("sr", "स्र"),
    Consonant("k", "क"),
    Consonant("g", "ग"),
    Consonant("j", "ज"),
    Consonant("t", "त"),
    Consonant("d", "द"),
    Consonant("n", "न"),
    Consonant("p", "प"),
    Consonant("b", "ब"),
    Consonant("m", "म"),
    Consonant("y", "य"),
    Consonant("r", "र"),
    Consonant("l", "ल"),
    Consonant("v", "व"),
    Consonant("w", "व"),
    Consonant("s", "स"),
    Consonant("h", "ह"),
    Consonant("f", "फ"),
    Consonant("q", "क"),
    Consonant("x", "क्स"),
    Consonant("z", "ज"),
))


def to_devanagari_digits(text: str) -> str:
    """Replace ASCII digits 0-9 with Devanagari digits; nothing else changes."""
    return (text or "").translate(_DIGITS)


def has_devanagari(text: str) -> bool:
    """True if ``text`` contains any codepoint of the Devanagari block."""
    return any("\u0900" <= c <= "\u097f" for c in text or "")


def _match(src: str, index: int, table):
    for entry in table:
        if src.startswith(entry.token, index):
            return entry
    return None


def roman_to_hindi(text: str) -> str:
    """Convert a Latin phonetic spelling into Devanagari.

    The input is trimmed, internal whitespace collapsed and lowercased.  At
    each position vowels are tried before consonants and longer tokens
    before shorter ones, so "ksh" wins over "k" and "aa" over "a".  A vowel
    at the start of a word, or after another vowel, is written as an
    independent letter; directly after a consonant it becomes a matra.
    Digits, punctuation and uncovered letters are copied unchanged.
    """
    src = _WHITESPACE_RE.sub(" ", (text or "").strip()).lower()
    if not src:
        return ""

    out: list[str] = []
    i = 0
    at_word_start = True
    prev_consonant = False

    while i < len(src):
        ch = src[i]

        if ch == " ":
            out.append(" ")
            i += 1
            at_word_start = True
            prev_consonant = False
            continue

        if not ("a" <= ch <= "z"):
            # digits and anything non-Latin pass through untouched
            out.append(ch)
            i += 1
            at_word_start = False
            prev_consonant = False
            continue

        vowel = _match(src, i, VOWELS)
        if vowel:
            if at_word_start or not prev_consonant:
                out.append(vowel.independent)
            else:
                out.append(vowel.matra)
            i += len(vowel.token)
            at_word_start = False
            prev_consonant = False
            continue

        consonant = _match(src, i, CONSONANTS)
        if consonant:
            out.append(consonant.out)
            i += len(consonant.token)
            at_word_start = False
            prev_consonant = True
            continue

        out.append(ch)
        i += 1
        at_word_start = False
        prev_consonant = False

    return "".join(out)


def to_hindi_text(text: str) -> str:
    """Format a free-text field for a badge.

    Text that already contains Devanagari only gets its digits converted;
    Latin text is transliterated first.
    """
    value = (text or "").strip()
    if not value:
        return ""
    if has_devanagari(value):
        return to_devanagari_digits(value)
    return to_devanagari_digits(roman_to_hindi(value))


def to_hindi_number(value) -> str:
    if value is None:
        return ""
    return to_devanagari_digits(str(value))
