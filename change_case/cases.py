"""Case conversion functions and the registry of supported cases.

Word splitting follows the usual change-case rules: runs of anything that
is not a letter or digit separate words, a lower-case letter or digit
followed by an upper-case letter starts a new word, and an acronym ends
before the last capital of ``"XMLHttp"``-style runs.
"""

from __future__ import annotations

import random
import re
from typing import Callable

CaseFunction = Callable[[str], str]

_SEPARATORS = re.compile(r"[\W_]+")

# Words title case leaves lower-case unless first or last
_SMALL_WORDS = frozenset(
    "a an and as at but by en for if in nor of on or per the to v vs via".split()
)


class UnknownCaseError(KeyError):
    """Raised when a case identifier is not in :data:`CASES`."""


def _split_boundaries(chunk: str) -> list[str]:
    words: list[str] = []
    start = 0
    for i in range(1, len(chunk)):
        prev, cur = chunk[i - 1], chunk[i]
        nxt = chunk[i + 1] if i + 1 < len(chunk) else ""
        if cur.isupper() and (prev.islower() or prev.isdigit()):
            words.append(chunk[start:i])
            start = i
        elif cur.isupper() and prev.isupper() and nxt.islower():
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def split_words(text: str) -> list[str]:
    """Split *text* into words, dropping separators."""
    words: list[str] = []
    for chunk in _SEPARATORS.split(text):
        if chunk:
            words.extend(_split_boundaries(chunk))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _join(text: str, sep: str, transform: CaseFunction) -> str:
    return sep.join(transform(w) for w in split_words(text))


def camel_case(text: str) -> str:
    words = split_words(text)
    return "".join(
        w.lower() if i == 0 else _capitalize(w) for i, w in enumerate(words)
    )


def pascal_case(text: str) -> str:
    return _join(text, "", _capitalize)


def capital_case(text: str) -> str:
    return _join(text, " ", _capitalize)


def constant_case(text: str) -> str:
    return _join(text, "_", str.upper)


def dot_case(text: str) -> str:
    return _join(text, ".", str.lower)


def header_case(text: str) -> str:
    return _join(text, "-", _capitalize)


def kebab_case(text: str) -> str:
    return _join(text, "-", str.lower)


def no_case(text: str) -> str:
    return _join(text, " ", str.lower)


def path_case(text: str) -> str:
    return _join(text, "/", str.lower)


def snake_case(text: str) -> str:
    return _join(text, "_", str.lower)


def sentence_case(text: str) -> str:
    words = split_words(text)
    return " ".join(
        _capitalize(w) if i == 0 else w.lower() for i, w in enumerate(words)
    )


def lower_case(text: str) -> str:
    return text.lower()


def upper_case(text: str) -> str:
    return text.upper()


def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def swap_case(text: str) -> str:
    return text.swapcase()


def random_case(text: str, rng: random.Random | None = None) -> str:
    """Randomly upper- or lower-case each character."""
    rng = rng or random.Random()
    return "".join(c.upper() if rng.random() > 0.5 else c.lower() for c in text)


def title_case(text: str) -> str:
    """Capitalize words, keeping short connecting words lower-case.

    Whitespace and punctuation are preserved as-is.
    """
    tokens = re.split(r"(\s+)", text)
    words = [i for i, t in enumerate(tokens) if t and not t.isspace()]
    if not words:
        return text
    first, last = words[0], words[-1]
    for i in words:
        token = tokens[i]
        if i not in (first, last) and token.lower() in _SMALL_WORDS:
            tokens[i] = token.lower()
        elif token.islower():
            tokens[i] = token[:1].upper() + token[1:]
    return "".join(tokens)


CASES: dict[str, CaseFunction] = {
    "Camel Case": camel_case,
    "Capital Case": capital_case,
    "Constant Case": constant_case,
    "Dot Case": dot_case,
    "Header Case": header_case,
    "Kebab Case": kebab_case,
    "Lower Case": lower_case,
    "Lower First": lower_first,
    "No Case": no_case,
    "Param Case": kebab_case,
    "Pascal Case": pascal_case,
    "Path Case": path_case,
    "Random Case": random_case,
    "Sentence Case": sentence_case,
    "Snake Case": snake_case,
    "Swap Case": swap_case,
    "Title Case": title_case,
    "Upper Case": upper_case,
    "Upper First": upper_first,
}


def preference_key(case: str) -> str:
    """Return the preferences key for *case* (spaces removed)."""
    return re.sub(r" +", "", case)


def get_case(case: str) -> CaseFunction:
    try:
        return CASES[case]
    except KeyError:
        raise UnknownCaseError(case) from None


def convert(text: str, case: str | CaseFunction) -> str:
    """Apply *case* to every line of *text*, keeping the line structure."""
    func = get_case(case) if isinstance(case, str) else case
    return "\n".join(func(line) for line in text.split("\n"))
