"""
Naming utilities for safe code generation.

Handles identifier cleanup, case conversions, keyword conflicts and the
schema-specific transformations (capitalization, prefix stripping) used
when turning TL names into target-language identifiers.
"""

import re
from typing import Callable, Dict, List, Optional, Set, Tuple
from enum import Enum


class NamingError(ValueError):
    """Raised when a schema identifier cannot be turned into a valid name."""
    pass


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    ORIGINAL = "original"     # left as written in the schema


def to_identifier(name: str) -> str:
    """
    Replace every character that is not an ASCII letter or digit with '_'.

    Args:
        name: Schema identifier

    Returns:
        Identifier safe for C-family languages

    Raises:
        NamingError: If name is empty or has no letters or digits
    """
    if not name:
        raise NamingError("Cannot build an identifier from an empty name")
    if not re.search(r"[a-zA-Z0-9]", name):
        raise NamingError(f"Name {name!r} has no letters or digits")
    return re.sub(r'[^a-zA-Z0-9]', '_', name)


def capitalize_first(name: str) -> str:
    """Uppercase only the first character of name."""
    if not name:
        raise NamingError("Cannot capitalize an empty name")
    return name[0].upper() + name[1:]


def strip_prefix(name: str, prefix: str) -> str:
    """
    Remove a redundant type-name prefix from a variant name.

    ``strip_prefix("ShapeCircle", "Shape")`` gives ``"Circle"``. The name is
    returned unchanged when the prefix is not shorter than the name, when the
    name does not start with it, or when the remainder does not start with an
    uppercase letter.
    """
    if len(prefix) >= len(name):
        return name
    if name.startswith(prefix) and name[len(prefix)].isupper():
        return name[len(prefix):]
    return name


def split_words(name: str) -> List[str]:
    """Split camelCase, PascalCase and snake_case names into lowercase words."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return [word.lower() for word in re.split(r"[_\-]+", spaced) if word]


_CASE_CONVERTERS: Dict[NamingCase, Callable[[List[str]], str]] = {
    NamingCase.SNAKE_CASE: lambda words: "_".join(words),
    NamingCase.CAMEL_CASE: lambda words: words[0] + "".join(w.capitalize() for w in words[1:]),
    NamingCase.PASCAL_CASE: lambda words: "".join(w.capitalize() for w in words),
}


class NameSanitizer:
    """
    Turns schema field names into identifiers of the target language.

    Names are cleaned, converted to the requested case and moved off
    reserved words, either through an explicit rename or by appending a
    suffix. Within one scope (a struct) the results are kept unique;
    reset_used_names() starts the next scope.
    """

    def __init__(self, reserved_words: Optional[Set[str]] = None,
                 renames: Optional[Dict[str, str]] = None):
        self.reserved_words = reserved_words or set()
        self.renames = renames or {}
        self._name_cache: Dict[Tuple[str, NamingCase, str], str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Identifier for name, unique within the current scope.

        Raises:
            NamingError: If name is empty
        """
        key = (name, target_case, suffix_on_conflict)
        candidate = self._name_cache.get(key)
        if candidate is None:
            candidate = self._avoid_keywords(self._convert_case(name, target_case),
                                             suffix_on_conflict)
            self._name_cache[key] = candidate

        final_name = candidate
        counter = 1
        while final_name in self._used_names:
            final_name = f"{candidate}{suffix_on_conflict}{counter}"
            counter += 1
        self._used_names.add(final_name)
        return final_name

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        if not name:
            raise NamingError("Cannot sanitize an empty name")

        cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name)
        converter = _CASE_CONVERTERS.get(target_case)
        words = split_words(cleaned)
        if not words:
            raise NamingError(f"Name {name!r} has no letters or digits")
        if converter is not None:
            cleaned = converter(words)

        if cleaned[0].isdigit():
            cleaned = f"_{cleaned}"
        return cleaned

    def _avoid_keywords(self, name: str, suffix: str) -> str:
        if name in self.renames:
            return self.renames[name]
        if name in self.reserved_words:
            return f"{name}{suffix}"
        return name

    def reset_used_names(self):
        """Start a new naming scope."""
        self._used_names.clear()
