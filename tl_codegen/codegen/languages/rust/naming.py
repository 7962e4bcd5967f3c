"""
Rust-specific naming utilities and sanitization.

Handles Rust keywords and the fixed renames used for schema fields.
"""

from ...core.naming import NameSanitizer, capitalize_first, to_identifier


# Strict and reserved Rust keywords
RUST_RESERVED_WORDS = {
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "crate",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "unsafe",
    "use",
    "where",
    "while",
    "abstract",
    "become",
    "box",
    "do",
    "final",
    "macro",
    "override",
    "priv",
    "try",
    "typeof",
    "unsized",
    "virtual",
    "yield",
}

# Keywords with a conventional replacement instead of the '_' suffix
RUST_FIELD_RENAMES = {
    "type": "typ",
}


def create_rust_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Rust field names."""
    return NameSanitizer(RUST_RESERVED_WORDS, renames=RUST_FIELD_RENAMES)


def rust_type_name(name: str) -> str:
    """Declaration name for a constructor, function or custom type."""
    return capitalize_first(to_identifier(name))
