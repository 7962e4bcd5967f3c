"""
Rust code generator module.

Generates serde-annotated Rust structs and tagged enums from TL schemas,
with lifetime parameters for types that borrow from the input.
"""

from .generator import RustGenerator, create_rust_generator
from .config import RustConfig
from .lifetimes import LifetimeAnalyzer
from .naming import create_rust_sanitizer, rust_type_name
from .types import RustType, RustTypeConfig, RustTypeMapper

__all__ = [
    "RustGenerator",
    "RustConfig",
    "RustType",
    "RustTypeConfig",
    "RustTypeMapper",
    "LifetimeAnalyzer",
    "create_rust_generator",
    "create_rust_sanitizer",
    "rust_type_name",
]
