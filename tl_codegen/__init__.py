"""
tl_codegen: typed bindings from TL interface definitions.

The code generators live in :mod:`tl_codegen.codegen`; the command line
entry point is :func:`tl_codegen.cli.main`.
"""

__version__ = "0.1.0"
