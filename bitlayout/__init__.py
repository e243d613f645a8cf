"""Bitlayout - Accessor code generator for bit-packed registers and packed structures."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bitlayout")
except PackageNotFoundError:
    __version__ = "(local)"
