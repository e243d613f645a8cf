"""Bitlayout register and structure code generator."""

from .alternatives import AlternativesRegistry as AlternativesRegistry
from .errors import GeneratorError as GeneratorError
from .errors import SchemaError as SchemaError
from .errors import UnknownAlternativeGroup as UnknownAlternativeGroup
from .errors import WidthError as WidthError
from .sizes import SizeCalculator as SizeCalculator
from .sizes import SizeInfo as SizeInfo
from .sizes import SizeKind as SizeKind
from .sizes import StructSizeInfo as StructSizeInfo
from .sizes import calculate_sizes as calculate_sizes
from .types import *
from .widths import IntWidth as IntWidth
from .widths import resolve_bits as resolve_bits
from .widths import resolve_bytes as resolve_bytes
from .widths import resolve_register as resolve_register
