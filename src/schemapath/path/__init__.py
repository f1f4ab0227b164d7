from .dsl import P, PathRef
from .parser import format_path, parse_path
from .segments import Element, Index, Property, Segment

__all__ = [
    "Element",
    "Index",
    "P",
    "PathRef",
    "Property",
    "Segment",
    "format_path",
    "parse_path",
]
