"""
Record formatters built on a per-record generator.

Each formatter drives a fresh generator for every record:
- ``XmlFormatter`` writes ``<record>`` documents through a streaming writer
- ``JsonFormatter`` writes the same structure as a JSON object
"""

from .generator import Generator
from .json_formatter import JsonFormatter, JsonGenerator
from .stream import IndentingXmlWriter, MarkupWriter, XmlStreamWriter
from .structured import StructuredFormatter
from .validation import canonicalize, is_well_formed, parse_record
from .writer import StringSinkWriter
from .xml_formatter import XmlFormatter, XmlGenerator

__all__ = [
    # Formatters
    "StructuredFormatter",
    "XmlFormatter",
    "JsonFormatter",
    # Generators
    "Generator",
    "XmlGenerator",
    "JsonGenerator",
    # Writers
    "MarkupWriter",
    "XmlStreamWriter",
    "IndentingXmlWriter",
    "StringSinkWriter",
    # Validation
    "parse_record",
    "canonicalize",
    "is_well_formed",
]
