"""word_scout.extract: turns documents into words for the dictionary."""

from word_scout.extract.extractor import ExtractOptions, Extractor, sniff_mime
from word_scout.extract.filters import FilterMode, apply_filters, parse_filters

__all__ = ["Extractor", "ExtractOptions", "FilterMode", "apply_filters", "parse_filters", "sniff_mime"]
