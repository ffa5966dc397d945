"""Response normalization: canonical records from loosely shaped JSON."""

from .extractor import ExtractorConfig, ResponseExtractor

__all__ = ["ExtractorConfig", "ResponseExtractor"]
