from favicon_gen.cache import CacheKey, GenerationCache
from favicon_gen.errors import (
    FaviconError,
    InvalidDimensionsError,
    InvalidPaddingError,
    SourceNotFoundError,
    TransformError,
)
from favicon_gen.generator import generate
from favicon_gen.markup import render as render_html
from favicon_gen.options import GenerationOptions
from favicon_gen.plugin import FaviconPlugin

__version__ = "1.0.0"
