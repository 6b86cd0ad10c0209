"""
Compresseur CSS : réécriture texte par étapes, sans construction d'AST.

    >>> from css_compressor import compress
    >>> compress("a { color: #AABBCC; }")
    'a{color:#abc}'
"""

from .pipeline import CSSCompressor, compress, compress_with_options
from .schemas import CompressorOptions, BatchConfig

__all__ = ['CSSCompressor', 'compress', 'compress_with_options', 'CompressorOptions', 'BatchConfig']

__version__ = '1.0.0'
