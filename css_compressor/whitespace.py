# ===== css_compressor/whitespace.py - ESPACES ET PONCTUATION =====
"""
Étape 5: normalisation des espaces autour de la ponctuation CSS.
"""

import re
import logging

from .tokens import PSEUDO_CLASS_COLON

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r'\s+')

# "p :link {" -> les ':' d'un sélecteur ne doivent pas perdre l'espace qui les précède
PSEUDO_CLASS_PATTERN = re.compile(r'(?:^|\})(?:[^{:]+:)+[^{]*\{')

SPACE_BEFORE_PATTERN = re.compile(r'\s+([!{};:>+()\],])')
SPACE_AFTER_PATTERN = re.compile(r'([!{}:;>+(\[,])\s+')

# IE6 a besoin de l'espace dans ":first-line {"
FIRST_LINE_PATTERN = re.compile(r':first-(line|letter)([{,])')

CHARSET_PATTERN = re.compile(r'@charset [^;]+;')

MEDIA_AND_PATTERN = re.compile(r'\band\(')

TRAILING_SEMICOLONS_PATTERN = re.compile(r';+\}')


def _protect_pseudo_classes(css: str) -> str:
    return PSEUDO_CLASS_PATTERN.sub(lambda m: m.group(0).replace(':', PSEUDO_CLASS_COLON), css)


def hoist_charset(css: str) -> str:
    """Garde un seul @charset (le premier) et le place en tête du texte."""
    match = CHARSET_PATTERN.search(css)
    if not match:
        return css

    charset = match.group(0)
    remainder = CHARSET_PATTERN.sub('', css)
    if css.count('@charset') > 1:
        logger.debug(f"@charset multiples, conservé: {charset}")
    return charset + remainder


def normalize_whitespace(css: str) -> str:
    """Réduit les espaces au strict nécessaire sans toucher au sens des sélecteurs."""
    # Tout espace devient un seul ' ', plus simple à traiter ensuite
    css = WHITESPACE_PATTERN.sub(' ', css)

    css = _protect_pseudo_classes(css)
    css = SPACE_BEFORE_PATTERN.sub(r'\1', css)
    css = css.replace(PSEUDO_CLASS_COLON, ':')

    css = FIRST_LINE_PATTERN.sub(r':first-\1 \2', css)

    # Pas d'espace après la fin d'un commentaire conservé
    css = css.replace('*/ ', '*/')

    css = hoist_charset(css)

    # @media screen and (-webkit-min-device-pixel-ratio:0){
    css = MEDIA_AND_PATTERN.sub('and (', css)

    css = SPACE_AFTER_PATTERN.sub(r'\1', css)

    css = TRAILING_SEMICOLONS_PATTERN.sub('}', css)
    return css
