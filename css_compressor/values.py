# ===== css_compressor/values.py - SIMPLIFICATION DES VALEURS =====
"""
Étape 6: réécriture des valeurs (zéros, couleurs, none -> 0, règles vides).

Toutes les règles supposent un texte déjà passé par normalize_whitespace :
plus d'espace autour de ':' ';' '{' '}'.
"""

import re
import logging
from typing import List, Optional

from .extract import shorten_alpha_filter

logger = logging.getLogger(__name__)

ZERO_UNIT_PATTERN = re.compile(r'([\s:])(0)(px|em|%|in|cm|mm|pc|pt|ex)')

# Du plus spécifique au moins spécifique
ZERO_SHORTHAND_PATTERNS = [
    re.compile(r':0 0 0 0(;|\})'),
    re.compile(r':0 0 0(;|\})'),
    re.compile(r':0 0(;|\})'),
]

TWO_COMPONENT_ZERO_PATTERN = re.compile(
    r'(background-position|transform-origin|webkit-transform-origin|'
    r'moz-transform-origin|o-transform-origin|ms-transform-origin):0(;|\})',
    re.IGNORECASE
)

LEADING_ZERO_PATTERN = re.compile(r'(:|\s)0+\.(\d+)')

RGB_PATTERN = re.compile(r'rgb\s*\(\s*([0-9,\s]+)\s*\)')

# Groupe 1 : contexte filtre IE (=, =", =') ; groupe 8 : la suite jusqu'au '}'
# qui garantit qu'on est dans un bloc de déclarations et pas dans un #id
HEX_COLOR_PATTERN = re.compile(
    r'(=\s*?["\']?)?'
    r'#([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])'
    r'(:?\}|[^0-9a-fA-F{][^{]*?\})'
)

NONE_TO_ZERO_PATTERN = re.compile(
    r'(border|border-top|border-right|border-bottom|outline|background):none(;|\})',
    re.IGNORECASE
)

EMPTY_RULE_PATTERN = re.compile(r'[^}{/;]+\{\}')


def _parse_rgb_components(raw: str) -> Optional[List[int]]:
    """Retourne [r, g, b] ou None si la valeur n'est pas exploitable."""
    parts = raw.split(',')
    if len(parts) != 3:
        return None

    components = []
    for part in parts:
        part = part.strip()
        if not part.isdigit():
            return None
        value = int(part)
        if value > 255:
            return None
        components.append(value)
    return components


def rgb_to_hex(css: str) -> str:
    """rgb(51,102,153) -> #336699 (raccourci ensuite par shorten_hex_colors)."""

    def replace_rgb(match):
        components = _parse_rgb_components(match.group(1))
        if components is None:
            return match.group(0)
        return '#' + ''.join(f"{value:02x}" for value in components)

    return RGB_PATTERN.sub(replace_rgb, css)


def shorten_hex_colors(css: str) -> str:
    """#AABBCC -> #abc, sauf dans les filtres IE où cela casse le rendu.

        filter: chroma(color="#FFFFFF");   doit rester tel quel
        #FAABAC {}                         est un sélecteur d'id, ignoré
        #AABBCCD                           n'est pas une couleur valide, ignorée
    """
    chunks = []
    index = 0

    match = HEX_COLOR_PATTERN.search(css, index)
    while match:
        chunks.append(css[index:match.start()])
        digits = match.group(2, 3, 4, 5, 6, 7)

        if match.group(1):
            # Filtre : restitué à l'identique
            chunks.append(match.group(1) + '#' + ''.join(digits))
        elif (digits[0].lower() == digits[1].lower() and
              digits[2].lower() == digits[3].lower() and
              digits[4].lower() == digits[5].lower()):
            chunks.append('#' + (digits[1] + digits[3] + digits[5]).lower())
        else:
            chunks.append('#' + ''.join(digits).lower())

        # La suite (groupe 8) n'est pas consommée : elle peut contenir d'autres couleurs
        index = match.end(7)
        match = HEX_COLOR_PATTERN.search(css, index)

    chunks.append(css[index:])
    return ''.join(chunks)


def simplify_values(css: str) -> str:
    """Applique toutes les simplifications de valeurs, dans l'ordre."""
    # 0px, 0em, 0% ... -> 0
    css = ZERO_UNIT_PATTERN.sub(r'\1\2', css)

    # margin:0 0 0 0 -> margin:0
    for pattern in ZERO_SHORTHAND_PATTERNS:
        css = pattern.sub(r':0\1', css)

    # background-position:0 a besoin de ses deux composantes
    css = TWO_COMPONENT_ZERO_PATTERN.sub(lambda m: m.group(1).lower() + ':0 0' + m.group(2), css)

    # 0.6 -> .6
    css = LEADING_ZERO_PATTERN.sub(r'\1.\2', css)

    css = rgb_to_hex(css)
    css = shorten_hex_colors(css)

    # border:none -> border:0
    css = NONE_TO_ZERO_PATTERN.sub(lambda m: m.group(1).lower() + ':0' + m.group(2), css)

    css = shorten_alpha_filter(css)

    css = remove_empty_rules(css)
    return css


def remove_empty_rules(css: str) -> str:
    """Supprime les règles sans déclaration : a{} disparaît complètement."""
    result = EMPTY_RULE_PATTERN.sub('', css)
    if len(result) != len(css):
        logger.debug(f"Règles vides supprimées ({len(css) - len(result)} caractères)")
    return result
