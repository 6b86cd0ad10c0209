# ===== css_compressor/pipeline.py - PIPELINE DE COMPRESSION =====
"""
Enchaînement des étapes de compression CSS.

L'ordre est une contrainte de correction, pas une optimisation :
les data URIs sont extraites avant les commentaires, les chaînes protégées
avant la réduction des espaces, etc.
"""

import re
import logging
from typing import Optional

from .tokens import TokenTables
from .extract import extract_data_urls, harvest_comments, preserve_strings
from .comments import dispose_comments
from .whitespace import normalize_whitespace
from .values import simplify_values
from .schemas import CompressorOptions

logger = logging.getLogger(__name__)

MULTIPLE_SEMICOLONS_PATTERN = re.compile(r';;+')
CHARSET_RULE_PATTERN = re.compile(r'@charset[^;]+;\s*')


def wrap_lines(css: str, line_break_column: int) -> str:
    """Étape 7: coupe la ligne après un '}' dès que la colonne est dépassée.

    Certains outils de gestion de versions n'aiment pas les lignes de
    plusieurs milliers de caractères.
    """
    if line_break_column < 0:
        return css

    lines = []
    inserted = 0
    line_start = 0
    last_cut = 0
    for index, char in enumerate(css):
        # Position dans le texte de sortie, '\n' déjà insérés compris
        position = index + inserted + 1
        if char == '}' and position - line_start > line_break_column:
            lines.append(css[last_cut:index + 1])
            last_cut = index + 1
            line_start = position
            inserted += 1
    lines.append(css[last_cut:])
    return '\n'.join(lines)


def restore(css: str, tables: TokenTables) -> str:
    """Étape 8: remet les tokens préservés en place et nettoie les bords."""
    css = MULTIPLE_SEMICOLONS_PATTERN.sub(';', css)
    css = tables.restore_preserved(css)
    return css.strip()


def strip_charsets(css: str) -> str:
    """Supprime toutes les règles @charset (fichiers destinés à être concaténés).

    Appelée sur le texte de travail : chaînes, commentaires et data URIs y
    sont déjà des sentinelles, un "@charset" qu'ils contiennent reste intact.
    """
    return CHARSET_RULE_PATTERN.sub('', css)


def compress_with_options(css: str, options: CompressorOptions) -> str:
    """Compresse une feuille de style complète selon `options`."""
    tables = TokenTables()

    css = extract_data_urls(css, tables)
    css = harvest_comments(css, tables)
    css = preserve_strings(css, tables)
    if options.remove_charsets:
        css = strip_charsets(css)
    css = dispose_comments(css, tables)
    css = normalize_whitespace(css)
    css = simplify_values(css)
    css = wrap_lines(css, options.line_break_column)
    css = restore(css, tables)

    logger.debug(f"Compression terminée: {tables!r}")
    return css


def compress(css: str, line_break_column: int = -1, remove_charsets: bool = False) -> str:
    """Raccourci fonctionnel de CSSCompressor(...).compress(css)."""
    options = CompressorOptions(line_break_column=line_break_column, remove_charsets=remove_charsets)
    return compress_with_options(css, options)


class CSSCompressor:
    """Compresseur réutilisable : mêmes options pour plusieurs feuilles de style."""

    def __init__(self, options: Optional[CompressorOptions] = None):
        self.options = options or CompressorOptions()

    def compress(self, css: str) -> str:
        return compress_with_options(css, self.options)
