# ===== css_compressor/extract.py - EXTRACTION DES CONTENUS PROTÉGÉS =====
"""
Étapes 1 à 3 du pipeline : data URIs, commentaires, chaînes de caractères.

Chaque fonction reçoit le texte courant et les tables de la compression en
cours, et retourne le nouveau texte avec des sentinelles à la place du
contenu extrait.
"""

import re
import logging

from .tokens import TokenTables, CANDIDATE_COMMENT_PREFIX

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r'url\(\s*(["\']?)data:')

# Chaînes "..." ou '...' avec échappements backslash
STRING_PATTERN = re.compile(r'"(?:[^\\"]|\\.|\\)*"|\'(?:[^\\\']|\\.|\\)*\'')

ALPHA_FILTER_PATTERN = re.compile(r'progid:DXImageTransform\.Microsoft\.Alpha\(Opacity=', re.IGNORECASE)

WHITESPACE_PATTERN = re.compile(r'\s+')


def shorten_alpha_filter(text: str) -> str:
    """progid:DXImageTransform.Microsoft.Alpha(Opacity=80) -> alpha(opacity=80)"""
    return ALPHA_FILTER_PATTERN.sub('alpha(opacity=', text)


def _find_url_end(css: str, terminator: str, start: int) -> int:
    """Retourne l'index du ')' qui ferme le url(...), ou -1 si introuvable."""
    index = start - 1
    while True:
        index = css.find(terminator, index + 1)
        if index < 0:
            return -1
        # Terminateur échappé : on continue la recherche
        if css[index - 1] != '\\':
            break

    if terminator != ')':
        index = css.find(')', index)
    return index


def extract_data_urls(css: str, tables: TokenTables) -> str:
    """Étape 1: met de côté les url(data:...) avant toute autre réécriture."""
    chunks = []
    append_index = 0
    extracted = 0

    match = DATA_URL_PATTERN.search(css)
    while match:
        terminator = match.group(1) or ')'
        end_index = _find_url_end(css, terminator, match.end())

        chunks.append(css[append_index:match.start()])

        if end_index < 0:
            # Pas de terminateur : on laisse le texte tel quel
            logger.debug(f"url(data:...) non terminée à l'index {match.start()}, laissée intacte")
            chunks.append(match.group(0))
            append_index = match.end()
        else:
            token = WHITESPACE_PATTERN.sub('', css[match.start() + 4:end_index])
            chunks.append(f"url({tables.preserve(token)})")
            append_index = end_index + 1
            extracted += 1

        match = DATA_URL_PATTERN.search(css, append_index)

    chunks.append(css[append_index:])

    if extracted:
        logger.debug(f"{extracted} data URI(s) préservée(s)")
    return ''.join(chunks)


def harvest_comments(css: str, tables: TokenTables) -> str:
    """Étape 2: remplace le corps de chaque commentaire par une sentinelle.

    Les délimiteurs /* */ restent dans le flux. Un commentaire non fermé court
    jusqu'à la fin du texte et reçoit quand même son */.
    """
    chunks = []
    position = 0

    while True:
        start_index = css.find('/*', position)
        if start_index < 0:
            break

        end_index = css.find('*/', start_index + 2)
        if end_index < 0:
            logger.debug(f"Commentaire non fermé à l'index {start_index}")
            end_index = len(css)
            next_position = len(css)
        else:
            next_position = end_index + 2

        chunks.append(css[position:start_index])
        chunks.append('/*' + tables.add_comment(css[start_index + 2:end_index]) + '*/')
        position = next_position

    chunks.append(css[position:])
    return ''.join(chunks)


def preserve_strings(css: str, tables: TokenTables) -> str:
    """Étape 3: met de côté le contenu des chaînes pour qu'il ne soit jamais minifié."""

    def replace_string(match):
        token = match.group(0)
        quote = token[0]
        body = token[1:-1]

        # Un commentaire dans une chaîne n'en est pas un : on le remet
        if CANDIDATE_COMMENT_PREFIX in body:
            body = tables.restore_comments(body)
        # Une data URI déjà extraite dans la chaîne : le token englobant doit
        # porter le texte final, sinon sa sentinelle survivrait à la restauration
        body = tables.restore_preserved(body)

        body = shorten_alpha_filter(body)
        return quote + tables.preserve(body) + quote

    return STRING_PATTERN.sub(replace_string, css)
