# ===== css_compressor/comments.py - TRI DES COMMENTAIRES =====
"""
Étape 4: décide pour chaque commentaire récolté s'il est conservé ou supprimé.

Règles, par priorité :
1. /*! ... */          -> conservé tel quel (licences, copyrights)
2. /* ... \\*/ ... /**/ -> hack Mac/IE5, réduit à /*\\*/ puis /**/
3. >/**/               -> hack IE7 du sélecteur enfant, conservé vide
4. tout le reste       -> supprimé
"""

import logging

from .tokens import TokenTables, candidate_placeholder

logger = logging.getLogger(__name__)


def _follows_child_combinator(css: str, placeholder: str) -> bool:
    """Vrai si le commentaire vide suit directement un '>' (html >/**/ body)."""
    start_index = css.find(placeholder)
    # 3 = longueur de '/*' + 1
    return start_index > 2 and css[start_index - 3] == '>'


def dispose_comments(css: str, tables: TokenTables) -> str:
    """Applique les règles de conservation aux commentaires candidats."""
    kept = 0
    deleted = 0

    i = 0
    count = len(tables.comments)
    while i < count:
        token = tables.comments[i]
        placeholder = candidate_placeholder(i)

        if token.startswith('!'):
            css = css.replace(placeholder, tables.preserve(tables.restore_preserved(token)))
            kept += 1

        elif token.endswith('\\'):
            css = css.replace(placeholder, tables.preserve('\\'))
            # Le commentaire suivant ferme le hack, quel que soit son contenu
            i += 1
            if i < count:
                css = css.replace(candidate_placeholder(i), tables.preserve(''))
            kept += 2

        elif token == '' and _follows_child_combinator(css, placeholder):
            css = css.replace(placeholder, tables.preserve(''))
            kept += 1

        else:
            css = css.replace('/*' + placeholder + '*/', '')
            deleted += 1

        i += 1

    if count:
        logger.debug(f"Commentaires: {kept} conservé(s), {deleted} supprimé(s)")
    return css
