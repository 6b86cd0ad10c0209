# ===== css_compressor/tokens.py - TABLES DE PRÉSERVATION =====
"""
Tables annexes d'une compression : commentaires candidats et tokens préservés.

Le texte de travail ne contient jamais le contenu protégé lui-même, seulement
des sentinelles `<préfixe><index>___` qui y renvoient.
"""

from typing import List

CANDIDATE_COMMENT_PREFIX = "___CSSCOMPRESSOR_CANDIDATE_COMMENT_"
PRESERVED_TOKEN_PREFIX = "___CSSCOMPRESSOR_PRESERVED_TOKEN_"
PSEUDO_CLASS_COLON = "___CSSCOMPRESSOR_PSEUDOCLASSCOLON___"
SENTINEL_SUFFIX = "___"

# Tous les préfixes réservés (utilisé par les tests de non-collision)
RESERVED_PREFIXES = (
    CANDIDATE_COMMENT_PREFIX,
    PRESERVED_TOKEN_PREFIX,
    PSEUDO_CLASS_COLON,
)


def candidate_placeholder(index: int) -> str:
    return f"{CANDIDATE_COMMENT_PREFIX}{index}{SENTINEL_SUFFIX}"


def preserved_placeholder(index: int) -> str:
    return f"{PRESERVED_TOKEN_PREFIX}{index}{SENTINEL_SUFFIX}"


class TokenTables:
    """Tables d'une seule exécution du pipeline (jamais partagées)."""

    def __init__(self):
        self.comments: List[str] = []
        self.preserved: List[str] = []

    def add_comment(self, body: str) -> str:
        """Enregistre un commentaire candidat et retourne sa sentinelle."""
        self.comments.append(body)
        return candidate_placeholder(len(self.comments) - 1)

    def preserve(self, content: str) -> str:
        """Ajoute un token préservé et retourne sa sentinelle."""
        self.preserved.append(content)
        return preserved_placeholder(len(self.preserved) - 1)

    def restore_comments(self, text: str) -> str:
        """Remet le texte d'origine des commentaires candidats dans `text`."""
        if CANDIDATE_COMMENT_PREFIX not in text:
            return text
        for index, body in enumerate(self.comments):
            text = text.replace(candidate_placeholder(index), body)
        return text

    def restore_preserved(self, text: str) -> str:
        """Rejoue les tokens préservés dans l'ordre des index."""
        for index, content in enumerate(self.preserved):
            text = text.replace(preserved_placeholder(index), content)
        return text

    def __repr__(self):
        return f"<TokenTables comments={len(self.comments)} preserved={len(self.preserved)}>"
