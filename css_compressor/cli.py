# ===== css_compressor/cli.py - LIGNE DE COMMANDE =====
"""
COMPRESSEUR CSS
===============
Compresse une ou plusieurs feuilles de style (commentaires, espaces,
couleurs, zéros, règles vides) sans en changer le sens.

Usage:
  css-compressor styles.css -o styles.min.css   # un fichier
  css-compressor < styles.css > styles.min.css  # entrée/sortie standard
  css-compressor "static/**/*.css" --threads 4  # par lots -> *.min.css
  css-compressor                                # par lots selon .css-compressor.json
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG_FILE, load_config
from .pipeline import CSSCompressor
from .runner import CompressorRunner, format_report, get_text_stats

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='css-compressor',
        description='Compresseur CSS (minification sûre, sans réordonnancement)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemples:
  css-compressor styles.css -o styles.min.css
  css-compressor styles.css -o -                # vers la sortie standard
  css-compressor --line-break 8000 styles.css -o styles.min.css
  css-compressor "css/*.css" --dry-run          # simulation, aucun fichier écrit
        """
    )

    parser.add_argument('inputs', nargs='*',
                        help="Fichiers ou patterns glob ('-' pour l'entrée standard)")
    parser.add_argument('-o', '--output',
                        help="Fichier de sortie pour une entrée unique ('-' pour la sortie standard)")
    parser.add_argument('--line-break', type=int, dest='line_break_column', metavar='N',
                        help="Retour à la ligne après '}' au-delà de N caractères (défaut: désactivé)")
    parser.add_argument('--remove-charsets', action='store_true', default=None,
                        help='Supprime toutes les règles @charset')
    parser.add_argument('--config', default=DEFAULT_CONFIG_FILE,
                        help=f'Fichier de configuration JSON (défaut: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--threads', type=int,
                        help='Nombre de threads pour le traitement par lots (défaut: 8)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Mode simulation sans écriture de fichiers')
    parser.add_argument('--stats', action='store_true',
                        help='Affiche les statistiques avant/après (entrée unique)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Logs détaillés (DEBUG)')
    return parser


def _read_input(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    with open(source, 'r', encoding='utf-8') as f:
        return f.read()


def _write_output(target: str, content: str) -> None:
    if target == '-':
        sys.stdout.write(content)
        return
    with open(target, 'w', encoding='utf-8') as f:
        f.write(content)


def _print_stats(before: str, after: str) -> None:
    stats_before = get_text_stats(before)
    stats_after = get_text_stats(after)
    saved = stats_before.chars - stats_after.chars
    ratio = (stats_after.chars / stats_before.chars) if stats_before.chars else 1.0

    print(f"📊 Avant: {stats_before.lines:,} lignes, {stats_before.size_kb:.1f} KB", file=sys.stderr)
    print(f"✨ Après: {stats_after.lines:,} lignes, {stats_after.size_kb:.1f} KB", file=sys.stderr)
    print(f"💾 {saved:,} caractères économisés ({ratio:.1%} de la taille d'origine)", file=sys.stderr)


def run_single(source: str, target: str, compressor: CSSCompressor,
               show_stats: bool = False, dry_run: bool = False) -> int:
    """Compresse une seule entrée vers une seule sortie (rien n'est écrit en dry-run)."""
    try:
        content = _read_input(source)
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ Lecture impossible de {source}: {e}", file=sys.stderr)
        return 1

    compressed = compressor.compress(content)

    if dry_run:
        logger.info(f"[DRY-RUN] {source}: {len(content):,} -> {len(compressed):,} caractères, {target} non écrit")
        if show_stats:
            _print_stats(content, compressed)
        return 0

    try:
        _write_output(target, compressed)
    except OSError as e:
        print(f"❌ Écriture impossible de {target}: {e}", file=sys.stderr)
        return 1

    if show_stats:
        _print_stats(content, compressed)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s:%(name)s:%(message)s',
        stream=sys.stderr
    )

    overrides = {
        'css_files': args.inputs or None,
        'threads': args.threads,
        'line_break_column': args.line_break_column,
        'remove_charsets': args.remove_charsets,
    }

    try:
        # Entrée standard : pas d'argument et pas de configuration, ou '-'
        stdin_mode = args.inputs == ['-'] or (not args.inputs and not os.path.exists(args.config))

        if stdin_mode or args.output:
            if not stdin_mode and len(args.inputs) != 1:
                parser.error('--output demande une seule entrée')
            overrides['css_files'] = None
            config = load_config(args.config, overrides)
            compressor = CSSCompressor(config.compressor_options())
            source = '-' if stdin_mode else args.inputs[0]
            return run_single(source, args.output or '-', compressor, show_stats=args.stats,
                              dry_run=args.dry_run)

        config = load_config(args.config, overrides)
        runner = CompressorRunner(config, dry_run=args.dry_run)

        print("🚀 COMPRESSEUR CSS")
        report = runner.run()
        print(format_report(report))

        if report.failures:
            return 1
        if report.dry_run:
            print("🔍 MODE DRY-RUN - Aucun fichier modifié")
        return 0

    except KeyboardInterrupt:
        print("\n⚠️  Compression interrompue", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"\n❌ Erreur: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    sys.exit(main())
