# ===== css_compressor/runner.py - COMPRESSION PAR LOTS =====
"""
Compression de plusieurs feuilles de style en parallèle.

Chaque fichier a son propre pipeline (et ses propres tables) : le
parallélisme se fait entre fichiers, jamais à l'intérieur d'un fichier.
"""

import os
import glob
import fnmatch
import threading
import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List

from .pipeline import CSSCompressor
from .schemas import BatchConfig, BatchReport, FileResult, FileStats

logger = logging.getLogger(__name__)


def get_text_stats(content: str) -> FileStats:
    """Statistiques d'un texte CSS (lignes, caractères, taille en KB)."""
    return FileStats(
        lines=len(content.split('\n')),
        chars=len(content),
        size_kb=len(content.encode('utf-8')) / 1024
    )


class CompressorRunner:
    def __init__(self, config: BatchConfig, dry_run: bool = False):
        self.config = config
        self.dry_run = dry_run
        self.compressor = CSSCompressor(config.compressor_options())

        # Pour la progression parallèle
        self.progress_lock = threading.Lock()
        self.completed_tasks = 0
        self.total_tasks = 0

    def _should_exclude_file(self, filename: str) -> bool:
        """Vérifie si un fichier doit être exclu (ex: fichiers déjà minifiés)."""
        basename = os.path.basename(filename)
        return any(fnmatch.fnmatch(basename, pattern) for pattern in self.config.exclude_files)

    def expand_files(self) -> List[str]:
        """Expand glob patterns pour trouver les fichiers CSS."""
        css_files = []
        for pattern in self.config.css_files:
            if '*' in pattern:
                candidates = sorted(glob.glob(pattern, recursive=True))
            elif os.path.exists(pattern):
                candidates = [pattern]
            else:
                logger.warning(f"Fichier CSS non trouvé: {pattern}")
                candidates = []

            for css_file in candidates:
                if self._should_exclude_file(css_file) or css_file in css_files:
                    continue
                css_files.append(css_file)
        return css_files

    def output_path(self, css_file: str) -> str:
        """styles.css -> styles.min.css (dans output_dir si configuré)."""
        base, ext = os.path.splitext(css_file)
        if ext.lower() != '.css':
            base = css_file
        output = base + self.config.output_suffix

        if self.config.output_dir:
            output = os.path.join(self.config.output_dir, os.path.basename(output))
        return output

    def compress_file(self, css_file: str) -> FileResult:
        """Compresse un fichier. Les erreurs d'E/S sont enregistrées, pas propagées."""
        result = FileResult(source=css_file, output=self.output_path(css_file))

        try:
            with open(css_file, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Lecture impossible de {css_file}: {e}")
            result.error = str(e)
            return result

        compressed = self.compressor.compress(content)
        result.original_size = len(content.encode('utf-8'))
        result.compressed_size = len(compressed.encode('utf-8'))

        if self.dry_run:
            logger.info(f"[DRY-RUN] {css_file}: {result.original_size:,} -> {result.compressed_size:,} octets")
            return result

        try:
            output_dir = os.path.dirname(result.output)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            with open(result.output, 'w', encoding='utf-8') as f:
                f.write(compressed)
            result.written = True
        except OSError as e:
            logger.error(f"Écriture impossible de {result.output}: {e}")
            result.error = str(e)
            return result

        logger.info(f"{css_file} -> {result.output}: {result.bytes_saved:,} octets économisés")
        return result

    def _update_progress(self, css_file: str, status: str) -> None:
        """Met à jour la progression thread-safe."""
        with self.progress_lock:
            self.completed_tasks += 1
            logger.debug(f"[{self.completed_tasks}/{self.total_tasks}] {css_file} - {status}")

    def run(self) -> BatchReport:
        """Compresse tous les fichiers configurés, en parallèle."""
        start_time = time.time()
        css_files = self.expand_files()

        self.total_tasks = len(css_files)
        self.completed_tasks = 0

        results: Dict[str, FileResult] = {}
        if css_files:
            with ThreadPoolExecutor(max_workers=self.config.threads) as executor:
                future_to_file = {
                    executor.submit(self.compress_file, css_file): css_file
                    for css_file in css_files
                }

                for future in as_completed(future_to_file):
                    css_file = future_to_file[future]
                    result = future.result()
                    results[css_file] = result
                    self._update_progress(css_file, "OK" if result.ok else "ERREUR")
        else:
            logger.warning("Aucun fichier CSS à compresser")

        # Ordre de la configuration, pas ordre de fin des threads
        report = BatchReport(
            results=[results[css_file] for css_file in css_files],
            dry_run=self.dry_run,
            total_time=time.time() - start_time
        )
        return report


def format_report(report: BatchReport) -> str:
    """Rapport lisible du traitement par lots."""
    lines = []
    lines.append("="*60)
    lines.append("📋 RAPPORT DE COMPRESSION CSS")
    lines.append("="*60)
    lines.append(f"🔧 Mode: {'DRY-RUN' if report.dry_run else 'PRODUCTION'}")
    lines.append("")

    for result in report.results:
        if result.ok:
            lines.append(f"  ✅ {result.source}: {result.original_size:,} -> "
                         f"{result.compressed_size:,} octets ({result.ratio:.1%})")
        else:
            lines.append(f"  ❌ {result.source}: {result.error}")

    lines.append("")
    lines.append(f"📁 Fichiers traités: {len(report.results)}")
    if report.failures:
        lines.append(f"⚠️  Échecs: {len(report.failures)}")
    lines.append(f"💾 Octets économisés: {report.bytes_saved:,} ({report.bytes_saved/1024:.1f} KB)")
    lines.append(f"⏱️  Temps total: {report.total_time:.1f}s")
    return '\n'.join(lines)
