# ===== css_compressor/schemas.py - MODÈLES DE CONFIGURATION =====
from pydantic import BaseModel, field_validator
from typing import List, Optional

# ===== OPTIONS DU COMPRESSEUR =====

class CompressorOptions(BaseModel):
    line_break_column: int = -1  # < 0 : pas de retour à la ligne
    remove_charsets: bool = False


# ===== CONFIGURATION DU TRAITEMENT PAR LOTS =====

class BatchConfig(BaseModel):
    css_files: List[str] = ['*.css']
    exclude_files: List[str] = ['*.min.css']
    output_suffix: str = '.min.css'
    output_dir: Optional[str] = None
    threads: int = 8
    line_break_column: int = -1
    remove_charsets: bool = False

    @field_validator('threads')
    @classmethod
    def threads_must_be_positive(cls, v):
        if v < 1:
            raise ValueError('threads doit être >= 1')
        return v

    @field_validator('output_suffix')
    @classmethod
    def suffix_must_not_be_empty(cls, v):
        if not v:
            raise ValueError("output_suffix ne peut pas être vide (écraserait les sources)")
        return v

    def compressor_options(self) -> CompressorOptions:
        return CompressorOptions(
            line_break_column=self.line_break_column,
            remove_charsets=self.remove_charsets
        )


# ===== RÉSULTATS =====

class FileStats(BaseModel):
    lines: int = 0
    chars: int = 0
    size_kb: float = 0


class FileResult(BaseModel):
    source: str
    output: Optional[str] = None
    original_size: int = 0
    compressed_size: int = 0
    written: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def bytes_saved(self) -> int:
        return self.original_size - self.compressed_size

    @property
    def ratio(self) -> float:
        """Taille compressée / taille d'origine (1.0 pour un fichier vide)."""
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


class BatchReport(BaseModel):
    results: List[FileResult] = []
    dry_run: bool = False
    total_time: float = 0

    @property
    def failures(self) -> List[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def original_size(self) -> int:
        return sum(r.original_size for r in self.results if r.ok)

    @property
    def compressed_size(self) -> int:
        return sum(r.compressed_size for r in self.results if r.ok)

    @property
    def bytes_saved(self) -> int:
        return self.original_size - self.compressed_size
