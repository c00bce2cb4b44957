# src/wg_report/errors.py
from __future__ import annotations

from pathlib import Path


class ReportError(Exception):
    """Erreur de base pour la génération et la sauvegarde du rapport."""


class ReportStoreError(ReportError):
    """Fichier de rapport illisible ou impossible à écrire."""

    def __init__(self, path: Path, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"I/O error on report file {path}")


class ReportPermissionError(ReportStoreError):
    """Le fichier existe mais les droits ne permettent pas de le lire."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"{path} cannot be accessed. Check read permissions.")


class ReportValidationError(ReportError):
    """Le rapport sauvegardé ne respecte pas le schéma attendu."""

    def __init__(self, path: Path, detail: str | None = None) -> None:
        self.path = path
        self.detail = detail
        message = f"Invalid report file {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConfigError(ReportError):
    """Config du mesh absente, illisible ou invalide."""


class SnapshotError(ReportError):
    """Impossible d'obtenir le snapshot des peers depuis wg."""
