from .apkg import ApkgExportStats, write_apkg

__all__ = ["ApkgExportStats", "write_apkg"]
