"""
cryonics_core.paths
Output folder helpers.
"""
from __future__ import annotations
from pathlib import Path

OUTPUT_DIR = Path("output")
OUT_HTML_DIR = OUTPUT_DIR / "html"
OUT_XLSX_DIR = OUTPUT_DIR / "xlsx"
OUT_PDF_DIR = OUTPUT_DIR / "pdf"
OUT_LOG_DIR = OUTPUT_DIR / "logs"

_KIND_DIRS = {
    "html": OUT_HTML_DIR,
    "xlsx": OUT_XLSX_DIR,
    "pdf": OUT_PDF_DIR,
    "logs": OUT_LOG_DIR,
}

def ensure_output_dirs(base_dir: Path | None = None) -> None:
    root = Path(base_dir) if base_dir else Path(".")
    for d in _KIND_DIRS.values():
        (root / d).mkdir(parents=True, exist_ok=True)

def out_path(kind: str, filename: str, base_dir: Path | None = None) -> Path:
    k = kind.lower()
    if k not in _KIND_DIRS:
        raise ValueError(f"Unknown output kind: {kind}")
    ensure_output_dirs(base_dir)
    root = Path(base_dir) if base_dir else Path(".")
    return root / _KIND_DIRS[k] / filename
