from __future__ import annotations

"""
Dependency File Collection Service.

Copies the files listed in an analysis report (or a plain path list) from
their mapped local location into an output directory, mirroring each file's
canonical production path below that directory. Unchanged targets are
skipped, missing sources are counted, and a failure on one file never stops
the others.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from scriptdeps.core.paths.mapper import PathMapper
from scriptdeps.core.paths.normalizer import resolve_canonical
from scriptdeps.core.report.markdown_parser import (
    ExtractOptions,
    extract_file_list_from_markdown_file,
    is_markdown_file,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class CopyStats:
    """Counters accumulated over one copy run."""
    total: int = 0
    copied: int = 0
    skipped: int = 0
    missing: int = 0
    errors: int = 0

    @property
    def success_rate(self) -> float:
        if self.total <= 0:
            return 0.0
        return (self.copied + self.skipped) / self.total * 100


@dataclass(frozen=True)
class CopyOptions:
    """
    Behavior switches of a copy run.

    Attributes:
        extract: Group filter applied to markdown reports.
        dry_run: Count what would be copied without touching the disk.
        verbose: Log every mapping and skip decision at INFO level.
    """
    extract: ExtractOptions = field(default_factory=ExtractOptions)
    dry_run: bool = False
    verbose: bool = False

# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class FileCopyService:
    """
    Collect analyzed files into one directory.

    Args:
        cfg: Validated configuration ('pwd' and 'pathMappings' are used).
    """

    def __init__(self, cfg: Dict[str, Any]) -> None:
        self._mapper = PathMapper.from_config(cfg)
        self._pwd = cfg.get("pwd") or "/"

    def copy_files(
            self,
            input_path: str,
            output_dir: str,
            options: Optional[CopyOptions] = None,
    ) -> CopyStats:
        """
        Copy every listed file.

        Args:
            input_path: Markdown report (.md) or text file with one path per line.
            output_dir: Destination root.
            options: Run options.

        Returns:
            CopyStats: Counters of the run.

        Raises:
            FileNotFoundError: If the input file does not exist.
        """
        opts = options or CopyOptions()
        if not os.path.isfile(input_path):
            raise FileNotFoundError(f"Input file not found: {input_path}")

        file_paths = self._extract_file_paths(input_path, opts)
        stats = CopyStats(total=len(file_paths))

        source_kind = "analysis file" if is_markdown_file(input_path) else "file list"
        logger.info(f"Processing {stats.total} files from {source_kind}: {input_path}")
        logger.info(f"Output directory: {output_dir}")
        if opts.dry_run:
            logger.info("Dry run mode: no files will be copied.")

        for file_path in file_paths:
            try:
                self._copy_one(file_path, output_dir, opts, stats)
            except OSError as e:
                stats.errors += 1
                logger.error(f"Error processing {file_path}: {e}")

        return stats

    def _extract_file_paths(self, input_path: str, opts: CopyOptions) -> List[str]:
        if is_markdown_file(input_path):
            return extract_file_list_from_markdown_file(input_path, opts.extract)

        with open(input_path, "r", encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip()]

    def _copy_one(self, file_path: str, output_dir: str, opts: CopyOptions, stats: CopyStats) -> None:
        absolute = resolve_canonical(self._pwd, file_path)
        local_path = self._mapper.resolve_local(self._pwd, file_path)
        verbose_level = logging.INFO if opts.verbose else logging.DEBUG

        logger.log(verbose_level, f"Mapping: {absolute} -> {local_path}")

        if not os.path.isfile(local_path):
            stats.missing += 1
            logger.warning(f"File not found: {local_path}")
            return

        dest_path = os.path.join(output_dir, absolute.lstrip("/"))

        if os.path.exists(dest_path) and _is_unchanged(local_path, dest_path):
            stats.skipped += 1
            logger.log(verbose_level, f"Skipping unchanged: {dest_path}")
            return

        if opts.dry_run:
            stats.copied += 1
            logger.info(f"Would copy: {local_path} -> {dest_path}")
            return

        os.makedirs(os.path.dirname(dest_path), exist_ok=True)
        shutil.copy2(local_path, dest_path)
        stats.copied += 1
        logger.log(verbose_level, f"Copied: {dest_path}")


def _is_unchanged(source: str, dest: str) -> bool:
    src_stat = os.stat(source)
    dst_stat = os.stat(dest)
    return src_stat.st_mtime <= dst_stat.st_mtime and src_stat.st_size == dst_stat.st_size

# -----------------------------------------------------------------------------
# PRESENTATION
# -----------------------------------------------------------------------------

def format_stats(stats: CopyStats, dry_run: bool = False) -> List[str]:
    """
    Build the human-readable summary of a copy run.

    Args:
        stats: Counters of the run.
        dry_run: Whether the run was simulated.

    Returns:
        List[str]: Summary lines.
    """
    lines = [
        "Copy Summary:",
        f"  Total files: {stats.total}",
        f"  Copied:      {stats.copied}",
        f"  Skipped:     {stats.skipped}",
        f"  Missing:     {stats.missing}",
        f"  Errors:      {stats.errors}",
    ]
    if dry_run:
        lines.append("This was a dry run - no files were actually copied.")
    lines.append(f"Success rate: {stats.success_rate:.1f}%")
    return lines
