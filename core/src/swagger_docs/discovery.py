from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from swagger_docs.models import DefinitionURL

logger = logging.getLogger(__name__)

DEFINITION_EXTENSIONS = frozenset({".json", ".yaml", ".yml"})


def is_definition_path(path: str) -> bool:
    return PurePosixPath(path).suffix in DEFINITION_EXTENSIONS


def _is_within(path: str, root: str) -> bool:
    return os.path.commonpath([path, root]) == root


def _sorted_entries(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


def _walk(
    directory: Path,
    rel: PurePosixPath,
    out: list[DefinitionURL],
    *,
    root: str,
    follow_links: bool,
    visited: set[str],
) -> None:
    visited.add(os.path.realpath(directory))
    try:
        entries = _sorted_entries(directory)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return

    for entry in entries:
        entry_rel = rel / entry.name
        try:
            if entry.is_dir(follow_symlinks=False):
                if os.path.realpath(entry.path) in visited:
                    continue
                _walk(
                    Path(entry.path),
                    entry_rel,
                    out,
                    root=root,
                    follow_links=follow_links,
                    visited=visited,
                )
                continue

            if entry.is_symlink() and entry.is_dir(follow_symlinks=True):
                target = os.path.realpath(entry.path)
                # Targets inside doc_dir are reached by the regular walk.
                if not follow_links or target in visited or _is_within(target, root):
                    logger.debug("Not following symlinked directory %s", entry.path)
                    continue
                visited.add(target)
                # One hop only: links inside the target are not followed again.
                _walk(
                    Path(target), entry_rel, out, root=root, follow_links=False, visited=visited
                )
                continue

            if entry.is_file(follow_symlinks=True) and is_definition_path(entry.name):
                out.append(DefinitionURL(name=entry.name, url=str(entry_rel)))
        except OSError as exc:
            logger.warning("Skipping %s: %s", entry.path, exc)


def discover_definition_urls(doc_dir: Path) -> list[DefinitionURL]:
    """Scan doc_dir for API definition files (.json, .yaml, .yml).

    - Entries are visited depth-first in lexical order.
    - Each match is named by its base name; its URL is the POSIX path relative to doc_dir.
    - Symlinked directories outside doc_dir are followed a single hop and never twice;
      links back into doc_dir are not followed.
    - Errors are logged and skipped; partial results are returned.
    """

    if not doc_dir.is_dir():
        logger.info("Documentation directory %s not found; no definitions discovered", doc_dir)
        return []

    out: list[DefinitionURL] = []
    visited: set[str] = set()
    root = os.path.realpath(doc_dir)
    _walk(doc_dir, PurePosixPath(), out, root=root, follow_links=True, visited=visited)

    logger.debug("Discovered %d definition file(s) under %s", len(out), doc_dir)
    return out
