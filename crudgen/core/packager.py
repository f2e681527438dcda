import io
import logging
import os
import zipfile
from typing import Iterable

from crudgen.core.schema import GeneratedFile, is_safe_path, normalize_path

logger = logging.getLogger(__name__)

# Fixed timestamp so identical ordered input yields identical archive bytes.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class ArchiveError(RuntimeError):
    pass


_EXT_LANG = {
    "py": "python",
    "js": "javascript", "mjs": "javascript",
    "ts": "typescript",
    "java": "java",
    "yaml": "yaml", "yml": "yaml",
    "xml": "xml",
    "json": "json",
    "sh": "bash",
    "html": "html", "css": "css",
    "md": "markdown",
    "properties": "properties",
    "sql": "sql",
}

_NAME_LANG = {
    "dockerfile": "dockerfile",
    "makefile": "makefile",
    ".env": "properties",
}


def guess_language(path: str) -> str:
    """Syntax-highlighting language for a file path; ``plaintext`` when unknown."""
    name = os.path.basename((path or "").replace("\\", "/")).lower()
    if name in _NAME_LANG:
        return _NAME_LANG[name]
    _, ext = os.path.splitext(name)
    return _EXT_LANG.get(ext.lstrip("."), "plaintext")


def archive_name(path: str) -> str:
    """Entry name for ``path``: forward slashes, no leading ``./``."""
    if not is_safe_path(path):
        raise ArchiveError(f"Unsafe file path: {path!r}")
    return normalize_path(path)


def build_zip(files: Iterable[GeneratedFile]) -> io.BytesIO:
    """Builds an in-memory ZIP with one entry per file, in the order given.

    Entry names keep the directory separators of each path and contents are
    written as UTF-8 text, unmodified.
    """
    mem = io.BytesIO()
    try:
        with zipfile.ZipFile(mem, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            for f in files:
                info = zipfile.ZipInfo(archive_name(f.path), date_time=ZIP_EPOCH)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                zf.writestr(info, f.content.encode("utf-8"))
    except ArchiveError:
        raise
    except Exception as e:
        logger.exception("ZIP construction failed")
        raise ArchiveError(f"Failed to build archive: {e}") from e
    mem.seek(0)
    return mem
