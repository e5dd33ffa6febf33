"""
Import collection for generated accessors.

Only the imports whose packages are actually named by a generated accessor
are kept, rendered in a stable order so regeneration is byte-identical.
"""

import json
from typing import Dict, Iterable, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.model import Import, PackageRef
from .types import find_import

logger = get_logger(__name__)


def default_import_name(path: str) -> str:
    """
    Guess the package name Go would assume for an import path.

    Skips a trailing major-version element ("/v2"), drops a "go-" prefix and
    cuts at the first character that cannot appear in an identifier
    ("yaml.v3" -> "yaml").
    """
    parts = path.rstrip("/").split("/")
    base = parts[-1]
    if len(parts) > 1 and base[:1] == "v" and base[1:].isdigit():
        base = parts[-2]

    if base.startswith("go-"):
        base = base[3:]

    for i, ch in enumerate(base):
        if not (ch.isalnum() or ch == "_"):
            return base[:i]
    return base


def render_import(imp: Import, package_name: Optional[str] = None) -> str:
    """
    Render one import spec.

    A named import keeps its alias unless it repeats ``package_name``, the
    name declared by the imported package itself.
    """
    quoted = json.dumps(imp.path)
    if imp.is_named and imp.name != package_name:
        return f"{imp.name} {quoted}"
    return quoted


class ImportCollector:
    """Tracks which packages generated code refers to."""

    def __init__(self, imports: Iterable[Import]):
        self.imports: Tuple[Import, ...] = tuple(imports)
        self._used: Dict[str, PackageRef] = {}

    def record(self, refs: Iterable[PackageRef]):
        """Mark packages as referenced by a generated accessor."""
        for ref in refs:
            self._used.setdefault(ref.path, ref)

    @property
    def used_paths(self) -> List[str]:
        return sorted(self._used)

    @property
    def unresolved(self) -> List[PackageRef]:
        """Referenced packages that no import in the package provides."""
        return [
            self._used[path]
            for path in self.used_paths
            if find_import(self.imports, path) is None
        ]

    def collect(self) -> List[str]:
        """Return the import specs to emit, ordered by path."""
        rendered = []
        for path in self.used_paths:
            imp = find_import(self.imports, path)
            if imp is None:
                logger.debug("No import declared for referenced package %s", path)
                continue
            rendered.append(render_import(imp, self._used[path].name))
        return rendered


def collect_imports(refs: Iterable[PackageRef], imports: Iterable[Import]) -> List[str]:
    """Convenience wrapper: the minimal import list for ``refs``."""
    collector = ImportCollector(imports)
    collector.record(refs)
    return collector.collect()
