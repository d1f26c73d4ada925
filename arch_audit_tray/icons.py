"""
Lookup of icon theme directories.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from arch_audit_tray.status import Icon
from arch_audit_tray.theme import Theme

PACKAGE_ICONS_DIR = Path(__file__).resolve().parent / "themes"
ICON_SEARCH_DIRS: Sequence[Path] = (
    Path("./icons"),
    PACKAGE_ICONS_DIR,
    Path("/usr/share/arch-audit-tray/icons"),
)


def resolve_theme_dir(theme: Theme, search_dirs: Iterable[Path] = ICON_SEARCH_DIRS) -> Optional[Path]:
    """
    Return the first directory holding a usable icon set for ``theme``.

    Each search directory is tried with the requested theme and then with the
    default one. A directory counts as usable once it contains the ``check``
    icon.
    """
    candidates = [theme]
    if theme != Theme.default():
        candidates.append(Theme.default())

    for base in search_dirs:
        for candidate in candidates:
            theme_dir = base / candidate.name
            if (theme_dir / Icon.CHECK.file_name).is_file():
                return theme_dir.resolve()
    return None


def icon_path(theme_dir: Path, icon: Icon) -> Path:
    return theme_dir / icon.file_name
