# File: site_mirror/storage.py
"""site_mirror.storage: локальное хранилище страниц (зеркало), используемое как кэш между запусками."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Optional, Union

from site_mirror.errors import StoreError
from site_mirror.logger import get_logger

__all__ = ["PageStore", "INDEX_NAME"]

log = get_logger("storage")

#: имя файла для корня сайта
INDEX_NAME = "index"


class PageStore:
    """Хранит HTML страниц в дереве ``<root><url_path>/<basename>.html``."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, url_path: str) -> Path:
        """Возвращает путь файла для пути URL; не выходит за пределы корня."""
        clean = posixpath.normpath("/" + url_path.strip("/"))
        if clean == "/":
            return self.root / f"{INDEX_NAME}.html"
        # normpath of an absolute path clamps ".." at the root
        parts = [p for p in clean.split("/") if p]
        return self.root.joinpath(*parts) / f"{parts[-1]}.html"

    def load(self, url_path: str) -> Optional[bytes]:
        """Читает сохранённую страницу; ``None``, если её ещё нет."""
        file = self.path_for(url_path)
        try:
            data = file.read_bytes()
        except FileNotFoundError:
            log.debug("%s does not exist, will download", file)
            return None
        except OSError as exc:
            raise StoreError(file, exc.strerror or str(exc)) from exc
        log.debug("%s already exists", file)
        return data

    def save(self, url_path: str, data: bytes) -> Path:
        """Создаёт родительские каталоги и записывает страницу (перезаписывает молча)."""
        file = self.path_for(url_path)
        try:
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_bytes(data)
        except OSError as exc:
            raise StoreError(file, exc.strerror or str(exc)) from exc
        log.debug("saved %s (%d bytes)", file, len(data))
        return file
