# shared/cache.py
import logging
from typing import Any, Dict, Optional

from fastapi import Request

logger = logging.getLogger(__name__)


class ViewCache:
    """Rendered read views keyed by their route path.

    Listing routes fill it on first read, mutation handlers drop the paths they
    made stale.
    """

    def __init__(self):
        self._views: Dict[str, Any] = {}

    def get(self, path: str) -> Optional[Any]:
        return self._views.get(path)

    def store(self, path: str, view: Any) -> Any:
        self._views[path] = view
        return view

    def revalidate(self, path: str) -> None:
        if self._views.pop(path, None) is not None:
            logger.debug("Invalidated cached view %s", path)

    def revalidate_tree(self, path: str) -> None:
        """Drop ``path`` and every detail view below it."""
        prefix = path + "/"
        for cached in [p for p in self._views if p == path or p.startswith(prefix)]:
            self.revalidate(cached)

    def clear(self) -> None:
        self._views.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._views


def get_view_cache(request: Request) -> ViewCache:
    return request.app.state.view_cache
