from __future__ import annotations
import importlib
import logging
from typing import Dict, Any, Callable

log = logging.getLogger(__name__)

ADAPTER_MODULES = ("sigbench_classical", "sigbench_liboqs")


class _Registry:
    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def register(self, name: str) -> Callable[[Any], Any]:
        def _inner(cls_or_obj: Any) -> Any:
            self._items[name] = cls_or_obj
            return cls_or_obj
        return _inner

    def get(self, name: str) -> Any:
        try:
            return self._items[name]
        except KeyError:
            raise KeyError(
                f"no adapter registered for {name!r} (available: {', '.join(sorted(self._items)) or 'none'})"
            ) from None

    def list(self) -> Dict[str, Any]:
        return dict(self._items)


registry = _Registry()


def load_adapters(modules: tuple[str, ...] = ADAPTER_MODULES) -> None:
    """Import adapter packages so they register themselves.

    A missing adapter package only narrows the set of algorithms available.
    """
    for mod in modules:
        try:
            importlib.import_module(mod)
        except ImportError as exc:
            log.warning("adapter package %s unavailable: %s", mod, exc)
