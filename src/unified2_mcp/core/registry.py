from __future__ import annotations

import importlib
import logging
from typing import Dict, List

from .capability_base import Capability

logger = logging.getLogger("unified2_mcp.core.registry")

DEFAULT_FACTORY = "build_capability"


class CapabilityRegistry:
    """
    Loaded capability instances keyed by name.

    Import string format:
      "some.module.path:factory_function"
      "some.module.path", factory defaults to build_capability

    Example:
      "unified2_mcp.capabilities.file_tail.capability:build_capability"
    """

    def __init__(self):
        self._caps: Dict[str, Capability] = {}

    def register(self, cap: Capability) -> None:
        if cap.name in self._caps:
            raise ValueError(f"duplicate capability name {cap.name}")
        self._caps[cap.name] = cap

    def get(self, name: str) -> Capability:
        try:
            return self._caps[name]
        except KeyError:
            raise KeyError(f"capability not loaded {name}") from None

    def list(self) -> List[str]:
        return sorted(self._caps)

    def load(self, import_path: str) -> Capability:
        module_path, _, factory_name = import_path.partition(":")
        if not module_path:
            raise ValueError(f"bad capability import string {import_path!r}")
        module = importlib.import_module(module_path)
        factory = getattr(module, factory_name or DEFAULT_FACTORY)
        cap = factory()
        self.register(cap)
        logger.info("loaded capability %s from %s", cap.name, import_path)
        return cap

    def load_from_import_paths(self, import_paths: List[str]) -> None:
        for path in import_paths:
            self.load(path)
