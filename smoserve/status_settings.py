"""The settings part of the JSON API status response."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from .settings import Settings

_log = logging.getLogger(__name__)

_PREFIX = "Status/Settings/"


def _copy_path(source: dict, result: dict, path: str) -> bool | None:
    """Copy the value at ``path`` into ``result``.

    Returns None if the path does not exist in ``source``, False if it could
    not be placed in ``result``, and True when it was copied.
    """
    node: Any = result
    sett: Any = source
    last = ""
    for key in path.split("/"):
        if last:
            sett = sett[last]
        if not isinstance(sett, dict) or key not in sett:
            return None
        if last and isinstance(node, dict):
            node = node.setdefault(last, {})
        last = key
    if isinstance(node, dict):
        node[last] = copy.deepcopy(sett[last])
        return True
    return False


def status_settings(settings: Settings, permissions: Iterable[str]) -> dict | None:
    """The settings a token may see, nested as in the settings file.

    Each ``Status/Settings/<path>`` permission exposes the value at ``path``.
    Returns None when no permission yields a value.
    """
    paths = [
        perm[len(_PREFIX):]
        for perm in sorted(permissions)
        if len(perm) > len(_PREFIX) and perm.startswith(_PREFIX)
    ]
    if not paths:
        return None

    source = settings.to_json_dict()
    result: dict = {}
    has_results = False
    for path in paths:
        copied = _copy_path(source, result, path)
        if copied is None:
            _log.warning(
                'Permission "%s%s" doesn\'t exist on the Settings object. '
                "This is probably a misconfiguration in the settings.json",
                _PREFIX,
                path,
            )
        elif copied:
            has_results = True
    return result if has_results else None