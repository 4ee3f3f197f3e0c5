"""
Chemins pointés sur des dicts JSON: "content.title", "content.buttons[0]".

Navigation identique à la résolution des clés i18n : split(".") puis descente
dans les dicts imbriqués, avec en plus l'index de liste "[n]".
"""
import re
from typing import Any, List, Tuple, Union

_MISSING = object()
_INDEXED = re.compile(r"^(\w+)\[(\d+)\]$")

Segment = Union[str, int]


def split_path(path: str) -> List[Segment]:
    """Ex : "content.buttons[1].url" → ["content", "buttons", 1, "url"]"""
    segments: List[Segment] = []
    for part in path.split("."):
        match = _INDEXED.match(part)
        if match:
            segments.extend([match.group(1), int(match.group(2))])
        else:
            segments.append(part)
    return segments


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    node = obj
    for seg in split_path(path):
        if isinstance(seg, int):
            if not isinstance(node, list) or seg >= len(node):
                return default
            node = node[seg]
        else:
            if not isinstance(node, dict) or seg not in node:
                return default
            node = node[seg]
    return node


def has_path(obj: Any, path: str) -> bool:
    """True si le chemin existe et ne vaut pas None."""
    return get_path(obj, path, _MISSING) not in (_MISSING, None)


def path_exists(obj: Any, path: str) -> bool:
    """True si le chemin existe, même avec la valeur None."""
    return get_path(obj, path, _MISSING) is not _MISSING


def set_path(obj: dict, path: str, value: Any) -> None:
    """Écrit la valeur en créant les dicts/listes intermédiaires (in-place)."""
    segments = split_path(path)
    node: Any = obj
    for seg, nxt in zip(segments, segments[1:]):
        empty = [] if isinstance(nxt, int) else {}
        if isinstance(seg, int):
            while len(node) <= seg:
                node.append(None)
            if node[seg] is None:
                node[seg] = empty
        elif node.get(seg) is None:
            node[seg] = empty
        node = node[seg]
    last = segments[-1]
    if isinstance(last, int):
        while len(node) <= last:
            node.append(None)
    node[last] = value


def delete_path(obj: dict, path: str) -> bool:
    """Supprime la clé finale ; retire aussi les dicts parents devenus vides."""
    segments = split_path(path)
    trail: List[Tuple[Any, Segment]] = []
    node: Any = obj
    for seg in segments[:-1]:
        try:
            trail.append((node, seg))
            node = node[seg]
        except (KeyError, IndexError, TypeError):
            return False
    last = segments[-1]
    if isinstance(node, dict) and last in node:
        del node[last]
    elif isinstance(node, list) and isinstance(last, int) and last < len(node):
        node.pop(last)
    else:
        return False
    for parent, seg in reversed(trail):
        child = parent[seg]
        if isinstance(child, dict) and not child and isinstance(seg, str):
            del parent[seg]
        else:
            break
    return True


def parent_paths(path: str) -> List[str]:
    """Ex : "a.b.c" → ["a", "a.b"]"""
    parts = path.split(".")
    return [".".join(parts[:i]) for i in range(1, len(parts))]
