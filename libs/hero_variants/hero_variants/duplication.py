"""
Duplicator: copie profonde d'un bloc hero avec réinitialisations optionnelles.

  preserve_media=False   → chaque média (même imbriqué dans une liste) devient un placeholder
  preserve_buttons=False → chaque URL de bouton devient "#", le texte est conservé
  name_prefix            → préfixe appliqué au titre principal, jamais doublé

L'entrée n'est jamais modifiée et la copie reçoit toujours un nouvel identifiant.
"""
import copy
import logging
import uuid
from typing import Any, Optional, Union

from pydantic import ConfigDict

from . import config
from .models import CamelModel
from .paths import get_path, set_path
from .registry import REGISTRY

log = logging.getLogger(__name__)

_MEDIA_KEYS  = {"url", "type", "objectFit", "loading"}
_BUTTON_KEYS = {"text", "url", "style", "size"}


class DuplicateOptions(CamelModel):
    model_config = ConfigDict(extra="forbid")

    preserve_media: bool = True
    preserve_buttons: bool = True
    name_prefix: str = config.COPY_PREFIX
    new_id: Optional[str] = None


def copy_id(original: str) -> str:
    return f"{original}-copy-{uuid.uuid4().hex[:8]}"


def _is_media(node: dict) -> bool:
    return _MEDIA_KEYS <= node.keys()


def _is_button(node: dict) -> bool:
    return _BUTTON_KEYS <= node.keys()


def _placeholder_media(media: dict) -> dict:
    is_video = media.get("type") == "video"
    placeholder = {
        "id": media.get("id", "placeholder"),
        "url": config.PLACEHOLDER_VIDEO if is_video else config.PLACEHOLDER_IMAGE,
        "type": media["type"],
        "alt": config.PLACEHOLDER_ALT,
        "objectFit": media["objectFit"],
        "loading": media["loading"],
    }
    if is_video:
        for key in ("autoplay", "loop", "muted", "controls"):
            if key in media:
                placeholder[key] = media[key]
        if "poster" in media:
            placeholder["poster"] = config.PLACEHOLDER_POSTER
    return placeholder


def _reset(node: Any, reset_media: bool, reset_buttons: bool) -> Any:
    """Parcours récursif du graphe (dicts + listes), modifie la copie en place."""
    if isinstance(node, list):
        return [_reset(item, reset_media, reset_buttons) for item in node]
    if not isinstance(node, dict):
        return node
    if reset_media and _is_media(node):
        return _placeholder_media(node)
    if reset_buttons and _is_button(node):
        node["url"] = config.PLACEHOLDER_URL
        return node
    for key, value in node.items():
        node[key] = _reset(value, reset_media, reset_buttons)
    return node


def _prefix_title(block: dict, title_path: str, prefix: str) -> None:
    current = get_path(block, title_path)
    if isinstance(current, dict) and isinstance(current.get("text"), str):
        if not current["text"].startswith(prefix):
            current["text"] = prefix + current["text"]
    elif isinstance(current, str) and not current.startswith(prefix):
        set_path(block, title_path, prefix + current)


def duplicate(instance: dict, options: Union[DuplicateOptions, dict, None] = None) -> dict:
    """
    Duplique un bloc hero.

    Args:
        instance: bloc source (jamais modifié)
        options:  DuplicateOptions ou dict (snake_case ou camelCase)

    Returns:
        Nouveau bloc, conforme au schéma de la même variante

    Raises:
        UnknownVariantError si la variante du bloc est inconnue
    """
    if not isinstance(options, DuplicateOptions):
        options = DuplicateOptions.model_validate(options or {})
    schema = REGISTRY.get(instance.get("variant"))

    block = copy.deepcopy(instance)
    block["id"] = options.new_id or copy_id(str(instance.get("id") or schema.variant.value))

    if not options.preserve_media or not options.preserve_buttons:
        block = _reset(block, not options.preserve_media, not options.preserve_buttons)

    if options.name_prefix:
        for spec in schema.fields_with_role("title"):
            _prefix_title(block, spec.path, options.name_prefix)

    log.info("Bloc %s dupliqué → %s", instance.get("id"), block["id"])
    return block
