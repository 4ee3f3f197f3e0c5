"""Configuration: constantes lues depuis l'environnement."""
import logging
import os
from typing import Optional

DEFAULT_STRATEGY   = os.getenv("HERO_DEFAULT_STRATEGY", "balanced")
COPY_PREFIX        = os.getenv("HERO_COPY_PREFIX", "Copy of ")
PLACEHOLDER_URL    = os.getenv("HERO_PLACEHOLDER_URL", "#")
PLACEHOLDER_IMAGE  = os.getenv("HERO_PLACEHOLDER_IMAGE", "/assets/placeholders/image.jpg")
PLACEHOLDER_VIDEO  = os.getenv("HERO_PLACEHOLDER_VIDEO", "/assets/placeholders/video.mp4")
PLACEHOLDER_POSTER = os.getenv("HERO_PLACEHOLDER_POSTER", "/assets/placeholders/poster.jpg")
PLACEHOLDER_ALT    = os.getenv("HERO_PLACEHOLDER_ALT", "Image à remplacer")
LOG_LEVEL          = os.getenv("HERO_LOG_LEVEL", "WARNING")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Applique le niveau de log au logger du package (pas de basicConfig ici)."""
    logger = logging.getLogger("hero_variants")
    logger.setLevel((level or LOG_LEVEL).upper())
    return logger
