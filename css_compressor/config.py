# ===== css_compressor/config.py - CHARGEMENT DE LA CONFIGURATION =====
import json
import os
import logging
from typing import Any, Dict, Optional

from .schemas import BatchConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = '.css-compressor.json'


def load_config(config_file: str = DEFAULT_CONFIG_FILE, overrides: Optional[Dict[str, Any]] = None) -> BatchConfig:
    """Charge la configuration ou utilise des valeurs par défaut.

    Les clés du fichier JSON remplacent les valeurs par défaut, puis les
    `overrides` (options de ligne de commande) remplacent le tout. Les
    overrides à None sont ignorés.
    """
    config: Dict[str, Any] = {}

    if os.path.exists(config_file):
        with open(config_file, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(f"{config_file}: un objet JSON est attendu")
        config.update(user_config)
        logger.info(f"Configuration chargée depuis {config_file}")
    else:
        logger.debug(f"Pas de fichier {config_file}, valeurs par défaut")

    if overrides:
        config.update({key: value for key, value in overrides.items() if value is not None})

    return BatchConfig(**config)
