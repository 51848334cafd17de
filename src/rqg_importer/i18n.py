"""
Localized message catalog.

Catalogs are YAML files under ``lang/``, one per language, with every key
nested under the module identifier:

    rqg-character-importer:
      notifications:
        importStarted: "Importing character {name}..."

Keys are looked up with dots (``notifications.importStarted``) and always
resolved inside the module's namespace.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .config import MODULE_ID

logger = logging.getLogger("rqg-character-importer")

LANG_DIR = Path(__file__).parent / "lang"
DEFAULT_LANGUAGE = "en"


def load_catalog(language: str = DEFAULT_LANGUAGE, lang_dir: Path | None = None) -> dict[str, Any]:
    """Load the message catalog for a language.

    Falls back to English when no catalog exists for ``language``.

    Args:
        language: Language code, e.g. "en".
        lang_dir: Directory holding ``<language>.yaml`` files.

    Returns:
        The parsed catalog.

    Raises:
        yaml.YAMLError: If the catalog file is malformed.
        ValueError: If the catalog is not a mapping.
    """
    lang_dir = lang_dir or LANG_DIR
    path = lang_dir / f"{language}.yaml"
    if not path.exists():
        logger.warning(f"⚠️ No catalog for language '{language}', falling back to '{DEFAULT_LANGUAGE}'")
        path = lang_dir / f"{DEFAULT_LANGUAGE}.yaml"

    with open(path, "r", encoding="utf-8") as f:
        catalog = yaml.safe_load(f) or {}

    if not isinstance(catalog, dict):
        raise ValueError(f"Catalog {path} must contain a mapping")
    return catalog


def localize(catalog: dict[str, Any], key: str, module_id: str = MODULE_ID, **params: Any) -> str:
    """Resolve a namespaced message and fill in its placeholders.

    Unknown keys resolve to the full namespaced key so that a missing
    translation is visible rather than silently empty.

    Example:
        >>> localize(catalog, "notifications.importSuccess", name="Urgath")
        'Character Urgath imported successfully.'
    """
    full_key = f"{module_id}.{key}"
    node: Any = catalog
    for part in full_key.split("."):
        if not isinstance(node, dict) or part not in node:
            logger.debug(f"❓ Missing translation for '{full_key}'")
            return full_key
        node = node[part]

    if not isinstance(node, str):
        return full_key

    message = node
    for name, value in params.items():
        message = message.replace(f"{{{name}}}", str(value))
    return message
