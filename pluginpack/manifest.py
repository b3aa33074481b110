import os
import json
import logging

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when the plugin manifest is missing or has no usable version."""


def read_version(manifest_path: str) -> str:
    """Return the ``version`` string from a JSON plugin manifest."""
    if not os.path.exists(manifest_path):
        raise ManifestError(f"manifest.json not found at {manifest_path}")

    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            manifest = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {manifest_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Could not read {manifest_path}: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestError(f"{manifest_path} must contain a JSON object")

    version = manifest.get('version')
    if version is None or version == "":
        raise ManifestError(f'"version" field not found in {os.path.basename(manifest_path)}.')
    if not isinstance(version, str):
        raise ManifestError(f'"version" must be a string, got {type(version).__name__}')
    if not version.strip():
        raise ManifestError('"version" must not be blank')

    return version
