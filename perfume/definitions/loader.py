"""Turn population definitions into runtime objects."""

import os
from pathlib import Path
from typing import Mapping, Optional

from ..bridges.bridge import ConnectionBridge
from ..bridges.directory_bridge import DirectoryBridge
from ..bridges.http_bridge import HttpBridge
from ..bridges.memory_bridge import MemoryBridge
from ..identity.errors import ConfigurationError
from ..identity.population import Ingredients, Population
from .models import PopulationDefinition

MEMORY_STORE = "memory:"
DIRECTORY_STORE_PREFIX = "dir:"
HTTP_STORE_PREFIXES = ("http://", "https://")


def resolve_secret(
    definition: PopulationDefinition, environ: Optional[Mapping[str, str]] = None
) -> bytes:
    """Return the secret bytes, reading ``env.NAME`` references from ``environ``.

    Raises:
        ConfigurationError: If the referenced environment variable is not set
    """
    env_var = definition.secret_env_var
    if env_var is None:
        return definition.secret.encode("utf-8")

    environ = os.environ if environ is None else environ
    if env_var not in environ:
        raise ConfigurationError(f"environment variable '{env_var}' is not set")
    return environ[env_var].encode("utf-8")


def build_bridge(store: str, project_root: Path) -> ConnectionBridge:
    """Create the connection bridge described by a store value.

    Raises:
        ConfigurationError: If the value is not recognized
    """
    store = store.strip()
    if store == MEMORY_STORE:
        return MemoryBridge()
    if store.startswith(DIRECTORY_STORE_PREFIX):
        directory = Path(store[len(DIRECTORY_STORE_PREFIX) :])
        if not directory.is_absolute():
            directory = project_root / directory
        return DirectoryBridge(directory)
    if store.startswith(HTTP_STORE_PREFIXES):
        return HttpBridge(store)
    raise ConfigurationError(
        f"Unknown store '{store}'. Expected '{MEMORY_STORE}', "
        f"'{DIRECTORY_STORE_PREFIX}<path>' or an http(s) URL"
    )


def load_population(
    definition: PopulationDefinition,
    project_root: Path,
    environ: Optional[Mapping[str, str]] = None,
) -> Population:
    """Load ingredients and build the Population for a definition.

    Raises:
        ConfigurationError: If the secret or ingredients are invalid
    """
    ingredients_path = Path(definition.ingredients)
    if not ingredients_path.is_absolute():
        ingredients_path = project_root / ingredients_path

    try:
        return Population(
            domain=definition.name,
            secret=resolve_secret(definition, environ),
            ingredients=Ingredients.load(ingredients_path),
        )
    except ConfigurationError as e:
        raise ConfigurationError(f"{definition.location}: {e}") from e
