"""Read seed connectivity settings from YAML or JSON files."""

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Union
import json
import yaml

from seedconn.config.defaults import SeedConnectivityConfig
from seedconn.utils.exceptions import ConfigurationError


PATH_FIELDS = ('labels_file', 'node_data')


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a settings mapping from a ``.json``, ``.yaml`` or ``.yml`` file.

    An empty YAML file gives an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the suffix is unknown, the file cannot be
            parsed, or it does not hold a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    if path.suffix not in ('.json', '.yaml', '.yml'):
        raise ConfigurationError(
            f"Configuration file must be .json, .yaml or .yml, got '{path.suffix}'"
        )

    text = path.read_text()
    try:
        data = json.loads(text) if path.suffix == '.json' else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must hold a mapping of settings, got {type(data).__name__}"
        )

    return data


def config_from_dict(data: Dict[str, Any]) -> SeedConnectivityConfig:
    """Build a SeedConnectivityConfig from a settings mapping.

    Keys may be written as on the command line (``labels-file``) or as
    attribute names (``labels_file``). File settings become Paths.

    Raises:
        ConfigurationError: If a key is not a known setting
    """
    known = {f.name for f in fields(SeedConnectivityConfig)}

    settings = {}
    for key, value in data.items():
        name = str(key).replace('-', '_')
        if name not in known:
            raise ConfigurationError(
                f"Unknown setting '{key}'. Known settings: {', '.join(sorted(known))}"
            )
        if name in PATH_FIELDS and value is not None:
            value = Path(value)
        settings[name] = value

    return SeedConnectivityConfig(**settings)
