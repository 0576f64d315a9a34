import os
import typing

import yaml

DEFAULT_SETTINGS_FILE = os.path.join(os.path.dirname(__file__), "settings.default.yaml")


def _load_yaml(path: str) -> typing.Dict[str, typing.Any]:
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_settings(path: typing.Optional[str] = None) -> typing.Dict[str, typing.Any]:
    """Read the packaged default settings, overridden by those in ``path``."""
    settings = _load_yaml(DEFAULT_SETTINGS_FILE)
    if path is not None:
        for key, value in _load_yaml(path).items():
            if key not in settings:
                raise ValueError("unknown setting '%s' in %s" % (key, path))
            settings[key] = value
    return settings
