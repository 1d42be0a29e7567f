from __future__ import annotations

from pathlib import Path
from typing import Iterable

import yaml

from ._errors import ConfigError, ConfigFileError
from ._log import LOG
from ._models import LoadedConfig, TriggerConfig


def read_config_file(path: Path) -> TriggerConfig:
    """
    Open and parse a single YAML config file.

    :raises ConfigFileError: if the file can't be read, isn't valid YAML,
                             or doesn't hold a mapping
    """
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigFileError(path, f'not valid UTF-8 ({e.reason})') from e
    except yaml.YAMLError as e:
        raise ConfigFileError(path, f'invalid YAML: {e}') from e

    if not isinstance(data, dict):
        kind = 'empty document' if data is None else type(data).__name__
        raise ConfigFileError(path, f'expected a mapping, got {kind}')

    return TriggerConfig.from_mapping(data)


def load_config(candidates: Iterable[Path], *, debug: bool = False) -> LoadedConfig:
    """
    Return the first candidate that opens and parses.

    Failed candidates are skipped; only the last failure is kept, and it is
    attached to the :class:`ConfigError` raised when nothing usable is found.
    """
    last_error: ConfigFileError | None = None
    loaded: LoadedConfig | None = None

    for path in candidates:
        try:
            config = read_config_file(path)
        except ConfigFileError as e:
            LOG.debug('Skipping config candidate %s', e)
            last_error = e
            continue

        loaded = LoadedConfig(config=config, path=path)
        break

    if loaded is None:
        raise ConfigError('No readable configuration file found',
                          last_error=last_error)

    if debug:
        LOG.debug('Using config file: %s', loaded.path)

    if not loaded.config.is_complete:
        raise ConfigError(
            f'{loaded.path}: both "authtoken" and "integrationkey" must be set',
            last_error=last_error,
        )

    return loaded
