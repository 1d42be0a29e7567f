from __future__ import annotations

import getpass
import os
import socket
from pathlib import Path
from typing import Mapping

from ._constants import (CONFIG_NAME,
                         DEFAULT_XDG_CONFIG_DIRS,
                         HOME_CONFIG_NAME,
                         HOME_ENV_VAR,
                         XDG_CONFIG_DIRS_ENV_VAR,
                         XDG_CONFIG_HOME_ENV_VAR)


def split_paths(value: str | None) -> list[str]:
    if value is None:
        return []
    return value.split(':')


def home_dir(environ: Mapping[str, str]) -> Path:
    return Path(environ.get(HOME_ENV_VAR, ''))


def xdg_config_home(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ

    # set-but-empty still counts as set
    if XDG_CONFIG_HOME_ENV_VAR in environ:
        return Path(environ[XDG_CONFIG_HOME_ENV_VAR])

    return home_dir(environ) / '.config'


def xdg_config_dirs(environ: Mapping[str, str] | None = None) -> list[Path]:
    environ = os.environ if environ is None else environ
    dirs = environ.get(XDG_CONFIG_DIRS_ENV_VAR, DEFAULT_XDG_CONFIG_DIRS)
    return [Path(d) for d in split_paths(dirs)]


def config_candidates(explicit: str | Path | None = None,
                      environ: Mapping[str, str] | None = None) -> list[Path]:
    """
    Ordered list of config files to try.

        1. ``explicit`` (from ``--config``), if given
        2. ``$HOME/.pd.yml``
        3. ``$XDG_CONFIG_HOME/pagerduty.yml``
        4. ``<dir>/pagerduty.yml`` for each dir in ``$XDG_CONFIG_DIRS``
    """
    environ = os.environ if environ is None else environ

    paths = [
        home_dir(environ) / HOME_CONFIG_NAME,
        xdg_config_home(environ) / CONFIG_NAME,
    ]
    paths.extend(d / CONFIG_NAME for d in xdg_config_dirs(environ))

    if explicit is not None:
        paths.insert(0, Path(explicit))

    return paths


def local_hostname() -> str:
    return socket.gethostname()


def local_username() -> str:
    # no passwd entry / login name, e.g. in some containers
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ''
