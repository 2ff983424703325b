"""Resolve `source` directives to the directory whose Kconfig file is parsed next."""

import logging
import posixpath
from typing import Optional

logger = logging.getLogger(__name__)

KCONFIG_NAME = "Kconfig"
APPS_TOKEN = "$APPSDIR"


def dequote(text: str) -> Optional[str]:
    """Strip one optional leading and trailing double quote. Empty results are None."""
    if text.endswith('"'):
        text = text[:-1]
    if text.startswith('"'):
        text = text[1:]
    return text or None


class SourceResolver:
    """Maps a `source` argument onto a directory below the Kconfig root."""

    def __init__(self, kconfig_root: str = ".", apps_dir: str = "../apps",
                 apps_token: str = APPS_TOKEN, kconfig_name: str = KCONFIG_NAME):
        self.kconfig_root = kconfig_root
        self.apps_dir = apps_dir
        self.apps_token = apps_token
        self.kconfig_name = kconfig_name

    def kconfig_path(self, kconfig_dir: str) -> str:
        return f"{kconfig_dir}/{self.kconfig_name}"

    def resolve(self, argument: str) -> Optional[str]:
        """
        Return the directory to recurse into for a `source` argument.

        Only the directory part of the path is used; the file name is always
        the fixed Kconfig name. A directory containing the apps token has the
        apps directory spliced in at that point.
        """
        relpath = dequote(argument)
        if relpath is None:
            return None

        subdir = posixpath.dirname(relpath) or "."
        before, token, after = subdir.partition(self.apps_token)
        if token:
            dirpath = f"{self.kconfig_root}/{before}{self.apps_dir}{after}"
        else:
            dirpath = f"{self.kconfig_root}/{subdir}"

        logger.debug("Resolved source %s: subdir=%s dirpath=%s", relpath, subdir, dirpath)
        return dirpath
