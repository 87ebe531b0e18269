import logging
from importlib.metadata import PackageNotFoundError, version
from subprocess import STDOUT, CalledProcessError, check_output
from typing import Optional

logger = logging.getLogger(__name__)


def get_version_from_git() -> Optional[str]:
    try:
        return (
            check_output(("git", "describe", "--tags"), stderr=STDOUT).strip().decode()
        )
    except FileNotFoundError:
        logger.warning("version: git not found")
        return None
    except CalledProcessError as err:
        logger.info(
            "version: git description not available: %s", err.output.decode().strip()
        )
        return None


def get_version_from_resources() -> Optional[str]:
    try:
        # Change here if project is renamed and does not equal the distribution name
        return version("forum-group-manager")
    except PackageNotFoundError:
        return get_version_from_git()


def get_version() -> Optional[str]:
    return get_version_from_resources() or get_version_from_git()


__version__ = get_version() or "version-unavailable"
