"""
Resource loading for configured API key locations.

Resource paths may carry a scheme prefix that selects how the resource is read:

- ``classpath:<path>`` - a file relative to the import path (``sys.path``),
  or a resource inside an importable package
- ``url:<url>`` - fetched with an HTTP GET
- ``file:<path>`` - a file system path
- anything else is treated as a file system path
"""

import io
import logging
import os
import sys
from abc import ABC, abstractmethod
from importlib import resources as importlib_resources
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

import httpx

from ..exceptions import ResourceLoadError, ResourceNotFoundError

logger = logging.getLogger(__name__)

CLASSPATH_PREFIX = "classpath:"
URL_PREFIX = "url:"
FILE_PREFIX = "file:"


class ResourceLoader(ABC):
    """Abstract base class for resource loaders."""

    @abstractmethod
    def open(self, path: str) -> Optional[BinaryIO]:
        """
        Open a resource for binary reading.

        Args:
            path: Resource path with any scheme prefix already stripped

        Returns:
            Readable binary stream, or None if the resource doesn't exist

        Raises:
            ResourceLoadError: If the resource exists but can't be read
        """
        pass


class FileResourceLoader(ResourceLoader):
    """Loads resources from the file system."""

    def open(self, path: str) -> Optional[BinaryIO]:
        file_path = Path(path).expanduser()
        try:
            return file_path.open("rb")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ResourceLoadError(f"Unable to read file [{file_path}]: {e}", path) from e


class ClasspathResourceLoader(ResourceLoader):
    """
    Loads resources relative to the import path.

    Each ``sys.path`` entry is tried in order; if none holds the file the
    path's directory is treated as a dotted package name, which also finds
    resources inside zipped packages.
    """

    def open(self, path: str) -> Optional[BinaryIO]:
        relative = path.lstrip("/")
        if not relative:
            return None

        for entry in sys.path:
            candidate = Path(entry or os.getcwd()) / relative
            if candidate.is_file():
                logger.debug(f"Found classpath resource {relative} at {candidate}")
                try:
                    return candidate.open("rb")
                except OSError as e:
                    raise ResourceLoadError(
                        f"Unable to read classpath resource [{candidate}]: {e}", path
                    ) from e

        return self._open_package_resource(relative)

    def _open_package_resource(self, relative: str) -> Optional[BinaryIO]:
        package, _, name = relative.rpartition("/")
        if not package:
            return None

        try:
            resource = importlib_resources.files(package.replace("/", ".")).joinpath(name)
            if not resource.is_file():
                return None
            return io.BytesIO(resource.read_bytes())
        except (ImportError, TypeError, ValueError):
            return None
        except OSError as e:
            raise ResourceLoadError(
                f"Unable to read package resource [{relative}]: {e}", relative
            ) from e


class UrlResourceLoader(ResourceLoader):
    """
    Loads resources over HTTP(S).

    The request blocks without a timeout; callers that need one should
    download the resource themselves and configure a stream instead.
    """

    def open(self, path: str) -> Optional[BinaryIO]:
        try:
            response = httpx.get(path, timeout=None, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ResourceLoadError(f"Unable to fetch [{path}]: {e}", path) from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise ResourceLoadError(
                f"Unable to fetch [{path}]: HTTP {response.status_code}", path
            )

        logger.debug(f"Fetched {len(response.content)} bytes from {path}")
        return io.BytesIO(response.content)


def has_resource_prefix(resource_path: Optional[str]) -> bool:
    """Check whether a path starts with a recognized scheme prefix."""
    return resource_path is not None and resource_path.startswith(
        (CLASSPATH_PREFIX, URL_PREFIX, FILE_PREFIX)
    )


def strip_prefix(resource_path: str) -> str:
    return resource_path[resource_path.index(":") + 1:]


def get_loader_for_path(resource_path: str) -> Tuple[ResourceLoader, str]:
    """
    Get the appropriate loader for a resource path.

    Args:
        resource_path: Resource path, optionally scheme-prefixed

    Returns:
        Tuple of (loader, path with the prefix stripped)
    """
    if resource_path.startswith(CLASSPATH_PREFIX):
        return ClasspathResourceLoader(), strip_prefix(resource_path)

    elif resource_path.startswith(URL_PREFIX):
        return UrlResourceLoader(), strip_prefix(resource_path)

    elif resource_path.startswith(FILE_PREFIX):
        return FileResourceLoader(), strip_prefix(resource_path)

    else:
        # Unprefixed paths are file paths
        return FileResourceLoader(), resource_path


def get_input_stream_for_path(resource_path: str) -> BinaryIO:
    """
    Open the resource a path refers to.

    Raises:
        ResourceNotFoundError: If the resource doesn't exist
        ResourceLoadError: If the resource exists but can't be read
    """
    loader, path = get_loader_for_path(resource_path)
    stream = loader.open(path)
    if stream is None:
        raise ResourceNotFoundError(resource_path)
    return stream
