"""Condition icon download with an on-disk cache."""
import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Union

import requests
from PIL import Image, UnidentifiedImageError

from weather_data import icon_url
from weather_provider import RemoteServiceError, ParseError, TransportError


class IconCache:
    """Downloads OpenWeather icons once and keeps them as PNG files."""

    def __init__(self, directory: Union[str, os.PathLike], timeout: int = 10):
        self.directory = Path(directory)
        self.timeout = timeout

    def path_for(self, icon: str) -> Path:
        return self.directory / f"{icon}@2x.png"

    def fetch(self, icon: str) -> Path:
        """
        Return the local path of an icon, downloading it if needed.

        Args:
            icon: OpenWeather icon identifier, e.g. "10d"

        Returns:
            Path to the cached PNG file

        Raises:
            RemoteServiceError: If the CDN answers with a non-200 status
            TransportError: If the download fails on the network
            ParseError: If the downloaded bytes are not an image
            OSError: If the icon cannot be written to disk
        """
        if not icon:
            raise ValueError("icon must not be empty")
        path = self.path_for(icon)
        if path.exists():
            logging.debug(f"Using cached icon {path}")
            return path

        url = icon_url(icon)
        try:
            logging.info(f"Downloading icon: {url}")
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error downloading icon {icon}: {e}")
            raise TransportError(f"Network error: {e}") from e
        if response.status_code != 200:
            raise RemoteServiceError(response.status_code, f"icon {icon} not available")

        self.directory.mkdir(parents=True, exist_ok=True)
        try:
            image = Image.open(BytesIO(response.content))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            logging.error(f"Downloaded icon {icon} is not a valid image: {e}")
            raise ParseError(f"Invalid icon image for {icon}: {e}") from e

        # Write beside the target, then rename into place
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{icon}-", suffix=".png")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                image.save(tmp_file, format="PNG")
            os.replace(tmp_name, path)
        except BaseException:
            os.unlink(tmp_name)
            raise

        logging.info(f"Icon saved to {path}")
        return path
