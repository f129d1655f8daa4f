"""Self-update of the Xenia Manager installation.

The update replaces the files in the base directory with the ones from
the latest release archive:

    1. download the release zip into the base directory
    2. delete the old manager executable
    3. extract the zip into ``Update/`` and move its files into place,
       skipping the updater executable that is currently running
    4. remove the zip and ``Update/``
    5. start the new manager
"""

import shutil
import subprocess
import zipfile
from pathlib import Path
from typing import Callable, Optional

import requests

from ..config.paths import AppPaths
from ..logging_config import get_logger

logger = get_logger("updater")

CHUNK_SIZE = 8192

ProgressCallback = Callable[[int], None]
StatusCallback = Callable[[str], None]


class UpdateError(Exception):
    """Exception raised when a step of the update fails"""
    pass


def _content_length(response) -> int:
    """Content-Length of a response, 0 when missing or not a number."""
    value = response.headers.get("Content-Length")
    try:
        return max(int(value), 0) if value else 0
    except ValueError:
        logger.warning(f"Ignoring invalid Content-Length {value!r}")
        return 0


class Updater:
    """Downloads and installs the latest release into a base directory."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        url: str = AppPaths.RELEASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        self.base_dir = base_dir or AppPaths.BASE_DIR
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def archive_path(self) -> Path:
        return self.base_dir / AppPaths.RELEASE_ARCHIVE

    @property
    def update_dir(self) -> Path:
        return self.base_dir / AppPaths.UPDATE_DIR_NAME

    @property
    def manager_executable(self) -> Path:
        return self.base_dir / AppPaths.MANAGER_EXECUTABLE

    def download(self, progress: Optional[ProgressCallback] = None) -> Path:
        """Download the release archive.

        Args:
            progress: Called with the completed percentage (0-100). Stays at
                      0 when the server does not send a content length.

        Returns:
            Path to the downloaded archive

        Raises:
            UpdateError: If the request fails or the file cannot be written
        """
        logger.info(f"Downloading {self.url}")
        try:
            with self.session.get(self.url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                total = _content_length(response)
                received = 0
                with open(self.archive_path, "wb") as handle:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        handle.write(chunk)
                        received += len(chunk)
                        if progress:
                            progress(int(received / total * 100) if total > 0 else 0)
        except requests.RequestException as e:
            logger.error(f"Download failed: {e}")
            raise UpdateError(f"Download failed: {e}") from e
        except OSError as e:
            logger.error(f"Could not write {self.archive_path}: {e}")
            raise UpdateError(f"Could not save the update: {e}") from e

        logger.info(f"Downloaded {received} bytes to {self.archive_path}")
        return self.archive_path

    def delete_old_version(self) -> None:
        """Delete the old manager executable if present."""
        try:
            if self.manager_executable.exists():
                self.manager_executable.unlink()
                logger.info(f"Deleted {self.manager_executable}")
        except OSError as e:
            logger.error(f"Could not delete old version: {e}")
            raise UpdateError(f"Could not delete the old version: {e}") from e

    def install(self) -> list[Path]:
        """Extract the release archive and move its files into the base directory.

        Returns:
            Paths of the files moved into the base directory

        Raises:
            UpdateError: If extraction or moving fails
        """
        moved = []
        try:
            self.update_dir.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(self.archive_path, "r") as zf:
                zf.extractall(self.update_dir)

            for file_path in self.update_dir.iterdir():
                if not file_path.is_file() or file_path.name == AppPaths.UPDATER_EXECUTABLE:
                    continue
                target = self.base_dir / file_path.name
                shutil.move(str(file_path), str(target))
                moved.append(target)
        except zipfile.BadZipFile as e:
            logger.error(f"Update archive is corrupted: {self.archive_path}")
            raise UpdateError("The downloaded update is corrupted") from e
        except OSError as e:
            logger.error(f"Installation failed: {e}")
            raise UpdateError(f"Installation failed: {e}") from e

        logger.info(f"Installed {len(moved)} files")
        self.cleanup()
        return moved

    def cleanup(self) -> None:
        """Remove the downloaded archive and the Update directory."""
        try:
            if self.archive_path.exists():
                self.archive_path.unlink()
            if self.update_dir.exists():
                shutil.rmtree(self.update_dir)
        except OSError as e:
            logger.error(f"Cleanup failed: {e}")
            raise UpdateError(f"Cleanup failed: {e}") from e

    def launch_manager(self) -> subprocess.Popen:
        """Start the updated manager from the base directory."""
        logger.info(f"Launching {self.manager_executable}")
        try:
            return subprocess.Popen([str(self.manager_executable)], cwd=str(self.base_dir))
        except OSError as e:
            logger.error(f"Could not start {self.manager_executable}: {e}")
            raise UpdateError(f"Could not start Xenia Manager: {e}") from e

    def run(
        self,
        progress: Optional[ProgressCallback] = None,
        status: Optional[StatusCallback] = None,
        launch: bool = True,
    ) -> None:
        """Run the full update sequence, stopping at the first failure.

        Args:
            progress: Download progress callback, see download()
            status: Called with a short message before each step
            launch: Start the new manager once installed
        """
        notify = status or (lambda message: None)
        notify("Downloading the latest version...")
        self.download(progress)
        notify("Installing...")
        self.delete_old_version()
        self.install()
        if launch:
            notify("Starting Xenia Manager...")
            self.launch_manager()
