"""
.env file loading for modchat.

Finds the nearest .env file by walking up from the working directory and
loads it into the process environment before settings are read.
"""

from pathlib import Path
from typing import Optional, Dict, List
import logging

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)


class EnvFileLoader:
    """
    .env file loader with hierarchical search.

    Search order (stops at first file found):
    1. Current directory: .modchat/.env → .env
    2. Parent directories (up to git root or home): .modchat/.env → .env
    3. Home directory: ~/.modchat/.env → ~/.env
    """

    CONFIG_DIR_NAME = ".modchat"
    ENV_FILE_NAME = ".env"

    def __init__(
        self,
        working_directory: Optional[Path] = None,
        home_directory: Optional[Path] = None
    ):
        """Initialize env file loader.

        Args:
            working_directory: Starting directory for search
            home_directory: Home directory used as the final fallback
        """
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self.home_directory = Path(home_directory or Path.home()).resolve()
        self._loaded_file: Optional[Path] = None
        self._loaded_vars: Dict[str, str] = {}

    def load_env_file(self) -> Optional[Path]:
        """Load environment variables from the nearest .env file.

        Existing environment variables are never overridden.

        Returns:
            Path to loaded .env file or None if none found
        """
        env_file_path = self._find_env_file()

        if env_file_path is None:
            logger.debug("No .env file found in search path")
            return None

        load_dotenv(env_file_path, override=False)
        self._loaded_file = env_file_path
        self._loaded_vars = {
            key: value
            for key, value in dotenv_values(env_file_path).items()
            if value is not None
        }

        logger.info(f"Loaded environment variables from: {env_file_path}")
        return env_file_path

    def get_loaded_file(self) -> Optional[Path]:
        """Get path to the loaded .env file."""
        return self._loaded_file

    def get_loaded_vars(self) -> Dict[str, str]:
        """Get variables read from the loaded .env file."""
        return self._loaded_vars.copy()

    def get_search_paths(self) -> List[Path]:
        """Get list of all paths that would be searched for .env files.

        Returns:
            List of search paths in order
        """
        search_paths = []

        current_dir = self.working_directory
        while current_dir != current_dir.parent:
            search_paths.append(current_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
            search_paths.append(current_dir / self.ENV_FILE_NAME)

            if self._should_stop_search(current_dir):
                break

            current_dir = current_dir.parent

        search_paths.append(self.home_directory / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
        search_paths.append(self.home_directory / self.ENV_FILE_NAME)

        return search_paths

    def _find_env_file(self) -> Optional[Path]:
        """Find the first existing .env file in the search hierarchy."""
        for candidate in self.get_search_paths():
            if candidate.is_file():
                return candidate
        return None

    def _should_stop_search(self, directory: Path) -> bool:
        """Stop at a git repository root or at the home directory."""
        if (directory / ".git").exists():
            return True

        return directory == self.home_directory
