"""Resolution of Alacran connection settings and secrets.

Settings are looked up by a short key (``URL``, ``PASSWORD``) that is expanded
with the resolver's prefix into an environment variable name
(``ALACRAN_URL``, ``ALACRAN_PASSWORD``).

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable (``.env`` is loaded into the environment first)
3. File named by the ``<NAME>_FILE`` environment variable (secrets only)
4. Default value

Example:
    ```python
    from alacran_client.auth import CredentialResolver

    resolver = CredentialResolver()
    base_url = resolver.resolve("URL", required=True)
    password = resolver.resolve_secret("PASSWORD", required=True)
    ```

Secret values are never logged; only their source is.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from alacran_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "ALACRAN_"


class CredentialResolver:
    """Resolve settings from explicit values, the environment, ``.env`` and files.

    Args:
        env_prefix: Prefix prepended to every key to form the environment
            variable name.
        dotenv_path: Path to a ``.env`` file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load the ``.env`` file at all.
    """

    def __init__(
        self,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        dotenv_path: str | Path | None = None,
        load_dotenv: bool = True,
    ):
        self.env_prefix = env_prefix
        self._dotenv_path = dotenv_path
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()

        if load_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for Alacran settings")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def env_var_name(self, key: str) -> str:
        return f"{self.env_prefix}{key.upper()}"

    def resolve(
        self,
        key: str,
        *,
        value: str | None = None,
        default: str | None = None,
        required: bool = False,
        secret: bool = False,
    ) -> str | None:
        """Resolve a setting by key.

        Args:
            key: Setting key, expanded to ``<prefix><KEY>``.
            value: Explicit value; wins over every other source.
            default: Returned when no other source has the setting.
            required: Raise instead of returning None when nothing is found.
            secret: Mask the value in log messages.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If ``required`` and nothing was found.
        """
        env_var_name = self.env_var_name(key)
        result = None
        source = None

        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"

        if result is not None:
            shown = "***" if secret else result
            logger.debug(f"Resolved {key} from {source}: {shown}")
        elif required:
            raise CredentialNotFoundError(
                f"Required setting {key} not found (checked env var: {env_var_name})",
                env_var_name=env_var_name,
            )

        return result

    def resolve_from_file(self, file_path: str | Path, *, required: bool = False) -> str | None:
        """Read a secret from a file.

        ``~`` and ``$VAR`` references in the path are expanded, and surrounding
        whitespace is stripped from the contents.

        Raises:
            CredentialFileError: If ``required`` and the file cannot be read.
        """
        path_obj = Path(os.path.expanduser(os.path.expandvars(str(file_path))))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg, path=str(path_obj)) from None
            logger.debug(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg, path=str(path_obj)) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_secret(self, key: str, *, value: str | None = None, required: bool = False) -> str | None:
        """Resolve a secret from a value, ``<PREFIX><KEY>`` or the file named by ``<PREFIX><KEY>_FILE``."""
        result = self.resolve(key, value=value, secret=True)
        if result is not None:
            return result

        file_path = self.resolve(f"{key}_FILE")
        if file_path:
            result = self.resolve_from_file(file_path, required=required)
            if result is not None:
                return result

        if required:
            env_var_name = self.env_var_name(key)
            raise CredentialNotFoundError(
                f"Required secret {key} not found (checked env vars: {env_var_name}, {env_var_name}_FILE)",
                env_var_name=env_var_name,
            )
        return None
