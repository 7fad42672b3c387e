# colorizer/adapters/persistence/filesystem_repo.py
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional, Sequence
from urllib.parse import quote_plus

import structlog

from colorizer.adapters.persistence.schema import decode_rule_store, encode_rule_store
from colorizer.core.domain.exceptions import (
    ColorSettingsSchemaError,
    ColorSettingsTruncatedError,
    UnsupportedSchemaVersionError,
)
from colorizer.core.domain.models import ColorRule, RuleStore
from colorizer.core.ports.color_settings_repository import IColorSettingsRepository
from colorizer.core.ports.predicate_compiler import IPredicateCompiler

logger = structlog.get_logger()

class FileSystemColorSettingsRepository(IColorSettingsRepository):
    """
    Concrete implementation of the Color Settings Repository using local JSON files.
    Structure: <settings_dir>/<url-encoded name>.colors
    """

    def __init__(self, settings_dir: str, compiler: IPredicateCompiler, extension: str = ".colors"):
        # The directory is injected (from config) rather than looked up globally.
        self.base_path = Path(settings_dir)
        self.compiler = compiler
        self.extension = extension

    def _get_file_path(self, name: str) -> Path:
        # Encoding keeps names like 'team/backend' or 'my rules' to a single file.
        return self.base_path / f"{quote_plus(name)}{self.extension}"

    def _write_atomic(self, path: Path, payload: str) -> None:
        """Write to a sibling temp file, then replace, so a failed save keeps the old file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    # --- Interface Implementation ---

    def save(self, name: str, store: Mapping[str, Sequence[ColorRule]]) -> bool:
        path = self._get_file_path(name)
        payload = encode_rule_store(store)

        try:
            self._write_atomic(path, payload)
        except OSError as e:
            logger.error("color_settings_write_failed", name=name, path=str(path), error=str(e))
            return False

        logger.info("color_settings_saved", name=name, path=str(path), rule_sets=len(store))
        return True

    def load(self, name: str) -> Optional[RuleStore]:
        path = self._get_file_path(name)
        if not path.exists():
            logger.debug("color_settings_missing", name=name, path=str(path))
            return None

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error("color_settings_read_failed", name=name, path=str(path), error=str(e))
            return None

        try:
            store = decode_rule_store(name, data, self.compiler)
        except ColorSettingsTruncatedError:
            # Half-written file; the next save replaces it.
            logger.warning("color_settings_truncated", name=name, path=str(path))
            return None
        except UnsupportedSchemaVersionError as e:
            logger.warning("color_settings_version_unsupported", name=name, path=str(path), version=e.version)
            return None
        except ColorSettingsSchemaError as e:
            logger.error("color_settings_corrupt", name=name, path=str(path), error=e.detail)
            # Unable to decode the file - delete it so later loads fall back cleanly.
            self._discard(path)
            return None

        logger.info("color_settings_loaded", name=name, path=str(path), rule_sets=len(store))
        return store

    def exists(self, name: str) -> bool:
        return self._get_file_path(name).exists()

    def delete(self, name: str) -> bool:
        path = self._get_file_path(name)
        if not path.exists():
            return False
        return self._discard(path)

    def _discard(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("color_settings_delete_failed", path=str(path), error=str(e))
            return False
        logger.info("color_settings_deleted", path=str(path))
        return True

    def health_check(self) -> bool:
        """Checks if the settings directory is writable (or can be created)."""
        if self.base_path.exists():
            return os.access(self.base_path, os.W_OK)
        return os.access(self.base_path.parent, os.W_OK)
