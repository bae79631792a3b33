# foia_intel/core/loader.py

"""Lookup-table loader for the FOIA analysis engine."""

import yaml
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Any, Mapping, Optional, Tuple

from foia_intel.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class PatternLoader:
    """Singleton loader for patterns, keyword tables, and vocabulary.

    Loads configuration once from patterns.yaml and caches it for the
    application lifecycle. All accessors return read-only views.
    """

    _instance: Optional["PatternLoader"] = None
    _config: Dict[str, Any] = {}
    _loaded: bool = False

    REQUIRED_SECTIONS = (
        "patterns",
        "departments",
        "document_types",
        "exemptions",
        "vocabulary",
    )

    def __new__(cls) -> "PatternLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not PatternLoader._loaded:
            self._load_config()

    def _load_config(self) -> None:
        """Loads patterns.yaml from the module directory.

        Raises:
            ConfigurationError: If file is missing, invalid, or empty.
        """
        try:
            config_path = Path(__file__).parent / "patterns.yaml"

            if not config_path.exists():
                error_msg = f"Configuration file not found: {config_path}"
                logger.error(error_msg)
                raise ConfigurationError(error_msg)

            with open(config_path, "r", encoding="utf-8") as f:
                PatternLoader._config = yaml.safe_load(f)

            if not PatternLoader._config:
                raise ConfigurationError("Configuration file is empty or invalid")

            self._validate_config()

            PatternLoader._loaded = True
            logger.info(
                "Lookup tables loaded successfully",
                extra={
                    "config_path": str(config_path),
                    "department_count": len(PatternLoader._config["departments"]),
                    "exemption_count": len(PatternLoader._config["exemptions"]),
                },
            )

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to parse patterns.yaml: {e}") from e
        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            logger.error(f"Configuration loading failed: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def _validate_config(self) -> None:
        """Validates required configuration sections exist.

        Raises:
            ConfigurationError: If required sections are missing.
        """
        missing = [s for s in self.REQUIRED_SECTIONS if s not in PatternLoader._config]

        if missing:
            error_msg = f"Missing required configuration sections: {missing}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        for group in ("request", "document"):
            if not PatternLoader._config["patterns"].get(group):
                raise ConfigurationError(f"Pattern group '{group}' is empty")

    @classmethod
    def get_instance(cls) -> "PatternLoader":
        """Returns the singleton instance of PatternLoader."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get_patterns(self, group: str) -> Mapping[str, Mapping[str, Any]]:
        """Returns the named regex definitions for a pattern group.

        Args:
            group: Pattern group name ('request' or 'document')

        Returns:
            Ordered mapping of pattern name to {'regex', 'score', 'ignore_case'}
        """
        patterns = self._config.get("patterns", {}).get(group, {}) or {}
        return MappingProxyType(patterns)

    def get_departments(self) -> Tuple[Tuple[str, str, Tuple[str, ...]], ...]:
        """Returns (id, display name, keywords) for every department, in table order."""
        return tuple(
            (dept_id, entry["name"], tuple(str(k) for k in entry["keywords"]))
            for dept_id, entry in self._config.get("departments", {}).items()
        )

    def get_document_types(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Returns (type, keyword signature) pairs in table order."""
        return tuple(
            (doc_type, tuple(str(k) for k in keywords))
            for doc_type, keywords in self._config.get("document_types", {}).items()
        )

    def get_exemptions(self) -> Tuple[Tuple[str, str, Tuple[str, ...], float], ...]:
        """Returns (code, name, keywords, base confidence) for every exemption."""
        return tuple(
            (
                code,
                entry["name"],
                tuple(str(k) for k in entry["keywords"]),
                float(entry["confidence"]),
            )
            for code, entry in self._config.get("exemptions", {}).items()
        )

    def get_vocabulary(self, category: str) -> List[str]:
        """Retrieves vocabulary list by category name.

        Args:
            category: Vocabulary category (e.g., 'org_suffixes')

        Returns:
            List of vocabulary terms, empty list if category not found
        """
        vocab = self._config.get("vocabulary", {}).get(category, [])
        return list(vocab) if vocab else []
