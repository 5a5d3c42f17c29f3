"""
Configuration Service - Manages persisted booklet defaults.

This service handles loading and saving the user's default options to/from
a JSON file, with proper validation and defaults. Page bounds are specific
to one document and are never persisted.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..config import CONFIG_FILENAME, DEFAULT_DPI, DEFAULT_PAGE_SIZE, DEFAULT_SHEETS_PER_SIGNATURE
from ..models import BlankSheetPolicy, BookletOptions, ColorMode

logger = logging.getLogger(__name__)


class ConfigService:
    """
    Manages booklet configuration persistence.

    Handles loading configuration from a JSON file, saving changes,
    and providing sensible defaults when config doesn't exist.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Optional custom config file path.
                        If None, uses a dot-file in the user's home directory.
        """
        if config_path is None:
            config_path = Path.home() / f".{CONFIG_FILENAME}"

        self.config_path = Path(config_path)

    def load(self) -> BookletOptions:
        """
        Load configuration from file.

        Returns:
            BookletOptions with loaded settings, or defaults if file doesn't exist

        Note:
            If the config file is invalid, a warning is logged and the
            defaults are returned.
        """
        # Return defaults if file doesn't exist
        if not self.config_path.exists():
            return BookletOptions()

        try:
            with open(self.config_path) as f:
                data = json.load(f)

            # Parse and validate
            return BookletOptions(
                dpi=int(data.get('dpi', DEFAULT_DPI)),
                page_size=data.get('page_size', DEFAULT_PAGE_SIZE),
                color_mode=ColorMode(data.get('color_mode', ColorMode.GRAY.value)),
                sheets_per_signature=int(data.get('sheets_per_signature', DEFAULT_SHEETS_PER_SIGNATURE)),
                rotate_back=bool(data.get('rotate_back', True)),
                blank_sheets=BlankSheetPolicy(data.get('blank_sheets', BlankSheetPolicy.EMIT.value))
            )

        except (json.JSONDecodeError, OSError, ValueError, TypeError, AttributeError) as e:
            # If config is corrupted or invalid, return defaults
            logger.warning("Failed to load config from %s: %s; using defaults", self.config_path, e)
            return BookletOptions()

    def save(self, options: BookletOptions):
        """
        Save configuration to file.

        Args:
            options: BookletOptions to save

        Note:
            Failures are logged, not raised - config saving is best-effort.
        """
        # Convert to JSON-serializable dict
        data = {
            'dpi': options.dpi,
            'page_size': options.page_size,
            'color_mode': options.color_mode.value,
            'sheets_per_signature': options.sheets_per_signature,
            'rotate_back': options.rotate_back,
            'blank_sheets': options.blank_sheets.value
        }

        try:
            # Ensure parent directory exists
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            # Write with indentation for readability
            with open(self.config_path, 'w') as f:
                json.dump(data, f, indent=2)

        except OSError as e:
            # Log but don't raise - saving config is not critical
            logger.warning("Failed to save config to %s: %s", self.config_path, e)

    def reset_to_defaults(self) -> bool:
        """
        Delete config file to reset to defaults.

        Returns:
            True if config was deleted, False if it didn't exist or couldn't be deleted
        """
        try:
            if self.config_path.exists():
                self.config_path.unlink()
                return True
            return False

        except OSError as e:
            logger.warning("Failed to delete config file %s: %s", self.config_path, e)
            return False

    def get_config_path(self) -> Path:
        """
        Get the path to the configuration file.

        Returns:
            Path to config file (may not exist yet)
        """
        return self.config_path
