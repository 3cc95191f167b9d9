"""Settings for rendering parsed diffs."""

from dataclasses import dataclass
import json
import os


@dataclass
class DiffViewSettings:
    """
    Diff viewer settings.
    """
    column_view: bool = False
    color: bool = True
    width: int | None = None  # None means use the terminal width
    strict_counts: bool = True
    tab_size: int = 4

    DEFAULT_PATH = "~/.diffview/settings.json"
    ENVIRONMENT_VARIABLE = "DIFFVIEW_SETTINGS"

    @classmethod
    def create_default(cls) -> "DiffViewSettings":
        """Create a new DiffViewSettings object with default values."""
        return cls(
            column_view=False,
            color=True,
            width=None,
            strict_counts=True,
            tab_size=4
        )

    @classmethod
    def default_path(cls) -> str | None:
        """
        Find the settings file to use when none is given explicitly.

        Returns:
            Path from the environment variable if set, else the default path if
            that file exists, else None
        """
        path = os.environ.get(cls.ENVIRONMENT_VARIABLE)
        if path:
            return path

        path = os.path.expanduser(cls.DEFAULT_PATH)
        if os.path.exists(path):
            return path

        return None

    @classmethod
    def load(cls, path: str) -> "DiffViewSettings":
        """
        Load settings from file.

        Args:
            path: Path to the settings file

        Returns:
            DiffViewSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If the file does not hold a JSON object
        """
        # Start with default settings
        settings = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Settings file must contain a JSON object: {path}")

            settings.column_view = bool(data.get("columnView", settings.column_view))
            settings.color = bool(data.get("color", settings.color))
            settings.strict_counts = bool(data.get("strictCounts", settings.strict_counts))

            # Ignore widths and tab sizes that cannot be used
            width = data.get("width", None)
            if isinstance(width, int) and not isinstance(width, bool) and width > 0:
                settings.width = width

            tab_size = data.get("tabSize", settings.tab_size)
            if isinstance(tab_size, int) and not isinstance(tab_size, bool) and tab_size > 0:
                settings.tab_size = tab_size

        return settings

    def save(self, path: str) -> None:
        """
        Save settings to file.

        Args:
            path: Path to save settings file
        """
        settings_dir = os.path.dirname(path)
        if settings_dir:
            os.makedirs(settings_dir, exist_ok=True)

        data = {
            "columnView": self.column_view,
            "color": self.color,
            "width": self.width,
            "strictCounts": self.strict_counts,
            "tabSize": self.tab_size
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
