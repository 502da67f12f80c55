from .settings import (
    ClassifierSettings,
    ExportSettings,
    IngestionSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ClassifierSettings",
    "ExportSettings",
    "IngestionSettings",
    "Settings",
    "get_settings",
]
