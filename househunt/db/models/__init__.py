"""househunt models."""

import importlib
from pathlib import Path

from househunt.settings import settings


def load_all_models() -> None:
    """Load models of every app, so the metadata knows all tables."""
    package_dir = Path(__file__).resolve().parent.parent.parent
    for app in settings.app_names:
        models_file = package_dir / app / "models.py"
        if models_file.exists():
            importlib.import_module(f"househunt.{app}.models")
