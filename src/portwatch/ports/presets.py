"""Built-in port type presets and preset file loading."""

from pathlib import Path

from pydantic import ValidationError

from portwatch.core.exceptions import ConfigurationError
from portwatch.models import TypePreset, TypePresetsConfig

# Higher priority is checked first
DEFAULT_TYPE_PRESETS: list[TypePreset] = [
    TypePreset(
        name="storybook",
        ports=[6006],
        command_patterns=["storybook"],
        process_patterns=["storybook"],
        priority=10,
    ),
    TypePreset(
        name="dev-server",
        ports=[3000, 3001, 5173, 4200, 8080, 8081, 4000],
        command_patterns=[
            "dev", "start", "serve", "vite", "next",
            "react", "angular", "webpack", "parcel",
        ],
        process_patterns=["node", "vite", "next", "react", "angular", "webpack", "parcel"],
        priority=9,
    ),
    TypePreset(
        name="api",
        ports=[8000, 8001, 4000, 3000, 3001],
        command_patterns=[
            "api", "server", "flask", "django", "fastapi",
            "uvicorn", "gunicorn", "express", "koa",
        ],
        process_patterns=[
            "python", "flask", "django", "fastapi", "uvicorn",
            "gunicorn", "node", "express", "koa",
        ],
        priority=8,
    ),
    TypePreset(
        name="database",
        ports=[5432, 3306, 27017, 6379, 5984, 9200, 1521, 1433],
        process_patterns=[
            "postgres", "postgresql", "mysql", "mariadb", "mongodb",
            "redis", "couchdb", "elasticsearch", "oracle", "mssql",
        ],
        priority=7,
    ),
    TypePreset(
        name="testing",
        ports=[9229, 9228],
        command_patterns=["jest", "test", "mocha", "jasmine", "karma"],
        process_patterns=["jest", "test", "mocha", "jasmine", "karma"],
        priority=6,
    ),
    TypePreset(
        name="unexpected",
        ports=[22, 80, 443, 3306, 5432, 27017, 6379],
        priority=5,
    ),
    TypePreset(
        name="other",
        priority=0,
    ),
]


def load_type_presets(path: Path) -> list[TypePreset]:
    """Load presets from a JSON file shaped like ``{"types": [...]}``."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read type presets file {path}: {e}",
            details={"path": str(path)},
        ) from e

    try:
        config = TypePresetsConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid type presets file {path}",
            details={"path": str(path), "errors": e.errors(include_url=False)},
        ) from e

    if not config.types:
        raise ConfigurationError(
            f"Type presets file {path} defines no types",
            details={"path": str(path)},
        )
    return config.types


def resolve_type_presets(path: Path | None = None) -> list[TypePreset]:
    """Presets from ``path`` if given, otherwise the built-in defaults."""
    if path is None:
        return list(DEFAULT_TYPE_PRESETS)
    return load_type_presets(path)

