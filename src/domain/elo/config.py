"""Load league Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any
import tomllib

from domain.elo.calculator import EloParameters
from domain.retraction import RETRACTION_WINDOW

ROOT_DIR = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "elo"


@dataclass(frozen=True)
class EloSystemConfig:
    """One named league Elo system: engine parameters plus the retraction window."""

    name: str
    description: str | None
    file_path: Path
    parameters: EloParameters
    retraction_window: timedelta = RETRACTION_WINDOW

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_rating": self.parameters.initial_rating,
            "provisional_k_factor": self.parameters.provisional_k_factor,
            "established_k_factor": self.parameters.established_k_factor,
            "provisional_match_threshold": self.parameters.provisional_match_threshold,
            "scale_factor": self.parameters.scale_factor,
            "retraction_window_hours": self.retraction_window.total_seconds() / 3600.0,
        }


def load_elo_system_configs(config_dir: Path = DEFAULT_CONFIG_DIR) -> list[EloSystemConfig]:
    """Load every *.toml file in config_dir; system names must be unique."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems = [load_elo_system_config(file_path) for file_path in config_files]

    seen: dict[str, Path] = {}
    for system in systems:
        if system.name in seen:
            raise ValueError(
                f"Duplicate elo system names found in {config_dir}: "
                f"{system.name!r} in {seen[system.name].name} and {system.file_path.name}"
            )
        seen[system.name] = system.file_path

    return systems


def load_elo_system_config(file_path: Path) -> EloSystemConfig:
    """Load and validate one Elo system TOML config file."""
    if not file_path.is_file():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_elo_system_config(raw, file_path)


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})
    retraction_raw = raw.get("retraction", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    defaults = EloParameters()
    parameters = EloParameters(
        initial_rating=_as_int(elo_raw, "initial_rating", defaults.initial_rating, file_path),
        provisional_k_factor=_as_int(
            elo_raw, "provisional_k_factor", defaults.provisional_k_factor, file_path
        ),
        established_k_factor=_as_int(
            elo_raw, "established_k_factor", defaults.established_k_factor, file_path
        ),
        provisional_match_threshold=_as_int(
            elo_raw, "provisional_match_threshold", defaults.provisional_match_threshold, file_path
        ),
        scale_factor=_as_float(elo_raw, "scale_factor", defaults.scale_factor, file_path),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    window_hours = _as_float(
        retraction_raw,
        "window_hours",
        RETRACTION_WINDOW.total_seconds() / 3600.0,
        file_path,
        section_name="retraction",
    )
    if window_hours < 0.0:
        raise ValueError(f"{file_path}: [retraction].window_hours must be >= 0")

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        retraction_window=timedelta(hours=window_hours),
    )


def _as_int(section: dict[str, Any], key: str, default: int, file_path: Path) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValueError(f"{file_path}: [elo].{key} must be an integer, got {value!r}")
    return int(value)


def _as_float(
    section: dict[str, Any],
    key: str,
    default: float,
    file_path: Path,
    *,
    section_name: str = "elo",
) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{file_path}: [{section_name}].{key} must be a number, got {value!r}")
    return float(value)


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_rating <= 0:
        raise ValueError(f"{file_path}: [elo].initial_rating must be > 0")
    if parameters.provisional_k_factor <= 0:
        raise ValueError(f"{file_path}: [elo].provisional_k_factor must be > 0")
    if parameters.established_k_factor <= 0:
        raise ValueError(f"{file_path}: [elo].established_k_factor must be > 0")
    if parameters.provisional_match_threshold < 0:
        raise ValueError(f"{file_path}: [elo].provisional_match_threshold must be >= 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
