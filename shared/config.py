"""
Passguard Configuration
========================

Slotted dataclasses for every configurable knob, loaded from a TOML file.
Each TOML table maps onto one section; keys a section does not declare
are ignored and missing keys keep their defaults::

    [global]
    log_level = "DEBUG"
    log_file = "passguard.log"      # relative to output_dir; "" disables
    log_json = true

    [analyzer]
    offline_guesses_per_second = 1e10
    bulk_max_passwords = 5000

    [generator]
    length = 20
    exclude_similar = true

The loader looks for ``passguard.toml`` in the project root when no path
is given and falls back to defaults if it is absent.

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
    - Hashcat benchmark tables (RTX 4090, MD5 / SHA-1 modes).
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional, TypeVar

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "passguard.toml"

_Section = TypeVar("_Section")


# ===================================================================== #
#  Sections
# ===================================================================== #


@dataclass(slots=True)
class GlobalConfig:
    """``[global]``: logging and output locations."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    output_dir: str = "output"
    version: str = "1.0.0"


@dataclass(slots=True)
class AnalyzerConfig:
    """``[analyzer]``: attack-speed model and bulk limits.

    Guess rates feed the crack-time estimator; raise them to model a
    better-equipped attacker.

    Raises:
        ValueError: If a rate is not positive or the bulk limit is below 1.
    """

    online_guesses_per_second: float = 1e3
    offline_guesses_per_second: float = 1e9
    optimized_guesses_per_second: float = 5e10
    bulk_max_passwords: int = 1000

    def __post_init__(self) -> None:
        for name in (
            "online_guesses_per_second",
            "offline_guesses_per_second",
            "optimized_guesses_per_second",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"analyzer.{name} must be positive")
        if self.bulk_max_passwords < 1:
            raise ValueError("analyzer.bulk_max_passwords must be at least 1")


@dataclass(slots=True)
class GeneratorDefaults:
    """``[generator]``: settings used when the CLI is given no flags.

    ``secure_random = false`` swaps the OS CSPRNG for the Mersenne
    Twister; only meant for demos.
    """

    length: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False
    pronounceable: bool = False
    secure_random: bool = True


def _section(section_cls: type[_Section], data: Mapping[str, Any]) -> _Section:
    """Build *section_cls* from the keys of *data* it declares."""
    known = {f.name for f in fields(section_cls)}  # type: ignore[arg-type]
    return section_cls(**{k: v for k, v in data.items() if k in known})


# ===================================================================== #
#  Root configuration
# ===================================================================== #


@dataclass(slots=True)
class PassguardConfig:
    """All configuration sections.

    Usage:
        >>> config = PassguardConfig.load("passguard.toml")
        >>> config.generator.length
        20
        >>> PassguardConfig().analyzer.offline_guesses_per_second
        1000000000.0
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> PassguardConfig:
        """Build a configuration from parsed TOML tables."""
        return cls(
            global_settings=_section(GlobalConfig, raw.get("global", {})),
            analyzer=_section(AnalyzerConfig, raw.get("analyzer", {})),
            generator=_section(GeneratorDefaults, raw.get("generator", {})),
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> PassguardConfig:
        """Load configuration from TOML.

        Args:
            path: TOML file. Defaults to ``<project_root>/passguard.toml``,
                which may be absent.

        Returns:
            The configuration; defaults when the default file is absent.

        Raises:
            FileNotFoundError: If an explicit *path* does not exist.
            ValueError: If the file is not valid TOML or a section holds an
                invalid value.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
        if not config_path.is_file():
            if path is not None:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls()

        with config_path.open("rb") as fh:
            return cls.from_mapping(tomllib.load(fh))

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionary of every section."""
        return asdict(self)


# ========================= Module-level convenience ========================

_cached: Optional[PassguardConfig] = None


def get_config(path: str | Path | None = None) -> PassguardConfig:
    """Load once and share the configuration; an explicit *path* reloads."""
    global _cached
    if _cached is None or path is not None:
        _cached = PassguardConfig.load(path)
    return _cached
