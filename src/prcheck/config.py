from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from prcheck.exceptions import SettingsError

DEFAULT_CONFIG_NAME = "prcheck.toml"

MAX_FAILURES_RANGE = (1, 30)
MAX_ADDITIONAL_SECTIONS_RANGE = (0, 50)

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class TemplateSettings:
    require_pr_template: bool = True
    strict_sections: tuple[str, ...] = ()
    optional_sections: tuple[str, ...] = ()
    max_additional_sections: int = 0


@dataclass(frozen=True)
class ReportSettings:
    max_failures: int = 1


@dataclass(frozen=True)
class Settings:
    template: TemplateSettings = field(default_factory=TemplateSettings)
    report: ReportSettings = field(default_factory=ReportSettings)


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def template_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("template", {})
    return section if isinstance(section, dict) else {}


def report_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("report", {})
    return section if isinstance(section, dict) else {}


def _split_names(text: str) -> list[str]:
    return [part.strip() for part in text.replace("\n", ",").split(",") if part.strip()]


def normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = _split_names(value)
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend(_split_names(item))
    return [item for item in items if item]


def _as_bool(value: TomlValue, *, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_bounded_int(value: TomlValue, *, key: str, default: int, bounds: tuple[int, int]) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise SettingsError(key, "must be a valid number")
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise SettingsError(key, "must be a valid number") from exc
    low, high = bounds
    if number < low or number > high:
        raise SettingsError(key, f"must be between {low} and {high}, got {number}")
    return number


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def template_settings(section: TomlTable | None) -> TemplateSettings:
    if not isinstance(section, dict):
        return TemplateSettings()
    return TemplateSettings(
        require_pr_template=_as_bool(section.get("require_pr_template"), default=True),
        strict_sections=tuple(normalize_name_list(section.get("strict_sections"))),
        optional_sections=tuple(normalize_name_list(section.get("optional_sections"))),
        max_additional_sections=_as_bounded_int(
            section.get("max_additional_sections"),
            key="max-additional-sections",
            default=0,
            bounds=MAX_ADDITIONAL_SECTIONS_RANGE,
        ),
    )


def report_settings(section: TomlTable | None) -> ReportSettings:
    if not isinstance(section, dict):
        return ReportSettings()
    return ReportSettings(
        max_failures=_as_bounded_int(
            section.get("max_failures"),
            key="max-failures",
            default=1,
            bounds=MAX_FAILURES_RANGE,
        ),
    )


def load_settings(
    *,
    root: Path | None = None,
    config_path: Path | None = None,
    template_overrides: TomlTable | None = None,
    report_overrides: TomlTable | None = None,
) -> Settings:
    """Settings from ``prcheck.toml`` with explicit overrides layered on top.

    Override values of ``None`` leave the file value in place. Out-of-range
    numbers raise :class:`SettingsError`.
    """
    template = merge_payload(
        template_overrides or {},
        template_defaults(root=root, config_path=config_path),
    )
    report = merge_payload(
        report_overrides or {},
        report_defaults(root=root, config_path=config_path),
    )
    return Settings(template=template_settings(template), report=report_settings(report))
