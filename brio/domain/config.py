"""Config domain models for brio.

Configuration is stored in TOML (a global file plus an optional .brio.toml in
the scanned root) and represents user preferences for scanning, display and
extra language definitions. This module defines the domain models that
represent validated configuration state.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Literal

OutputFormat = Literal["markdown", "plain", "json"]
_OUTPUT_FORMATS = ("markdown", "plain", "json")


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for snippet scanning.

    Attributes:
        pattern: File-name glob applied to base names ("*" matches everything)
        categories: Default category filter used when none is given on the CLI
        workers: Number of files scanned concurrently (1 = sequential)

    Raises:
        ValueError: If workers is not positive.
    """

    pattern: str = "*"
    categories: str = ""
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate scan config after initialization."""
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for output display and formatting.

    Attributes:
        format: Output format - "markdown" (default), "plain" or "json"
        syntax_highlighting: Highlight snippet bodies with terminal colors
            instead of emitting Markdown fences (default: False)
        theme: Pygments style name used when highlighting (default: "ansi")

    Raises:
        ValueError: If format is not a known output format.
    """

    format: OutputFormat = "markdown"
    syntax_highlighting: bool = False
    theme: str = "ansi"

    def __post_init__(self) -> None:
        """Validate display config after initialization."""
        if self.format not in _OUTPUT_FORMATS:
            raise ValueError(
                f"format must be one of {', '.join(_OUTPUT_FORMATS)}, got {self.format!r}"
            )


@dataclass(frozen=True)
class LanguageConfig:
    """User-defined language registered on top of the built-in ones.

    Attributes:
        name: Display name of the language
        extensions: File extensions with leading dot (e.g., [".lua"])
        single: Single-line comment prefix (e.g., "--")
        block_start: Block comment opening token, empty if none
        block_end: Block comment closing token, empty if none
        markdown: Markdown fence label (defaults to the lowercased name)
    """

    name: str
    extensions: tuple[str, ...]
    single: str
    block_start: str = ""
    block_end: str = ""
    markdown: str = ""

    def __post_init__(self) -> None:
        """Normalize extensions to a tuple."""
        object.__setattr__(self, "extensions", tuple(self.extensions))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a TOML-friendly dictionary."""
        data: dict[str, Any] = {
            "name": self.name,
            "extensions": list(self.extensions),
            "single": self.single,
        }
        for key in ("block_start", "block_end", "markdown"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


@dataclass(frozen=True)
class BrioConfig:
    """Complete brio configuration.

    Attributes:
        scan: Scanning configuration
        display: Display and formatting configuration
        languages: Extra language definitions
    """

    scan: ScanConfig = field(default_factory=ScanConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    languages: tuple[LanguageConfig, ...] = ()

    @staticmethod
    def default() -> "BrioConfig":
        """Create a config with all default values."""
        return BrioConfig(scan=ScanConfig(), display=DisplayConfig(), languages=())

    @staticmethod
    def from_partial(base: "BrioConfig", data: dict[str, Any]) -> "BrioConfig":
        """Apply a partial raw config dictionary on top of an existing config.

        Values present in data override the corresponding values of base at
        the key level; sections and keys absent from data are kept. The
        languages list, when present, replaces the base list.

        Args:
            base: Config to start from.
            data: Raw config data (e.g., parsed TOML).

        Returns:
            New validated BrioConfig.

        Raises:
            ValueError: If a section is malformed or holds unknown keys.
        """
        scan = _merge_section(base.scan, data.get("scan"), "scan")
        display = _merge_section(base.display, data.get("display"), "display")

        languages = base.languages
        if "languages" in data:
            raw_languages = data["languages"]
            if not isinstance(raw_languages, list):
                raise ValueError("[[languages]] must be an array of tables")
            languages = tuple(_language_from_dict(item) for item in raw_languages)

        return BrioConfig(scan=scan, display=display, languages=languages)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a TOML-friendly dictionary."""
        data: dict[str, Any] = {
            "scan": {f.name: getattr(self.scan, f.name) for f in fields(self.scan)},
            "display": {
                f.name: getattr(self.display, f.name) for f in fields(self.display)
            },
        }
        if self.languages:
            data["languages"] = [lang.to_dict() for lang in self.languages]
        return data


def _merge_section(current: Any, override: Any, name: str) -> Any:
    """Return a copy of a section dataclass with override values applied."""
    if override is None:
        return current
    if not isinstance(override, dict):
        raise ValueError(f"[{name}] must be a table")
    known = {f.name for f in fields(current)}
    unknown = set(override) - known
    if unknown:
        raise ValueError(f"Unknown key(s) in [{name}]: {', '.join(sorted(unknown))}")
    values = {key: getattr(current, key) for key in known}
    values.update(override)
    try:
        return type(current)(**values)
    except TypeError as e:
        raise ValueError(f"Invalid value in [{name}]: {e}") from e


def _language_from_dict(item: Any) -> LanguageConfig:
    """Build a LanguageConfig from one [[languages]] table."""
    if not isinstance(item, dict):
        raise ValueError("each [[languages]] entry must be a table")
    missing = {"name", "extensions", "single"} - set(item)
    if missing:
        raise ValueError(
            f"[[languages]] entry is missing: {', '.join(sorted(missing))}"
        )
    if not isinstance(item["extensions"], list):
        raise ValueError(f"extensions of language {item['name']!r} must be an array")
    try:
        return LanguageConfig(**item)
    except TypeError as e:
        raise ValueError(f"Invalid [[languages]] entry: {e}") from e
