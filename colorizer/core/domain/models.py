# colorizer/core/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from colorizer.core.ports.predicate_compiler import IPredicate, IPredicateCompiler

# --- Constants ---

DEFAULT_COLOR_RULE_NAME = "Default"

DEFAULT_FATAL_ERROR_EXCEPTION_EXPRESSION = "level == FATAL || level == ERROR || exception exists"
DEFAULT_WARN_EXPRESSION = "level == WARN"
DEFAULT_MARKER_EXPRESSION = "prop.marker exists"

# --- Value Objects ---

class Color(BaseModel):
    """
    An opaque RGB color.
    Frozen so it can be shared between rules, palettes and snapshots.
    """
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls(r=r, g=g, b=b)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parses '#rrggbb' (the leading '#' is optional)."""
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected a 6-digit hex color, got '{value}'")
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


WHITE = Color.rgb(255, 255, 255)
BLACK = Color.rgb(0, 0, 0)

FATAL_OR_ERROR_DEFAULT_COLOR = Color.rgb(255, 153, 153)
WARN_DEFAULT_COLOR = Color.rgb(255, 255, 153)
MARKER_DEFAULT_COLOR = Color.rgb(153, 255, 153)

# Table backgrounds owned by the host application; overridable via Settings.
ODD_ROW_BACKGROUND = Color.rgb(227, 227, 227)
FIND_LOGGER_BACKGROUND = Color.rgb(213, 226, 235)

_ACCENT_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (255, 255, 225),
    (255, 225, 255),
    (225, 255, 255),
    (255, 225, 225),
    (225, 255, 225),
    (225, 225, 255),
    (225, 225, 183),
    (225, 183, 225),
    (183, 225, 225),
    (183, 225, 183),
    (183, 183, 225),
    (232, 201, 169),
    (255, 255, 153),
    (255, 153, 153),
    (189, 156, 89),
    (255, 102, 102),
    (255, 177, 61),
    (61, 255, 61),
    (153, 153, 255),
    (255, 153, 255),
)

# --- Entities ---

@dataclass(frozen=True)
class ColorRule:
    """
    Associates a compiled predicate with the colors applied when it matches.

    The predicate is compiled once from `expression` and is never re-derived.
    It does not take part in equality: two rules are equal when their text
    and colors are, which is what survives a save/load cycle.
    """
    expression: str
    predicate: IPredicate = field(compare=False, repr=False)
    background: Optional[Color] = None
    foreground: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.predicate is None:
            raise ValueError(f"ColorRule '{self.expression}' requires a compiled predicate.")

    @classmethod
    def compile(
        cls,
        expression: str,
        compiler: IPredicateCompiler,
        background: Optional[Color] = None,
        foreground: Optional[Color] = None,
    ) -> "ColorRule":
        """Builds a rule from its source text with a single compile call."""
        return cls(
            expression=expression,
            predicate=compiler.compile(expression),
            background=background,
            foreground=foreground,
        )

    def evaluate(self, event: Any, context: Optional[Mapping[str, Any]] = None) -> bool:
        return bool(self.predicate.evaluate(event, context))


# An ordered sequence of rules; position is match priority.
RuleSet = List[ColorRule]

# Rule set name -> RuleSet. Names are case-sensitive.
RuleStore = Dict[str, RuleSet]


def build_default_rules(compiler: IPredicateCompiler) -> RuleSet:
    """
    The built-in rule set, in match priority order:
    fatal/error/exception, then warn, then marker.
    """
    return [
        ColorRule.compile(
            DEFAULT_FATAL_ERROR_EXCEPTION_EXPRESSION, compiler,
            background=FATAL_OR_ERROR_DEFAULT_COLOR, foreground=BLACK,
        ),
        ColorRule.compile(
            DEFAULT_WARN_EXPRESSION, compiler,
            background=WARN_DEFAULT_COLOR, foreground=BLACK,
        ),
        ColorRule.compile(
            DEFAULT_MARKER_EXPRESSION, compiler,
            background=MARKER_DEFAULT_COLOR, foreground=BLACK,
        ),
    ]


def default_colors(
    odd_row_background: Color = ODD_ROW_BACKGROUND,
    find_logger_background: Color = FIND_LOGGER_BACKGROUND,
) -> Tuple[Color, ...]:
    """
    The fixed accent palette offered by color pickers:
    white, black, the two table backgrounds, then the literal accents.
    """
    base = (WHITE, BLACK, odd_row_background, find_logger_background)
    return base + tuple(Color.rgb(*rgb) for rgb in _ACCENT_COLORS)
