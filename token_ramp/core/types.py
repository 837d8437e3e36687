"""Shared types for token-ramp: colours, fills, tokens, snapshots, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

RGB = tuple[float, float, float]  # channels in [0, 1]
RGBA = tuple[float, float, float, float]

WHITE: RGB = (1.0, 1.0, 1.0)
BLACK: RGB = (0.0, 0.0, 0.0)


class Mode(str, Enum):
    """Ramp half a key colour belongs to."""

    LIGHT = 'Light'
    DARK = 'Dark'


class Tier(str, Enum):
    """Classification of a perceptual match."""

    AUTO = 'auto'
    SUGGEST = 'suggest'
    NONE = 'none'


class OpacityPolicy(str, Enum):
    """How the representative colour of the Opacity scale is chosen."""

    REUSE_KEY = 'reuse'
    BOOSTED_DARK = 'boosted'


# ── Fills ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Solid:
    """A solid paint: colour plus its own paint opacity."""

    color: RGB
    opacity: float = 1.0


@dataclass(frozen=True)
class OtherFill:
    """Any paint that is not a solid colour (gradient, image, ...)."""

    kind: str = 'OTHER'


Fill = Solid | OtherFill


# ── Token values ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Direct:
    """A concrete colour value."""

    rgba: RGBA


@dataclass(frozen=True)
class Alias:
    """A reference to another token; never resolved by the core."""

    ref: str


TokenValue = Direct | Alias


# ── Selection / keys ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Layer:
    """One selected canvas layer, as handed over by the host shell."""

    name: str
    parent: str = ''
    fill: Fill = field(default_factory=OtherFill)
    opacity: float = 1.0  # layer opacity, multiplied with the fill's own
    parent_fill: Fill | None = None
    bound_token: str | None = None  # token the layer colour is already bound to


@dataclass(frozen=True)
class KeyColor:
    """An author-placed colour at a scale position."""

    position: int
    mode: Mode
    color: RGB
    group: str


@dataclass(frozen=True)
class RampEntry:
    """One computed (name, mode, value) triple."""

    name: str
    mode: str
    value: RGBA


# ── Collections ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CollectionMode:
    id: str
    name: str


@dataclass
class Token:
    """A named colour token holding one value per mode id."""

    id: str
    name: str
    values: dict[str, TokenValue] = field(default_factory=dict)


@dataclass
class TokenSnapshot:
    """Modes and tokens of one collection, captured once per invocation."""

    id: str
    name: str
    modes: list[CollectionMode] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)

    def get_token(self, name: str) -> Token | None:
        return next((t for t in self.tokens if t.name == name), None)

    def mode_named(self, name: str) -> CollectionMode | None:
        return next((m for m in self.modes if m.name == name), None)

    def mode_name(self, mode_id: str) -> str | None:
        mode = next((m for m in self.modes if m.id == mode_id), None)
        return mode.name if mode else None


class TokenStore(Protocol):
    """Synchronous view of the host's token persistence."""

    def get_token(self, name: str) -> Token | None: ...

    def put_token(self, name: str, mode: str, value: RGBA) -> None: ...


@dataclass(frozen=True)
class TokenWrite:
    """A reconciled write: update an existing token or create a new one."""

    name: str
    mode: str
    value: RGBA
    is_new: bool
    token_id: str | None = None  # set for updates of tokens present in the snapshot


# ── Matching ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReferenceColor:
    """One (token, mode) pair that resolves to a direct colour."""

    token: str
    mode: str
    color: RGB


@dataclass(frozen=True)
class MatchResult:
    query: RGB
    token: str | None
    mode: str | None
    delta_e: float
    tier: Tier
    layer: str | None = None


@dataclass
class MatchReport:
    auto_connected: int = 0
    connections: list[MatchResult] = field(default_factory=list)  # Auto tier
    suggestions: list[MatchResult] = field(default_factory=list)  # Suggest tier, closest first


@dataclass
class Document:
    """Everything the shell hands to a command: selection plus collections."""

    selection: list[Layer] = field(default_factory=list)
    collections: list[TokenSnapshot] = field(default_factory=list)


# ── Commands and reporting ────────────────────────────────────────────────────


class Command:
    """A self-registering command.

    Usage in a command module:

        command = Command(name='ramp', help='Derive ramp tokens from key colours')

        @command.run
        def run(document, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, document: Document, report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(document, report, args)


@dataclass
class Report:
    """Accumulates command results for text/JSON output."""

    document_path: str = ''
    command: str = ''
    collection: str | None = None
    groups: dict[str, dict[str, Any]] = field(default_factory=dict)
    writes: list[TokenWrite] = field(default_factory=list)
    matches: MatchReport | None = None
    listing: list[dict[str, Any]] | None = None  # collections command only
    new_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add(self, group: str, data: dict[str, Any]) -> None:
        """Merge per-group results."""
        self.groups.setdefault(group, {}).update(data)

    def record_writes(self, writes: list[TokenWrite]) -> None:
        self.writes.extend(writes)
        for w in writes:
            if w.is_new:
                self.new_count += 1
            else:
                self.updated_count += 1

    def record_skip(self, count: int = 1) -> None:
        self.skipped_count += count

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def fail(self, message: str) -> None:
        self.errors.append(message)

    @property
    def ok(self) -> bool:
        return not self.errors
