"""Regex-based parsing of layer names into key colours and token names.

Key layers carry their scale position in the name, optionally followed by an
explicit mode:

    '300'             -> position 300, Light (positions <= 500 default to Light)
    'Brand 700'       -> position 700, Dark
    '500 (Dark)'      -> position 500, Dark
    'accent-400 (dark)' -> position 400, Dark (suffix is case-insensitive)

The last run of digits is the position. Names without digits are discarded.
Keys are grouped by their parent container's name, one ramp per group.

Direct token layers use the 'name -mode' convention instead:

    'primary/500 -Dark' -> token 'primary/500' in mode 'Dark'
    'primary/500'       -> token 'primary/500' in the collection's default mode
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from token_ramp.core.compositor import rendered_colour
from token_ramp.core.types import KeyColor, Layer, Mode

logger = logging.getLogger(__name__)

LIGHT_MAX_POSITION = 500

_MODE_SUFFIX = re.compile(r'\(\s*(light|dark)\s*\)\s*$', re.IGNORECASE)
_DIGITS = re.compile(r'\d+')


@dataclass(frozen=True)
class KeySelection:
    """Key colours grouped by parent name, plus the layers that were not keys."""

    groups: Mapping[str, tuple[KeyColor, ...]] = field(default_factory=lambda: MappingProxyType({}))
    skipped: tuple[str, ...] = ()


def parse_key_name(name: str) -> tuple[int, Mode] | None:
    """Extract (position, mode) from a key layer name, or None."""
    mode: Mode | None = None
    m = _MODE_SUFFIX.search(name)
    if m:
        mode = Mode.LIGHT if m.group(1).lower() == 'light' else Mode.DARK
        name = name[: m.start()]

    numbers = _DIGITS.findall(name)
    if not numbers:
        return None
    position = int(numbers[-1])
    if mode is None:
        mode = Mode.LIGHT if position <= LIGHT_MAX_POSITION else Mode.DARK
    return position, mode


def parse_key(layer: Layer) -> KeyColor | None:
    """Key colour for a solid-filled layer with a parsable name."""
    colour = rendered_colour(layer)
    if colour is None:
        logger.debug('Layer %r has no solid fill', layer.name)
        return None
    parsed = parse_key_name(layer.name)
    if parsed is None:
        logger.warning('Layer %r has no scale position in its name; ignored', layer.name)
        return None
    position, mode = parsed
    return KeyColor(position=position, mode=mode, color=colour, group=layer.parent)


def group_keys(keys: Iterable[KeyColor]) -> Mapping[str, tuple[KeyColor, ...]]:
    """Fold keys into a read-only {group: keys} map, groups in first-seen order.

    A later key with the same position and mode as an earlier one in its
    group replaces it.
    """
    groups: dict[str, dict[tuple[int, Mode], KeyColor]] = {}
    for key in keys:
        slot = groups.setdefault(key.group, {})
        slot.pop((key.position, key.mode), None)
        slot[(key.position, key.mode)] = key
    return MappingProxyType({name: tuple(slot.values()) for name, slot in groups.items()})


def collect_keys(layers: Iterable[Layer]) -> KeySelection:
    keys = []
    skipped = []
    for layer in layers:
        key = parse_key(layer)
        if key is None:
            skipped.append(layer.name)
        else:
            keys.append(key)
    return KeySelection(groups=group_keys(keys), skipped=tuple(skipped))


def split_mode_suffix(name: str) -> tuple[str, str | None]:
    """Split 'variable -mode' into ('variable', 'mode'); no suffix gives None."""
    if ' -' not in name:
        return name, None
    parts = name.split(' -')
    return parts[0].strip(), parts[1].strip() or None
