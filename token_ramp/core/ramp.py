"""Expand sparse key colours into full Light/Dark token ramps.

A ramp has two halves sharing position 500:

    Light: 0, 100, 200, 300, 400, 500
    Dark:  500, 600, 700, 800, 900, 1000

Each position yields two tokens:

    <group>/Opaque/<ppp>   the interpolated or extrapolated colour, alpha 1
    <group>/Opacity/<ppp>  one representative colour, alpha from OPACITY_ALPHA

where <ppp> is the zero-padded position and 500 carries a ' (Light)' or
' (Dark)' suffix in its half.

Between two keys the colour is linearly interpolated. Outside the key range
it is lightened (Light half) or darkened (Dark half) from the nearest key by
a stepped falloff: one entry of FALLOFF per 100 positions of distance,
saturating at the last entry. A half with no keys at all is filled with the
gray sentinel and reported as a warning.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from token_ramp.core.colour_space import boost_color, darken_color, lerp_color, lighten_color
from token_ramp.core.types import RGB, KeyColor, Mode, OpacityPolicy, RampEntry

logger = logging.getLogger(__name__)

LIGHT_POSITIONS = (0, 100, 200, 300, 400, 500)
DARK_POSITIONS = (500, 600, 700, 800, 900, 1000)
SHARED_POSITION = 500

FALLOFF = (0.0, 0.30, 0.50, 0.80, 0.90, 0.95)

OPACITY_ALPHA = {
    0: 0.20,
    100: 0.48,
    200: 0.64,
    300: 0.88,
    400: 0.94,
    500: 1.0,
    600: 0.94,
    700: 0.88,
    800: 0.64,
    900: 0.48,
    1000: 0.20,
}

GRAY_SENTINEL: RGB = (0.5, 0.5, 0.5)

# BOOSTED_DARK policy: representative Dark colour is the opaque 700 step, boosted
BOOST_POSITION = 700
BOOST_SATURATION_PCT = 7
BOOST_LIGHTNESS_PCT = 2


@dataclass
class RampResult:
    group: str
    entries: list[RampEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _steps(distance: float) -> int:
    # half rounds up
    return math.floor(distance / 100 + 0.5)


def _falloff(distance: float) -> float:
    return FALLOFF[min(_steps(distance), len(FALLOFF) - 1)]


def get_color_at_position(
    keys: Sequence[KeyColor],
    pos: int,
    scale_start: int,
    scale_end: int,
    is_light: bool,
) -> RGB:
    """Colour of one ramp position from keys sorted ascending by position."""
    if not scale_start <= pos <= scale_end:
        raise ValueError(f'Position {pos} outside scale {scale_start}-{scale_end}')

    lower: KeyColor | None = None
    upper: KeyColor | None = None
    for key in keys:
        if key.position <= pos:
            lower = key
        if key.position >= pos and upper is None:
            upper = key

    if lower is not None and upper is not None:
        if lower.position == upper.position:
            # duplicate keys at one position: the last one wins
            return lower.color
        t = (pos - lower.position) / (upper.position - lower.position)
        return lerp_color(lower.color, upper.color, t)

    adjust = lighten_color if is_light else darken_color
    if upper is not None:
        return adjust(upper.color, _falloff(upper.position - pos))
    if lower is not None:
        return adjust(lower.color, _falloff(pos - lower.position))
    return GRAY_SENTINEL


def opacity_alpha(pos: int) -> float:
    return OPACITY_ALPHA.get(pos, 1.0)


def representative_key(keys: Sequence[KeyColor]) -> KeyColor | None:
    """Key at 500, else the one nearest to it (lower position wins ties)."""
    best: KeyColor | None = None
    for key in keys:
        if best is None or abs(key.position - SHARED_POSITION) < abs(best.position - SHARED_POSITION):
            best = key
    return best


def token_name(group: str, kind: str, pos: int, mode: Mode) -> str:
    padded = str(pos).zfill(3)
    if pos == SHARED_POSITION:
        padded += f' ({mode.value})'
    return f'{group}/{kind}/{padded}'


def split_keys(keys: Sequence[KeyColor]) -> tuple[list[KeyColor], list[KeyColor]]:
    """Partition keys by mode, each half sorted ascending by position."""
    light = sorted((k for k in keys if k.mode is Mode.LIGHT), key=lambda k: k.position)
    dark = sorted((k for k in keys if k.mode is Mode.DARK), key=lambda k: k.position)
    return light, dark


def _opacity_colour(
    keys: Sequence[KeyColor],
    opaque: dict[int, RGB],
    mode: Mode,
    policy: OpacityPolicy,
) -> RGB:
    if not keys:
        return GRAY_SENTINEL
    if policy is OpacityPolicy.BOOSTED_DARK and mode is Mode.DARK:
        return boost_color(opaque[BOOST_POSITION], BOOST_SATURATION_PCT, BOOST_LIGHTNESS_PCT)
    key = representative_key(keys)
    return key.color if key else GRAY_SENTINEL


def generate_ramp(
    group: str,
    keys: Sequence[KeyColor],
    policy: OpacityPolicy = OpacityPolicy.REUSE_KEY,
) -> RampResult:
    """Full Opaque + Opacity token set for one group, Light half then Dark half."""
    result = RampResult(group=group)
    light, dark = split_keys(keys)

    halves = (
        (Mode.LIGHT, light, LIGHT_POSITIONS, True),
        (Mode.DARK, dark, DARK_POSITIONS, False),
    )
    for mode, half_keys, positions, is_light in halves:
        if not half_keys:
            message = f'{group}: no {mode.value} keys, {mode.value} scale falls back to gray'
            logger.warning(message)
            result.warnings.append(message)

        start, end = positions[0], positions[-1]
        opaque = {p: get_color_at_position(half_keys, p, start, end, is_light) for p in positions}
        shared = _opacity_colour(half_keys, opaque, mode, policy)

        for p in positions:
            result.entries.append(RampEntry(token_name(group, 'Opaque', p, mode), mode.value, (*opaque[p], 1.0)))
            result.entries.append(
                RampEntry(token_name(group, 'Opacity', p, mode), mode.value, (*shared, opacity_alpha(p)))
            )

    logger.debug('Ramp %s: %d entries from %d light / %d dark keys', group, len(result.entries), len(light), len(dark))
    return result


def generate_ramps(
    groups: Mapping[str, Sequence[KeyColor]],
    policy: OpacityPolicy = OpacityPolicy.REUSE_KEY,
) -> list[RampResult]:
    """One RampResult per group. Groups are independent of each other."""
    return [generate_ramp(name, keys, policy) for name, keys in groups.items()]
