"""Nearest-token matching by ΔE with Auto / Suggest / None tiers.

    ΔE < 0.5        Auto     numerically the token's colour; bind without review
    0.5 <= ΔE < 10  Suggest  plausible; show to a human
    ΔE >= 10        None     no match recorded

The scan is exhaustive. When several references share the minimum ΔE the
first one in palette order wins, so results depend on palette order.
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from token_ramp.core.colour_space import rgb_array_to_lab
from token_ramp.core.types import (
    RGB,
    Direct,
    MatchReport,
    MatchResult,
    ReferenceColor,
    Tier,
    TokenSnapshot,
)

logger = logging.getLogger(__name__)

AUTO_THRESHOLD = 0.5
SUGGEST_THRESHOLD = 10.0


def classify(delta: float) -> Tier:
    if delta < AUTO_THRESHOLD:
        return Tier.AUTO
    if delta < SUGGEST_THRESHOLD:
        return Tier.SUGGEST
    return Tier.NONE


def reference_palette(snapshot: TokenSnapshot) -> list[ReferenceColor]:
    """Every (token, mode) pair of the collection holding a direct colour."""
    palette = []
    for token in snapshot.tokens:
        for mode in snapshot.modes:
            value = token.values.get(mode.id)
            if isinstance(value, Direct):
                r, g, b, _a = value.rgba
                palette.append(ReferenceColor(token=token.name, mode=mode.name, color=(r, g, b)))
    return palette


class PerceptualMatcher:
    """Holds a palette's LAB coordinates so repeated queries skip reconversion."""

    def __init__(self, palette: Sequence[ReferenceColor]):
        self.palette = list(palette)
        if self.palette:
            self._labs = rgb_array_to_lab(np.array([ref.color for ref in self.palette]))
        else:
            self._labs = np.empty((0, 3))

    def match(self, query: RGB, layer: str | None = None) -> MatchResult:
        if not self.palette:
            return MatchResult(query=query, token=None, mode=None, delta_e=float('inf'), tier=Tier.NONE, layer=layer)

        target = rgb_array_to_lab(np.array([query]))[0]
        distances = np.linalg.norm(self._labs - target, axis=1)
        best = int(np.argmin(distances))  # first minimum on ties
        delta = float(distances[best])
        ref = self.palette[best]
        return MatchResult(
            query=query,
            token=ref.token,
            mode=ref.mode,
            delta_e=delta,
            tier=classify(delta),
            layer=layer,
        )

    def match_all(self, queries: Iterable[tuple[str | None, RGB]]) -> MatchReport:
        """Match (layer, colour) pairs; Suggest results come out closest first."""
        report = MatchReport()
        for layer, colour in queries:
            result = self.match(colour, layer=layer)
            logger.debug('Match %s -> %s (%s) ΔE=%.3f', layer, result.token, result.tier.value, result.delta_e)
            if result.tier is Tier.AUTO:
                report.auto_connected += 1
                report.connections.append(result)
            elif result.tier is Tier.SUGGEST:
                report.suggestions.append(result)
        report.connections.sort(key=lambda m: m.delta_e)
        report.suggestions.sort(key=lambda m: m.delta_e)
        return report
