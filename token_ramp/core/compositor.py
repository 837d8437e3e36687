"""Straight-alpha 'over' compositing used to resolve a layer's rendered colour."""

from token_ramp.core.types import RGB, WHITE, Fill, Layer, Solid


def flatten(fg: RGB, fg_alpha: float, bg: RGB = WHITE) -> RGB:
    """Composite fg at fg_alpha over an opaque bg. The result is opaque."""
    return (
        fg[0] * fg_alpha + bg[0] * (1 - fg_alpha),
        fg[1] * fg_alpha + bg[1] * (1 - fg_alpha),
        fg[2] * fg_alpha + bg[2] * (1 - fg_alpha),
    )


def background_of(parent_fill: Fill | None) -> RGB:
    """Parent's solid colour, or white when the parent has no solid fill."""
    if isinstance(parent_fill, Solid):
        return parent_fill.color
    return WHITE


def rendered_colour(layer: Layer) -> RGB | None:
    """Colour a layer actually shows: fill alpha x layer opacity over its parent.

    Returns None for layers without a solid fill.
    """
    if not isinstance(layer.fill, Solid):
        return None
    alpha = layer.fill.opacity * layer.opacity
    return flatten(layer.fill.color, alpha, background_of(layer.parent_fill))
