"""JSON codec for the document a host shell hands to token-ramp.

    {
      "selection": [
        {"name": "300", "parent": "Brand",
         "fill": {"type": "SOLID", "color": "#ff0000", "opacity": 1},
         "opacity": 1, "parentFill": null, "boundVariable": null}
      ],
      "collections": [
        {"id": "c1", "name": "Colors",
         "modes": [{"id": "m1", "name": "Light"}],
         "variables": [
           {"id": "v1", "name": "Brand/Opaque/000",
            "valuesByMode": {"m1": {"r": 1, "g": 0.8, "b": 0.8, "a": 1}}}
         ]}
      ]
    }

Colours are either {"r", "g", "b"[, "a"]} objects with channels in [0, 1]
or strings PIL understands ('#rrggbb', '#rrggbbaa', 'rgb(...)', CSS names).
Token values may also be aliases: {"type": "VARIABLE_ALIAS", "id": "v2"}.
"""

import json
from typing import Any

from token_ramp.core.colour_space import parse_colour
from token_ramp.core.types import (
    RGB,
    RGBA,
    Alias,
    CollectionMode,
    Direct,
    Document,
    Fill,
    Layer,
    OtherFill,
    Solid,
    Token,
    TokenSnapshot,
    TokenValue,
)


class DocumentError(ValueError):
    """Raised when a document is not valid JSON or does not have the expected shape."""


def parse_document_file(path: str) -> Document:
    """Parse a document from disk."""
    with open(path, encoding='utf-8') as f:
        text = f.read()
    return parse_document_string(text)


def parse_document_string(text: str) -> Document:
    """Parse a document from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f'Invalid JSON: {e}') from e
    if not isinstance(data, dict):
        raise DocumentError(f'Document must be an object, got {type(data).__name__}')

    selection = [_parse_layer(item, f'selection[{i}]') for i, item in enumerate(_list(data, 'selection', ''))]
    collections = [
        _parse_collection(item, f'collections[{i}]') for i, item in enumerate(_list(data, 'collections', ''))
    ]
    return Document(selection=selection, collections=collections)


def _list(obj: dict, key: str, where: str) -> list:
    value = obj.get(key, [])
    if not isinstance(value, list):
        raise DocumentError(f'{where}{"." if where else ""}{key}: expected list, got {type(value).__name__}')
    return value


def _require(obj: Any, key: str, where: str) -> Any:
    if not isinstance(obj, dict):
        raise DocumentError(f'{where}: expected object, got {type(obj).__name__}')
    if key not in obj:
        raise DocumentError(f'{where}: missing "{key}"')
    return obj[key]


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise DocumentError(f'{where}: expected number, got bool')
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise DocumentError(f'{where}: expected number, got {value!r}') from e


def _parse_rgba(value: Any, where: str) -> RGBA:
    if isinstance(value, str):
        try:
            rgb, alpha = parse_colour(value)
        except ValueError as e:
            raise DocumentError(f'{where}: unreadable colour {value!r}') from e
        return (*rgb, alpha)
    if isinstance(value, dict):
        try:
            channels = [float(value[c]) for c in ('r', 'g', 'b')]
            alpha = float(value.get('a', 1.0))
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentError(f'{where}: colour needs numeric r, g, b') from e
        return (channels[0], channels[1], channels[2], alpha)
    raise DocumentError(f'{where}: expected colour string or object, got {type(value).__name__}')


def _parse_fill(value: Any, where: str) -> Fill:
    if not isinstance(value, dict):
        raise DocumentError(f'{where}: expected fill object, got {type(value).__name__}')
    kind = str(value.get('type', 'SOLID')).upper()
    if kind != 'SOLID':
        return OtherFill(kind=kind)
    r, g, b, a = _parse_rgba(_require(value, 'color', where), f'{where}.color')
    # paint opacity wins over an alpha channel embedded in the colour
    opacity = _number(value['opacity'], f'{where}.opacity') if 'opacity' in value else a
    return Solid(color=(r, g, b), opacity=opacity)


def _parse_layer(item: Any, where: str) -> Layer:
    name = str(_require(item, 'name', where))
    fill_data = item.get('fill')
    parent_data = item.get('parentFill')
    return Layer(
        name=name,
        parent=str(item.get('parent') or ''),
        fill=_parse_fill(fill_data, f'{where}.fill') if fill_data is not None else OtherFill(kind='NONE'),
        opacity=_number(item['opacity'], f'{where}.opacity') if 'opacity' in item else 1.0,
        parent_fill=_parse_fill(parent_data, f'{where}.parentFill') if parent_data is not None else None,
        bound_token=item.get('boundVariable'),
    )


def _parse_value(value: Any, where: str) -> TokenValue:
    if isinstance(value, dict) and value.get('type') == 'VARIABLE_ALIAS':
        return Alias(ref=str(_require(value, 'id', where)))
    return Direct(_parse_rgba(value, where))


def _parse_mode(item: Any, where: str) -> CollectionMode:
    return CollectionMode(id=str(_require(item, 'id', where)), name=str(_require(item, 'name', where)))


def _parse_collection(item: Any, where: str) -> TokenSnapshot:
    if not isinstance(item, dict):
        raise DocumentError(f'{where}: expected object, got {type(item).__name__}')
    modes = [_parse_mode(m, f'{where}.modes[{i}]') for i, m in enumerate(_list(item, 'modes', where))]
    tokens = []
    for i, var in enumerate(_list(item, 'variables', where)):
        vwhere = f'{where}.variables[{i}]'
        token_id = str(_require(var, 'id', vwhere))
        values_by_mode = var.get('valuesByMode', {})
        if not isinstance(values_by_mode, dict):
            raise DocumentError(f'{vwhere}.valuesByMode: expected object')
        tokens.append(
            Token(
                id=token_id,
                name=str(_require(var, 'name', vwhere)),
                values={
                    mode_id: _parse_value(v, f'{vwhere}.valuesByMode.{mode_id}') for mode_id, v in values_by_mode.items()
                },
            )
        )
    return TokenSnapshot(
        id=str(_require(item, 'id', where)),
        name=str(_require(item, 'name', where)),
        modes=modes,
        tokens=tokens,
    )


# ── Serialisation ─────────────────────────────────────────────────────────────


def _rgb_obj(rgb: RGB) -> dict[str, float]:
    return {'r': rgb[0], 'g': rgb[1], 'b': rgb[2]}


def _fill_obj(fill: Fill) -> dict[str, Any]:
    if isinstance(fill, Solid):
        return {'type': 'SOLID', 'color': _rgb_obj(fill.color), 'opacity': fill.opacity}
    return {'type': fill.kind}


def _value_obj(value: TokenValue) -> dict[str, Any]:
    if isinstance(value, Alias):
        return {'type': 'VARIABLE_ALIAS', 'id': value.ref}
    r, g, b, a = value.rgba
    return {'r': r, 'g': g, 'b': b, 'a': a}


def document_to_dict(document: Document) -> dict[str, Any]:
    return {
        'selection': [
            {
                'name': layer.name,
                'parent': layer.parent,
                'fill': _fill_obj(layer.fill),
                'opacity': layer.opacity,
                'parentFill': _fill_obj(layer.parent_fill) if layer.parent_fill is not None else None,
                'boundVariable': layer.bound_token,
            }
            for layer in document.selection
        ],
        'collections': [
            {
                'id': c.id,
                'name': c.name,
                'modes': [{'id': m.id, 'name': m.name} for m in c.modes],
                'variables': [
                    {
                        'id': t.id,
                        'name': t.name,
                        'valuesByMode': {mode_id: _value_obj(v) for mode_id, v in t.values.items()},
                    }
                    for t in c.tokens
                ],
            }
            for c in document.collections
        ],
    }


def dump_document(document: Document) -> str:
    return json.dumps(document_to_dict(document), indent=2)


def write_document_file(document: Document, path: str) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_document(document))
        f.write('\n')
