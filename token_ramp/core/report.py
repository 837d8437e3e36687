"""Report builder — text and JSON output for token-ramp results."""

import json
import os
from typing import Any

from token_ramp.core.colour_space import to_hex
from token_ramp.core.types import MatchResult, Report


def _match_line(m: MatchResult) -> str:
    where = m.layer or to_hex(m.query)
    return f'{where} → {m.token} ({m.mode})  ΔE={m.delta_e:.2f}'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'token-ramp {report.command}: {os.path.basename(report.document_path) or "<document>"}'
    if report.collection:
        header += f' — collection {report.collection!r}'
    lines.append(header)
    lines.append('')

    for error in report.errors:
        lines.append(f'error: {error}')
    if report.errors:
        return '\n'.join(lines)

    for group, data in report.groups.items():
        lines.append(f'── {group}')
        if 'light_keys' in data:
            lines.append(f'  keys: {data["light_keys"]} light / {data["dark_keys"]} dark')
        if 'new' in data:
            lines.append(f'  tokens: {data["new"] + data["updated"]} ({data["new"]} new, {data["updated"]} updated)')
        for k, v in data.items():
            if k not in ('light_keys', 'dark_keys', 'new', 'updated'):
                lines.append(f'  {k}: {v}')
        lines.append('')

    if report.matches is not None:
        lines.append(f'auto-connected: {report.matches.auto_connected}')
        for m in report.matches.connections:
            lines.append(f'  ✓ {_match_line(m)}')
        lines.append(f'suggestions: {len(report.matches.suggestions)}')
        for m in report.matches.suggestions:
            lines.append(f'  ? {_match_line(m)}')
        lines.append('')

    if report.listing is not None:
        for entry in report.listing:
            modes = ', '.join(entry['modes']) or '-'
            lines.append(f'  {entry["id"]}  {entry["name"]}  modes: {modes}  tokens: {entry["tokens"]}')
        lines.append('')

    for warning in report.warnings:
        lines.append(f'warning: {warning}')
    if report.warnings:
        lines.append('')

    if report.listing is not None:
        lines.append(f'{len(report.listing)} collections')
        return '\n'.join(lines)

    lines.append(
        f'Created {report.new_count} new tokens, updated {report.updated_count} existing tokens, '
        f'skipped {report.skipped_count} layers'
    )
    return '\n'.join(lines)


def _match_obj(m: MatchResult) -> dict[str, Any]:
    return {
        'layer': m.layer,
        'query': to_hex(m.query),
        'token': m.token,
        'mode': m.mode,
        'deltaE': round(m.delta_e, 3),
        'tier': m.tier.value,
    }


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'document': report.document_path,
        'command': report.command,
        'collection': report.collection,
        'groups': report.groups,
        'writes': [
            {
                'name': w.name,
                'mode': w.mode,
                'value': to_hex(w.value[:3], w.value[3]),
                'alpha': round(w.value[3], 3),
                'isNew': w.is_new,
            }
            for w in report.writes
        ],
    }
    if report.matches is not None:
        obj['matches'] = {
            'autoConnected': report.matches.auto_connected,
            'connections': [_match_obj(m) for m in report.matches.connections],
            'suggestions': [_match_obj(m) for m in report.matches.suggestions],
        }
    if report.listing is not None:
        obj['collections'] = report.listing
    obj['summary'] = {
        'new': report.new_count,
        'updated': report.updated_count,
        'skipped': report.skipped_count,
    }
    obj['warnings'] = report.warnings
    obj['errors'] = report.errors
    return json.dumps(obj, indent=2)
