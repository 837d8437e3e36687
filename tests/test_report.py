"""Tests for token_ramp.core.report — text and JSON rendering."""

import json

from token_ramp.core.report import format_json, format_text
from token_ramp.core.types import MatchReport, MatchResult, Report, Tier, TokenWrite


def _report() -> Report:
    report = Report(document_path='/tmp/doc.json', command='ramp', collection='Colors')
    report.add('Brand', {'light_keys': 2, 'dark_keys': 1, 'new': 1, 'updated': 1})
    report.record_writes(
        [
            TokenWrite('Brand/Opaque/000', 'Light', (1.0, 0.0, 0.0, 1.0), is_new=False, token_id='v1'),
            TokenWrite('Brand/Opacity/000', 'Light', (1.0, 0.0, 0.0, 0.2), is_new=True),
        ]
    )
    report.record_skip(3)
    report.warn('Brand: no Dark keys, Dark scale falls back to gray')
    return report


class TestFormatText:
    def test_header_and_summary(self):
        text = format_text(_report())
        lines = text.splitlines()
        assert lines[0] == "token-ramp ramp: doc.json — collection 'Colors'"
        assert lines[-1] == 'Created 1 new tokens, updated 1 existing tokens, skipped 3 layers'

    def test_group_block(self):
        text = format_text(_report())
        assert '── Brand' in text
        assert '  keys: 2 light / 1 dark' in text
        assert '  tokens: 2 (1 new, 1 updated)' in text

    def test_warnings(self):
        assert 'warning: Brand: no Dark keys' in format_text(_report())

    def test_errors_stop_output(self):
        report = Report(document_path='doc.json', command='scan')
        report.fail('Please select at least one layer')
        text = format_text(report)
        assert 'error: Please select at least one layer' in text
        assert 'Created' not in text

    def test_matches(self):
        report = Report(document_path='doc.json', command='scan')
        auto = MatchResult((0.5, 0.5, 0.5), 'Neutral/500', 'Light', 0.1, Tier.AUTO, layer='Card')
        near = MatchResult((0.52, 0.52, 0.52), 'Neutral/500', 'Light', 1.8, Tier.SUGGEST, layer='Badge')
        report.matches = MatchReport(auto_connected=1, connections=[auto], suggestions=[near])
        text = format_text(report)
        assert 'auto-connected: 1' in text
        assert '✓ Card → Neutral/500 (Light)  ΔE=0.10' in text
        assert '? Badge → Neutral/500 (Light)  ΔE=1.80' in text


    def test_listing_replaces_summary(self):
        report = Report(document_path='doc.json', command='collections')
        report.listing = [{'id': 'c1', 'name': 'Colors', 'modes': ['Light', 'Dark'], 'tokens': 3}]
        lines = format_text(report).splitlines()
        assert '  c1  Colors  modes: Light, Dark  tokens: 3' in lines
        assert lines[-1] == '1 collections'


class TestFormatJson:
    def test_structure(self):
        data = json.loads(format_json(_report()))
        assert data['command'] == 'ramp'
        assert data['collection'] == 'Colors'
        assert data['groups']['Brand']['new'] == 1
        assert data['summary'] == {'new': 1, 'updated': 1, 'skipped': 3}
        assert data['errors'] == []
        assert 'matches' not in data

    def test_writes(self):
        data = json.loads(format_json(_report()))
        assert data['writes'][0] == {
            'name': 'Brand/Opaque/000',
            'mode': 'Light',
            'value': '#ff0000',
            'alpha': 1.0,
            'isNew': False,
        }
        assert data['writes'][1]['value'] == '#ff000033'
        assert data['writes'][1]['alpha'] == 0.2

    def test_matches(self):
        report = Report(document_path='doc.json', command='scan')
        near = MatchResult((0.5, 0.5, 0.5), 'Neutral/500', 'Light', 1.23456, Tier.SUGGEST, layer='Badge')
        report.matches = MatchReport(auto_connected=0, connections=[], suggestions=[near])
        data = json.loads(format_json(report))
        assert data['matches']['autoConnected'] == 0
        assert data['matches']['suggestions'][0] == {
            'layer': 'Badge',
            'query': '#808080',
            'token': 'Neutral/500',
            'mode': 'Light',
            'deltaE': 1.235,
            'tier': 'suggest',
        }
