"""Tests for token_ramp.core.merger — update-vs-create decisions and the memory store."""

from token_ramp.core.merger import MemoryTokenStore, plan_writes, reconcile
from token_ramp.core.types import Alias, CollectionMode, Direct, RampEntry, Token, TokenSnapshot

RED = (1.0, 0.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


def snapshot() -> TokenSnapshot:
    return TokenSnapshot(
        id='c1',
        name='Colors',
        modes=[CollectionMode('m1', 'Light'), CollectionMode('m2', 'Dark')],
        tokens=[
            Token('v1', 'Brand/Opaque/000', {'m1': Direct(RED)}),
            Token('v2', 'Brand/Opaque/100', {'m1': Alias('v1')}),
        ],
    )


class TestReconcile:
    def test_existing_name_is_update(self):
        write = reconcile(snapshot(), RampEntry('Brand/Opaque/000', 'Light', BLUE))
        assert write.is_new is False
        assert write.token_id == 'v1'
        assert write.value == BLUE

    def test_novel_name_is_new(self):
        write = reconcile(snapshot(), RampEntry('Brand/Opaque/200', 'Light', BLUE))
        assert write.is_new is True
        assert write.token_id is None

    def test_case_sensitive(self):
        write = reconcile(snapshot(), RampEntry('brand/opaque/000', 'Light', BLUE))
        assert write.is_new is True


class TestPlanWrites:
    def test_counts_sum_to_batch(self):
        entries = [
            RampEntry('Brand/Opaque/000', 'Light', BLUE),
            RampEntry('Brand/Opaque/100', 'Light', BLUE),
            RampEntry('Brand/Opaque/200', 'Light', BLUE),
            RampEntry('Brand/Opaque/300', 'Light', BLUE),
        ]
        writes = plan_writes(snapshot(), entries)
        new = sum(1 for w in writes if w.is_new)
        updated = sum(1 for w in writes if not w.is_new)
        assert (new, updated) == (2, 2)
        assert new + updated == len(entries)

    def test_same_new_name_twice_creates_once(self):
        entries = [
            RampEntry('primary', 'Light', RED),
            RampEntry('primary', 'Dark', BLUE),
        ]
        writes = plan_writes(snapshot(), entries)
        assert [w.is_new for w in writes] == [True, False]

    def test_order_preserved(self):
        entries = [RampEntry(f'n{i}', 'Light', RED) for i in range(5)]
        assert [w.name for w in plan_writes(snapshot(), entries)] == [e.name for e in entries]

    def test_deterministic(self):
        entries = [RampEntry('Brand/Opaque/000', 'Light', BLUE), RampEntry('x', 'Dark', RED)]
        assert plan_writes(snapshot(), entries) == plan_writes(snapshot(), entries)


class TestMemoryTokenStore:
    def test_update_in_place(self):
        store = MemoryTokenStore(snapshot())
        store.put_token('Brand/Opaque/000', 'Dark', BLUE)
        token = store.get_token('Brand/Opaque/000')
        assert token.id == 'v1'
        assert token.values == {'m1': Direct(RED), 'm2': Direct(BLUE)}

    def test_create_new(self):
        store = MemoryTokenStore(snapshot())
        store.put_token('Brand/Opaque/200', 'Light', BLUE)
        token = store.get_token('Brand/Opaque/200')
        assert token is not None
        assert token.values == {'m1': Direct(BLUE)}

    def test_adds_missing_mode(self):
        store = MemoryTokenStore(snapshot())
        store.put_token('Brand/Opaque/000', 'High Contrast', BLUE)
        result = store.snapshot()
        added = result.mode_named('High Contrast')
        assert added is not None
        assert result.get_token('Brand/Opaque/000').values[added.id] == Direct(BLUE)

    def test_source_snapshot_untouched(self):
        original = snapshot()
        store = MemoryTokenStore(original)
        store.put_token('new', 'Light', BLUE)
        assert original.get_token('new') is None
        assert len(original.tokens) == 2

    def test_stale_tokens_left_alone(self):
        store = MemoryTokenStore(snapshot())
        store.apply(plan_writes(snapshot(), [RampEntry('Brand/Opaque/000', 'Light', BLUE)]))
        result = store.snapshot()
        assert result.get_token('Brand/Opaque/100').values == {'m1': Alias('v1')}

    def test_apply(self):
        entries = [RampEntry('Brand/Opaque/000', 'Light', BLUE), RampEntry('fresh', 'Dark', RED)]
        store = MemoryTokenStore(snapshot())
        store.apply(plan_writes(snapshot(), entries))
        result = store.snapshot()
        assert result.get_token('Brand/Opaque/000').values['m1'] == Direct(BLUE)
        assert result.get_token('fresh').values == {'m2': Direct(RED)}
        assert len(result.tokens) == 3
