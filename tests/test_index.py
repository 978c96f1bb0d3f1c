import numpy as np
import pytest

from idxnet.core.index import IndexSpace


class TestIndexSpace:
    def test_allocation_is_dense(self):
        ids = IndexSpace()
        assert [ids.allocate() for _ in range(5)] == [0, 1, 2, 3, 4]
        assert len(ids) == 5
        assert ids.high_water == 5

    def test_release_then_reuse(self):
        ids = IndexSpace()
        for _ in range(4):
            ids.allocate()
        ids.release(1)
        ids.release(3)
        assert 1 not in ids and 3 not in ids
        reused = {ids.allocate(), ids.allocate()}
        assert reused == {1, 3}
        assert ids.high_water == 4
        assert ids.allocate() == 4

    def test_monotonic_when_recycling_disabled(self):
        ids = IndexSpace(recycle=False)
        a = ids.allocate()
        ids.release(a)
        assert ids.allocate() == a + 1
        assert len(ids) == 1

    def test_release_not_live_raises(self):
        ids = IndexSpace()
        with pytest.raises(KeyError):
            ids.release(0)
        v = ids.allocate()
        ids.release(v)
        with pytest.raises(KeyError):
            ids.release(v)

    def test_iteration_and_mask(self):
        ids = IndexSpace(capacity=2)
        for _ in range(3):
            ids.allocate()
        ids.release(1)
        assert list(ids) == [0, 2]
        np.testing.assert_array_equal(ids.live_mask(), [True, False, True])

    def test_is_live_accepts_numpy_ints(self):
        ids = IndexSpace()
        ids.allocate()
        assert ids.is_live(np.int64(0))
        assert not ids.is_live(-1)
        assert not ids.is_live(7)
        assert not ids.is_live(True)

    def test_release_bumps_generation(self):
        ids = IndexSpace()
        a = ids.allocate()
        assert ids.generation(a) == 0
        ids.release(a)
        assert ids.generation(a) == 1
        assert ids.allocate() == a
        assert ids.generation(a) == 1
        assert ids.generation(5) == 0

    def test_copy_is_independent(self):
        ids = IndexSpace()
        ids.allocate()
        other = ids.copy()
        other.allocate()
        assert len(ids) == 1 and len(other) == 2
