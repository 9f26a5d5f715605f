import pytest

from lazy_aad import (
    AADError,
    DeferredResolutionDepthExceeded,
    DifferentialConfig,
    Thunk,
    extern,
    use_config,
)


def _nest(v, depth):
    for _ in range(depth):
        v = Thunk(lambda v=v: v)
    return v


def test_defaults():
    assert DifferentialConfig.max_extern_depth is None
    assert DifferentialConfig.inplace_accumulation is True


def test_extern_has_no_depth_limit_by_default():
    assert extern(_nest(1.0, 200)) == 1.0


def test_depth_guard_allows_chains_up_to_the_limit():
    with use_config(max_extern_depth=3):
        assert extern(_nest("v", 3)) == "v"
        with pytest.raises(DeferredResolutionDepthExceeded):
            extern(_nest("v", 4))


def test_depth_guard_stops_self_referencing_thunk():
    t = Thunk(lambda: t)
    with use_config(max_extern_depth=10):
        with pytest.raises(DeferredResolutionDepthExceeded) as info:
            extern(t)
    assert info.value.limit == 10
    assert "deferred-resolution depth exceeded" in str(info.value)
    assert isinstance(info.value, RecursionError)
    assert isinstance(info.value, AADError)


def test_extern_resolves_chains_deeper_than_the_stack():
    assert extern(_nest(1.0, 5000)) == 1.0
    with use_config(max_extern_depth=5000):
        assert extern(_nest(1.0, 5000)) == 1.0


def test_use_config_restores_previous_values():
    with use_config(max_extern_depth=5, inplace_accumulation=False):
        assert DifferentialConfig.max_extern_depth == 5
        assert DifferentialConfig.inplace_accumulation is False
    assert DifferentialConfig.snapshot() == {
        "max_extern_depth": None,
        "inplace_accumulation": True,
    }


def test_use_config_restores_after_error():
    with pytest.raises(ZeroDivisionError):
        with use_config(max_extern_depth=2):
            extern(Thunk(lambda: 1 / 0))
    assert DifferentialConfig.max_extern_depth is None


def test_use_config_rejects_bad_settings():
    with pytest.raises(TypeError):
        with use_config(memoize=True):
            pass
    with pytest.raises(ValueError):
        with use_config(max_extern_depth=-1):
            pass
