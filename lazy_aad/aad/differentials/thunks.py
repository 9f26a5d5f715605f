# lazy_aad/aad/differentials/thunks.py
from __future__ import annotations
from typing import Any, Callable

from .abstract import AbstractThunk


class Thunk(AbstractThunk):
    """
    A deferred computation.

    Wraps a zero-argument callable that returns a differential when invoked.
    Calling the thunk (or `unthunk(thunk)`) calls the wrapped callable; the
    result is not cached, so every force runs `f` again. `extern` forces
    recursively, also forcing any thunk that `f` itself returns:

        >>> t = Thunk(lambda: Thunk(lambda: 3))
        >>> extern(t)
        3
        >>> t()()
        3

    Attributes
    ----------
    f : Callable[[], Any]
        The wrapped computation. Never invoked at construction.

    Notes
    -----
    Only defer work that costs more than the closure itself: a constant, an
    existing thunk, or a cheap wrapper is better returned as-is.
    """

    def __init__(self, f: Callable[[], Any]):
        if not callable(f):
            raise TypeError(f"Thunk expects a zero-argument callable, but got {type(f)}")
        self.f = f

    def __call__(self) -> Any:
        return self.f()

    def unthunk(self) -> Any:
        return self.f()

    def __repr__(self):
        return f"Thunk({self.f!r})"


def thunk(f: Callable[[], Any]) -> Thunk:
    """
    Defer `f` as a Thunk. Works on a lambda or as a decorator:

        dx = thunk(lambda: expensive(x))

        @thunk
        def dy():
            return expensive(y)
    """
    return Thunk(f)


class InplaceableThunk(AbstractThunk):
    """
    A Thunk paired with an in-place `add` for callers that accumulate.

    `add(acc)` must update `acc` in place so that it ends up equal to
    `acc + extern(val)`, and should do so more cheaply than forcing `val`
    and adding the result (otherwise a plain Thunk is enough). That
    equivalence is trusted, never checked.

    Forcing an InplaceableThunk forces `val`; `add` only runs through
    `accumulate`. Every other operation treats it like a plain Thunk and
    drops the in-place path.
    """

    def __init__(self, val: Thunk, add: Callable[[Any], Any]):
        if not isinstance(val, Thunk):
            raise TypeError(f"InplaceableThunk wraps a Thunk, but got {type(val)}")
        if not callable(add):
            raise TypeError(f"InplaceableThunk expects a callable add, but got {type(add)}")
        self.val = val
        self.add = add

    def __call__(self) -> Any:
        return self.unthunk()

    def unthunk(self) -> Any:
        return self.val.unthunk()

    def accumulate(self, target: Any) -> Any:
        """Run `add(target)` and return the (mutated) target."""
        self.add(target)
        return target

    def __repr__(self):
        return f"InplaceableThunk({self.val!r}, {self.add!r})"
