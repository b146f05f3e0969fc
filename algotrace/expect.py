"""Matcher helper available to scenario assertions as ``expect(actual)``."""

from __future__ import annotations

from typing import Any, Callable


class Expectation:
    def __init__(self, actual: Any, negated: bool = False):
        self.actual = actual
        self._negated = negated

    @property
    def not_(self) -> Expectation:
        return Expectation(self.actual, not self._negated)

    def _check(self, passed: bool, description: str) -> None:
        if passed == self._negated:
            verb = "not to" if self._negated else "to"
            raise AssertionError(f"Expected {self.actual!r} {verb} {description}")

    def to_be(self, expected: Any) -> None:
        self._check(
            self.actual is expected or self.actual == expected
            and type(self.actual) is type(expected),
            f"be {expected!r}",
        )

    def to_equal(self, expected: Any) -> None:
        self._check(self.actual == expected, f"equal {expected!r}")

    def to_be_greater_than(self, bound: Any) -> None:
        self._check(self.actual > bound, f"be greater than {bound!r}")

    def to_be_greater_than_or_equal(self, bound: Any) -> None:
        self._check(self.actual >= bound, f"be greater than or equal to {bound!r}")

    def to_be_less_than(self, bound: Any) -> None:
        self._check(self.actual < bound, f"be less than {bound!r}")

    def to_be_less_than_or_equal(self, bound: Any) -> None:
        self._check(self.actual <= bound, f"be less than or equal to {bound!r}")

    def to_contain(self, item: Any) -> None:
        self._check(item in self.actual, f"contain {item!r}")

    def to_have_length(self, length: int) -> None:
        self._check(len(self.actual) == length, f"have length {length}")

    def to_be_truthy(self) -> None:
        self._check(bool(self.actual), "be truthy")

    def to_be_falsy(self) -> None:
        self._check(not self.actual, "be falsy")

    def to_be_none(self) -> None:
        self._check(self.actual is None, "be None")

    def to_be_instance_of(self, cls: type) -> None:
        self._check(isinstance(self.actual, cls), f"be an instance of {cls.__name__}")

    def to_raise(self, exc_type: type[BaseException] = Exception) -> None:
        fn: Callable[[], Any] = self.actual
        try:
            fn()
        except exc_type:
            raised = True
        else:
            raised = False
        self._check(raised, f"raise {exc_type.__name__}")


def expect(actual: Any) -> Expectation:
    return Expectation(actual)
