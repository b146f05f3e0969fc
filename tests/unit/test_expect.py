"""Tests for the expect() matcher used by scenario assertions."""

import pytest

from algotrace.expect import expect


class TestMatchers:
    def test_passing_matchers_return_quietly(self):
        expect(1).to_be(1)
        expect([1, 2]).to_equal([1, 2])
        expect(3).to_be_greater_than(2)
        expect(3).to_be_greater_than_or_equal(3)
        expect(1).to_be_less_than(2)
        expect(2).to_be_less_than_or_equal(2)
        expect([1, 2]).to_contain(2)
        expect("abc").to_have_length(3)
        expect(1).to_be_truthy()
        expect(0).to_be_falsy()
        expect(None).to_be_none()
        expect(3).to_be_instance_of(int)
        expect(lambda: 1 / 0).to_raise(ZeroDivisionError)

    def test_to_be_distinguishes_types(self):
        with pytest.raises(AssertionError):
            expect(1).to_be(True)

    def test_failure_message(self):
        with pytest.raises(AssertionError, match=r"Expected \[1\] to equal \[2\]"):
            expect([1]).to_equal([2])

    def test_negation(self):
        expect(1).not_.to_equal(2)

        with pytest.raises(AssertionError, match="not to equal"):
            expect(1).not_.to_equal(1)

    def test_to_raise_fails_when_nothing_raised(self):
        with pytest.raises(AssertionError, match="raise Exception"):
            expect(lambda: None).to_raise()
