"""Tests for the structural difference checks."""

from datetime import UTC, date, datetime

from piconeuro.signals import clone, not_equal, not_equal_deep


def test_not_equal_primitives():
    """Test not_equal on leaf values."""
    assert not_equal(None, 1)
    assert not_equal("a", "b")
    assert not_equal(1, 2)
    assert not_equal(True, 1)  # a flag is not a number
    assert not not_equal(1, 1.0)
    assert not not_equal("a", "a")
    assert not not_equal(None, None)


def test_not_equal_sequences():
    """Test not_equal on lists and tuples."""
    p = {"name": "dog", "age": "human", "skills": 0}

    assert not not_equal([], [])
    assert not not_equal(["a"], ["a"])
    assert not not_equal(["a", 1], ["a", 1])
    assert not not_equal([p], [p])
    assert not_equal([], [p])
    assert not_equal([1, 2], [1, 3])
    assert not not_equal((1, 2), (1, 2))
    assert not_equal([1], (1,))


def test_not_equal_dicts():
    """Test not_equal on dicts."""
    p = {"name": "dog", "age": "human", "skills": 0}

    assert not_equal({}, None)
    assert not not_equal({}, {})
    assert not not_equal(p, p)
    assert not not_equal({"a": 1}, {"a": 1})
    assert not_equal({"a": 1}, {"a": 1, "b": 2})
    assert not_equal({"a": 1}, {"b": 1})
    # values are compared by identity
    assert not_equal({"a": [1]}, {"a": [1]})


def test_not_equal_dates():
    """Test that dates are compared by instant."""
    assert not not_equal(datetime(1984, 3, 24, tzinfo=UTC), datetime(1984, 3, 24, tzinfo=UTC))
    assert not_equal(datetime(1984, 3, 24, tzinfo=UTC), datetime(1999, 9, 10, tzinfo=UTC))
    assert not not_equal(date(1984, 3, 24), date(1984, 3, 24))
    assert not_equal(date(1984, 3, 24), None)
    assert not_equal(None, date(1984, 3, 24))


def test_not_equal_deep():
    """Test not_equal_deep against not_equal on nested structures."""
    a = [{"name": "alice", "pet": {"state": "loading"}}]
    b = [{"name": "alice", "pet": {"name": "billy", "type": "iguana"}}]

    assert not_equal(a, b)  # children have different identities
    assert not_equal_deep(a, b)  # differences in children detected

    a[0]["pet"] = b[0]["pet"]  # a steals b's pet
    assert not_equal(a, b)  # children still have different identities
    assert not not_equal_deep(a, b)  # equality in children detected

    c = [{"name": "alice", "pet": {"name": "billy", "type": "iguana"}}]
    assert not not_equal_deep(b, c)

    d = list(b)
    assert not not_equal(d, b)
    assert not not_equal_deep(d, b)


def test_not_equal_deep_leaves():
    """Test not_equal_deep on leaves and mismatched shapes."""
    assert not_equal_deep(True, 1)
    assert not_equal_deep([1, 2], [1, 2, 3])
    assert not_equal_deep({"a": {"b": 1}}, {"a": {"b": 2}})
    assert not_equal_deep({"a": 1}, {"b": 1})
    assert not_equal_deep([1], {"0": 1})
    assert not not_equal_deep(((1, 2), [3]), ((1, 2), [3]))


def test_clone():
    """Test clone."""
    values = [1, 2]
    copy = clone(values)
    assert copy == values
    assert copy is not values

    record = {"a": [1]}
    copy = clone(record)
    assert copy == record
    assert copy is not record
    assert copy["a"] is record["a"]  # shallow

    value = (1, 2)
    assert clone(value) is value
    assert clone(5) == 5
