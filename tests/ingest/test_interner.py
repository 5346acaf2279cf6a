"""Tests for address interning."""

import pytest

from user_graph.errors import InternalInvariantError
from user_graph.ingest.interner import AddressInterner


def test_ids_assigned_in_first_seen_order() -> None:
    interner = AddressInterner()
    assert [interner.intern(a) for a in ["A", "B", "A", "C", "B"]] == [0, 1, 0, 2, 1]
    assert list(interner.addresses) == ["A", "B", "C"]
    assert len(interner) == 3


def test_interning_is_a_bijection_without_gaps() -> None:
    interner = AddressInterner()
    seen = ["x", "coinbase", "y", "x", "z", "coinbase", "w"]
    ids = {address: interner.intern(address) for address in seen}

    assert len(set(ids.values())) == len(ids)
    assert sorted(ids.values()) == list(range(len(interner)))
    for address, address_id in ids.items():
        assert interner.lookup(address_id) == address
        assert interner.intern(address) == address_id


def test_contains() -> None:
    interner = AddressInterner()
    interner.intern("A")
    assert "A" in interner
    assert "B" not in interner


def test_lookup_out_of_range_is_invariant_violation() -> None:
    interner = AddressInterner()
    interner.intern("A")
    with pytest.raises(InternalInvariantError):
        interner.lookup(1)
    with pytest.raises(InternalInvariantError):
        interner.lookup(-1)
