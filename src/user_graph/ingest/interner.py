"""Address interning: variable-length address strings to dense integer ids."""

from collections.abc import Sequence

from user_graph.errors import InternalInvariantError


class AddressInterner:
    """
    Two-way table between address strings and ids in ``[0, N)``.

    Ids are handed out in first-seen order and are never reassigned, so every
    downstream structure can store plain ints instead of strings.
    """

    def __init__(self) -> None:
        self._addresses: list[str] = []
        self._ids: dict[str, int] = {}

    def intern(self, address: str) -> int:
        """Return the id for address, allocating the next one on first sight."""
        address_id = self._ids.get(address)
        if address_id is None:
            address_id = len(self._addresses)
            self._ids[address] = address_id
            self._addresses.append(address)
        return address_id

    def lookup(self, address_id: int) -> str:
        if not 0 <= address_id < len(self._addresses):
            raise InternalInvariantError(
                f"address id {address_id} outside [0, {len(self._addresses)})"
            )
        return self._addresses[address_id]

    @property
    def addresses(self) -> Sequence[str]:
        """Id -> address table. Index i holds the address interned as i."""
        return self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._ids
