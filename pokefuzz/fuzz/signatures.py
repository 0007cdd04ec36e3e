"""Signature combinations: items (and Z-moves) that only matter for specific species.

Drawn independently, a Mega Stone lands on its one species with negligible
probability. The index built here lets the team generator hand those
combinations to the species that need them.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..data.dex import Dex, to_id


@dataclass(frozen=True)
class Combo:
    """An item, optionally paired with the move it unlocks."""
    item: str
    move: Optional[str] = None


Signatures = Dict[str, List[Combo]]


def build_signatures(item_ids: Iterable[str], dex: Dex) -> Signatures:
    """Map species id -> signature combos found among ``item_ids``.

    Items that Mega Evolve a species give ``Combo(item)`` under that
    species; items restricted to a list of users give ``Combo(item, move)``
    under every user, ``move`` being the Z-move's base move if any.
    Items are visited in sorted order so the result does not depend on
    the order of ``item_ids``.
    """
    signatures: Signatures = {}
    for item_id in sorted(set(item_ids)):
        item = dex.item(item_id)
        if item.mega_evolves:
            signatures.setdefault(to_id(item.mega_evolves), []).append(Combo(item=item_id))
        elif item.item_user:
            move = to_id(item.z_move_from) or None
            for user in item.item_user:
                signatures.setdefault(to_id(user), []).append(Combo(item=item_id, move=move))
    return signatures
