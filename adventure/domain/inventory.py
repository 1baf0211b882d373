# adventure/domain/inventory.py
from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.storage import Storage
    from .catalog import Catalog, Item
    from .economy import Ledger
    from .session import Session


class Inventory:
    """
    Objets possédés / équipés de l'utilisateur courant (équipés ⊆ possédés).

    Vérifier-puis-agir sans verrou: un seul écrivain est supposé.
    """

    def __init__(self, store: Storage, session: Session, ledger: Ledger):
        self.store = store
        self.session = session
        self.ledger = ledger

    def owned(self) -> list[str]:
        user_id = self.session.current_user_id
        return self.store.get_user_progress(user_id).owned_items if user_id else []

    def equipped(self) -> list[str]:
        user_id = self.session.current_user_id
        return self.store.get_user_progress(user_id).equipped_items if user_id else []

    def owns(self, item_id: str) -> bool:
        return item_id in self.owned()

    def is_equipped(self, item_id: str) -> bool:
        return item_id in self.equipped()

    def purchase(self, item: Item) -> bool:
        user_id = self.session.current_user_id
        if not user_id:
            return False
        if self.owns(item.id):
            return False
        if not self.ledger.can_purchase(item.cost_gems):
            return False
        return self.store.purchase_item(user_id, item.id, item.cost_gems)

    def equip(self, item_id: str) -> bool | None:
        """Équipe ou déséquipe (bascule). Renvoie le nouvel état, NotOwned si non possédé."""
        user_id = self.session.current_user_id
        if not user_id:
            return None
        return self.store.equip_item(user_id, item_id)

    def equipped_of_type(self, item_type: str, catalog: Catalog) -> list[str]:
        wanted = {i.id for i in catalog.items if i.type == item_type}
        return [iid for iid in self.equipped() if iid in wanted]
