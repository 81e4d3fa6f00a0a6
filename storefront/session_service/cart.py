"""
Cart

Client-local shopping cart. Not authoritative: the order store reconciles
items and prices at submission time. Every mutation is written through to
an optional snapshot store.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .models import CartItem

logger = logging.getLogger(__name__)


class CartSnapshotStore:
    """Persists the cart as a JSON list on local disk"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[CartItem]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return [CartItem.model_validate(item) for item in raw]
        except (OSError, ValueError) as e:
            # Unreadable snapshot starts an empty cart
            logger.warning(f"Ignoring unreadable cart snapshot {self.path}: {e}")
            return []

    def save(self, items: List[CartItem]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [item.model_dump(mode="json") for item in items]
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class Cart:
    """Ordered collection of cart lines keyed by product id"""

    def __init__(self, store: Optional[CartSnapshotStore] = None):
        self.store = store
        self._items: Dict[str, CartItem] = {}

    def load(self) -> "Cart":
        """Restore items from the snapshot store"""
        if self.store:
            self._items = {item.id: item for item in self.store.load()}
        return self

    def _persist(self) -> None:
        if self.store:
            self.store.save(self.items)

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self._items.values()), Decimal("0"))

    def quantity_of(self, product_id: str) -> int:
        item = self._items.get(product_id)
        return item.quantity if item else 0

    def add(self, product: Union[CartItem, Dict[str, Any]]) -> CartItem:
        """Add one unit; an existing line is incremented"""
        if isinstance(product, dict):
            product = CartItem.model_validate({**product, "quantity": 1})

        existing = self._items.get(product.id)
        if existing:
            item = existing.model_copy(update={"quantity": existing.quantity + 1})
        else:
            item = product.model_copy(update={"quantity": 1})
        self._items[item.id] = item
        self._persist()
        return item

    def remove(self, product_id: str) -> None:
        if self._items.pop(product_id, None) is not None:
            self._persist()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes it"""
        if quantity <= 0:
            self.remove(product_id)
            return
        existing = self._items.get(product_id)
        if existing is None:
            return
        self._items[product_id] = existing.model_copy(update={"quantity": quantity})
        self._persist()

    def clear(self) -> None:
        self._items.clear()
        if self.store:
            self.store.clear()

    def to_order_items(self) -> List[Dict[str, Any]]:
        """Order submission payload lines"""
        return [{"id": item.id, "quantity": item.quantity} for item in self._items.values()]
