# movements/tests/test_movement_locking.py

"""
ROW LOCK ORDER

Every write to an existing movement locks its header first, then its lines,
then products. SQLite drops FOR UPDATE, so these tests record which models
each operation asks to lock instead of blocking on real row locks.
"""

from unittest import mock

from django.db.models.query import QuerySet
from django.test import TransactionTestCase

from core.tests.factories import (
    make_client,
    make_item,
    make_product,
    make_provider,
    make_user,
)
from movements.models import Delivery, DeliveryLine, Entry, EntryLine
from movements.services import delivery_service, entry_service
from products.models import Product


class MovementLockOrderTests(TransactionTestCase):
    def setUp(self):
        self.actor = make_user(role="admin")
        self.product = make_product(item=make_item("Product X"), quantity=10)

    def _locked_models(self, fn, *args, **kwargs):
        locked = []
        original = QuerySet.select_for_update

        def recording(qs, *a, **kw):
            locked.append(qs.model)
            return original(qs, *a, **kw)

        with mock.patch.object(QuerySet, "select_for_update", recording):
            fn(*args, **kwargs)
        return locked

    def _entry(self, quantity=5):
        return entry_service.create(
            counterparty_id=make_provider().id,
            lines=[{"product_id": self.product.id, "quantity": quantity}],
            actor_id=self.actor.id,
        )

    def _delivery(self, quantity=5):
        return delivery_service.create(
            counterparty_id=make_client().id,
            lines=[{"product_id": self.product.id, "quantity": quantity}],
            actor_id=self.actor.id,
        )

    def test_update_detail_locks_header_before_line(self):
        line = self._entry().details.get()

        locked = self._locked_models(entry_service.update_detail, line.id, quantity=9)

        self.assertEqual(locked, [Entry, EntryLine])
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 19)

    def test_remove_detail_locks_header_line_then_product(self):
        line = self._entry().details.get()

        locked = self._locked_models(entry_service.remove_detail, line.id)

        self.assertEqual(locked, [Entry, EntryLine, Product])

    def test_remove_locks_header_then_its_lines(self):
        entry = self._entry()

        locked = self._locked_models(entry_service.remove, entry.id)

        self.assertEqual(locked, [Entry, EntryLine, Product])
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)

    def test_delivery_writes_use_the_same_order(self):
        delivery = self._delivery()
        line = delivery.details.get()

        locked = self._locked_models(delivery_service.update_detail, line.id, quantity=7)
        self.assertEqual(locked, [Delivery, DeliveryLine, Product])

        locked = self._locked_models(delivery_service.remove, delivery.id)
        self.assertEqual(locked, [Delivery, DeliveryLine])
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)
