# products/tests/test_stock.py

"""
STOCK LEDGER TESTS

Run with:
    python manage.py test products -v 2

GUARANTEES:
- quantity never goes below zero (service AND database)
- reserve() refuses with the item name, available and required quantities
- unknown product ids fail with NotFoundError
- ledger calls refuse to run outside a unit of work
"""

import uuid

from django.db import IntegrityError, transaction
from django.test import TestCase, TransactionTestCase

from core.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    UnexpectedError,
)
from core.tests.factories import make_item, make_product
from products.models import Product
from products.services import stock_ledger


class StockLedgerTests(TestCase):
    def setUp(self):
        self.product = make_product(item=make_item("Saline 500ml"), quantity=10)

    def _qty(self):
        self.product.refresh_from_db()
        return self.product.quantity

    def test_increment_adds_quantity(self):
        with transaction.atomic():
            stock_ledger.increment(self.product.id, 5)
        self.assertEqual(self._qty(), 15)

    def test_decrement_subtracts_quantity(self):
        with transaction.atomic():
            stock_ledger.decrement(self.product.id, 4)
        self.assertEqual(self._qty(), 6)

    def test_decrement_to_exactly_zero_is_allowed(self):
        with transaction.atomic():
            stock_ledger.decrement(self.product.id, 10)
        self.assertEqual(self._qty(), 0)

    def test_decrement_below_zero_is_refused(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            with transaction.atomic():
                stock_ledger.decrement(self.product.id, 11)

        self.assertEqual(ctx.exception.item_name, "Saline 500ml")
        self.assertEqual(ctx.exception.available, 10)
        self.assertEqual(ctx.exception.required, 11)
        self.assertEqual(self._qty(), 10)

    def test_reserve_returns_locked_product_without_changing_it(self):
        with transaction.atomic():
            product = stock_ledger.reserve(self.product.id, 10)
        self.assertEqual(product.pk, self.product.pk)
        self.assertEqual(self._qty(), 10)

    def test_reserve_refuses_when_short(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            with transaction.atomic():
                stock_ledger.reserve(self.product.id, 12)

        self.assertEqual(
            str(ctx.exception),
            "Operation denied: Stock of Saline 500ml (10) is less than 12 required.",
        )
        self.assertEqual(ctx.exception.shortfall, 2)

    def test_refusal_is_logged(self):
        with self.assertLogs("inventory", level="WARNING") as logs:
            with self.assertRaises(InsufficientStockError):
                with transaction.atomic():
                    stock_ledger.decrement(self.product.id, 99)

        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].required, 99)
        self.assertEqual(logs.records[0].available, 10)

    def test_unknown_product(self):
        ops = (stock_ledger.reserve, stock_ledger.increment, stock_ledger.decrement)
        for missing in (uuid.uuid4(), "not-a-uuid", 42):
            for op in ops:
                with self.subTest(op=op.__name__, product_id=missing):
                    with self.assertRaises(NotFoundError):
                        with transaction.atomic():
                            op(missing, 1)

    def test_quantity_must_be_positive_integer(self):
        for bad in (0, -3, 1.5, True, "abc", None):
            with self.subTest(qty=bad):
                with self.assertRaises(InvalidInputError):
                    with transaction.atomic():
                        stock_ledger.increment(self.product.id, bad)
        self.assertEqual(self._qty(), 10)

    def test_database_rejects_negative_quantity(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Product.objects.filter(pk=self.product.pk).update(quantity=-1)


class StockLedgerTransactionGuardTests(TransactionTestCase):
    def test_ledger_refuses_to_run_outside_a_transaction(self):
        product = make_product(quantity=3)

        for op in (stock_ledger.reserve, stock_ledger.increment, stock_ledger.decrement):
            with self.subTest(op=op.__name__):
                with self.assertRaises(UnexpectedError):
                    op(product.id, 1)

        product.refresh_from_db()
        self.assertEqual(product.quantity, 3)
