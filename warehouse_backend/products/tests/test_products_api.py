# products/tests/test_products_api.py

"""
PRODUCTS / ITEMS API TESTS

Covers:
- paginated filter: stock-on-hand only, substring filters, strict expiry bound,
  ordering by item name then expiry, meta.nextOffset
- /products/all/ is unpaginated
- quantity is an opening balance only
- role gating: plain users read, admins write
- deleting a referenced item is a 409
"""

from datetime import date, timedelta

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from django.test import TestCase

from core.tests.factories import make_item, make_product, make_user
from products.models import Item, Product


class ProductFilterTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_user(role="user"))

        today = date.today()
        self.aspirin = make_item("Aspirin")
        self.bandage = make_item("Bandage")

        self.a_late = make_product(
            item=self.aspirin, quantity=5, batch_number="AS-02", expire_date=today + timedelta(days=90)
        )
        self.a_soon = make_product(
            item=self.aspirin, quantity=5, batch_number="AS-01", expire_date=today + timedelta(days=10)
        )
        self.b_one = make_product(
            item=self.bandage, quantity=1, batch_number="BD-77", expire_date=today + timedelta(days=30)
        )
        self.empty = make_product(
            item=self.aspirin, quantity=0, batch_number="AS-00", expire_date=today + timedelta(days=5)
        )

    def _ids(self, res):
        return [row["id"] for row in res.data["data"]]

    def test_lists_only_stock_on_hand_in_name_then_expiry_order(self):
        res = self.client.get(reverse("products-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            self._ids(res),
            [str(self.a_soon.id), str(self.a_late.id), str(self.b_one.id)],
        )
        self.assertEqual(
            res.data["meta"],
            {"total": 3, "offset": 0, "limit": 10, "nextOffset": None},
        )

    def test_item_name_and_batch_number_are_substring_filters(self):
        res = self.client.get(reverse("products-list"), {"item_name": "asp"})
        self.assertEqual(res.data["meta"]["total"], 2)

        res = self.client.get(reverse("products-list"), {"batch_number": "d-7"})
        self.assertEqual(self._ids(res), [str(self.b_one.id)])

    def test_expire_date_is_a_strict_upper_bound(self):
        cutoff = self.b_one.expire_date
        res = self.client.get(reverse("products-list"), {"expire_date": cutoff.isoformat()})
        self.assertEqual(self._ids(res), [str(self.a_soon.id)])

    def test_pagination_meta(self):
        res = self.client.get(reverse("products-list"), {"limit": 2, "offset": 0})
        self.assertEqual(len(res.data["data"]), 2)
        self.assertEqual(res.data["meta"]["nextOffset"], 2)

        res = self.client.get(reverse("products-list"), {"limit": 2, "offset": 2})
        self.assertEqual(self._ids(res), [str(self.b_one.id)])
        self.assertIsNone(res.data["meta"]["nextOffset"])

    def test_invalid_limit_is_400(self):
        res = self.client.get(reverse("products-list"), {"limit": 0})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_large_limit_is_accepted(self):
        res = self.client.get(reverse("products-list"), {"limit": 500})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["meta"]["limit"], 500)
        self.assertIsNone(res.data["meta"]["nextOffset"])

    def test_all_is_unpaginated_and_includes_empty_products(self):
        res = self.client.get(reverse("products-list-all"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 4)
        self.assertEqual(res.data[0]["item"]["name"], "Aspirin")


class ProductWriteTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user(role="admin")
        self.item = make_item("Syringe 5ml")

    def _create(self, **overrides):
        payload = {
            "item_id": str(self.item.id),
            "batch_number": " SY-5 ",
            "expire_date": (date.today() + timedelta(days=200)).isoformat(),
            "quantity": 40,
        }
        payload.update(overrides)
        return self.client.post(reverse("products-list"), payload, format="json")

    def test_admin_creates_product_with_opening_balance(self):
        self.client.force_authenticate(self.admin)
        res = self._create()

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["quantity"], 40)
        self.assertEqual(res.data["batch_number"], "SY-5")
        self.assertEqual(res.data["item"]["id"], str(self.item.id))

        product = Product.objects.get(pk=res.data["id"])
        self.assertEqual(product.created_by, self.admin)
        self.assertEqual(product.updated_by, self.admin)

    def test_negative_opening_balance_rejected(self):
        self.client.force_authenticate(self.admin)
        res = self._create(quantity=-1)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_quantity_cannot_be_patched(self):
        product = make_product(item=self.item, quantity=7)
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            reverse("products-detail", args=[product.id]), {"quantity": 100}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        product.refresh_from_db()
        self.assertEqual(product.quantity, 7)

    def test_patch_other_fields(self):
        product = make_product(item=self.item, quantity=7)
        self.client.force_authenticate(self.admin)

        res = self.client.patch(
            reverse("products-detail", args=[product.id]), {"batch_number": "SY-6"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["batch_number"], "SY-6")
        self.assertEqual(res.data["quantity"], 7)

    def test_plain_user_cannot_create(self):
        self.client.force_authenticate(make_user(role="user"))
        res = self._create()
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_cannot_read(self):
        res = self.client.get(reverse("products-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_retrieve_unknown_product_is_404(self):
        self.client.force_authenticate(self.admin)
        res = self.client.get(reverse("products-detail", args=["00000000-0000-0000-0000-000000000000"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class ItemApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user(role="admin")
        self.client.force_authenticate(self.admin)

    def test_crud_roundtrip(self):
        res = self.client.post(
            reverse("items-list"),
            {"name": "Thermometer", "category": "devices"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        item_id = res.data["id"]

        res = self.client.patch(
            reverse("items-detail", args=[item_id]), {"description": "digital"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["description"], "digital")
        self.assertEqual(res.data["updated_by"], self.admin.id)

        res = self.client.get(reverse("items-list"))
        self.assertEqual([row["name"] for row in res.data], ["Thermometer"])

        res = self.client.delete(reverse("items-detail", args=[item_id]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Item.objects.exists())

    def test_blank_name_rejected(self):
        res = self.client.post(reverse("items-list"), {"name": "   "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_item_with_products_is_conflict(self):
        item = make_item("Catheter")
        make_product(item=item, quantity=1)

        res = self.client.delete(reverse("items-detail", args=[item.id]))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Item.objects.filter(pk=item.pk).exists())
