# movements/tests/test_movements_api.py

"""
MOVEMENT ENDPOINT TESTS

Covers:
- role gating: plain users read, admins write
- typed service errors -> HTTP status (404 / 400 / 409)
- request/response shapes for create, filter, details
"""

import uuid

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.tests.factories import (
    make_client,
    make_item,
    make_product,
    make_provider,
    make_user,
)
from movements.models import Delivery, Entry


class EntryApiTests(TestCase):
    def setUp(self):
        self.api = APIClient()
        self.admin = make_user(role="admin")
        self.api.force_authenticate(self.admin)

        self.provider = make_provider()
        self.product = make_product(item=make_item("Product X"), quantity=10)

    def _post_entry(self, quantity=5, **overrides):
        payload = {
            "provider_id": str(self.provider.id),
            "observation": "pallet 7",
            "details": [{"product_id": str(self.product.id), "quantity": quantity}],
        }
        payload.update(overrides)
        return self.api.post(reverse("entries-list"), payload, format="json")

    def test_create_and_remove(self):
        res = self._post_entry()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["provider"]["id"], str(self.provider.id))
        self.assertEqual(res.data["details"][0]["quantity"], 5)
        self.assertEqual(res.data["details"][0]["product"]["item"]["name"], "Product X")
        self.assertEqual(res.data["created_by"], self.admin.id)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 15)

        res = self.api.delete(reverse("entries-detail", args=[res.data["id"]]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["deleted"])

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)

    def test_empty_details_is_400(self):
        res = self._post_entry(details=[])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Entry.objects.exists())

    def test_zero_quantity_is_400(self):
        res = self._post_entry(quantity=0)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_product_is_404(self):
        res = self._post_entry(details=[{"product_id": str(uuid.uuid4()), "quantity": 1}])
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Entry.objects.exists())

    def test_unknown_provider_is_404(self):
        res = self._post_entry(provider_id=str(uuid.uuid4()))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_retrieve_unknown_is_404(self):
        res = self.api.get(reverse("entries-detail", args=[uuid.uuid4()]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_shape(self):
        self._post_entry()
        self._post_entry()
        self._post_entry()

        res = self.api.get(reverse("entries-list"), {"limit": 2})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["data"]), 2)
        self.assertEqual(
            res.data["meta"],
            {"total": 3, "offset": 0, "limit": 2, "nextOffset": 2},
        )

        res = self.api.get(
            reverse("entries-list"),
            {"provider_id": str(make_provider("Nobody").id)},
        )
        self.assertEqual(res.data["meta"]["total"], 0)
        self.assertIsNone(res.data["meta"]["nextOffset"])

    def test_filter_accepts_large_limit(self):
        self._post_entry()
        res = self.api.get(reverse("entries-list"), {"limit": 500})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            res.data["meta"],
            {"total": 1, "offset": 0, "limit": 500, "nextOffset": None},
        )

    def test_filter_rejects_bad_query(self):
        for params in ({"limit": 0}, {"offset": -1}, {"date_start": "yesterday"}):
            with self.subTest(params=params):
                res = self.api.get(reverse("entries-list"), params)
                self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_all_lists_newest_first(self):
        self._post_entry()
        res = self.api.get(reverse("entries-list-all"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)

    def test_patch_header(self):
        entry_id = self._post_entry().data["id"]
        other = make_provider("Second Supplier")

        res = self.api.patch(
            reverse("entries-detail", args=[entry_id]),
            {"observation": "recounted", "provider_id": str(other.id)},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["observation"], "recounted")
        self.assertEqual(res.data["provider"]["name"], "Second Supplier")

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 15)

    def test_detail_endpoints(self):
        entry_id = self._post_entry().data["id"]
        other = make_product(item=make_item("Product Q"), quantity=0)

        res = self.api.post(
            reverse("entries-add-detail", args=[entry_id]),
            {"product_id": str(other.id), "quantity": 3},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        line_id = res.data["id"]

        res = self.api.patch(
            reverse("entries-detail-line", kwargs={"line_id": line_id}),
            {"quantity": 7},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["quantity"], 7)
        other.refresh_from_db()
        self.assertEqual(other.quantity, 7)

        res = self.api.delete(reverse("entries-detail-line", kwargs={"line_id": line_id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"ok": True})
        other.refresh_from_db()
        self.assertEqual(other.quantity, 0)

    def test_unknown_detail_is_404(self):
        res = self.api.delete(reverse("entries-detail-line", kwargs={"line_id": 424242}))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class DeliveryApiTests(TestCase):
    def setUp(self):
        self.api = APIClient()
        self.admin = make_user(role="admin")
        self.api.force_authenticate(self.admin)

        self.client_row = make_client()
        self.product = make_product(item=make_item("Product Y"), quantity=3)

    def test_insufficient_stock_is_400_with_details(self):
        res = self.api.post(
            reverse("deliveries-list"),
            {
                "client_id": str(self.client_row.id),
                "details": [{"product_id": str(self.product.id), "quantity": 5}],
            },
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            res.data["detail"],
            "Operation denied: Stock of Product Y (3) is less than 5 required.",
        )
        self.assertEqual(res.data["item_name"], "Product Y")
        self.assertEqual(res.data["available"], 3)
        self.assertEqual(res.data["required"], 5)
        self.assertFalse(Delivery.objects.exists())

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 3)

    def test_delete_client_with_deliveries_is_409(self):
        self.api.post(
            reverse("deliveries-list"),
            {
                "client_id": str(self.client_row.id),
                "details": [{"product_id": str(self.product.id), "quantity": 1}],
            },
            format="json",
        )
        res = self.api.delete(reverse("clients-detail", args=[self.client_row.id]))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_delete_product_referenced_by_a_line_is_409(self):
        self.api.post(
            reverse("deliveries-list"),
            {
                "client_id": str(self.client_row.id),
                "details": [{"product_id": str(self.product.id), "quantity": 1}],
            },
            format="json",
        )
        res = self.api.delete(reverse("products-detail", args=[self.product.id]))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)


class MovementPermissionTests(TestCase):
    def setUp(self):
        self.api = APIClient()
        self.provider = make_provider()
        self.product = make_product(quantity=10)
        self.payload = {
            "provider_id": str(self.provider.id),
            "details": [{"product_id": str(self.product.id), "quantity": 1}],
        }

    def test_plain_user_can_read_but_not_write(self):
        self.api.force_authenticate(make_user(role="user"))

        self.assertEqual(self.api.get(reverse("entries-list")).status_code, status.HTTP_200_OK)
        self.assertEqual(
            self.api.get(reverse("deliveries-list-all")).status_code, status.HTTP_200_OK
        )

        res = self.api.post(reverse("entries-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)

    def test_superadmin_can_write(self):
        self.api.force_authenticate(make_user(role="superadmin"))
        res = self.api.post(reverse("entries-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_anonymous_is_401(self):
        self.assertEqual(
            self.api.get(reverse("entries-list")).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )
