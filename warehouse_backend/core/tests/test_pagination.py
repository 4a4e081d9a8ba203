# core/tests/test_pagination.py

from django.test import SimpleTestCase, TestCase

from core.exceptions import InvalidInputError
from core.pagination import PageMeta, next_offset, paginate
from core.tests.factories import make_item
from products.models import Item


class NextOffsetTests(SimpleTestCase):
    def test_next_offset_rule(self):
        self.assertEqual(next_offset(total=10, offset=0, limit=3), 3)
        self.assertEqual(next_offset(total=10, offset=6, limit=3), 9)
        self.assertIsNone(next_offset(total=10, offset=7, limit=3))
        self.assertIsNone(next_offset(total=10, offset=9, limit=3))
        self.assertIsNone(next_offset(total=0, offset=0, limit=10))

    def test_meta_wire_shape(self):
        meta = PageMeta(total=4, offset=2, limit=2, next_offset=None)
        self.assertEqual(
            meta.as_dict(),
            {"total": 4, "offset": 2, "limit": 2, "nextOffset": None},
        )


class PaginateTests(TestCase):
    def setUp(self):
        for name in ("a", "b", "c", "d", "e"):
            make_item(name)
        self.qs = Item.objects.order_by("name")

    def test_slices_and_counts(self):
        page = paginate(self.qs, limit=2, offset=1)
        self.assertEqual([i.name for i in page.data], ["b", "c"])
        self.assertEqual(page.meta.total, 5)
        self.assertEqual(page.meta.next_offset, 3)

    def test_defaults_and_string_inputs(self):
        page = paginate(self.qs)
        self.assertEqual((page.meta.limit, page.meta.offset), (10, 0))

        page = paginate(self.qs, limit="2", offset="4")
        self.assertEqual([i.name for i in page.data], ["e"])
        self.assertIsNone(page.meta.next_offset)

    def test_rejects_bad_values(self):
        for kwargs in ({"limit": 0}, {"offset": -1}, {"limit": "x"}, {"limit": True}):
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidInputError):
                    paginate(self.qs, **kwargs)
