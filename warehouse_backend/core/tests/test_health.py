from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient


class HealthCheckTests(TestCase):
    def test_health_ok(self):
        res = APIClient().get(reverse("health-check"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"status": "ok", "db": "ok"})

    def test_api_root_lists_modules(self):
        res = APIClient().get(reverse("api-root"))
        self.assertEqual(res.status_code, 200)
        self.assertIn("entries", res.data["modules"])
