import unittest
from types import SimpleNamespace

from farmconnect.services.dashboard import summarize
from tests.base import ApiTestCase


class SummarizeTestCase(unittest.TestCase):
    def test_inventory_and_revenue(self):
        products = [SimpleNamespace(price=10, quantity=5), SimpleNamespace(price=20, quantity=1)]
        orders = [
            SimpleNamespace(status="ACCEPTED", total_amount=50),
            SimpleNamespace(status="PENDING", total_amount=20),
        ]
        stats = summarize(products, orders)
        self.assertEqual(stats["totalInventoryValue"], "70.00")
        self.assertEqual(stats["totalRevenue"], "50.00")
        self.assertEqual(stats["pendingOrders"], 1)
        self.assertEqual(stats["acceptedOrders"], 1)
        self.assertEqual(stats["totalOrders"], 2)
        self.assertEqual(stats["totalProducts"], 2)
        self.assertEqual(stats["lowStockProducts"], 2)

    def test_completed_orders_count_as_revenue(self):
        orders = [
            SimpleNamespace(status="COMPLETED", total_amount=12.5),
            SimpleNamespace(status="REJECTED", total_amount=100),
        ]
        stats = summarize([], orders)
        self.assertEqual(stats["totalRevenue"], "12.50")
        self.assertEqual(stats["acceptedOrders"], 0)

    def test_empty(self):
        stats = summarize([], [])
        self.assertEqual(stats["totalInventoryValue"], "0.00")
        self.assertEqual(stats["totalRevenue"], "0.00")


class FarmerStatsTestCase(ApiTestCase):
    def test_stats_endpoint(self):
        farmer, _ = self.register(role="FARMER")
        buyer, _ = self.register(role="INSTITUTIONAL_BUYER")
        product = self.create_product(farmer, price=10, quantity=25)
        self.create_product(farmer, name="Garlic", price=20, quantity=1)

        accepted = self.place_order(buyer, product["id"], 5).get_json()["data"]
        self.place_order(buyer, product["id"], 2)
        self.client.put(f"/api/orders/{accepted['id']}/accept", headers=self.auth(farmer))

        resp = self.client.get("/api/farmer/stats", headers=self.auth(farmer))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["data"], {
            "totalProducts": 2,
            "totalInventoryValue": "220.00",
            "lowStockProducts": 1,
            "totalOrders": 2,
            "pendingOrders": 1,
            "acceptedOrders": 1,
            "totalRevenue": "50.00",
        })

    def test_stats_is_farmer_only(self):
        buyer, _ = self.register(role="CUSTOMER")
        resp = self.client.get("/api/farmer/stats", headers=self.auth(buyer))
        self.assertEqual(resp.status_code, 403)


class ProfileTestCase(ApiTestCase):
    def test_update_name_and_phone(self):
        token, user = self.register(role="RETAILER")
        resp = self.client.put(
            "/api/farmer/profile",
            json={"full_name": "Renamed Retailer", "phone": "5559999", "role": "FARMER"},
            headers=self.auth(token),
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.get_json()["data"]
        self.assertEqual(data["full_name"], "Renamed Retailer")
        self.assertEqual(data["phone"], "5559999")
        self.assertEqual(data["role"], "RETAILER")
        self.assertNotIn("password", data)

    def test_nothing_to_update(self):
        token, _ = self.register()
        resp = self.client.put("/api/farmer/profile", json={"email": "x@example.com"}, headers=self.auth(token))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["message"], "No fields to update")
