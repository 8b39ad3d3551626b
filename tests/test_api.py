import os
import sys
import unittest
from fastapi.testclient import TestClient

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from rest_api import OneRepMaxAPI


class APITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.yaml_path = "test_api_state.yaml"
        if os.path.exists(self.yaml_path):
            os.remove(self.yaml_path)
        self.api = OneRepMaxAPI(yaml_path=self.yaml_path)
        self.client = TestClient(self.api.app)

    def tearDown(self) -> None:
        if os.path.exists(self.yaml_path):
            os.remove(self.yaml_path)

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_calculate(self) -> None:
        response = self.client.post("/calculate", params={"weight": "100", "reps": "5"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertAlmostEqual(data["result"]["best"], 116.6667, places=3)
        self.assertEqual(data["result"]["formulas"], ["epley", "brzycki", "lombardi"])
        self.assertEqual(data["display_best"], 116.5)
        self.assertEqual(len(data["warmup"]), 5)
        self.assertEqual(data["percentages"][0]["percent"], 95)
        self.assertIsNone(data["warning"])

        response = self.client.get("/state")
        self.assertEqual(response.json()["last_calculation"]["reps"], 5)

    def test_calculate_formulas(self) -> None:
        response = self.client.post(
            "/calculate", params={"weight": 100, "reps": 5, "formulas": "epley,brzycki"}
        )
        self.assertAlmostEqual(response.json()["result"]["best"], 114.5833, places=3)
        response = self.client.post(
            "/calculate", params={"weight": 100, "reps": 5, "formulas": "mayhew"}
        )
        self.assertEqual(response.status_code, 400)

    def test_calculate_invalid(self) -> None:
        response = self.client.post("/calculate", params={"weight": "0", "reps": "5"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Weight must be greater than 0")
        response = self.client.post("/calculate", params={"weight": "100", "reps": "21"})
        self.assertEqual(response.status_code, 400)

    def test_calculate_warning(self) -> None:
        response = self.client.post("/calculate", params={"weight": "60", "reps": "15"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["warning"], "Estimates less accurate at >10 reps")

    def test_validate(self) -> None:
        data = self.client.get("/validate", params={"weight": "100", "reps": "15"}).json()
        self.assertTrue(data["ok"])
        self.assertIsNotNone(data["warning"])
        data = self.client.get("/validate", params={"weight": "x", "reps": "5"}).json()
        self.assertFalse(data["ok"])

    def test_plates(self) -> None:
        data = self.client.get("/plates", params={"target": 140}).json()
        self.assertEqual([p["weight"] for p in data["result"]["plates"]], [25, 20, 15])
        self.assertEqual(data["result"]["total"], 140)
        data = self.client.get("/plates", params={"target": 15}).json()
        self.assertEqual(data["result"]["remainder"], 5)
        self.assertEqual(data["result"]["total"], 20)
        self.assertIsNotNone(data["hint"])

    def test_warmup(self) -> None:
        data = self.client.get("/warmup", params={"working_weight": 100}).json()
        self.assertEqual([s["percentage"] for s in data], [0, 40, 60, 75, 85])
        self.assertEqual(data[0]["weight"], 20)
        self.assertEqual(data[1]["label"], "40% × 5 reps")
        response = self.client.get("/warmup", params={"working_weight": -1})
        self.assertEqual(response.status_code, 400)

    def test_percentages(self) -> None:
        self.assertEqual(self.client.get("/percentages").json(), [])
        data = self.client.get("/percentages", params={"one_rm": 200}).json()
        self.assertEqual(data[0]["display_weight"], 190)
        self.assertEqual(
            self.client.get("/percentages", params={"one_rm": 0}).status_code, 400
        )

    def test_convert_and_bars(self) -> None:
        data = self.client.get(
            "/convert", params={"weight": 100, "from_unit": "kg", "to_unit": "lb"}
        ).json()
        self.assertAlmostEqual(data["weight"], 220.462262185)
        self.assertEqual(data["display"], 220)
        response = self.client.get(
            "/convert", params={"weight": 100, "from_unit": "kg", "to_unit": "oz"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.get("/bars").json()["bars"], [20, 15, 10])
        self.assertEqual(self.client.get("/bars", params={"unit": "lb"}).json()["bars"], [45, 35, 15])

    def test_non_finite_inputs_rejected(self) -> None:
        self.assertEqual(self.client.put("/state/bar", params={"bar": "inf"}).status_code, 400)
        self.assertEqual(self.client.get("/warmup").status_code, 200)
        self.assertEqual(self.client.get("/plates", params={"target": 100}).status_code, 200)
        self.assertEqual(
            self.client.get("/percentages", params={"one_rm": "inf"}).status_code, 400
        )
        response = self.client.get(
            "/convert", params={"weight": "inf", "from_unit": "kg", "to_unit": "lb"}
        )
        self.assertEqual(response.status_code, 400)
        response = self.client.get(
            "/convert", params={"weight": 1e308, "from_unit": "kg", "to_unit": "lb"}
        )
        self.assertEqual(response.status_code, 400)

    def test_calculate_huge_weight(self) -> None:
        response = self.client.post("/calculate", params={"weight": "1e308", "reps": "5"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/share").status_code, 200)
        self.assertEqual(len(self.client.get("/percentages").json()), 9)

    def test_state_updates(self) -> None:
        data = self.client.put("/state/unit", params={"unit": "lb"}).json()
        self.assertEqual(data["unit"], "lb")
        self.assertEqual(data["plate_config"]["unit"], "lb")
        self.assertEqual(data["plate_config"]["bar"], 45)
        self.assertEqual(
            self.client.put("/state/unit", params={"unit": "st"}).status_code, 400
        )
        data = self.client.put("/state/bar", params={"bar": 35}).json()
        self.assertEqual(data["bar"], 35)
        data = self.client.put("/state/plates/1", params={"available": False}).json()
        self.assertFalse(data["plate_config"]["plates"][1]["available"])
        response = self.client.put("/state/plates/42", params={"available": False})
        self.assertEqual(response.status_code, 404)

        api2 = OneRepMaxAPI(yaml_path=self.yaml_path)
        self.assertEqual(api2.calculator.state.bar, 35)
        self.assertFalse(api2.calculator.state.plate_config.plates[1].available)

    def test_apply_query(self) -> None:
        data = self.client.post("/state/query", params={"w": "120", "r": "abc"}).json()
        self.assertEqual(data["weight"], 120)
        self.assertEqual(data["reps"], 5)
        data = self.client.post("/state/query", params={"query": "?r=3&unit=lb"}).json()
        self.assertEqual(data["reps"], 3)
        self.assertEqual(data["bar"], 20)
        self.assertEqual(data["plate_config"]["plates"][0]["weight"], 55)
        url = self.client.get("/state/url").json()["url"]
        self.assertTrue(url.startswith("/?w=120&r=3&unit=lb"))

    def test_share(self) -> None:
        self.assertEqual(self.client.get("/share").status_code, 400)
        self.client.post("/calculate", params={"weight": "100", "reps": "5"})
        data = self.client.get("/share").json()
        self.assertIn("Estimated 1RM: 116.5 kg", data["text"])
        self.assertTrue(data["url"].startswith("/?w=100"))


if __name__ == "__main__":
    unittest.main()
