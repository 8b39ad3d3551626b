import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import PlateCalculator, TrainingPercentages, WarmupPlanner
from schemas import BarbellConfig


class WarmupPlannerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.kg = PlateCalculator.default_config("kg")

    def test_stages(self) -> None:
        sets = WarmupPlanner.plan(100, "kg", self.kg)
        self.assertEqual(len(sets), 5)
        self.assertEqual([s.percentage for s in sets], [0, 40, 60, 75, 85])
        self.assertEqual([s.reps for s in sets], [8, 5, 3, 2, 1])
        self.assertEqual([s.weight for s in sets], [20, 40, 60, 75, 85])
        self.assertEqual(sets[0].plates, "Bar only")
        self.assertEqual(sets[0].description, "Empty bar")

    def test_plate_text(self) -> None:
        sets = WarmupPlanner.plan(100, "kg", self.kg)
        self.assertEqual(sets[1].plates, "20 bar + 10 kg per side")
        self.assertEqual(sets[3].plates, "20 bar + 25 kg + 2.5 kg per side")
        self.assertEqual(sets[4].plates, "20 bar + 25 kg + 5 kg + 2.5 kg per side")

    def test_weights_rounded_to_whole_units(self) -> None:
        sets = WarmupPlanner.plan(116.6667, "kg", self.kg)
        self.assertEqual([s.weight for s in sets[1:]], [47, 70, 88, 99])

    def test_light_working_weight_is_bar_only(self) -> None:
        sets = WarmupPlanner.plan(40, "kg", self.kg)
        # 40% of 40 is 16, below the bar
        self.assertEqual(sets[1].weight, 16)
        self.assertEqual(sets[1].plates, "20 kg bar")

    def test_bar_stage_uses_config_bar(self) -> None:
        config = BarbellConfig(unit="lb", bar=35, plates=[])
        sets = WarmupPlanner.plan(225, "lb", config)
        self.assertEqual(sets[0].weight, 35)
        self.assertEqual(sets[4].plates, "35 lb bar")

    def test_regenerated_each_call(self) -> None:
        first = WarmupPlanner.plan(100, "kg", self.kg)
        second = WarmupPlanner.plan(100, "kg", self.kg)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_format_set(self) -> None:
        sets = WarmupPlanner.plan(100, "kg", self.kg)
        self.assertEqual(WarmupPlanner.format_set(sets[0]), "8 reps")
        self.assertEqual(WarmupPlanner.format_set(sets[1]), "40% × 5 reps")


class TrainingPercentagesTestCase(unittest.TestCase):
    def test_table(self) -> None:
        rows = TrainingPercentages.table(117.3, "kg")
        self.assertEqual([r.percent for r in rows], [95, 90, 85, 80, 75, 70, 65, 60, 50])
        self.assertAlmostEqual(rows[0].weight, 111.435)
        self.assertEqual(rows[0].display_weight, 111.5)
        self.assertEqual(rows[-1].reps, "Technique")

    def test_table_lb(self) -> None:
        rows = TrainingPercentages.table(301, "lb")
        self.assertEqual(rows[-1].display_weight, 151.0)

    def test_share_lines(self) -> None:
        lines = TrainingPercentages.share_lines(100, "kg")
        self.assertEqual(
            lines,
            [
                "80%: 80 kg (3-5 reps)",
                "85%: 85 kg (2-3 reps)",
                "90%: 90 kg (1-2 reps)",
                "95%: 95 kg (1 rep)",
            ],
        )


if __name__ == "__main__":
    unittest.main()
