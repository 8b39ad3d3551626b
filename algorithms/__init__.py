from .math_tools import MathTools
from .weight_converter import WeightConverter
from .plate_calculator import PlateCalculator
from .warmup_planner import WarmupPlanner
from .training_percentages import TrainingPercentages

__all__ = [
    "MathTools",
    "WeightConverter",
    "PlateCalculator",
    "WarmupPlanner",
    "TrainingPercentages",
]
