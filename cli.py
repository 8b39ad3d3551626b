import argparse
import logging
import sys
from typing import Optional

from algorithms import WarmupPlanner, WeightConverter
from calculator_service import CalculatorService
from config import APP_VERSION, YamlConfig
from state_service import StateService


def _service(state_path: Optional[str]) -> CalculatorService:
    return CalculatorService(StateService(YamlConfig(state_path)))


def _warmup_lines(sets) -> list[str]:
    lines = []
    for s in sets:
        weight = WeightConverter.format_weight(s.weight)
        lines.append(f"{s.description:<20} {WarmupPlanner.format_set(s):<14} {weight:>6}  {s.plates}")
    return lines


def calculate(state_path: Optional[str], weight: str, reps: str, formulas: Optional[str] = None) -> str:
    service = _service(state_path)
    enabled = [f for f in formulas.split(",") if f] if formulas else None
    payload = service.calculate(weight, reps, enabled)
    result = payload["result"]
    unit = payload["unit"]
    lines = [
        f"Epley:    {result.epley:.1f} {unit}",
        f"Brzycki:  {result.brzycki:.1f} {unit}",
        f"Lombardi: {result.lombardi:.1f} {unit}",
        f"Best 1RM: {WeightConverter.format_weight(payload['display_best'])} {unit}",
    ]
    if payload["warning"]:
        lines.append(f"Note: {payload['warning']}")
    lines.append("")
    for row in payload["percentages"]:
        shown = WeightConverter.format_weight(row.display_weight)
        lines.append(f"{row.percent:>3}%  {shown:>6} {unit}  {row.reps:<9} {row.description}")
    lines.append("")
    lines.extend(_warmup_lines(payload["warmup"]))
    return "\n".join(lines)


def plates(state_path: Optional[str], target: float) -> str:
    service = _service(state_path)
    info = service.plates(target)
    result = info["result"]
    unit = service.state.unit
    lines = [info["hint"] or info["description"]]
    lines.append(f"Total: {WeightConverter.format_weight(result.total)} {unit}")
    if result.remainder > 0:
        lines.append(f"Remainder per side: {WeightConverter.format_weight(result.remainder)} {unit}")
    return "\n".join(lines)


def warmup(state_path: Optional[str], working_weight: Optional[float] = None) -> str:
    service = _service(state_path)
    return "\n".join(_warmup_lines(service.warmup(working_weight)))


def change_unit(state_path: Optional[str], unit: str) -> str:
    service = _service(state_path)
    state = service.change_unit(unit)
    bar = WeightConverter.format_weight(state.bar)
    return f"Unit set to {state.unit} ({bar} {state.unit} bar)"


def share(state_path: Optional[str], path: str = "/") -> str:
    service = _service(state_path)
    return f"{service.share_text()}\n{service.share_url(path)}"


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="One-rep max calculator")
    parser.add_argument("--state", default=None, help="YAML state file")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=APP_VERSION)
    sub = parser.add_subparsers(dest="cmd", required=True)

    calc = sub.add_parser("calculate")
    calc.add_argument("--weight", required=True)
    calc.add_argument("--reps", required=True)
    calc.add_argument("--formulas", default=None, help="comma-separated, e.g. epley,brzycki")

    plt = sub.add_parser("plates")
    plt.add_argument("--target", type=float, required=True)

    warm = sub.add_parser("warmup")
    warm.add_argument("--weight", type=float, default=None)

    unit = sub.add_parser("unit")
    unit.add_argument("unit", choices=["kg", "lb"])

    shr = sub.add_parser("share")
    shr.add_argument("--path", default="/")

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    srv = sub.add_parser("serve")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.cmd == "calculate":
            print(calculate(args.state, args.weight, args.reps, args.formulas))
        elif args.cmd == "plates":
            print(plates(args.state, args.target))
        elif args.cmd == "warmup":
            print(warmup(args.state, args.weight))
        elif args.cmd == "unit":
            print(change_unit(args.state, args.unit))
        elif args.cmd == "share":
            print(share(args.state, args.path))
        elif args.cmd == "convert":
            weight = WeightConverter.format_weight(args.weight)
            if args.unit == "kg":
                lb = WeightConverter.round_for_display(WeightConverter.kg_to_lb(args.weight), "lb")
                print(f"{weight} kg = {WeightConverter.format_weight(lb)} lb")
            else:
                kg = WeightConverter.round_for_display(WeightConverter.lb_to_kg(args.weight), "kg")
                print(f"{weight} lb = {WeightConverter.format_weight(kg)} kg")
        elif args.cmd == "serve":
            import uvicorn
            from rest_api import OneRepMaxAPI

            uvicorn.run(OneRepMaxAPI(args.state).app, host=args.host, port=args.port)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
