"""
Command-line interface for spoke length calculation.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from ..app import SpokeCalculatorApp
from ..calculator import parse_inputs, to_markdown, to_summary
from ..constants import (
    CROSSINGS_LEFT,
    CROSSINGS_RIGHT,
    DEFAULT_STORAGE_PATH,
    ERD,
    FLANGE_DISTANCE_LEFT,
    FLANGE_DISTANCE_RIGHT,
    NUMBER_OF_SPOKES,
    PITCH_CIRCLE_LEFT,
    PITCH_CIRCLE_RIGHT,
    SPOKE_HOLE_DIAMETER,
)
from ..enums import NoticeLevel
from ..errors import FormatError
from ..io import JsonFileStore, export_document

logger = logging.getLogger(__name__)

# CLI option dest -> form field
_INPUT_OPTIONS: Dict[str, str] = {
    "erd": ERD,
    "pcd_left": PITCH_CIRCLE_LEFT,
    "pcd_right": PITCH_CIRCLE_RIGHT,
    "flange_left": FLANGE_DISTANCE_LEFT,
    "flange_right": FLANGE_DISTANCE_RIGHT,
    "spoke_hole": SPOKE_HOLE_DIAMETER,
    "spokes": NUMBER_OF_SPOKES,
    "cross_left": CROSSINGS_LEFT,
    "cross_right": CROSSINGS_RIGHT,
}


def _cli_notifier(message: str, level: NoticeLevel) -> None:
    # stdout is reserved for results (e.g. --json output)
    marker = {
        NoticeLevel.SUCCESS: "✓",
        NoticeLevel.INFO: "ℹ",
        NoticeLevel.WARNING: "⚠️ ",
        NoticeLevel.ERROR: "❌",
    }[level]
    print(f"{marker} {message}", file=sys.stderr)


def _confirm_on_terminal(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spokecalc",
        description="Calculate bicycle spoke lengths from hub and rim geometry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 32-spoke 3-cross wheel, same hub geometry both sides
  spokecalc calculate --erd 590 --pcd 45 --flange 35 --spoke-hole 2.6 --spokes 32 --cross 3

  # Rear wheel with asymmetric flanges
  spokecalc calculate --erd 560 --pcd 45 --flange-left 33 --flange-right 21

  # Start from a bundled preset and change the lacing
  spokecalc calculate --preset road-front-28h-2x --cross 3

  # Re-run an exported calculation and save it under a name
  spokecalc calculate --import spoke-calculation.json --save "Front wheel"

  # Export the calculation document
  spokecalc calculate --erd 590 --pcd 45 --flange 35 --export front.json

  # Manage saved calculations
  spokecalc saved list
  spokecalc saved delete 1717171717171
        """
    )

    parser.add_argument(
        '--storage',
        type=str,
        default=DEFAULT_STORAGE_PATH,
        help=f'Storage file for saved calculations (default: {DEFAULT_STORAGE_PATH})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    calc = subparsers.add_parser('calculate', help='Calculate left/right spoke lengths')
    calc.add_argument('--erd', type=str, help='Effective rim diameter in mm')
    calc.add_argument('--pcd', type=str, help='Pitch circle diameter in mm, both flanges')
    calc.add_argument('--pcd-left', type=str, help='Left flange pitch circle diameter in mm')
    calc.add_argument('--pcd-right', type=str, help='Right flange pitch circle diameter in mm')
    calc.add_argument('--flange', type=str, help='Flange distance from centre in mm, both sides')
    calc.add_argument('--flange-left', type=str, help='Left flange distance from centre in mm')
    calc.add_argument('--flange-right', type=str, help='Right flange distance from centre in mm')
    calc.add_argument('--spoke-hole', type=str, help='Hub spoke hole diameter in mm (default: 2.6)')
    calc.add_argument('--spokes', type=str, help='Number of spokes (default: 32)')
    calc.add_argument('--cross', type=str, help='Crossings, both sides (default: 3; 0 = radial)')
    calc.add_argument('--cross-left', type=str, help='Left side crossings')
    calc.add_argument('--cross-right', type=str, help='Right side crossings')
    calc.add_argument('--preset', type=str, default=None, help='Start from a bundled preset (see: spokecalc presets)')
    calc.add_argument('--import', dest='import_file', type=str, default=None, help='Start from an exported JSON document')
    calc.add_argument('--export', type=str, default=None, help='Write the export document to this file or directory')
    calc.add_argument('--save', type=str, default=None, metavar='NAME', help='Save the calculation under NAME')
    calc.add_argument('--json', action='store_true', help='Print the export document instead of a summary')
    calc.add_argument('--markdown', action='store_true', help='Print a Markdown report with intermediate values')

    subparsers.add_parser('presets', help='List bundled presets')

    saved = subparsers.add_parser('saved', help='Manage saved calculations')
    saved_commands = saved.add_subparsers(dest='saved_command')
    saved_commands.required = True
    saved_commands.add_parser('list', help='List saved calculations')
    show = saved_commands.add_parser('show', help='Print a saved calculation as an export document')
    show.add_argument('id', type=int)
    delete = saved_commands.add_parser('delete', help='Delete a saved calculation')
    delete.add_argument('id', type=int)
    delete.add_argument('-y', '--yes', action='store_true', help='Do not ask for confirmation')

    return parser


def _collect_inputs(args: argparse.Namespace) -> Dict[str, str]:
    """Form field values given on the command line; per-side options win over both-side ones."""
    values: Dict[str, str] = {}
    for both, left, right in (
        (args.pcd, 'pcd_left', 'pcd_right'),
        (args.flange, 'flange_left', 'flange_right'),
        (args.cross, 'cross_left', 'cross_right'),
    ):
        if both is not None:
            values[_INPUT_OPTIONS[left]] = both
            values[_INPUT_OPTIONS[right]] = both

    for dest, field in _INPUT_OPTIONS.items():
        value = getattr(args, dest)
        if value is not None:
            values[field] = value
    return values


def _run_calculate(app: SpokeCalculatorApp, args: argparse.Namespace) -> int:
    if args.preset and not app.load_preset(args.preset):
        print(f"Error: unknown preset '{args.preset}'", file=sys.stderr)
        return 1

    if args.import_file and not app.import_file(args.import_file):
        return 1

    app.apply_inputs(_collect_inputs(args))

    results = app.calculate()
    if results is None:
        return 1

    state = app.state
    if args.json:
        print(json.dumps(export_document(state.inputs, results), indent=2))
    elif args.markdown:
        print(to_markdown(parse_inputs(state.inputs), results, state.validation))
    else:
        print(to_summary(results))
        if state.validation:
            for msg in state.validation.messages:
                print(f"  [{msg.severity.value}] {msg.message}")

    if args.export and app.export_to_file(args.export) is None:
        return 1

    if args.save is not None and app.save(args.save) is None:
        return 1

    return 0


def _run_presets(app: SpokeCalculatorApp) -> int:
    for preset in app.presets:
        category = f" [{preset.category}]" if preset.category else ""
        print(f"{preset.id}: {preset.name}{category} - {to_summary(preset.results)}")
        if preset.description:
            print(f"    {preset.description}")
    return 0 if not app.presets.skipped else 1


def _run_saved(app: SpokeCalculatorApp, args: argparse.Namespace) -> int:
    if args.saved_command == 'list':
        if not app.state.saved:
            print("No saved calculations")
        for calc in app.state.saved:
            print(f"{calc.id}  {calc.timestamp}  {to_summary(calc.results, calc.name)}")
        return 0

    if args.saved_command == 'show':
        calc = app.store.get(args.id)
        if calc is None:
            print(f"Error: no saved calculation with id {args.id}", file=sys.stderr)
            return 1
        print(json.dumps(export_document(calc.inputs, calc.results), indent=2))
        return 0

    if args.saved_command == 'delete':
        if app.store.get(args.id) is None:
            print(f"Error: no saved calculation with id {args.id}", file=sys.stderr)
            return 1
        if not args.yes:
            app.confirm = _confirm_on_terminal
        return 0 if app.delete(args.id) else 1

    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        app = SpokeCalculatorApp(
            storage=JsonFileStore(args.storage),
            notifier=_cli_notifier,
        )
    except FormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == 'calculate':
        return _run_calculate(app, args)
    if args.command == 'presets':
        return _run_presets(app)
    if args.command == 'saved':
        return _run_saved(app, args)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
