#  Copyright 2025 $author, All rights reserved.
import json
import sys
from typing import Optional, TextIO

from scenario_codec.scenario import (TimeUnit, generate_scenario_code, parse_scenario_code, load_steps,
                                     minimum_code_length)

def encode_document(fd: TextIO, time_unit: Optional[str] = None, verbose: bool = False) -> str:
    """
    Encode a JSON document of the form {"timeUnit": "Minutes", "steps": [{"cycleTime": 3, ...}, ...]}.
    """
    document = json.load(fd)
    if not isinstance(document, dict) or not isinstance(document.get("steps", None), list):
        raise Exception("Scenario document needs a list of steps.")
    unit = TimeUnit(time_unit if time_unit is not None else document.get("timeUnit", TimeUnit.SECONDS.value))
    steps = load_steps(document["steps"])
    code = generate_scenario_code(steps, unit)
    if verbose:
        print(f"Encoded {len(steps)} steps in {unit.value} to {len(code)} characters.", file=sys.stderr)
    return code

def decode_code(code: str, indent: Optional[int] = 2, verbose: bool = False) -> Optional[str]:
    scenario = parse_scenario_code(code)
    if scenario is None:
        return None
    if verbose:
        print(f"Decoded {len(scenario.steps)} steps in {scenario.time_unit.value}, "
              f"expected at least {minimum_code_length(len(scenario.steps))} characters.", file=sys.stderr)
    return json.dumps(scenario.to_json(), indent=indent)

def validate_codes(codes: list[str], out: Optional[TextIO] = None) -> int:
    out = sys.stdout if out is None else out
    invalid = 0
    for code in codes:
        valid = parse_scenario_code(code) is not None
        if not valid:
            invalid += 1
        print(f"{code}: {'valid' if valid else 'invalid'}", file=out)
    return invalid

def main(argv: Optional[list[str]] = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(description='Scenario Code Utility')
    parser.add_argument('-v', '--verbose', action='store_true', help='print status lines to stderr')
    subparsers = parser.add_subparsers(dest='mode', required=True)
    encode_parser = subparsers.add_parser('encode', help='encode a JSON scenario document')
    encode_parser.add_argument('input', nargs='?', default='-', help='JSON file, defaults to stdin')
    encode_parser.add_argument('--time-unit', choices=[unit.value for unit in TimeUnit], help='override the document time unit')
    decode_parser = subparsers.add_parser('decode', help='decode a scenario code to JSON')
    decode_parser.add_argument('code', help='scenario code')
    decode_parser.add_argument('--indent', type=int, default=2, help='JSON indentation')
    validate_parser = subparsers.add_parser('validate', help='check scenario codes')
    validate_parser.add_argument('codes', nargs='+', help='scenario codes')
    args = parser.parse_args(argv)

    if args.mode == 'encode':
        try:
            if args.input == '-':
                code = encode_document(sys.stdin, args.time_unit, args.verbose)
            else:
                with open(args.input, "r") as fd:
                    code = encode_document(fd, args.time_unit, args.verbose)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(code)
    elif args.mode == 'decode':
        result = decode_code(args.code, args.indent, args.verbose)
        if result is None:
            print(f"Error: Invalid scenario code '{args.code}'.", file=sys.stderr)
            return 1
        print(result)
    elif args.mode == 'validate':
        return 1 if validate_codes(args.codes) > 0 else 0
    return 0

if __name__ == '__main__':
    sys.exit(main())
