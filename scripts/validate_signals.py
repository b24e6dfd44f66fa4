#!/usr/bin/env python3
"""
Validate a signal database file before shipping it.

Checks every record against the SignalRecord schema, reports duplicate ids and
shows how the classifier will route each record (bucket, aggression override,
play-bow override).

Usage:
    python scripts/validate_signals.py pawsignal/signals/data/signals.json
    python scripts/validate_signals.py my_signals.json --verbose
"""

import sys
import json
import argparse
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError

from pawsignal.engine.classifier import route_signal
from pawsignal.engine.detectors import is_aggression_signal, is_play_bow_signal
from pawsignal.engine.matcher import game_bonus
from pawsignal.signals.schema import MatchedSignal, SignalRecord


def validate_signal_file(file_path):
    """
    Validate a signal database file.

    Returns:
        (total entries, valid records, error list)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        return 0, [], [f"File not found: {file_path}"]

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        return 0, [], [f"Invalid JSON - {e}"]
    except UnicodeDecodeError as e:
        return 0, [], [f"File is not UTF-8 - {e}"]

    if isinstance(payload, dict) and "signals" in payload:
        payload = payload["signals"]
    if not isinstance(payload, list):
        return 0, [], [f"Expected a list of records, got {type(payload).__name__}"]

    records = []
    errors = []
    seen_ids = {}

    for idx, entry in enumerate(payload):
        try:
            record = SignalRecord.model_validate(entry)
        except ValidationError as e:
            for err in e.errors():
                loc = ".".join(str(p) for p in err["loc"])
                errors.append(f"Entry {idx}: {loc}: {err['msg']}")
            continue

        if record.id in seen_ids:
            errors.append(f"Entry {idx}: duplicate id {record.id} (first seen at entry {seen_ids[record.id]})")
            continue

        seen_ids[record.id] = idx
        records.append(record)

    return len(payload), records, errors


def routing_summary(records):
    """Bucket each record would land in when matched on its own."""
    routes = Counter()
    aggression = []
    play_bows = []
    for record in records:
        signal = MatchedSignal.from_record(record, record.intensity, game_bonus(record))
        routes[route_signal(signal, has_play_signals=False).value] += 1
        if is_aggression_signal(record):
            aggression.append(record)
        if is_play_bow_signal(record):
            play_bows.append(record)
    return routes, aggression, play_bows


def main():
    parser = argparse.ArgumentParser(
        description="Validate a signal database file",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'file',
        type=str,
        help='Signal database JSON file'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show every error and the routing of each override record'
    )

    args = parser.parse_args()

    print(f"Validating: {args.file}")
    print("=" * 80)

    total, records, errors = validate_signal_file(args.file)

    if total == 0:
        print("No records found or file error")
        if errors:
            print(f"\nError: {errors[0]}")
        return 1

    print(f"Total entries: {total}")
    print(f"Valid records: {len(records)}")
    print(f"Invalid entries: {total - len(records)}")

    routes, aggression, play_bows = routing_summary(records)
    print("\nBucket routing:")
    for emotion, count in routes.most_common():
        print(f"  {emotion:<12} {count}")
    print(f"\nAggression-override records: {len(aggression)}")
    print(f"Play-bow-override records:   {len(play_bows)}")

    if args.verbose:
        for record in aggression:
            print(f"  [aggression] {record.id}: {record.label}")
        for record in play_bows:
            print(f"  [play-bow]   {record.id}: {record.label}")

    if errors:
        print(f"\nFound {len(errors)} error(s):")
        if args.verbose:
            for error in errors:
                print(f"  - {error}")
        else:
            for error in errors[:10]:
                print(f"  - {error}")
            if len(errors) > 10:
                print(f"  ... and {len(errors) - 10} more (use --verbose to see all)")
        return 1

    print("\nAll records are valid")
    return 0


if __name__ == '__main__':
    sys.exit(main())
