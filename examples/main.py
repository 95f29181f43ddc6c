#!/usr/bin/env python3
"""
Example script demonstrating basic usage of the jsonl-tools library.

Run from the project root after installing the package:
    python examples/main.py data/events.jsonl
"""

from jsonl_tools import FileJsonlReader, JsonlData, RecordIndexError
from jsonl_tools import report
import sys

def main():
    file_path = "data/events.jsonl"
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    print(f"Loading {file_path}...")
    data = JsonlData(FileJsonlReader(file_path))

    print(f"{len(data)} records, {len(data.keys_seen)} unique key paths")
    report.show_top_key_combinations_report(data, 3)

    # Inspect the first record that drifts from the dataset schema
    if data.rows_with_missing_keys:
        report.show_record(data, data.rows_with_missing_keys[0])

    # Patch a record and see the analysis follow
    try:
        data.replace_record(0, {"id": 0, "patched": True})
    except RecordIndexError as e:
        print(f"Could not replace record: {e}")
    else:
        print(f"After replace: {len(data.keys_seen)} unique key paths")

    # Frequency table as a DataFrame (requires pandas)
    df = data.key_frequency_frame()
    if df is not None:
        print(df.head())


if __name__ == '__main__':
    main()
