from jsonl_tools import FileJsonlReader, JsonlData
from jsonl_tools import report
from jsonl_tools.log import configure_logging
import sys

def main():
    file_path = "data/test.jsonl"
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    configure_logging()
    print(f"Loading {file_path}...")
    data = JsonlData(FileJsonlReader(file_path, show_progress=True))

    report.show_keys_found_report(data)
    report.show_keys_frequencies_report(data)
    report.show_top_key_combinations_report(data, 5)

    # Example of showing a specific record
    # report.show_record(data, 10)


if __name__ == '__main__':
    main()
