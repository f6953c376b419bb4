#!/usr/bin/env python3
"""
Command line export of the clips used in a Premiere project to CSV.
"""
import argparse
import logging
import os
import sys

from components.errors import ConfigurationError, ExtractionError
from components.extractor import extract_project
from components.logger import LogCapture, get_logger, setup_logging
from components.table_processor import occurrences_to_csv, records_to_csv
from components.xml_parser import TIME_UNITS, XMLProjectParser, load_project_file

logger = get_logger()

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Export the clips of a Premiere .prproj/XML project to CSV')
    parser.add_argument('--input', '-i', required=True, help='path to a .prproj (gzipped or unzipped) or XML export')
    parser.add_argument('--out', '-o', required=False, help='output CSV file path (optional). If omitted, <project>_clips.csv is written next to the input file')
    parser.add_argument('--fps', type=int, required=False, help='frame rate of the timeline (default 25)')
    parser.add_argument('--time-unit', choices=TIME_UNITS, required=False, help='unit of timeline values (detected from the file by default)')
    parser.add_argument('--no-nested', action='store_true', help='do not flatten nested sequences into their parents')
    parser.add_argument('--sort', action='store_true', help='order clips by their first timecode instead of first appearance')
    parser.add_argument('--per-instance', action='store_true', help='write one CSV row per clip instance (track, name, in, out) instead of one row per clip')
    parser.add_argument('--list-sequences', action='store_true', help='list named sequences and exit')
    parser.add_argument('--debug', action='store_true', help='print the extraction debug log')
    parser.add_argument('--debug-log', required=False, help='path to write debug log (optional)')
    return parser

def default_out_path(input_path: str, per_instance: bool = False) -> str:
    input_base = os.path.splitext(os.path.basename(input_path))[0]
    input_dir = os.path.dirname(os.path.abspath(input_path)) or os.getcwd()
    suffix = 'clip_instances' if per_instance else 'clips'
    return os.path.join(input_dir, f"{input_base}_{suffix}.csv")

def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.debug_log)

    path = args.input
    if not os.path.exists(path):
        logger.error(f"Input file not found: {path}")
        return 2

    xml_content = load_project_file(path)

    try:
        if args.list_sequences:
            project = XMLProjectParser().parse(xml_content)
            print('Found sequences:')
            for name in XMLProjectParser().list_named_sequences(project.root):
                print(' -', name)
            return 0

        with LogCapture(level=logging.DEBUG) as log_stream:
            records, occurrences = extract_project(
                xml_content,
                frame_rate=args.fps,
                time_unit=args.time_unit,
                expand_nested=not args.no_nested,
                sort=args.sort,
            )
    except (ExtractionError, ConfigurationError) as e:
        logger.error(str(e))
        return 1

    skipped = [line for line in log_stream.getvalue().splitlines() if line.startswith('WARNING')]
    if skipped:
        logger.info(f"{len(skipped)} clip instances could not be resolved (run with --debug for details)")

    out_path = args.out or default_out_path(path, args.per_instance)
    with open(out_path, 'w', encoding='utf-8', newline='') as f:
        if args.per_instance:
            f.write(occurrences_to_csv(occurrences))
        else:
            f.write(records_to_csv(records))

    if args.per_instance:
        print(f'Wrote {len(occurrences)} clip instances to {out_path}')
    else:
        print(f'Wrote {len(records)} clips to {out_path}')
    return 0

if __name__ == '__main__':
    sys.exit(main())
