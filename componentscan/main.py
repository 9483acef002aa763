import argparse
import json
import logging
import os
import shutil
import sys
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pathspec
from tqdm import tqdm

from componentscan.extractors.react_extractor import analyze_file
from componentscan.registry.extractor_registry import get_extractor

logger = logging.getLogger(__name__)

EXT_MAP = {
    "typescript": [".ts", ".tsx", ".mts", ".cts"],
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
}

INVERSE_EXTS = {ext: lang for lang, exts in EXT_MAP.items() for ext in exts}

SKIP_DIRS = {"node_modules", ".git"}


def _process_single_file_worker(args):
    code_path, language_str, root_dir_path, output_base_path = args
    try:
        extractor_instance = get_extractor(language_str)
        extractor_instance.process_file(str(code_path))
        rel_path = os.path.relpath(code_path, root_dir_path)
        out_path = os.path.join(output_base_path, rel_path + ".json")
        extractor_instance.write_to_file(out_path)
        return len(extractor_instance.extract_all_components())
    except Exception:
        logger.exception("Unable to process %s, skipping it", code_path)
        return 0


def collect_source_files(root_dir):
    root_dir = Path(root_dir)
    language_file_map = defaultdict(list)
    gitignore_pth = root_dir / ".gitignore"
    gitign_pattern = gitignore_pth.read_text().splitlines() if gitignore_pth.exists() else []
    spec = pathspec.PathSpec.from_lines("gitwildmatch", gitign_pattern)

    for file_path in sorted(root_dir.rglob("*")):
        rel = file_path.relative_to(root_dir)
        if SKIP_DIRS.intersection(rel.parts) or not file_path.is_file():
            continue
        if not spec.match_file(str(rel)):
            language = INVERSE_EXTS.get(file_path.suffix)
            if language:
                language_file_map[language].append(file_path)
    return language_file_map


def create_component_data(root_dir, output_base: str = "./output/components", clear_existing: bool = True):
    language_file_map = collect_source_files(root_dir)

    if os.path.isdir(output_base) and clear_existing:
        shutil.rmtree(output_base, ignore_errors=True)
    os.makedirs(output_base, exist_ok=True)

    total_records = 0
    for language, files in language_file_map.items():
        tasks_args = [(code_path, language, root_dir, output_base) for code_path in files]
        with ThreadPoolExecutor(max_workers=min(32, (os.cpu_count() or 1) + 4)) as executor:
            results = executor.map(_process_single_file_worker, tasks_args)
            for count in tqdm(results, total=len(tasks_args), desc=f"Analyzing {language} files"):
                total_records += count

    print(f"Done! {total_records} records from {sum(len(v) for v in language_file_map.values())} files in: {output_base}")
    return total_records


def analyze_files(file_paths, output_path=None):
    results = {os.path.abspath(p): analyze_file(p).to_dict() for p in file_paths}
    payload = next(iter(results.values())) if len(results) == 1 else results
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_path:
        out_dir = os.path.dirname(output_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {output_path}")
    else:
        print(text)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inventory exported components and functions of JS/TS files")
    parser.add_argument("--log-level", default=os.environ.get("COMPONENTSCAN_LOG_LEVEL", "WARNING"),
                        help="Logging level for analysis diagnostics (default: WARNING)")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    parser_analyze = subparsers.add_parser("analyze", help="Analyze one or more source files")
    parser_analyze.add_argument("files", nargs="+", help="Source files to analyze")
    parser_analyze.add_argument("--output", default=None, help="Write JSON here instead of stdout")

    parser_scan = subparsers.add_parser("scan", help="Analyze every JS/TS file under a directory")
    parser_scan.add_argument("root_dir", help="Root directory to scan for source files")
    parser_scan.add_argument("--output_base", default="./output/components",
                             help="Output base directory (default: ./output/components)")
    parser_scan.add_argument("--no_clear", action="store_true",
                             help="Do not clear the existing output directory")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if not args.function:
        parser.print_help()
        return

    try:
        if args.function == "analyze":
            analyze_files(args.files, args.output)
        elif args.function == "scan":
            clear_existing = not args.no_clear
            print(f"Scanning components under: {args.root_dir}")
            print(f"Output base: {args.output_base}")
            print(f"Clear existing: {clear_existing}")
            create_component_data(args.root_dir, output_base=args.output_base, clear_existing=clear_existing)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
