import argparse
import logging
import os
import shutil
import subprocess
import sys
from datetime import date, datetime
from typing import List, Optional, Sequence

from pluginpack.collect_files import MissingFileError, collect_files
from pluginpack.config import ConfigError, PackConfig, load_config
from pluginpack.manifest import ManifestError, read_version

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


def format_date(day: date) -> str:
    return day.strftime("%Y%m%d")


def archive_name(plugin_id: str, version: str, day: date) -> str:
    """Build ``<plugin-id>-<version>-<YYYYMMDD>.zip``."""
    return f"{plugin_id}-{version}-{format_date(day)}.zip"


def check_zip_installed() -> bool:
    """Check if zip is installed and available in the PATH."""
    return shutil.which("zip") is not None


def build_zip_command(zip_path: str, files: Sequence[str]) -> List[str]:
    # -j: junk paths, store every file at the root of the archive
    return ["zip", "-j", zip_path, *files]


def package_plugin(project_dir: str, config: PackConfig, today: Optional[date] = None) -> Optional[str]:
    """
    Package the plugin files in project_dir into a dated, versioned zip.

    Returns the archive path, or None if any step failed.
    """
    project_dir = os.path.abspath(project_dir)
    logger.info("Starting plugin packaging process...")

    # 1. Version from manifest
    try:
        version = read_version(os.path.join(project_dir, MANIFEST_NAME))
    except ManifestError as e:
        logger.error(f"Error: {e}")
        return None
    logger.info(f"Plugin version: {version}")

    # 2. Date and archive name
    if today is None:
        today = date.today()
    logger.info(f"Current date: {format_date(today)}")

    zip_name = archive_name(config.plugin_id, version, today)
    logger.info(f"Output zip filename: {zip_name}")

    # 3. Output directory
    output_dir = os.path.join(project_dir, config.output_dir)
    output_dir = os.path.normpath(output_dir)
    if not os.path.isdir(output_dir):
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            logger.error(f"Error: could not create output directory {output_dir}: {e}")
            return None
        logger.info(f"Created output directory: {output_dir}")
    zip_path = os.path.join(output_dir, zip_name)

    # 4. Files
    try:
        files = collect_files(project_dir, config.files, config.optional_files)
    except MissingFileError as e:
        logger.error(f"Error: {e}")
        return None

    if not files:
        logger.error("No files found to zip. Aborting.")
        return None

    # 5. Archive
    if not check_zip_installed():
        logger.error("zip is not installed. Please install zip to use this tool.")
        return None

    # zip writes to a temporary name; the archive is replaced only on success
    partial_path = zip_path + ".partial"
    if os.path.exists(partial_path):
        os.remove(partial_path)

    cmd = build_zip_command(partial_path, files)
    logger.info(f"Executing: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, cwd=project_dir)
    except OSError as e:
        logger.error(f"Error creating zip file: {e}")
        return None

    if result.returncode != 0:
        logger.error(f"Error creating zip file: zip exited with status {result.returncode}")
        if os.path.exists(partial_path):
            os.remove(partial_path)
        return None

    if os.path.exists(zip_path):
        logger.info(f"Replacing existing archive: {zip_path}")
    try:
        os.replace(partial_path, zip_path)
    except OSError as e:
        logger.error(f"Error creating zip file: {e}")
        return None

    logger.info(f"Successfully created zip file: {zip_path}")
    return zip_path


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYYMMDD")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Package a plugin into a dated, versioned zip archive.")
    parser.add_argument("--project-dir", "-p", default=".", help="Plugin project directory (default: current directory)")
    parser.add_argument("--config", "-c", help="Path to a YAML config file (default: pluginpack.yaml if present)")
    parser.add_argument("--plugin-id", help="Plugin identifier used in the archive name")
    parser.add_argument("--output", "-o", help="Output directory for archives")
    parser.add_argument("--date", type=parse_date, help="Run date as YYYYMMDD (default: today)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.project_dir, args.config)
    except ConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    if args.plugin_id:
        config.plugin_id = args.plugin_id
    if args.output:
        config.output_dir = args.output

    if not package_plugin(args.project_dir, config, today=args.date):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
