import os
import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)


class MissingFileError(Exception):
    """A required plugin file does not exist."""

    def __init__(self, name: str, project_dir: str):
        super().__init__(f'Required file "{name}" not found in {project_dir}. Aborting.')
        self.name = name
        self.project_dir = project_dir


def collect_files(project_dir: str, required: Sequence[str], optional: Sequence[str]) -> List[str]:
    """
    Collect the files to archive, relative to project_dir.

    Required files come first, then whichever optional files exist.
    Stops at the first missing required file.
    """
    collected = []

    for name in required:
        if not os.path.isfile(os.path.join(project_dir, name)):
            raise MissingFileError(name, project_dir)
        collected.append(name)

    for name in optional:
        if os.path.isfile(os.path.join(project_dir, name)):
            collected.append(name)
        else:
            logger.info(f'Optional file "{name}" not found in {project_dir}. Skipping.')

    return collected
