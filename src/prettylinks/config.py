import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env from the working directory if present
load_dotenv()

# Rule files
DEFAULT_RULES_FILENAME = ".prettylinks.yaml"
RULES_FILENAMES = (DEFAULT_RULES_FILENAME, ".prettylinks.yml", ".prettylinks.json")
RULES_ENV_VAR = "PRETTYLINKS_RULES"

# Documents
MARKDOWN_GLOB = "**/*.md"
ENCODING = "utf-8"


def find_rules_file(start: Optional[Path] = None) -> Path:
    """
    Locate the rule file to use.

    Resolution order:
    1. Environment variable PRETTYLINKS_RULES
    2. First .prettylinks.{yaml,yml,json} found walking up from start
    3. .prettylinks.yaml in start (created on first save)
    """
    env_path = os.environ.get(RULES_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    if start is None:
        start = Path.cwd()
    start = start.resolve()
    if start.is_file():
        start = start.parent

    current = start
    while True:
        for name in RULES_FILENAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current == current.parent:
            break
        current = current.parent

    return start / DEFAULT_RULES_FILENAME
