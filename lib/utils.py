"""
Common utilities for Gromozeka map cache.
"""

import datetime
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def getAgeInYears(birthDate: datetime.date, today: Optional[datetime.date] = None) -> int:
    """
    Get age in years as difference of calendar years, dood!

    Day and month are ignored: someone born on 1995-12-31 is 1 year old
    on 1996-01-01.

    Args:
        birthDate: Date (or datetime) of birth
        today: Date to compute age at (default: current date)

    Returns:
        Age in years, negative if birthDate is in the future
    """
    if today is None:
        today = datetime.date.today()
    return today.year - birthDate.year


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # If indent is passed, then user want pretty-printed JSON,
        #  no need to use compact separators
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Just read file line by line and put key-value pairs into dictionary.

    Args:
        path: Path to .env file (default ".env"), missing file is skipped
        populateEnv: Whether to populate environment variables (default True)

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    if not os.path.exists(path):
        logger.debug(f"No dotenv file at {path}, skipping")
        return ret

    with open(path, "rt") as f:
        for line in f:
            splitted_line = line.split("=")
            if len(splitted_line) == 2:
                key, value = splitted_line
                ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    return ret
