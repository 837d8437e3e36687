"""Environment loading and settings for token-ramp.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  TOKEN_RAMP_COLLECTION      name for newly created collections ('Color Variables')
  TOKEN_RAMP_OPACITY_POLICY  'reuse' (default) or 'boosted'
  TOKEN_RAMP_LOG_LEVEL       logging level name (WARNING)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from token_ramp.core.types import OpacityPolicy

ENV_PREFIX = 'TOKEN_RAMP_'
DEFAULT_COLLECTION_NAME = 'Color Variables'
DEFAULT_MODE_NAME = 'Mode 1'


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a .git boundary."""
    here = start.resolve()
    for directory in (here, *here.parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        if (directory / '.git').exists():
            break
    return None


def _dotenv_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if line.startswith('export '):
        line = line[len('export ') :]
    key, sep, value = line.partition('=')
    key = key.strip()
    if line.startswith('#') or not sep or not key:
        return None
    return key, value.strip().strip('"').strip("'")


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes around values are dropped, comments skipped."""
    pairs = (_dotenv_line(line) for line in path.read_text(encoding='utf-8').splitlines())
    return dict(pair for pair in pairs if pair is not None)


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env entries into os.environ where the key is not set yet.

    The file is env_file when given (None if it does not exist), else the
    nearest .env found walking up from the working directory.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def parse_policy(value: str) -> OpacityPolicy:
    try:
        return OpacityPolicy(value.strip().lower())
    except ValueError:
        allowed = ', '.join(p.value for p in OpacityPolicy)
        raise ValueError(f'Unknown opacity policy {value!r}. Allowed: {allowed}') from None


@dataclass(frozen=True)
class Settings:
    collection_name: str = DEFAULT_COLLECTION_NAME
    opacity_policy: OpacityPolicy = OpacityPolicy.REUSE_KEY
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls) -> 'Settings':
        level_name = os.environ.get(f'{ENV_PREFIX}LOG_LEVEL', 'WARNING').upper()
        level = logging.getLevelName(level_name)
        return cls(
            collection_name=os.environ.get(f'{ENV_PREFIX}COLLECTION') or DEFAULT_COLLECTION_NAME,
            opacity_policy=parse_policy(os.environ.get(f'{ENV_PREFIX}OPACITY_POLICY') or 'reuse'),
            log_level=level if isinstance(level, int) else logging.WARNING,
        )
