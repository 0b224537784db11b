from typing import Dict, Set

# Server-generated fields that differ on every run
VOLATILE_KEYS = {"id", "created_at", "updated_at"}


def exclude_keys(data: Dict, keys: Set[str] = VOLATILE_KEYS) -> Dict:
    return {k: v for k, v in data.items() if k not in keys}
