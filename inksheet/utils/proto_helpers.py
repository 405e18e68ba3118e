import uuid
from typing import Optional

# item kind -> pid prefix
KIND_PREFIXES = {
    "image": "ie",
    "text": "te",
    "symbol": "ve",
}
PREFIX_KINDS = {v: k for k, v in KIND_PREFIXES.items()}


def issue_pid(prefix: str) -> str:
    """Return a fresh pid of the form ``prefix_uuid4``."""
    if not prefix or "_" in prefix:
        raise ValueError(f"Invalid pid prefix: {prefix!r}")
    return f"{prefix}_{uuid.uuid4()}"


def get_prefix(pid: Optional[str]) -> Optional[str]:
    if not isinstance(pid, str) or "_" not in pid:
        return None
    return pid.split("_", 1)[0]


def kind_of(pid: Optional[str]) -> Optional[str]:
    return PREFIX_KINDS.get(get_prefix(pid))
