"""
Request Configuration - What a Functions request carries.

Bundles the source to run, its arguments, secrets and expected return type,
the same shape the DON request builder and the local simulator consume.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional

from .config.settings import DEFAULT_ARGS, SECRETS, WALLET_PRIVATE_KEY
from .sources import get_source


class Location(Enum):
    INLINE = 0
    REMOTE = 1


class CodeLanguage(Enum):
    PYTHON = 0


RETURN_TYPES = {
    "uint": "uint256",
    "uint256": "uint256",
    "int": "int256",
    "int256": "int256",
    "string": "string",
    "bytes": "Buffer",
    "Buffer": "Buffer",
}


@dataclass
class RequestConfig:
    """A single Functions request."""
    source: str
    args: List[str] = field(default_factory=list)
    secrets: Dict[str, Any] = field(default_factory=dict)
    code_location: Location = Location.INLINE
    code_language: CodeLanguage = CodeLanguage.PYTHON
    per_node_secrets: List[Dict[str, Any]] = field(default_factory=list)
    wallet_private_key: Optional[str] = None
    expected_return_type: str = "Buffer"
    secrets_urls: List[str] = field(default_factory=list)

    def __post_init__(self):
        get_source(self.source)
        if self.expected_return_type not in RETURN_TYPES.values():
            raise ValueError(f"Return type must be one of {sorted(set(RETURN_TYPES.values()))}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialisable view with secrets redacted."""
        return {
            "source": self.source,
            "args": list(self.args),
            "secrets": {key: "***" for key in self.secrets},
            "codeLocation": self.code_location.value,
            "codeLanguage": self.code_language.value,
            "perNodeSecrets": len(self.per_node_secrets),
            "expectedReturnType": self.expected_return_type,
            "secretsURLs": list(self.secrets_urls),
        }


def resolve_return_type(name: str) -> str:
    """
    Map a return type alias (uint, int, bytes, ...) to its canonical name.

    Raises:
        ValueError: For unknown aliases
    """
    if name not in RETURN_TYPES:
        raise ValueError(f"Unknown return type: {name}")
    return RETURN_TYPES[name]


def build_request_config(
    source: str = "work-verification",
    args: Optional[List[str]] = None,
    return_type: str = "bytes",
) -> RequestConfig:
    """
    Build a request config from settings.

    Args:
        source: Source name
        args: Request arguments (defaults to the sample hashes)
        return_type: Return type alias

    Returns:
        RequestConfig
    """
    return RequestConfig(
        source=source,
        args=list(args) if args is not None else list(DEFAULT_ARGS),
        secrets={key: value for key, value in SECRETS.items() if value},
        wallet_private_key=WALLET_PRIVATE_KEY,
        expected_return_type=resolve_return_type(return_type),
    )
