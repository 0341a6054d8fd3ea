"""ACL policy parser package root.

``parse`` turns a policy file into a ``PolicyDocument`` plus diagnostics;
``load_policy`` does the same but raises ``PolicyParseError`` on errors.
"""

__version__ = "0.1.0"

from acl_policy.config_loader import ParserSettings, load_parser_settings  # noqa: F401
from acl_policy.decoder import load_policy, parse  # noqa: F401
from acl_policy.exceptions import (  # noqa: F401
    ConfigLoadError,
    PolicyError,
    PolicyParseError,
    PolicySyntaxError,
)
from acl_policy.printer import format_policy  # noqa: F401
from acl_policy.schemas import *  # noqa: F401,F403
from acl_policy.schemas import __all__ as SCHEMA_EXPORTS

__all__ = [
    "__version__",
    "parse",
    "load_policy",
    "format_policy",
    "ParserSettings",
    "load_parser_settings",
    "ConfigLoadError",
    "PolicyError",
    "PolicyParseError",
    "PolicySyntaxError",
] + SCHEMA_EXPORTS
