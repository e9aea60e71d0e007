"""Regex patterns for path parsing and route compilation."""

import re

# Pattern matching expressions
slashes_expr = re.compile(r"/+")
edge_slashes_expr = re.compile(r"^/+|/+$")
explicit_expr = re.compile(r"\*+$")
token_expr = re.compile(r"(?P<colon>:)?(?P<body>[^/]+)")

BOUND_SEPARATOR = "->"
DEFAULT_PARAM_PATTERN = r"[^/]+"
OPTIONAL_SLASH = "/?$"
