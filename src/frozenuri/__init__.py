__version__ = "0.1"

import logging

from .components import ABSENT, EMPTY, Components, Presence
from .errors import ComponentError, GrammarViolation, InvalidUri, MalformedEncoding, NonAbsoluteBase, SchemePolicyError, URIError
from .grammar import is_pchar, is_sub_delim, is_unreserved, normalize_percent_encodings, percent_decode, percent_encode
from .hooks import DEFAULT_PORTS, DefaultPortElision, HostRequired, SchemeHook, SchemeHooks, default_hooks
from .normalize import normalize, remove_dot_segments
from .parse import parse, parse_components, parse_relative_ref, parse_uri
from .resolve import join, resolve
from .uri import URI, URIBuilder

logging.getLogger(__name__).addHandler(logging.NullHandler())
