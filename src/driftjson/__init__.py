import logging

from driftjson.cache.manager import CacheManager
from driftjson.core.instance import ModelInstance
from driftjson.core.keys import normalize_key
from driftjson.core.registry import Registry
from driftjson.core.value import NavigableValue
from driftjson.json_types import ABSENT
from driftjson.models import CachePolicy, CachePolicyKind, Configuration, KeyCodingStyle, LogLevel

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ABSENT",
    "CacheManager",
    "CachePolicy",
    "CachePolicyKind",
    "Configuration",
    "KeyCodingStyle",
    "LogLevel",
    "ModelInstance",
    "NavigableValue",
    "Registry",
    "normalize_key",
]
