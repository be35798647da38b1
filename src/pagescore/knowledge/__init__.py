"""Built-in configuration data.

Contains the default audit/category configuration and the UI string table
its titles refer to. The two are exposed through separate accessors.
"""

from pagescore.knowledge.default_config import get_default_config
from pagescore.knowledge.strings import (
    MessageResolver,
    get_ui_strings,
    make_resolver,
    message_id,
    resolve_message,
)

__all__ = [
    "get_default_config",
    "MessageResolver",
    "get_ui_strings",
    "make_resolver",
    "message_id",
    "resolve_message",
]
