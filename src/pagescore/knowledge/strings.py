"""UI string table for the built-in configuration.

Titles in the default configuration are message ids of the form
``ui-strings | <key>``. Only the report layer resolves them; the scoring
core treats them as opaque text.
"""

from typing import Callable

MESSAGE_PREFIX = "ui-strings"
DEFAULT_LOCALE = "en"

MessageResolver = Callable[[str], str]

_EN_STRINGS: dict[str, str] = {
    "performanceCategoryTitle": "Performance",
    "metricGroupTitle": "Metrics",
    "loadOpportunitiesGroupTitle": "Opportunities",
    "loadOpportunitiesGroupDescription": "These optimizations can speed up your page load.",
    "firstPaintImprovementsGroupTitle": "First Paint Improvements",
    "firstPaintImprovementsGroupDescription": (
        "The most critical aspect of performance is how quickly pixels are rendered "
        "onscreen. Key metrics: First Contentful Paint, First Meaningful Paint"
    ),
    "overallImprovementsGroupTitle": "Overall Improvements",
    "overallImprovementsGroupDescription": (
        "Enhance the overall loading experience, so the page is responsive and ready "
        "to use as soon as possible. Key metrics: Time to Interactive, Speed Index"
    ),
    "diagnosticsGroupTitle": "Diagnostics",
    "diagnosticsGroupDescription": "More information about the performance of your application.",
    "a11yColorContrastGroupTitle": "Color Contrast Is Satisfactory",
    "a11yColorContrastGroupDescription": "These are opportunities to improve the legibility of your content.",
    "a11yDescribeContentsGroupTitle": "Elements Describe Contents Well",
    "a11yDescribeContentsGroupDescription": (
        "These are opportunities to make your content easier to understand for a user "
        "of assistive technology, like a screen reader."
    ),
    "a11yWellStructuredGroupTitle": "Elements Are Well Structured",
    "a11yWellStructuredGroupDescription": (
        "These are opportunities to make sure your HTML is appropriately structured."
    ),
    "a11yAriaGroupTitle": "ARIA Attributes Follow Best Practices",
    "a11yAriaGroupDescription": (
        "These are opportunities to improve the usage of ARIA in your application "
        "which may enhance the experience for users of assistive technology, like a "
        "screen reader."
    ),
    "a11yCorrectAttributesGroupTitle": "Elements Use Attributes Correctly",
    "a11yCorrectAttributesGroupDescription": (
        "These are opportunities to improve the configuration of your HTML elements."
    ),
    "a11yElementNamesGroupTitle": "Elements Have Discernible Names",
    "a11yElementNamesGroupDescription": (
        "These are opportunities to improve the semantics of the controls in your "
        "application. This may enhance the experience for users of assistive "
        "technology, like a screen reader."
    ),
    "a11yLanguageGroupTitle": "Page Specifies Valid Language",
    "a11yLanguageGroupDescription": (
        "These are opportunities to improve the interpretation of your content by "
        "users in different locales."
    ),
    "a11yMetaGroupTitle": "Meta Tags Used Properly",
    "a11yMetaGroupDescription": "These are opportunities to improve the user experience of your site.",
    "pwaFastReliableGroupTitle": "Fast and reliable",
    "pwaInstallableGroupTitle": "Installable",
    "pwaOptimizedGroupTitle": "PWA Optimized",
}

_LOCALES: dict[str, dict[str, str]] = {
    "en": _EN_STRINGS,
}


def message_id(key: str) -> str:
    """Build the message id for a string table key."""
    return f"{MESSAGE_PREFIX} | {key}"


def get_ui_strings(locale: str = DEFAULT_LOCALE) -> dict[str, str]:
    """Get a copy of the string table for a locale.

    Falls back from ``en-US`` to ``en`` and finally to the default locale.
    """
    table = _LOCALES.get(locale) or _LOCALES.get(locale.split("-")[0]) or _LOCALES[DEFAULT_LOCALE]
    return dict(table)


def resolve_message(text: str, locale: str = DEFAULT_LOCALE) -> str:
    """Resolve a message id to display text; plain text passes through."""
    prefix = f"{MESSAGE_PREFIX} | "
    if not text.startswith(prefix):
        return text
    key = text[len(prefix):]
    return get_ui_strings(locale).get(key, text)


def make_resolver(locale: str = DEFAULT_LOCALE) -> MessageResolver:
    """Create a MessageId -> str function bound to a locale."""
    table = get_ui_strings(locale)
    prefix = f"{MESSAGE_PREFIX} | "

    def resolver(text: str) -> str:
        if text.startswith(prefix):
            return table.get(text[len(prefix):], text)
        return text

    return resolver
